"""Rule base classes for SkillScan."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..documents import Corpus, Document


class Rule:
    """Minimal rule abstraction loaded by the evaluator."""

    id = "UNSET"
    severity = "low"
    title = ""

    @classmethod
    def evaluate(cls, corpus: Corpus) -> List[Dict[str, Any]]:
        return []


class DocumentRule(Rule):
    """Rule applied to each document independently."""

    # metadata checks are meaningless once the front-matter failed to parse
    requires_front_matter = True

    @classmethod
    def evaluate(cls, corpus: Corpus) -> List[Dict[str, Any]]:
        issues: List[Dict[str, Any]] = []
        for document in corpus.documents:
            if cls.requires_front_matter and document.front_matter_error is not None:
                continue
            issues.extend(cls.check(document))
        return issues

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        return []

    @classmethod
    def issue(
        cls,
        document: Document,
        description: str,
        *,
        line: Optional[int] = None,
        attributes: Optional[Dict[str, Any]] = None,
        remediation_difficulty: str = "low",
    ) -> Dict[str, Any]:
        return build_issue(
            rule_id=cls.id,
            severity=cls.severity,
            title=cls.title,
            description=description,
            document=document.relative_path,
            line=line,
            attributes=attributes,
            remediation_difficulty=remediation_difficulty,
        )


def build_issue(
    rule_id: str,
    severity: str,
    title: str,
    description: str,
    document: str,
    line: Optional[int],
    attributes: Dict[str, Any] | None,
    remediation_hint: str = "",
    remediation_difficulty: str = "medium",
) -> Dict[str, Any]:
    """Create a schema-compliant issue dictionary."""
    return {
        "id": rule_id,
        "severity": severity,
        "title": title,
        "description": description,
        "document": document,
        "line": line,
        "attributes": attributes or {},
        "remediation_hint": remediation_hint,
        "remediation_difficulty": remediation_difficulty,
    }
