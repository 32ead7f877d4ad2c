"""Code fence rules: termination, language tags and snippet syntax."""

from __future__ import annotations

from typing import Any, Dict, List

from ..documents import Document
from ..markdown import extract_code_fences
from ..snippets import check_snippet
from . import register
from .base import DocumentRule


@register
class UnterminatedFenceRule(DocumentRule):
    """A fenced code block left open swallows the rest of the document."""

    id = "P-DOC-005"
    severity = "high"
    title = "Unterminated code fence"
    requires_front_matter = False

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        return [
            cls.issue(
                document,
                f"Code fence opened with '{fence.info or '(no language)'}' is never closed.",
                line=fence.line,
                attributes={"language": fence.language},
            )
            for fence in extract_code_fences(document.body, document.body_line)
            if not fence.closed
        ]


@register
class InvalidSnippetRule(DocumentRule):
    """Snippets in languages with a known parser must parse cleanly."""

    id = "P-DOC-006"
    severity = "medium"
    title = "Snippet is not valid for its declared language"
    requires_front_matter = False

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        issues: List[Dict[str, Any]] = []
        for fence in extract_code_fences(document.body, document.body_line):
            if not fence.closed or not fence.language:
                continue
            error = check_snippet(fence.language, fence.content)
            if error is None:
                continue
            issues.append(
                cls.issue(
                    document,
                    f"{fence.language} snippet does not parse: {error}",
                    line=fence.line,
                    attributes={"language": fence.language, "error": error},
                    remediation_difficulty="medium",
                )
            )
        return issues


@register
class MissingFenceLanguageRule(DocumentRule):
    """Fences should declare a language so renderers and checkers can use it."""

    id = "P-DOC-007"
    severity = "low"
    title = "Code fence without a language tag"
    requires_front_matter = False

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        return [
            cls.issue(document, "Code fence has no language tag.", line=fence.line)
            for fence in extract_code_fences(document.body, document.body_line)
            if fence.closed and not fence.language
        ]
