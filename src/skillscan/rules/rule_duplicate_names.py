"""Rule P-DOC-004: detect documents sharing a name within a bundle."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Tuple

from ..documents import Corpus, Document
from . import register
from .base import DocumentRule


@register
class DuplicateNameRule(DocumentRule):
    """Names must be unique per kind within a bundle so lookups are unambiguous."""

    id = "P-DOC-004"
    severity = "high"
    title = "Duplicate document name"

    @classmethod
    def evaluate(cls, corpus: Corpus) -> List[Dict[str, Any]]:
        groups: Dict[Tuple[str, str, str], List[Document]] = defaultdict(list)
        for document in corpus.documents:
            if document.front_matter_error is None:
                groups[(document.bundle, document.kind, document.name)].append(document)

        issues: List[Dict[str, Any]] = []
        for (bundle, kind, name), documents in sorted(groups.items()):
            if len(documents) < 2:
                continue
            paths = [doc.relative_path for doc in documents]
            for document in documents[1:]:
                issues.append(
                    cls.issue(
                        document,
                        f"{kind.capitalize()} name '{name}' is already used by {paths[0]} "
                        f"in bundle '{bundle}'.",
                        line=1,
                        attributes={"name": name, "kind": kind, "documents": paths},
                        remediation_difficulty="medium",
                    )
                )
        return issues
