"""Rule P-DOC-010: documents must carry content after the front-matter."""

from __future__ import annotations

from typing import Any, Dict, List

from ..documents import Document
from . import register
from .base import DocumentRule


@register
class EmptyBodyRule(DocumentRule):
    id = "P-DOC-010"
    severity = "medium"
    title = "Empty document body"

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        if document.body.strip():
            return []
        description = f"{document.kind.capitalize()} '{document.name}' has no body."
        return [cls.issue(document, description, line=document.body_line)]
