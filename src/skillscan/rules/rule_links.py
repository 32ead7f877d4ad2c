"""Rule P-DOC-008: relative links must resolve inside the bundle checkout."""

from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import unquote, urlsplit

from ..documents import Document
from ..markdown import extract_links
from . import register
from .base import DocumentRule


@register
class BrokenRelativeLinkRule(DocumentRule):
    """Relative link and image targets must exist on disk."""

    id = "P-DOC-008"
    severity = "medium"
    title = "Broken relative link"
    requires_front_matter = False

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        issues: List[Dict[str, Any]] = []
        for link in extract_links(document.body, document.body_line):
            parts = urlsplit(link.target)
            if parts.scheme or parts.netloc or not parts.path:
                continue
            if parts.path.startswith("/"):
                continue
            if (document.path.parent / unquote(parts.path)).exists():
                continue
            issues.append(
                cls.issue(
                    document,
                    f"Link target '{link.target}' does not exist.",
                    line=link.line,
                    attributes={"target": link.target, "image": link.image},
                )
            )
        return issues
