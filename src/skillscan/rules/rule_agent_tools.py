"""Rule P-DOC-012: agent tool lists must not repeat or leave blank entries."""

from __future__ import annotations

from typing import Any, Dict, List

from ..documents import Document
from ..tools_field import parse_tools
from . import register
from .base import DocumentRule


@register
class AgentToolListRule(DocumentRule):
    id = "P-DOC-012"
    severity = "low"
    title = "Malformed agent tool list"

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        if document.kind != "agent" or "tools" not in document.metadata:
            return []
        raw = document.metadata["tools"]
        if not isinstance(raw, (str, list)):
            return []  # type errors belong to the schema rule

        entries = [entry.strip() for entry in raw.split(",")] if isinstance(raw, str) else [
            str(entry).strip() for entry in raw
        ]
        issues: List[Dict[str, Any]] = []
        if any(not entry for entry in entries):
            issues.append(
                cls.issue(
                    document, "Tool list contains a blank entry.", line=document.line_of("tools")
                )
            )
        seen = set()
        for tool in parse_tools(raw):
            if tool in seen:
                issues.append(
                    cls.issue(
                        document,
                        f"Tool '{tool}' is listed more than once.",
                        line=document.line_of("tools"),
                        attributes={"tool": tool},
                    )
                )
            seen.add(tool)
        return issues
