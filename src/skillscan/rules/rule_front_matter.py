"""Front-matter rules: presence, schema and name/layout agreement."""

from __future__ import annotations

from typing import Any, Dict, List

from ..documents import Document
from ..schema import validate_metadata
from . import register
from .base import DocumentRule


@register
class MissingFrontMatterRule(DocumentRule):
    """Every document must open with a parseable YAML front-matter mapping."""

    id = "P-DOC-001"
    severity = "critical"
    title = "Front-matter missing or unparseable"
    requires_front_matter = False

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        if document.front_matter_error is None:
            return []
        return [
            cls.issue(
                document,
                f"Front-matter could not be read: {document.front_matter_error}.",
                line=document.front_matter_error_line,
                attributes={"error": document.front_matter_error},
            )
        ]


@register
class FrontMatterSchemaRule(DocumentRule):
    """Front-matter fields must satisfy the schema for the document kind."""

    id = "P-DOC-002"
    severity = "high"
    title = "Front-matter schema violation"

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        return [
            cls.issue(
                document,
                violation.message,
                line=document.line_of(violation.field),
                attributes={"field": violation.field, "validator": violation.validator},
            )
            for violation in validate_metadata(document.kind, document.metadata)
        ]


@register
class NameMismatchRule(DocumentRule):
    """The declared name must match the skill directory or the file stem."""

    id = "P-DOC-003"
    severity = "medium"
    title = "Name does not match file layout"

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        declared = document.metadata.get("name")
        if not isinstance(declared, str) or not declared.strip():
            return []
        expected = document.expected_name
        if declared.strip() == expected:
            return []
        return [
            cls.issue(
                document,
                f"Declared name '{declared.strip()}' does not match '{expected}'.",
                line=document.line_of("name"),
                attributes={"declared": declared.strip(), "expected": expected},
            )
        ]
