"""Rule P-DOC-009: table rows must match their header width."""

from __future__ import annotations

from typing import Any, Dict, List

from ..documents import Document
from ..markdown import extract_tables
from . import register
from .base import DocumentRule


@register
class TableColumnMismatchRule(DocumentRule):
    """Rows with more or fewer cells than the header render inconsistently."""

    id = "P-DOC-009"
    severity = "low"
    title = "Table row column count mismatch"
    requires_front_matter = False

    @classmethod
    def check(cls, document: Document) -> List[Dict[str, Any]]:
        issues: List[Dict[str, Any]] = []
        for table in extract_tables(document.body, document.body_line):
            for line, cells in table.rows:
                if cells == table.header_cells:
                    continue
                issues.append(
                    cls.issue(
                        document,
                        f"Row has {cells} cells; the table header has {table.header_cells}.",
                        line=line,
                        attributes={
                            "expected": table.header_cells,
                            "actual": cells,
                            "table_line": table.line,
                        },
                    )
                )
        return issues
