"""Human-readable rendering helpers for SkillScan CLI output."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .catalog import CatalogEntry, Match

SEVERITY_ORDER = ("critical", "high", "medium", "low")


def render_human_readable(output: Dict[str, Any]) -> str:
    """Return a deterministic text block describing scan issues."""

    issues = output.get("issues") or []
    lines: List[str] = []

    metadata = output.get("metadata") or {}
    lines.append(
        f"Scanned {metadata.get('document_count', 0)} documents "
        f"in {metadata.get('bundle_count', 0)} bundles"
    )
    lines.append("-")

    if not issues:
        lines.append("No issues detected.")
        return "\n".join(lines)

    for issue in issues:
        lines.extend(_render_issue_block(issue))

    return "\n".join(lines)


def _render_issue_block(issue: Dict[str, Any]) -> List[str]:
    block: List[str] = []
    issue_id = issue.get("id", "UNKNOWN")
    title = issue.get("title", "")
    severity = issue.get("severity", "unknown")
    block.append(f"[{issue_id}] {title} ({severity})")
    block.append(f"  Location: {_location(issue)}")
    description = issue.get("description")
    if description:
        block.append(f"  Detail: {description}")

    metadata = issue.get("remediation_metadata")
    if isinstance(metadata, dict) and metadata.get("summary"):
        block.append(f"  Remediation: {metadata['summary']}")
        example = metadata.get("example")
        if example:
            block.append("  Example:")
            block.extend(_indent(example))
    else:
        block.append(f"  Remediation: {issue.get('remediation_hint') or 'N/A'}")
    return block


def _location(issue: Dict[str, Any]) -> str:
    document = issue.get("document") or "-"
    line = issue.get("line")
    if isinstance(line, int):
        return f"{document}:{line}"
    return document


def _indent(text: object) -> List[str]:
    value = str(text)
    lines = value.splitlines() or [value]
    return [f"    {line}" for line in lines]


def render_severity_summary(output: Dict[str, Any]) -> str:
    source = output.get("severity_totals") or {}
    counts: Dict[str, int] = {}
    for key in SEVERITY_ORDER:
        value = source.get(key, 0)
        try:
            counts[key] = int(value)
        except (TypeError, ValueError):
            counts[key] = 0

    total = sum(counts.values())

    lines = ["Summary:"]
    for key in SEVERITY_ORDER:
        count = counts[key]
        percentage = 0
        if total > 0:
            percentage = int(round((count / total) * 100))
        lines.append(f"  {key}: {count} ({percentage}%)")

    status = output.get("status", "UNKNOWN")
    lines.append(f"  status: {status} (fail_on: {output.get('fail_on', '-')})")
    return "\n".join(lines)


def render_catalog_table(entries: Sequence[CatalogEntry]) -> str:
    if not entries:
        return "No documents found."
    rows = [("KIND", "NAME", "BUNDLE", "DESCRIPTION")]
    rows.extend(
        (entry.kind, entry.name, entry.bundle, _truncate(entry.description)) for entry in entries
    )
    return _align(rows)


def render_matches(matches: Sequence[Match]) -> str:
    if not matches:
        return "No matching documents."
    rows = [("SCORE", "KIND", "NAME", "DESCRIPTION")]
    rows.extend(
        (str(match.score), match.entry.kind, match.entry.name, _truncate(match.entry.description))
        for match in matches
    )
    return _align(rows)


def _truncate(text: str, limit: int = 72) -> str:
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 3].rstrip() + "..."


def _align(rows: Sequence[Sequence[str]]) -> str:
    widths = [max(len(row[index]) for row in rows) for index in range(len(rows[0]) - 1)]
    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        cells.append(row[-1])
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)
