"""Regenerate docs/rules.md from the registered rules and remediation hints."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from ..constants import RULES_VERSION, SEVERITY_LEVELS
from ..hints import get_hint_metadata
from ..rules import build_rule_manifest
from ..schema import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH

REPO_ROOT = Path(__file__).resolve().parents[3]
DOCS_DIR = REPO_ROOT / "docs"
RULES_OUTPUT_PATH = DOCS_DIR / "rules.md"

SEVERITY_DESCRIPTIONS = {
    "critical": "Document cannot be surfaced by a host runtime at all.",
    "high": "Front-matter contract broken or content visibly corrupted.",
    "medium": "Content that renders or resolves incorrectly.",
    "low": "Style and consistency signal; fails only under strict mode.",
}


def _escape_cell(value: str) -> str:
    return " ".join(value.split()).replace("|", "\\|")


def _markdown_table(header: tuple[str, ...], rows: Iterable[tuple[str, ...]]) -> list[str]:
    lines = ["| " + " | ".join(header) + " |", "| " + " | ".join("---" for _ in header) + " |"]
    for row in rows:
        lines.append("| " + " | ".join(_escape_cell(cell) for cell in row) + " |")
    return lines


def build_rules_md() -> str:
    """Return the markdown body for docs/rules.md."""
    manifest = build_rule_manifest()
    lines: List[str] = [f"# SkillScan Rules (v{RULES_VERSION})", ""]

    lines.append("## Rule Index")
    lines.append("")
    lines.extend(
        _markdown_table(
            ("Id", "Severity", "Title", "Remediation"),
            (
                (
                    f"`{entry['id']}`",
                    entry["severity"],
                    entry["title"],
                    (get_hint_metadata(entry["id"]) or {}).get("summary", ""),
                )
                for entry in manifest
            ),
        )
    )
    lines.append("")

    lines.append("## Severities")
    lines.append("")
    lines.extend(
        _markdown_table(
            ("Severity", "Meaning"),
            ((f"`{level}`", SEVERITY_DESCRIPTIONS[level]) for level in SEVERITY_LEVELS),
        )
    )
    lines.append("")
    lines.append(
        "A scan fails when any issue is at or above `fail_on` "
        "(`high` by default, `low` with `--strict`)."
    )
    lines.append("")

    lines.append("## Front-matter Contract")
    lines.append("")
    lines.append(f"- `name`: lowercase kebab-case, at most {MAX_NAME_LENGTH} characters.")
    lines.append(f"- `description`: non-blank, at most {MAX_DESCRIPTION_LENGTH} characters.")
    lines.append("- `version`: optional semantic version.")
    lines.append("- `tools` (agents) / `allowed-tools` (skills): comma-separated string or list.")
    lines.append("")
    lines.append("Suppress a rule for one document with `<!-- skillscan-disable P-DOC-006 -->`.")

    return "\n".join(lines).rstrip() + "\n"


def generate_rules_md(output_path: Optional[Path] = None) -> str:
    target = output_path or RULES_OUTPUT_PATH
    markdown = build_rules_md()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(markdown, encoding="utf-8")
    return markdown


if __name__ == "__main__":
    generate_rules_md()
