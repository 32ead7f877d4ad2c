from __future__ import annotations

from skillscan.constants import RULES_VERSION
from skillscan.rules import get_all_rules
from skillscan.tools.generate_docs import build_rules_md, generate_rules_md


def test_rules_doc_lists_every_rule():
    markdown = build_rules_md()

    assert markdown.startswith(f"# SkillScan Rules (v{RULES_VERSION})\n")
    for rule in get_all_rules():
        assert f"| `{rule.id}` | {rule.severity} | {rule.title} |" in markdown
    assert "## Severities" in markdown
    assert "| `critical` |" in markdown


def test_pipes_in_hints_are_escaped():
    row = next(line for line in build_rules_md().splitlines() if line.startswith("| `P-DOC-009`"))
    assert row.count(" | ") == 3


def test_generate_writes_file(tmp_path):
    target = tmp_path / "docs" / "rules.md"

    markdown = generate_rules_md(target)

    assert target.read_text(encoding="utf-8") == markdown
    assert markdown.endswith("skillscan-disable P-DOC-006 -->`.\n")
