"""Markdown body inspection."""

from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from skillscan.markdown import (
    count_cells,
    extract_code_fences,
    extract_links,
    extract_tables,
    suppressed_rules,
)


def test_fences_with_language_and_line_numbers():
    body = "intro\n\n```hcl\nresource \"a\" \"b\" {}\n```\n\n~~~\nplain\n~~~\n"
    fences = extract_code_fences(body, start_line=10)

    assert [(fence.language, fence.line, fence.closed) for fence in fences] == [
        ("hcl", 12, True),
        ("", 16, True),
    ]
    assert fences[0].content == 'resource "a" "b" {}'
    assert fences[1].content == "plain"


def test_info_string_language_is_first_word_lowercased():
    fences = extract_code_fences("```JSON title=example\n{}\n```\n")
    assert fences[0].language == "json"
    assert fences[0].info == "JSON title=example"


def test_closing_fence_must_be_at_least_as_long():
    body = "````markdown\n```hcl\nx = 1\n```\n````\n"
    fences = extract_code_fences(body)
    assert len(fences) == 1
    assert fences[0].language == "markdown"
    assert "```hcl" in fences[0].content


def test_unterminated_fence_runs_to_end():
    fences = extract_code_fences("text\n```bash\necho hi\n")
    assert len(fences) == 1
    assert fences[0].closed is False
    assert fences[0].content == "echo hi"


def test_tilde_fence_is_not_closed_by_backticks():
    fences = extract_code_fences("~~~yaml\na: 1\n```\n")
    assert fences[0].closed is False


def test_fences_nested_in_list_items_are_found():
    body = "Steps:\n\n10. Validate\n\n    ```json\n    {\"a\": 1,}\n    ```\n\n11. Apply\n"
    fences = extract_code_fences(body, start_line=5)

    assert [(fence.language, fence.line, fence.closed) for fence in fences] == [("json", 9, True)]
    assert fences[0].content == '{"a": 1,}'


def test_fences_in_block_quotes_close():
    fences = extract_code_fences("> ```bash\n> echo hi\n> ```\n")
    assert fences[0].closed is True
    assert fences[0].content == "echo hi"


_SAFE_LINE = st.text(alphabet=string.ascii_letters + string.digits + " =:{}\"#", max_size=30)


@given(st.lists(_SAFE_LINE, max_size=10))
def test_fence_content_round_trips(lines):
    content = "\n".join(lines)
    fences = extract_code_fences("```text\n" + content + "\n```\n")
    assert len(fences) == 1
    assert fences[0].closed
    assert fences[0].content == content


def test_links_skip_code_and_report_block_line():
    body = "# Title\n\nSee [guide](docs/guide.md) and ![diagram](img/arch.png).\n\n```md\n[ignored](nowhere.md)\n```\n"
    links = extract_links(body, start_line=5)

    assert [(link.target, link.line, link.image) for link in links] == [
        ("docs/guide.md", 7, False),
        ("img/arch.png", 7, True),
    ]


def test_tables_report_row_cell_counts():
    body = "| a | b | c |\n| --- | :---: | ---: |\n| 1 | 2 | 3 |\n| 1 | 2 |\n\nafter\n"
    tables = extract_tables(body, start_line=3)

    assert len(tables) == 1
    assert tables[0].line == 3
    assert tables[0].header_cells == 3
    assert tables[0].rows == [(5, 3), (6, 2)]


def test_tables_inside_fences_are_ignored():
    body = "```md\n| a | b |\n| --- | --- |\n| 1 |\n```\n"
    assert extract_tables(body) == []


def test_count_cells_respects_escapes_and_code():
    assert count_cells("| a | b |") == 2
    assert count_cells("a | b | c") == 3
    assert count_cells(r"| a \| b | c |") == 2
    assert count_cells("| `x | y` | z |") == 2


def test_suppressed_rules():
    body = "<!-- skillscan-disable P-DOC-006, p-doc-007 -->\ntext\n<!-- skillscan-disable P-DOC-009 -->"
    assert suppressed_rules(body) == {"P-DOC-006", "P-DOC-007", "P-DOC-009"}
    assert suppressed_rules("<!-- unrelated -->") == set()
