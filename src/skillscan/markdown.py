"""Markdown body inspection: code fences, links, pipe tables and suppressions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Set

from markdown_it import MarkdownIt
from markdown_it.token import Token

_CONTAINER_PREFIX = re.compile(r"^[ \t>]*")
_SUPPRESS = re.compile(r"<!--\s*skillscan-disable\s+(?P<ids>[A-Za-z0-9_,\s-]+?)\s*-->")
_TABLE_DELIMITER = re.compile(r"^\s*\|?\s*:?-{1,}:?\s*(\|\s*:?-{1,}:?\s*)*\|?\s*$")

_PARSER = MarkdownIt("commonmark").enable("table")


@dataclass
class CodeFence:
    language: str
    info: str
    content: str
    line: int
    closed: bool = True


@dataclass
class Link:
    target: str
    line: int
    image: bool = False


@dataclass
class Table:
    line: int
    header_cells: int
    rows: List[tuple] = field(default_factory=list)  # (line, cell_count)


def extract_code_fences(body: str, start_line: int = 1) -> List[CodeFence]:
    """Return fenced code blocks in order of appearance, including those nested
    in list items and block quotes.

    markdown-it runs a fence that never closes to the end of its container;
    such fences are reported with ``closed=False``. A closing fence uses the
    same character as the opener and is at least as long.
    """

    lines = body.splitlines()
    fences: List[CodeFence] = []
    for token in _fence_tokens(body):
        start, end = token.map
        content = token.content[:-1] if token.content.endswith("\n") else token.content
        info = token.info.strip()
        fences.append(
            CodeFence(
                language=info.split()[0].lower() if info else "",
                info=info,
                content=content,
                line=start_line + start,
                closed=start < end - 1 < len(lines) and _is_closing(lines[end - 1], token.markup),
            )
        )
    return fences


def _fence_tokens(body: str) -> List[Token]:
    return [token for token in _PARSER.parse(body) if token.type == "fence" and token.map]


def _is_closing(line: str, marker: str) -> bool:
    stripped = _CONTAINER_PREFIX.sub("", line).rstrip()
    if not stripped or stripped[0] != marker[0]:
        return False
    return stripped == marker[0] * len(stripped) and len(stripped) >= len(marker)


def extract_links(body: str, start_line: int = 1) -> List[Link]:
    """Return inline links and images with the line of their enclosing block."""

    links: List[Link] = []
    for token in _PARSER.parse(body):
        if token.type != "inline" or not token.children:
            continue
        line = start_line + (token.map[0] if token.map else 0)
        for child in token.children:
            if child.type == "link_open":
                href = child.attrGet("href")
                if href:
                    links.append(Link(target=str(href), line=line))
            elif child.type == "image":
                src = child.attrGet("src")
                if src:
                    links.append(Link(target=str(src), line=line, image=True))
    return links


def extract_tables(body: str, start_line: int = 1) -> List[Table]:
    """Return pipe tables with the cell count of every body row."""

    tables: List[Table] = []
    lines = body.splitlines()
    fenced = _fenced_line_indexes(body)
    index = 0
    while index < len(lines) - 1:
        header, delimiter = lines[index], lines[index + 1]
        if (
            index in fenced
            or "|" not in header
            or "|" not in delimiter
            or not _TABLE_DELIMITER.match(delimiter)
        ):
            index += 1
            continue
        table = Table(line=start_line + index, header_cells=count_cells(header))
        index += 2
        while index < len(lines) and lines[index].strip() and "|" in lines[index]:
            table.rows.append((start_line + index, count_cells(lines[index])))
            index += 1
        tables.append(table)
    return tables


def count_cells(row: str) -> int:
    """Count cells in a pipe-table row, honouring escaped pipes and code spans."""

    text = row.strip()
    cells = 1
    in_code = False
    previous = ""
    for position, char in enumerate(text):
        if char == "`":
            in_code = not in_code
        elif char == "|" and previous != "\\" and not in_code:
            if position not in (0, len(text) - 1):
                cells += 1
        previous = char
    return cells


def suppressed_rules(body: str) -> Set[str]:
    rule_ids: Set[str] = set()
    for match in _SUPPRESS.finditer(body):
        for part in re.split(r"[,\s]+", match.group("ids")):
            if part:
                rule_ids.add(part.upper())
    return rule_ids


def _fenced_line_indexes(body: str) -> Set[int]:
    inside: Set[int] = set()
    for token in _fence_tokens(body):
        inside.update(range(*token.map))
    return inside
