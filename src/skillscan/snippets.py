"""Syntax checks for fenced code snippets.

Snippets are parsed, never executed. Languages without a checker are
accepted as-is.
"""

from __future__ import annotations

import json
import re
from typing import Callable, Dict, Optional
from xml.etree import ElementTree

import hcl2
import yaml

_PLACEHOLDER = re.compile(r"^\s*(#|//)?\s*(\.\.\.|…)\s*$", re.MULTILINE)


def _check_json(content: str) -> Optional[str]:
    try:
        json.loads(content)
    except json.JSONDecodeError as exc:
        return f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
    return None


def _check_yaml(content: str) -> Optional[str]:
    try:
        for _ in yaml.safe_load_all(content):
            pass
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        where = f" at line {mark.line + 1}" if mark is not None else ""
        problem = getattr(exc, "problem", None) or str(exc)
        return f"invalid YAML{where}: {problem}"
    return None


def _check_hcl(content: str) -> Optional[str]:
    try:
        hcl2.loads(content if content.endswith("\n") else content + "\n")
    except Exception as exc:  # noqa: BLE001  # pylint: disable=broad-except
        # python-hcl2 surfaces lark parse errors of several unrelated types
        first_line = str(exc).strip().splitlines()[0] if str(exc).strip() else type(exc).__name__
        return f"invalid HCL: {first_line}"
    return None


def _check_xml(content: str) -> Optional[str]:
    try:
        ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        return f"invalid XML: {exc}"
    return None


CHECKERS: Dict[str, Callable[[str], Optional[str]]] = {
    "json": _check_json,
    "yaml": _check_yaml,
    "yml": _check_yaml,
    "hcl": _check_hcl,
    "terraform": _check_hcl,
    "tf": _check_hcl,
    "xml": _check_xml,
    "csproj": _check_xml,
    "props": _check_xml,
    "targets": _check_xml,
}


def is_checked_language(language: str) -> bool:
    return language.lower() in CHECKERS


def is_placeholder_snippet(content: str) -> bool:
    """True when the snippet elides content with a bare ``...`` line."""

    return bool(_PLACEHOLDER.search(content))


def check_snippet(language: str, content: str) -> Optional[str]:
    """Return a syntax error message for ``content`` or None when it parses."""

    checker = CHECKERS.get(language.lower())
    if checker is None or not content.strip() or is_placeholder_snippet(content):
        return None
    return checker(content)
