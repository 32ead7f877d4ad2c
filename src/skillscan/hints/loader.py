"""Loader for the remediation hints bundled as package data."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml

_HINTS_PATH = os.path.join(os.path.dirname(__file__), "remediation.yaml")


@lru_cache(maxsize=1)
def load_hints() -> Dict[str, Dict[str, Any]]:
    """Return hint entries keyed by rule id; malformed entries are dropped."""

    try:
        with open(_HINTS_PATH, "r", encoding="utf-8") as handle:
            contents = yaml.safe_load(handle)
    except OSError:
        return {}

    if not isinstance(contents, dict):
        return {}
    hints: Dict[str, Dict[str, Any]] = {}
    for rule_id, entry in contents.items():
        parsed = _parse_entry(entry)
        if parsed is not None:
            hints[str(rule_id)] = parsed
    return hints


def get_hint(rule_id: str) -> str:
    """Return ``hint:<rule_id>`` when remediation guidance exists, else an empty string."""

    if rule_id in load_hints():
        return f"hint:{rule_id}"
    return ""


def get_hint_metadata(rule_id: str) -> Optional[Dict[str, Any]]:
    entry = load_hints().get(rule_id)
    if entry is None:
        return None
    return {"hint_id": rule_id, **entry}


def _parse_entry(entry: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(entry, dict):
        return None
    summary = entry.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        return None
    parsed: Dict[str, Any] = {"summary": summary.strip()}
    example = entry.get("example")
    if isinstance(example, str) and example.strip():
        parsed["example"] = example.strip("\n")
    return parsed
