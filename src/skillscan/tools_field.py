"""Normalisation of the agent ``tools`` / skill ``allowed-tools`` front-matter field."""

from __future__ import annotations

from typing import Any, List


def parse_tools(raw: Any) -> List[str]:
    """Return tool names in declaration order, blanks dropped.

    The field is either a comma-separated string (``Read, Grep, Bash``) or a
    YAML list. Anything else yields an empty list.
    """

    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, list):
        items = [str(item) for item in raw if item is not None]
    else:
        return []
    return [item.strip() for item in items if item.strip()]
