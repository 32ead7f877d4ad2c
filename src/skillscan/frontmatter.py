"""YAML front-matter splitting for agent and skill documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .errors import FrontMatterError

_OPEN = "---"
_CLOSE = ("---", "...")
_BOM = "\ufeff"


@dataclass
class FrontMatter:
    metadata: Dict[str, Any] = field(default_factory=dict)
    body: str = ""
    body_line: int = 1
    raw: str = ""


def split_front_matter(text: str) -> FrontMatter:
    """Split ``text`` into parsed front-matter and the markdown body.

    The block must open on the first line with ``---`` and close with a line
    holding only ``---`` or ``...``. ``body_line`` is the 1-based line number
    of the first body line in the original text.
    """

    if text.startswith(_BOM):
        text = text[len(_BOM):]
    lines = text.splitlines()
    if not lines or lines[0].rstrip() != _OPEN:
        raise FrontMatterError("missing front-matter block", line=1)

    close_index = _find_close(lines)
    if close_index is None:
        raise FrontMatterError("unterminated front-matter block", line=1)

    raw = "\n".join(lines[1:close_index])
    metadata = _parse_yaml(raw)
    body = "\n".join(lines[close_index + 1:])
    if text.endswith(("\n", "\r")) and body:
        body += "\n"
    return FrontMatter(metadata=metadata, body=body, body_line=close_index + 2, raw=raw)


def _find_close(lines: List[str]) -> Optional[int]:
    for index in range(1, len(lines)):
        if lines[index].rstrip() in _CLOSE:
            return index
    return None


def _parse_yaml(raw: str) -> Dict[str, Any]:
    try:
        loaded = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        # +2: the opening delimiter and the 0-based mark
        line = mark.line + 2 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontMatterError(f"invalid YAML: {problem}", line=line) from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise FrontMatterError("front-matter must be a mapping", line=2)
    return {str(key): value for key, value in loaded.items()}
