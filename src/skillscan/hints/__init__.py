"""Remediation hints shipped with SkillScan."""

from __future__ import annotations

from .loader import get_hint, get_hint_metadata, load_hints

__all__ = [
    "get_hint",
    "get_hint_metadata",
    "load_hints",
]
