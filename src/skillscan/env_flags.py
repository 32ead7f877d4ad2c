from __future__ import annotations

import os
from typing import List, Optional

_TRUTHY = {"1", "true", "yes", "on"}
_FALSEY = {"0", "false", "no", "off"}


def env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def env_falsey(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _FALSEY


def _env_override(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip()


def is_strict_mode() -> Optional[bool]:
    """Return the SKILLSCAN_STRICT override, or None when it is unset or unrecognised."""

    value = _env_override("SKILLSCAN_STRICT")
    if env_truthy(value):
        return True
    if env_falsey(value):
        return False
    return None


def disabled_rules() -> List[str]:
    value = _env_override("SKILLSCAN_DISABLE_RULES")
    if not value:
        return []
    return [part.strip().upper() for part in value.split(",") if part.strip()]


def config_path() -> Optional[str]:
    return _env_override("SKILLSCAN_CONFIG") or None
