"""Rule registry and manifest helpers for SkillScan."""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Any, Dict, List, Type

from ..hints import loader as hint_loader
from .base import Rule

_registry: List[Type[Rule]] = []


def register(rule_cls: Type[Rule]) -> Type[Rule]:
    _registry.append(rule_cls)
    return rule_cls


def get_all_rules() -> List[Type[Rule]]:
    """Return the ordered list of registered rule classes."""

    return list(_registry)


def get_rule(rule_id: str) -> Type[Rule]:
    for rule_cls in _registry:
        if rule_cls.id == rule_id:
            return rule_cls
    raise KeyError(rule_id)


def build_rule_manifest() -> List[Dict[str, Any]]:
    """Return deterministic manifest entries for every registered rule."""

    manifest: List[Dict[str, Any]] = []
    package_root = _package_root()
    for rule_cls in sorted(get_all_rules(), key=lambda rule: rule.id):
        python_class = f"{rule_cls.__module__}.{rule_cls.__name__}"
        file_path = _resolve_rule_path(rule_cls, package_root)
        manifest.append(
            {
                "id": rule_cls.id,
                "severity": rule_cls.severity,
                "title": rule_cls.title,
                "python_class": python_class,
                "file_path": file_path,
                "hint": hint_loader.get_hint(rule_cls.id),
                "description": inspect.cleandoc(rule_cls.__doc__ or ""),
            }
        )
    return manifest


def _package_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _resolve_rule_path(rule_cls: Type[Rule], package_root: Path) -> str:
    try:
        file_path = Path(inspect.getfile(rule_cls)).resolve()
    except (TypeError, OSError):
        return ""
    try:
        return file_path.relative_to(package_root).as_posix()
    except ValueError:
        return str(file_path)


# Rule modules register themselves with the decorator at import time.
from . import rule_front_matter as _rule_front_matter  # noqa: F401,E402
from . import rule_duplicate_names as _rule_duplicate_names  # noqa: F401,E402
from . import rule_code_fences as _rule_code_fences  # noqa: F401,E402
from . import rule_links as _rule_links  # noqa: F401,E402
from . import rule_tables as _rule_tables  # noqa: F401,E402
from . import rule_empty_body as _rule_empty_body  # noqa: F401,E402
from . import rule_manifest as _rule_manifest  # noqa: F401,E402
from . import rule_agent_tools as _rule_agent_tools  # noqa: F401,E402
