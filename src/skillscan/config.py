"""Scan configuration: defaults, optional YAML file, environment and CLI overrides."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import yaml

from . import env_flags
from .constants import CONFIG_FILENAME, DEFAULT_FAIL_ON, SEVERITY_LEVELS, STRICT_FAIL_ON
from .errors import ConfigError

logger = logging.getLogger(__name__)

_ALLOWED_KEYS = {"fail_on", "disabled_rules", "strict"}


@dataclass(frozen=True)
class ScanConfig:
    fail_on: str = DEFAULT_FAIL_ON
    disabled_rules: Tuple[str, ...] = field(default_factory=tuple)
    source: Optional[Path] = None

    def is_disabled(self, rule_id: str) -> bool:
        return rule_id in self.disabled_rules

    def with_strict(self, strict: bool) -> "ScanConfig":
        if not strict:
            return self
        return replace(self, fail_on=STRICT_FAIL_ON)

    def with_disabled(self, rule_ids: Iterable[str]) -> "ScanConfig":
        merged = set(self.disabled_rules)
        merged.update(rule_id.strip().upper() for rule_id in rule_ids if rule_id.strip())
        return replace(self, disabled_rules=tuple(sorted(merged)))


def load_config(
    root: Optional[Path] = None,
    *,
    config_file: Optional[Path] = None,
    strict: Optional[bool] = None,
    disabled: Iterable[str] = (),
) -> ScanConfig:
    """Resolve the effective configuration.

    Precedence, lowest first: built-in defaults, the YAML file
    (``config_file``, then ``SKILLSCAN_CONFIG``, then ``.skillscan.yaml`` in
    ``root``), environment flags, then explicit arguments.
    """

    path = _resolve_config_path(root, config_file)
    config = ScanConfig()
    if path is not None:
        config = _apply_file(config, path)

    env_strict = env_flags.is_strict_mode()
    if env_strict is not None:
        config = config.with_strict(env_strict)
    config = config.with_disabled(env_flags.disabled_rules())

    if strict:
        config = config.with_strict(True)
    return config.with_disabled(disabled)


def _resolve_config_path(root: Optional[Path], config_file: Optional[Path]) -> Optional[Path]:
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"Config file not found: {config_file}")
        return config_file
    env_path = env_flags.config_path()
    if env_path:
        candidate = Path(env_path).expanduser()
        if not candidate.is_file():
            raise ConfigError(f"SKILLSCAN_CONFIG points to a missing file: {candidate}")
        return candidate
    if root is not None:
        base = root if root.is_dir() else root.parent
        candidate = base / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _apply_file(config: ScanConfig, path: Path) -> ScanConfig:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Unable to read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    unknown = sorted(set(raw) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    logger.debug("Loaded config from %s", path)
    values: Dict[str, Any] = {"source": path}
    if "fail_on" in raw:
        fail_on = str(raw["fail_on"]).strip().lower()
        if fail_on not in SEVERITY_LEVELS:
            raise ConfigError(
                f"fail_on must be one of {', '.join(SEVERITY_LEVELS)}; got {raw['fail_on']!r}"
            )
        values["fail_on"] = fail_on

    updated = replace(config, **values)
    if "disabled_rules" in raw:
        rules = raw["disabled_rules"]
        if not isinstance(rules, list) or not all(isinstance(item, str) for item in rules):
            raise ConfigError("disabled_rules must be a list of rule ids")
        updated = updated.with_disabled(rules)
    if "strict" in raw:
        if not isinstance(raw["strict"], bool):
            raise ConfigError("strict must be true or false")
        updated = updated.with_strict(raw["strict"])
    return updated
