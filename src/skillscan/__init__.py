"""SkillScan: lint, catalog and publish agent/skill documentation bundles."""

from __future__ import annotations

from .constants import SCAN_VERSION

__version__ = SCAN_VERSION

__all__ = ["__version__"]
