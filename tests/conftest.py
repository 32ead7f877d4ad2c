"""Global pytest configuration for SkillScan tests."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_ROOT = _REPO_ROOT / "src"

# Make the repository root (for `tests.*` helpers) and src/ (for an
# uninstalled `skillscan`) importable.
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

FIXTURES = _REPO_ROOT / "tests" / "fixtures"
PLUGINS_FIXTURE = FIXTURES / "plugins"

_SKILLSCAN_ENV = ("SKILLSCAN_STRICT", "SKILLSCAN_DISABLE_RULES", "SKILLSCAN_CONFIG")


@pytest.fixture(autouse=True)
def _isolated_skillscan_env(monkeypatch):
    """Keep developer environment flags from leaking into scans."""

    for name in _SKILLSCAN_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def plugins_dir() -> Path:
    """Read-only path to the clean sample bundles."""

    return PLUGINS_FIXTURE


@pytest.fixture
def plugins_copy(tmp_path) -> Path:
    """Writable copy of the clean sample bundles."""

    target = tmp_path / "plugins"
    shutil.copytree(PLUGINS_FIXTURE, target)
    return target


@pytest.fixture
def bundle_dir(tmp_path) -> Path:
    """Empty bundle directory with agents/ and skills/ created."""

    root = tmp_path / "bundle"
    (root / "agents").mkdir(parents=True)
    (root / "skills").mkdir()
    return root


def pytest_report_header(config):
    return f"skillscan fixtures: {os.path.relpath(PLUGINS_FIXTURE, _REPO_ROOT)}"
