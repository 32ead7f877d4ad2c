"""Exception types raised by SkillScan."""

from __future__ import annotations

from typing import Optional


class SkillScanError(Exception):
    """Base class for every SkillScan failure."""


class FrontMatterError(SkillScanError):
    """Raised when a document's front-matter block cannot be parsed."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class LoadError(SkillScanError):
    """Raised when a scan path cannot be turned into a corpus."""


class ConfigError(SkillScanError):
    """Raised for unreadable or invalid configuration."""
