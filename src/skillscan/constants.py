"""Shared constants for SkillScan."""

TOOL_NAME = "skillscan"
SCAN_VERSION = "0.4.0"
RULES_VERSION = "0.4.0"
PAYLOAD_SCHEMA_VERSION = "1.0.0"

SEVERITY_LEVELS = ("critical", "high", "medium", "low")
DEFAULT_FAIL_ON = "high"
STRICT_FAIL_ON = "low"

DOCUMENT_KINDS = ("agent", "skill")
AGENTS_DIR = "agents"
SKILLS_DIR = "skills"
SKILL_FILENAME = "SKILL.md"
PLUGIN_MANIFEST = (".claude-plugin", "plugin.json")
CONFIG_FILENAME = ".skillscan.yaml"
IGNORED_DIRS = frozenset({"node_modules", "__pycache__"})

EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 2
EXIT_LINT_FAIL = 3

__all__ = [
    "TOOL_NAME",
    "SCAN_VERSION",
    "RULES_VERSION",
    "PAYLOAD_SCHEMA_VERSION",
    "SEVERITY_LEVELS",
    "DEFAULT_FAIL_ON",
    "STRICT_FAIL_ON",
    "DOCUMENT_KINDS",
    "AGENTS_DIR",
    "SKILLS_DIR",
    "SKILL_FILENAME",
    "PLUGIN_MANIFEST",
    "CONFIG_FILENAME",
    "IGNORED_DIRS",
    "EXIT_SUCCESS",
    "EXIT_INVALID_INPUT",
    "EXIT_LINT_FAIL",
]
