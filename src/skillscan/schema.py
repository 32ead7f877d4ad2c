"""Front-matter and plugin manifest schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from jsonschema import Draft7Validator

NAME_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"
SEMVER_PATTERN = r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(-[0-9A-Za-z.-]+)?(\+[0-9A-Za-z.-]+)?$"
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024

_NAME = {"type": "string", "pattern": NAME_PATTERN, "maxLength": MAX_NAME_LENGTH}
_DESCRIPTION = {
    "type": "string",
    "pattern": r"\S",
    "maxLength": MAX_DESCRIPTION_LENGTH,
}
_VERSION = {"type": "string", "pattern": SEMVER_PATTERN}
_TOOL_LIST = {
    "oneOf": [
        {"type": "string"},
        {"type": "array", "items": {"type": "string"}},
    ]
}

AGENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "description"],
    "properties": {
        "name": _NAME,
        "description": _DESCRIPTION,
        "tools": _TOOL_LIST,
        "model": {"type": "string"},
        "color": {"type": "string"},
        "version": _VERSION,
    },
}

SKILL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "description"],
    "properties": {
        "name": _NAME,
        "description": _DESCRIPTION,
        "version": _VERSION,
        "allowed-tools": _TOOL_LIST,
        "license": {"type": "string"},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
}

MANIFEST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": _NAME,
        "version": _VERSION,
        "description": {"type": "string"},
        "author": {
            "oneOf": [
                {"type": "string"},
                {"type": "object", "properties": {"name": {"type": "string"}}},
            ]
        },
    },
}

SCHEMAS = {"agent": AGENT_SCHEMA, "skill": SKILL_SCHEMA, "manifest": MANIFEST_SCHEMA}
_VALIDATORS = {kind: Draft7Validator(schema) for kind, schema in SCHEMAS.items()}


@dataclass(frozen=True)
class SchemaViolation:
    field: str
    message: str
    validator: str


def validate_metadata(kind: str, metadata: Dict[str, Any]) -> List[SchemaViolation]:
    """Return every schema violation for ``metadata`` sorted by field path."""

    validator = _VALIDATORS.get(kind)
    if validator is None:
        raise KeyError(f"Unknown schema kind: {kind}")

    violations = [
        SchemaViolation(
            field=_field_path(error),
            message=_describe(error),
            validator=str(error.validator),
        )
        for error in validator.iter_errors(metadata)
    ]
    violations.sort(key=lambda item: (item.field, item.validator, item.message))
    return violations


def _field_path(error: Any) -> str:
    if error.validator == "required":
        # jsonschema reports missing keys at the parent; name the key itself
        missing = error.message.split("'")
        if len(missing) >= 2:
            return missing[1]
    path = ".".join(str(part) for part in error.absolute_path)
    return path or "<root>"


def _describe(error: Any) -> str:
    field = ".".join(str(part) for part in error.absolute_path)
    if error.validator == "required":
        return error.message
    if error.validator == "pattern" and field == "description":
        return "'description' must not be blank"
    if error.validator == "pattern" and field == "name":
        return f"'name' must be lowercase kebab-case; got {error.instance!r}"
    if error.validator == "pattern" and field == "version":
        return f"'version' must be a semantic version; got {error.instance!r}"
    if error.validator == "maxLength":
        return f"'{field}' exceeds {error.validator_value} characters"
    if error.validator == "oneOf":
        return f"'{field}' must be a string or a list of strings"
    if error.validator == "type":
        return f"'{field}' must be of type {error.validator_value}"
    return error.message
