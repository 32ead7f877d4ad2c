"""Front-matter and manifest schema validation."""

from __future__ import annotations

import pytest

from skillscan.schema import validate_metadata


def _fields(violations):
    return [violation.field for violation in violations]


def test_valid_agent_and_skill_metadata():
    assert validate_metadata("agent", {"name": "tf-validator", "description": "Checks", "tools": "Read, Bash"}) == []
    assert validate_metadata("skill", {"name": "aws-patterns", "description": "Ref", "version": "1.2.3-rc.1"}) == []


def test_missing_required_keys_name_the_key():
    violations = validate_metadata("skill", {})
    assert _fields(violations) == ["description", "name"]
    assert all(violation.validator == "required" for violation in violations)


@pytest.mark.parametrize("description", ["", "   ", "\n"])
def test_blank_description_is_rejected(description):
    violations = validate_metadata("agent", {"name": "a", "description": description})
    assert _fields(violations) == ["description"]
    assert violations[0].message == "'description' must not be blank"


def test_null_description_is_a_type_error():
    violations = validate_metadata("agent", {"name": "a", "description": None})
    assert violations[0].message == "'description' must be of type string"


def test_overlong_description():
    violations = validate_metadata("skill", {"name": "a", "description": "x" * 1025})
    assert violations[0].message == "'description' exceeds 1024 characters"


@pytest.mark.parametrize("name", ["Terraform Validator", "tf_validator", "-lead", "x" * 65])
def test_name_format(name):
    violations = validate_metadata("agent", {"name": name, "description": "ok"})
    assert "name" in _fields(violations)


def test_version_must_be_semver():
    violations = validate_metadata("skill", {"name": "a", "description": "ok", "version": "v1"})
    assert violations[0].message == "'version' must be a semantic version; got 'v1'"


def test_tools_must_be_string_or_list_of_strings():
    violations = validate_metadata("agent", {"name": "a", "description": "ok", "tools": {"read": True}})
    assert violations[0].message == "'tools' must be a string or a list of strings"
    assert validate_metadata("agent", {"name": "a", "description": "ok", "tools": ["Read", "Bash"]}) == []


def test_manifest_requires_name():
    assert _fields(validate_metadata("manifest", {"version": "1.0.0"})) == ["name"]


def test_unknown_kind_raises():
    with pytest.raises(KeyError):
        validate_metadata("prompt", {})
