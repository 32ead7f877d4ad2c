"""Test package helpers shared across SkillScan suites."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

CANONICAL_REQUIRED_FIELDS: tuple[str, ...] = (
    "tool",
    "scan_version",
    "rules_version",
    "schema_version",
    "status",
    "issues",
    "severity_totals",
    "metadata",
    "fail_on",
    "latency_ms",
    "load_error",
)

ISSUE_REQUIRED_FIELDS: tuple[str, ...] = (
    "id",
    "severity",
    "title",
    "description",
    "document",
    "line",
    "attributes",
    "remediation_hint",
    "remediation_difficulty",
)


def assert_canonical_payload(payload: Dict[str, Any]) -> None:
    missing = [key for key in CANONICAL_REQUIRED_FIELDS if key not in payload]
    assert not missing, f"payload missing keys: {missing}"
    assert list(payload.keys()) == sorted(payload.keys())
    assert set(payload["severity_totals"]) == {"critical", "high", "medium", "low"}
    for issue in payload["issues"]:
        absent = [key for key in ISSUE_REQUIRED_FIELDS if key not in issue]
        assert not absent, f"issue {issue.get('id')} missing {absent}"


def issue_ids(payload: Dict[str, Any]) -> List[str]:
    return [issue["id"] for issue in payload["issues"]]


def issues_for(payload: Dict[str, Any], rule_ids: Iterable[str]) -> List[Dict[str, Any]]:
    wanted = set(rule_ids)
    return [issue for issue in payload["issues"] if issue["id"] in wanted]
