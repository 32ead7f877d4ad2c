"""Scan evaluator: runs registered rules over a corpus and builds the payload."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, List, Optional

from .config import ScanConfig
from .constants import (
    PAYLOAD_SCHEMA_VERSION,
    RULES_VERSION,
    SCAN_VERSION,
    SEVERITY_LEVELS,
    TOOL_NAME,
)
from .documents import Corpus
from .hints import loader as hint_loader
from .markdown import suppressed_rules
from .metadata import build_corpus_metadata, empty_metadata
from .rules import get_all_rules

logger = logging.getLogger(__name__)

REQUIRED_OUTPUT_KEYS = [
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
]

ISSUE_REQUIRED_FIELDS = [
    "id",
    "severity",
    "title",
    "description",
    "document",
    "line",
    "attributes",
    "remediation_hint",
    "remediation_difficulty",
]

SEVERITY_KEYS = list(SEVERITY_LEVELS)
_SEVERITY_RANK = {level: index for index, level in enumerate(SEVERITY_LEVELS)}
RULE_ERROR_ID = "P-DOC-ERR"


def run_scan(corpus: Corpus, *, config: Optional[ScanConfig] = None) -> Dict[str, Any]:
    """Produce the canonical payload for ``corpus``."""

    config = config or ScanConfig()
    start = perf_counter()
    issues: List[Dict[str, Any]] = []

    for rule_cls in get_all_rules():
        if config.is_disabled(rule_cls.id):
            logger.debug("Skipping disabled rule %s", rule_cls.id)
            continue
        try:
            results = rule_cls.evaluate(corpus)
        except Exception as exc:  # noqa: BLE001  # pylint: disable=broad-except
            logger.debug("Rule %s raised", rule_cls.id, exc_info=True)
            issues.append(
                {
                    "id": RULE_ERROR_ID,
                    "severity": "high",
                    "title": "Rule execution error",
                    "description": f"{rule_cls.id}: {exc}",
                    "document": "",
                    "line": None,
                    "attributes": {"rule_id": rule_cls.id},
                    "remediation_hint": "",
                    "remediation_difficulty": "medium",
                }
            )
            continue

        if results:
            issues.extend(results)

    issues = _drop_suppressed(issues, corpus)

    for issue in issues:
        rule_id = issue.get("id", "")
        hint = hint_loader.get_hint(rule_id)
        if hint:
            issue["remediation_hint"] = hint
        metadata = hint_loader.get_hint_metadata(rule_id)
        if metadata:
            issue["remediation_metadata"] = metadata

    issues.sort(key=_issue_sort_key)
    severity_totals = _severity_totals(issues)
    payload = _build_base_payload(
        status=_status(severity_totals, config.fail_on),
        severity_totals=severity_totals,
        metadata=build_corpus_metadata(corpus),
        fail_on=config.fail_on,
        load_error=None,
        issues=issues,
    )
    payload["metadata"]["disabled_rules"] = list(config.disabled_rules)
    payload["latency_ms"] = _measure_latency_ms(start)
    return _sort_payload(payload)


def build_fatal_error_output(message: str, *, fail_on: str = "high") -> Dict[str, Any]:
    payload = _build_base_payload(
        status="ERROR",
        severity_totals=_zero_severity_totals(),
        metadata=empty_metadata(),
        fail_on=fail_on,
        load_error=message,
    )
    return _sort_payload(payload)


def is_failing(severity_totals: Dict[str, int], fail_on: str) -> bool:
    """True when any issue is at or above ``fail_on`` severity."""

    threshold = _SEVERITY_RANK.get(fail_on, _SEVERITY_RANK["high"])
    return any(
        severity_totals.get(level, 0) > 0
        for level in SEVERITY_LEVELS
        if _SEVERITY_RANK[level] <= threshold
    )


def _build_base_payload(
    *,
    status: str,
    severity_totals: Dict[str, int],
    metadata: Dict[str, Any],
    fail_on: str,
    load_error: Optional[str],
    issues: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "tool": TOOL_NAME,
        "scan_version": SCAN_VERSION,
        "rules_version": RULES_VERSION,
        "schema_version": PAYLOAD_SCHEMA_VERSION,
        "status": status,
        "issues": list(issues or []),
        "severity_totals": severity_totals,
        "metadata": metadata,
        "fail_on": fail_on,
        "latency_ms": 0,
        "load_error": load_error,
    }


def _drop_suppressed(issues: List[Dict[str, Any]], corpus: Corpus) -> List[Dict[str, Any]]:
    suppressions = {}
    for document in corpus.documents:
        disabled = suppressed_rules(document.body)
        if disabled:
            suppressions[document.relative_path] = disabled
    if not suppressions:
        return issues
    return [
        issue
        for issue in issues
        if issue.get("id") not in suppressions.get(issue.get("document", ""), ())
    ]


def _issue_sort_key(issue: Dict[str, Any]) -> tuple:
    line = issue.get("line")
    return (
        _SEVERITY_RANK.get(str(issue.get("severity", "")), len(_SEVERITY_RANK)),
        str(issue.get("document", "")),
        line if isinstance(line, int) else 0,
        str(issue.get("id", "")),
    )


def _severity_totals(issues: List[Dict[str, Any]]) -> Dict[str, int]:
    totals = _zero_severity_totals()
    for issue in issues:
        severity = issue.get("severity")
        if severity in totals:
            totals[severity] += 1
    return totals


def _status(severity_totals: Dict[str, int], fail_on: str) -> str:
    return "FAIL" if is_failing(severity_totals, fail_on) else "PASS"


def _zero_severity_totals() -> Dict[str, int]:
    return {key: 0 for key in SEVERITY_KEYS}


def _measure_latency_ms(start: float) -> int:
    elapsed = perf_counter() - start
    return max(int(elapsed * 1000), 0)


def _sort_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: payload[key] for key in sorted(payload.keys())}
