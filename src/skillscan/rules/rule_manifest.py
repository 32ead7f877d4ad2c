"""Rule P-DOC-011: plugin manifests must be readable and well-formed."""

from __future__ import annotations

from typing import Any, Dict, List

from ..documents import Bundle, Corpus
from ..schema import validate_metadata
from . import register
from .base import Rule, build_issue


@register
class PluginManifestRule(Rule):
    """A bundle's .claude-plugin/plugin.json must parse and declare a valid name."""

    id = "P-DOC-011"
    severity = "high"
    title = "Invalid plugin manifest"

    @classmethod
    def evaluate(cls, corpus: Corpus) -> List[Dict[str, Any]]:
        issues: List[Dict[str, Any]] = []
        for bundle in corpus.bundles:
            if bundle.manifest_path is None:
                continue
            if bundle.manifest_error is not None:
                issues.append(cls._issue(bundle, corpus, bundle.manifest_error, {}))
                continue
            for violation in validate_metadata("manifest", bundle.manifest or {}):
                issues.append(
                    cls._issue(bundle, corpus, violation.message, {"field": violation.field})
                )
        return issues

    @classmethod
    def _issue(
        cls, bundle: Bundle, corpus: Corpus, description: str, attributes: Dict[str, Any]
    ) -> Dict[str, Any]:
        manifest_path = bundle.manifest_path or bundle.root
        try:
            location = manifest_path.relative_to(corpus.root).as_posix()
        except ValueError:
            location = manifest_path.as_posix()
        return build_issue(
            rule_id=cls.id,
            severity=cls.severity,
            title=cls.title,
            description=description,
            document=location,
            line=None,
            attributes={"bundle": bundle.name, **attributes},
            remediation_difficulty="low",
        )
