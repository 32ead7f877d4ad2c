"""Corpus metadata helpers for the scan payload."""

from __future__ import annotations

from typing import Any, Dict

from ..documents import Corpus


def build_corpus_metadata(corpus: Corpus) -> Dict[str, Any]:
    counts = corpus.counts()
    return {
        "root": str(corpus.root),
        "bundle_count": len(corpus.bundles),
        "bundles": sorted(bundle.name for bundle in corpus.bundles),
        "document_count": len(corpus.documents),
        "agent_count": counts.get("agent", 0),
        "skill_count": counts.get("skill", 0),
    }


def empty_metadata() -> Dict[str, Any]:
    return {
        "root": "",
        "bundle_count": 0,
        "bundles": [],
        "document_count": 0,
        "agent_count": 0,
        "skill_count": 0,
    }
