"""Document catalog and description matching.

The catalog mirrors what an agent-hosting runtime sees when it decides which
agent or skill to surface: the name and description from the front-matter.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

from .documents import Corpus, Document
from .tools_field import parse_tools

_TOKEN = re.compile(r"[a-z0-9]+")
_STOPWORDS = frozenset(
    {"a", "an", "and", "for", "in", "of", "on", "or", "the", "to", "with", "use", "when", "how"}
)
NAME_WEIGHT = 3
DESCRIPTION_WEIGHT = 1


@dataclass
class CatalogEntry:
    name: str
    kind: str
    bundle: str
    description: str
    path: str
    version: Optional[str] = None
    tools: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Match:
    entry: CatalogEntry
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, **self.entry.to_dict()}


def build_catalog(corpus: Corpus) -> List[CatalogEntry]:
    entries = [_entry(document) for document in corpus.documents]
    entries.sort(key=lambda entry: (entry.bundle, entry.kind, entry.name, entry.path))
    return entries


def match_documents(
    catalog: List[CatalogEntry],
    query: str,
    *,
    kind: Optional[str] = None,
    limit: int = 5,
) -> List[Match]:
    """Rank catalog entries against a free-text query.

    A query token found in the entry name scores ``NAME_WEIGHT``; one found in
    the description scores ``DESCRIPTION_WEIGHT``. Entries scoring zero are
    dropped and ties are ordered by name.
    """

    query_tokens = tokenize(query)
    if not query_tokens or limit <= 0:
        return []

    matches: List[Match] = []
    for entry in catalog:
        if kind is not None and entry.kind != kind:
            continue
        name_tokens = tokenize(entry.name)
        description_tokens = tokenize(entry.description)
        score = sum(
            NAME_WEIGHT * (token in name_tokens)
            + DESCRIPTION_WEIGHT * (token in description_tokens)
            for token in query_tokens
        )
        if score > 0:
            matches.append(Match(entry=entry, score=score))
    matches.sort(key=lambda match: (-match.score, match.entry.name, match.entry.path))
    return matches[:limit]


def tokenize(text: str) -> Set[str]:
    return {token for token in _TOKEN.findall(text.lower()) if token not in _STOPWORDS}


def _entry(document: Document) -> CatalogEntry:
    version = document.metadata.get("version")
    tools_field = "tools" if document.kind == "agent" else "allowed-tools"
    return CatalogEntry(
        name=document.name,
        kind=document.kind,
        bundle=document.bundle,
        description=document.description,
        path=document.relative_path,
        version=str(version) if version is not None else None,
        tools=parse_tools(document.metadata.get(tools_field)),
    )
