"""Bundle discovery and document loading.

A bundle is any directory holding an ``agents/`` or ``skills/`` directory.
Agents live at ``agents/*.md``; skills at ``skills/<name>/SKILL.md`` or
``skills/*.md``. An optional ``.claude-plugin/plugin.json`` manifest
describes the bundle itself.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .constants import (
    AGENTS_DIR,
    IGNORED_DIRS,
    PLUGIN_MANIFEST,
    SKILL_FILENAME,
    SKILLS_DIR,
)
from .errors import FrontMatterError, LoadError
from .frontmatter import split_front_matter

logger = logging.getLogger(__name__)


@dataclass
class Document:
    kind: str
    bundle: str
    path: Path
    relative_path: str
    text: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    body: str = ""
    body_line: int = 1
    front_matter_error: Optional[str] = None
    front_matter_error_line: Optional[int] = None

    @property
    def name(self) -> str:
        value = self.metadata.get("name")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return self.expected_name

    @property
    def description(self) -> str:
        value = self.metadata.get("description")
        return value.strip() if isinstance(value, str) else ""

    @property
    def expected_name(self) -> str:
        """Name implied by the file layout (skill directory or file stem)."""

        if self.path.name == SKILL_FILENAME:
            return self.path.parent.name
        return self.path.stem

    def line_of(self, field: str) -> int:
        """Best-effort line of a top-level front-matter key; the opening line otherwise."""

        key = field.split(".", 1)[0]
        for offset, line in enumerate(self.text.splitlines()[1 : self.body_line - 1]):
            if line.startswith(f"{key}:"):
                return offset + 2
        return 1


@dataclass
class Bundle:
    name: str
    root: Path
    manifest: Optional[Dict[str, Any]] = None
    manifest_path: Optional[Path] = None
    manifest_error: Optional[str] = None
    documents: List[Document] = field(default_factory=list)


@dataclass
class Corpus:
    root: Path
    bundles: List[Bundle] = field(default_factory=list)

    @property
    def documents(self) -> List[Document]:
        return [doc for bundle in self.bundles for doc in bundle.documents]

    def find(self, name: str, kind: Optional[str] = None) -> List[Document]:
        return [
            doc
            for doc in self.documents
            if doc.name == name and (kind is None or doc.kind == kind)
        ]

    def counts(self) -> Dict[str, int]:
        totals = {"agent": 0, "skill": 0}
        for doc in self.documents:
            totals[doc.kind] = totals.get(doc.kind, 0) + 1
        return totals


def load_corpus(path: Path) -> Corpus:
    """Discover bundles beneath ``path`` and load every document."""

    if not path.exists():
        raise LoadError(f"Path not found: {path}")

    root = path.resolve()
    if root.is_file():
        corpus = _load_single_file(root)
    else:
        corpus = Corpus(root=root, bundles=[_load_bundle(d, root) for d in _discover_bundles(root)])

    if not corpus.documents:
        raise LoadError(f"No agent or skill documents found under {path}")
    logger.debug(
        "Loaded %d documents from %d bundles under %s",
        len(corpus.documents),
        len(corpus.bundles),
        root,
    )
    return corpus


def load_document(path: Path, *, kind: str, bundle: str, root: Path) -> Document:
    try:
        relative = path.relative_to(root).as_posix()
    except ValueError:
        relative = path.as_posix()
    document = Document(kind=kind, bundle=bundle, path=path, relative_path=relative)

    try:
        document.text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        document.front_matter_error = f"file is not valid UTF-8: {exc.reason}"
        document.front_matter_error_line = 1
        return document
    except OSError as exc:
        logger.debug("Cannot read %s: %s", relative, exc)
        document.front_matter_error = f"file could not be read: {exc.strerror or exc}"
        document.front_matter_error_line = 1
        return document

    try:
        parsed = split_front_matter(document.text)
    except FrontMatterError as exc:
        logger.debug("Front-matter error in %s: %s", relative, exc)
        document.front_matter_error = exc.message
        document.front_matter_error_line = exc.line
        document.body = document.text
        return document

    document.metadata = parsed.metadata
    document.body = parsed.body
    document.body_line = parsed.body_line
    return document


def _discover_bundles(root: Path) -> List[Path]:
    found: List[Path] = []
    for current, dirnames, _ in os.walk(root):
        dirnames[:] = sorted(
            name for name in dirnames if not name.startswith(".") and name not in IGNORED_DIRS
        )
        current_path = Path(current)
        if any(name in (AGENTS_DIR, SKILLS_DIR) for name in dirnames):
            found.append(current_path)
            # a bundle's own agents/ and skills/ trees are not searched for nested bundles
            dirnames[:] = [name for name in dirnames if name not in (AGENTS_DIR, SKILLS_DIR)]
    return found


def _load_bundle(bundle_root: Path, root: Path) -> Bundle:
    bundle = Bundle(name=_bundle_name(bundle_root, root), root=bundle_root)
    _load_manifest(bundle)
    if bundle.manifest and isinstance(bundle.manifest.get("name"), str):
        bundle.name = bundle.manifest["name"]

    for kind, path in _iter_document_paths(bundle_root):
        bundle.documents.append(load_document(path, kind=kind, bundle=bundle.name, root=root))
    return bundle


def _iter_document_paths(bundle_root: Path) -> Iterator[tuple[str, Path]]:
    agents_dir = bundle_root / AGENTS_DIR
    if agents_dir.is_dir():
        for path in sorted(agents_dir.glob("*.md")):
            if path.is_file():
                yield "agent", path

    skills_dir = bundle_root / SKILLS_DIR
    if skills_dir.is_dir():
        candidates: List[Path] = [p for p in skills_dir.glob("*.md") if p.is_file()]
        for child in skills_dir.iterdir():
            skill_file = child / SKILL_FILENAME
            if child.is_dir() and skill_file.is_file():
                candidates.append(skill_file)
        for path in sorted(candidates):
            yield "skill", path


def _load_manifest(bundle: Bundle) -> None:
    manifest_path = bundle.root.joinpath(*PLUGIN_MANIFEST)
    if not manifest_path.is_file():
        return
    bundle.manifest_path = manifest_path
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        bundle.manifest_error = f"unreadable plugin manifest: {exc}"
        return
    if not isinstance(payload, dict):
        bundle.manifest_error = "plugin manifest must be a JSON object"
        return
    bundle.manifest = payload


def _bundle_name(bundle_root: Path, root: Path) -> str:
    if bundle_root == root:
        return root.name
    return bundle_root.relative_to(root).as_posix()


def _load_single_file(path: Path) -> Corpus:
    parent = path.parent
    if path.name == SKILL_FILENAME and parent.parent.name == SKILLS_DIR:
        kind, bundle_root = "skill", parent.parent.parent
    elif parent.name == AGENTS_DIR:
        kind, bundle_root = "agent", parent.parent
    elif parent.name == SKILLS_DIR:
        kind, bundle_root = "skill", parent.parent
    else:
        kind, bundle_root = "skill", parent

    bundle = Bundle(name=bundle_root.name, root=bundle_root)
    bundle.documents.append(load_document(path, kind=kind, bundle=bundle.name, root=bundle_root))
    return Corpus(root=bundle_root, bundles=[bundle])
