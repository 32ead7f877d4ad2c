"""Publishing documents to target formats.

``html`` renders the markdown body with markdown-it and wraps it in a Jinja2
page listing the front-matter. ``context`` produces plain text meant to be
injected into a language-model conversation.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown_it import MarkdownIt

from .catalog import build_catalog
from .documents import Corpus, Document

logger = logging.getLogger(__name__)

FORMATS = ("html", "context")
EXTENSIONS = {"html": "html", "context": "md"}

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")
_MARKDOWN = MarkdownIt("commonmark", {"html": False}).enable("table")


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        keep_trailing_newline=True,
    )


def render_document(document: Document, fmt: str) -> str:
    if fmt == "html":
        return render_html(document)
    if fmt == "context":
        return render_context(document)
    raise ValueError(f"Unsupported format {fmt!r}; expected one of {', '.join(FORMATS)}")


def render_html(document: Document) -> str:
    template = _get_env().get_template("document.html.j2")
    return template.render(
        document=document,
        metadata=sorted((key, _display(value)) for key, value in document.metadata.items()),
        body_html=_MARKDOWN.render(document.body),
    )


def render_context(document: Document) -> str:
    lines = [f"# {document.name}"]
    if document.description:
        lines.append("")
        lines.extend(f"> {line}" if line else ">" for line in document.description.splitlines())
    body = document.body.strip("\n")
    if body:
        lines.extend(["", body])
    return "\n".join(lines) + "\n"


def publish_corpus(corpus: Corpus, out_dir: Path, fmt: str) -> List[Path]:
    """Write every document plus ``index.json`` beneath ``out_dir``."""

    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format {fmt!r}; expected one of {', '.join(FORMATS)}")

    written: List[Path] = []
    for document, target in _plan_targets(corpus, out_dir, fmt):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_document(document, fmt), encoding="utf-8")
        logger.debug("Wrote %s", target)
        written.append(target)

    index_path = out_dir / "index.json"
    index_path.parent.mkdir(parents=True, exist_ok=True)
    index = [entry.to_dict() for entry in build_catalog(corpus)]
    index_path.write_text(json.dumps(index, indent=2) + "\n", encoding="utf-8")
    written.append(index_path)
    return written


def _plan_targets(corpus: Corpus, out_dir: Path, fmt: str) -> List[Tuple[Document, Path]]:
    """Map every document to its output path, refusing escapes and collisions."""

    out_root = out_dir.resolve()
    claimed: Dict[Path, Document] = {}
    planned: List[Tuple[Document, Path]] = []
    for document in corpus.documents:
        filename = f"{_safe_filename(document.name)}.{EXTENSIONS[fmt]}"
        target = out_dir.joinpath(*_bundle_segments(document.bundle), f"{document.kind}s")
        target = target / filename
        if out_root not in target.resolve().parents:
            raise ValueError(
                f"Refusing to write {document.relative_path} outside {out_dir}: {target}"
            )
        previous = claimed.get(target)
        if previous is not None:
            raise ValueError(
                f"{previous.relative_path} and {document.relative_path} would both be written "
                f"to {target}; rename one of them"
            )
        claimed[target] = document
        planned.append((document, target))
    return planned


def _bundle_segments(bundle: str) -> List[str]:
    segments = []
    for part in bundle.replace("\\", "/").split("/"):
        cleaned = _UNSAFE_FILENAME.sub("-", part).strip(".-")
        if cleaned:
            segments.append(cleaned)
    return segments or ["bundle"]


def _safe_filename(name: str) -> str:
    cleaned = _UNSAFE_FILENAME.sub("-", name).strip(".-")
    return cleaned or "document"


def _display(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)
