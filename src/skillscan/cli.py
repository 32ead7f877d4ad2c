"""Command line interface for SkillScan."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from .catalog import build_catalog, match_documents
from .config import load_config
from .constants import (
    DOCUMENT_KINDS,
    EXIT_INVALID_INPUT,
    EXIT_LINT_FAIL,
    EXIT_SUCCESS,
)
from .documents import Corpus, load_corpus
from .errors import ConfigError, LoadError
from .evaluator import build_fatal_error_output, run_scan
from .publisher import FORMATS, publish_corpus, render_document
from .renderer import (
    render_catalog_table,
    render_human_readable,
    render_matches,
    render_severity_summary,
)
from .rules import build_rule_manifest, get_all_rules

_KIND_CHOICE = click.Choice(DOCUMENT_KINDS)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr")
def cli(verbose: bool) -> None:
    """Lint, catalog and publish agent and skill documentation bundles."""

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--json-output/--no-json-output",
    "json_output",
    default=False,
    help="Emit the JSON payload instead of text",
)
@click.option("--strict", is_flag=True, help="Fail on issues of any severity")
@click.option("--quiet", is_flag=True, help="Suppress scan output")
@click.option("--disable", "disabled", multiple=True, help="Rule id to skip (repeatable)")
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path, dir_okay=False),
    help="YAML config file (defaults to .skillscan.yaml in PATH)",
)
def scan(
    path: Path,
    json_output: bool,
    strict: bool,
    quiet: bool,
    disabled: Tuple[str, ...],
    config_file: Optional[Path],
) -> None:
    """Lint every document under PATH."""

    try:
        config = load_config(path, config_file=config_file, strict=strict, disabled=disabled)
        corpus = load_corpus(path)
    except (ConfigError, LoadError) as exc:
        result = build_fatal_error_output(str(exc))
        if not quiet and json_output:
            click.echo(json.dumps(result, indent=2))
        elif not quiet:
            click.echo(f"Scan failed: {result['load_error']}", err=True)
        raise click.exceptions.Exit(EXIT_INVALID_INPUT)

    result = run_scan(corpus, config=config)
    exit_code = EXIT_LINT_FAIL if result["status"] == "FAIL" else EXIT_SUCCESS

    if not quiet:
        if json_output:
            click.echo(json.dumps(result, indent=2))
        else:
            summary_text = render_severity_summary(result)
            issues_text = render_human_readable(result)
            click.echo(f"{summary_text}\n{issues_text}")

    if exit_code:
        raise click.exceptions.Exit(exit_code)


@cli.command()
@click.option("--manifest", is_flag=True, help="Emit the JSON rule manifest")
def rules(manifest: bool) -> None:
    """List the registered rules."""

    if manifest:
        click.echo(json.dumps(build_rule_manifest(), indent=2))
        return
    for rule_cls in get_all_rules():
        click.echo(f"{rule_cls.id}  {rule_cls.severity:<8}  {rule_cls.title}")


@cli.command(name="list")
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--kind", type=_KIND_CHOICE, help="Only list agents or skills")
@click.option("--json-output", is_flag=True, help="Emit JSON")
def list_documents(path: Path, kind: Optional[str], json_output: bool) -> None:
    """List agents and skills with their descriptions."""

    corpus = _load_or_exit(path)
    entries = [entry for entry in build_catalog(corpus) if kind is None or entry.kind == kind]
    if json_output:
        click.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))
    else:
        click.echo(render_catalog_table(entries))


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("query")
@click.option("--kind", type=_KIND_CHOICE, help="Only match agents or skills")
@click.option("--limit", type=click.IntRange(min=1), default=5, show_default=True)
@click.option("--json-output", is_flag=True, help="Emit JSON")
def match(path: Path, query: str, kind: Optional[str], limit: int, json_output: bool) -> None:
    """Rank documents whose name or description matches QUERY."""

    corpus = _load_or_exit(path)
    matches = match_documents(build_catalog(corpus), query, kind=kind, limit=limit)
    if json_output:
        click.echo(json.dumps([item.to_dict() for item in matches], indent=2))
    else:
        click.echo(render_matches(matches))


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("name")
@click.option("--kind", type=_KIND_CHOICE, help="Disambiguate agent and skill names")
@click.option("--format", "fmt", type=click.Choice(FORMATS), default="context", show_default=True)
def show(path: Path, name: str, kind: Optional[str], fmt: str) -> None:
    """Render a single document by NAME."""

    corpus = _load_or_exit(path)
    found = corpus.find(name, kind=kind)
    if not found:
        raise click.UsageError(f"No document named '{name}'")
    if len(found) > 1:
        locations = ", ".join(document.relative_path for document in found)
        raise click.UsageError(f"'{name}' is ambiguous ({locations}); pass --kind")
    click.echo(render_document(found[0], fmt), nl=False)


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("out_dir", type=click.Path(path_type=Path, file_okay=False))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default="html", show_default=True)
def render(path: Path, out_dir: Path, fmt: str) -> None:
    """Publish every document under PATH into OUT_DIR."""

    corpus = _load_or_exit(path)
    try:
        written = publish_corpus(corpus, out_dir, fmt)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise click.exceptions.Exit(EXIT_INVALID_INPUT)
    click.echo(f"Wrote {len(written)} files to {out_dir}")


def _load_or_exit(path: Path) -> Corpus:
    try:
        return load_corpus(path)
    except LoadError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise click.exceptions.Exit(EXIT_INVALID_INPUT)


def main() -> None:
    cli()
