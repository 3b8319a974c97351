"""
Parsing commands: ``templfile parse`` and ``templfile check``.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from templfile.core.errors import LegacyFormatError, TemplfileError
from templfile.core.ir import CodeSpan, Document
from templfile.core.manifest import (
    MANIFEST_NAME,
    ProjectManifest,
    discover_templ_files,
    load_manifest,
)
from templfile.core.templatefile import parse_file

console = Console()


def _node_label(node: object) -> tuple[str, str]:
    if isinstance(node, CodeSpan):
        first_line = node.text.splitlines()[0]
        return "code", first_line
    kind = getattr(node, "kind", "?")
    name = getattr(node, "name", "")
    return kind, name


def _print_summary(path: Path, document: Document) -> None:
    table = Table(title=f"{path} ({document.package.text})")
    table.add_column("Kind", style="cyan")
    table.add_column("Name / first line")
    table.add_column("Span", style="bright_black")

    for node in document.body:
        kind, label = _node_label(node)
        span = node.source if not isinstance(node, CodeSpan) else node.expression
        table.add_row(kind, label, f"{span.start}-{span.end}")

    console.print(table)


def parse_command(
    file: Path = typer.Argument(..., help="templ file to parse"),  # noqa: B008
    summary: bool = typer.Option(
        False, "--summary", "-s", help="Print a table of body nodes instead of JSON"
    ),
    manifest: Path = typer.Option(  # noqa: B008
        Path(MANIFEST_NAME), "--manifest", "-m", help="Path to templfile.toml"
    ),
) -> None:
    """
    Parse a single templ file and print the document tree.
    """
    try:
        mf = load_manifest(manifest)
        document = parse_file(file, mf)
    except OSError as e:
        typer.echo(f"Cannot read {file}: {e}", err=True)
        raise typer.Exit(code=1)
    except TemplfileError as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=1)

    if summary:
        _print_summary(file, document)
    else:
        typer.echo(document.to_json())


def check_command(
    paths: list[Path] = typer.Argument(  # noqa: B008
        None, help="Files or directories to check (default: manifest include paths)"
    ),
    manifest: Path = typer.Option(  # noqa: B008
        Path(MANIFEST_NAME), "--manifest", "-m", help="Path to templfile.toml"
    ),
) -> None:
    """
    Parse every templ file and report the ones that fail.
    """
    manifest_path = manifest.resolve()
    try:
        mf = load_manifest(manifest_path)
    except TemplfileError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    missing: list[Path] = []
    if paths:
        # Explicit paths are relative to the working directory, not the manifest.
        resolved = [(Path.cwd() / p).resolve() for p in paths]
        missing = [p for p in resolved if not p.exists()]
        existing = [str(p) for p in resolved if p.exists()]
        mf = ProjectManifest(name=mf.name, parser=mf.parser, include=existing)
        files = discover_templ_files(Path.cwd(), mf) if existing else []
    else:
        files = discover_templ_files(manifest_path.parent, mf)

    if not files and not missing:
        typer.echo("No templ files found.")
        return

    failures = len(missing)
    for p in missing:
        typer.echo(f"✗ {p}: not found", err=True)
    for f in files:
        try:
            document = parse_file(f, mf)
        except LegacyFormatError as e:
            failures += 1
            typer.echo(f"✗ {f}: {e.message}", err=True)
        except (TemplfileError, OSError) as e:
            failures += 1
            typer.echo(f"✗ {f}: {e}", err=True)
        else:
            typer.echo(f"✓ {f} ({len(document.body)} nodes)")

    typer.echo("")
    total = len(files) + len(missing)
    typer.echo(f"{total - failures}/{total} files parsed")
    if failures:
        raise typer.Exit(code=1)
