"""
Project configuration loaded from ``templfile.toml``.

Example::

    [project]
    name = "site"

    [parser]
    default_package = "views"
    extensions = [".templ"]

    [paths]
    include = ["components/"]

Every section is optional; a missing file gives the defaults.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .package import is_identifier

MANIFEST_NAME = "templfile.toml"


@dataclass
class ParserConfig:
    """Parser settings."""

    default_package: str | None = None  # Overrides the parent-directory rule
    extensions: list[str] = field(default_factory=lambda: [".templ"])


@dataclass
class ProjectManifest:
    name: str = ""
    parser: ParserConfig = field(default_factory=ParserConfig)
    include: list[str] = field(default_factory=lambda: ["."])


def _string_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return list(value)


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load ``templfile.toml``.

    Args:
        path: Path to the manifest file

    Returns:
        The manifest, or defaults if the file does not exist

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    if not path.exists():
        return ProjectManifest()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    parser = data.get("parser", {})
    paths = data.get("paths", {})

    default_package = parser.get("default_package")
    if default_package is not None and not (
        isinstance(default_package, str) and is_identifier(default_package)
    ):
        raise ConfigError(f"default_package must be an identifier, got {default_package!r}")

    return ProjectManifest(
        name=str(project.get("name", "")),
        parser=ParserConfig(
            default_package=default_package,
            extensions=_string_list(parser, "extensions", [".templ"]),
        ),
        include=_string_list(paths, "include", ["."]),
    )


def discover_templ_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.include:
        base = (root / rel).resolve()
        if base.is_file():
            files.append(base)
            continue
        if not base.exists():
            continue
        for ext in manifest.parser.extensions:
            files.extend(base.rglob(f"*{ext}"))
    return sorted(set(files))
