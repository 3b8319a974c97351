"""Tests for templfile.toml loading and file discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from templfile.core.errors import ConfigError
from templfile.core.manifest import (
    ParserConfig,
    ProjectManifest,
    discover_templ_files,
    load_manifest,
)


class TestLoadManifest:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        mf = load_manifest(tmp_path / "templfile.toml")
        assert mf == ProjectManifest()
        assert mf.parser.extensions == [".templ"]
        assert mf.include == ["."]

    def test_full_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "templfile.toml"
        path.write_text(
            """
[project]
name = "site"

[parser]
default_package = "views"
extensions = [".templ", ".tmpl"]

[paths]
include = ["components/", "pages/"]
"""
        )
        mf = load_manifest(path)
        assert mf.name == "site"
        assert mf.parser.default_package == "views"
        assert mf.parser.extensions == [".templ", ".tmpl"]
        assert mf.include == ["components/", "pages/"]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "templfile.toml"
        path.write_text("[parser\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_manifest(path)

    def test_invalid_default_package(self, tmp_path: Path) -> None:
        path = tmp_path / "templfile.toml"
        path.write_text('[parser]\ndefault_package = "my-views"\n')
        with pytest.raises(ConfigError, match="default_package"):
            load_manifest(path)

    def test_extensions_must_be_list(self, tmp_path: Path) -> None:
        path = tmp_path / "templfile.toml"
        path.write_text('[parser]\nextensions = ".templ"\n')
        with pytest.raises(ConfigError, match="extensions"):
            load_manifest(path)


class TestDiscoverTemplFiles:
    def test_recursive_discovery(self, tmp_path: Path) -> None:
        (tmp_path / "components" / "nested").mkdir(parents=True)
        a = tmp_path / "components" / "a.templ"
        b = tmp_path / "components" / "nested" / "b.templ"
        a.write_text("package components\n")
        b.write_text("package nested\n")
        (tmp_path / "components" / "a_templ.go").write_text("package components\n")

        mf = ProjectManifest(include=["components/"])
        assert discover_templ_files(tmp_path, mf) == sorted([a.resolve(), b.resolve()])

    def test_custom_extensions_and_missing_paths(self, tmp_path: Path) -> None:
        f = tmp_path / "page.tmpl"
        f.write_text("")
        mf = ProjectManifest(parser=ParserConfig(extensions=[".tmpl"]), include=[".", "gone/"])
        assert discover_templ_files(tmp_path, mf) == [f.resolve()]

    def test_explicit_file(self, tmp_path: Path) -> None:
        f = tmp_path / "single.templ"
        f.write_text("")
        mf = ProjectManifest(include=[str(f)])
        assert discover_templ_files(tmp_path, mf) == [f.resolve()]
