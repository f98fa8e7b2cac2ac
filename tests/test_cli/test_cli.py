"""Tests for the scopedcss CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from scopedcss import __version__
from scopedcss.cli.main import cli
from scopedcss.scope_id import ComponentIdentity, allocate

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture()
def css_file(tmp_path: Path) -> Path:
    path = tmp_path / "style.css"
    path.write_text(".example { color: red; }", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "rewrite" in result.output
        assert "check" in result.output
        assert "scope-id" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# rewrite command
# ---------------------------------------------------------------------------


class TestRewriteCommand:
    def test_explicit_id(self, css_file: Path) -> None:
        result = CliRunner().invoke(cli, ["rewrite", str(css_file), "--id", "f3f3eg9"])
        assert result.exit_code == 0
        assert result.output == ".example[data-v-f3f3eg9] { color: red; }\n"

    def test_id_from_file_path(self, css_file: Path) -> None:
        sid = allocate(ComponentIdentity.from_file(str(css_file)))
        result = CliRunner().invoke(cli, ["rewrite", str(css_file)])
        assert result.exit_code == 0
        assert f".example[data-v-{sid}]" in result.output

    def test_global_css_appended(self, css_file: Path) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "rewrite",
                str(css_file),
                "--id",
                "f3f3eg9",
                "--global-css",
                str(FIXTURES / "global.css"),
            ],
        )
        assert result.exit_code == 0
        assert result.output == (
            ".example[data-v-f3f3eg9] { color: red; }\nbody { margin: 0; }\n"
        )

    def test_custom_prefix(self, css_file: Path) -> None:
        result = CliRunner().invoke(
            cli, ["rewrite", str(css_file), "--id", "abc", "--prefix", "data-s-"]
        )
        assert result.exit_code == 0
        assert ".example[data-s-abc]" in result.output

    def test_output_file(self, css_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.css"
        result = CliRunner().invoke(
            cli, ["rewrite", str(css_file), "--id", "f3f3eg9", "-o", str(out)]
        )
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == ".example[data-v-f3f3eg9] { color: red; }"

    def test_parse_error(self) -> None:
        result = CliRunner().invoke(
            cli, ["rewrite", str(FIXTURES / "broken.css"), "--id", "f3f3eg9"]
        )
        assert result.exit_code == 1
        assert "Parse error" in result.output
        assert "data-v-f3f3eg9" not in result.output

    def test_invalid_id(self, css_file: Path) -> None:
        result = CliRunner().invoke(cli, ["rewrite", str(css_file), "--id", "bad id"])
        assert result.exit_code == 1
        assert "Invalid identity" in result.output

    def test_id_and_component_exclusive(self, css_file: Path) -> None:
        result = CliRunner().invoke(
            cli, ["rewrite", str(css_file), "--id", "abc", "--component", str(css_file)]
        )
        assert result.exit_code == 2

    def test_bad_prefix(self, css_file: Path) -> None:
        result = CliRunner().invoke(cli, ["rewrite", str(css_file), "--prefix", "bad prefix"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_ok(self) -> None:
        result = CliRunner().invoke(cli, ["check", str(FIXTURES / "component.css")])
        assert result.exit_code == 0
        assert "OK: component.css (5 rule(s))" in result.output

    def test_error(self) -> None:
        result = CliRunner().invoke(cli, ["check", str(FIXTURES / "broken.css")])
        assert result.exit_code == 1
        assert "Parse error" in result.output
        assert "line 2" in result.output


# ---------------------------------------------------------------------------
# scope-id command
# ---------------------------------------------------------------------------


class TestScopeIdCommand:
    def test_prints_id(self, css_file: Path, tmp_path: Path) -> None:
        sid = allocate(ComponentIdentity.from_file(css_file, root=tmp_path))
        result = CliRunner().invoke(
            cli, ["scope-id", str(css_file), "--root", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert f"Scope id:  {sid}" in result.output
        assert f"Attribute: data-v-{sid}" in result.output

    def test_hash_content_changes_id(self, css_file: Path) -> None:
        plain = CliRunner().invoke(cli, ["scope-id", str(css_file)])
        hashed = CliRunner().invoke(cli, ["scope-id", str(css_file), "--hash-content"])
        assert plain.exit_code == hashed.exit_code == 0
        assert plain.output != hashed.output
