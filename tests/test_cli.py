"""Tests for the i18nrefs CLI."""

import json
from pathlib import Path

from click.testing import CliRunner

from i18nrefs import __version__
from i18nrefs.cli import cli


class TestVersion:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestValidateCommand:
    """Tests for `i18nrefs validate`."""

    def test_valid(self, sample_locales_dir: Path):
        result = CliRunner().invoke(cli, ["validate", str(sample_locales_dir)])

        assert result.exit_code == 0
        assert "✓ de: all references valid" in result.output
        assert "✓ en: all references valid" in result.output

    def test_json_report(self, broken_locales_dir: Path):
        result = CliRunner().invoke(cli, ["validate", str(broken_locales_dir), "--json"])

        assert result.exit_code == 1
        report = json.loads(result.output)
        assert report["summary"]["total_errors"] == 6
        assert report["locales"][0]["locale"] == "en"

    def test_locale_filter_and_workers(self, sample_locales_dir: Path):
        result = CliRunner().invoke(
            cli,
            ["validate", str(sample_locales_dir), "--locale", "en", "--workers", "2", "--json"],
        )

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert [r["locale"] for r in report["locales"]] == ["en"]

    def test_locales_dir_from_env(self, broken_locales_dir: Path):
        result = CliRunner().invoke(
            cli,
            ["validate"],
            env={"I18NREFS_LOCALES_DIR": str(broken_locales_dir)},
        )

        assert result.exit_code == 1
        assert "✗ en: 6 problem(s)" in result.output

    def test_missing_dir(self, temp_dir: Path):
        result = CliRunner().invoke(cli, ["validate", str(temp_dir / "nope")])

        assert result.exit_code == 1


class TestStructureCommand:
    """Tests for `i18nrefs structure`."""

    def test_identical(self, sample_locales_dir: Path):
        result = CliRunner().invoke(cli, ["structure", str(sample_locales_dir)])

        assert result.exit_code == 0
        assert "identical" in result.output

    def test_difference(self, sample_locales_dir: Path, write_json):
        write_json(sample_locales_dir / "en" / "components.json", {"nav": {}})

        result = CliRunner().invoke(cli, ["structure", str(sample_locales_dir), "--json"])

        assert result.exit_code == 1
        report = json.loads(result.output)
        assert report["differences"][0]["missing"] == ["nav.ides"]


class TestResolveCommand:
    """Tests for `i18nrefs resolve`."""

    def test_whole_locale(self, sample_locales_dir: Path):
        result = CliRunner().invoke(cli, ["resolve", str(sample_locales_dir), "--locale", "en"])

        assert result.exit_code == 0
        messages = json.loads(result.output)
        assert messages["shared"]["header"]["tagline"] == "ACS tools"
        assert messages["components"]["nav"]["ides"] == "Ides"
        assert messages["pages"]["curatedCollections"]["features"] == ["CLIs", "plain"]

    def test_single_key(self, sample_locales_dir: Path):
        result = CliRunner().invoke(
            cli,
            ["resolve", str(sample_locales_dir), "--locale", "de", "--key", "shared.header"],
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "title": "KI-Coding-Stack",
            "tagline": "KCS Werkzeuge",
        }

    def test_single_string(self, sample_locales_dir: Path):
        result = CliRunner().invoke(
            cli,
            ["resolve", str(sample_locales_dir), "--locale", "de", "--key", "components.nav.ides"],
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == "ides"

    def test_clean_subtree_of_broken_locale(self, broken_locales_dir: Path):
        """Test that problems outside the requested key do not fail the command."""
        result = CliRunner().invoke(
            cli,
            ["resolve", str(broken_locales_dir), "--locale", "en", "--key", "shared.a"],
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"b": "hello", "tree": {"x": "y"}}

    def test_resolution_error(self, broken_locales_dir: Path):
        result = CliRunner().invoke(
            cli,
            ["resolve", str(broken_locales_dir), "--locale", "en", "--key", "shared.loop1"],
        )

        assert result.exit_code == 1
        assert "Circular reference" in result.output


class TestGraphCommand:
    """Tests for `i18nrefs graph`."""

    def test_no_cycles(self, sample_locales_dir: Path):
        result = CliRunner().invoke(cli, ["graph", str(sample_locales_dir), "--locale", "en"])

        assert result.exit_code == 0
        summary = json.loads(result.output)
        assert summary["cycles"] == []
        assert summary["most_referenced"][0]["path"] == "shared.brand.name"

    def test_cycles_fail(self, broken_locales_dir: Path):
        result = CliRunner().invoke(cli, ["graph", str(broken_locales_dir), "--locale", "en"])

        assert result.exit_code == 1
        summary = json.loads(result.output)
        assert sorted(summary["cycles"][0]) == ["shared.loop1", "shared.loop2"]
