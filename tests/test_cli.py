"""Tests for the arbor command-line interface."""

import csv
import io
import json

import pytest


@pytest.fixture
def run_cli(monkeypatch, tmp_path):
    """Run main() from an isolated working directory."""
    from arbor.cli import main

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("arbor.config.loader.find_config_file", lambda start_dir=None: None)
    monkeypatch.setattr("arbor.factory.find_config_file", lambda start_dir=None: None)
    monkeypatch.setattr("arbor.commands.config_cmd.find_config_file", lambda start_dir=None: None)

    def _run(*argv):
        return main(list(argv))

    return _run


class TestTreeCommand:
    """Tests for `arbor tree`."""

    def test_text(self, run_cli, catalog_csv, capsys):
        """Test indented text output."""
        assert run_cli("--source", str(catalog_csv), "tree") == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[:6] == ["Food", "  Fruit", "    Apple", "    Pear", "  Vegetables", "Drinks"]
        assert "6 nodes, 2 roots, 3 levels" in lines[-1]

    def test_json(self, run_cli, catalog_csv, capsys):
        """Test nested JSON output."""
        assert run_cli("--source", str(catalog_csv), "tree", "--format", "json") == 0

        data = json.loads(capsys.readouterr().out)
        assert [root["id"] for root in data] == ["food", "drinks"]
        assert [c["id"] for c in data[0]["children"]] == ["fruit", "veg"]

    def test_no_source_configured(self, run_cli, capsys):
        """Test a clear error when no source is given."""
        assert run_cli("tree") == 1

        assert "No record source configured" in capsys.readouterr().err


class TestLevelsCommand:
    """Tests for `arbor levels`."""

    def test_summary(self, run_cli, catalog_csv, capsys):
        """Test per-level counts."""
        assert run_cli("--source", str(catalog_csv), "levels") == 0

        out = capsys.readouterr().out
        assert "Levels (3):" in out
        assert "0: 2 nodes" in out

    def test_single_level(self, run_cli, catalog_csv, capsys):
        """Test listing the members of one level."""
        assert run_cli("--source", str(catalog_csv), "levels", "--level", "2", "--format", "json") == 0

        assert json.loads(capsys.readouterr().out) == ["fruit-apple", "fruit-pear"]

    def test_out_of_range(self, run_cli, catalog_csv, capsys):
        """Test level beyond the depth exits with an error."""
        assert run_cli("--source", str(catalog_csv), "levels", "--level", "5") == 1

        assert "out of range" in capsys.readouterr().err


class TestShowCommand:
    """Tests for `arbor show`."""

    def test_text(self, run_cli, catalog_csv, capsys):
        """Test node details with path."""
        assert run_cli("--source", str(catalog_csv), "show", "FRUIT-PEAR") == 0

        out = capsys.readouterr().out
        assert out.startswith("fruit-pear: Pear")
        assert "Food > Fruit > Pear" in out

    def test_json(self, run_cli, catalog_csv, capsys):
        """Test JSON details include the path ids."""
        assert run_cli("--source", str(catalog_csv), "show", "fruit", "--format", "json") == 0

        data = json.loads(capsys.readouterr().out)
        assert data["path"] == ["food", "fruit"]
        assert data["children"] == ["fruit-apple", "fruit-pear"]

    def test_unknown_id(self, run_cli, catalog_csv, capsys):
        """Test unknown id exits with an error."""
        assert run_cli("--source", str(catalog_csv), "show", "nope") == 1

        assert "not found" in capsys.readouterr().err


class TestExportCommand:
    """Tests for `arbor export`."""

    def test_csv_to_file(self, run_cli, catalog_csv, tmp_path):
        """Test CSV export written to a file."""
        out_path = tmp_path / "out.csv"

        assert run_cli("-q", "--source", str(catalog_csv), "export", "-o", str(out_path)) == 0

        rows = list(csv.reader(io.StringIO(out_path.read_text(encoding="utf-8"))))
        assert rows[0][:3] == ["id", "parent", "level"]
        assert len(rows) == 7

    def test_json_stdout(self, run_cli, catalog_csv, capsys):
        """Test JSON export to stdout."""
        assert run_cli("--source", str(catalog_csv), "export", "--format", "json") == 0

        data = json.loads(capsys.readouterr().out)
        assert len(data["levels"]) == 3


class TestConfigCommand:
    """Tests for `arbor config`."""

    def test_init_then_path(self, run_cli, tmp_path, capsys):
        """Test init writes a config file that config path then reports."""
        assert run_cli("config", "init") == 0
        assert (tmp_path / ".arbor.toml").exists()

        assert run_cli("config", "init") == 1
        assert "already exists" in capsys.readouterr().err

        assert run_cli("--config", str(tmp_path / ".arbor.toml"), "config", "path") == 0

    def test_source_from_config(self, run_cli, tmp_path, catalog_csv, capsys):
        """Test [source].path is resolved relative to the config file."""
        config_file = tmp_path / ".arbor.toml"
        config_file.write_text(f'[source]\npath = "{catalog_csv.name}"\n', encoding="utf-8")

        assert run_cli("--config", str(config_file), "levels") == 0
        assert "Levels (3):" in capsys.readouterr().out

    def test_show(self, run_cli, tmp_path, capsys):
        """Test effective configuration printed as JSON."""
        config_file = tmp_path / ".arbor.toml"
        config_file.write_text('[hierarchy]\ntext_separator = "/"\n', encoding="utf-8")

        assert run_cli("--config", str(config_file), "config", "show") == 0

        data = json.loads(capsys.readouterr().out)
        assert data["hierarchy"]["text_separator"] == "/"

    def test_path_without_file(self, run_cli, capsys):
        """Test config path reports when nothing is found."""
        assert run_cli("config", "path") == 1

    def test_path_explicit_missing_file(self, run_cli, tmp_path, capsys):
        """Test config path fails for a --config file that does not exist."""
        missing = tmp_path / "missing.toml"

        assert run_cli("--config", str(missing), "config", "path") == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "not found" in captured.err


class TestMain:
    """Tests for main() dispatch."""

    def test_no_command_prints_help(self, run_cli, capsys):
        """Test bare invocation prints help and succeeds."""
        assert run_cli() == 0

        assert "usage: arbor" in capsys.readouterr().out

    def test_version(self, run_cli, capsys):
        """Test --version exits after printing the version."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli("--version")

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("arbor ")
