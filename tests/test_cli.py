"""CLI smoke tests using typer's CliRunner."""

import json

import pytest
from typer.testing import CliRunner

from nomina import __version__
from nomina import config as config_module
from nomina.cli.app import app
from nomina.cli.commands.generate import parse_components, parse_filters

runner = CliRunner()


class TestVersionFlag:
    """Test the --version flag."""

    def test_version_output(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"nomina {__version__}" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_human_output(self, places_file):
        result = runner.invoke(
            app, ["generate", str(places_file), "-r", "frankfurt", "-l", "de"]
        )
        assert result.exit_code == 0
        assert "Frankfurt am Main" in result.output

    def test_json_output(self, places_file):
        result = runner.invoke(
            app,
            [
                "--json",
                "generate",
                str(places_file),
                "-r",
                "city",
                "-n",
                "2",
                "--seed",
                "1",
                "-l",
                "en",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "success"
        assert data["exit_code"] == 0
        assert len(data["suggestions"]) == 2
        suggestion = data["suggestions"][0]
        assert suggestion["recipe"] == "city"
        assert suggestion["seed"] == "1:0"
        assert "City" in suggestion["parts"]

    def test_filters_option(self, places_file):
        result = runner.invoke(
            app,
            [
                "--json",
                "generate",
                str(places_file),
                "-r",
                "city",
                "-l",
                "en",
                "--filters",
                '{"cities": {"tags": ["south"]}}',
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["suggestions"][0]["text"] == "Munich"

    def test_component_option(self, places_file):
        result = runner.invoke(
            app,
            [
                "--json",
                "generate",
                str(places_file),
                "-r",
                "prefixed",
                "-l",
                "en",
                "--seed",
                "2",
                "--component",
                "prefix=false",
            ],
        )
        assert result.exit_code == 0
        text = json.loads(result.stdout)["suggestions"][0]["text"]
        assert not text.startswith("Alt ")

    def test_cross_package(self, places_file, shared_file):
        result = runner.invoke(
            app, ["generate", str(shared_file), str(places_file), "-r", "coast"]
        )
        assert result.exit_code == 0
        assert " on the " in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(
            app, ["generate", str(tmp_path / "nope.json"), "-r", "city"]
        )
        assert result.exit_code == 3
        assert "not found" in result.output

    def test_invalid_package(self, tmp_path, places_data):
        places_data["format"] = "1.0.0"
        path = tmp_path / "old.json"
        path.write_text(json.dumps(places_data), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(path), "-r", "city"])
        assert result.exit_code == 1

    def test_unparseable_package(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        result = runner.invoke(app, ["generate", str(path), "-r", "city"])
        assert result.exit_code == 1

    def test_unknown_recipe(self, places_file):
        result = runner.invoke(app, ["generate", str(places_file), "-r", "village"])
        assert result.exit_code == 4
        assert "Recipe not found" in result.output

    def test_generation_failure(self, places_file):
        result = runner.invoke(app, ["generate", str(places_file), "-r", "broken"])
        assert result.exit_code == 4

    def test_empty_text_map_reports_generation_error(self, tmp_path, places_data):
        places_data["catalogs"]["blank"] = {"items": [{"t": {}}]}
        places_data["recipes"].append(
            {"id": "blank", "pattern": [{"select": {"key": "blank"}}]}
        )
        path = tmp_path / "blank.json"
        path.write_text(json.dumps(places_data), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(path), "-r", "blank"])
        assert result.exit_code == 4
        assert "No suggestions could be generated" in result.output

    def test_bad_filters(self, places_file):
        result = runner.invoke(
            app, ["generate", str(places_file), "-r", "city", "--filters", "[1]"]
        )
        assert result.exit_code == 1

    def test_count_out_of_range(self, places_file):
        result = runner.invoke(
            app, ["generate", str(places_file), "-r", "city", "-n", "500"]
        )
        assert result.exit_code == 1


class TestOptionParsing:
    """Tests for generate option parsers."""

    def test_parse_components(self):
        assert parse_components(["a=true", "b=0", "c=Off"]) == {
            "a": True,
            "b": False,
            "c": False,
        }

    def test_parse_components_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_components(["a"])
        with pytest.raises(ValueError):
            parse_components(["a=maybe"])

    def test_parse_filters(self):
        filters = parse_filters('{"cities": {"anyOfTags": ["north"]}}')
        assert filters["cities"].any_of_tags == ["north"]
        assert parse_filters(None) == {}

    def test_parse_filters_rejects_bad_clause(self):
        with pytest.raises(ValueError):
            parse_filters('{"cities": {"tags": "north"}}')


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_human_output(self, places_file):
        result = runner.invoke(app, ["inspect", str(places_file)])
        assert result.exit_code == 0
        assert "Recipes" in result.output
        assert "cities" in result.output

    def test_json_output(self, places_file):
        result = runner.invoke(app, ["--json", "inspect", str(places_file), "-l", "de"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["package"] == "places"
        assert data["recipes"][0] == {
            "ID": "city",
            "Name": "Stadt",
            "Kind": "pattern",
            "Post": "",
        }
        catalogs = {row["Key"]: row for row in data["catalogs"]}
        assert catalogs["cities"]["Items"] == "3"
        assert catalogs["cities"]["Name"] == "Städte"
        assert [row["Key"] for row in data["collections"]] == ["bare", "towns"]

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.json")])
        assert result.exit_code == 3


class TestTransformCommand:
    """Tests for the transform command."""

    def test_demonym(self):
        result = runner.invoke(app, ["transform", "Hamburg", "--demonym", "de"])
        assert result.exit_code == 0
        assert "Hamburger" in result.output

    def test_genitive(self):
        result = runner.invoke(app, ["transform", "Anna", "--genitive", "en"])
        assert "Anna's" in result.output

    def test_apply_chain_json(self):
        result = runner.invoke(
            app,
            [
                "--json",
                "transform",
                "  der herr  von und zu ",
                "--apply",
                "CollapseSpaces",
                "--apply",
                "TrimSpaces",
                "--apply",
                "TitleCase",
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["output"] == "Der Herr von und zu"


class TestConfigCommand:
    """Tests for the config command."""

    @pytest.fixture(autouse=True)
    def _config_file(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "nomina"
        monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
        monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")
        self.config_file = config_dir / "config.json"

    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Selection" in result.output
        assert "Generation" in result.output

    def test_config_set_and_reset(self):
        result = runner.invoke(app, ["config", "set", "defaults.locale", "de"])
        assert result.exit_code == 0
        assert "Set defaults.locale = de" in result.output
        saved = json.loads(self.config_file.read_text())
        assert saved["defaults"]["locale"] == "de"

        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 0
        assert not self.config_file.exists()

    def test_config_set_invalid_key(self):
        result = runner.invoke(app, ["config", "set", "invalid.key", "value"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_config_set_invalid_int_value(self):
        result = runner.invoke(app, ["config", "set", "selection.max_retries", "abc"])
        assert result.exit_code == 1
        assert "Invalid integer" in result.output

    def test_config_set_missing_args(self):
        result = runner.invoke(app, ["config", "set"])
        assert result.exit_code == 1

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output
