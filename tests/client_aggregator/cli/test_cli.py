"""CLI tests for the client-aggregator commands."""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from client_aggregator.__main__ import app
from client_aggregator.cli import CLIError
from client_aggregator.cli.commands import load_config
from client_aggregator.errors import ConfigurationError
from client_aggregator.models import SourceUnit
from client_aggregator.pipeline import generate_aggregator

runner = CliRunner()


@pytest.fixture
def client_files(
    tmp_path: Path, foo_unit: SourceUnit, bar_unit: SourceUnit
) -> list[Path]:
    """Write the Foo and Bar client sources to disk."""
    paths: list[Path] = []
    for unit in (foo_unit, bar_unit):
        path = tmp_path / Path(unit.file_path).name
        path.write_text(unit.source_text, encoding="utf-8")
        paths.append(path)
    return paths


class TestGenerateCommand:
    """Tests for 'client-aggregator generate'."""

    def test_prints_aggregate_to_stdout(self, client_files: list[Path]) -> None:
        """Test that the generated source is written to stdout."""
        result = runner.invoke(
            app,
            ["generate", *map(str, client_files), "--log-level", "ERROR"],
        )

        assert result.exit_code == 0, result.output
        assert "@foo_client = ::Line::Bot::V2::Foo::ApiClient.new(" in result.stdout
        assert "            @bar_client.send(msg:)\n" in result.stdout
        assert result.stdout.endswith("end\n")

    def test_writes_output_file(self, client_files: list[Path], tmp_path: Path) -> None:
        """Test that --output writes exactly the pipeline result."""
        output = tmp_path / "out" / "all_in_one.rb"
        units = [
            SourceUnit(file_path=str(p), source_text=p.read_text(encoding="utf-8"))
            for p in client_files
        ]

        result = runner.invoke(
            app,
            ["generate", *map(str, client_files), "-o", str(output), "--log-level", "ERROR"],
        )

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == generate_aggregator(units)

    def test_uses_config_file(self, client_files: list[Path], tmp_path: Path) -> None:
        """Test that module path, class name and files come from --config."""
        config_file = tmp_path / "aggregator.yaml"
        config_file.write_text(
            yaml.safe_dump(
                {
                    "module_path": ["Line", "Bot", "V2", "Everything"],
                    "class_name": "Client",
                    "files": [p.name for p in client_files],
                }
            )
        )

        result = runner.invoke(
            app, ["generate", "--config", str(config_file), "--log-level", "ERROR"]
        )

        assert result.exit_code == 0, result.output
        assert "      module Everything\n        class Client\n" in result.stdout
        assert "@bar_client = " in result.stdout

    def test_missing_configured_file_fails(self, tmp_path: Path) -> None:
        """Test that an unreadable source file exits with an error panel."""
        config_file = tmp_path / "aggregator.yaml"
        config_file.write_text("files: [missing_client.rb]\n")

        result = runner.invoke(
            app, ["generate", "--config", str(config_file), "--log-level", "CRITICAL"]
        )

        assert result.exit_code == 1
        assert "Aggregator generation failed" in result.output

    def test_strict_identifiers_flag(self, tmp_path: Path, foo_unit: SourceUnit) -> None:
        """Test that --strict-identifiers rejects case-only submodule differences."""
        upper = tmp_path / "upper.rb"
        upper.write_text(foo_unit.source_text, encoding="utf-8")
        lower = tmp_path / "lower.rb"
        lower.write_text(
            foo_unit.source_text.replace("module Foo", "module FOO"), encoding="utf-8"
        )

        lenient = runner.invoke(
            app, ["generate", str(upper), str(lower), "--log-level", "CRITICAL"]
        )
        strict = runner.invoke(
            app,
            ["generate", str(upper), str(lower), "--strict-identifiers", "--log-level", "CRITICAL"],
        )

        assert lenient.exit_code == 0
        assert strict.exit_code == 1
        assert "Aggregator generation failed" in strict.output

    def test_nonexistent_argument_is_rejected(self, tmp_path: Path) -> None:
        """Test that typer validates positional files."""
        result = runner.invoke(app, ["generate", str(tmp_path / "nope.rb")])

        assert result.exit_code == 2


class TestExtractCommand:
    """Tests for 'client-aggregator extract'."""

    def test_prints_extraction_json(self, client_files: list[Path]) -> None:
        """Test that extraction results are dumped as JSON."""
        result = runner.invoke(
            app, ["extract", *map(str, client_files), "--log-level", "ERROR"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["class_name"] == "ApiClient"
        assert [r["submodule_name"] for r in payload["results"]] == ["Foo", "Bar"]
        send = payload["results"][1]["methods"][0]
        assert send["name"] == "send"
        assert send["parameter_list"] == "msg:"
        assert send["doc_lines"] == [
            "          # Sends a message.",
            "          # @param msg [String] message text",
        ]

    def test_strict_mode_does_not_block_inspection(
        self, tmp_path: Path, foo_unit: SourceUnit
    ) -> None:
        """Test that colliding submodules are still dumped in strict mode."""
        upper = tmp_path / "upper.rb"
        upper.write_text(foo_unit.source_text, encoding="utf-8")
        lower = tmp_path / "lower.rb"
        lower.write_text(
            foo_unit.source_text.replace("module Foo", "module FOO"), encoding="utf-8"
        )
        config_file = tmp_path / "aggregator.yaml"
        config_file.write_text(
            yaml.safe_dump({"files": ["upper.rb", "lower.rb"], "strict_identifiers": True})
        )

        result = runner.invoke(
            app, ["extract", "--config", str(config_file), "--log-level", "CRITICAL"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert [r["submodule_name"] for r in payload["results"]] == ["Foo", "FOO"]


class TestShowConfigCommand:
    """Tests for 'client-aggregator show-config'."""

    def test_prints_default_config(self) -> None:
        """Test that the default configuration is printed as YAML."""
        result = runner.invoke(app, ["show-config", "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        config = yaml.safe_load(result.stdout)
        assert config["module_path"] == ["Line", "Bot", "V2", "AllInOne"]
        assert config["class_name"] == "ApiClient"

    def test_invalid_config_fails(self, tmp_path: Path) -> None:
        """Test that validation errors exit with an error panel."""
        config_file = tmp_path / "aggregator.yaml"
        config_file.write_text("class_name: lowercase\n")

        result = runner.invoke(
            app, ["show-config", "--config", str(config_file), "--log-level", "CRITICAL"]
        )

        assert result.exit_code == 1
        assert "Configuration loading failed" in result.output
        assert "CLI command 'show-config' failed" in result.output


class TestLoadConfig:
    """Tests for configuration loading inside CLI commands."""

    def test_defaults_without_config_file(self, tmp_path: Path) -> None:
        """Test that overrides apply on top of the defaults."""
        source = tmp_path / "foo.rb"

        config = load_config("generate", None, files=[source], strict_identifiers=True)

        assert config.files == [source]
        assert config.strict_identifiers is True

    def test_invalid_config_raises_cli_error(self, tmp_path: Path) -> None:
        """Test that configuration errors carry the failing command."""
        config_file = tmp_path / "aggregator.yaml"
        config_file.write_text("class_name: lowercase\n")

        with pytest.raises(CLIError) as exc_info:
            load_config("extract", config_file)

        error = exc_info.value
        assert error.command == "extract"
        assert isinstance(error.original_error, ConfigurationError)
        assert str(error).startswith("CLI command 'extract' failed: ")
        assert "class_name" in str(error)

    def test_cli_error_without_command(self) -> None:
        """Test that the message is unchanged without command context."""
        assert str(CLIError("boom")) == "boom"
