"""Tests for CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from staticpack.cli import cli
from staticpack.compress import decompress
from staticpack.config import Config
from staticpack.resolver import Mode


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config auto-discovery away from the real working directory."""
    monkeypatch.chdir(tmp_path)


class TestGenerateCommand:
    """Tests for the generate command."""

    def test__generates_artifact(self, site_dir: Path, tmp_path: Path) -> None:
        """Embed a directory given on the command line."""
        output = tmp_path / "assets_gen.py"

        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "-i", str(site_dir), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Embedded 4 assets" in result.output
        assert output.exists()

    def test__tag_is_written(self, site_dir: Path, tmp_path: Path) -> None:
        """The tag option annotates the artifact."""
        output = tmp_path / "assets_gen.py"

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["generate", "-i", str(site_dir), "-o", str(output), "-t", "release"],
        )

        assert result.exit_code == 0, result.output
        assert "Build tag: release" in result.output
        assert "# staticpack:tag release" in output.read_text(encoding="utf-8")

    def test__empty_tag__writes_untagged_artifact(self, site_dir: Path, tmp_path: Path) -> None:
        """An empty tag option is the same as no tag."""
        output = tmp_path / "assets_gen.py"

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["generate", "-i", str(site_dir), "-o", str(output), "-t", ""],
        )

        assert result.exit_code == 0, result.output
        assert "Build tag" not in result.output
        source = output.read_text(encoding="utf-8")
        assert "BUILD_TAG = None" in source
        assert "# staticpack:tag" not in source

    def test__uses_config(self, site_dir: Path, tmp_path: Path) -> None:
        """Input and output can come from the config file."""
        config_file = tmp_path / "staticpack.toml"
        config_file.write_text('[generate]\ninput = "site"\noutput = "gen.py"\nworkers = 2\n')

        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "gen.py").exists()

    def test__missing_input__prints_usage(self, tmp_path: Path) -> None:
        """Missing input aborts with usage text."""
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "-o", str(tmp_path / "out.py")])

        assert result.exit_code == 2
        assert "Usage:" in result.output
        assert "--input is required" in result.output

    def test__missing_output__prints_usage(self, site_dir: Path) -> None:
        """Missing output aborts with usage text."""
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "-i", str(site_dir)])

        assert result.exit_code == 2
        assert "--output is required" in result.output

    def test__missing_input_dir__fails(self, tmp_path: Path) -> None:
        """Generation errors exit with status 1."""
        output = tmp_path / "out.py"

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["generate", "-i", str(tmp_path / "missing"), "-o", str(output)],
        )

        assert result.exit_code == 1
        assert "Error: Input directory not found" in result.output
        assert not output.exists()

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        """Invalid configuration exits with status 1."""
        config_file = tmp_path / "staticpack.toml"
        config_file.write_text("[generate]\nworkers = 0\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "generate.workers must be a positive integer" in result.output


class TestServeCommand:
    """Tests for the serve command."""

    @pytest.fixture
    def captured(self, monkeypatch: pytest.MonkeyPatch) -> list[Config]:
        """Replace run_server with a recorder."""
        configs: list[Config] = []
        monkeypatch.setattr("staticpack.server.run_server", configs.append)
        return configs

    def test__dev_mode(self, site_dir: Path, captured: list[Config]) -> None:
        """--dev selects development mode with the base directory."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["serve", "--dev", "-b", str(site_dir), "-p", "4000"],
        )

        assert result.exit_code == 0, result.output
        assert "Development mode" in result.output
        config = captured[0]
        assert config.assets.mode is Mode.DEVELOPMENT
        assert config.assets.base_dir == site_dir
        assert config.server.port == 4000

    def test__compiled_mode_with_tags(self, captured: list[Config]) -> None:
        """--compiled passes the artifact and requested tags."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["serve", "--compiled", "-a", "webapp.assets_gen", "-t", "a", "-t", "b"],
        )

        assert result.exit_code == 0, result.output
        config = captured[0]
        assert config.assets.mode is Mode.COMPILED
        assert config.assets.artifact == "webapp.assets_gen"
        assert config.assets.tags == ["a", "b"]

    def test__artifact_error__fails(self, tmp_path: Path) -> None:
        """Unloadable artifacts exit with status 1 before serving."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["serve", "--compiled", "-a", str(tmp_path / "missing.py")],
        )

        assert result.exit_code == 1
        assert "Artifact file not found" in result.output


class TestEndToEnd:
    """Generate with the CLI, then resolve from the artifact."""

    def test__generated_artifact_resolves(self, site_dir: Path, tmp_path: Path) -> None:
        """The scenario from the command line to the resolver."""
        from staticpack.resolver import CompiledResolver

        output = tmp_path / "assets_gen.py"
        runner = CliRunner()
        runner.invoke(cli, ["generate", "-i", str(site_dir), "-o", str(output)])

        resolver = CompiledResolver.from_artifact(output)

        assert decompress(resolver.resolve("/app.js").payload) == b"B"
        assert decompress(resolver.resolve("/missing/route").payload) == b"A"
