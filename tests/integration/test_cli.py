"""CLI tests using Typer's test runner."""

import json
from pathlib import Path

from typer.testing import CliRunner

from graffix.cli.app import app

runner = CliRunner()


class TestRenderCommand:
    """Tests for the render command."""

    def test_render(self, asset_dir: Path, tmp_path: Path) -> None:
        """Test rendering writes the output document."""
        output = tmp_path / "tag.svg"
        result = runner.invoke(
            app, ["render", "hello", "--assets", str(asset_dir), "-o", str(output), "-q"]
        )
        assert result.exit_code == 0, result.output
        assert output.exists()
        assert "layer-content" in output.read_text(encoding="utf-8")

    def test_render_verbose(self, asset_dir: Path, tmp_path: Path) -> None:
        """Test verbose output lists the glyphs."""
        result = runner.invoke(
            app,
            [
                "render",
                "oo",
                "--assets",
                str(asset_dir),
                "-o",
                str(tmp_path / "oo.svg"),
                "--halo",
                "--verbose",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "o:alternate" in result.output
        assert "Complete" in result.output

    def test_style_file(self, asset_dir: Path, tmp_path: Path) -> None:
        """Test a camelCase style file is applied, with CLI overrides on top."""
        style_file = tmp_path / "style.json"
        style_file.write_text(
            json.dumps({"backgroundEnabled": True, "backgroundColor": "#abcdef", "fillColor": "#111111"}),
            encoding="utf-8",
        )
        output = tmp_path / "styled.svg"
        result = runner.invoke(
            app,
            [
                "render",
                "ab",
                "--assets",
                str(asset_dir),
                "-o",
                str(output),
                "--style-file",
                str(style_file),
                "--fill-color",
                "#333333",
                "-q",
            ],
        )
        assert result.exit_code == 0, result.output
        text = output.read_text(encoding="utf-8")
        assert "#abcdef" in text
        assert "#333333" in text

    def test_invalid_style_file(self, asset_dir: Path, tmp_path: Path) -> None:
        """Test an invalid style file is a usage error."""
        style_file = tmp_path / "style.json"
        style_file.write_text('{"outlineWidth": -5}', encoding="utf-8")
        result = runner.invoke(
            app, ["render", "a", "--assets", str(asset_dir), "--style-file", str(style_file)]
        )
        assert result.exit_code != 0

    def test_missing_assets(self, tmp_path: Path) -> None:
        """Test a missing asset directory fails."""
        result = runner.invoke(app, ["render", "a", "--assets", str(tmp_path / "none")])
        assert result.exit_code == 1

    def test_unknown_character(self, asset_dir: Path, tmp_path: Path) -> None:
        """Test a character without an asset fails without writing output."""
        output = tmp_path / "bad.svg"
        result = runner.invoke(
            app, ["render", "a#", "--assets", str(asset_dir), "-o", str(output)]
        )
        assert result.exit_code == 1
        assert not output.exists()

    def test_verbose_and_quiet(self, asset_dir: Path) -> None:
        """Test conflicting verbosity flags are rejected."""
        result = runner.invoke(app, ["render", "a", "--assets", str(asset_dir), "-v", "-q"])
        assert result.exit_code == 1


class TestAssetsCommand:
    """Tests for the assets command."""

    def test_list(self, asset_dir: Path) -> None:
        """Test listing letters and their variants."""
        result = runner.invoke(app, ["assets", str(asset_dir)])
        assert result.exit_code == 0, result.output
        assert "26 letters" in result.output
        assert "alternate" in result.output

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test listing a missing directory fails."""
        result = runner.invoke(app, ["assets", str(tmp_path / "none")])
        assert result.exit_code == 1


def test_version() -> None:
    """Test the version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "Graffix" in result.output
