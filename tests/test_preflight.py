"""Tests for preflight checks."""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from conductor.cli import main
from conductor.config.preflight import (
    check_metadata,
    check_output_dir,
    check_sources,
    run_all_checks,
)
from conductor.config.schema import BuildLayout, ConductorConfig
from conftest import write_source_tree


def test_preflight_help() -> None:
    """Test that the preflight command exists and has help."""
    runner = CliRunner()
    result = runner.invoke(main, ["preflight", "--help"])
    assert result.exit_code == 0
    assert "Validate the source tree" in result.output


def test_complete_source_tree_passes(layout: BuildLayout) -> None:
    with patch("conductor.platforms.base.shutil.which", return_value=None):
        assert run_all_checks(layout) is True


def test_missing_prompt_is_only_a_warning(layout: BuildLayout) -> None:
    (layout.prompts_dir / "setup.md").unlink()
    assert check_metadata(layout) is True


def test_missing_metadata_fails(layout: BuildLayout) -> None:
    layout.metadata_file.unlink()
    assert check_metadata(layout) is False


def test_malformed_metadata_fails(layout: BuildLayout) -> None:
    layout.metadata_file.write_text("[")
    assert check_metadata(layout) is False


def test_missing_manifest_fails(layout: BuildLayout) -> None:
    (layout.platforms_dir / "gemini" / "gemini-extension.json").unlink()
    assert check_sources(layout) is False


def test_preflight_command_fails_on_empty_root(tmp_path: Path) -> None:
    runner = CliRunner()
    with patch("conductor.platforms.base.shutil.which", return_value=None):
        result = runner.invoke(main, ["--root", str(tmp_path), "preflight"])
    assert result.exit_code == 1
    assert "Some preflight checks failed" in result.output


def test_output_dir_check(layout: BuildLayout) -> None:
    assert check_output_dir(layout) is True


def test_output_dir_over_sources_fails(project_root: Path) -> None:
    layout = ConductorConfig(dist_dir="src").resolve(project_root)
    assert check_output_dir(layout) is False


def test_command_name_with_markup_is_reported(tmp_path: Path) -> None:
    root = tmp_path / "proj[/draft]"
    write_source_tree(root, commands={"gone[/y]": {"description": "Missing"}})
    layout = ConductorConfig().resolve(root)

    assert check_metadata(layout) is True
    assert check_sources(layout) is True
