"""Tests for the Claude Code and GitHub Copilot installers."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from conductor.builder import build_all
from conductor.config.schema import BuildLayout
from conductor.installers import (
    CONDUCTOR_SKILLS,
    ClaudePluginCLI,
    InstallError,
    MissingOutputTreeError,
    RegistrationError,
    install_claude,
    install_copilot,
)
from conductor.installers.claude import (
    MARKETPLACE_NAME,
    PLUGIN_REF,
    build_marketplace_descriptor,
    read_plugin_version,
    write_marketplace,
)


@pytest.fixture
def built(layout: BuildLayout) -> BuildLayout:
    """Layout whose output tree has been generated."""
    build_all(layout)
    return layout


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for host CLI commands."""
    with patch("conductor.installers.claude.subprocess") as mock:
        yield mock


class TestClaudePluginCLI:
    """Tests for the claude CLI wrapper."""

    def test_remove_marketplace_ignores_failure(self, mock_subprocess) -> None:
        mock_subprocess.run.return_value = MagicMock(returncode=1, stderr="not found")

        assert ClaudePluginCLI().remove_marketplace("conductor-local") is False
        args = mock_subprocess.run.call_args[0][0]
        assert args == ["claude", "plugin", "marketplace", "remove", "conductor-local"]

    def test_uninstall_ignores_missing_cli(self, mock_subprocess) -> None:
        mock_subprocess.run.side_effect = FileNotFoundError("claude")
        assert ClaudePluginCLI().uninstall_plugin(PLUGIN_REF) is False

    def test_uninstall_success(self, mock_subprocess) -> None:
        mock_subprocess.run.return_value = MagicMock(returncode=0)
        assert ClaudePluginCLI().uninstall_plugin(PLUGIN_REF) is True

    def test_add_marketplace_failure_raises(self, mock_subprocess) -> None:
        mock_subprocess.run.return_value = MagicMock(
            returncode=1, stderr="invalid marketplace", stdout=""
        )
        with pytest.raises(RegistrationError, match="invalid marketplace"):
            ClaudePluginCLI().add_marketplace(Path("/tmp/market"))

    def test_install_missing_cli_raises(self, mock_subprocess) -> None:
        mock_subprocess.run.side_effect = FileNotFoundError("claude")
        with pytest.raises(RegistrationError, match="not found"):
            ClaudePluginCLI("claude-dev").install_plugin(PLUGIN_REF)

    def test_custom_command(self, mock_subprocess) -> None:
        mock_subprocess.run.return_value = MagicMock(returncode=0)
        ClaudePluginCLI("claude-dev").install_plugin(PLUGIN_REF)
        args = mock_subprocess.run.call_args[0][0]
        assert args == ["claude-dev", "plugin", "install", "conductor@conductor-local"]


class TestClaudeMarketplace:
    """Tests for the local marketplace descriptor."""

    def test_read_plugin_version(self, built: BuildLayout) -> None:
        assert read_plugin_version(built.dist_dir / "claude") == "0.2.0"

    def test_read_plugin_version_without_version(self, tmp_path: Path) -> None:
        manifest = tmp_path / ".claude-plugin" / "plugin.json"
        manifest.parent.mkdir()
        manifest.write_text('{"name": "conductor"}')
        with pytest.raises(InstallError, match="no version"):
            read_plugin_version(tmp_path)

    def test_read_plugin_version_malformed(self, tmp_path: Path) -> None:
        manifest = tmp_path / ".claude-plugin" / "plugin.json"
        manifest.parent.mkdir()
        manifest.write_text("{")
        with pytest.raises(InstallError):
            read_plugin_version(tmp_path)

    def test_descriptor(self) -> None:
        descriptor = build_marketplace_descriptor("1.2.3")
        assert descriptor["name"] == MARKETPLACE_NAME
        (plugin,) = descriptor["plugins"]
        assert plugin["name"] == "conductor"
        assert plugin["version"] == "1.2.3"
        assert plugin["source"] == "./plugins/conductor"

    def test_write_marketplace_links_plugin(self, tmp_path: Path) -> None:
        plugin_dir = tmp_path / "dist" / "claude"
        plugin_dir.mkdir(parents=True)
        marketplace = tmp_path / "dist" / "claude-marketplace"

        descriptor = write_marketplace(marketplace, plugin_dir, "1.0.0")
        # Rewriting replaces the existing link
        write_marketplace(marketplace, plugin_dir, "1.0.1")

        data = json.loads(descriptor.read_text())
        assert data["plugins"][0]["version"] == "1.0.1"
        link = marketplace / "plugins" / "conductor"
        assert link.is_symlink()
        assert link.resolve() == plugin_dir.resolve()


class TestInstallClaude:
    """Tests for the full Claude Code install flow."""

    def test_missing_output_tree(self, layout: BuildLayout) -> None:
        with pytest.raises(MissingOutputTreeError, match="conductor build"):
            install_claude(layout, cli=MagicMock())

    def test_install_sequence(self, built: BuildLayout) -> None:
        cli = MagicMock()
        cli.remove_marketplace.return_value = False
        cli.uninstall_plugin.return_value = False

        result = install_claude(built, cli=cli)

        assert result.version == "0.2.0"
        assert result.marketplace_dir == built.dist_dir / "claude-marketplace"
        assert (
            result.marketplace_dir / ".claude-plugin" / "marketplace.json"
        ).is_file()
        cli.remove_marketplace.assert_called_once_with(MARKETPLACE_NAME)
        cli.uninstall_plugin.assert_called_once_with(PLUGIN_REF)
        cli.add_marketplace.assert_called_once_with(result.marketplace_dir)
        cli.install_plugin.assert_called_once_with(PLUGIN_REF)

    def test_install_runs_host_commands_in_order(
        self, built: BuildLayout, mock_subprocess
    ) -> None:
        mock_subprocess.run.side_effect = [
            MagicMock(returncode=1),  # marketplace remove (nothing registered)
            MagicMock(returncode=1),  # uninstall (nothing installed)
            MagicMock(returncode=0),  # marketplace add
            MagicMock(returncode=0),  # install
        ]

        install_claude(built)

        calls = [c[0][0][2:] for c in mock_subprocess.run.call_args_list]
        marketplace_dir = str(built.dist_dir / "claude-marketplace")
        assert calls == [
            ["marketplace", "remove", "conductor-local"],
            ["uninstall", "conductor@conductor-local"],
            ["marketplace", "add", marketplace_dir],
            ["install", "conductor@conductor-local"],
        ]

    def test_registration_failure_propagates(self, built: BuildLayout) -> None:
        cli = MagicMock()
        cli.add_marketplace.side_effect = RegistrationError("boom")

        with pytest.raises(RegistrationError):
            install_claude(built, cli=cli)
        cli.install_plugin.assert_not_called()


class TestInstallCopilot:
    """Tests for the GitHub Copilot installer."""

    def test_missing_output_tree(self, layout: BuildLayout, tmp_path: Path) -> None:
        with pytest.raises(MissingOutputTreeError, match="copilot"):
            install_copilot(layout, tmp_path)

    def test_missing_target(self, built: BuildLayout, tmp_path: Path) -> None:
        with pytest.raises(InstallError, match="does not exist"):
            install_copilot(built, tmp_path / "nope")

    def test_target_path_with_markup_characters(
        self, built: BuildLayout, tmp_path: Path
    ) -> None:
        target = tmp_path / "proj[/draft]"
        target.mkdir()

        result = install_copilot(built, target)

        assert result.target == target.resolve()
        assert (target / ".github" / "skills" / "setup" / "SKILL.md").is_file()

    def test_defaults_to_current_directory(
        self, built: BuildLayout, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "app"
        (target / "templates").mkdir(parents=True)
        (target / "templates" / "mine.md").write_text("keep me")
        monkeypatch.chdir(target)

        result = install_copilot(built)

        skills = target / ".github" / "skills"
        assert result.target == target.resolve()
        assert result.updated is False
        assert result.skills == ("newTrack", "setup", "status")
        for name in ("setup", "newTrack", "status"):
            assert (skills / name / "SKILL.md").is_file()
        assert (target / "COPILOT.md").is_file()
        assert result.templates_installed is False
        assert (target / "templates" / "mine.md").read_text() == "keep me"
        assert not (target / "templates" / "workflow.md").exists()

    def test_installs_templates_when_absent(
        self, built: BuildLayout, tmp_path: Path
    ) -> None:
        result = install_copilot(built, tmp_path)

        assert result.templates_installed is True
        assert (tmp_path / "templates" / "workflow.md").is_file()

    def test_reinstall_replaces_known_skills_only(
        self, built: BuildLayout, tmp_path: Path
    ) -> None:
        skills = tmp_path / ".github" / "skills"
        for name in ("revert", "custom"):
            (skills / name).mkdir(parents=True)
            (skills / name / "SKILL.md").write_text("old")

        result = install_copilot(built, tmp_path)

        assert result.updated is True
        assert "revert" in CONDUCTOR_SKILLS
        assert not (skills / "revert").exists()
        assert (skills / "custom" / "SKILL.md").read_text() == "old"
        assert (skills / "setup" / "SKILL.md").read_text().startswith("---\n")
