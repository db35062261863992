"""Shared fixtures: an isolated conductor source tree."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from conductor.config.schema import BuildLayout, ConductorConfig

COMMANDS = {
    "setup": {"source_file": "setup.md", "description": "Scaffold project"},
    "newTrack": {"source_file": "newTrack.md", "description": "Plan a track"},
    "status": {"description": "Show project status"},
}

PROMPTS = {
    "setup.md": "Use __EDITOR_HINT__ and __IGNORE_FILE__\n",
    "newTrack.md": (
        "Create a track for: __USER_ARGS__\n"
        "Read __TEMPLATE_PATH__/workflow.md first.\n\n\n"
    ),
    "status.md": "# Status\n\nSummarise progress.",
}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep the user's global config and environment out of every test."""
    monkeypatch.delenv("CONDUCTOR_DIST_DIR", raising=False)
    monkeypatch.delenv("CONDUCTOR_ROOT", raising=False)
    home_config = tmp_path / "home" / ".conductor" / "config.yaml"
    with patch("conductor.config.loader.get_home_config_path", return_value=home_config):
        yield home_config


def write_source_tree(
    root: Path,
    commands: dict[str, dict[str, str]] | None = None,
    prompts: dict[str, str] | None = None,
) -> None:
    """Create a minimal source tree under root using the default layout."""
    prompts_dir = root / "src" / "prompts"
    prompts_dir.mkdir(parents=True)
    for name, content in (PROMPTS if prompts is None else prompts).items():
        (prompts_dir / name).write_text(content, encoding="utf-8")

    metadata = root / "src" / "metadata" / "commands.json"
    metadata.parent.mkdir(parents=True)
    metadata.write_text(json.dumps(COMMANDS if commands is None else commands))

    context = root / "src" / "context" / "file-resolution.md"
    context.parent.mkdir(parents=True)
    context.write_text("# File resolution\n")

    templates = root / "templates"
    (templates / "code_styleguides").mkdir(parents=True)
    (templates / "workflow.md").write_text("# Workflow\n")
    (templates / "code_styleguides" / "python.md").write_text("# Python\n")

    gemini = root / "platforms" / "gemini"
    gemini.mkdir(parents=True)
    (gemini / "gemini-extension.json").write_text(
        '{"name": "conductor", "version": "0.2.0"}\n'
    )
    claude = root / "platforms" / "claude"
    claude.mkdir(parents=True)
    (claude / "plugin.json").write_text('{"name": "conductor", "version": "0.2.0"}\n')


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project root populated with a complete source tree."""
    root = tmp_path / "project"
    write_source_tree(root)
    return root


@pytest.fixture
def layout(project_root: Path) -> BuildLayout:
    """Build layout resolved from the default configuration."""
    return ConductorConfig().resolve(project_root)
