"""Shared fixtures for texlate tests."""
import io
import json

import pytest
from rich.console import Console

from texlate.answers import AnswerStore
from texlate.config import ConfigManager
from texlate.rich_ui import Prompter, Theme


@pytest.fixture
def console():
    """A themed console that records output instead of writing to a terminal."""
    return Console(file=io.StringIO(), theme=Theme().to_rich_theme(), width=120)


@pytest.fixture
def make_prompter(console):
    """Build a Prompter that reads the given lines as the user's answers."""
    def _make(store: AnswerStore, *lines: str) -> Prompter:
        stream = io.StringIO("".join(f"{line}\n" for line in lines))
        return Prompter(store, console=console, stream=stream)
    return _make


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point texlate at an empty config file and clear the cached config."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({}), encoding="utf-8")
    monkeypatch.setenv("TEXLATE_CONFIG", str(path))
    for name in ("TEXLATE_RENDERER", "TEXLATE_RENDER_PASSES", "TEXLATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    ConfigManager.reset()
    yield path
    ConfigManager.reset()


@pytest.fixture
def write_template(tmp_path):
    """Write a template file under tmp_path and return its path."""
    def _write(content: str, name: str = "letter.tex.tmpl"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
