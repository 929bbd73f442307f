"""Shared test fixtures for yara-highlight."""

import pytest

from yara_highlight.scanner import YaraScanner


@pytest.fixture
def scanner():
    """Create a YaraScanner with the built-in catalogue."""
    return YaraScanner()


@pytest.fixture
def labelled(scanner):
    """Scan text and return ``(category value, covered text)`` pairs in order."""

    def _labelled(text):
        return [(s.category.value, s.text_in(text)) for s in scanner.scan(text)]

    return _labelled


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point user and project config lookups at an empty temporary tree."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    return home, project
