import argparse

import pytest
from PySide6.QtCore import QSettings

from core.history_settings import HistorySettings
from main import main, parse_step


class TestParseStep:
    def test_commands(self):
        assert parse_step("back") == ("back", "")
        assert parse_step("forward") == ("forward", "")
        assert parse_step("clear") == ("clear", "")

    def test_prunes(self):
        assert parse_step("rm-file:/notes/a.md") == ("rm-file", "/notes/a.md")
        assert parse_step("rm-folder:/notes") == ("rm-folder", "/notes")

    def test_location(self):
        assert parse_step("/editor?file=/a.md") == ("visit", "/editor?file=/a.md")

    def test_missing_prune_path(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_step("rm-file:")

    def test_relative_location(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_step("editor")


@pytest.fixture
def settings(tmp_path):
    """History settings backed by a throwaway INI file."""
    return HistorySettings(QSettings(str(tmp_path / "navigation.ini"), QSettings.Format.IniFormat))


def test_replay_session(capsys, settings):
    code = main(["--max-size", "3", "/a", "/b", "/c", "/d", "back", "/e"], settings=settings)

    out = capsys.readouterr().out
    assert code == 0
    assert "→ [2] /e" in out
    assert "[0] /b" in out
    assert "[1] /c" in out
    assert "] /d" not in out
    assert "back: True  forward: False" in out


def test_prune_session(capsys, settings):
    main(["/editor?file=/a.md", "/editor?file=/b.md", "back", "rm-file:/a.md"], settings=settings)

    out = capsys.readouterr().out
    assert "→ [0] /" in out
    assert "[1] /editor?file=/b.md" in out
    assert "back: False  forward: True" in out


def test_stored_max_size_applies(capsys, settings):
    settings.set_max_size(2)

    main(["/a", "/b", "/c"], settings=settings)

    out = capsys.readouterr().out
    assert "[0] /b" in out
    assert "→ [1] /c" in out
    assert "] /a" not in out


def test_max_size_override_is_not_persisted(capsys, settings):
    main(["--max-size", "2", "/a"], settings=settings)

    assert settings.max_size() == 30


def test_rejects_non_positive_max_size(capsys, settings):
    assert main(["--max-size", "0", "/a"], settings=settings) == 2
