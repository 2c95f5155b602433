import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from geomorph import create_app
from geomorph.logging_utils import get_logger
from geomorph.server import _configure_logging


def test_key_value_lines(monkeypatch, capsys):
    monkeypatch.setenv("GEOMORPH_LOG_LEVEL", "debug")
    monkeypatch.setenv("GEOMORPH_LOG_JSON", "0")
    get_logger("geomorph.test").info(event="room placed", rooms=3, skipped=None)
    err = capsys.readouterr().err.strip()
    assert err.startswith("level=info ts=")
    assert "event=room_placed" in err
    assert "rooms=3" in err
    assert "logger=geomorph.test" in err
    assert "skipped" not in err


def test_json_lines(monkeypatch, capsys):
    monkeypatch.setenv("GEOMORPH_LOG_LEVEL", "info")
    monkeypatch.setenv("GEOMORPH_LOG_JSON", "1")
    get_logger("geomorph.test").warn(event="dead_end_skipped", x=4)
    rec = json.loads(capsys.readouterr().err.strip())
    assert rec["level"] == "warn" and rec["event"] == "dead_end_skipped" and rec["x"] == 4


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setenv("GEOMORPH_LOG_LEVEL", "error")
    log = get_logger("geomorph.test")
    log.debug(event="hidden")
    log.info(event="hidden")
    assert capsys.readouterr().err == ""
    assert get_logger("geomorph.test") is log


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved[0]:
        root.addHandler(h)
    root.setLevel(saved[1])


def test_server_logging_writes_rotating_file(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.setenv("GEOMORPH_LOG_LEVEL", "info")
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    path = _configure_logging(app)
    assert path == str(tmp_path / "geomorph.log")
    root = restore_root_logging
    assert root.level == logging.INFO
    assert sum(isinstance(h, RotatingFileHandler) for h in root.handlers) == 1
    logging.getLogger("geomorph.test").info("hello file")
    for h in root.handlers:
        h.flush()
    assert "hello file" in (tmp_path / "geomorph.log").read_text(encoding="utf-8")


def test_server_logging_level_follows_env(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.setenv("GEOMORPH_LOG_LEVEL", "warn")
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    _configure_logging(app)
    _configure_logging(app)
    root = restore_root_logging
    assert root.level == logging.WARNING
    assert len(root.handlers) == 2
    logging.getLogger("geomorph.test").info("quiet")
    logging.getLogger("geomorph.test").warning("loud")
    for h in root.handlers:
        h.flush()
    text = (tmp_path / "geomorph.log").read_text(encoding="utf-8")
    assert "loud" in text and "quiet" not in text
