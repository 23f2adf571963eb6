import logging

import pytest
from rich.logging import RichHandler

from clippy.utils import setup_logging, split_arguments, wrap_text


def test_split_arguments():
    assert split_arguments("-tf -k hello --thing=that") == ["-tf", "-k", "hello", "--thing", "that"]
    assert split_arguments("  a   b ") == ["a", "b"]
    assert split_arguments("") == []


def test_wrap_text():
    assert wrap_text("", 10, 4, 2) == [""]
    assert wrap_text("short", 10, 4, 2) == ["short"]
    assert wrap_text("aaa bbb ccc", 7, 1, 1) == ["aaa bbb", "  ccc"]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()
    root.setLevel(level)


def test_setup_logging_cli(restore_root_logger):
    setup_logging(mode="cli")
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)


def test_setup_logging_json_with_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "clippy.log"
    setup_logging(mode="json", log_filename=str(log_file), json_log_to_file=True)
    assert len(restore_root_logger.handlers) == 2
    logging.getLogger("clippy").debug("written")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "written" in log_file.read_text()


def test_setup_logging_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv("CLIPPY_LOG_MODE", "cli")
    setup_logging()
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)


def test_setup_logging_invalid_mode(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging(mode="xml")
