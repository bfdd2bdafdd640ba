import logging

import pytest
from PySide6.QtCore import QtMsgType, qInstallMessageHandler

from screencomposer.config import MEDIA_PATH
from screencomposer.logging_config import _qt_message_handler, level_for, setup_logging
from screencomposer.main import parse_args


@pytest.fixture
def package_logger():
    logger = logging.getLogger("screencomposer")
    yield logger
    qInstallMessageHandler(None)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_parse_args_defaults():
    args, qt_args = parse_args([])
    assert not args.single_mode
    assert not args.debug
    assert args.media_dir == MEDIA_PATH
    assert qt_args == []


def test_parse_args_passes_qt_options_through():
    args, qt_args = parse_args(["--single-mode", "-platform", "offscreen"])
    assert args.single_mode
    assert qt_args == ["-platform", "offscreen"]


def test_debug_flag_selects_level():
    assert level_for(parse_args(["--debug"])[0].debug) == logging.DEBUG
    assert level_for(parse_args([])[0].debug) == logging.INFO


def test_setup_logging_with_file(tmp_path, package_logger):
    log_file = tmp_path / "logs" / "app.log"
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))

    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    logging.getLogger("screencomposer.model").debug("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_setup_logging_twice_keeps_one_console_handler(package_logger):
    setup_logging(capture_qt=False)
    setup_logging(capture_qt=False)
    assert len(package_logger.handlers) == 1


def test_qt_messages_go_to_package_logger(tmp_path, package_logger):
    log_file = tmp_path / "qt.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))

    _qt_message_handler(QtMsgType.QtWarningMsg, None, "font substituted")
    for handler in package_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "screencomposer.qt - WARNING - font substituted" in text
