"""
Logging Configuration
Sets up the 'screencomposer' logger and routes Qt's own diagnostics into it.

Font substitutions and image-plugin complaints from Qt otherwise go straight to
stderr; here they land in the same handlers as the application messages, under
'screencomposer.qt'.
"""
import logging
import os
import sys
from typing import Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

LOGGER_NAME = "screencomposer"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def level_for(debug: bool) -> int:
    """Level selected by the --debug launch flag."""
    return logging.DEBUG if debug else logging.INFO


def _qt_message_handler(msg_type, context, message: str) -> None:
    qt_logger = logging.getLogger(f"{LOGGER_NAME}.qt")
    level = _QT_LEVELS.get(msg_type, logging.WARNING)
    if context is not None and context.category and context.category != "default":
        message = f"[{context.category}] {message}"
    qt_logger.log(level, message)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    capture_qt: bool = True,
) -> logging.Logger:
    """
    Configures the 'screencomposer' namespace logger and returns it.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to; missing parent directories are created.
        capture_qt: Install a Qt message handler that forwards to 'screencomposer.qt'.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # setup_logging may run more than once per process (tests, relaunch)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        directory = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if capture_qt:
        qInstallMessageHandler(_qt_message_handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}" + (f", file: {log_file}" if log_file else ""))
    return logger
