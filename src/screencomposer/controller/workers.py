"""
Background Workers (Threading)
==============================
This module contains the QThread used to read template backgrounds.

Why is this file needed?
------------------------
1. Responsiveness: Decoding a large template JPEG on the main thread stalls
   typing in the input fields. The worker reads it in the background.
2. Signals: The outcome is delivered back to the GUI thread through a Qt Signal,
   carrying either the decoded image or the failure reason.

Classes:
    TemplateLoadError: Raised when a background cannot be read.
    LoadResult: Loaded(image) | Failed(reason).
    BackgroundLoadWorker: Reads one background file off the GUI thread.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QThread, Signal
from PySide6.QtGui import QImage, QImageReader

from screencomposer.model.templates import Mode

logger = logging.getLogger(__name__)


class TemplateLoadError(Exception):
    """The background image for a template is missing or unreadable."""


@dataclass
class LoadResult:
    mode: Mode
    path: str
    image: Optional[QImage] = None
    reason: Optional[str] = None
    request_id: int = 0

    @property
    def ok(self) -> bool:
        return self.image is not None

    @property
    def dimensions(self) -> tuple[int, int]:
        if self.image is None:
            return 0, 0
        return self.image.width(), self.image.height()


def read_background(path: str) -> QImage:
    """Decode the image at `path`, raising TemplateLoadError if that is not possible."""
    if not os.path.isfile(path):
        raise TemplateLoadError(f"Template image not found: {path}")

    reader = QImageReader(path)
    reader.setAutoTransform(True)
    image = reader.read()
    if image.isNull():
        raise TemplateLoadError(f"Cannot decode template image '{path}': {reader.errorString()}")
    return image


def load_background(mode: Mode, path: str, request_id: int = 0) -> LoadResult:
    """Read a background and wrap the outcome, never raising."""
    try:
        image = read_background(path)
    except TemplateLoadError as e:
        logger.error(f"Failed to load base image for {mode} mode: {e}")
        return LoadResult(mode=mode, path=path, reason=str(e), request_id=request_id)

    logger.info(f"Loaded {mode} template {os.path.basename(path)} ({image.width()}x{image.height()})")
    return LoadResult(mode=mode, path=path, image=image, request_id=request_id)


class BackgroundLoadWorker(QThread):
    # Emits a LoadResult; delivered queued to the receiver's (GUI) thread
    load_finished = Signal(object)

    def __init__(self, mode: Mode, path: str, request_id: int) -> None:
        super().__init__()
        self.mode = mode
        self.path = path
        self.request_id = request_id

    def run(self) -> None:
        logger.debug(f"Reading {self.path} in background thread (request {self.request_id})...")
        self.load_finished.emit(load_background(self.mode, self.path, self.request_id))
