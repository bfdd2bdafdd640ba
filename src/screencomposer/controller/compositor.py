"""
Compositor
==========
Paints laid-out text onto a copy of the background and encodes the result.

The composite is always regenerated from scratch: background first, then
every draw instruction of the active template. Nothing is updated in place.
"""
from __future__ import annotations

import base64
import logging
from typing import Iterable, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QRectF, Qt
from PySide6.QtGui import QColor, QFontMetricsF, QImage, QPainter

from screencomposer.controller.layout import DrawInstruction, build_font
from screencomposer.model.templates import Align

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def compose(background: QImage, instructions: Iterable[DrawInstruction]) -> QImage:
    """Return a new image: `background` with every instruction painted on top."""
    image = background.convertToFormat(QImage.Format.Format_ARGB32)

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        for instruction in instructions:
            _draw_text(painter, instruction)
    finally:
        painter.end()

    return image


def _draw_text(painter: QPainter, instruction: DrawInstruction) -> None:
    font = build_font(instruction.style)
    painter.setFont(font)
    painter.setPen(QColor(instruction.style.color_hex))

    # Box of one line height centred on the anchor y ("middle" baseline)
    height = QFontMetricsF(font).height()
    rect = QRectF(instruction.left_edge, instruction.y - height / 2, instruction.width, height)

    h_flag = Qt.AlignmentFlag.AlignHCenter if instruction.align == Align.CENTER else Qt.AlignmentFlag.AlignLeft
    flags = (
        (h_flag | Qt.AlignmentFlag.AlignVCenter).value
        | Qt.TextFlag.TextDontClip.value
        | Qt.TextFlag.TextSingleLine.value
    )
    painter.drawText(rect, flags, instruction.text)


def encode_png(image: QImage) -> bytes:
    """Encode `image` as PNG bytes."""
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    try:
        if not image.save(buffer, "PNG"):
            raise RuntimeError("Qt failed to encode the composite as PNG.")
    finally:
        buffer.close()
    return bytes(data.data())


def png_data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def composite_to_array(image: QImage) -> npt.NDArray[np.uint8]:
    """Copy the pixels of `image` into a (height, width, 4) RGBA array."""
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width, height = rgba.width(), rgba.height()
    raw = np.frombuffer(rgba.constBits(), dtype=np.uint8, count=rgba.sizeInBytes())
    # Rows may be padded; bytesPerLine is the real stride
    rows = raw.reshape(height, rgba.bytesPerLine())
    return rows[:, :width * 4].reshape(height, width, 4).copy()
