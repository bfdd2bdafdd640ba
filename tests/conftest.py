"""Shared fixtures: an offscreen Qt application and generated template backgrounds."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import QApplication

from screencomposer.model.templates import TextStyle, TEMPLATES, Mode

DASHBOARD_COLOR = QColor(10, 10, 10)
LOGIN_COLOR = QColor(220, 230, 240)


class FixedAdvanceMeasurer:
    """Every character is `ratio * font size` wide, so layouts do not depend on installed fonts."""

    def __init__(self, ratio: float = 0.5) -> None:
        self.ratio = ratio

    def text_width(self, text: str, style: TextStyle) -> float:
        return len(text) * style.font_size_px * self.ratio


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def make_background(width: int, height: int, color: QColor) -> QImage:
    image = QImage(width, height, QImage.Format.Format_RGB32)
    image.fill(color)
    return image


@pytest.fixture
def media_dir(tmp_path, qapp):
    """A media directory holding 1000x600 backgrounds for both templates."""
    directory = tmp_path / "media"
    directory.mkdir()
    make_background(1000, 600, DASHBOARD_COLOR).save(
        str(directory / TEMPLATES[Mode.DASHBOARD].background_file), "JPG"
    )
    make_background(1000, 600, LOGIN_COLOR).save(
        str(directory / TEMPLATES[Mode.LOGIN].background_file), "JPG"
    )
    return directory


@pytest.fixture
def measurer():
    return FixedAdvanceMeasurer()


@pytest.fixture
def measurer_factory():
    return FixedAdvanceMeasurer
