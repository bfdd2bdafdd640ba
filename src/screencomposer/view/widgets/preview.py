from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget


class CompositePreview(QLabel):
    """Shows the current composite scaled to fill available space, maintaining aspect ratio."""

    PLACEHOLDER_TEXT = "No template loaded"

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._original_pixmap: Optional[QPixmap] = None
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        # Ignored size policy allows the label to shrink/grow freely based on layout
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setMinimumSize(1, 1)
        self.setStyleSheet("background: #202020; color: gray;")
        self.setText(self.PLACEHOLDER_TEXT)

    def set_composite(self, image: Optional[QImage]) -> None:
        if image is None or image.isNull():
            self._original_pixmap = None
            self.clear()
            self.setText(self.PLACEHOLDER_TEXT)
            return
        self._original_pixmap = QPixmap.fromImage(image)
        self._update_display()

    def resizeEvent(self, event) -> None:
        if self._original_pixmap:
            self._update_display()
        super().resizeEvent(event)

    def _update_display(self) -> None:
        if self._original_pixmap and not self._original_pixmap.isNull():
            scaled = self._original_pixmap.scaled(
                self.size(), Qt.AspectRatioMode.KeepAspectRatio, Qt.TransformationMode.SmoothTransformation
            )
            super().setPixmap(scaled)
