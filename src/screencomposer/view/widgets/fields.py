from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLineEdit, QPushButton, QWidget


class ClearableLineEdit(QWidget):
    """Line edit with a clear button. Emits user edits only, never programmatic writes."""
    text_edited = Signal(str)
    cleared = Signal()

    def __init__(self, placeholder: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.line_edit = QLineEdit()
        self.line_edit.setPlaceholderText(placeholder)
        self.line_edit.textEdited.connect(self.text_edited)
        layout.addWidget(self.line_edit, 1)

        self.btn_clear = QPushButton("✕")
        self.btn_clear.setFixedWidth(28)
        self.btn_clear.setToolTip("Clear")
        self.btn_clear.clicked.connect(self.on_clear_clicked)
        layout.addWidget(self.btn_clear)

    def text(self) -> str:
        return self.line_edit.text()

    def set_canonical_text(self, text: str) -> None:
        """Write normalized text back; a no-op if the field already shows it."""
        if self.line_edit.text() != text:
            self.line_edit.setText(text)

    def on_clear_clicked(self) -> None:
        self.line_edit.clear()
        self.line_edit.setFocus()
        self.cleared.emit()
