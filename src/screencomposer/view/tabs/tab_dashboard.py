"""
Dashboard Control Panel
"""
from PySide6.QtWidgets import QFormLayout, QGroupBox, QLabel, QVBoxLayout, QWidget

from screencomposer.controller.render import RenderController
from screencomposer.model.fields import AMOUNT_MAX_LENGTH
from screencomposer.view.widgets.fields import ClearableLineEdit


class DashboardControlPanel(QWidget):
    def __init__(self, controller: RenderController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        grp = QGroupBox("Balance")
        form = QFormLayout(grp)

        self.amount_field = ClearableLineEdit("e.g. 12,345.67")
        self.amount_field.text_edited.connect(self.on_amount_edited)
        self.amount_field.cleared.connect(lambda: self.controller.on_field_cleared("amount"))
        form.addRow("Amount (XCG):", self.amount_field)

        hint = QLabel(f"Digits and one decimal point, up to {AMOUNT_MAX_LENGTH} characters.")
        hint.setStyleSheet("color: gray;")
        hint.setWordWrap(True)
        form.addRow(hint)

        layout.addWidget(grp)
        layout.addStretch()

    def on_amount_edited(self, text: str) -> None:
        canonical = self.controller.on_field_changed("amount", text)
        self.amount_field.set_canonical_text(canonical)

    def load_from_state(self) -> None:
        self.amount_field.set_canonical_text(self.controller.state.amount)
