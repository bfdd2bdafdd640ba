"""
Login Control Panel
"""
from PySide6.QtWidgets import QComboBox, QFormLayout, QGroupBox, QVBoxLayout, QWidget

from screencomposer.controller.render import RenderController
from screencomposer.model.templates import GENDER_OPTIONS
from screencomposer.view.widgets.fields import ClearableLineEdit


class LoginControlPanel(QWidget):
    def __init__(self, controller: RenderController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        grp = QGroupBox("Welcome Line")
        form = QFormLayout(grp)

        self.gender_combo = QComboBox()
        self.gender_combo.addItems(GENDER_OPTIONS)
        self.gender_combo.currentTextChanged.connect(
            lambda text: self.controller.on_field_changed("gender", text)
        )
        form.addRow("Title:", self.gender_combo)

        self.name_field = ClearableLineEdit("Letters and spaces")
        self.name_field.text_edited.connect(self.on_name_edited)
        self.name_field.cleared.connect(lambda: self.controller.on_field_cleared("name"))
        form.addRow("Name:", self.name_field)

        layout.addWidget(grp)
        layout.addStretch()

    def on_name_edited(self, text: str) -> None:
        canonical = self.controller.on_field_changed("name", text)
        self.name_field.set_canonical_text(canonical)

    def load_from_state(self) -> None:
        self.gender_combo.blockSignals(True)
        try:
            self.gender_combo.setCurrentText(self.controller.state.gender)
        finally:
            self.gender_combo.blockSignals(False)
        self.name_field.set_canonical_text(self.controller.state.name)
