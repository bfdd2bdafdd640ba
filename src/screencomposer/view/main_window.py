"""
Main Application Window
=======================
The primary GUI container: mode tabs on top, control panel and download button
on the left, composite preview on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It forwards tab switches and the download action to the
   RenderController and reflects its signals (preview, download enabled,
   load failures) back into the widgets.
"""
import logging
import os

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog, QMainWindow, QMessageBox, QPushButton, QSplitter,
    QStackedWidget, QTabBar, QVBoxLayout, QWidget
)

from screencomposer.app import VISIBLE_APP_NAME
from screencomposer.controller.render import RenderController
from screencomposer.model.templates import Mode, TEMPLATES
from screencomposer.view.tabs.tab_dashboard import DashboardControlPanel
from screencomposer.view.tabs.tab_login import LoginControlPanel
from screencomposer.view.widgets.preview import CompositePreview

logger = logging.getLogger(__name__)

# Tab order; must match the order panels are added to the stack
MODE_ORDER = [Mode.DASHBOARD, Mode.LOGIN]


class MainWindow(QMainWindow):
    def __init__(self, controller: RenderController) -> None:
        super().__init__()
        self.controller = controller
        self.single_mode = controller.single_mode

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 760)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP TAB BAR ---
        self.tab_bar = QTabBar()
        self.tab_bar.setDrawBase(True)
        self.tab_bar.setShape(QTabBar.Shape.RoundedNorth)
        self.tab_bar.setExpanding(True)
        for mode in MODE_ORDER:
            self.tab_bar.addTab(TEMPLATES[mode].label)
        self.tab_bar.setStyleSheet("""
                    QTabBar::tab { height: 35px; min-width: 100px; }
                    QTabBar::tab:selected { font-weight: bold; }
                """)
        self.tab_bar.setVisible(not self.single_mode)
        main_layout.addWidget(self.tab_bar)

        # --- 2. SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.setChildrenCollapsible(False)
        main_layout.addWidget(splitter, 1)

        # --- LEFT SIDE: Control Panels (Stacked) + Download ---
        left = QWidget()
        left_layout = QVBoxLayout(left)

        self.controls_stack = QStackedWidget()
        self.dashboard_panel = DashboardControlPanel(self.controller)
        self.login_panel = LoginControlPanel(self.controller)
        self.controls_stack.addWidget(self.dashboard_panel)  # Index 0
        self.controls_stack.addWidget(self.login_panel)  # Index 1
        left_layout.addWidget(self.controls_stack, 1)

        self.btn_download = QPushButton("Download PNG")
        self.btn_download.setMinimumHeight(40)
        self.btn_download.setEnabled(False)  # Disabled until a composite exists
        self.btn_download.clicked.connect(self.on_download_clicked)
        left_layout.addWidget(self.btn_download)

        splitter.addWidget(left)

        # --- RIGHT SIDE: Preview ---
        self.preview = CompositePreview()
        splitter.addWidget(self.preview)
        splitter.setSizes([320, 880])

        # --- SIGNAL CONNECTIONS ---
        self.tab_bar.currentChanged.connect(self.on_tab_changed)
        self.controller.composite_changed.connect(self.preview.set_composite)
        self.controller.export_ready_changed.connect(self.btn_download.setEnabled)
        self.controller.load_failed.connect(self.on_load_failed)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.dashboard_panel.load_from_state()
        self.login_panel.load_from_state()

    def _create_actions(self) -> None:
        self.act_download = QAction("Download PNG...", self)
        self.act_download.setShortcut("Ctrl+S")
        self.act_download.triggered.connect(self.on_download_clicked)
        self.act_download.setEnabled(False)
        self.controller.export_ready_changed.connect(self.act_download.setEnabled)

        self.act_reload = QAction("Reload Template", self)
        self.act_reload.setShortcut("F5")
        self.act_reload.triggered.connect(self.controller.reload)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.act_download)
        file_menu.addAction(self.act_reload)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- SLOTS ---

    def on_tab_changed(self, index: int) -> None:
        mode = MODE_ORDER[index]
        self.controls_stack.setCurrentIndex(index)
        self.controller.on_mode_changed(mode)

    def on_load_failed(self, mode: str, reason: str) -> None:
        QMessageBox.critical(
            self,
            "Template Error",
            f"Failed to load template for {mode} mode.\n\n{reason}\n\n"
            f"Switch tabs or use File -> Reload Template to retry.",
        )

    def on_download_clicked(self) -> None:
        if not self.controller.is_export_ready:
            return

        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Image", self.controller.export_filename, "PNG Images (*.png)"
        )
        if not fname:
            return
        # Ensure extension
        if not fname.lower().endswith(".png"):
            fname += ".png"

        try:
            self.controller.export_to(fname)
            self.statusBar().showMessage(f"Saved {os.path.basename(fname)}", 5000)
        except OSError as e:
            logger.error(f"Could not write '{fname}': {e}")
            QMessageBox.critical(self, "Error", f"Could not save image:\n{e}")

    def closeEvent(self, event, /) -> None:
        """Let pending template loads finish before the window goes away."""
        self.controller.shutdown()
        event.accept()
