"""
Render Controller
=================
Owns the AppState and runs the whole pipeline:

    field edit -> normalize -> layout -> compose -> cached composite -> export

Views never touch the state directly. They call the `on_*` methods and listen
to the signals.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtGui import QImage

from screencomposer.config import MEDIA_PATH
from screencomposer.controller.compositor import compose, encode_png, png_data_uri
from screencomposer.controller.layout import DrawInstruction, TextMeasurer, QtTextMeasurer, layout_template
from screencomposer.controller.workers import BackgroundLoadWorker, LoadResult, load_background
from screencomposer.model.fields import FIELD_SPECS, normalize
from screencomposer.model.state import AppState, RenderStage
from screencomposer.model.templates import Mode, SINGLE_MODE_EXPORT_NAME, TEMPLATES

logger = logging.getLogger(__name__)

# Which fields feed the text of each mode; edits elsewhere do not re-render
MODE_FIELDS: dict[Mode, frozenset[str]] = {
    Mode.DASHBOARD: frozenset({"amount"}),
    Mode.LOGIN: frozenset({"gender", "name"}),
}


@dataclass(frozen=True)
class ExportResult:
    filename: str
    png: bytes

    @property
    def data_uri(self) -> str:
        return png_data_uri(self.png)


class RenderController(QObject):
    """Single owner of the composite. One instance per window."""
    composite_changed = Signal(object)  # QImage, or None once discarded
    export_ready_changed = Signal(bool)
    field_normalized = Signal(str, str)  # field id, canonical text
    mode_changed = Signal(str)
    load_failed = Signal(str, str)  # mode, reason

    def __init__(
        self,
        state: Optional[AppState] = None,
        media_dir: str = MEDIA_PATH,
        measurer: Optional[TextMeasurer] = None,
        threaded: bool = True,
        single_mode: bool = False,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.state = state if state is not None else AppState()
        self.media_dir = media_dir
        self.measurer = measurer if measurer is not None else QtTextMeasurer()
        self.threaded = threaded
        self.single_mode = single_mode

        self._request_id = 0
        self._export_ready = False
        self._workers: set[BackgroundLoadWorker] = set()

        if single_mode:
            self.state.mode = Mode.DASHBOARD

    # --- OBSERVABLE OUTPUTS ---

    @property
    def rendered_composite(self) -> Optional[QImage]:
        return self.state.composite

    @property
    def is_export_ready(self) -> bool:
        return self._export_ready

    @property
    def export_filename(self) -> str:
        if self.single_mode:
            return SINGLE_MODE_EXPORT_NAME
        return self.state.template.export_filename

    def template_path(self, mode: Mode) -> str:
        return os.path.join(self.media_dir, TEMPLATES[mode].background_file)

    # --- CONSUMED EVENTS ---

    def start(self) -> None:
        """Initial load of the active template."""
        self.request_background()

    def on_field_changed(self, field_id: str, raw_value: str) -> str:
        """
        Normalize a raw field value, store it and re-render if the active mode shows it.

        Returns the canonical text; the caller writes it back into the control
        when it differs from what the user typed.
        """
        spec = FIELD_SPECS[field_id]
        canonical = normalize(raw_value, spec)
        setattr(self.state, field_id, canonical)
        self.field_normalized.emit(field_id, canonical)

        if field_id in MODE_FIELDS[self.state.mode]:
            self.render()
        return canonical

    def on_field_cleared(self, field_id: str) -> str:
        return self.on_field_changed(field_id, "")

    def on_mode_changed(self, mode: Mode | str) -> None:
        mode = Mode(mode)
        if mode == self.state.mode:
            return
        if self.single_mode and mode != Mode.DASHBOARD:
            raise ValueError(f"Mode '{mode}' is not available in single-mode.")

        logger.info(f"Switching mode: {self.state.mode} -> {mode}")
        self.state.mode = mode
        self._discard_background()
        self.mode_changed.emit(mode.value)
        self.request_background()

    def on_export_requested(self) -> Optional[ExportResult]:
        if not self.is_export_ready or self.state.composite is None:
            logger.warning("Export requested but no composite is available.")
            return None
        return ExportResult(filename=self.export_filename, png=encode_png(self.state.composite))

    def export_to(self, path: str) -> Optional[str]:
        """Write the current composite as PNG to `path`. Returns the path, or None if nothing to export."""
        result = self.on_export_requested()
        if result is None:
            return None
        with open(path, "wb") as f:
            f.write(result.png)
        logger.info(f"Exported {len(result.png)} bytes to {path}")
        return path

    def reload(self) -> None:
        """Retry loading the active template, e.g. after a failure."""
        self._discard_background()
        self.request_background()

    # --- LOADING ---

    def request_background(self) -> None:
        self._request_id += 1
        mode = self.state.mode
        path = self.template_path(mode)
        logger.info(f"Loading {mode} template from {path}")

        if not self.threaded:
            self.apply_load_result(load_background(mode, path, self._request_id))
            return

        worker = BackgroundLoadWorker(mode, path, self._request_id)
        worker.load_finished.connect(self.apply_load_result)
        worker.finished.connect(lambda: self._workers.discard(worker))
        worker.finished.connect(worker.deleteLater)
        self._workers.add(worker)
        worker.start()

    @Slot(object)
    def apply_load_result(self, result: LoadResult) -> None:
        if result.request_id != self._request_id or result.mode != self.state.mode:
            logger.debug(f"Ignoring stale load result for {result.mode} (request {result.request_id}).")
            return

        if not result.ok:
            self.state.reset_background()
            self.state.load_error = result.reason
            self._set_export_ready(False)
            self.load_failed.emit(result.mode.value, result.reason or "unknown error")
            return

        self.state.background = result.image
        self.state.stage = RenderStage.IMAGE_LOADED
        self.render()

    def shutdown(self) -> None:
        """Wait for in-flight loads so no thread outlives the application."""
        for worker in list(self._workers):
            worker.wait()

    # --- RENDERING ---

    def draw_instructions(self) -> list[DrawInstruction]:
        background = self.state.background
        if background is None:
            return []
        return layout_template(
            self.state.template,
            self.state.text_values(),
            background.width(),
            background.height(),
            measurer=self.measurer,
        )

    def render(self) -> Optional[QImage]:
        """Regenerate the composite for the active mode from scratch."""
        background = self.state.background
        if background is None:
            logger.debug("Render skipped: no background loaded.")
            return None

        self.state.discard_composite()
        self.state.composite = compose(background, self.draw_instructions())
        self.state.stage = RenderStage.COMPOSITED

        self.composite_changed.emit(self.state.composite)
        self._set_export_ready(True)
        return self.state.composite

    def _discard_background(self) -> None:
        self.state.reset_background()
        self._set_export_ready(False)
        self.composite_changed.emit(None)

    def _set_export_ready(self, ready: bool) -> None:
        if ready != self._export_ready:
            self._export_ready = ready
            self.export_ready_changed.emit(ready)
