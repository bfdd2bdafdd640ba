import os

import numpy as np
import pytest
from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QImage

from screencomposer.controller.compositor import composite_to_array
from screencomposer.controller.render import RenderController
from screencomposer.controller.workers import LoadResult, load_background, read_background, TemplateLoadError
from screencomposer.model.state import RenderStage
from screencomposer.model.templates import Align, Mode, TEMPLATES


class Recorder:
    """Collects every emission of a Qt signal."""

    def __init__(self, signal) -> None:
        self.calls = []
        signal.connect(lambda *args: self.calls.append(args))


@pytest.fixture
def controller(media_dir, measurer):
    ctrl = RenderController(media_dir=str(media_dir), measurer=measurer, threaded=False)
    yield ctrl
    ctrl.shutdown()


def test_start_composites_active_template(controller):
    composites = Recorder(controller.composite_changed)
    ready = Recorder(controller.export_ready_changed)

    assert not controller.is_export_ready
    controller.start()

    assert controller.state.stage == RenderStage.COMPOSITED
    assert controller.is_export_ready
    assert ready.calls == [(True,)]
    assert len(composites.calls) == 1
    image = controller.rendered_composite
    assert (image.width(), image.height()) == (1000, 600)


def test_field_change_normalizes_and_rerenders(controller):
    controller.start()
    composites = Recorder(controller.composite_changed)
    normalized = Recorder(controller.field_normalized)

    canonical = controller.on_field_changed("amount", "5000,0")

    assert canonical == "50,000"
    assert controller.state.amount == "50,000"
    assert normalized.calls == [("amount", "50,000")]
    assert len(composites.calls) == 1


def test_end_to_end_dashboard_positions(controller):
    controller.start()
    controller.on_field_changed("amount", "50000")

    primary, balance = controller.draw_instructions()

    # 6 chars * 74px * 0.5 = 222px; half width 111 > 500 - 420, so it shifts right
    assert primary.text == "50,000"
    assert primary.left_edge == pytest.approx(420)
    assert primary.y == pytest.approx(295)

    assert balance.text == "XCG 50,000"
    assert balance.align == Align.LEFT
    assert (balance.x, balance.y) == pytest.approx((500, 412.2))


def test_empty_amount_draws_zero(controller):
    controller.start()
    controller.on_field_cleared("amount")
    primary, balance = controller.draw_instructions()
    assert primary.text == "0"
    assert balance.text == "XCG 0"


def test_fields_of_inactive_mode_do_not_render(controller):
    controller.start()
    composites = Recorder(controller.composite_changed)

    assert controller.on_field_changed("name", "j0hn") == "JHN"
    assert controller.state.name == "JHN"
    assert composites.calls == []


def test_unknown_field_raises(controller):
    with pytest.raises(KeyError):
        controller.on_field_changed("email", "x")


def test_mode_switch_discards_previous_composite(controller, media_dir):
    controller.start()
    controller.on_field_changed("amount", "12345678")
    dashboard_composite = controller.rendered_composite

    composites = Recorder(controller.composite_changed)
    modes = Recorder(controller.mode_changed)
    controller.on_field_changed("name", "Jane")
    controller.on_mode_changed(Mode.LOGIN)

    assert modes.calls == [("login",)]
    # First the old composite is dropped, then the login one arrives
    assert composites.calls[0] == (None,)
    assert controller.rendered_composite is not dashboard_composite
    assert controller.export_filename == "login_welcome.png"
    assert [i.text for i in controller.draw_instructions()] == ["MR JANE"]

    # The dashboard balance line sat around y=412; the login composite must show plain background there
    background = composite_to_array(read_background(str(media_dir / TEMPLATES[Mode.LOGIN].background_file)))
    composite = composite_to_array(controller.rendered_composite)
    assert np.array_equal(composite[380:440], background[380:440])
    # ...while the welcome line around y=330 is painted over it
    assert not np.array_equal(composite[310:350], background[310:350])


def test_same_mode_is_a_no_op(controller):
    controller.start()
    composites = Recorder(controller.composite_changed)
    controller.on_mode_changed("dashboard")
    assert composites.calls == []
    assert controller.is_export_ready


def test_export(controller, tmp_path):
    assert controller.on_export_requested() is None

    controller.start()
    result = controller.on_export_requested()

    assert result.filename == "money_in_the_bank.png"
    assert result.png.startswith(b"\x89PNG")
    assert result.data_uri.startswith("data:image/png;base64,")

    target = tmp_path / result.filename
    assert controller.export_to(str(target)) == str(target)
    exported = QImage(str(target))
    assert (exported.width(), exported.height()) == (1000, 600)


def test_missing_background_fails_the_mode(controller, media_dir):
    os.remove(media_dir / TEMPLATES[Mode.LOGIN].background_file)
    controller.start()
    failures = Recorder(controller.load_failed)

    controller.on_mode_changed(Mode.LOGIN)

    assert len(failures.calls) == 1
    mode, reason = failures.calls[0]
    assert mode == "login"
    assert "not found" in reason
    assert controller.state.stage == RenderStage.NO_IMAGE
    assert controller.state.load_error == reason
    assert controller.rendered_composite is None
    assert not controller.is_export_ready
    assert controller.on_export_requested() is None

    # Edits do nothing until a background exists
    controller.on_field_changed("name", "Jane")
    assert controller.rendered_composite is None


def test_reload_recovers_after_failure(controller, media_dir):
    path = media_dir / TEMPLATES[Mode.DASHBOARD].background_file
    moved = media_dir / "moved.jpg"
    os.rename(path, moved)

    controller.start()
    assert not controller.is_export_ready

    os.rename(moved, path)
    controller.reload()
    assert controller.is_export_ready
    assert controller.state.load_error is None


def test_stale_load_result_is_ignored(controller, media_dir):
    controller.start()
    controller.on_mode_changed(Mode.LOGIN)
    login_composite = controller.rendered_composite

    stale = load_background(Mode.DASHBOARD, controller.template_path(Mode.DASHBOARD), request_id=1)
    controller.apply_load_result(stale)

    assert controller.state.mode == Mode.LOGIN
    assert controller.rendered_composite is login_composite


def test_single_mode(media_dir, measurer):
    controller = RenderController(media_dir=str(media_dir), measurer=measurer, threaded=False, single_mode=True)
    controller.start()

    assert controller.export_filename == "money_in_the_bank.png"
    with pytest.raises(ValueError):
        controller.on_mode_changed(Mode.LOGIN)
    assert controller.state.mode == Mode.DASHBOARD


def test_threaded_loading(media_dir, measurer):
    controller = RenderController(media_dir=str(media_dir), measurer=measurer, threaded=True)
    controller.start()
    controller.shutdown()

    # The result is queued to this thread; deliver it
    for _ in range(10):
        QCoreApplication.processEvents()
        if controller.is_export_ready:
            break

    assert controller.is_export_ready
    assert controller.state.stage == RenderStage.COMPOSITED


def test_read_background_errors(tmp_path, qapp):
    with pytest.raises(TemplateLoadError):
        read_background(str(tmp_path / "missing.jpg"))

    corrupt = tmp_path / "corrupt.jpg"
    corrupt.write_bytes(b"not an image")
    with pytest.raises(TemplateLoadError):
        read_background(str(corrupt))

    result = load_background(Mode.DASHBOARD, str(corrupt))
    assert isinstance(result, LoadResult)
    assert not result.ok
    assert result.dimensions == (0, 0)
