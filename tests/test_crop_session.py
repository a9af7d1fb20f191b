"""Tests for the CropSession facade."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from PIL import Image

from cropstage.core.geometry import ImageTransform, Point, Rect, StageBounds
from cropstage.crop.sizing import FixedOutput, RatioLocked
from cropstage.crop.utils import CropHandle
from cropstage.errors import ImageLoadError, NoImageLoadedError
from cropstage.session import CropSession, CropState, LoadFailure
from cropstage.settings.manager import SettingsManager


def test_initial_state(session):
    assert session.current_box() == Rect(100, 50, 200, 200)
    assert session.current_image_transform() == ImageTransform()
    assert not session.has_image()


def test_projection_requires_image(session):
    with pytest.raises(NoImageLoadedError):
        session.projected_image_region()
    with pytest.raises(NoImageLoadedError):
        session.export_plan()
    with pytest.raises(NoImageLoadedError):
        session.output_size()
    assert session.try_projected_image_region() is None
    assert session.try_output_size() is None
    assert session.size_label() is None
    assert session.preview_placement(300, 300) is None


def test_set_image_fits_and_resets_box(session, redraws):
    session.on_pointer_down(CropHandle.MOVE, Point(200, 150))
    session.on_pointer_move(Point(100, 100))
    session.set_image(100, 50)

    assert session.current_box() == Rect(100, 50, 200, 200)
    assert session.current_image_transform() == ImageTransform(150, 125, 1.0, 1.0)
    assert not session.controller.is_dragging()
    assert redraws


def test_projected_region_follows_image(session):
    session.set_image(100, 50)
    assert session.projected_image_region() == Rect(-50, -75, 200, 200)
    assert session.export_region() == Rect(0, 0, 100, 50)
    assert session.output_size() == (200, 200)
    assert session.size_label() == "200 × 200"


def test_drag_updates_projection(session, redraws):
    session.set_image(400, 300)
    redraws.clear()

    assert session.on_pointer_down("topLeft", Point(100, 50)) is True
    session.on_pointer_move(Point(140, 90))
    session.on_pointer_up()

    assert session.current_box() == Rect(140, 90, 160, 160)
    region = session.projected_image_region()
    transform = session.current_image_transform()
    assert region.x == pytest.approx((140 - transform.x) / transform.scale_x)
    assert len(redraws) == 1


def test_wheel_requires_hover(session):
    session.set_image(100, 50)
    assert session.on_wheel(-20) is False
    session.on_pointer_move(Point(200, 150))
    assert session.on_wheel(-20) is True
    session.on_pointer_leave()
    assert session.on_wheel(-20) is False


def test_set_sizing_mode_resets_box_and_ends_drag(session):
    session.on_pointer_down(CropHandle.BOTTOM_RIGHT, Point(300, 250))
    session.set_sizing_mode(RatioLocked(2))

    assert not session.controller.is_dragging()
    assert session.current_box() == Rect(100, 100, 200, 100)
    session.on_pointer_move(Point(400, 400))
    assert session.current_box() == Rect(100, 100, 200, 100)


def test_fixed_output_mode_forces_export_size(stage):
    session = CropSession(stage, mode=FixedOutput(295, 413))
    session.set_image(1600, 1200)
    plan = session.export_plan()
    assert plan.output_size == (295, 413)
    assert session.size_label() == "295 × 413"
    assert session.current_box().aspect_ratio == pytest.approx(295 / 413)


def test_export_plan_is_a_snapshot(session):
    session.set_image(400, 300)
    plan = session.export_plan()
    session.on_pointer_down(CropHandle.BOTTOM_RIGHT, Point(300, 250))
    session.on_pointer_move(Point(250, 200))
    assert plan.source_region != session.export_plan().source_region


def test_preview_placement_centres_region(session):
    session.set_image(100, 50)
    placed = session.preview_placement(300, 300)
    assert placed == Rect(50, 50, 200, 200)


def test_changed_signal_carries_state(session):
    listener = MagicMock()
    session.changed.connect(listener)
    session.set_image(100, 50)

    listener.assert_called_once_with(session.state())
    state = listener.call_args.args[0]
    assert isinstance(state, CropState)
    assert state.box == Rect(100, 50, 200, 200)
    assert state.image_transform == ImageTransform(150, 125, 1.0, 1.0)
    assert state.texture_size == (100, 50)
    assert state.show_crop_mesh is True


def test_clear_image(session):
    session.set_image(100, 50)
    session.on_pointer_move(Point(200, 150))
    session.clear_image()
    assert not session.has_image()
    assert not session.controller.is_hovering_image()
    assert session.try_projected_image_region() is None


def test_load_image_from_file(session, tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (120, 80)).save(path)

    assert session.load_image(path) == (120, 80)
    assert session.texture_size == (120, 80)


def test_load_image_failure_keeps_state(session, tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError):
        session.load_image(path)
    assert not session.has_image()


def test_request_image_requires_executor(session, tmp_path):
    with pytest.raises(RuntimeError):
        session.request_image(tmp_path / "photo.png")


def test_executor_requires_dispatch(stage):
    with ThreadPoolExecutor(max_workers=1) as executor:
        with pytest.raises(ValueError):
            CropSession(stage, executor=executor)


def test_request_image_applies_result_on_dispatch(stage, tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (64, 48)).save(path)
    pending = []
    with ThreadPoolExecutor(max_workers=1) as executor:
        session = CropSession(stage, executor=executor, dispatch=pending.append)
        session.request_image(path)

    # Nothing is applied until the owning thread runs the queued callback.
    assert not session.has_image()
    for callback in pending:
        callback()
    assert session.texture_size == (64, 48)


def test_request_image_reports_failures(stage, tmp_path):
    failures = MagicMock()
    pending = []
    missing = tmp_path / "missing.png"
    with ThreadPoolExecutor(max_workers=1) as executor:
        session = CropSession(stage, executor=executor, dispatch=pending.append)
        session.loadFailed.connect(failures)
        session.request_image(missing)
    for callback in pending:
        callback()

    failures.assert_called_once()
    failure = failures.call_args.args[0]
    assert isinstance(failure, LoadFailure)
    assert failure.source == missing
    assert not session.has_image()


def test_finished_older_request_does_not_replace_newer_one(stage, tmp_path):
    first = tmp_path / "first.png"
    second = tmp_path / "second.png"
    Image.new("RGB", (64, 48)).save(first)
    Image.new("RGB", (30, 90)).save(second)
    pending = []
    with ThreadPoolExecutor(max_workers=1) as executor:
        session = CropSession(stage, executor=executor, dispatch=pending.append)
        session.request_image(first)
        session.request_image(second)

    assert len(pending) == 2
    for callback in pending:
        callback()
    assert session.texture_size == (30, 90)


def test_from_settings(tmp_path):
    settings = SettingsManager(tmp_path / "cropstage.json")
    settings.load()
    settings.set("stage", {"width": 400, "height": 300})
    settings.set("crop.mode", "ratio")
    settings.set("crop.ratio", 2)

    session = CropSession.from_settings(settings)

    assert session.stage == StageBounds(400, 300)
    assert session.sizing_mode == RatioLocked(2.0)
    assert session.current_box() == Rect(100, 100, 200, 100)
    assert session.show_crop_mesh is True


def test_from_settings_hides_mesh(tmp_path):
    settings = SettingsManager(tmp_path / "cropstage.json")
    settings.load()
    settings.set("show_crop_mesh", False)

    session = CropSession.from_settings(settings)

    assert session.show_crop_mesh is False
    assert session.mesh_lines() == ()


def test_toggling_mesh_notifies_once(session, redraws):
    session.show_crop_mesh = False
    session.show_crop_mesh = False
    assert len(redraws) == 1
    assert session.state().show_crop_mesh is False

    session.show_crop_mesh = True
    assert len(session.mesh_lines()) == 4


def test_overlay_follows_box(session):
    assert session.cover_rects() == (
        Rect(0, 0, 400, 50),
        Rect(0, 250, 400, 50),
        Rect(300, 50, 100, 200),
        Rect(0, 50, 100, 200),
    )
    (v1_top, v1_bottom), *_ = session.mesh_lines()
    assert v1_top.x == pytest.approx(100 + 200 / 3)
    assert (v1_top.y, v1_bottom.y) == (50, 250)
