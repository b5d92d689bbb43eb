"""Tests for the immutable CropRegion model."""

import math
import random

import pytest

from iCrop.core.region import CORNER_HANDLES, CropHandle, CropRegion, resolve_aspect_ratio
from iCrop.errors import InvalidGeometryError, UnsupportedAspectRatioError

VIEWPORT = (1000.0, 600.0)


def make_region(x=100.0, y=100.0, width=200.0, height=200.0, aspect_lock=None):
    return CropRegion(x, y, width, height, *VIEWPORT, aspect_lock=aspect_lock)


def assert_invariants(region):
    assert region.width >= 20.0 - 1e-9
    assert region.height >= 20.0 - 1e-9
    assert region.x >= -1e-9
    assert region.y >= -1e-9
    assert region.right <= region.viewport_width + 1e-9
    assert region.bottom <= region.viewport_height + 1e-9
    if region.aspect_lock is not None:
        assert abs(region.height - region.width / region.aspect_lock) <= 1.0


def test_default_region_is_half_viewport_and_centred():
    region = CropRegion.default(*VIEWPORT)
    assert region.as_rect() == pytest.approx((250.0, 150.0, 500.0, 300.0))


def test_default_region_without_viewport_uses_fallback_size():
    region = CropRegion.default(0.0, 0.0)
    assert (region.width, region.height) == (100.0, 100.0)


def test_centered_at_clamps_into_viewport():
    region = CropRegion.centered_at(500.0, 300.0, 100.0, 100.0, *VIEWPORT)
    assert region.as_rect() == pytest.approx((450.0, 250.0, 100.0, 100.0))

    corner = CropRegion.centered_at(5.0, 595.0, 100.0, 100.0, *VIEWPORT)
    assert corner.as_rect() == pytest.approx((0.0, 500.0, 100.0, 100.0))


def test_move_by_clamps_each_axis_independently():
    region = make_region(x=10.0, y=100.0)
    moved = region.move_by(-50.0, 30.0)
    assert moved.x == 0.0
    assert moved.y == pytest.approx(130.0)
    # The original value is untouched.
    assert region.x == 10.0


def test_move_by_keeps_size():
    moved = make_region().move_by(5000.0, 5000.0)
    assert moved.as_rect() == pytest.approx((800.0, 400.0, 200.0, 200.0))


def test_resize_se_only_changes_size():
    resized = make_region().resize_from_handle(CropHandle.SE, 50.0, -30.0)
    assert resized.as_rect() == pytest.approx((100.0, 100.0, 250.0, 170.0))


def test_resize_nw_moves_origin_and_keeps_opposite_corner():
    resized = make_region().resize_from_handle(CropHandle.NW, 40.0, -60.0)
    assert resized.as_rect() == pytest.approx((140.0, 40.0, 160.0, 260.0))
    assert resized.right == pytest.approx(300.0)
    assert resized.bottom == pytest.approx(300.0)


def test_resize_ne_and_sw():
    ne = make_region().resize_from_handle(CropHandle.NE, 10.0, 10.0)
    assert ne.as_rect() == pytest.approx((100.0, 110.0, 210.0, 190.0))
    sw = make_region().resize_from_handle(CropHandle.SW, 10.0, 10.0)
    assert sw.as_rect() == pytest.approx((110.0, 100.0, 190.0, 210.0))


def test_resize_clamps_to_minimum_size():
    resized = make_region().resize_from_handle(CropHandle.SE, -500.0, -500.0)
    assert resized.width == pytest.approx(20.0)
    assert resized.height == pytest.approx(20.0)
    assert (resized.x, resized.y) == (100.0, 100.0)


def test_resize_cannot_leave_viewport():
    resized = make_region().resize_from_handle(CropHandle.NW, -500.0, -500.0)
    assert resized.x == 0.0
    assert resized.y == 0.0
    assert resized.right == pytest.approx(300.0)


def test_square_lock_recomputes_height_from_width():
    region = make_region(x=450.0, y=250.0, width=100.0, height=100.0, aspect_lock=1.0)
    # Raw resize yields 300x100; width wins.
    resized = region.resize_from_handle(CropHandle.SE, 200.0, 0.0)
    assert resized.width == pytest.approx(300.0)
    assert resized.height == pytest.approx(300.0)
    assert (resized.x, resized.y) == (450.0, 250.0)


def test_locked_resize_from_top_keeps_bottom_edge_anchored():
    region = make_region(x=300.0, y=300.0, width=160.0, height=90.0, aspect_lock=16.0 / 9.0)
    resized = region.resize_from_handle(CropHandle.NW, -160.0, 0.0)
    assert resized.width == pytest.approx(320.0)
    assert resized.height == pytest.approx(180.0)
    assert resized.bottom == pytest.approx(390.0)
    assert resized.right == pytest.approx(460.0)


def test_locked_resize_shrinks_width_to_stay_inside():
    region = make_region(x=100.0, y=400.0, width=100.0, height=100.0, aspect_lock=1.0)
    resized = region.resize_from_handle(CropHandle.SE, 600.0, 0.0)
    # Only 200 px of room below the top edge.
    assert resized.width == pytest.approx(200.0)
    assert resized.height == pytest.approx(200.0)
    assert_invariants(resized)


def test_with_aspect_lock_recomputes_height():
    region = make_region(width=300.0, height=100.0).with_aspect_lock(1.5)
    assert region.width == pytest.approx(300.0)
    assert region.height == pytest.approx(200.0)
    assert region.with_aspect_lock(None).aspect_lock is None


def test_with_aspect_lock_keeps_region_inside():
    region = CropRegion.default(*VIEWPORT).with_aspect_lock(1.0)
    assert region.as_rect() == pytest.approx((250.0, 100.0, 500.0, 500.0))


def test_portrait_lock_respects_minimum_height():
    region = make_region(width=30.0, height=30.0, aspect_lock=9.0 / 16.0)
    resized = region.resize_from_handle(CropHandle.SE, -100.0, -100.0)
    assert resized.width >= 20.0
    assert resized.height >= 20.0
    assert_invariants(resized)


def test_with_viewport_reclamps():
    region = make_region(x=800.0, y=400.0).with_viewport(500.0, 300.0)
    assert region.as_rect() == pytest.approx((300.0, 100.0, 200.0, 200.0))


def test_reset_keeps_aspect_lock():
    region = make_region(aspect_lock=1.0).reset()
    assert region.aspect_lock == 1.0
    assert region.width == pytest.approx(region.height)
    assert region.center == pytest.approx((500.0, 300.0))


def test_non_finite_input_raises_invalid_geometry():
    with pytest.raises(InvalidGeometryError):
        make_region().move_by(math.nan, 0.0)
    with pytest.raises(InvalidGeometryError):
        make_region().resize_from_handle(CropHandle.SE, math.inf, 0.0)
    with pytest.raises(InvalidGeometryError):
        make_region().with_aspect_lock(0.0)


def test_resize_ignores_non_corner_handles():
    region = make_region()
    assert region.resize_from_handle(CropHandle.INSIDE, 10.0, 10.0) is region


@pytest.mark.parametrize("ratio", [None, 1.0, 4.0 / 3.0, 16.0 / 9.0, 2.0 / 3.0, 9.0 / 16.0])
def test_random_resize_sequences_hold_invariants(ratio):
    rng = random.Random(1234)
    region = CropRegion.default(*VIEWPORT, aspect_lock=ratio)
    for _ in range(300):
        handle = rng.choice(CORNER_HANDLES)
        region = region.resize_from_handle(handle, rng.uniform(-150, 150), rng.uniform(-150, 150))
        assert_invariants(region)
        region = region.move_by(rng.uniform(-80, 80), rng.uniform(-80, 80))
        assert_invariants(region)


def test_resolve_aspect_ratio_presets():
    assert resolve_aspect_ratio("free") is None
    assert resolve_aspect_ratio("square") == 1.0
    assert resolve_aspect_ratio("16:9") == pytest.approx(16.0 / 9.0)
    assert resolve_aspect_ratio(" 9:16 ") == pytest.approx(9.0 / 16.0)
    with pytest.raises(UnsupportedAspectRatioError):
        resolve_aspect_ratio("21:9")
