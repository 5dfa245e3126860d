from __future__ import annotations

import pytest

from quadmap.geometry.inside import point_is_inside_quad, quad_extent

CENTERED_DST_QUAD = ((-100.0, -100.0), (100.0, -100.0), (100.0, 100.0), (-100.0, 100.0))


def test_inside_standard_quad():
    assert point_is_inside_quad((0.5, 0.5), None, 0.0)
    # outside
    assert not point_is_inside_quad((-0.5, 0.5), None, 0.0)
    # right on the edge
    assert point_is_inside_quad((1.0, 1.0), None, 0.0)
    assert point_is_inside_quad((0.0, 0.0), None, 0.0)


def test_inside_dst_quad():
    assert point_is_inside_quad((0.0, 0.0), CENTERED_DST_QUAD, 0.0)
    assert not point_is_inside_quad((101.0, 0.0), CENTERED_DST_QUAD, 0.0)
    assert not point_is_inside_quad((0.0, -101.0), CENTERED_DST_QUAD, 0.0)
    # right on the edge
    assert point_is_inside_quad((100.0, 0.0), CENTERED_DST_QUAD, 0.0)
    assert point_is_inside_quad((-100.0, 100.0), CENTERED_DST_QUAD, 0.0)


def test_inside_with_margin_standard_quad():
    # 0.1 outside, but margin is 0.25, so accepted
    assert point_is_inside_quad((1.1, 0.0), None, 0.25)
    # 0.5 outside, and margin is 0.25, so rejected
    assert not point_is_inside_quad((1.5, 0.0), None, 0.25)
    assert point_is_inside_quad((-0.25, -0.25), None, 0.25)


def test_inside_with_margin_dst_quad():
    # 1 outside, but margin is 10, so accepted
    assert point_is_inside_quad((101.0, 0.0), CENTERED_DST_QUAD, 10.0)
    # 15 outside, and margin is 10, so rejected
    assert not point_is_inside_quad((115.0, 0.0), CENTERED_DST_QUAD, 10.0)


def test_margin_equal_to_distance_is_inside():
    assert not point_is_inside_quad((101.0, 0.0), CENTERED_DST_QUAD, 0.0)
    assert point_is_inside_quad((101.0, 0.0), CENTERED_DST_QUAD, 1.0)


def test_extent_uses_edge_lengths():
    # top edge (0,0)->(3,4) and left edge (0,0)->(-4,3) are both 5 long
    rotated = ((0.0, 0.0), (3.0, 4.0), (-1.0, 7.0), (-4.0, 3.0))
    assert quad_extent(rotated) == pytest.approx((5.0, 5.0))
    assert point_is_inside_quad((4.9, 4.9), rotated, 0.0)
    assert not point_is_inside_quad((-1.0, 1.0), rotated, 0.0)


@pytest.mark.parametrize("margin", [-0.1, float("nan"), float("inf")])
def test_bad_margin_is_rejected(margin):
    with pytest.raises(ValueError):
        point_is_inside_quad((0.5, 0.5), None, margin)
