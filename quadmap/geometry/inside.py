# quadmap/geometry/inside.py
from __future__ import annotations
from typing import Optional, Tuple
import math

from quadmap.core.contracts import DST_SIZE, RectCorners


def _dist(a, b) -> float:
    return math.hypot(float(a[0] - b[0]), float(a[1] - b[1]))


def quad_extent(quad: RectCorners) -> Tuple[float, float]:
    """(width, height): length of the top edge and of the left edge."""
    tl, tr, _br, bl = quad
    return _dist(tl, tr), _dist(tl, bl)


def check_margin(margin: float) -> float:
    margin = float(margin)
    if not math.isfinite(margin) or margin < 0:
        raise ValueError(f"Margin must be a finite, non-negative number, got {margin}")
    return margin


def point_is_inside_quad(point, dst_quad: Optional[RectCorners], margin: float) -> bool:
    """
    True if `point` lies within the destination region grown by `margin`.

    With no dst_quad the region is the unit square [0, 1] × [0, 1]. Otherwise it
    is an axis-aligned box anchored at the top-left corner, sized by the top and
    left edge lengths. Boundaries are inclusive.
    """
    margin = check_margin(margin)
    x, y = float(point[0]), float(point[1])
    if dst_quad is None:
        x0, y0, w, h = 0.0, 0.0, DST_SIZE, DST_SIZE
    else:
        x0, y0 = dst_quad[0]
        w, h = quad_extent(dst_quad)
    return (x0 - margin) <= x <= (x0 + w + margin) and (y0 - margin) <= y <= (y0 + h + margin)
