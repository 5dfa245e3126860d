"""
Core contracts and simple data types shared across stages.
"""

from __future__ import annotations
from typing import Sequence, Tuple
import numpy as np

Point2D = Tuple[float, float]

# clockwise: top-left, top-right, bottom-right, bottom-left
RectCorners = Tuple[Point2D, Point2D, Point2D, Point2D]

# A standardised "1x1 units" box to transform all coordinates into
DST_SIZE = 1.0
DEFAULT_DST_QUAD: RectCorners = (
    (0.0, 0.0),
    (DST_SIZE, 0.0),
    (DST_SIZE, DST_SIZE),
    (0.0, DST_SIZE),
)


def as_point(obj) -> Point2D:
    """Coerce an (x, y) pair (tuple, list, numpy array) into a Point2D."""
    p = np.asarray(obj, dtype=np.float64).reshape(-1)
    if p.shape != (2,):
        raise ValueError(f"Point must have exactly 2 coordinates, got shape {np.shape(obj)}")
    return float(p[0]), float(p[1])


def as_quad(obj) -> RectCorners:
    """
    Coerce four corners into RectCorners.

    Accepts a (4, 2) sequence / array or a flat sequence of 8 numbers
    laid out as x0 y0 x1 y1 x2 y2 x3 y3. Corner order is kept as given.
    """
    q = np.asarray(obj, dtype=np.float64)
    if q.size != 8 or q.shape not in ((8,), (4, 2)):
        raise ValueError(f"Quad needs 4 (x, y) corners, got shape {q.shape}")
    q = q.reshape(4, 2)
    if not np.isfinite(q).all():
        raise ValueError("Quad corners must be finite")
    return tuple((float(x), float(y)) for x, y in q)  # type: ignore[return-value]


def order_corners_clockwise(pts: Sequence) -> RectCorners:
    """Return TL, TR, BR, BL (clockwise) given 4 unordered points."""
    p = np.asarray(as_quad(pts), dtype=np.float64)
    # sort by y, then split to top/bottom and sort by x within each
    idx = np.argsort(p[:, 1], kind="stable")
    top = p[idx[:2]][np.argsort(p[idx[:2], 0], kind="stable")]
    bot = p[idx[2:]][np.argsort(p[idx[2:], 0], kind="stable")]
    tl, tr = top
    bl, br = bot
    return as_quad([tl, tr, br, bl])
