# quadmap/transform/quad_transformer.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Sequence
import numpy as np

from quadmap.core.contracts import DEFAULT_DST_QUAD, Point2D, RectCorners, as_point, as_quad
from quadmap.core.diagnostics import (
    LoggingObserver,
    Observer,
    margin_set_event,
    margin_unset_event,
    point_checked_event,
    solve_failed_event,
)
from quadmap.core.errors import DegenerateQuadError, NotReadyError
from quadmap.geometry.homography import apply_transform, build_transform, transform_points
from quadmap.geometry.inside import check_margin, point_is_inside_quad


class TransformerState(Enum):
    UNCONFIGURED = "unconfigured"
    READY = "ready"


class QuadTransformer:
    """
    Maps points observed inside a source quad into a destination quad
    (the unit square unless told otherwise).

    Construction never fails on a degenerate source quad; the transformer just
    stays UNCONFIGURED and `is_ready()` returns False. `set_new_quad` is the only
    way into READY and raises DegenerateQuadError instead.

    Not thread-safe: guard `set_new_quad` against concurrent readers externally.
    """

    def __init__(
        self,
        src_quad: Optional[Sequence] = None,
        dst_quad: Optional[Sequence] = None,
        margin: Optional[float] = None,
        observer: Optional[Observer] = None,
    ) -> None:
        self._observer: Observer = observer or LoggingObserver()
        self._margin = None if margin is None else check_margin(margin)
        self._dst_quad: Optional[RectCorners] = None if dst_quad is None else as_quad(dst_quad)
        self._matrix: Optional[np.ndarray] = None
        self._state = TransformerState.UNCONFIGURED

        if self._margin is None:
            self._observer(margin_unset_event())
        else:
            self._observer(margin_set_event(self._margin))

        if src_quad is not None:
            try:
                self._matrix = build_transform(src_quad, self._useable_dst_quad())
                self._state = TransformerState.READY
            except DegenerateQuadError as e:
                self._observer(solve_failed_event(e))

    def _useable_dst_quad(self) -> RectCorners:
        return self._dst_quad if self._dst_quad is not None else DEFAULT_DST_QUAD

    @property
    def state(self) -> TransformerState:
        return self._state

    @property
    def matrix(self) -> Optional[np.ndarray]:
        return self._matrix

    @property
    def dst_quad(self) -> Optional[RectCorners]:
        return self._dst_quad

    @property
    def margin(self) -> Optional[float]:
        return self._margin

    def is_ready(self) -> bool:
        return self._state is TransformerState.READY

    def set_new_quad(self, src_quad: Sequence, dst_quad: Optional[Sequence] = None) -> None:
        """
        Rebuild the transform from a new source quad (and optional destination).
        On DegenerateQuadError the previous matrix and destination are kept.
        """
        new_dst = None if dst_quad is None else as_quad(dst_quad)
        matrix = build_transform(src_quad, new_dst if new_dst is not None else DEFAULT_DST_QUAD)
        self._dst_quad = new_dst
        self._matrix = matrix
        self._state = TransformerState.READY

    def transform(self, point) -> Point2D:
        """Take a single point (within the source quad) and return it in destination space."""
        if self._state is not TransformerState.READY:
            raise NotReadyError("No transform matrix")
        return apply_transform(self._matrix, point)

    def transform_points(self, points) -> np.ndarray:
        if self._state is not TransformerState.READY:
            raise NotReadyError("No transform matrix")
        return transform_points(self._matrix, points)

    def filter_points_inside(self, points: Sequence) -> List[Point2D]:
        """
        Using the margin (if set), return only the points deemed to be
        inside the destination quad. Without a margin every point is kept.
        """
        pts = [as_point(p) for p in points]
        if self._margin is None:
            return pts
        kept = []
        for p in pts:
            inside = point_is_inside_quad(p, self._dst_quad, self._margin)
            self._observer(point_checked_event(p, self._margin, inside))
            if inside:
                kept.append(p)
        return kept
