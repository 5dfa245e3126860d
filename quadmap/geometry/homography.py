# quadmap/geometry/homography.py
from __future__ import annotations
from typing import Sequence
import cv2
import numpy as np

from quadmap.core.contracts import Point2D, as_point, as_quad
from quadmap.core.errors import DegenerateQuadError


def _coefficient_system(src: np.ndarray, dst: np.ndarray):
    """Two rows per correspondence: one for the x' equation, one for y'."""
    A = np.zeros((8, 8), dtype=np.float64)
    b = np.zeros(8, dtype=np.float64)
    for i, ((x, y), (u, v)) in enumerate(zip(src, dst)):
        A[2 * i] = [x, y, 1.0, 0.0, 0.0, 0.0, -x * u, -y * u]
        A[2 * i + 1] = [0.0, 0.0, 0.0, x, y, 1.0, -x * v, -y * v]
        b[2 * i] = u
        b[2 * i + 1] = v
    return A, b


def build_transform(src_quad: Sequence, dst_quad: Sequence) -> np.ndarray:
    """
    Derive the 3×3 projective matrix mapping src_quad[i] onto dst_quad[i].

    Solves for the 8 coefficients (a..h) of
        x' = (a·x + b·y + c) / (g·x + h·y + 1)
        y' = (d·x + e·y + f) / (g·x + h·y + 1)
    with the (3,3) element fixed at 1.

    Raises:
        DegenerateQuadError: the coefficient matrix is singular (three or more
            source corners collinear/coincident) or the destination collapses
            the mapping onto a line.

    Returns:
        Read-only float64 array [[a,b,c],[d,e,f],[g,h,1]].
    """
    src = np.asarray(as_quad(src_quad), dtype=np.float64)
    dst = np.asarray(as_quad(dst_quad), dtype=np.float64)

    A, b = _coefficient_system(src, dst)
    if np.linalg.matrix_rank(A) < 8:
        raise DegenerateQuadError(f"Coefficient matrix is singular for source quad {src.tolist()}")
    try:
        A_inv = np.linalg.inv(A)
    except np.linalg.LinAlgError as e:
        raise DegenerateQuadError(f"Coefficient matrix is singular for source quad {src.tolist()}") from e

    h = A_inv @ b
    if not np.isfinite(h).all():
        raise DegenerateQuadError("Transform coefficients are not finite")

    matrix = np.append(h, 1.0).reshape(3, 3)
    if np.linalg.matrix_rank(matrix) < 3:
        raise DegenerateQuadError(f"Destination quad {dst.tolist()} collapses the mapping")
    matrix.setflags(write=False)
    return matrix


def invert_transform(src_quad: Sequence, dst_quad: Sequence) -> np.ndarray:
    """Matrix mapping dst_quad back onto src_quad."""
    return build_transform(dst_quad, src_quad)


def apply_transform(matrix: np.ndarray, point) -> Point2D:
    """
    Map a single point through `matrix` using homogeneous coordinates.

    A zero third coordinate maps the point to infinity (inf/nan), it never raises.
    """
    x, y = as_point(point)
    hx, hy, hw = np.asarray(matrix, dtype=np.float64) @ np.array([x, y, 1.0])
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(hx, hw)), float(np.divide(hy, hw))


def transform_points(matrix: np.ndarray, points) -> np.ndarray:
    """
    Vectorised transform of N points, returns an (N, 2) float64 array.

    cv2.perspectiveTransform zeroes points whose third coordinate is within
    FLT_EPSILON of 0; those rows are divided again here so they come out as
    inf/nan, matching apply_transform.
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 2:
        pts = pts.reshape(-1, 2)
    m = np.array(matrix, dtype=np.float64)
    transformed = cv2.perspectiveTransform(pts.reshape(-1, 1, 2), m).reshape(-1, 2)

    w = pts @ m[2, :2] + m[2, 2]
    near_zero = np.abs(w) <= np.finfo(np.float32).eps
    if near_zero.any():
        lifted = pts[near_zero] @ m[:2, :2].T + m[:2, 2]
        with np.errstate(divide="ignore", invalid="ignore"):
            transformed[near_zero] = np.divide(lifted, w[near_zero][:, None])
    return transformed
