"""Separating-axis overlap test for convex tile polygons."""

from __future__ import annotations

import numpy as np

from .edges import DEFAULT_EPSILON


def edge_normals(poly: np.ndarray) -> np.ndarray:
    """Return the unit normals of the polygon's edges, one per side."""

    vectors = np.roll(poly, -1, axis=0) - poly
    normals = np.column_stack((-vectors[:, 1], vectors[:, 0]))
    lengths = np.hypot(normals[:, 0], normals[:, 1])
    return normals / lengths[:, None]


def bounds_overlap(points_a: np.ndarray, points_b: np.ndarray, epsilon: float = DEFAULT_EPSILON) -> bool:
    min_a = points_a.min(axis=0)
    max_a = points_a.max(axis=0)
    min_b = points_b.min(axis=0)
    max_b = points_b.max(axis=0)
    return bool(np.all(max_a - min_b > epsilon) and np.all(max_b - min_a > epsilon))


def is_separating_axis(
    normal: np.ndarray, points_a: np.ndarray, points_b: np.ndarray, epsilon: float = DEFAULT_EPSILON
) -> bool:
    proj_a = points_a @ normal
    proj_b = points_b @ normal
    # Intervals that only touch within epsilon count as separated.
    overlap = proj_a.max() - proj_b.min() > epsilon and proj_b.max() - proj_a.min() > epsilon
    return not overlap


def overlap(points_a: np.ndarray, points_b: np.ndarray, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Return ``True`` when two convex polygons share interior area.

    Polygons glued along a common edge, or touching at a vertex, do not
    overlap.
    """

    a = np.asarray(points_a, dtype=float)
    b = np.asarray(points_b, dtype=float)
    if not bounds_overlap(a, b, epsilon):
        return False
    for normal in np.vstack((edge_normals(a), edge_normals(b))):
        if is_separating_axis(normal, a, b, epsilon):
            return False
    return True


__all__ = ["bounds_overlap", "edge_normals", "is_separating_axis", "overlap"]
