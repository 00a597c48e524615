import numpy as np

from penrose_tiler.collision import bounds_overlap, edge_normals, overlap

SQUARE = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def test_identical_polygons_overlap():
    assert overlap(SQUARE, SQUARE)


def test_partial_overlap_is_detected():
    assert overlap(SQUARE, SQUARE + [0.5, 0.5])


def test_shared_edge_is_not_overlap():
    assert not overlap(SQUARE, SQUARE + [1.0, 0.0])


def test_shared_vertex_is_not_overlap():
    assert not overlap(SQUARE, SQUARE + [1.0, 1.0])


def test_distant_polygons_do_not_overlap():
    assert not overlap(SQUARE, SQUARE + [10.0, -4.0])


def test_penetration_below_epsilon_is_tolerated():
    assert not overlap(SQUARE, SQUARE + [0.999, 0.0])
    assert overlap(SQUARE, SQUARE + [0.99, 0.0])


def test_diamond_against_square_corner():
    diamond = np.array([[1.5, 0.5], [2.0, 0.0], [2.5, 0.5], [2.0, 1.0]])
    assert not overlap(SQUARE, diamond)
    assert overlap(SQUARE, diamond - [0.8, 0.0])


def test_edge_normals_are_unit_length():
    normals = edge_normals(SQUARE * 7.0)

    np.testing.assert_allclose(np.hypot(normals[:, 0], normals[:, 1]), 1.0)


def test_bounds_overlap_requires_positive_extent():
    assert not bounds_overlap(SQUARE, SQUARE + [1.0, 0.0])
    assert bounds_overlap(SQUARE, SQUARE + [0.5, 0.0])
