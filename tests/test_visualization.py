import math

import pytest

from pars3d.quat import dist, dot, length, normalize
from pars3d.visualization import (
    basis,
    colored_wireframe,
    face_coloring,
    face_segmentation_wireframes,
    greedy_face_coloring,
    optional_edge_vector_visualization,
    per_vertex_colored_wireframe,
    vertex_scalar_coloring,
)


@pytest.mark.parametrize(
    "v",
    [(0.0, 0.0, 1.0), (0.0, 0.0, -1.0), (1.0, 0.0, 0.0), (1.0, 2.0, 3.0), (-0.3, 0.7, -0.2)],
)
def test_basis_orthonormal(v):
    n = normalize(v)
    t, b = basis(n)
    assert abs(length(t) - 1.0) < 1e-9
    assert abs(length(b) - 1.0) < 1e-9
    assert abs(dot(t, b)) < 1e-9
    assert abs(dot(t, n)) < 1e-9
    assert abs(dot(b, n)) < 1e-9


def test_colored_wireframe_single_edge():
    verts = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)]
    color = (0.2, 0.4, 0.6)
    width = 0.1
    new_vs, new_vc, new_fs = colored_wireframe(
        [(0, 1)], lambda vi: verts[vi], lambda _e: color, width
    )
    assert len(new_vs) == 8
    assert new_vc == [color] * 8
    assert len(new_fs) == 4
    for p in new_vs[:4]:
        assert abs(dist(p, verts[0]) - width) < 1e-9
    for p in new_vs[4:]:
        assert abs(dist(p, verts[1]) - width) < 1e-9
    assert all(0 <= i < 8 for f in new_fs for i in f)


def test_colored_wireframe_skips_degenerate_edge():
    verts = [(1.0, 1.0, 1.0), (1.0, 1.0, 1.0)]
    result = colored_wireframe([(0, 1)], lambda vi: verts[vi], lambda _e: (1.0, 0.0, 0.0), 0.1)
    assert result == ([], [], [])


def test_per_vertex_wireframe_counts():
    pts = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 1.0, 0.0)]
    colors = [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
    new_vs, new_vc, new_fs = per_vertex_colored_wireframe(
        3, lambda vi: (pts[vi], colors[vi], 0.05)
    )
    assert len(new_vs) == 12
    assert new_vc == [c for c in colors for _ in range(4)]
    assert len(new_fs) == 8
    assert all(0 <= i < 12 for f in new_fs for i in f)
    for vi, p in enumerate(pts):
        for q in new_vs[4 * vi : 4 * vi + 4]:
            assert abs(dist(p, q) - 0.05) < 1e-9


def test_per_vertex_wireframe_needs_two_vertices():
    with pytest.raises(ValueError):
        per_vertex_colored_wireframe(1, lambda vi: ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), 1.0))


def test_vertex_scalar_coloring_normalizes():
    out = vertex_scalar_coloring([2.0, 4.0, 3.0], lambda t: (t, t, t), 0.0, 0.0, (1.0, 0.0, 0.0))
    assert out[0] == (0.0, 0.0, 0.0)
    assert out[1] == (1.0, 1.0, 1.0)
    assert out[2] == (0.5, 0.5, 0.5)


def test_vertex_scalar_coloring_isolines_blend_toward_isolevel_color():
    iso_color = (1.0, 0.0, 0.0)
    out = vertex_scalar_coloring(
        [0.0, 1.0], lambda t: (0.0, 0.0, 1.0), 0.5, 0.1, iso_color
    )
    # the minimum lies exactly on an isoline: iso weight is 0, base colour is kept
    assert out[0] == (0.0, 0.0, 1.0)
    for c in out:
        assert all(0.0 <= x <= 1.0 for x in c)


def test_vertex_scalar_coloring_empty_and_errors():
    assert vertex_scalar_coloring([], lambda t: (t, t, t), 0.0, 0.0, (0.0, 0.0, 0.0)) == []
    with pytest.raises(ValueError):
        vertex_scalar_coloring([1.0], lambda t: (t, t, t), 1.0, 0.0, (0.0, 0.0, 0.0))
    with pytest.raises(ValueError):
        vertex_scalar_coloring(
            [1.0, math.inf], lambda t: (t, t, t), 0.0, 0.0, (0.0, 0.0, 0.0)
        )


def test_face_coloring_consistent_per_group():
    groups = [0, 1, 0, 2, 1]
    colors = face_coloring(lambda i: groups[i], len(groups))
    assert len(colors) == 5
    assert colors[0] == colors[2]
    assert colors[1] == colors[4]
    assert colors[0] != colors[1]
    assert all(0.0 <= x <= 1.0 for c in colors for x in c)


def test_greedy_face_coloring_adjacent_groups_differ():
    groups = [0, 1, 2, 0]
    adjacent = {(0, 1), (1, 0), (1, 2), (2, 1)}
    palette = [(255, 0, 0), (0, 255, 0)]
    colors = greedy_face_coloring(
        lambda i: groups[i], 4, lambda a, b: (a, b) in adjacent, palette
    )
    assert colors[0] == (1.0, 0.0, 0.0)
    assert colors[1] == (0.0, 1.0, 0.0)
    assert colors[2] == colors[0]
    assert colors[3] == colors[0]


def test_face_segmentation_wireframes():
    verts = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 1.0, 0.0)]
    faces = [(0, 1, 2), (1, 3, 2)]
    split = face_segmentation_wireframes(lambda i: faces[i], lambda i: i, 2, verts, 0.01)
    assert len(split[0]) == 8
    assert split[1] == [(0.0, 0.0, 0.0)] * 8
    assert len(split[2]) == 4
    same = face_segmentation_wireframes(lambda i: faces[i], lambda i: 0, 2, verts, 0.01)
    assert same == ([], [], [])


def test_optional_edge_vector_visualization_quad():
    verts = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    quad = (0, 1, 2, 3)
    new_vs, new_vc, new_fs = optional_edge_vector_visualization(
        lambda _i: quad, 1, verts, lambda e: (float(e[0]), float(e[1]), 0.0)
    )
    assert len(new_vs) == 12
    assert len(new_vc) == 12
    assert new_fs == [(0, 1, 2), (3, 4, 5), (6, 7, 8), (9, 10, 11)]
    assert new_vs[0] == verts[0] and new_vs[1] == verts[1]
    assert new_vc[0] == (0.0, 1.0, 0.0)
    assert new_vc[9] == (3.0, 0.0, 0.0)
    # the tip lies inside the face, strictly closer to the centroid than the edge midpoint
    centroid = (0.5, 0.5, 0.0)
    assert dist(new_vs[2], centroid) < dist((0.5, 0.0, 0.0), centroid)