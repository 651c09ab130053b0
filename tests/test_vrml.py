import io

import pytest

from pars3d.vrml import Child, Group, Shape, Vrml, VrmlGeometryOnly, read, read_from_file

TRIANGLE = """#VRML V2.0 utf8
Shape {
  geometry IndexedFaceSet {
    coord Coordinate {
      point [
        0.0 0.0 0.0,
        1.0 0.0 0.0,
        0.0 1.0 0.0,
      ]
    }
    coordIndex [
      0, 1, 2, -1,
    ]
  }
}
"""

TWO_SHAPES = """
point [
  0.0 0.0 0.0,
  1.5 0.0 0.0,
  0.0 2.5 0.0,
  1.0 1.0 0.0,
]
coordIndex [
  0, 1, 2, -1,
  1, 3, 2, -1,
]
point [
  5.0 5.0 5.0,
  6.0 5.0 5.0,
  5.0 6.0 5.0,
]
coordIndex [
  0, 1, 2, -1,
]
"""


def test_single_shape():
    geo = read(io.StringIO(TRIANGLE))
    assert len(geo.shapes) == 1
    shape = geo.shapes[0]
    assert shape.points == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert shape.indices == [(0, 1, 2)]


def test_points_after_indices_start_new_shape():
    geo = read(io.StringIO(TWO_SHAPES))
    assert len(geo.shapes) == 2
    first, second = geo.shapes
    assert len(first.points) == 4
    assert first.indices == [(0, 1, 2), (1, 3, 2)]
    assert second.points == [(5.0, 5.0, 5.0), (6.0, 5.0, 5.0), (5.0, 6.0, 5.0)]
    assert second.indices == [(0, 1, 2)]


def test_comments_and_short_lines_ignored():
    text = "# 1.0 2.0 3.0\n\n1.0 2.0\nfoo bar baz\n1.0 2.0 3.0\n"
    geo = read(io.StringIO(text))
    assert geo.shapes == [Shape(points=[(1.0, 2.0, 3.0)])]


def test_indices_without_points_produce_no_shape():
    geo = read(io.StringIO("0 1 2\n"))
    assert geo.shapes == []


def test_negative_index_raises():
    with pytest.raises(ValueError):
        read(io.StringIO("1 2 -3\n"))


def test_exponent_index_raises():
    with pytest.raises(ValueError):
        read(io.StringIO("1e3 2 3\n"))


def test_bytes_input():
    geo = read(io.BytesIO(TRIANGLE.encode("utf-8")))
    assert geo.shapes[0].indices == [(0, 1, 2)]


def test_read_from_file(tmp_path):
    path = tmp_path / "tri.wrl"
    path.write_text(TRIANGLE, encoding="utf-8")
    assert read_from_file(path) == read(io.StringIO(TRIANGLE))


def test_to_vrml_wraps_each_shape():
    geo = read(io.StringIO(TWO_SHAPES))
    vrml = geo.to_vrml()
    assert vrml == Vrml(groups=[Group(children=[Child(shape=s)]) for s in geo.shapes])
    assert [len(g.children) for g in vrml.groups] == [1, 1]


def test_empty_to_vrml():
    assert VrmlGeometryOnly().to_vrml().groups == []