import xml.etree.ElementTree as ET

import pytest

from pars3d.uv_svg import save_uv

UVS = [(0.0, 0.0), (0.5, 0.0), (0.5, 0.25), (0.0, 0.75), (1.0, 1.0)]


def _paths(path):
    root = ET.parse(path).getroot()
    return root, [e for e in root.iter() if e.tag.endswith("path")]


def _points(d):
    tokens = d.split()
    assert tokens[0].startswith("M")
    assert tokens[-1] == "z"
    pts = []
    for tok in tokens[:-1]:
        u, v = tok[1:].split(",")
        pts.append((float(u) / 2048.0, float(v) / 2048.0))
    return pts


def test_one_path_per_nonempty_face(tmp_path):
    dst = tmp_path / "uv.svg"
    save_uv(dst, UVS, [(0, 1, 2), (), (0, 2, 3, 4)], 1.0)
    _, paths = _paths(dst)
    assert len(paths) == 2


def test_path_coordinates_round_trip(tmp_path):
    dst = tmp_path / "uv.svg"
    face = (0, 2, 3, 4)
    save_uv(dst, UVS, [face], 1.0)
    _, paths = _paths(dst)
    pts = _points(paths[0].get("d"))
    expected = [UVS[vi] for vi in face] + [UVS[face[0]]]
    assert pts == pytest.approx(expected)


def test_view_box_and_style(tmp_path):
    dst = tmp_path / "uv.svg"
    save_uv(str(dst), UVS, [(0, 1, 2)], 0.5)
    root, paths = _paths(dst)
    assert root.get("viewBox") == "0 0 2048 2048"
    assert paths[0].get("fill") == "none"
    assert paths[0].get("stroke") == "black"
    assert float(paths[0].get("stroke-width")) == 0.5


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        save_uv(tmp_path / "missing" / "uv.svg", UVS, [(0, 1, 2)], 1.0)