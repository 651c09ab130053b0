"""Render a UV layout as an SVG drawing."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from collections.abc import Sequence

_SIZE = 2048.0
_SVG_NS = "http://www.w3.org/2000/svg"


def _num(x: float) -> str:
    x = float(x)
    return str(int(x)) if x.is_integer() else repr(x)


def _point(uv: Sequence[float]) -> str:
    u, v = uv
    return f"{_num(u * _SIZE)},{_num(v * _SIZE)}"


def save_uv(
    dst: str | os.PathLike,
    uvs: Sequence[Sequence[float]],
    faces: Sequence[Sequence[int]],
    stroke_width: float,
) -> None:
    """Write each face's UV outline as a closed path on a 2048x2048 canvas."""
    doc = ET.Element(
        "svg",
        {"xmlns": _SVG_NS, "viewBox": " ".join(_num(c) for c in (0, 0, _SIZE, _SIZE))},
    )
    for face in faces:
        if not face:
            continue
        first = _point(uvs[face[0]])
        parts = [f"M{first}"]
        parts.extend(f"L{_point(uvs[vi])}" for vi in face[1:])
        parts.append(f"L{first}")
        parts.append("z")
        ET.SubElement(
            doc,
            "path",
            {
                "fill": "none",
                "stroke": "black",
                "stroke-width": _num(stroke_width),
                "d": " ".join(parts),
            },
        )
    ET.ElementTree(doc).write(os.fspath(dst), encoding="utf-8")