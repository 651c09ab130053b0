"""Reading and writing ASCII STL meshes."""

from __future__ import annotations

import math
import os
import struct
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import IO, Union

Vec3 = tuple[float, float, float]
Line = Union[str, bytes]

_ZERO: Vec3 = (0.0, 0.0, 0.0)
_U64_MAX = 2**64 - 1


@dataclass
class StlFace:
    """One triangle of an STL mesh with its facet normal."""

    pos: tuple[Vec3, Vec3, Vec3] = (_ZERO, _ZERO, _ZERO)
    normal: Vec3 = _ZERO


@dataclass
class Stl:
    """A named list of triangles, as stored in an STL file."""

    name: str = ""
    faces: list[StlFace] = field(default_factory=list)

    def to_tri_mesh(
        self, merge_distance: float
    ) -> tuple[list[Vec3], list[tuple[int, int, int]]]:
        """Index the triangle soup, sharing vertices that fall on the same key.

        With ``merge_distance`` zero only bit-identical positions are shared;
        otherwise positions are bucketed by truncating ``coord / merge_distance``
        to a non-negative integer.
        """

        def key(v: Sequence[float]) -> tuple[int, ...]:
            if merge_distance == 0.0:
                return tuple(_float_bits(c) for c in v)
            return tuple(_saturating_uint(c / merge_distance) for c in v)

        seen: dict[tuple[int, ...], int] = {}
        verts: list[Vec3] = []
        faces: list[tuple[int, int, int]] = []
        for face in self.faces:
            indices = []
            for v in face.pos:
                k = key(v)
                if k not in seen:
                    seen[k] = len(verts)
                    verts.append(tuple(v))
                indices.append(seen[k])
            faces.append(tuple(indices))
        return verts, faces


def _float_bits(x: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", x))[0]


def _saturating_uint(x: float) -> int:
    if math.isnan(x) or x <= 0.0:
        return 0
    if math.isinf(x):
        return _U64_MAX
    return min(int(x), _U64_MAX)


def _fmt_float(x: float) -> str:
    """Shortest decimal form of ``x`` without exponent; integral values have no point."""
    x = float(x)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    text = format(Decimal(repr(x)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _lines(stream: Iterable[Line]) -> Iterator[str]:
    for raw in stream:
        yield raw.decode("utf-8") if isinstance(raw, bytes) else raw


def _vec3(tokens: Iterator[str], line: str) -> Vec3:
    try:
        return tuple(float(next(tokens)) for _ in range(3))
    except (StopIteration, RuntimeError):
        raise ValueError(f"Expected three numbers in line: {line.strip()}") from None


def read(stream: Iterable[Line]) -> Stl:
    """Parse an ASCII STL mesh from a text stream or any iterable of lines."""
    name = ""
    faces: list[StlFace] = []
    positions: list[Vec3] = [_ZERO, _ZERO, _ZERO]
    normal: Vec3 = _ZERO
    curr_vi = 0

    for line in _lines(stream):
        tokens = iter(line.split())
        first = next(tokens, None)
        if first is None:
            continue
        if first == "solid":
            given = next(tokens, None)
            if given is not None:
                name = given
        elif first in ("endsolid", "endloop"):
            pass
        elif first == "facet":
            if next(tokens, None) != "normal":
                raise ValueError(f"Expected 'facet normal': {line.strip()}")
            if curr_vi != 0:
                raise ValueError("Facet started before previous facet had 3 vertices")
            normal = _vec3(tokens, line)
        elif first == "vertex":
            positions[curr_vi] = _vec3(tokens, line)
            curr_vi = (curr_vi + 1) % 3
        elif first == "outer":
            if next(tokens, None) != "loop":
                raise ValueError(f"Expected 'outer loop': {line.strip()}")
        elif first == "endfacet":
            faces.append(StlFace(pos=tuple(positions), normal=normal))
            positions = [_ZERO, _ZERO, _ZERO]
            normal = _ZERO
        else:
            raise ValueError(f"Unknown line: {line.rstrip()}")
    return Stl(name=name, faces=faces)


def read_from_file(path: str | os.PathLike) -> Stl:
    """Read an ASCII STL mesh from a file."""
    with open(path, encoding="utf-8") as stream:
        return read(stream)


def write(stl: Stl, out: IO[str]) -> None:
    """Write ``stl`` as ASCII STL to a text stream."""
    out.write(f"solid {stl.name}\n")
    for face in stl.faces:
        out.write("facet normal " + " ".join(_fmt_float(c) for c in face.normal) + "\n")
        out.write("outer loop\n")
        for v in face.pos:
            out.write("vertex " + " ".join(_fmt_float(c) for c in v) + "\n")
        out.write("endloop\n")
        out.write("endfacet\n")