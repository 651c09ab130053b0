"""Reading and writing ASCII PLY meshes."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from decimal import Decimal
from typing import IO, Union

logger = logging.getLogger(__name__)

Line = Union[str, bytes]

# Property name -> (vertex attribute, component index); alpha is accepted but ignored.
_FIELD_SLOTS: dict[str, tuple[str, int] | None] = {
    "x": ("pos", 0),
    "y": ("pos", 1),
    "z": ("pos", 2),
    "nx": ("normal", 0),
    "ny": ("normal", 1),
    "nz": ("normal", 2),
    "s": ("uv", 0),
    "t": ("uv", 1),
    "red": ("color", 0),
    "green": ("color", 1),
    "blue": ("color", 2),
    "alpha": None,
    "height": ("height", 0),
}
_PROPERTY_TYPES = ("uchar", "float")


class PlyError(ValueError):
    """Raised when PLY input cannot be parsed."""


@dataclass
class Ply:
    """An ASCII PLY mesh with optional per-vertex normals, UVs, colours and heights."""

    v: list[tuple[float, float, float]] = field(default_factory=list)
    vc: list[tuple[int, int, int]] = field(default_factory=list)
    n: list[tuple[float, float, float]] = field(default_factory=list)
    uv: list[tuple[float, float]] = field(default_factory=list)
    f: list[tuple[int, ...]] = field(default_factory=list)
    height: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._check_lengths()

    def _check_lengths(self) -> None:
        nv = len(self.v)
        for name, values in (
            ("vertex colors", self.vc),
            ("normals", self.n),
            ("uv", self.uv),
            ("height", self.height),
        ):
            if values and len(values) != nv:
                raise ValueError(f"Mismatch between #vertices and #{name}")

    def write(self, out: IO[str]) -> None:
        """Write this mesh as ASCII PLY to a text stream."""
        self._check_lengths()
        header = [
            "ply",
            "format ascii 1.0",
            f"element vertex {len(self.v)}",
            "property float x",
            "property float y",
            "property float z",
        ]
        if self.n:
            header.extend(f"property float {p}" for p in ("nx", "ny", "nz"))
        if self.uv:
            header.extend(f"property float {p}" for p in ("s", "t"))
        if self.vc:
            header.extend(f"property uchar {p}" for p in ("red", "green", "blue"))
        if self.height:
            header.append("property float height")
        header.append(f"element face {len(self.f)}")
        header.append("property list uchar int vertex_indices")
        header.append("end_header")
        out.write("\n".join(header) + "\n")

        for vi, pos in enumerate(self.v):
            parts = [_fmt_float(c) for c in pos]
            if self.n:
                parts.extend(_fmt_float(c) for c in self.n[vi])
            if self.uv:
                parts.extend(_fmt_float(c) for c in self.uv[vi])
            if self.vc:
                parts.extend(str(int(c)) for c in self.vc[vi])
            if self.height:
                parts.append(_fmt_float(self.height[vi]))
            out.write(" ".join(parts) + "\n")

        for face in self.f:
            out.write(f"{len(face)} ")
            if not face:
                continue
            out.write(" ".join(str(vi) for vi in face) + "\n")


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


def _parse_uint(token: str, what: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise PlyError(f"{what} could not be parsed") from None
    if value < 0 or "_" in token:
        raise PlyError(f"{what} could not be parsed")
    return value


def _parse_float(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise PlyError(f"Invalid float value {token!r}") from None


def _parse_u8(token: str) -> int:
    value = _parse_uint(token, f"Colour value {token!r}")
    if value > 255:
        raise PlyError(f"Colour value {token!r} out of range")
    return value


def _content_lines(stream: Iterable[Line]) -> Iterator[str]:
    for raw in stream:
        line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        line = line.rstrip("\n").rstrip("\r")
        if line.strip().startswith("comment"):
            continue
        yield line


def _parse_element(line: str, kind: str) -> int:
    tokens = line.split()
    if not tokens or tokens[0] != "element":
        raise PlyError("Missing 'element'")
    if len(tokens) < 2 or tokens[1] != kind:
        raise PlyError(f"Missing '{kind}'")
    if len(tokens) < 3:
        raise PlyError(f"Missing {kind} count")
    return _parse_uint(tokens[2], f"{kind.capitalize()} count")


def _parse_property(line: str) -> str:
    tokens = line.split()
    if not tokens or tokens[0] != "property":
        raise PlyError("Missing 'property'")
    if len(tokens) < 2:
        raise PlyError("Missing type of property")
    if tokens[1] not in _PROPERTY_TYPES:
        raise PlyError("Unknown property kind")
    if len(tokens) < 3:
        raise PlyError("Missing property name")
    if tokens[2] not in _FIELD_SLOTS:
        raise PlyError("Unknown property name")
    return tokens[2]


def _check_face_list(line: str) -> None:
    tokens = line.split()
    expected = ["property", "list", "uchar", "int"]
    if tokens[:4] != expected:
        raise PlyError(
            f"Unknown face property list, got {tokens[:4]}, expected {expected}"
        )
    if len(tokens) < 5 or tokens[4] not in ("vertex_index", "vertex_indices"):
        raise PlyError("Face property list must be named vertex_index or vertex_indices")


def _parse_vertex(line: str, fields: list[str]) -> dict[str, list]:
    values: dict[str, list] = {
        "pos": [0.0, 0.0, 0.0],
        "normal": [0.0, 0.0, 0.0],
        "uv": [0.0, 0.0],
        "color": [0, 0, 0],
        "height": [0.0],
    }
    tokens = line.split()
    if len(tokens) > len(fields):
        raise PlyError("More vertex values than declared properties")
    for name, token in zip(fields, tokens):
        slot = _FIELD_SLOTS[name]
        if slot is None:
            continue
        group, index = slot
        values[group][index] = _parse_u8(token) if group == "color" else _parse_float(token)
    return values


def _parse_face(line: str) -> tuple[int, ...] | None:
    tokens = line.split()
    if not tokens:
        raise PlyError("Missing face vertex count")
    count = _parse_uint(tokens[0], "Face vertex count")
    rest = tokens[1:]
    if count < 3:
        return None
    if count in (3, 4):
        if len(rest) < count:
            raise PlyError("Too few face indices")
        rest = rest[:count]
    return tuple(_parse_uint(t, "Face index") for t in rest)


def read_ply(stream: Iterable[Line]) -> Ply:
    """Parse an ASCII PLY mesh from a text stream or any iterable of lines.

    Input that ends early yields whatever was read up to that point.
    """
    lines = _content_lines(stream)
    ply = Ply()
    try:
        if next(lines) != "ply":
            raise PlyError("Expected ply as 1st line.")
        if next(lines) != "format ascii 1.0":
            raise PlyError("Unsupported ply format (only ascii supported)")
        num_v = _parse_element(next(lines), "vertex")

        fields: list[str] = []
        line = next(lines)
        while not line.startswith("element"):
            fields.append(_parse_property(line))
            line = next(lines)
        num_f = _parse_element(line, "face")

        has_color = any(name in ("red", "green", "blue") for name in fields)
        has_normal = any(name in ("nx", "ny", "nz") for name in fields)
        has_uv = any(name in ("s", "t") for name in fields)
        has_height = "height" in fields

        _check_face_list(next(lines))
        if next(lines) != "end_header":
            raise PlyError("Unknown end of header")

        for _ in range(num_v):
            values = _parse_vertex(next(lines), fields)
            ply.v.append(tuple(values["pos"]))
            if has_color:
                ply.vc.append(tuple(values["color"]))
            if has_normal:
                ply.n.append(tuple(values["normal"]))
            if has_uv:
                ply.uv.append(tuple(values["uv"]))
            if has_height:
                ply.height.append(values["height"][0])

        for _ in range(num_f):
            face = _parse_face(next(lines))
            if face is not None:
                ply.f.append(face)

        for extra in lines:
            logger.warning("Unexpected extra lines in PLY %s", extra)
    except StopIteration:
        pass
    return ply


def read_ply_file(path: str | os.PathLike) -> Ply:
    """Read an ASCII PLY mesh from a file."""
    with open(path, encoding="utf-8") as stream:
        return read_ply(stream)