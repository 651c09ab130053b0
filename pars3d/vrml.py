"""Geometry-only reading of VRML files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

Line = Union[str, bytes]

_UINT = re.compile(r"\+?[0-9]+", re.ASCII)


@dataclass
class Shape:
    """A single indexed triangle set."""

    ccw: bool = False
    solid: bool = False
    convex: bool = False
    points: list[tuple[float, float, float]] = field(default_factory=list)
    indices: list[tuple[int, ...]] = field(default_factory=list)


@dataclass
class Child:
    """A child node of a group, holding one shape."""

    shape: Shape = field(default_factory=Shape)


@dataclass
class Group:
    """A group of child nodes."""

    children: list[Child] = field(default_factory=list)


@dataclass
class Vrml:
    """The geometry of a VRML scene, organised into groups."""

    groups: list[Group] = field(default_factory=list)


@dataclass
class VrmlGeometryOnly:
    """Shapes recovered from a VRML file by scanning for coordinate and index rows."""

    shapes: list[Shape] = field(default_factory=list)

    def to_vrml(self) -> Vrml:
        """Wrap each shape in its own single-child group."""
        return Vrml(groups=[Group(children=[Child(shape=s)]) for s in self.shapes])


def _is_float(token: str) -> bool:
    if "_" in token:
        return False
    try:
        float(token)
    except ValueError:
        return False
    return True


def _parse_index(token: str) -> int:
    if not _UINT.fullmatch(token):
        raise ValueError(f"Invalid vertex index {token!r}")
    return int(token)


def _lines(stream: Iterable[Line]) -> Iterator[str]:
    for raw in stream:
        yield raw.decode("utf-8") if isinstance(raw, bytes) else raw


def read(stream: Iterable[Line]) -> VrmlGeometryOnly:
    """Collect point and triangle-index rows from VRML text.

    Rows of three numbers containing a decimal point are points; other rows of
    three numbers are triangle indices. A point row after index rows starts a
    new shape.
    """
    out = VrmlGeometryOnly()
    curr = Shape()
    prev_was_float = True
    for line in _lines(stream):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        tokens = [t.rstrip(",") for t in line.split()[:3]]
        if len(tokens) < 3 or not all(_is_float(t) for t in tokens):
            continue
        if any("." in t for t in tokens):
            if not prev_was_float:
                out.shapes.append(curr)
                curr = Shape()
                prev_was_float = True
            curr.points.append(tuple(float(t) for t in tokens))
        else:
            prev_was_float = False
            curr.indices.append(tuple(_parse_index(t) for t in tokens))

    if curr.points:
        out.shapes.append(curr)
    return out


def read_from_file(path: str | os.PathLike) -> VrmlGeometryOnly:
    """Read the geometry of a VRML file."""
    with open(path, encoding="utf-8") as stream:
        return read(stream)