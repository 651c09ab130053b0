"""Path helpers and mesh file format detection."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path


def rel_path_btwn(src: str | os.PathLike, dst: str | os.PathLike) -> Path:
    """Relative path leading from ``src`` (or its directory, if a file) to ``dst``.

    Both paths must exist; a missing path raises ``FileNotFoundError``.
    """
    abs_src = Path(src).resolve(strict=True)
    abs_dst = Path(dst).resolve(strict=True)

    curr = abs_src.parent if abs_src.is_file() else abs_src
    num_parents = 0
    while not abs_dst.is_relative_to(curr):
        if curr.parent == curr:
            raise ValueError(
                f"No relative path between absolute paths {abs_src}->{abs_dst}"
            )
        num_parents += 1
        curr = curr.parent

    prefix = abs_dst.relative_to(curr)
    return Path(*[".."] * num_parents) / prefix


class FileFormat(Enum):
    """Mesh file formats recognised by extension."""

    GLB = "glb"
    FBX = "fbx"
    OBJ = "obj"
    PLY = "ply"
    STL = "stl"
    OFF = "off"
    UNKNOWN = "unknown"


def extension_to_format(path: str | os.PathLike) -> FileFormat:
    """Guess the file format from a path's extension, case-insensitively."""
    suffix = Path(path).suffix
    if not suffix:
        return FileFormat.UNKNOWN
    ext = suffix[1:].lower()
    for fmt in FileFormat:
        if fmt is not FileFormat.UNKNOWN and fmt.value == ext:
            return fmt
    return FileFormat.UNKNOWN