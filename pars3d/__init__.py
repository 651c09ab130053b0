"""Mesh utilities: vector and quaternion maths, ASCII PLY/STL and VRML geometry I/O, quadrangulation, UV SVG export and visualization helpers."""

__version__ = "0.1.0"
__all__ = [
    "quat",
    "util",
    "tri_to_quad",
    "uv_svg",
    "visualization",
    "ply",
    "stl",
    "vrml",
]