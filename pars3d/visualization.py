"""Colourings and wireframe geometry for visualising mesh data."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence

from .quat import add, cross, kmul, normalize, sub

Vec3 = tuple[float, float, float]
Wireframe = tuple[list[Vec3], list[Vec3], list[tuple[int, int, int, int]]]


def _edges(face: Sequence[int]) -> list[tuple[int, int]]:
    if not face:
        return []
    return list(zip(face, (*face[1:], face[0])))


def _neg(v: Sequence[float]) -> tuple[float, ...]:
    return tuple(-x for x in v)


def vertex_scalar_coloring(
    scalars: Sequence[float],
    color_fn: Callable[[float], Sequence[float]],
    isolevel_freq: float,
    isolevel_width: float,
    isolevel_color: Sequence[float],
) -> list[Vec3]:
    """Colour per-vertex scalars after rescaling them to [0, 1].

    Values whose position within an ``isolevel_freq`` band is below
    ``isolevel_width`` are blended toward ``isolevel_color``. A non-positive
    ``isolevel_freq`` disables isolines.
    """
    if not isolevel_freq < 1.0:
        raise ValueError("isolevel_freq must be less than 1")
    if not scalars:
        return []

    lo = min(scalars)
    hi = max(scalars)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ValueError("scalars must be finite")

    span = hi - lo
    apply_iso = isolevel_freq > 0.0
    out: list[Vec3] = []
    for s in scalars:
        new = (s - lo) / span if span != 0.0 else math.nan
        c = tuple(color_fn(new))
        if apply_iso:
            rem = math.fmod(new, isolevel_freq)
            if rem < isolevel_width:
                iso = rem / isolevel_freq
                if not 0.0 <= iso <= 1.0:
                    raise ValueError("isoline parameter out of range")
                iso = math.sqrt(iso)
                out.append(
                    tuple(iso * ic + (1.0 - iso) * cc for ic, cc in zip(isolevel_color, c))
                )
                continue
        out.append(c)
    return out


def face_coloring(face_group: Callable[[int], int], num_fs: int) -> list[Vec3]:
    """A pseudo-random colour per face, identical for faces in the same group."""
    colors = []
    for i in range(num_fs):
        g = face_group(i) + num_fs
        colors.append(
            tuple(math.sin((j * j + 1) * 33.31293 * g) * 0.5 + 0.5 for j in range(3))
        )
    return colors


def face_segmentation_wireframes(
    fs: Callable[[int], Sequence[int]],
    face_group: Callable[[int], int],
    nf: int,
    vertices: Sequence[Sequence[float]],
    width: float,
) -> Wireframe:
    """Black wireframe along edges that separate faces of different groups."""
    edge_faces: dict[tuple[int, int], list[int]] = {}
    for fi in range(nf):
        for e0, e1 in _edges(fs(fi)):
            adj = edge_faces.setdefault((min(e0, e1), max(e0, e1)), [])
            if fi not in adj:
                adj.append(fi)

    boundary = [
        edge
        for edge, adj in edge_faces.items()
        if len({face_group(fi) for fi in adj}) > 1
    ]
    return colored_wireframe(
        boundary, lambda vi: vertices[vi], lambda _e: (0.0, 0.0, 0.0), width
    )


def greedy_face_coloring(
    face_group: Callable[[int], int],
    num_fs: int,
    group_adj: Callable[[int, int], bool],
    palette: Sequence[Sequence[int]],
) -> list[Vec3]:
    """Colour face groups from ``palette`` so adjacent groups differ.

    Groups beyond the palette size reuse it with darkened colours.
    """
    uniq_groups: list[int] = []
    for fi in range(num_fs):
        g = face_group(fi)
        if g not in uniq_groups:
            uniq_groups.append(g)

    coloring: list[int] = []
    for i, gi in enumerate(uniq_groups):
        nbrs = {coloring[j] for j, gj in enumerate(uniq_groups[:i]) if group_adj(gi, gj)}
        color = 0
        while color in nbrs:
            color += 1
        coloring.append(color)

    n = len(palette)
    group_color = dict(zip(uniq_groups, coloring))
    out: list[Vec3] = []
    for fi in range(num_fs):
        ci = group_color[face_group(fi)]
        col = tuple(c / 255.0 for c in palette[ci % n])
        if ci >= n:
            power = ci // n
            col = tuple(c**power for c in col)
        out.append(col)
    return out


def optional_edge_vector_visualization(
    fs: Callable[[int], Sequence[int]],
    nf: int,
    vs: Sequence[Sequence[float]],
    edge_value: Callable[[tuple[int, int]], Sequence[float]],
) -> tuple[list[Vec3], list[Vec3], list[tuple[int, int, int]]]:
    """One coloured triangle per face edge, pointing toward the face centroid."""
    new_vs: list[Vec3] = []
    new_vc: list[Vec3] = []
    new_fs: list[tuple[int, int, int]] = []

    for fi in range(nf):
        face = fs(fi)
        centroid = (0.0, 0.0, 0.0)
        for vi in face:
            centroid = add(centroid, vs[vi])
        centroid = kmul(1.0 / len(face), centroid)

        for e0, e1 in _edges(face):
            base = len(new_vs)
            midpoint = kmul(0.5, add(vs[e0], vs[e1]))
            midpoint = add(kmul(0.2, centroid), kmul(0.8, midpoint))
            new_vs.extend((tuple(vs[e0]), tuple(vs[e1]), midpoint))
            color = tuple(edge_value((e0, e1)))
            new_vc.extend((color, color, color))
            new_fs.append((base, base + 1, base + 2))

    return new_vs, new_vc, new_fs


def _non_parallel(v: Sequence[float]) -> Vec3:
    x, y, z = v
    if abs(x - y) > 1e-3:
        return (y, x, z)
    if abs(x - z) > 1e-3:
        return (z, y, x)
    if abs(y - z) > 1e-3:
        return (x, z, y)
    return (-x, y, z)


def _ring(center: Sequence[float], t: Sequence[float], b: Sequence[float]) -> list[Vec3]:
    return [add(center, t), add(center, b), add(center, _neg(t)), add(center, _neg(b))]


def _quads(c: int) -> list[tuple[int, int, int, int]]:
    return [(c + i, c + (i + 1) % 4, c + (i + 1) % 4 + 4, c + i + 4) for i in range(4)]


def colored_wireframe(
    edges: Iterable[tuple[int, int]],
    vs: Callable[[int], Sequence[float]],
    edge_value: Callable[[tuple[int, int]], Sequence[float]],
    width: float,
) -> Wireframe:
    """A square tube of quads around each edge, coloured per edge.

    Zero-length edges are skipped.
    """
    new_vs: list[Vec3] = []
    new_vc: list[Vec3] = []
    new_fs: list[tuple[int, int, int, int]] = []

    for e0i, e1i in edges:
        color = tuple(edge_value((e0i, e1i)))
        e0, e1 = vs(e0i), vs(e1i)
        e_dir = normalize(sub(e1, e0))
        if all(c == 0.0 for c in e_dir):
            continue
        t = normalize(cross(e_dir, _non_parallel(e_dir)))
        b = normalize(cross(e_dir, t))
        t, b = kmul(width, t), kmul(width, b)
        c = len(new_vs)
        new_vs.extend(_ring(e0, t, b))
        new_vs.extend(_ring(e1, t, b))
        new_vc.extend([color] * 8)
        new_fs.extend(_quads(c))

    return new_vs, new_vc, new_fs


def per_vertex_colored_wireframe(
    nv: int,
    vs: Callable[[int], tuple[Sequence[float], Sequence[float], float]],
) -> Wireframe:
    """A tube along a polyline whose vertices carry position, colour and width."""
    if nv <= 1:
        raise ValueError("a polyline needs at least two vertices")
    new_vs: list[Vec3] = []
    new_vc: list[Vec3] = []
    new_fs: list[tuple[int, int, int, int]] = []

    last: int | None = None
    for vi in range(nv):
        ei, vc, width = vs(vi)
        if last is not None:
            origin = vs(last)[0]
        else:
            origin = sub(kmul(2.0, ei), vs(1)[0])
        e_dir = normalize(sub(ei, origin))
        if all(c == 0.0 for c in e_dir):
            continue
        last = vi
        t, b = basis(e_dir)
        t, b = kmul(width, t), kmul(width, b)
        new_vs.extend(_ring(ei, t, b))
        new_vc.extend([tuple(vc)] * 4)
        if vi == 0:
            continue
        if len(new_vs) < 8:
            raise ValueError("degenerate polyline start")
        new_fs.extend(_quads(len(new_vs) - 8))

    return new_vs, new_vc, new_fs


def basis(v: Sequence[float]) -> tuple[Vec3, Vec3]:
    """Two unit vectors that with the unit vector ``v`` form an orthonormal basis."""
    x, y, z = v
    sign = math.copysign(1.0, z)
    a = -1.0 / (sign + z)
    b = x * y * a
    return (
        (1.0 + sign * x * x * a, sign * b, -sign * x),
        (b, sign + y * y * a, -y),
    )