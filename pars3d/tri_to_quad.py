"""Merge pairs of adjacent, nearly coplanar triangles into quads."""

from __future__ import annotations

import heapq
import math
from collections.abc import Sequence
from enum import Enum

from .quat import cross, dot, length, normalize, sub

_HALF_PI = math.pi / 2.0


class QuadPreference(Enum):
    """Metric used to rank candidate quads."""

    RIGHT_ANGLE = "right_angle"
    """Prefer quads whose corners are close to right angles."""
    SYMMETRIC = "symmetric"
    """Prefer quads whose opposite angles are most similar."""


def _edges(face: Sequence[int]):
    if not face:
        return []
    return list(zip(face, (*face[1:], face[0])))


def _edge_key(e0: int, e1: int) -> tuple[int, int]:
    return (e0, e1) if e0 <= e1 else (e1, e0)


def _insert(kind, fi):
    """Add face ``fi`` to an edge's adjacency; ``None`` marks a non-manifold edge."""
    if kind is None:
        return None
    if len(kind) == 1:
        return kind if kind[0] == fi else (kind[0], fi)
    return kind if fi in kind else None


def _tri_area(a, b, c) -> float:
    return 0.5 * length(cross(sub(b, a), sub(c, a)))


def _quad_area(v0, v1, v2, v3) -> float:
    return _tri_area(v0, v1, v2) + _tri_area(v0, v2, v3)


def _angle(a, corner, b) -> float:
    cos = dot(normalize(sub(a, corner)), normalize(sub(b, corner)))
    return math.acos(min(1.0, max(-1.0, cos)))


def _neg(seq):
    return tuple(-x for x in seq)


def quadrangulate(
    vs: Sequence[Sequence[float]],
    faces: Sequence[Sequence[int]],
    planarity_eps: float,
    angle_eps: float,
    quad_pref: QuadPreference,
) -> tuple[list[tuple[int, ...]], list[tuple[int, int | None]]]:
    """Greedily merge triangle pairs into quads.

    Returns the new faces and, for each of them, the original face indices it
    came from: ``(a, b)`` for a merged quad or ``(i, None)`` for a kept face.
    """
    edge_adj: dict[tuple[int, int], tuple[int, ...] | None] = {}
    tri_normals = [(0.0, 0.0, 0.0)] * len(faces)

    for fi, face in enumerate(faces):
        if len(face) != 3:
            for e0, e1 in _edges(face):
                edge_adj[_edge_key(e0, e1)] = None
            continue
        for e0, e1 in _edges(face):
            key = _edge_key(e0, e1)
            edge_adj[key] = _insert(edge_adj[key], fi) if key in edge_adj else (fi,)
        v0, v1, v2 = (vs[vi] for vi in face)
        tri_normals[fi] = normalize(cross(sub(v2, v0), sub(v1, v0)))

    merge_heap = []
    for (e0, e1), kind in edge_adj.items():
        if kind is None or len(kind) != 2:
            continue
        a, b = kind
        align = dot(tri_normals[a], tri_normals[b])
        if align < 1.0 - planarity_eps:
            continue

        tri_a = list(faces[a])
        tri_b = list(faces[b])
        corner_a = next((v for v in tri_a if v != e0 and v != e1), None)
        if corner_a is None:
            continue
        corner_b = next((v for v in tri_b if v != e0 and v != e1), None)
        if corner_b is None or corner_a == corner_b:
            continue

        start = tri_a.index(corner_a)
        tri_a = tri_a[start:] + tri_a[:start]
        quad = (tri_a[0], tri_a[1], corner_b, tri_a[2])
        q0, q1, q2, q3 = (vs[vi] for vi in quad)

        area_a = _tri_area(*(vs[vi] for vi in tri_a))
        area_b = _tri_area(*(vs[vi] for vi in tri_b))
        if area_a < 1e-12 or area_b < 1e-12:
            continue
        if abs(area_a + area_b - _quad_area(q0, q1, q2, q3)) > 1e-4:
            continue

        angle0 = _angle(q0, q1, q2)
        angle1 = _angle(q2, q3, q0)
        if quad_pref is QuadPreference.RIGHT_ANGLE:
            delta0 = abs(angle0 - _HALF_PI)
            if delta0 > angle_eps:
                continue
            delta1 = abs(angle1 - _HALF_PI)
            if delta1 > angle_eps:
                continue
            metric = delta0 * delta1
        else:
            metric = abs(angle0 - angle1)
            if metric > angle_eps:
                continue

        # Best first: lowest angle metric, then highest alignment.
        key = (metric, -align, _neg(quad), _neg((a, b)))
        heapq.heappush(merge_heap, (key, metric, align, quad, (a, b)))

    new_faces: list[tuple[int, ...]] = []
    merged: list[tuple[int, int | None]] = []
    deleted = [False] * len(faces)
    snd_heap = []

    def push_snd(metric, align, quad, pair):
        # Within a band of similar angle metrics, prefer alignment first.
        key = (-align, metric, _neg(quad), _neg(pair))
        heapq.heappush(snd_heap, (key, metric, align, quad, pair))

    while merge_heap:
        _, metric, align, quad, pair = heapq.heappop(merge_heap)
        push_snd(metric, align, quad, pair)

        while snd_heap:
            _, metric, _, quad, (a, b) = heapq.heappop(snd_heap)
            if deleted[a] or deleted[b]:
                continue
            deleted[a] = deleted[b] = True
            new_faces.append(quad)
            merged.append((a, b))

            while merge_heap and abs(merge_heap[0][1] - metric) < 1e-3:
                _, n_metric, n_align, n_quad, n_pair = heapq.heappop(merge_heap)
                push_snd(n_metric, n_align, n_quad, n_pair)

    kept = [i for i, gone in enumerate(deleted) if not gone]
    new_faces.extend(faces[i] for i in kept)
    merged.extend((i, None) for i in kept)
    return new_faces, merged