"""Small vector helpers and quaternion rotations.

Quaternions are stored as ``(x, y, z, w)`` with the scalar part last.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = Sequence[float]


def add(a: Vector, b: Vector) -> tuple[float, ...]:
    """Component-wise sum of two vectors."""
    return tuple(x + y for x, y in zip(a, b, strict=True))


def sub(a: Vector, b: Vector) -> tuple[float, ...]:
    """Component-wise difference ``a - b``."""
    return tuple(x - y for x, y in zip(a, b, strict=True))


def kmul(k: float, v: Vector) -> tuple[float, ...]:
    """Scale a vector by ``k``."""
    return tuple(k * x for x in v)


def dot(a: Vector, b: Vector) -> float:
    """Dot product of two vectors."""
    return sum(x * y for x, y in zip(a, b, strict=True))


def cross(a: Vector, b: Vector) -> tuple[float, float, float]:
    """Cross product of two 3-vectors."""
    ax, ay, az = a
    bx, by, bz = b
    return (ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)


def length(v: Vector) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Vector) -> tuple[float, ...]:
    """Unit vector in the direction of ``v``; the zero vector stays zero."""
    norm = length(v)
    if norm == 0.0:
        return tuple(0.0 for _ in v)
    return tuple(x / norm for x in v)


def dist(a: Vector, b: Vector) -> float:
    """Euclidean distance between two points."""
    return length(sub(a, b))


def conj(q: Vector) -> tuple[float, float, float, float]:
    """Conjugate of a quaternion, i.e. the inverse rotation of a unit quaternion."""
    x, y, z, w = q
    return (-x, -y, -z, w)


def quat_mul(r: Vector, s: Vector) -> tuple[float, float, float, float]:
    """Hamilton product ``r * s``."""
    r1, r2, r3, r0 = r
    s1, s2, s3, s0 = s
    return (
        r0 * s1 + r1 * s0 - r2 * s3 + r3 * s2,
        r0 * s2 + r1 * s3 + r2 * s0 - r3 * s1,
        r0 * s3 - r1 * s2 + r2 * s1 + r3 * s0,
        r0 * s0 - r1 * s1 - r2 * s2 - r3 * s3,
    )


def quat_rot(v: Vector, quat: Vector) -> tuple[float, float, float]:
    """Rotate the 3-vector ``v`` by ``quat``."""
    x, y, z = v
    a, b, c, _ = quat_mul(quat_mul(quat, (x, y, z, 0.0)), conj(quat))
    return (a, b, c)


def orthogonal(v: Vector) -> tuple[float, float, float]:
    """Some vector orthogonal to the non-zero vector ``v``."""
    if all(c == 0.0 for c in v):
        raise ValueError("cannot find an orthogonal vector to the zero vector")
    x, y, z = (abs(c) for c in v)
    if x <= y and x <= z:
        other = (1.0, 0.0, 0.0)
    elif y <= x and y <= z:
        other = (0.0, 1.0, 0.0)
    else:
        other = (0.0, 0.0, 1.0)
    return cross(v, other)


def axis_angle_rot(k: Vector, v: Vector, angle: float) -> tuple[float, ...]:
    """Rotate ``v`` around the unit axis ``k`` by ``angle`` (Rodrigues' formula)."""
    s, c = math.sin(angle), math.cos(angle)
    return add(
        kmul(c, v),
        add(kmul(s, cross(k, v)), kmul(dot(k, v) * (1.0 - c), k)),
    )


def quat_from_to(s: Vector, t: Vector) -> tuple[float, ...]:
    """Quaternion rotating the direction ``s`` onto the direction ``t``."""
    ns = normalize(s)
    d = dot(ns, normalize(t))
    if d < -1.0 + 1e-5:
        ox, oy, oz = normalize(orthogonal(ns))
        return (ox, oy, oz, 0.0)
    vx, vy, vz = cross(t, s)
    return normalize((vx, vy, vz, 1.0 + d))


def quat_from_axis_angle(axis: Vector, angle: float) -> tuple[float, float, float, float]:
    """Quaternion for a rotation of ``angle`` radians around ``axis``."""
    s = math.sin(angle / 2.0)
    x, y, z = (c * s for c in axis)
    return (x, y, z, math.cos(angle / 2.0))


def _check_orthogonal(fwd: Vector, up: Vector) -> None:
    if abs(dot(fwd, up)) >= 1e-4:
        raise ValueError("forward and up vectors must be orthogonal")


def quat_from_standard(fwd: Vector, up: Vector) -> tuple[float, float, float, float]:
    """Rotation taking the x axis to ``fwd`` and the y axis to ``up``."""
    _check_orthogonal(fwd, up)
    r0 = quat_from_to((1.0, 0.0, 0.0), fwd)
    r1 = quat_from_to(quat_rot((0.0, 1.0, 0.0), r0), up)
    return quat_mul(r1, r0)


def quat_from_basis(
    fwd: Vector, up: Vector, b0: Vector, b1: Vector
) -> tuple[float, float, float, float]:
    """Rotation taking ``b0`` to ``fwd`` and ``b1`` to ``up``."""
    _check_orthogonal(fwd, up)
    r0 = quat_from_to(b0, fwd)
    r1 = quat_from_to(quat_rot(b1, r0), up)
    return quat_mul(r1, r0)


def quat_to_mat(q: Vector) -> tuple[tuple[float, float, float], ...]:
    """Rows of the rotation matrix represented by a unit quaternion."""
    x, y, z, w = q
    qxx, qyy, qzz = x * x, y * y, z * z
    qxz, qxy, qyz = x * z, x * y, y * z
    qwx, qwy, qwz = w * x, w * y, w * z
    return (
        (1.0 - 2.0 * (qyy + qzz), 2.0 * (qxy - qwz), 2.0 * (qxz + qwy)),
        (2.0 * (qxy + qwz), 1.0 - 2.0 * (qxx + qzz), 2.0 * (qyz - qwx)),
        (2.0 * (qxz - qwy), 2.0 * (qyz + qwx), 1.0 - 2.0 * (qxx + qyy)),
    )