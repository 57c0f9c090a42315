"""Basic vector types and the face-vertex mesh container."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

_EPSILON = 1e-12


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length < _EPSILON:
            return Vec3()
        return self / length

    def dot(self, other: Vec3) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Cross product (right-handed)."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


@dataclass(frozen=True)
class Vec2:
    """An immutable two-component vector, used for texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass
class Vertex:
    """A mesh vertex with position, normal and texture coordinate."""

    position: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    tex_coord: Vec2 = field(default_factory=Vec2)


@dataclass
class Mesh:
    """A vertex list with an optional triangle index list."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    def bounding_box(self) -> tuple[Vec3, Vec3]:
        """Axis-aligned bounds of the vertex positions as (minimum, maximum)."""
        if not self.vertices:
            raise ValueError("an empty mesh has no bounding box")
        xs, ys, zs = zip(*(tuple(v.position) for v in self.vertices))
        return Vec3(min(xs), min(ys), min(zs)), Vec3(max(xs), max(ys), max(zs))

    def triangle_count(self) -> int:
        """Number of complete triangles described by the index list."""
        return len(self.indices) // 3