"""Small 2D/3D vector, quaternion and transform types."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vec2:
    """Two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance_squared(self, other: Vec2) -> float:
        return (self - other).length_squared()

    def normalize_or(self, fallback: Vec2) -> Vec2:
        """Unit vector in the same direction, or ``fallback`` if that is impossible."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return fallback
        return self / length

    def to_angle(self) -> float:
        """Angle from the positive x axis, in radians."""
        return math.atan2(self.y, self.x)


Vec2.ZERO = Vec2(0.0, 0.0)  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Vec3:
    """Three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vec3:
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / length

    def distance_squared(self, other: Vec3) -> float:
        d = self - other
        return d.x * d.x + d.y * d.y + d.z * d.z


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)  # type: ignore[attr-defined]
Vec3.X = Vec3(1.0, 0.0, 0.0)  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Quat:
    """Rotation quaternion (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_rotation_z(cls, angle: float) -> Quat:
        half = angle / 2.0
        return cls(0.0, 0.0, math.sin(half), math.cos(half))

    @classmethod
    def from_euler_xyz(cls, a: float, b: float, c: float) -> Quat:
        """Rotation about x by ``a``, then y by ``b``, then z by ``c`` (intrinsic)."""
        qx = cls(math.sin(a / 2), 0.0, 0.0, math.cos(a / 2))
        qy = cls(0.0, math.sin(b / 2), 0.0, math.cos(b / 2))
        qz = cls(0.0, 0.0, math.sin(c / 2), math.cos(c / 2))
        return qx * qy * qz

    def __mul__(self, o: Quat) -> Quat:
        return Quat(
            self.w * o.x + self.x * o.w + self.y * o.z - self.z * o.y,
            self.w * o.y - self.x * o.z + self.y * o.w + self.z * o.x,
            self.w * o.z + self.x * o.y - self.y * o.x + self.z * o.w,
            self.w * o.w - self.x * o.x - self.y * o.y - self.z * o.z,
        )

    def mul_vec3(self, vector: Vec3) -> Vec3:
        q = Vec3(self.x, self.y, self.z)
        t = q.cross(vector) * 2.0
        return vector + t * self.w + q.cross(t)

    def z_angle(self) -> float:
        """Heading in the xy plane of the rotated x axis, in radians."""
        return self.mul_vec3(Vec3(1.0, 0.0, 0.0)).xy().to_angle()


Quat.IDENTITY = Quat()  # type: ignore[attr-defined]


@dataclass
class Transform:
    """Local position and rotation of an entity."""

    translation: Vec3 = field(default_factory=Vec3)
    rotation: Quat = field(default_factory=Quat)

    @classmethod
    def from_translation(cls, translation: Vec3) -> Transform:
        return cls(translation=translation)


@dataclass(frozen=True)
class GlobalTransform:
    """World-space position and rotation of an entity."""

    translation: Vec3 = field(default_factory=Vec3)
    rotation: Quat = field(default_factory=Quat)

    @classmethod
    def from_transform(cls, transform: Transform) -> GlobalTransform:
        return cls(transform.translation, transform.rotation)

    def mul_transform(self, transform: Transform) -> GlobalTransform:
        """World transform of a child with local ``transform``."""
        return GlobalTransform(
            self.translation + self.rotation.mul_vec3(transform.translation),
            self.rotation * transform.rotation,
        )