"""Conversions between angles, vectors and quaternions."""

from __future__ import annotations

import math

from .geometry import Quat, Vec2, Vec3


def rad_to_vec2(rad: float) -> Vec2:
    return Vec2(math.cos(rad), math.sin(rad))


def rad_to_quat(rad: float) -> Quat:
    return Quat.from_rotation_z(rad)


def vec2_to_quat(vec2: Vec2) -> Quat:
    return Quat.from_euler_xyz(vec2.x, vec2.y, 0.0)


def quat_to_vec3(quat: Quat) -> Vec3:
    return quat.mul_vec3(Vec3(1.0, 0.0, 0.0)).normalize()


def quat_to_vec2(quat: Quat) -> Vec2:
    return quat_to_vec3(quat).xy()