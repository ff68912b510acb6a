"""Positioned scene entities, vectors, world matrices and sphere tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .objects import GameObject, ObjectRegistry

Matrix = tuple[tuple[float, float, float, float], ...]

DEFAULT_PRIORITY = 5


@dataclass(frozen=True)
class Vector3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector3:
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


def identity_matrix() -> Matrix:
    return tuple(
        tuple(1.0 if row == col else 0.0 for col in range(4)) for row in range(4)
    )


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product ``a * b``."""
    columns = tuple(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )


def scaling_matrix(scale: Vector3) -> Matrix:
    return (
        (scale.x, 0.0, 0.0, 0.0),
        (0.0, scale.y, 0.0, 0.0),
        (0.0, 0.0, scale.z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def translation_matrix(pos: Vector3) -> Matrix:
    """Translation for row vectors: the offset sits in the bottom row."""
    return (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (pos.x, pos.y, pos.z, 1.0),
    )


def rotation_yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> Matrix:
    """Rotation by roll about Z, then pitch about X, then yaw about Y."""
    cr, sr = math.cos(roll), math.sin(roll)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    about_z = ((cr, sr, 0.0, 0.0), (-sr, cr, 0.0, 0.0), (0.0, 0.0, 1.0, 0.0), (0.0, 0.0, 0.0, 1.0))
    about_x = ((1.0, 0.0, 0.0, 0.0), (0.0, cp, sp, 0.0), (0.0, -sp, cp, 0.0), (0.0, 0.0, 0.0, 1.0))
    about_y = ((cy, 0.0, -sy, 0.0), (0.0, 1.0, 0.0, 0.0), (sy, 0.0, cy, 0.0), (0.0, 0.0, 0.0, 1.0))
    return multiply(multiply(about_z, about_x), about_y)


def world_matrix(pos: Vector3, rot: Vector3, scale: Vector3 = Vector3(1.0, 1.0, 1.0)) -> Matrix:
    """Scale, then rotate (yaw=rot.y, pitch=rot.x, roll=rot.z), then translate."""
    result = multiply(scaling_matrix(scale), rotation_yaw_pitch_roll(rot.y, rot.x, rot.z))
    return multiply(result, translation_matrix(pos))


def spheres_collide(
    mypos: Vector3, partnerpos: Vector3, myradius: float, partnerradius: float
) -> bool:
    """True when the centres are closer than the sum of the radii."""
    return (mypos - partnerpos).length() < myradius + partnerradius


class GameEntity(GameObject):
    """A scene object with a position, motion, orientation and scale."""

    def __init__(self, registry: ObjectRegistry, priority: int = DEFAULT_PRIORITY) -> None:
        super().__init__(registry, priority)
        self.pos = Vector3()
        self.pos_old = Vector3()
        self.move = Vector3()
        self.rot = Vector3()
        self.scale = Vector3(1.0, 1.0, 1.0)
        self.radius = 0.0
        self.mtx_world: Matrix = identity_matrix()

    def compute_world(self) -> Matrix:
        """Rebuild and store the world matrix from scale, rotation and position."""
        self.mtx_world = world_matrix(self.pos, self.rot, self.scale)
        return self.mtx_world