"""Textured quads placed in world space."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .entity import GameEntity, Matrix, Vector3, world_matrix
from .objects import ObjectRegistry

DEFAULT_PRIORITY = 2

Color = tuple[float, float, float, float]
WHITE: Color = (1.0, 1.0, 1.0, 1.0)

_DEFAULT_TEX = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0))
_UP = Vector3(0.0, 1.0, 0.0)


@dataclass
class Vertex3D:
    """A lit world-space vertex."""

    pos: Vector3 = field(default_factory=Vector3)
    nor: Vector3 = _UP
    col: Color = WHITE
    tex: tuple[float, float] = (0.0, 0.0)


class Polygon3D(GameEntity):
    """A quad of half extents ``size`` around the entity's origin."""

    def __init__(self, registry: ObjectRegistry, priority: int = DEFAULT_PRIORITY) -> None:
        super().__init__(registry, priority)
        self.texture: Any = None
        self.vertices: list[Vertex3D] | None = None
        self.size = Vector3()
        self.col: Color = WHITE

    def _corners(self) -> list[Vector3]:
        s = self.size
        return [
            Vector3(-s.x, -s.y, s.z),
            Vector3(s.x, -s.y, s.z),
            Vector3(-s.x, s.y, -s.z),
            Vector3(s.x, s.y, -s.z),
        ]

    def init(self) -> None:
        """Build the vertex buffer from the current size and colour."""
        self.vertices = [
            Vertex3D(pos=corner, col=self.col, tex=tex)
            for corner, tex in zip(self._corners(), _DEFAULT_TEX)
        ]

    def uninit(self) -> None:
        """Drop the vertex buffer and texture."""
        self.vertices = None
        self.texture = None

    def update(self) -> None:
        """Refresh vertex positions and colours; nothing happens before init."""
        if self.vertices is None:
            return
        for vertex, corner in zip(self.vertices, self._corners()):
            vertex.pos = corner
            vertex.col = self.col

    def draw(self) -> tuple[Matrix, Any, tuple[Vertex3D, ...]]:
        """Rebuild the world matrix from rotation and position, ignoring scale."""
        self.mtx_world = world_matrix(self.pos, self.rot)
        return self.mtx_world, self.texture, tuple(self.vertices or ())

    def bind_texture(self, texture: Any) -> None:
        self.texture = texture