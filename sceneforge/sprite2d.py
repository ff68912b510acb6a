"""Screen-space textured quads with sprite-sheet animation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .entity import GameEntity, Vector3
from .objects import ObjectRegistry

DEFAULT_PRIORITY = 2
ANIMATION_INTERVAL = 5

Color = tuple[float, float, float, float]
WHITE: Color = (1.0, 1.0, 1.0, 1.0)

_DEFAULT_TEX = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0))


@dataclass
class Vertex2D:
    """A pre-transformed vertex of a screen quad."""

    pos: Vector3 = field(default_factory=Vector3)
    rhw: float = 1.0
    col: Color = WHITE
    tex: tuple[float, float] = (0.0, 0.0)


class Sprite2D(GameEntity):
    """A quad centred on ``pos`` extending ``width`` and ``vertical`` each way.

    The four vertices are laid out as a triangle strip: top-left, top-right,
    bottom-left, bottom-right.
    """

    def __init__(self, registry: ObjectRegistry, priority: int = DEFAULT_PRIORITY) -> None:
        super().__init__(registry, priority)
        self.texture: Any = None
        self.vertices: list[Vertex2D] | None = None
        self.col: Color = WHITE
        self.angle = 0.0
        self.length = 0.0
        self.vertical = 0.0
        self.width = 0.0
        self.cnt_anim = 0
        self.pattern_anim = 0

    def _corners(self) -> list[Vector3]:
        x, y = self.pos.x, self.pos.y
        return [
            Vector3(x - self.width, y - self.vertical, 0.0),
            Vector3(x + self.width, y - self.vertical, 0.0),
            Vector3(x - self.width, y + self.vertical, 0.0),
            Vector3(x + self.width, y + self.vertical, 0.0),
        ]

    def _buffer(self) -> list[Vertex2D]:
        if self.vertices is None:
            raise RuntimeError("sprite has not been initialised")
        return self.vertices

    def _set_tex(self, coords) -> None:
        for vertex, tex in zip(self._buffer(), coords):
            vertex.tex = tex

    def init(self) -> None:
        """Build the vertex buffer from the current position, size and colour."""
        self.vertices = [
            Vertex2D(pos=corner, col=self.col, tex=tex)
            for corner, tex in zip(self._corners(), _DEFAULT_TEX)
        ]

    def uninit(self) -> None:
        """Drop the vertex buffer and texture and mark the sprite dead."""
        self.vertices = None
        self.texture = None
        self.release()

    def update(self) -> None:
        """Refresh vertex colours and positions."""
        for vertex, corner in zip(self._buffer(), self._corners()):
            vertex.col = self.col
            vertex.pos = corner

    def draw(self) -> tuple[Any, tuple[Vertex2D, ...]]:
        """The texture and vertex strip to render."""
        return self.texture, tuple(self.vertices or ())

    def bind_texture(self, texture: Any) -> None:
        self.texture = texture

    def set_size(self, vertical: float, width: float) -> None:
        """Set the half extents and the diagonal's angle and half length."""
        self.width = width
        self.vertical = vertical
        self.angle = math.atan2(width, vertical * 2.0)
        self.length = math.sqrt(width * width + (vertical * 2.0) ** 2) / 2

    def animate(self, vertical: float, width: int) -> None:
        """Advance a sheet of ``width`` frames by one every few calls."""
        buffer = self._buffer()
        v = 1.0 / vertical
        self.cnt_anim += 1
        if self.cnt_anim < ANIMATION_INTERVAL:
            return
        self.pattern_anim += 1
        if self.pattern_anim >= width:
            self.pattern_anim = 0
        step = 1.0 / width
        left = step * self.pattern_anim
        right = step * (self.pattern_anim + 1)
        for vertex, tex in zip(buffer, ((left, 0.0), (right, 0.0), (left, v), (right, v))):
            vertex.tex = tex
        self.cnt_anim = 0

    def set_tex_size(self, vertical: float, width: float, tex_pos: float) -> None:
        """Show a ``1/width`` by ``1/vertical`` window shifted by ``tex_pos`` tenths."""
        v = 1.0 / vertical
        left = tex_pos * 0.1
        right = 1.0 / width + tex_pos * 0.1
        self._set_tex(((left, 0.0), (right, 0.0), (left, v), (right, v)))