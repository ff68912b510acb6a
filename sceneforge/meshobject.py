"""Scene objects drawn from a loaded mesh with per-material textures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable

from .entity import GameEntity, Vector3
from .objects import ObjectRegistry

DEFAULT_PRIORITY = 3

Color = tuple[float, float, float, float]


@dataclass(frozen=True)
class Material:
    """Surface description of one mesh subset."""

    diffuse: Color = (1.0, 1.0, 1.0, 1.0)
    texture_filename: str | None = None


class MeshObject(GameEntity):
    """A mesh with materials, textures and a scaled bounding box."""

    def __init__(self, registry: ObjectRegistry, priority: int = DEFAULT_PRIORITY) -> None:
        super().__init__(registry, priority)
        self.vertices: list[Vector3] | None = None
        self.materials: list[Material] | None = None
        self.textures: list[Any] | None = None
        self.texture: Any = None
        self.size = Vector3()
        self.vtx_min = Vector3()
        self.vtx_max = Vector3()

    @property
    def num_materials(self) -> int:
        return len(self.materials or ())

    def uninit(self) -> None:
        """Forget the bound mesh, materials and textures."""
        self.vertices = None
        self.materials = None
        self.textures = None

    def draw(self) -> list[tuple[Material, Any]]:
        """Rebuild the world matrix and return each subset's material and texture."""
        if self.materials is None or self.textures is None:
            raise RuntimeError("no model has been bound")
        self.compute_world()
        return list(zip(self.materials, self.textures))

    def bind_model(
        self,
        vertices: Iterable[Vector3],
        materials: Iterable[Material],
        textures: Iterable[Any],
    ) -> None:
        """Attach mesh data; one texture (or None) is needed per material."""
        materials = list(materials)
        textures = list(textures)
        if len(textures) < len(materials):
            raise ValueError(
                f"{len(materials)} materials need as many textures, got {len(textures)}"
            )
        self.vertices = list(vertices)
        self.materials = materials
        self.textures = textures[: len(materials)]

    def compute_size(self) -> Vector3:
        """Widen the floored, scaled bounding box over the mesh and store its size."""
        if self.vertices is None:
            raise RuntimeError("no model has been bound")
        lo, hi = self.vtx_min, self.vtx_max
        min_x, min_y, min_z = lo.x, lo.y, lo.z
        max_x, max_y, max_z = hi.x, hi.y, hi.z
        for vertex in self.vertices:
            x = vertex.x * self.scale.x
            y = vertex.y * self.scale.y
            z = vertex.z * self.scale.z
            if x > max_x:
                max_x = float(math.floor(x))
            if y > max_y:
                max_y = float(math.floor(y))
            if z > max_z:
                max_z = float(math.floor(z))
            if x < min_x:
                min_x = float(math.floor(x))
            if y < min_y:
                min_y = float(math.floor(y))
            if z < min_z:
                min_z = float(math.floor(z))
        self.vtx_min = Vector3(min_x, min_y, min_z)
        self.vtx_max = Vector3(max_x, max_y, max_z)
        self.size = self.vtx_max - self.vtx_min
        return self.size

    def bind_texture(self, texture: Any) -> None:
        self.texture = texture