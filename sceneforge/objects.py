"""Prioritised registry of scene objects with deferred destruction."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator

DEFAULT_PRIORITIES = 6


class ObjectType(IntEnum):
    """Kinds of object a scene can hold."""

    NONE = 0
    PLAYER = 1
    FADE = 2
    BALL = 3
    ENEMYBLOCK = 4
    GOAL = 5


class ObjectRegistry:
    """Keeps scene objects in per-priority layers, processed lowest priority first.

    Objects are never removed while a pass is running: ``release`` only marks
    them dead and :meth:`purge_dead` drops them afterwards.  Objects created
    during a pass are appended to their layer and are visited by that same
    pass if their layer has not been finished yet.
    """

    def __init__(self, priorities: int = DEFAULT_PRIORITIES) -> None:
        if priorities < 1:
            raise ValueError("a registry needs at least one priority layer")
        self._layers: list[list[GameObject]] = [[] for _ in range(priorities)]

    @property
    def priorities(self) -> int:
        return len(self._layers)

    def _layer(self, priority: int) -> list[GameObject]:
        if not 0 <= priority < len(self._layers):
            raise ValueError(
                f"priority {priority} is outside 0..{len(self._layers) - 1}"
            )
        return self._layers[priority]

    def register(self, obj: GameObject) -> None:
        """Append an object to the end of its priority layer."""
        layer = self._layer(obj.priority)
        if any(existing is obj for existing in layer):
            raise ValueError("object is already registered")
        layer.append(obj)

    def detach(self, obj: GameObject) -> None:
        """Remove an object from its layer, keeping the order of the others."""
        layer = self._layer(obj.priority)
        for position, existing in enumerate(layer):
            if existing is obj:
                del layer[position]
                return
        raise ValueError("object is not registered")

    def objects(self, priority: int) -> tuple[GameObject, ...]:
        """The objects of one layer, first registered first."""
        return tuple(self._layer(priority))

    def __iter__(self) -> Iterator[GameObject]:
        for layer in self._layers:
            yield from tuple(layer)

    def _each(self, action: str) -> None:
        for layer in self._layers:
            for obj in layer:
                getattr(obj, action)()

    def update_all(self) -> None:
        """Update every object, then drop the ones marked dead."""
        self._each("update")
        self.purge_dead()

    def draw_all(self) -> None:
        """Drop dead objects, then draw the remaining ones."""
        self.purge_dead()
        self._each("draw")

    def release_all(self) -> None:
        """Shut every object down, then drop the ones marked dead."""
        self._each("uninit")
        self.purge_dead()

    def purge_dead(self) -> None:
        """Remove every object whose dead flag is set."""
        for layer in self._layers:
            layer[:] = [obj for obj in layer if not obj.dead]


class GameObject:
    """Base of everything the registry manages.

    The base hooks only keep track of the object's lifecycle: whether it is
    active and how many frames it has been updated and drawn.  Subclasses
    override them and call :meth:`release` to have themselves removed after
    the current pass.
    """

    def __init__(self, registry: ObjectRegistry, priority: int) -> None:
        self.registry = registry
        self.priority = priority
        self.object_type = ObjectType.NONE
        self.dead = False
        self.active = False
        self.frames_updated = 0
        self.frames_drawn = 0
        registry.register(self)

    def init(self) -> None:
        """Prepare the object for use."""
        self.active = True
        self.frames_updated = 0
        self.frames_drawn = 0

    def uninit(self) -> None:
        """Shut the object down."""
        self.active = False

    def update(self) -> None:
        """Advance the object by one frame."""
        self.frames_updated += 1

    def draw(self) -> None:
        """Render the object."""
        self.frames_drawn += 1

    def release(self) -> None:
        """Mark the object for removal at the next purge."""
        self.dead = True