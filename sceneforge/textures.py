"""Fixed-capacity texture cache that loads each file once."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

DEFAULT_CAPACITY = 100


@dataclass
class _Slot:
    name: str = ""
    texture: Any = None


class TextureRegistry:
    """Loads textures through ``loader`` and hands out stable slot indices.

    A slot whose load produced ``None`` counts as free and is reused by the
    next registration.
    """

    def __init__(
        self, loader: Callable[[str], Any], capacity: int = DEFAULT_CAPACITY
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least one")
        self._loader = loader
        self._slots = [_Slot() for _ in range(capacity)]

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def register(self, name: str) -> int:
        """Return the slot of ``name``, loading it into the first free slot if new.

        When every slot is taken by other names, 0 is returned.
        """
        for index, slot in enumerate(self._slots):
            if slot.texture is None:
                slot.texture = self._loader(name)
                slot.name = name
                return index
            if slot.name == name:
                return index
        return 0

    def get(self, index: int) -> Any:
        """The texture held in a slot, or None if the slot is empty."""
        if not 0 <= index < len(self._slots):
            raise IndexError(f"texture index {index} out of range")
        return self._slots[index].texture

    def unload(self) -> None:
        """Forget every loaded texture and name."""
        for slot in self._slots:
            slot.texture = None
            slot.name = ""

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot.texture is not None)