"""Keyframed multi-part models driven by motion scripts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator, Union

from .entity import GameEntity, Matrix, Vector3, world_matrix
from .objects import ObjectRegistry

DEFAULT_PRIORITY = 1
MAX_PARTS = 20
MAX_KEYSET = 20
MAX_MOTION = 10
MAX_MODELS = 20

_UNIT = Vector3(1.0, 1.0, 1.0)


class MotionType(IntEnum):
    """The motions a model can play, by slot in its motion table."""

    NEUTRAL = 0
    MOVE = 1
    ATTACK = 2


@dataclass(frozen=True)
class Key:
    """Target position and rotation of one part."""

    pos: Vector3 = Vector3()
    rot: Vector3 = Vector3()


@dataclass
class KeySet:
    """One pose: a key per part, reached over ``frame`` updates."""

    frame: int = 0
    keys: list[Key] = field(default_factory=list)


@dataclass
class Motion:
    """A sequence of poses, played once or looped."""

    loop: bool = False
    num_key: int = 0
    keysets: list[KeySet] = field(default_factory=list)


@dataclass(eq=False)
class ModelPart:
    """One rigid piece of a model, optionally attached to a parent part."""

    pos: Vector3 = Vector3()
    rot: Vector3 = Vector3()
    index: int = 0
    parent_index: int = -1
    model: str | None = None
    scale: Vector3 = _UNIT
    parent: ModelPart | None = field(default=None, repr=False)


@dataclass
class MotionScript:
    """The contents of a motion script: model files, parts and motions."""

    model_files: list[str] = field(default_factory=list)
    parts: list[ModelPart] = field(default_factory=list)
    motions: list[Motion] = field(default_factory=list)


_Statement = tuple[str, list[str]]


def _statements(lines: Iterable[str]) -> Iterator[_Statement]:
    for raw in lines:
        text = raw.split("#", 1)[0].strip()
        if not text:
            continue
        keyword, _, rest = text.partition("=")
        yield keyword.strip(), rest.split()


def _int(keyword: str, values: list[str]) -> int:
    if not values:
        raise ValueError(f"{keyword} needs a value")
    return int(values[0])


def _vector(keyword: str, values: list[str]) -> Vector3:
    if len(values) < 3:
        raise ValueError(f"{keyword} needs three values, got {len(values)}")
    x, y, z = (float(value) for value in values[:3])
    return Vector3(x, y, z)


def _parse_part(statements: Iterator[_Statement]) -> ModelPart:
    index, parent, pos, rot = 0, -1, Vector3(), Vector3()
    for keyword, values in statements:
        if keyword == "INDEX":
            index = _int(keyword, values)
        elif keyword == "PARENT":
            parent = _int(keyword, values)
        elif keyword == "POS":
            pos = _vector(keyword, values)
        elif keyword == "ROT":
            rot = _vector(keyword, values)
        elif keyword == "END_PARTSSET":
            return ModelPart(pos=pos, rot=rot, index=index, parent_index=parent)
    raise ValueError("PARTSSET is not terminated")


def _parse_key(statements: Iterator[_Statement]) -> Key:
    pos, rot = Vector3(), Vector3()
    for keyword, values in statements:
        if keyword == "POS":
            pos = _vector(keyword, values)
        elif keyword == "ROT":
            rot = _vector(keyword, values)
        elif keyword == "END_KEY":
            return Key(pos, rot)
    raise ValueError("KEY is not terminated")


def _parse_keyset(statements: Iterator[_Statement]) -> KeySet:
    keyset = KeySet()
    for keyword, values in statements:
        if keyword == "FRAME":
            keyset.frame = _int(keyword, values)
        elif keyword == "KEY":
            if len(keyset.keys) >= MAX_PARTS:
                raise ValueError(f"a key set holds at most {MAX_PARTS} keys")
            keyset.keys.append(_parse_key(statements))
        elif keyword == "END_KEYSET":
            return keyset
    raise ValueError("KEYSET is not terminated")


def _parse_motion(statements: Iterator[_Statement]) -> Motion:
    motion = Motion()
    for keyword, values in statements:
        if keyword == "LOOP":
            motion.loop = _int(keyword, values) != 0
        elif keyword == "NUM_KEY":
            motion.num_key = _int(keyword, values)
            if not 0 <= motion.num_key <= MAX_KEYSET:
                raise ValueError(f"NUM_KEY must lie in 0..{MAX_KEYSET}")
        elif keyword == "KEYSET":
            if len(motion.keysets) >= MAX_KEYSET:
                raise ValueError(f"a motion holds at most {MAX_KEYSET} key sets")
            motion.keysets.append(_parse_keyset(statements))
        elif keyword == "END_MOTIONSET":
            return motion
    raise ValueError("MOTIONSET is not terminated")


def parse_motion_script(lines: Union[str, Iterable[str]]) -> MotionScript:
    """Parse a motion script given as text or as lines; ``#`` starts a comment."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    statements = _statements(lines)
    script = MotionScript()
    model_count = 0
    for keyword, values in statements:
        if keyword == "END_SCRIPT":
            break
        if keyword == "NUM_MODEL":
            model_count = _int(keyword, values)
            if not 0 <= model_count <= MAX_MODELS:
                raise ValueError(f"NUM_MODEL must lie in 0..{MAX_MODELS}")
        elif keyword == "MODEL_FILENAME":
            if len(script.model_files) < model_count:
                if not values:
                    raise ValueError("MODEL_FILENAME needs a value")
                script.model_files.append(values[0])
        elif keyword == "PARTSSET":
            if len(script.parts) >= MAX_PARTS:
                raise ValueError(f"a model holds at most {MAX_PARTS} parts")
            script.parts.append(_parse_part(statements))
        elif keyword == "MOTIONSET":
            if len(script.motions) >= MAX_MOTION:
                raise ValueError(f"a model holds at most {MAX_MOTION} motions")
            script.motions.append(_parse_motion(statements))
    return script


class MotionModel(GameEntity):
    """A model whose parts are interpolated between the key sets of a motion."""

    def __init__(self, registry: ObjectRegistry, priority: int = DEFAULT_PRIORITY) -> None:
        super().__init__(registry, priority)
        self.parts: list[ModelPart] = []
        self.motions: list[Motion] = [Motion() for _ in range(MAX_MOTION)]
        self.first_motion: list[Key] = [Key() for _ in range(MAX_PARTS)]
        self.motion_type: MotionType | None = None
        self.cur_key = 0
        self.cnt_motion = 0

    def init(self) -> None:
        """Start in the neutral motion."""
        self.set_motion(MotionType.NEUTRAL)

    def uninit(self) -> None:
        """Drop every part and mark the model dead."""
        self.parts = []
        self.release()

    def update(self) -> None:
        """Advance the current motion by one frame."""
        self._advance()

    def draw(self) -> tuple[Matrix, tuple[ModelPart, ...]]:
        """Rebuild the world matrix from rotation and position; return it with the parts."""
        self.mtx_world = world_matrix(self.pos, self.rot)
        return self.mtx_world, tuple(self.parts)

    def set_motion(self, motion_type: MotionType) -> None:
        """Switch motion, starting from the parts' current pose; no-op if unchanged."""
        motion_type = MotionType(motion_type)
        if self.motion_type == motion_type:
            return
        self.motion_type = motion_type
        self._snapshot()
        self.cur_key = 0
        self.cnt_motion = 0

    def _snapshot(self) -> None:
        for index, part in enumerate(self.parts):
            self.first_motion[index] = Key(part.pos, part.rot)

    def _advance(self) -> None:
        if self.motion_type is None:
            raise RuntimeError("motion model has not been initialised")
        motion = self.motions[self.motion_type]
        keyset = (
            motion.keysets[self.cur_key]
            if self.cur_key < len(motion.keysets)
            else KeySet()
        )
        if self.parts:
            if keyset.frame == 0:
                raise ValueError(f"key set {self.cur_key} has no frames")
            ratio = self.cnt_motion / keyset.frame
            for index, part in enumerate(self.parts):
                target = keyset.keys[index] if index < len(keyset.keys) else Key()
                start = self.first_motion[index]
                part.rot = start.rot + (target.rot - start.rot) * ratio
                if part.parent is None:
                    part.pos = start.pos + (target.pos - start.pos) * ratio

        self.cnt_motion += 1
        if self.cnt_motion != keyset.frame:
            return
        self._snapshot()
        self.cur_key += 1
        self.cnt_motion = 0
        if self.cur_key == motion.num_key:
            self.cur_key = 0
            if not motion.loop:
                self.set_motion(MotionType.NEUTRAL)

    @staticmethod
    def _resolve_parent(parent_index: int, created: list[ModelPart]) -> ModelPart | None:
        if parent_index == -1:
            return None
        if 0 <= parent_index < len(created):
            return created[parent_index]
        if 0 <= parent_index < MAX_PARTS:
            return None
        raise ValueError(f"parent index {parent_index} is out of range")

    def apply_script(self, script: MotionScript, scale: Vector3 = _UNIT) -> None:
        """Build the parts and fill the motion table from a parsed script."""
        if len(script.parts) > MAX_PARTS:
            raise ValueError(f"a model holds at most {MAX_PARTS} parts")
        if len(script.motions) > MAX_MOTION:
            raise ValueError(f"a model holds at most {MAX_MOTION} motions")
        created: list[ModelPart] = []
        for count, spec in enumerate(script.parts):
            created.append(
                ModelPart(
                    pos=spec.pos,
                    rot=spec.rot,
                    index=spec.index,
                    parent_index=spec.parent_index,
                    model=script.model_files[count] if count < len(script.model_files) else None,
                    scale=scale,
                    parent=self._resolve_parent(spec.parent_index, created),
                )
            )
        self.parts = created
        for slot, motion in enumerate(script.motions):
            self.motions[slot] = motion

    def load_file(self, path: Union[str, Path], scale: Vector3 = _UNIT) -> MotionScript | None:
        """Read and apply a motion script; a missing file leaves the model as it is."""
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        script = parse_motion_script(text)
        self.apply_script(script, scale)
        return script