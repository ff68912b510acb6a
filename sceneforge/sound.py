"""WAVE loading and a bank of labelled sound voices."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Mapping, Union

_FMT_LAYOUT = struct.Struct("<HHIIHH")


class SoundLabel(IntEnum):
    """The sounds a bank knows about."""

    INGAME = 0
    TITLE = 1
    RESULT = 2
    SE_SHOT = 3
    SE_GRENADE = 4
    SE_DEATH = 5
    SE_ITEM = 6


@dataclass(frozen=True)
class SoundInfo:
    """Where a sound lives and how often it repeats (-1 loops forever)."""

    filename: str
    loop_count: int = 0


DEFAULT_TABLE: dict[SoundLabel, SoundInfo] = {
    SoundLabel.INGAME: SoundInfo("data/BGM/ingame.wav", -1),
    SoundLabel.TITLE: SoundInfo("data/BGM/title.wav", -1),
    SoundLabel.RESULT: SoundInfo("data/BGM/result.wav", -1),
    SoundLabel.SE_SHOT: SoundInfo("data/SE/bullet.wav", 0),
    SoundLabel.SE_GRENADE: SoundInfo("data/SE/grenade.wav", 0),
    SoundLabel.SE_DEATH: SoundInfo("data/SE/death.wav", 0),
    SoundLabel.SE_ITEM: SoundInfo("data/SE/item.wav", 0),
}


class WaveError(ValueError):
    """Raised when data is not a usable RIFF/WAVE file."""


@dataclass(frozen=True)
class WaveData:
    """The format block and sample bytes of a WAVE file."""

    format: bytes
    audio: bytes

    def _fields(self) -> tuple[int, int, int, int, int, int]:
        return _FMT_LAYOUT.unpack_from(self.format)

    @property
    def format_tag(self) -> int:
        return self._fields()[0]

    @property
    def channels(self) -> int:
        return self._fields()[1]

    @property
    def sample_rate(self) -> int:
        return self._fields()[2]

    @property
    def avg_bytes_per_sec(self) -> int:
        return self._fields()[3]

    @property
    def block_align(self) -> int:
        return self._fields()[4]

    @property
    def bits_per_sample(self) -> int:
        return self._fields()[5]


def _fourcc(code: Union[str, bytes]) -> bytes:
    raw = code.encode("ascii") if isinstance(code, str) else bytes(code)
    if len(raw) != 4:
        raise ValueError(f"a chunk id has four characters, got {raw!r}")
    return raw


def find_chunk(data: bytes, fourcc: Union[str, bytes]) -> tuple[int, int]:
    """Return the data size and data offset of the first chunk with id ``fourcc``.

    The RIFF chunk counts as holding only its four-byte form type, so the
    chunks nested inside it are reached by the same scan.
    """
    wanted = _fourcc(fourcc)
    offset = 0
    while offset + 8 <= len(data):
        chunk_id = bytes(data[offset:offset + 4])
        (size,) = struct.unpack_from("<I", data, offset + 4)
        if chunk_id == b"RIFF":
            size = 4
        offset += 8
        if chunk_id == wanted:
            return size, offset
        offset += size
    raise WaveError(f"chunk {wanted.decode('ascii', 'replace')!r} not found")


def _read(data: bytes, size: int, offset: int) -> bytes:
    if offset + size > len(data):
        raise WaveError("chunk data runs past the end of the file")
    return bytes(data[offset:offset + size])


def read_wave(data: bytes) -> WaveData:
    """Parse a RIFF/WAVE file held in memory."""
    size, offset = find_chunk(data, b"RIFF")
    if _read(data, size, offset) != b"WAVE":
        raise WaveError("not a WAVE file")
    size, offset = find_chunk(data, b"fmt ")
    fmt = _read(data, size, offset)
    if len(fmt) < _FMT_LAYOUT.size:
        raise WaveError("format chunk is too short")
    size, offset = find_chunk(data, b"data")
    audio = _read(data, size, offset)
    return WaveData(format=fmt, audio=audio)


@dataclass
class Voice:
    """A playback voice with a queue of submitted buffers."""

    playing: bool = False
    queue: list[tuple[WaveData, int]] = field(default_factory=list)

    @property
    def buffers_queued(self) -> int:
        return len(self.queue)

    def submit(self, wave: WaveData, loop_count: int = 0) -> None:
        """Queue a buffer to be played ``loop_count`` extra times."""
        self.queue.append((wave, loop_count))

    def start(self) -> None:
        self.playing = True

    def stop(self) -> None:
        self.playing = False

    def flush(self) -> None:
        """Drop every queued buffer."""
        self.queue.clear()


class SoundBank:
    """Loads every sound of a table and plays them by label."""

    def __init__(
        self,
        root: Union[str, Path] = ".",
        table: Mapping[SoundLabel, SoundInfo] = DEFAULT_TABLE,
    ) -> None:
        self.root = Path(root)
        self.table = dict(table)
        self.waves: dict[SoundLabel, WaveData] = {}
        self.voices: dict[SoundLabel, Voice] = {}

    def __enter__(self) -> SoundBank:
        self.load()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def load(self) -> None:
        """Read every file and give each sound a voice with its buffer queued.

        A missing file raises ``OSError``, a malformed one ``WaveError``.
        """
        waves: dict[SoundLabel, WaveData] = {}
        voices: dict[SoundLabel, Voice] = {}
        for label, info in self.table.items():
            wave = read_wave((self.root / info.filename).read_bytes())
            voice = Voice()
            voice.submit(wave, info.loop_count)
            waves[label] = wave
            voices[label] = voice
        self.waves = waves
        self.voices = voices

    def _voice(self, label: SoundLabel) -> Voice:
        try:
            return self.voices[SoundLabel(label)]
        except KeyError:
            raise KeyError(f"sound {label!r} is not loaded") from None

    def play(self, label: SoundLabel) -> Voice:
        """Restart a sound from the beginning."""
        voice = self._voice(label)
        label = SoundLabel(label)
        if voice.buffers_queued:
            voice.stop()
            voice.flush()
        voice.submit(self.waves[label], self.table[label].loop_count)
        voice.start()
        return voice

    def stop(self, label: SoundLabel) -> None:
        """Stop one sound and drop its queued buffers."""
        voice = self._voice(label)
        if voice.buffers_queued:
            voice.stop()
            voice.flush()

    def stop_all(self) -> None:
        """Pause every voice, keeping what is queued."""
        for voice in self.voices.values():
            voice.stop()

    def close(self) -> None:
        """Stop and forget every voice and its audio."""
        for voice in self.voices.values():
            voice.stop()
        self.voices = {}
        self.waves = {}