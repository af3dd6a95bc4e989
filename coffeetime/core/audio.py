from __future__ import annotations

"""Synthesized audio cues (start, end, level up) played through QtMultimedia."""

import logging
import math
import struct
import wave
from enum import Enum
from pathlib import Path

from PyQt6.QtCore import QUrl


logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

C2 = 65.41
C5 = 523.25
E5 = 659.25
G5 = 783.99


class Cue(str, Enum):
    START = "start"
    END = "end"
    LEVEL_UP = "level_up"


# (frequency, seconds, pitch drop) per note
CUE_NOTES: dict[Cue, list[tuple[float, float, bool]]] = {
    Cue.START: [(C2, 0.3, True)],
    Cue.END: [(C5, 0.5, False)],
    Cue.LEVEL_UP: [(C5, 0.2, False), (E5, 0.2, False), (G5, 0.2, False)],
}


def synthesize(notes: list[tuple[float, float, bool]], sample_rate: int = SAMPLE_RATE) -> list[int]:
    """Render notes to 16-bit samples with a short attack and exponential decay.

    A pitch-drop note starts four times higher and slides down to its
    frequency over the first tenth of a second, which gives the low start
    thump.
    """
    samples: list[int] = []
    for freq, seconds, pitch_drop in notes:
        count = int(sample_rate * seconds)
        phase = 0.0
        for i in range(count):
            t = i / sample_rate
            current = freq
            if pitch_drop:
                current = freq * (1 + 3 * math.exp(-t / 0.1 * 4))
            phase += 2 * math.pi * current / sample_rate
            envelope = min(1.0, t / 0.005) * math.exp(-3 * t / seconds)
            samples.append(int(32767 * 0.6 * envelope * math.sin(phase)))
    return samples


def write_wav(path: Path, samples: list[int], sample_rate: int = SAMPLE_RATE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(struct.pack(f"<{len(samples)}h", *samples))


def ensure_cue_files(cache_dir: Path) -> dict[Cue, Path]:
    """Write missing cue WAV files into ``cache_dir`` and return their paths."""
    paths: dict[Cue, Path] = {}
    for cue, notes in CUE_NOTES.items():
        path = cache_dir / f"{cue.value}.wav"
        if not path.exists():
            write_wav(path, synthesize(notes))
        paths[cue] = path
    return paths


class CuePlayer:
    """Fire-and-forget cue playback; never raises into the caller."""

    def __init__(self, cache_dir: Path, muted: bool = False) -> None:
        self.cache_dir = cache_dir
        self.muted = muted
        self._paths: dict[Cue, Path] | None = None
        self._effects: dict[Cue, object] = {}

    def play(self, cue: Cue | str) -> None:
        if self.muted:
            return
        try:
            cue = Cue(cue)
            effect = self._effects.get(cue)
            if effect is None:
                effect = self._load_effect(cue)
                self._effects[cue] = effect
            effect.play()
        except Exception as e:
            logger.error("Failed to play sound %s: %s", cue, e)

    def _load_effect(self, cue: Cue):
        from PyQt6.QtMultimedia import QSoundEffect

        if self._paths is None:
            self._paths = ensure_cue_files(self.cache_dir)
        effect = QSoundEffect()
        effect.setSource(QUrl.fromLocalFile(str(self._paths[cue])))
        effect.setVolume(0.6)
        return effect
