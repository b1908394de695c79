"""
audio.py — Comparison Tones
============================
Maps a compared value onto a short beep the browser plays when sound is
enabled.  Purely advisory; nothing in the engine depends on it.

    tone_for_value(10)  →  Tone(frequency_hz=320, duration_ms=20, …)
"""

from dataclasses import dataclass

BASE_FREQUENCY_HZ = 200
HZ_PER_UNIT       = 12
BEEP_DURATION_MS  = 20
WAVEFORM          = "square"


@dataclass(frozen=True)
class Tone:
    frequency_hz: float
    duration_ms:  int = BEEP_DURATION_MS
    waveform:     str = WAVEFORM
    seq:          int = 0          # lets the page tell a new beep from a repeat

    def to_dict(self) -> dict:
        return {
            "frequency_hz": self.frequency_hz,
            "duration_ms":  self.duration_ms,
            "waveform":     self.waveform,
            "seq":          self.seq,
        }


def tone_for_value(value, seq: int = 0) -> Tone:
    """Values in [10, 99] land roughly on 320..1400 Hz."""
    return Tone(frequency_hz=BASE_FREQUENCY_HZ + float(value) * HZ_PER_UNIT, seq=seq)
