"""
pacing.py — Speed Control & Pacing Clock
=========================================
`SpeedControl` holds the process-wide speed multiplier.  Only explicit
speed-up / slow-down actions change it.

`StepGate` adds the optional "next step" hold used by step mode.

`PacingClock.wait(nominal_ms)` is the ONLY timed suspension point in the
engine: it sleeps for nominal_ms / multiplier, reading the multiplier at
call time so a speed change reaches every animation already in flight.

    speed = SpeedControl()
    clock = PacingClock(speed)
    await clock.wait(60)          # 60 ms at 1×, 7.5 ms at 8×
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from config import DEFAULT_SPEED, SPEED_MAX, SPEED_MIN


logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def clamp(value: float, lo: float = SPEED_MIN, hi: float = SPEED_MAX) -> float:
    return max(lo, min(hi, value))


class SpeedControl:
    """
    Attributes:
        multiplier : Current factor, always within [SPEED_MIN, SPEED_MAX].
                     Bigger means faster animations.
    """

    def __init__(self, multiplier: float = DEFAULT_SPEED):
        self._multiplier: float = clamp(multiplier)

    @property
    def multiplier(self) -> float:
        return self._multiplier

    def set(self, value: float) -> float:
        self._multiplier = clamp(float(value))
        logger.info("Speed set to %s", self.label)
        return self._multiplier

    def scale(self, factor: float) -> float:
        """Multiply the current speed by `factor` (×2 = speed up, ×0.5 = slow down)."""
        if factor <= 0:
            raise ValueError(f"Speed factor must be positive, got {factor}")
        return self.set(self._multiplier * factor)

    @property
    def label(self) -> str:
        return f"{self._multiplier:g}×"


class PacingClock:
    """Turns nominal step delays into actual suspensions."""

    def __init__(self, speed: SpeedControl, sleep: Sleep = asyncio.sleep):
        self.speed  = speed
        self._sleep = sleep

    def actual_ms(self, nominal_ms: float) -> float:
        # clamp again on read: a multiplier of 0 can never reach the division
        return max(0.0, nominal_ms) / clamp(self.speed.multiplier)

    async def wait(self, nominal_ms: float) -> None:
        await self._sleep(self.actual_ms(nominal_ms) / 1000.0)


class StepGate:
    """
    Step mode for the sorting panel.  While enabled, `wait()` holds a run
    after each rendered step until `advance()` lets exactly one more step
    through.  Disabling releases a held run and lets it play on.

        gate.set_enabled(True)
        await gate.wait()             # returns on the next advance()

    Not thread-safe; like the rest of the engine it lives on the loop thread.
    """

    def __init__(self):
        self._enabled: bool = False
        self._waiter: Optional[asyncio.Future] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def waiting(self) -> bool:
        """True while a run is parked on the gate."""
        return self._waiter is not None and not self._waiter.done()

    def set_enabled(self, on: bool) -> bool:
        self._enabled = bool(on)
        if not self._enabled:
            self.release()
        logger.info("Step mode %s", "on" if self._enabled else "off")
        return self._enabled

    def advance(self) -> bool:
        """Let the held run take one step; False if nothing is waiting."""
        if not self.waiting:
            return False
        self.release()
        return True

    def release(self) -> None:
        if self.waiting:
            self._waiter.set_result(None)

    async def wait(self) -> None:
        if not self._enabled:
            return
        self._waiter = asyncio.get_running_loop().create_future()
        try:
            await self._waiter
        finally:
            self._waiter = None
