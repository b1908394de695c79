import asyncio

from engine.driver import AnimationEngine
from engine.pacing import PacingClock, SpeedControl
from engine.runs import RunRegistry


class RecordingSleep:
    """Stand-in for asyncio.sleep: records the requested seconds, yields once."""

    def __init__(self, on_call=None):
        self.calls = []
        self.on_call = on_call

    async def __call__(self, seconds):
        self.calls.append(seconds)
        if self.on_call is not None:
            self.on_call(len(self.calls))
        await asyncio.sleep(0)

    @property
    def total(self):
        return sum(self.calls)


def make_engine(multiplier=1.0, on_call=None):
    speed = SpeedControl(multiplier)
    sleep = RecordingSleep(on_call)
    engine = AnimationEngine(PacingClock(speed, sleep), RunRegistry())
    return engine, speed, sleep


def drain(generator):
    """Exhaust a step generator and return the steps it yielded."""
    return list(generator)
