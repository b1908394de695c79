"""
engine/
-------
Animated execution layer.

    from engine import Session, AnimationEngine, RaceCoordinator, BackgroundLoop
"""

from engine.pacing     import PacingClock, SpeedControl, StepGate
from engine.runs       import RunHandle, RunRegistry
from engine.driver     import AnimationEngine, SortOutcome, SearchOutcome
from engine.race       import RaceCoordinator, RaceDataset, RaceResult
from engine.session    import Session
from engine.background import BackgroundLoop

__all__ = [
    "PacingClock",
    "SpeedControl",
    "StepGate",
    "RunHandle",
    "RunRegistry",
    "AnimationEngine",
    "SortOutcome",
    "SearchOutcome",
    "RaceCoordinator",
    "RaceDataset",
    "RaceResult",
    "Session",
    "BackgroundLoop",
]
