"""
runs.py — Run Handles & Registry
=================================
One `RunHandle` per in-flight algorithm execution.  The registry hands
out handles per *target* (a list or a Grid object) so that at most one
live run ever owns a given target.

Lifecycle:
    start(target)   →  handle (cancelled=False, finished=False)
                       or None when the target is already busy
    cancel(handle)  →  cancelled=True; the driver notices at its next
                       per-step check and returns early
    finish(handle)  →  called once by the driver; releases the target.
                       finished=True only for a natural completion.

Cancellation is cooperative: nothing here interrupts running code.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


logger = logging.getLogger(__name__)

_run_ids = itertools.count(1)


@dataclass(eq=False)
class RunHandle:
    label:      str  = ""
    run_id:     int  = 0
    cancelled:  bool = False
    finished:   bool = False
    released:   bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.finished or self.released)

    def __repr__(self) -> str:
        return (
            f"RunHandle(#{self.run_id} {self.label!r}, cancelled={self.cancelled}, "
            f"finished={self.finished})"
        )


class RunRegistry:
    """Tracks which target is held by which live handle."""

    def __init__(self):
        # id(target) → (target, handle); the target reference keeps its id stable
        self._held: Dict[int, Tuple[Any, RunHandle]] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, target: Any, label: str = "") -> Optional[RunHandle]:
        """Fresh handle for `target`, or None if a live run already holds it."""
        current = self.handle_for(target)
        if current is not None and current.active:
            logger.info("Rejected %r: %r is already running on this target", label, current)
            return None
        handle = RunHandle(label=label, run_id=next(_run_ids))
        self._held[id(target)] = (target, handle)
        logger.info("Started %r", handle)
        return handle

    def cancel(self, handle: Optional[RunHandle]) -> None:
        """Idempotent.  Does not stop in-flight work."""
        if handle is None or handle.cancelled or handle.finished:
            return
        handle.cancelled = True
        logger.info("Cancelled %r", handle)

    def is_cancelled(self, handle: RunHandle) -> bool:
        return handle.cancelled

    def finish(self, handle: RunHandle) -> None:
        """Release the handle's target.  Marks finished only if not cancelled."""
        if handle.released:
            logger.warning("finish() called twice for %r", handle)
            return
        handle.released = True
        handle.finished = not handle.cancelled
        for key, (_, held) in list(self._held.items()):
            if held is handle:
                del self._held[key]
        logger.info("%s %r", "Finished" if handle.finished else "Stopped", handle)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def handle_for(self, target: Any) -> Optional[RunHandle]:
        entry = self._held.get(id(target))
        if entry is None or entry[0] is not target:
            return None
        return entry[1]

    def is_active(self, target: Any) -> bool:
        handle = self.handle_for(target)
        return handle is not None and handle.active

    def cancel_target(self, target: Any) -> Optional[RunHandle]:
        """Cancel whichever run holds `target`; returns that handle (or None)."""
        handle = self.handle_for(target)
        self.cancel(handle)
        return handle

    def __len__(self) -> int:
        return len(self._held)
