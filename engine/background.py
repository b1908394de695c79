"""
background.py — Event Loop Thread
==================================
Flask serves requests on its own threads; every animation lives on ONE
asyncio loop running in a daemon thread.  Request handlers never touch
the Session directly.  They hand a callable to `BackgroundLoop.call`,
which runs it *on the loop thread* and waits for the return value.

    bg = BackgroundLoop().start()
    accepted = bg.call(lambda: session.begin_sort("merge") is not None)
    bg.stop()

Because every mutation and every snapshot executes between two loop
turns, a request can never observe a half-applied step.
"""

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Any, Awaitable, Callable, Optional


logger = logging.getLogger(__name__)


class BackgroundLoop:
    """A daemon thread that owns an asyncio loop for its whole life."""

    def __init__(self, name: str = "animation-loop"):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> "BackgroundLoop":
        if not self._thread.is_alive():
            self._thread.start()
            logger.info("Event loop thread %s started", self._thread.name)
        return self

    def submit(self, coro: Awaitable[Any]) -> Future:
        """Schedule a coroutine on the loop; returns a concurrent Future."""
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def call(self, fn: Callable[..., Any], *args: Any, timeout: Optional[float] = 5.0) -> Any:
        """Run fn(*args) on the loop thread and return its result (or raise its error)."""

        async def _invoke() -> Any:
            return fn(*args)

        return self.submit(_invoke()).result(timeout)

    def stop(self, timeout: float = 2.0) -> None:
        """Cancel outstanding animations, stop the loop and join the thread."""
        if not self._thread.is_alive():
            return

        async def _shutdown() -> None:
            tasks = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        self.submit(_shutdown()).result(timeout)
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout)
        self.loop.close()
        logger.info("Event loop thread %s stopped", self._thread.name)

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()
