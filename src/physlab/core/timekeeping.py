"""Tick scheduling for fixed-step sessions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

TickCallback = Callable[[], None]


class Scheduler(Protocol):
    def schedule(self, callback: TickCallback) -> None:
        ...

    def cancel(self) -> None:
        ...


@dataclass
class FrameScheduler:
    """Holds at most one pending tick; the host loop runs it once per frame."""

    _pending: Optional[TickCallback] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, callback: TickCallback) -> None:
        self._pending = callback

    def cancel(self) -> None:
        self._pending = None

    def run_pending(self) -> bool:
        """Run the pending callback, if any. Returns whether one ran."""

        callback = self._pending
        if callback is None:
            return False
        self._pending = None
        callback()
        return True


@dataclass
class ManualScheduler(FrameScheduler):
    """Synchronous scheduler for headless runs and tests."""

    frames_run: int = 0

    def run_pending(self) -> bool:
        ran = super().run_pending()
        if ran:
            self.frames_run += 1
        return ran

    def advance(self, frames: int) -> int:
        """Run up to *frames* pending ticks and return how many ran."""

        ran = 0
        for _ in range(frames):
            if not self.run_pending():
                break
            ran += 1
        return ran


__all__ = ["FrameScheduler", "ManualScheduler", "Scheduler", "TickCallback"]
