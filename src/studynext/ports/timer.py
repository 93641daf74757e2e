"""Deferred callback interface."""

from typing import Callable, Protocol


class TimerHandle(Protocol):
    """A scheduled callback that can still be called off."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


class Timer(Protocol):
    """
    Interface for scheduling a one-shot callback.

    asyncio event loops satisfy this directly via loop.call_later.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` once after `delay` seconds."""
        ...
