"""Simulated game clock advanced only by the tick driver."""

from __future__ import annotations


class GameClock:
    """Monotonically increasing simulated elapsed time in milliseconds.

    Never reads real time; the tick loop decides how much time passes.
    """

    __slots__ = ("_elapsed_ms",)

    def __init__(self) -> None:
        self._elapsed_ms = 0

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed_ms / 1000

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and return the new elapsed time."""
        if delta_ms < 0:
            raise ValueError(f"Clock cannot run backwards (delta={delta_ms})")
        self._elapsed_ms += delta_ms
        return self._elapsed_ms

    def reset(self) -> None:
        self._elapsed_ms = 0

    def __repr__(self) -> str:
        return f"GameClock({self._elapsed_ms}ms)"
