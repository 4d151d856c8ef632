"""Run-scoped generator for synthetic event identifiers."""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable


class EventIdGenerator:
    """Produces ``E:<epoch millis>:<counter>`` identifiers.

    The counter is local to the instance and strictly increasing, so ids
    generated within the same millisecond stay distinct. Create one
    generator per pipeline run.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._counter = itertools.count(1)

    def next(self) -> str:
        millis = int(self._clock() * 1000)
        return f"E:{millis}:{next(self._counter)}"
