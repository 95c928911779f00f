"""Progress reporting for the generation phases.

Two independent channels are fed from the same per-unit loop:

* a percentage pushed to a ``ProgressSink`` (the GUI/job channel), spread
  over a phase's sub-range and only emitted once it moved by more than
  ``PROGRESS_EMIT_THRESHOLD`` points, and
* a console step counter (a ``tqdm`` bar) advanced in batches so that the
  number of refreshes stays near ``CONSOLE_DESIRED_UPDATES``.

Both keep their update volume bounded regardless of how many elements or
columns a run has.
"""

import logging
from typing import Callable, Protocol

from tqdm import tqdm

from .constants import PROGRESS_EMIT_THRESHOLD, CONSOLE_DESIRED_UPDATES

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    def notify(self, percentage: float, message: str) -> None:
        ...


class NullProgressSink:
    """Discards all updates."""

    def notify(self, percentage: float, message: str) -> None:
        pass


class CallbackProgressSink:
    """Adapts a ``progress_callback(pct, msg)`` callable to a ProgressSink."""

    def __init__(self, callback: Callable[[float, str], None]):
        self.callback = callback

    def notify(self, percentage: float, message: str) -> None:
        self.callback(percentage, message)


class PhaseProgress:
    """Spread one phase's share of the percentage range over its units."""

    def __init__(self, sink: ProgressSink, start: float, end: float,
                 total_units: int, threshold: float = PROGRESS_EMIT_THRESHOLD):
        self.sink = sink
        self.start = start
        self.end = end
        self.total_units = total_units
        self.threshold = threshold
        self.current = start
        self.last_emitted = start
        # An empty phase has nothing to spread; it never emits.
        self.increment = (end - start) / total_units if total_units > 0 else 0.0

    def advance(self, units: int = 1) -> None:
        if self.total_units <= 0:
            return
        self.current = min(self.current + self.increment * units, self.end)
        if self.current - self.last_emitted > self.threshold:
            self.sink.notify(self.current, "")
            self.last_emitted = self.current


class BatchCounter:
    """Console step counter that refreshes its bar once per batch.

    The bar receives ``batch_size`` every ``batch_size`` units and the
    remainder on ``finish()``, so the increments add up to the units counted.
    """

    def __init__(self, total: int, desired_updates: int = CONSOLE_DESIRED_UPDATES,
                 bar=None, desc: str = None, unit: str = "it"):
        self.total = total
        self.batch_size = max(1, total // max(1, desired_updates))
        self.count = 0
        self.emitted = 0
        self.bar = bar if bar is not None else tqdm(
            total=total, desc=desc, unit=unit, leave=True)

    def step(self) -> None:
        self.count += 1
        if self.count % self.batch_size == 0:
            self.bar.update(self.batch_size)
            self.emitted += self.batch_size

    def set_message(self, message: str) -> None:
        self.bar.set_postfix_str(message, refresh=False)

    def finish(self) -> None:
        leftover = self.count % self.batch_size
        if leftover:
            self.bar.update(leftover)
            self.emitted += leftover
        self.bar.close()
