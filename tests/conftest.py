from __future__ import annotations

import pytest

from fractal_core import TreeConfig
from render_worker import new_surface


class ManualScheduler:
    """Frame scheduler driven by the test: frames run only when asked."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._next = 0

    def request_frame(self, callback):
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def cancel_frame(self, handle):
        self.pending.pop(handle, None)
        self.cancelled.append(handle)

    def run_frame(self):
        due, self.pending = self.pending, {}
        for callback in due.values():
            callback()

    def run_frames(self, n):
        for _ in range(n):
            self.run_frame()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def surface():
    return new_surface()


@pytest.fixture
def still_config():
    """Deterministic tree: no jitter, no wind, no grow."""
    return TreeConfig(
        depth=6,
        randomness=0.0,
        animate_wind=False,
        grow_animation=False,
        seed=7,
    )
