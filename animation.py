"""
Animation driver for the fractal tree.

TreeAnimator owns the current segment list, the wind time / reveal cutoff and
the single frame-callback registration. Frames are paced by a scheduler
supplied by the host (the Qt front end uses one single-shot QTimer per frame):

    scheduler.request_frame(callback) -> handle
    scheduler.cancel_frame(handle)

Shape edits rebuild the geometry; animation edits only restart the loop.
"""
import logging
import random

from fractal_core import (
    ANIMATION_FIELDS, SHAPE_FIELDS, WIND_TIME_STEP,
    AnimationState, TreeConfig, changed_fields, random_config,
)
from render_worker import draw_frame, export_png
from tree_worker import build_segments

_LOGGER = logging.getLogger("fractal_tree.animation")


class TreeAnimator:
    def __init__(self, scheduler, surface=None, config=None, on_frame=None, rng=None):
        self.scheduler = scheduler
        self.surface = surface
        self.config = config if config is not None else TreeConfig()
        self.on_frame = on_frame
        # drives the star/snow field only; geometry jitter has its own RNG
        self.rng = rng or random.Random()

        self.segments = []
        self.state = AnimationState()
        self._handle = None
        self._token = 0

    @property
    def is_running(self):
        return self._handle is not None

    def set_surface(self, surface):
        self.surface = surface

    # --- geometry ---
    def rebuild(self):
        """Regenerate the segment list and restart the reveal from zero."""
        if self.surface is None:
            _LOGGER.debug("rebuild: no surface, skipping")
            return
        width, height = self.surface.size
        # swap the whole list; a frame never sees a partial tree
        self.segments = build_segments(self.config, width, height)
        self.state.reveal_cutoff = 0

    def draw_once(self):
        """Rebuild and draw the full tree immediately, bypassing the grow reveal."""
        self.rebuild()
        if self.surface is None:
            return
        self.state.reveal_cutoff = len(self.segments)
        self._draw()

    def _draw(self):
        drawn = draw_frame(self.surface, self.segments, self.config, self.state, rng=self.rng)
        if drawn is not None and self.on_frame is not None:
            self.on_frame(self.surface)

    # --- loop ---
    def start(self):
        self.stop()
        token = self._token
        self._handle = self.scheduler.request_frame(lambda: self.tick(token))
        _LOGGER.debug("loop %d started", token)

    def stop(self):
        # a new token invalidates callbacks that already fired or are mid-tick
        self._token += 1
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
            _LOGGER.debug("loop stopped")

    def tick(self, token):
        if token != self._token:
            return
        self._handle = None
        self.state.wind_time += WIND_TIME_STEP * self.config.wind_speed
        self._draw()
        # a frame listener may have stopped or restarted the loop
        if token == self._token and self._handle is None:
            self._handle = self.scheduler.request_frame(lambda: self.tick(token))

    def teardown(self):
        self.stop()
        self.surface = None

    # --- configuration ---
    def update_config(self, config):
        """Apply a new config; returns the names of the fields that changed."""
        old = self.config
        self.config = config
        changed = changed_fields(old, config)
        if any(name in SHAPE_FIELDS for name in changed):
            self.rebuild()
        if any(name in ANIMATION_FIELDS for name in changed):
            self.start()
        return changed

    def randomize(self, rng=None):
        return self.update_config(random_config(self.config, rng))

    def export_png(self, path=None, **kwargs):
        return export_png(self.surface, path, **kwargs)
