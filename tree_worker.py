import logging
import math
import random

from fractal_core import Segment, THICKNESS_SHRINK, CANVAS_WIDTH, CANVAS_HEIGHT

_LOGGER = logging.getLogger("fractal_tree.tree_worker")

# trunk base sits this many pixels above the bottom edge
ROOT_MARGIN = 20
# branches shorter than this are not generated; keeps recursion finite when shrink is near 1
MIN_BRANCH_LENGTH = 2


def segment_bound(depth):
    """Upper bound on the number of segments a tree of `depth` levels can have."""
    return 2 ** (max(int(depth), 0) + 1) - 1


def build_segments(config, width=CANVAS_WIDTH, height=CANVAS_HEIGHT, rng=None):
    """Generate the flat, pre-order segment list for `config`.

    The angular jitter is drawn once per segment here and baked into the stored
    endpoints, so replaying the list never changes the silhouette.
    Left children come before right children; list index is growth order.
    """
    # Use a local RNG so we don't touch global `random` state
    if rng is None:
        rng = random.Random(config.seed)

    segments = []
    total_depth = config.depth
    spread = config.angle
    shrink = config.shrink
    jitter = config.randomness

    def collect(x, y, length, angle_deg, depth_left, thick):
        if depth_left <= 0 or length < MIN_BRANCH_LENGTH:
            return

        a = math.radians(angle_deg + rng.uniform(-jitter, jitter))
        x2 = x + length * math.cos(a)
        y2 = y - length * math.sin(a)

        segments.append(Segment(x, y, x2, y2, thick, depth_left, total_depth))

        new_length = length * shrink
        new_thick = thick * THICKNESS_SHRINK
        collect(x2, y2, new_length, angle_deg - spread, depth_left - 1, new_thick)
        collect(x2, y2, new_length, angle_deg + spread, depth_left - 1, new_thick)

    collect(width / 2, height - ROOT_MARGIN, config.length, 90, config.depth, config.thickness)

    _LOGGER.debug("built %d segments (depth=%s, shrink=%s)", len(segments), config.depth, shrink)
    return segments
