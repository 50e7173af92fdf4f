"""
Frame rendering for the fractal tree.
Paints one complete frame (theme gradient, dot field, glow, branches and leaf
dots) off-screen with Pillow and pastes it into the caller's surface in one go,
so the surface always holds a whole frame. Also provides the PNG export step.
"""
import logging
import os
import random
from datetime import datetime, timezone
from typing import NamedTuple, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from fractal_core import CANVAS_WIDTH, CANVAS_HEIGHT, clamp
from palette_worker import get_preset, hex_to_rgb, hex_to_rgba, resolve_color, theme_gradient_rows
from sway_worker import swayed_endpoints

_LOGGER = logging.getLogger("fractal_tree.render_worker")

STAR_COUNT = 120
STAR_ALPHA = 0.25
SNOW_STAR_ALPHA = 0.35
# canvas shadow-blur units; the Gaussian radius is half of this
GLOW_BLUR = 18
LEAF_ALPHA = 0.85
LEAF_MAX_DEPTH = 2
LEAF_RADIUS_MIN = 1.2
LEAF_RADIUS_MAX = 5


class Stroke(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: int
    leaf_radius: Optional[float]


def new_surface(width=CANVAS_WIDTH, height=CANVAS_HEIGHT):
    return Image.new('RGB', (width, height))


def visible_count(config, state, total):
    """Number of segments drawn this frame (everything when grow is off)."""
    if not config.grow_animation:
        return total
    return clamp(state.reveal_cutoff, 0, total)


def render_background(size, theme, rng):
    width, height = size
    rows = np.array(theme_gradient_rows(theme, height), dtype=np.uint8)
    img_arr = np.repeat(rows[:, np.newaxis, :3], width, axis=1)
    frame = Image.fromarray(img_arr)

    # stars / snow
    draw = ImageDraw.Draw(frame, 'RGBA')
    fill = hex_to_rgba('#ffffff', SNOW_STAR_ALPHA if theme == 'snow' else STAR_ALPHA)
    for _ in range(STAR_COUNT):
        x = rng.random() * width
        y = rng.random() * height
        r = rng.random() * 1.5 + 0.2
        draw.ellipse([x - r, y - r, x + r, y + r], fill=fill)
    return frame


def _frame_strokes(segments, count, config, wind_time):
    visible = segments[:count]
    with_leaves = config.leaf_mode
    strokes = []
    for s, (x2, y2) in zip(visible, swayed_endpoints(visible, config, wind_time)):
        leaf_radius = None
        if with_leaves and s.depth_left <= LEAF_MAX_DEPTH:
            leaf_radius = clamp(s.thick * 0.55, LEAF_RADIUS_MIN, LEAF_RADIUS_MAX)
        strokes.append(Stroke(
            s.x1, s.y1, x2, y2,
            resolve_color(config.preset, s.depth_left, s.total_depth, config.leaf_mode),
            max(1, int(round(s.thick))),
            leaf_radius,
        ))
    return strokes


def _paint_strokes(draw, strokes, leaf_fill, stroke_fill=None):
    for st in strokes:
        fill = stroke_fill if stroke_fill is not None else st.color
        draw.line([(st.x1, st.y1), (st.x2, st.y2)], fill=fill, width=st.width)
        if st.width > 2:
            # round caps
            r = st.width / 2
            for cx, cy in ((st.x1, st.y1), (st.x2, st.y2)):
                draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=fill)
        if st.leaf_radius is not None:
            r = st.leaf_radius
            draw.ellipse([st.x2 - r, st.y2 - r, st.x2 + r, st.y2 + r], fill=leaf_fill)


def _paint_glow(frame, strokes, color):
    mask = Image.new('L', frame.size, 0)
    _paint_strokes(ImageDraw.Draw(mask), strokes, leaf_fill=255, stroke_fill=255)
    halo = mask.filter(ImageFilter.GaussianBlur(GLOW_BLUR / 2))
    frame.paste(Image.new('RGB', frame.size, hex_to_rgb(color)), (0, 0), halo)


def draw_frame(surface, segments, config, state, rng=None):
    """Draw one frame of `segments` into `surface`, then advance the reveal cutoff.

    Segments past the reveal cutoff are skipped while grow animation is on.
    The cutoff advances after drawing by `config.grow_speed` and stops at the
    segment count. Returns the number of segments drawn, or None when there is
    no surface to draw into.
    """
    if surface is None:
        _LOGGER.debug("draw_frame: no surface, skipping")
        return None
    rng = rng or random.Random()

    total = len(segments)
    count = visible_count(config, state, total)
    colors = get_preset(config.preset)

    frame = render_background(surface.size, config.theme, rng)
    strokes = _frame_strokes(segments, count, config, state.wind_time)
    if colors.glow and strokes:
        _paint_glow(frame, strokes, colors.leaf)
    _paint_strokes(ImageDraw.Draw(frame, 'RGBA'), strokes, leaf_fill=hex_to_rgba(colors.leaf, LEAF_ALPHA))

    surface.paste(frame)

    # advance growing
    if config.grow_animation and state.reveal_cutoff < total:
        state.reveal_cutoff = min(state.reveal_cutoff + config.grow_speed, total)
    return count


def export_png(surface, path=None, out_dir='output', prefix='fractal-tree'):
    """Save the surface as it is now (a partly grown tree is exported as-is)."""
    if surface is None:
        _LOGGER.debug("export_png: no surface, skipping")
        return None
    if path is None:
        # Use timestamp for unique filename
        timestamp = datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')
        os.makedirs(out_dir, exist_ok=True)
        path = os.path.join(out_dir, f'{prefix}_{timestamp}.png')
    surface.save(path, 'PNG')
    _LOGGER.info("exported frame to %s", path)
    return path
