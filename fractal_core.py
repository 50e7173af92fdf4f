"""
Shared types and settings for the fractal tree studio.
Holds the tree configuration record, the Segment value type, the per-animator
animation state, slider ranges for the UI boundary and logging/env helpers.
"""
from dataclasses import dataclass, asdict, fields, replace
from typing import NamedTuple, Optional
import logging
import os
import random

CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 650

THICKNESS_SHRINK = 0.75
WIND_TIME_STEP = 0.02

_LOGGER = logging.getLogger("fractal_tree")


def clamp(v, mi, ma):
    return max(mi, min(ma, v))


def _parse_log_level(val, default=logging.WARNING):
    if val is None:
        return default
    if isinstance(val, int):
        return val
    lvl = getattr(logging, str(val).upper(), None)
    if isinstance(lvl, int):
        return lvl
    return default


def set_log_level(level="WARNING"):
    """Set the level of the package logger (names like "DEBUG" or ints)."""
    _LOGGER.setLevel(_parse_log_level(level))


def int_env(varname, default):
    raw = os.getenv(varname)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


set_log_level(os.getenv("FRACTAL_TREE_LOGLEVEL", "WARNING"))

FRAME_INTERVAL_MS = int_env("FRACTAL_TREE_FRAME_MS", 16)
DEFAULT_SEED = int_env("FRACTAL_TREE_SEED", None)

# UI boundary ranges (min, max); the core itself never validates
SLIDER_RANGES = {
    'depth': (1, 15),
    'angle': (5, 60),
    'length': (60, 240),
    'shrink': (0.5, 0.85),
    'thickness': (1, 22),
    'randomness': (0, 12),
    'wind_strength': (0, 12),
    'wind_speed': (0.2, 3.0),
    'grow_speed': (10, 250),
}

SHAPE_FIELDS = ('depth', 'angle', 'length', 'shrink', 'thickness', 'randomness', 'seed')
ANIMATION_FIELDS = (
    'animate_wind', 'wind_strength', 'wind_speed',
    'grow_animation', 'grow_speed',
    'leaf_mode', 'preset', 'theme',
)


class Segment(NamedTuple):
    """One drawn branch piece, in canvas pixels (y grows downward)."""
    x1: float
    y1: float
    x2: float
    y2: float
    thick: float
    depth_left: int
    total_depth: int


@dataclass(frozen=True)
class TreeConfig:
    depth: int = 11
    angle: float = 25.0
    length: float = 150.0
    shrink: float = 0.67
    thickness: float = 10.0
    randomness: float = 2.0

    leaf_mode: bool = True
    preset: str = 'spring'

    animate_wind: bool = True
    wind_strength: float = 4.0
    wind_speed: float = 1.2

    grow_animation: bool = True
    grow_speed: int = 80

    theme: str = 'night'
    seed: Optional[int] = DEFAULT_SEED

    @classmethod
    def from_params(cls, params):
        """Build a config from a params dict; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in params.items() if k in names})

    def to_params(self):
        return asdict(self)

    def shape_key(self):
        return tuple(getattr(self, name) for name in SHAPE_FIELDS)

    def animation_key(self):
        return tuple(getattr(self, name) for name in ANIMATION_FIELDS)

    def clamped(self):
        """Return a copy with every ranged field pulled inside SLIDER_RANGES."""
        changes = {}
        for name, (mi, ma) in SLIDER_RANGES.items():
            v = getattr(self, name)
            c = clamp(v, mi, ma)
            if c != v:
                changes[name] = type(v)(c)
        return replace(self, **changes) if changes else self


def changed_fields(old, new):
    if old is None:
        return [f.name for f in fields(new)]
    return [f.name for f in fields(new) if getattr(old, f.name) != getattr(new, f.name)]


@dataclass
class AnimationState:
    wind_time: float = 0.0
    reveal_cutoff: int = 0


def random_config(base=None, rng=None):
    """Randomize the shape of a tree, keeping its animation settings."""
    base = base if base is not None else TreeConfig()
    rng = rng or random.Random()
    return replace(
        base,
        depth=rng.randint(9, 14),
        angle=float(rng.randint(10, 44)),
        length=float(rng.randint(120, 209)),
        shrink=round(rng.random() * 0.18 + 0.58, 2),
        thickness=float(rng.randint(6, 15)),
        randomness=float(rng.randint(0, 7)),
        leaf_mode=rng.random() > 0.2,
    )
