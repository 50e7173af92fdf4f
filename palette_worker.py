"""palette_worker.py

Static color tables for the fractal tree.
- Four seasonal presets (spring, autumn, winter, neon), each a trunk/branch/leaf
  color triple plus a glow flag. Neon is the only preset that glows.
- Three background themes, each a two-stop vertical gradient.
- Depth-based color resolution: with leaf mode on, segments near the root get the
  trunk color, the middle of the tree the branch color and the outer levels the
  leaf color.

The tables are read-only; unknown preset ids resolve to spring and unknown
theme ids to the snow gradient.
"""
from types import MappingProxyType
from typing import List, NamedTuple, Tuple

RGBA = Tuple[int, int, int, int]


class ColorPreset(NamedTuple):
    trunk: str
    branch: str
    leaf: str
    glow: bool


PRESETS = MappingProxyType({
    'spring': ColorPreset(trunk='#a16207', branch='#16a34a', leaf='#22c55e', glow=False),
    'autumn': ColorPreset(trunk='#92400e', branch='#ea580c', leaf='#f59e0b', glow=False),
    'winter': ColorPreset(trunk='#6b7280', branch='#94a3b8', leaf='#e5e7eb', glow=False),
    'neon':   ColorPreset(trunk='#a855f7', branch='#22d3ee', leaf='#f472b6', glow=True),
})
DEFAULT_PRESET = 'spring'

# (top, bottom) gradient stops
THEMES = MappingProxyType({
    'night':  ('#050816', '#0b1020'),
    'sunset': ('#2a0a3d', '#13061f'),
    'snow':   ('#0a1222', '#06101e'),
})
FALLBACK_THEME = 'snow'

# window background behind the canvas
PAGE_COLORS = MappingProxyType({
    'night':  '#0b1020',
    'sunset': '#1b0f2e',
    'snow':   '#0b1220',
})

TRUNK_RATIO = 0.55
LEAF_RATIO = 0.25


def _clamp8(v: int) -> int:
    return max(0, min(255, int(v)))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _gradient(start: RGBA, end: RGBA, count: int) -> List[RGBA]:
    """Return a list of `count` colors from start to end (inclusive of both).
    If count <= 0 returns empty list.
    """
    if count <= 0:
        return []
    if count == 1:
        return [start]
    out: List[RGBA] = []
    for i in range(count):
        t = i / (count - 1)
        r = _clamp8(round(_lerp(start[0], end[0], t)))
        g = _clamp8(round(_lerp(start[1], end[1], t)))
        b = _clamp8(round(_lerp(start[2], end[2], t)))
        a = _clamp8(round(_lerp(start[3], end[3], t)))
        out.append((r, g, b, a))
    return out


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip('#')
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def hex_to_rgba(value: str, alpha: float = 1.0) -> RGBA:
    r, g, b = hex_to_rgb(value)
    return r, g, b, _clamp8(round(alpha * 255))


def list_presets() -> List[str]:
    return list(PRESETS.keys())


def list_themes() -> List[str]:
    return list(THEMES.keys())


def get_preset(name: str) -> ColorPreset:
    return PRESETS.get(name, PRESETS[DEFAULT_PRESET])


def wants_glow(name: str) -> bool:
    return get_preset(name).glow


def resolve_color(preset: str, depth_left: int, total_depth: int, leaf_mode: bool) -> str:
    """Stroke color for a segment `depth_left` levels away from the twig tips."""
    colors = get_preset(preset)
    if not leaf_mode:
        return colors.branch

    ratio = depth_left / total_depth
    if ratio > TRUNK_RATIO:
        return colors.trunk
    if ratio > LEAF_RATIO:
        return colors.branch
    return colors.leaf


def theme_gradient_rows(theme: str, height: int) -> List[RGBA]:
    """Per-row colors of the theme's vertical gradient, top row first."""
    top, bottom = THEMES.get(theme, THEMES[FALLBACK_THEME])
    return _gradient(hex_to_rgba(top), hex_to_rgba(bottom), height)
