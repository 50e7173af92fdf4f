from __future__ import annotations

import pytest

from palette_worker import (
    PRESETS,
    THEMES,
    _gradient,
    get_preset,
    hex_to_rgb,
    hex_to_rgba,
    list_presets,
    list_themes,
    resolve_color,
    theme_gradient_rows,
    wants_glow,
)


@pytest.mark.parametrize(
    "depth_left,total_depth,expected",
    [
        (9, 10, "#a16207"),  # ratio 0.9 -> trunk
        (4, 10, "#16a34a"),  # ratio 0.4 -> branch
        (1, 10, "#22c55e"),  # ratio 0.1 -> leaf
    ],
)
def test_spring_leaf_mode_colors(depth_left, total_depth, expected):
    assert resolve_color("spring", depth_left, total_depth, True) == expected


def test_ratio_boundaries_fall_to_the_outer_band():
    # exactly 0.55 is not trunk, exactly 0.25 is not branch
    assert resolve_color("autumn", 11, 20, True) == PRESETS["autumn"].branch
    assert resolve_color("autumn", 5, 20, True) == PRESETS["autumn"].leaf


def test_leaf_mode_off_always_uses_branch_color():
    for depth_left in range(1, 11):
        assert resolve_color("winter", depth_left, 10, False) == "#94a3b8"


def test_preset_table():
    assert list_presets() == ["spring", "autumn", "winter", "neon"]
    assert PRESETS["neon"] == ("#a855f7", "#22d3ee", "#f472b6", True)
    assert [name for name in list_presets() if wants_glow(name)] == ["neon"]


def test_presets_are_read_only():
    with pytest.raises(TypeError):
        PRESETS["custom"] = PRESETS["spring"]


def test_unknown_preset_falls_back_to_spring():
    assert get_preset("summer") == PRESETS["spring"]
    assert resolve_color("summer", 1, 10, True) == "#22c55e"


def test_hex_helpers():
    assert hex_to_rgb("#a16207") == (0xA1, 0x62, 0x07)
    assert hex_to_rgba("#ffffff", 0.25) == (255, 255, 255, 64)
    assert hex_to_rgba("#000000") == (0, 0, 0, 255)


def test_gradient_endpoints():
    rows = _gradient((0, 0, 0, 255), (100, 200, 50, 255), 5)
    assert rows[0] == (0, 0, 0, 255)
    assert rows[-1] == (100, 200, 50, 255)
    assert rows[2] == (50, 100, 25, 255)
    assert _gradient((1, 2, 3, 4), (5, 6, 7, 8), 0) == []
    assert _gradient((1, 2, 3, 4), (5, 6, 7, 8), 1) == [(1, 2, 3, 4)]


@pytest.mark.parametrize("theme", ["night", "sunset", "snow"])
def test_theme_gradient_rows(theme):
    top, bottom = THEMES[theme]
    rows = theme_gradient_rows(theme, 650)
    assert len(rows) == 650
    assert rows[0] == hex_to_rgba(top)
    assert rows[-1] == hex_to_rgba(bottom)


def test_unknown_theme_uses_snow_gradient():
    assert list_themes() == ["night", "sunset", "snow"]
    assert theme_gradient_rows("aurora", 10) == theme_gradient_rows("snow", 10)
