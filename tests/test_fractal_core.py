from __future__ import annotations

import logging
import random
from dataclasses import FrozenInstanceError, replace

import pytest

from fractal_core import (
    ANIMATION_FIELDS,
    SHAPE_FIELDS,
    SLIDER_RANGES,
    AnimationState,
    TreeConfig,
    changed_fields,
    clamp,
    int_env,
    random_config,
    set_log_level,
)


def test_config_defaults_match_reference_deployment():
    cfg = TreeConfig()
    assert cfg.depth == 11
    assert cfg.angle == 25
    assert cfg.length == 150
    assert cfg.shrink == 0.67
    assert cfg.thickness == 10
    assert cfg.randomness == 2
    assert cfg.leaf_mode is True
    assert cfg.animate_wind is True
    assert cfg.wind_strength == 4
    assert cfg.wind_speed == 1.2
    assert cfg.grow_animation is True
    assert cfg.grow_speed == 80
    assert cfg.preset == "spring"
    assert cfg.theme == "night"


def test_config_is_immutable():
    cfg = TreeConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.depth = 3


def test_from_params_ignores_unknown_keys():
    cfg = TreeConfig.from_params({"depth": 4, "angle": 30.0, "iterations": 12})
    assert cfg.depth == 4
    assert cfg.angle == 30.0
    assert cfg.to_params()["depth"] == 4
    assert "iterations" not in cfg.to_params()


def test_field_groups_are_disjoint_and_keyed():
    assert not set(SHAPE_FIELDS) & set(ANIMATION_FIELDS)
    a = TreeConfig()
    b = replace(a, wind_strength=9.0)
    assert a.shape_key() == b.shape_key()
    assert a.animation_key() != b.animation_key()


def test_changed_fields():
    a = TreeConfig()
    b = replace(a, depth=5, preset="neon")
    assert sorted(changed_fields(a, b)) == ["depth", "preset"]
    assert changed_fields(a, a) == []
    assert "depth" in changed_fields(None, a)


def test_clamped_pulls_values_into_slider_ranges():
    cfg = TreeConfig(depth=40, shrink=0.99, grow_speed=1, angle=2.0).clamped()
    assert cfg.depth == SLIDER_RANGES["depth"][1]
    assert cfg.shrink == SLIDER_RANGES["shrink"][1]
    assert cfg.grow_speed == SLIDER_RANGES["grow_speed"][0]
    assert cfg.angle == 5.0
    assert isinstance(cfg.depth, int)
    in_range = TreeConfig()
    assert in_range.clamped() is in_range


def test_random_config_ranges_and_keeps_animation_fields():
    base = TreeConfig(preset="neon", wind_strength=7.0, theme="sunset")
    rng = random.Random(3)
    for _ in range(50):
        cfg = random_config(base, rng)
        assert 9 <= cfg.depth <= 14
        assert 10 <= cfg.angle <= 44
        assert 120 <= cfg.length <= 209
        assert 0.58 <= cfg.shrink <= 0.76
        assert 6 <= cfg.thickness <= 15
        assert 0 <= cfg.randomness <= 7
        assert cfg.wind_strength == 7.0
        assert cfg.grow_speed == base.grow_speed
        assert cfg.preset == "neon"
        assert cfg.theme == "sunset"


def test_animation_state_defaults():
    state = AnimationState()
    assert state.wind_time == 0.0
    assert state.reveal_cutoff == 0


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_int_env(monkeypatch):
    monkeypatch.setenv("FT_INT", "33")
    assert int_env("FT_INT", 16) == 33
    monkeypatch.delenv("FT_INT")
    assert int_env("FT_INT", 16) == 16


def test_set_log_level_accepts_names_and_ints():
    logger = logging.getLogger("fractal_tree")
    previous = logger.level
    try:
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        set_log_level(logging.ERROR)
        assert logger.level == logging.ERROR
        set_log_level("not-a-level")
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(previous)
