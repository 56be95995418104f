"""Tests for gradient noise synthesis."""

from __future__ import annotations

from math import isclose

import numpy as np
import pytest

from terrain_skyline.errors import ConfigurationError, OutOfRangeError
from terrain_skyline.terrain.gradient import GradientField
from terrain_skyline.terrain.noise import NoiseSynthesizer, fade, lerp


def _noise(seed: int = 7, size: int = 32) -> NoiseSynthesizer:
    return NoiseSynthesizer(GradientField.from_rng(size, size, np.random.default_rng(seed)))


def test_fade_endpoints_and_monotonic() -> None:
    """fade(0)=0, fade(1)=1, and sampled values never decrease."""
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    ts = [i / 100 for i in range(101)]
    values = [fade(t) for t in ts]
    assert all(b >= a for a, b in zip(values, values[1:]))


def test_lerp_endpoints() -> None:
    assert lerp(2.0, 5.0, 0.0) == 2.0
    assert lerp(2.0, 5.0, 1.0) == 5.0
    assert lerp(2.0, 5.0, 0.5) == 3.5


def test_sample_is_zero_on_lattice_points() -> None:
    """Noise vanishes at integer coordinates regardless of the stored gradient."""
    for seed in (1, 2, 3):
        noise = _noise(seed)
        for x in range(0, 30, 3):
            for y in range(0, 30, 4):
                assert noise.sample(float(x), float(y)) == 0.0


def test_single_octave_equals_base_sample() -> None:
    noise = _noise()
    rng = np.random.default_rng(11)
    for x, y in rng.uniform(0.0, 15.0, size=(50, 2)):
        assert noise.sample_octaves(x, y, 1) == noise.sample(x, y)


def test_octaves_stay_normalized() -> None:
    """Octave sums stay inside [-1, 1] up to floating tolerance."""
    noise = _noise(size=64)
    rng = np.random.default_rng(5)
    for octaves in (1, 2, 3, 4):
        limit = 62.0 / 2 ** (octaves - 1)
        for x, y in rng.uniform(0.0, limit, size=(200, 2)):
            value = noise.sample_octaves(x, y, octaves)
            assert -1.0001 <= value <= 1.0001


def test_sample_octaves_rejects_zero_octaves() -> None:
    with pytest.raises(ConfigurationError):
        _noise().sample_octaves(0.5, 0.5, 0)


def test_sample_outside_gradient_field_raises() -> None:
    """The corner at x0 + 1 must exist; reading past the field is an error."""
    noise = _noise(size=8)
    with pytest.raises(OutOfRangeError):
        noise.sample(7.5, 1.5)
    with pytest.raises(OutOfRangeError):
        noise.sample(-0.5, 1.5)


def test_grid_sampling_matches_scalar_path() -> None:
    noise = _noise(size=40)
    xs = np.linspace(0.0, 18.7, 13)[np.newaxis, :]
    ys = np.linspace(0.0, 18.3, 11)[:, np.newaxis]
    grid = noise.sample_octaves_grid(xs, ys, 2)

    assert grid.shape == (11, 13)
    for row, y in enumerate(ys[:, 0]):
        for col, x in enumerate(xs[0, :]):
            assert isclose(grid[row, col], noise.sample_octaves(x, y, 2), abs_tol=1e-12)


def test_grid_sampling_bounds_checked() -> None:
    noise = _noise(size=8)
    with pytest.raises(OutOfRangeError):
        noise.sample_grid(np.array([0.5, 7.2]), np.array([0.5, 0.5]))
