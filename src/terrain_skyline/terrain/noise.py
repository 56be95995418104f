"""Gradient (Perlin-style) noise over a GradientField.

Scalar `sample`/`sample_octaves` evaluate one coordinate; the `*_grid` variants
evaluate whole coordinate arrays with NumPy and follow the same operation order
so both paths agree to floating-point precision.
"""

from __future__ import annotations

from math import floor

import numpy as np

from terrain_skyline.errors import ConfigurationError
from terrain_skyline.terrain.gradient import GradientField


def lerp(a, b, u):
    """Linearly interpolate from `a` (u = 0) to `b` (u = 1)."""
    return a + (b - a) * u


def fade(t):
    """Ease curve with fade(0) = 0, fade(1) = 1 and zero slope at both ends."""
    return t * t * (3 - 2 * t)


def _octave_weights(octaves: int) -> list[float]:
    if octaves < 1:
        raise ConfigurationError("octaves must be >= 1")
    return [0.5**i for i in range(octaves)]


class NoiseSynthesizer:
    """Evaluate smoothed gradient noise at continuous coordinates."""

    def __init__(self, field: GradientField) -> None:
        self.field = field

    def _dot_grid_gradient(self, ix: int, iy: int, x: float, y: float) -> float:
        gx, gy = self.field.at(ix, iy)
        return (x - ix) * gx + (y - iy) * gy

    def sample(self, x: float, y: float) -> float:
        """Return single-octave noise at (x, y), roughly within [-1, 1]."""
        x0 = int(floor(x))
        y0 = int(floor(y))
        x1 = x0 + 1
        y1 = y0 + 1

        ux = fade(x - x0)
        uy = fade(y - y0)

        d00 = self._dot_grid_gradient(x0, y0, x, y)
        d01 = self._dot_grid_gradient(x0, y1, x, y)
        d10 = self._dot_grid_gradient(x1, y0, x, y)
        d11 = self._dot_grid_gradient(x1, y1, x, y)

        d0 = lerp(d00, d10, ux)
        d1 = lerp(d01, d11, ux)
        return lerp(d0, d1, uy)

    def sample_octaves(self, x: float, y: float, octaves: int) -> float:
        """Weighted sum of `octaves` layers at doubling frequency, normalized by weight."""
        weights = _octave_weights(octaves)
        result = 0.0
        for weight in weights:
            result += self.sample(x, y) * weight
            x *= 2
            y *= 2
        return result / sum(weights)

    def sample_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Vectorized `sample` over broadcast-compatible coordinate arrays."""
        xs, ys = np.broadcast_arrays(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64))
        x0 = np.floor(xs).astype(np.int64)
        y0 = np.floor(ys).astype(np.int64)
        if x0.size:
            self.field.check_lattice_range(
                int(x0.min()), int(y0.min()), int(x0.max()) + 1, int(y0.max()) + 1
            )
        x1 = x0 + 1
        y1 = y0 + 1

        gx = self.field.gx
        gy = self.field.gy

        def dot(ix: np.ndarray, iy: np.ndarray) -> np.ndarray:
            return (xs - ix) * gx[iy, ix] + (ys - iy) * gy[iy, ix]

        ux = fade(xs - x0)
        uy = fade(ys - y0)

        d0 = lerp(dot(x0, y0), dot(x1, y0), ux)
        d1 = lerp(dot(x0, y1), dot(x1, y1), ux)
        return lerp(d0, d1, uy)

    def sample_octaves_grid(self, xs: np.ndarray, ys: np.ndarray, octaves: int) -> np.ndarray:
        """Vectorized `sample_octaves`."""
        weights = _octave_weights(octaves)
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        result = np.zeros(np.broadcast_shapes(xs.shape, ys.shape), dtype=np.float64)
        for weight in weights:
            result += self.sample_grid(xs, ys) * weight
            xs = xs * 2
            ys = ys * 2
        return result / sum(weights)
