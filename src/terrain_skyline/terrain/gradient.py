"""Lattice of random unit gradient vectors used to seed gradient noise."""

from __future__ import annotations

from math import floor, pi

import numpy as np

from terrain_skyline.errors import ConfigurationError, OutOfRangeError


class GradientField:
    """Immutable grid of unit 2D vectors, one per integer lattice point."""

    def __init__(self, gx: np.ndarray, gy: np.ndarray) -> None:
        """Wrap precomputed gradient components of shape (height, width)."""
        gx = np.array(gx, dtype=np.float64)
        gy = np.array(gy, dtype=np.float64)
        if gx.ndim != 2 or gx.shape != gy.shape or gx.size == 0:
            raise ConfigurationError("gradient components must be equal-shaped 2D arrays")
        gx.setflags(write=False)
        gy.setflags(write=False)
        self._gx = gx
        self._gy = gy

    @classmethod
    def from_rng(cls, width: int, height: int, rng: np.random.Generator) -> "GradientField":
        """Draw one uniform angle in [0, 2*pi) per lattice point."""
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"gradient field dimensions must be positive, got {width}x{height}"
            )
        angles = rng.uniform(0.0, 2.0 * pi, size=(height, width))
        return cls(np.cos(angles), np.sin(angles))

    @property
    def width(self) -> int:
        return int(self._gx.shape[1])

    @property
    def height(self) -> int:
        return int(self._gx.shape[0])

    @property
    def gx(self) -> np.ndarray:
        return self._gx

    @property
    def gy(self) -> np.ndarray:
        return self._gy

    def contains(self, ix: int, iy: int) -> bool:
        return 0 <= ix < self.width and 0 <= iy < self.height

    def at(self, ix: int, iy: int) -> tuple[float, float]:
        """Return the gradient stored at lattice point (ix, iy)."""
        if not self.contains(ix, iy):
            raise OutOfRangeError(
                f"lattice point ({ix}, {iy}) outside {self.width}x{self.height} gradient field"
            )
        return (float(self._gx[iy, ix]), float(self._gy[iy, ix]))

    def check_lattice_range(self, ix_min: int, iy_min: int, ix_max: int, iy_max: int) -> None:
        """Raise unless every lattice point in [ix_min, ix_max] x [iy_min, iy_max] is stored."""
        if not (self.contains(ix_min, iy_min) and self.contains(ix_max, iy_max)):
            raise OutOfRangeError(
                f"lattice range ({ix_min}, {iy_min})..({ix_max}, {iy_max}) exceeds "
                f"{self.width}x{self.height} gradient field"
            )


def lattice_extent(cells: int, scale: float, octaves: int) -> int:
    """Number of lattice points needed to sample `cells` positions at every octave."""
    max_coord = (cells - 1) * scale * (2 ** (octaves - 1))
    return int(floor(max_coord + 1e-9)) + 2
