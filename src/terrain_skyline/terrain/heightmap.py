"""Dense heightmap synthesized from multi-octave gradient noise."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import structlog

from terrain_skyline.config import TerrainConfig
from terrain_skyline.contracts import RectOverride
from terrain_skyline.errors import ConfigurationError
from terrain_skyline.terrain.gradient import GradientField, lattice_extent
from terrain_skyline.terrain.noise import NoiseSynthesizer

logger = structlog.get_logger(__name__)


class HeightMap:
    """Read-only grid of elevations in [0, 1], indexed as `values[y, x]`."""

    def __init__(self, values: np.ndarray) -> None:
        values = np.array(values, dtype=np.float64)
        if values.ndim != 2 or values.size == 0:
            raise ConfigurationError("heightmap must be a non-empty 2D grid")
        if np.isnan(values).any() or values.min() < 0.0 or values.max() > 1.0:
            raise ConfigurationError("heightmap values must lie in [0, 1]")
        values.setflags(write=False)
        self._values = values

    @classmethod
    def from_array(cls, values: Iterable) -> "HeightMap":
        """Wrap an existing grid (rows are y, columns are x)."""
        return cls(np.asarray(values, dtype=np.float64))

    @classmethod
    def flat(cls, width: int, height: int, value: float) -> "HeightMap":
        """Constant-elevation map, mostly useful for tests and baselines."""
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"grid dimensions must be positive, got {width}x{height}")
        return cls(np.full((height, width), value, dtype=np.float64))

    @property
    def width(self) -> int:
        return int(self._values.shape[1])

    @property
    def height(self) -> int:
        return int(self._values.shape[0])

    @property
    def values(self) -> np.ndarray:
        return self._values

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def height_at(self, x: int, y: int) -> float:
        """Elevation of cell (x, y); caller checks bounds with `contains`."""
        return float(self._values[y, x])

    def stats(self) -> dict[str, float]:
        return {
            "min": float(self._values.min()),
            "max": float(self._values.max()),
            "mean": float(self._values.mean()),
        }


def apply_overrides(values: np.ndarray, overrides: Iterable[RectOverride]) -> np.ndarray:
    """Force each rectangle to its fill value in order; later overrides win."""
    height, width = values.shape
    for override in overrides:
        if override.x_min < 0 or override.y_min < 0 or override.x_max > width or (
            override.y_max > height
        ):
            raise ConfigurationError(
                f"override rect {override.rect} lies outside {width}x{height} grid"
            )
        values[override.y_min : override.y_max, override.x_min : override.x_max] = override.value
        logger.debug("heightmap override applied", rect=override.rect, value=override.value)
    return values


def gradient_field_for(cfg: TerrainConfig, rng: np.random.Generator) -> GradientField:
    """Allocate a gradient field large enough for every lattice point the build reads."""
    field_width = max(cfg.width + 1, lattice_extent(cfg.width, cfg.scale, cfg.octaves))
    field_height = max(cfg.height + 1, lattice_extent(cfg.height, cfg.scale, cfg.octaves))
    return GradientField.from_rng(field_width, field_height, rng)


def build_height_map(
    cfg: TerrainConfig,
    rng: np.random.Generator | None = None,
    field: GradientField | None = None,
) -> HeightMap:
    """Synthesize a heightmap from noise, then stamp the configured overrides.

    Each cell samples `sample_octaves(x * scale, y * scale, octaves)`, remapped
    from [-1, 1] to [0, 1] with `v * 0.5 + 0.5` and clipped so the [0, 1]
    invariant holds even where noise overshoots.
    """
    if field is None:
        rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        field = gradient_field_for(cfg, rng)
    noise = NoiseSynthesizer(field)

    xs = np.arange(cfg.width, dtype=np.float64)[np.newaxis, :] * cfg.scale
    ys = np.arange(cfg.height, dtype=np.float64)[:, np.newaxis] * cfg.scale
    values = noise.sample_octaves_grid(xs, ys, cfg.octaves)
    values = np.clip(values * 0.5 + 0.5, 0.0, 1.0)

    apply_overrides(values, cfg.overrides)
    height_map = HeightMap(values)
    logger.info(
        "heightmap built",
        width=cfg.width,
        height=cfg.height,
        scale=cfg.scale,
        octaves=cfg.octaves,
        overrides=len(cfg.overrides),
        **height_map.stats(),
    )
    return height_map
