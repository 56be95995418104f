"""Convert heightmaps and silhouette profiles into displayable buffers."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from terrain_skyline.contracts import SilhouetteProfile
from terrain_skyline.terrain.heightmap import HeightMap

RAY_RGBA = (50, 50, 50, 255)
SILHOUETTE_RGBA = (0, 255, 0, 255)


def height_map_to_rgba(height_map: HeightMap) -> np.ndarray:
    """Grayscale RGBA image of shape (height, width, 4), gray = elevation * 255."""
    gray = np.rint(height_map.values * 255.0).astype(np.uint8)
    rgba = np.empty((height_map.height, height_map.width, 4), dtype=np.uint8)
    rgba[..., 0] = gray
    rgba[..., 1] = gray
    rgba[..., 2] = gray
    rgba[..., 3] = 0xFF
    return rgba


def _paint(rgba: np.ndarray, cells: Iterable[tuple[int, int]], color: tuple[int, ...]) -> None:
    cells = list(cells)
    if not cells:
        return
    xs, ys = zip(*cells)
    rgba[list(ys), list(xs)] = color


def render_frame(
    height_map: HeightMap,
    profile: SilhouetteProfile,
    visited: Iterable[tuple[int, int]] | None = None,
) -> np.ndarray:
    """Heightmap image with traversed ray cells shaded and silhouette cells marked."""
    rgba = height_map_to_rgba(height_map)
    if visited is not None:
        _paint(rgba, visited, RAY_RGBA)
    _paint(rgba, profile.cells(), SILHOUETTE_RGBA)
    return rgba


def slope_curve(profile: SilhouetteProfile, width: int, height: int) -> list[tuple[float, float]]:
    """Polyline for a slope-vs-angle plot in screen coordinates (y grows downward)."""
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    n = len(profile)
    return [
        (k / n * width, height - sample.slope * height) for k, sample in enumerate(profile.samples)
    ]
