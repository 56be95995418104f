"""Tests for heightmap and silhouette presentation buffers."""

from __future__ import annotations

import numpy as np
import pytest

from terrain_skyline.render.frame import (
    RAY_RGBA,
    SILHOUETTE_RGBA,
    height_map_to_rgba,
    render_frame,
    slope_curve,
)
from terrain_skyline.terrain.heightmap import HeightMap
from terrain_skyline.view.horizon import extract_silhouette


def test_height_map_to_rgba_grayscale() -> None:
    height_map = HeightMap.from_array([[0.0, 1.0], [0.5, 0.2]])
    rgba = height_map_to_rgba(height_map)

    assert rgba.shape == (2, 2, 4)
    assert rgba.dtype == np.uint8
    assert tuple(rgba[0, 1]) == (255, 255, 255, 255)
    assert tuple(rgba[0, 0]) == (0, 0, 0, 255)
    assert tuple(rgba[1, 0]) == (128, 128, 128, 255)


def test_render_frame_marks_rays_then_silhouette() -> None:
    height_map = HeightMap.flat(12, 12, 0.3)
    visited: list[tuple[int, int]] = []
    profile = extract_silhouette(height_map, (6, 6), eye_height=0.5, angle_steps=8, visited=visited)

    rgba = render_frame(height_map, profile, visited)

    for x, y in profile.cells():
        assert tuple(rgba[y, x]) == SILHOUETTE_RGBA
    far_x, far_y = next(cell for cell in visited if cell not in set(profile.cells()))
    assert tuple(rgba[far_y, far_x]) == RAY_RGBA


def test_slope_curve_maps_samples_to_screen() -> None:
    values = np.zeros((8, 8))
    values[4, 5] = 0.5
    profile = extract_silhouette(HeightMap(values), (4, 4), eye_height=0.0, angle_steps=3)

    points = slope_curve(profile, width=400, height=100)

    assert len(points) == 4
    assert points[0] == (0.0, 50.0)
    assert points[1] == (100.0, 100.0)
    with pytest.raises(ValueError):
        slope_curve(profile, 0, 100)
