"""Silhouette extraction by casting rays over a heightmap."""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, hypot, pi, sin

from terrain_skyline.contracts import SilhouetteProfile, SilhouetteSample, Viewpoint
from terrain_skyline.errors import ConfigurationError
from terrain_skyline.terrain.heightmap import HeightMap
from terrain_skyline.terrain.noise import lerp
from terrain_skyline.view.raster import traverse_line


@dataclass
class _RayAccumulator:
    """Running best occluder for one ray.

    The best slope starts at the 0 sentinel (height 0 at reference distance 1),
    so only cells above eye height can replace it.
    """

    height_map: HeightMap
    origin: tuple[int, int]
    eye_height: float
    best_slope: float = 0.0
    best_cell: tuple[int, int] | None = None
    visited: list[tuple[int, int]] | None = None

    def visit(self, x: int, y: int) -> bool:
        if not self.height_map.contains(x, y):
            return True

        dx = x - self.origin[0]
        dy = y - self.origin[1]
        if dx == 0 and dy == 0:
            return False

        if self.visited is not None:
            self.visited.append((x, y))
        if self.best_cell is None:
            self.best_cell = (x, y)

        slope = (self.height_map.height_at(x, y) - self.eye_height) / hypot(dx, dy)
        # strict comparison: the nearest cell wins ties
        if slope > self.best_slope:
            self.best_slope = slope
            self.best_cell = (x, y)
        return False


def ray_angles(angle_steps: int) -> list[float]:
    """Return `angle_steps + 1` angles from 0 to 2*pi inclusive."""
    if angle_steps <= 0:
        raise ConfigurationError("angle_steps must be positive")
    return [lerp(0.0, 2.0 * pi, step / angle_steps) for step in range(angle_steps + 1)]


def extract_silhouette(
    height_map: HeightMap,
    viewpoint: Viewpoint | tuple[int, int],
    eye_height: float | None = None,
    angle_steps: int = 100,
    *,
    visited: list[tuple[int, int]] | None = None,
) -> SilhouetteProfile:
    """Compute the silhouette profile seen from `viewpoint`.

    One sample is produced per angle in `ray_angles(angle_steps)`. Each ray
    runs from the viewpoint cell to an endpoint `2 * max(width, height)` away
    and stops at the first cell outside the map. The sample holds the cell with
    the largest `(elevation - eye_height) / distance` along the ray. Rays with
    no cell above eye height keep slope 0 and report their first cell next to
    the viewpoint.

    When `visited` is given, every in-map cell traversed by any ray is
    appended to it.
    """
    if isinstance(viewpoint, Viewpoint):
        origin = viewpoint.cell
        if eye_height is None:
            eye_height = viewpoint.eye_height
    else:
        origin = (int(viewpoint[0]), int(viewpoint[1]))
    if eye_height is None:
        raise ConfigurationError("eye_height is required when viewpoint is a plain pair")
    if not height_map.contains(*origin):
        raise ConfigurationError(
            f"viewpoint {origin} lies outside {height_map.width}x{height_map.height} heightmap"
        )

    x_start, y_start = origin
    distance = 2 * max(height_map.width, height_map.height)

    samples: list[SilhouetteSample] = []
    for angle in ray_angles(angle_steps):
        x_end = int(cos(angle) * distance + x_start)
        y_end = int(sin(angle) * distance + y_start)

        ray = _RayAccumulator(
            height_map=height_map,
            origin=origin,
            eye_height=eye_height,
            visited=visited,
        )
        traverse_line(x_start, y_start, x_end, y_end, ray.visit)

        x_best, y_best = ray.best_cell if ray.best_cell is not None else origin
        samples.append(SilhouetteSample(x=x_best, y=y_best, slope=ray.best_slope, angle=angle))

    return SilhouetteProfile(
        samples=samples,
        viewpoint=origin,
        eye_height=float(eye_height),
        angle_steps=angle_steps,
    )
