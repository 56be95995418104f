"""Per-tick silhouette recomputation around a movable viewpoint."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from time import perf_counter

import numpy as np
import structlog

from terrain_skyline.config import TerrainConfig
from terrain_skyline.contracts import SilhouetteProfile, Viewpoint
from terrain_skyline.terrain.heightmap import HeightMap, build_height_map
from terrain_skyline.view.horizon import extract_silhouette

logger = structlog.get_logger(__name__)


def _clamp_idx(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class FrameResult:
    """One recomputed silhouette and how long the extraction pass took."""

    frame: int
    profile: SilhouetteProfile
    elapsed_ms: float
    visited: list[tuple[int, int]] | None = None


class FrameDriver:
    """Owns the heightmap and viewpoint; recomputes a fresh profile on every tick.

    Viewpoint updates may arrive from another thread (input handlers, API
    requests); each tick reads one consistent snapshot under the lock.
    """

    def __init__(
        self,
        height_map: HeightMap,
        viewpoint: Viewpoint | None = None,
        angle_steps: int = 100,
    ) -> None:
        self.height_map = height_map
        self.angle_steps = angle_steps
        self._lock = Lock()
        if viewpoint is None:
            viewpoint = Viewpoint(height_map.width // 2 + 1, height_map.height // 2)
        self._viewpoint = self._clamped(viewpoint)
        self.frame_count = 0

    @classmethod
    def from_config(
        cls, cfg: TerrainConfig, rng: np.random.Generator | None = None
    ) -> "FrameDriver":
        """Build the heightmap once from `cfg` and start at the map centre."""
        height_map = build_height_map(cfg, rng)
        viewpoint = Viewpoint(cfg.width // 2 + 1, cfg.height // 2, cfg.eye_height)
        return cls(height_map, viewpoint=viewpoint, angle_steps=cfg.angle_steps)

    def _clamped(self, viewpoint: Viewpoint) -> Viewpoint:
        return Viewpoint(
            _clamp_idx(viewpoint.x, 0, self.height_map.width - 1),
            _clamp_idx(viewpoint.y, 0, self.height_map.height - 1),
            viewpoint.eye_height,
        )

    @property
    def viewpoint(self) -> Viewpoint:
        """Snapshot copy of the current viewpoint."""
        with self._lock:
            vp = self._viewpoint
            return Viewpoint(vp.x, vp.y, vp.eye_height)

    def move_to(self, x: float, y: float, eye_height: float | None = None) -> Viewpoint:
        """Snap (x, y) to the grid, clamp into the map, and store it."""
        with self._lock:
            current = self._viewpoint
            self._viewpoint = self._clamped(
                Viewpoint(
                    int(x),
                    int(y),
                    current.eye_height if eye_height is None else eye_height,
                )
            )
            vp = self._viewpoint
        logger.debug("viewpoint moved", x=vp.x, y=vp.y, eye_height=vp.eye_height)
        return Viewpoint(vp.x, vp.y, vp.eye_height)

    def tick(
        self,
        angle_steps: int | None = None,
        trace: bool = False,
        eye_height: float | None = None,
    ) -> FrameResult:
        """Run one full extraction pass from the current viewpoint.

        `eye_height` overrides the stored viewpoint height for this pass only.
        """
        viewpoint = self.viewpoint
        if eye_height is not None:
            viewpoint = Viewpoint(viewpoint.x, viewpoint.y, eye_height)
        steps = self.angle_steps if angle_steps is None else angle_steps
        visited: list[tuple[int, int]] | None = [] if trace else None

        started = perf_counter()
        profile = extract_silhouette(
            self.height_map, viewpoint, angle_steps=steps, visited=visited
        )
        elapsed_ms = (perf_counter() - started) * 1000.0

        with self._lock:
            self.frame_count += 1
            frame = self.frame_count
        profile.meta["elapsed_ms"] = elapsed_ms
        logger.debug(
            "silhouette frame",
            frame=frame,
            x=viewpoint.x,
            y=viewpoint.y,
            angle_steps=steps,
            elapsed_ms=round(elapsed_ms, 3),
        )
        return FrameResult(
            frame=frame,
            profile=profile,
            elapsed_ms=elapsed_ms,
            visited=visited,
        )
