"""Demo: build the default terrain and print the silhouette seen from its centre."""

from __future__ import annotations

import sys
from math import degrees
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import numpy as np  # noqa: E402

from terrain_skyline.config import TerrainConfig  # noqa: E402
from terrain_skyline.orchestrate.frames import FrameDriver  # noqa: E402
from terrain_skyline.render.frame import slope_curve  # noqa: E402


def main() -> int:
    """Run one extraction pass and print every eighth sample plus the plot bounds."""
    cfg = TerrainConfig(seed=2024, angle_steps=64)
    driver = FrameDriver.from_config(cfg, np.random.default_rng(cfg.seed))
    result = driver.tick()
    profile = result.profile

    print("=== Terrain Skyline Demo ===")
    print(f"grid: {cfg.width}x{cfg.height}  viewpoint: {profile.viewpoint}")
    print(f"eye_height: {profile.eye_height}  elapsed_ms: {result.elapsed_ms:.3f}\n")
    print("step | angle_deg | cell       | slope   | elev_deg")
    print("-----+-----------+------------+---------+---------")
    elevations = profile.elevation_angles_deg()
    for step in range(0, len(profile), 8):
        sample = profile[step]
        cell = f"({sample.x}, {sample.y})"
        print(
            f"{step:>4} | {degrees(sample.angle):>9.2f} | {cell:<10} | "
            f"{sample.slope:>7.4f} | {elevations[step]:>7.3f}"
        )

    curve = slope_curve(profile, width=cfg.width, height=cfg.height)
    top = min(y for _, y in curve)
    print(f"\nslope curve: {len(curve)} points, highest at y={top:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
