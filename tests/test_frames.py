"""Tests for the per-tick frame driver."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from terrain_skyline.config import TerrainConfig
from terrain_skyline.contracts import Viewpoint
from terrain_skyline.orchestrate.frames import FrameDriver
from terrain_skyline.terrain.heightmap import HeightMap


def test_from_config_starts_near_centre() -> None:
    cfg = TerrainConfig(width=32, height=32, seed=1, overrides=(), angle_steps=12, eye_height=0.4)
    driver = FrameDriver.from_config(cfg)

    assert driver.viewpoint == Viewpoint(17, 16, 0.4)
    result = driver.tick()
    assert result.frame == 1
    assert len(result.profile) == 13
    assert result.elapsed_ms >= 0.0
    assert result.profile.meta["elapsed_ms"] == result.elapsed_ms


def test_move_to_snaps_and_clamps() -> None:
    driver = FrameDriver(HeightMap.flat(10, 8, 0.2), Viewpoint(1, 1, 0.5))

    assert driver.move_to(3.9, 2.2) == Viewpoint(3, 2, 0.5)
    assert driver.move_to(-4, 50, eye_height=0.9) == Viewpoint(0, 7, 0.9)
    assert driver.viewpoint == Viewpoint(0, 7, 0.9)


def test_each_tick_uses_latest_viewpoint_and_fresh_profile() -> None:
    values = np.zeros((16, 16))
    values[8, 12] = 1.0
    driver = FrameDriver(HeightMap(values), Viewpoint(8, 8, 0.0), angle_steps=4)

    first = driver.tick()
    driver.move_to(4, 8)
    second = driver.tick(trace=True)

    assert first.profile[0].cell == (12, 8)
    assert first.profile[0].slope == 0.25
    assert second.profile.viewpoint == (4, 8)
    assert second.profile[0].slope == 0.125
    assert first.profile is not second.profile
    assert second.visited
    assert first.visited is None
    assert driver.frame_count == 2


def test_tick_eye_height_applies_to_one_pass_only() -> None:
    values = np.zeros((16, 16))
    values[8, 12] = 1.0
    driver = FrameDriver(HeightMap(values), Viewpoint(8, 8, 0.0), angle_steps=4)

    raised = driver.tick(eye_height=0.5)
    default = driver.tick()

    assert raised.profile.eye_height == 0.5
    assert raised.profile[0].slope == 0.125
    assert default.profile.eye_height == 0.0
    assert default.profile[0].slope == 0.25
    assert driver.viewpoint == Viewpoint(8, 8, 0.0)


def test_concurrent_ticks_get_distinct_frame_numbers() -> None:
    driver = FrameDriver(HeightMap.flat(12, 12, 0.1), Viewpoint(6, 6, 0.5), angle_steps=8)

    with ThreadPoolExecutor(max_workers=4) as pool:
        frames = list(pool.map(lambda _: driver.tick().frame, range(40)))

    assert sorted(frames) == list(range(1, 41))
    assert driver.frame_count == 40
