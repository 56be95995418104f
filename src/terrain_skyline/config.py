"""Runtime configuration for terrain synthesis and silhouette extraction."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

from terrain_skyline.contracts import RectOverride
from terrain_skyline.errors import ConfigurationError

DEFAULT_OVERRIDES: tuple[RectOverride, ...] = (
    RectOverride(x_min=101, y_min=101, x_max=200, y_max=200, value=0.0),
    RectOverride(x_min=151, y_min=151, x_max=250, y_max=250, value=1.0),
)


@dataclass(frozen=True)
class TerrainConfig:
    """Configuration for heightmap synthesis and the default extraction pass."""

    width: int = 512
    height: int = 512
    scale: float = 0.01
    octaves: int = 2
    seed: int | None = None
    overrides: tuple[RectOverride, ...] = field(default=DEFAULT_OVERRIDES)
    eye_height: float = 0.5
    angle_steps: int = 100

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.scale <= 0.0:
            raise ConfigurationError("scale must be positive")
        if self.octaves < 1:
            raise ConfigurationError("octaves must be >= 1")
        if self.angle_steps <= 0:
            raise ConfigurationError("angle_steps must be positive")
        object.__setattr__(self, "overrides", tuple(self.overrides))
        for override in self.overrides:
            if override.x_min < 0 or override.y_min < 0 or override.x_max > self.width or (
                override.y_max > self.height
            ):
                raise ConfigurationError(
                    f"override rect {override.rect} lies outside {self.width}x{self.height} grid"
                )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging level and renderer selection."""

    level: str = "INFO"
    fmt: str = "console"

    def __post_init__(self) -> None:
        if self.fmt not in {"console", "json"}:
            raise ConfigurationError("log format must be one of: console, json")


def _env_value(name: str, cast: type, default: Any) -> Any:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"invalid value for {name}: {raw!r}") from exc


def parse_overrides(raw: str) -> tuple[RectOverride, ...]:
    """Parse a JSON list of `{rect, value}` override entries."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("SKYLINE_OVERRIDES must be a JSON array") from exc
    if not isinstance(payload, list):
        raise ConfigurationError("SKYLINE_OVERRIDES must be a JSON array")
    return tuple(RectOverride.from_dict(entry) for entry in payload)


def config_from_env() -> TerrainConfig:
    """
    Build TerrainConfig from environment variables.

    Optional:
      - SKYLINE_WIDTH, SKYLINE_HEIGHT
      - SKYLINE_SCALE, SKYLINE_OCTAVES, SKYLINE_SEED
      - SKYLINE_OVERRIDES (JSON array, `[]` disables the default pit/peak)
      - SKYLINE_EYE_HEIGHT, SKYLINE_ANGLE_STEPS

    The default pit/peak rectangles reach x, y = 250, so grids narrower or
    shorter than 250 cells need SKYLINE_OVERRIDES set explicitly.
    """
    raw_overrides = os.environ.get("SKYLINE_OVERRIDES")
    overrides = DEFAULT_OVERRIDES if raw_overrides is None else parse_overrides(raw_overrides)
    try:
        return _build_terrain_config(overrides)
    except ConfigurationError as exc:
        if raw_overrides is None and "override rect" in str(exc):
            raise ConfigurationError(
                f"{exc}; the default overrides need a grid of at least 250x250, "
                "set SKYLINE_OVERRIDES ('[]' disables them)"
            ) from exc
        raise


def _build_terrain_config(overrides: tuple[RectOverride, ...]) -> TerrainConfig:
    return TerrainConfig(
        width=_env_value("SKYLINE_WIDTH", int, 512),
        height=_env_value("SKYLINE_HEIGHT", int, 512),
        scale=_env_value("SKYLINE_SCALE", float, 0.01),
        octaves=_env_value("SKYLINE_OCTAVES", int, 2),
        seed=_env_value("SKYLINE_SEED", int, None),
        overrides=overrides,
        eye_height=_env_value("SKYLINE_EYE_HEIGHT", float, 0.5),
        angle_steps=_env_value("SKYLINE_ANGLE_STEPS", int, 100),
    )


def logging_config_from_env() -> LoggingConfig:
    """Build LoggingConfig from SKYLINE_LOG_LEVEL / SKYLINE_LOG_FORMAT."""
    return LoggingConfig(
        level=os.environ.get("SKYLINE_LOG_LEVEL", "INFO").strip().upper(),
        fmt=os.environ.get("SKYLINE_LOG_FORMAT", "console").strip().lower(),
    )
