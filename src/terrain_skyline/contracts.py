"""Core data contracts shared by terrain synthesis and horizon extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from math import atan, degrees
from typing import Any

from terrain_skyline.errors import ConfigurationError


@dataclass(slots=True)
class Viewpoint:
    """Observer position snapped to the integer grid plus an eye height offset."""

    x: int
    y: int
    eye_height: float = 0.5

    def __post_init__(self) -> None:
        self.x = int(self.x)
        self.y = int(self.y)
        self.eye_height = float(self.eye_height)

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class RectOverride:
    """Half-open rectangle `[x_min, x_max) x [y_min, y_max)` forced to one value."""

    x_min: int
    y_min: int
    x_max: int
    y_max: int
    value: float

    def __post_init__(self) -> None:
        if self.x_max <= self.x_min or self.y_max <= self.y_min:
            raise ConfigurationError(
                f"override rect must be non-empty, got ({self.x_min}, {self.y_min}, "
                f"{self.x_max}, {self.y_max})"
            )
        if not 0.0 <= self.value <= 1.0:
            raise ConfigurationError(f"override value must lie in [0, 1], got {self.value}")

    @property
    def rect(self) -> tuple[int, int, int, int]:
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def contains(self, x: int, y: int) -> bool:
        """Return True when cell (x, y) lies inside the rectangle."""
        return self.x_min <= x < self.x_max and self.y_min <= y < self.y_max

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RectOverride":
        """Build an override from a `{"rect": [x0, y0, x1, y1], "value": v}` mapping."""
        try:
            x_min, y_min, x_max, y_max = (int(v) for v in payload["rect"])
            value = float(payload["value"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"invalid override entry: {payload!r}") from exc
        return cls(x_min=x_min, y_min=y_min, x_max=x_max, y_max=y_max, value=value)

    def to_dict(self) -> dict[str, Any]:
        return {"rect": list(self.rect), "value": self.value}


@dataclass(frozen=True, slots=True)
class SilhouetteSample:
    """Best occluding cell found along one ray."""

    x: int
    y: int
    slope: float
    angle: float

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(slots=True)
class SilhouetteProfile:
    """Ordered silhouette samples, angle ascending from 0 to a full turn inclusive."""

    samples: list[SilhouetteSample]
    viewpoint: tuple[int, int]
    eye_height: float
    angle_steps: int
    meta: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    def __getitem__(self, index: int) -> SilhouetteSample:
        return self.samples[index]

    def slopes(self) -> list[float]:
        return [sample.slope for sample in self.samples]

    def cells(self) -> list[tuple[int, int]]:
        return [sample.cell for sample in self.samples]

    def elevation_angles_deg(self) -> list[float]:
        """Convert each best slope into an apparent elevation angle in degrees."""
        return [degrees(atan(sample.slope)) for sample in self.samples]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the profile to a JSON-compatible dictionary."""
        return {
            "viewpoint": list(self.viewpoint),
            "eye_height": self.eye_height,
            "angle_steps": self.angle_steps,
            "samples": [
                {"x": s.x, "y": s.y, "slope": s.slope, "angle": s.angle} for s in self.samples
            ],
            "meta": self.meta,
        }
