"""FastAPI app exposing viewpoint control and silhouette extraction."""

from __future__ import annotations

import numpy as np
import structlog
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from terrain_skyline.config import TerrainConfig, config_from_env, logging_config_from_env
from terrain_skyline.contracts import Viewpoint
from terrain_skyline.errors import ConfigurationError
from terrain_skyline.log import configure_logging
from terrain_skyline.orchestrate.frames import FrameDriver

logger = structlog.get_logger(__name__)


class ViewpointRequest(BaseModel):
    """New viewpoint position; values are snapped and clamped into the map."""

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    eye_height: float | None = Field(default=None, allow_inf_nan=False)


class ViewpointResponse(BaseModel):
    """Viewpoint as stored after snapping and clamping."""

    x: int
    y: int
    eye_height: float

    @classmethod
    def from_contract(cls, viewpoint: Viewpoint) -> "ViewpointResponse":
        return cls(x=viewpoint.x, y=viewpoint.y, eye_height=viewpoint.eye_height)


class TerrainResponse(BaseModel):
    """Heightmap dimensions and value summary."""

    width: int
    height: int
    min: float
    max: float
    mean: float
    overrides: list[dict[str, object]]


class SilhouetteSampleModel(BaseModel):
    """One ray's best occluding cell."""

    x: int
    y: int
    slope: float
    angle: float


class SilhouetteResponse(BaseModel):
    """Freshly computed silhouette profile."""

    frame: int
    viewpoint: ViewpointResponse
    angle_steps: int
    elapsed_ms: float
    samples: list[SilhouetteSampleModel] = Field(default_factory=list)


def create_app(
    config: TerrainConfig | None = None,
    rng: np.random.Generator | None = None,
) -> FastAPI:
    """Create and configure the FastAPI app; the heightmap is built once here."""
    configure_logging(logging_config_from_env())
    cfg = config if config is not None else config_from_env()

    app = FastAPI(title="Terrain Skyline API", version="0.1.0")
    driver = FrameDriver.from_config(cfg, rng)
    app.state.config = cfg
    app.state.driver = driver
    logger.info("terrain skyline api ready", width=cfg.width, height=cfg.height)

    @app.get("/health")
    def get_health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/terrain", response_model=TerrainResponse)
    def get_terrain() -> TerrainResponse:
        """Describe the heightmap built at startup."""
        height_map = driver.height_map
        return TerrainResponse(
            width=height_map.width,
            height=height_map.height,
            overrides=[override.to_dict() for override in cfg.overrides],
            **height_map.stats(),
        )

    @app.get("/viewpoint", response_model=ViewpointResponse)
    def get_viewpoint() -> ViewpointResponse:
        return ViewpointResponse.from_contract(driver.viewpoint)

    @app.put("/viewpoint", response_model=ViewpointResponse)
    def put_viewpoint(payload: ViewpointRequest) -> ViewpointResponse:
        """Relocate the viewpoint used by subsequent silhouette requests."""
        viewpoint = driver.move_to(payload.x, payload.y, payload.eye_height)
        return ViewpointResponse.from_contract(viewpoint)

    @app.get("/silhouette", response_model=SilhouetteResponse)
    def get_silhouette(
        angle_steps: int | None = Query(default=None, ge=1, le=4096),
        eye_height: float | None = Query(default=None, allow_inf_nan=False),
    ) -> SilhouetteResponse:
        """Recompute the silhouette from the current viewpoint.

        `eye_height` applies to this request only; the stored viewpoint keeps its own.
        """
        try:
            result = driver.tick(angle_steps=angle_steps, eye_height=eye_height)
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        profile = result.profile
        return SilhouetteResponse(
            frame=result.frame,
            viewpoint=ViewpointResponse(
                x=profile.viewpoint[0], y=profile.viewpoint[1], eye_height=profile.eye_height
            ),
            angle_steps=profile.angle_steps,
            elapsed_ms=result.elapsed_ms,
            samples=[
                SilhouetteSampleModel(x=s.x, y=s.y, slope=s.slope, angle=s.angle)
                for s in profile.samples
            ],
        )

    return app


app = create_app()
