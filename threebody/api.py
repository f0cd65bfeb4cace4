import time
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from threebody.config import (
    DEFAULT_DT,
    DEFAULT_EPSILON,
    DEFAULT_G,
    DEFAULT_INTEGRATOR,
    DEFAULT_STEPS,
    MAX_API_STEPS,
)
from threebody.errors import InvalidConfiguration
from threebody.presets import PRESETS, build_preset, preset_period
from threebody.simulation import simulate
from threebody.system import System

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class BodyConfig(BaseModel):
    mass: float
    position: List[float]
    velocity: List[float]
    name: Optional[str] = None


class SimulateRequest(BaseModel):
    preset: Optional[str] = None
    bodies: Optional[List[BodyConfig]] = None
    steps: int = Field(DEFAULT_STEPS, ge=0, le=MAX_API_STEPS)
    dtSec: float = DEFAULT_DT
    gravitationalConstant: float = DEFAULT_G
    epsilon: float = DEFAULT_EPSILON
    integrator: str = DEFAULT_INTEGRATOR
    stride: int = 1
    profile: Optional[bool] = False


class Frame(BaseModel):
    t: float
    step: int
    positions: List[List[float]]


class SimulateResponse(BaseModel):
    frames: List[Frame]
    masses: List[float]
    meta: dict


class PresetInfo(BaseModel):
    name: str
    period: Optional[float] = None


def _initial_system(req: SimulateRequest) -> System:
    if (req.preset is None) == (req.bodies is None):
        raise InvalidConfiguration("provide exactly one of 'preset' or 'bodies'")
    if req.preset is not None:
        return build_preset(req.preset, req.gravitationalConstant)
    return System.from_dicts(
        [body.model_dump() for body in req.bodies], name="User system"
    )


@app.get("/api/presets", response_model=List[PresetInfo])
def presets():
    return [
        {"name": name, "period": preset_period(name, DEFAULT_G)} for name in PRESETS
    ]


@app.post("/api/simulate", response_model=SimulateResponse)
def run_simulation(req: SimulateRequest):
    """
    Precompute a trajectory and return its frames for a renderer to play
    back. Records physics and sampling timings when `profile` is true.
    """
    profile_enabled = bool(req.profile)
    timings = {}

    try:
        system = _initial_system(req)
        physics_start = time.perf_counter()
        trajectory = simulate(
            system,
            steps=req.steps,
            dt=req.dtSec,
            g=req.gravitationalConstant,
            epsilon=req.epsilon,
            integrator=req.integrator,
        )
        timings["simulate"] = (time.perf_counter() - physics_start) * 1000.0

        samples_start = time.perf_counter()
        frames = trajectory.to_samples(stride=req.stride)
        timings["to_samples"] = (time.perf_counter() - samples_start) * 1000.0
    except InvalidConfiguration as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    meta = {
        "dtSec": trajectory.dt,
        "requestedSteps": trajectory.requested_steps,
        "frameCount": len(trajectory),
        "truncated": trajectory.truncated,
        "divergedAt": trajectory.diverged_at,
    }
    if profile_enabled:
        meta["profile"] = {"timingsMs": timings, "serverTimestamp": time.time()}

    return {
        "frames": frames,
        "masses": trajectory.masses.tolist(),
        "meta": meta,
    }
