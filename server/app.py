"""Red Horizon map server — FastAPI."""
from __future__ import annotations
import asyncio
import sys
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from horizon.config import configure_logging, settings
from horizon.pathfinding import next_hop, shortest_path
from horizon.types import Faction, Seed, Terrain
from horizon.world import World

logger = structlog.get_logger()

# ── Data stores ──────────────────────────────────────────────────────────────

WORLDS: dict[str, World] = {}


def get_world(world_id: str) -> World:
    world = WORLDS.get(world_id)
    if not world:
        raise HTTPException(404, "World not found")
    return world

# ── Ticker ───────────────────────────────────────────────────────────────────

def tick_all() -> int:
    """One movement tick for every running world. Returns how many changed."""
    changed = 0
    for world in list(WORLDS.values()):
        if world.tick():
            changed += 1
    return changed


async def run_ticker(interval: float):
    while True:
        await asyncio.sleep(interval)
        tick_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    task = asyncio.create_task(run_ticker(settings.tick_interval))
    logger.info("Ticker started", interval=settings.tick_interval)
    try:
        yield
    finally:
        task.cancel()


app = FastAPI(title="Red Horizon", version="1.0.0", lifespan=lifespan)

# ── Models ───────────────────────────────────────────────────────────────────

class SeedModel(BaseModel):
    id: int
    name: str
    x: float
    y: float
    country: str
    state: str = ""
    terrain: Terrain = Terrain.PLAINS
    vp: int = 0
    is_coastal: bool = False
    has_port: bool = False

    def to_seed(self) -> Seed:
        return Seed(**self.model_dump())


class CreateWorldRequest(BaseModel):
    seeds: list[SeedModel] | None = None
    factions: dict[str, Faction] | None = None
    paused: bool = False


class MoveRequest(BaseModel):
    unit_ids: list[str] = Field(default_factory=list)
    target: int

# ── Endpoints ────────────────────────────────────────────────────────────────

@app.post("/worlds")
def create_world(req: CreateWorldRequest):
    wid = str(uuid.uuid4())[:8]
    seeds = [s.to_seed() for s in req.seeds] if req.seeds is not None else None
    world = World.create(seeds=seeds, factions=req.factions, paused=req.paused)
    WORLDS[wid] = world
    logger.info("World created", world=wid, regions=len(world.regions), ready=world.ready)
    return {
        "world_id": wid,
        "regions": len(world.regions),
        "units": len(world.units),
        "ready": world.ready,
    }


@app.get("/worlds")
def list_worlds():
    return [{"world_id": wid, "tick": w.ticks, "paused": w.paused, "regions": len(w.regions)}
            for wid, w in WORLDS.items()]


@app.get("/worlds/{world_id}/state")
def get_state(world_id: str):
    world = get_world(world_id)
    state = world.get_full_state()
    state["world_id"] = world_id
    return state


@app.get("/worlds/{world_id}/map")
def get_map(world_id: str):
    return get_world(world_id).get_geometry()


@app.post("/worlds/{world_id}/moves")
def submit_move(world_id: str, req: MoveRequest):
    world = get_world(world_id)
    if req.target not in world.regions:
        raise HTTPException(400, "Unknown target region")
    if world.paused:
        raise HTTPException(409, "World is paused")
    ordered = world.issue_move(req.unit_ids, req.target)
    return {"ordered": ordered, "target": req.target}


@app.post("/worlds/{world_id}/tick")
def force_tick(world_id: str):
    world = get_world(world_id)
    changed = world.tick()
    return {"tick": world.ticks, "changed": changed}


@app.post("/worlds/{world_id}/pause")
def pause_world(world_id: str):
    world = get_world(world_id)
    world.pause()
    return {"paused": True}


@app.post("/worlds/{world_id}/resume")
def resume_world(world_id: str):
    world = get_world(world_id)
    world.resume()
    return {"paused": False}


@app.get("/worlds/{world_id}/path")
def get_path(world_id: str, start: int, target: int):
    world = get_world(world_id)
    for rid in (start, target):
        if rid not in world.regions:
            raise HTTPException(400, f"Unknown region {rid}")
    path = shortest_path(world.regions, start, target)
    return {
        "next": next_hop(world.regions, start, target),
        "path": path,
        "hops": len(path) - 1,
        "reachable": bool(path),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
