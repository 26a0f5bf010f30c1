"""Run a skirmish between random commanders via the server API."""
import httpx
import random
import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from agents.random_agent import play_turn as random_play
from horizon.config import configure_logging

logger = structlog.get_logger()


def run_match(
    base_url: str = "http://localhost:8000",
    factions: list[str] | None = None,
    seed: int = 42,
    ticks: int = 30,
):
    factions = factions or ["NATO", "Iran Regime"]

    resp = httpx.post(f"{base_url}/worlds", json={})
    resp.raise_for_status()
    world = resp.json()
    world_id = world["world_id"]
    if not world["ready"]:
        logger.error("Map not ready", world=world_id)
        return world_id
    logger.info("World created", world=world_id, regions=world["regions"], units=world["units"])

    rngs = {f: random.Random(seed + i) for i, f in enumerate(factions)}

    for t in range(ticks):
        for faction in factions:
            result = random_play(base_url, world_id, faction, rngs[faction])
            if result.get("error"):
                logger.error("Commander failed", faction=faction, error=result["error"])
                return world_id
            if result.get("ordered"):
                logger.info("Orders issued", tick=t, faction=faction, units=result["ordered"])

        # Drive the clock ourselves so the run does not depend on the server ticker
        r = httpx.post(f"{base_url}/worlds/{world_id}/tick").json()
        logger.info("Tick", tick=r["tick"], changed=r["changed"])

    return world_id


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Run a Red Horizon skirmish")
    parser.add_argument("--server", default="http://localhost:8000")
    parser.add_argument("--factions", nargs="*", default=["NATO", "Iran Regime"])
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--ticks", type=int, default=30)
    args = parser.parse_args()

    configure_logging()
    run_match(base_url=args.server, factions=args.factions, seed=args.seed, ticks=args.ticks)
