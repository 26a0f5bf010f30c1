"""Random commander that plays Red Horizon via the API."""
import random
import httpx


def play_turn(base_url: str, world_id: str, faction: str, rng: random.Random,
              order_chance: float = 0.3) -> dict:
    """Get state, send idle units of ``faction`` somewhere random."""
    resp = httpx.get(f"{base_url}/worlds/{world_id}/state")
    if resp.status_code != 200:
        return {"error": resp.text}
    state = resp.json()
    if state.get("paused"):
        return {"paused": True}

    regions = list(state.get("regions", {}).keys())
    idle = [u for u in state.get("units", []) if u["faction"] == faction and not u["moving"]]
    if not regions or not idle:
        return {"ordered": 0}

    # Units sharing a region move as one stack
    stacks: dict[int, list[str]] = {}
    for u in idle:
        stacks.setdefault(u["region"], []).append(u["id"])

    ordered = 0
    for region, unit_ids in stacks.items():
        if rng.random() >= order_chance:
            continue
        target = int(rng.choice(regions))
        resp = httpx.post(f"{base_url}/worlds/{world_id}/moves",
                          json={"unit_ids": unit_ids, "target": target})
        if resp.status_code != 200:
            return {"error": resp.text}
        ordered += resp.json()["ordered"]
    return {"ordered": ordered}
