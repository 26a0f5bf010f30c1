"""Run a local movement simulation with random orders (no server needed)."""
import argparse
import random

from horizon.config import configure_logging
from horizon.types import Faction
from horizon.world import World


def random_orders(world: World, faction: Faction, rng: random.Random, chance: float = 0.3) -> int:
    """Send each idle stack of ``faction`` to a random region."""
    stacks: dict[int, list[str]] = {}
    for u in world.faction_units(faction):
        if not u.is_moving:
            stacks.setdefault(u.region, []).append(u.id)
    ordered = 0
    targets = list(world.regions)
    for unit_ids in stacks.values():
        if rng.random() < chance:
            ordered += world.issue_move(unit_ids, rng.choice(targets))
    return ordered


def main():
    parser = argparse.ArgumentParser(description="Red Horizon headless simulation")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--ticks", type=int, default=20)
    args = parser.parse_args()

    configure_logging("WARNING")
    rng = random.Random(args.seed)
    world = World.create()
    if not world.ready:
        print("Map generation failed")
        return

    print("=== RED HORIZON — Test Run ===")
    print(f"  {len(world.regions)} regions, "
          f"{sum(len(r.neighbors) for r in world.regions.values()) // 2} borders, "
          f"{len(world.units)} units")
    print()

    for _ in range(args.ticks):
        for faction in (Faction.NATO, Faction.IRAN):
            random_orders(world, faction, rng)
        changed = world.tick()
        moving = [u for u in world.units if u.is_moving]
        print(f"T{world.ticks:2d} | moving={len(moving):2d} | changed={changed}")
        for u in moving:
            route = " > ".join(world.regions[r].name for r in world.route(u))
            print(f"     {u.name}: {route}")

    print("\n=== FINAL ===")
    for u in world.units:
        print(f"  {u.name:16s} {u.faction.value:12s} @ {world.regions[u.region].name}")


if __name__ == "__main__":
    main()
