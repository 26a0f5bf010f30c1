"""Order issuance and per-tick movement resolution."""
from __future__ import annotations
from dataclasses import replace
from typing import Collection, Mapping, Sequence

import structlog

from .pathfinding import next_hop
from .types import Region, Unit

logger = structlog.get_logger()


def issue_move(units: Sequence[Unit], unit_ids: Collection[str], target: int) -> list[Unit]:
    """Give every listed unit a standing order to ``target``.

    Units are not moved here; the next ticks walk them there. Unknown ids are
    ignored and reachability is not checked.
    """
    wanted = set(unit_ids)
    return [replace(u, target=target) if u.id in wanted else u for u in units]


def step(unit: Unit, graph: Mapping[int, Region]) -> Unit:
    """Advance one unit by at most one hop."""
    if unit.target is None:
        return unit
    if unit.target == unit.region:
        # Arrived
        return replace(unit, target=None)
    nxt = next_hop(graph, unit.region, unit.target)
    if nxt == unit.region:
        # No route, drop the order
        logger.debug("Order dropped, target unreachable",
                     unit=unit.id, region=unit.region, target=unit.target)
        return replace(unit, target=None)
    return replace(unit, region=nxt)


def tick(units: Sequence[Unit], graph: Mapping[int, Region]) -> tuple[Sequence[Unit], bool]:
    """Move every unit with an order one hop.

    Returns the new unit list and whether anything changed. When nothing
    changed the input sequence itself is returned.
    """
    updated = [step(u, graph) for u in units]
    if all(new is old for new, old in zip(updated, units)):
        return units, False
    return updated, True
