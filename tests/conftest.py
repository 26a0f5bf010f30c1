"""Shared fixtures."""
import pytest

from horizon.types import Faction, Region, Unit, UnitType


def _build_graph(edges, isolated=()):
    """Regions from an edge list; neighbour order follows edge order."""
    adj: dict[int, list[int]] = {}
    for a, b in edges:
        adj.setdefault(a, [])
        adj.setdefault(b, [])
        if b not in adj[a]:
            adj[a].append(b)
        if a not in adj[b]:
            adj[b].append(a)
    for rid in isolated:
        adj.setdefault(rid, [])
    return {rid: Region(id=rid, name=f"R{rid}", neighbors=tuple(nbs)) for rid, nbs in adj.items()}


@pytest.fixture
def make_graph():
    return _build_graph


@pytest.fixture
def ring():
    """Five regions in a ring: 1-2-3-4-5-1."""
    return _build_graph([(1, 2), (2, 3), (3, 4), (4, 5), (5, 1)])


@pytest.fixture
def make_unit():
    def _make(uid="u1", region=1, target=None, faction=Faction.NATO):
        return Unit(id=uid, name=uid.upper(), type=UnitType.INFANTRY, faction=faction,
                    region=region, army_group="ag_test", target=target)
    return _make
