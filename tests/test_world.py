"""Tests for the World container."""

import pytest

from horizon.config import Settings
from horizon.pathfinding import hop_distance, next_hop
from horizon.scenario import UNIT_TABLE
from horizon.types import Faction, Seed, Terrain
from horizon.world import World


def _line_seeds(n):
    return [Seed(id=i, name=f"S{i}", x=100 + 200 * i, y=500, country="LAND", state="",
                 terrain=Terrain.PLAINS) for i in range(n)]


class TestCreate:

    def test_default_scenario(self):
        world = World.create()
        assert world.ready
        assert len(world.regions) == 46
        assert len(world.units) == len(UNIT_TABLE)
        assert set(world.army_groups) == {"ag_iran_1", "ag_nato_1"}
        assert world.ticks == 0
        assert not world.paused

    def test_landing_zone_handed_to_nato(self):
        world = World.create()
        assert world.regions[121].owner == Faction.NATO
        assert world.regions[121].controller == Faction.NATO

    def test_units_start_idle_on_real_regions(self):
        world = World.create()
        for u in world.units:
            assert u.region in world.regions
            assert u.target is None

    def test_custom_seeds_start_empty(self):
        world = World.create(seeds=_line_seeds(4))
        assert len(world.regions) == 4
        assert world.units == []
        assert world.army_groups == {}

    def test_empty_seeds_not_ready(self):
        world = World.create(seeds=[])
        assert not world.ready
        assert world.tick() is False
        assert world.ticks == 0

    def test_settings_box(self):
        cfg = Settings(map_width=400, map_height=300, map_margin=0)
        world = World.create(seeds=[Seed(id=1, name="A", x=10, y=10, country="X", state="",
                                         terrain=Terrain.HILLS)], settings=cfg)
        assert world.regions[1].path == "M0.0,0.0L400.0,0.0L400.0,300.0L0.0,300.0Z"


class TestMovement:

    @pytest.fixture
    def world(self, make_unit):
        return World.create(seeds=_line_seeds(5), units=[make_unit("a", region=0),
                                                         make_unit("b", region=4)])

    def test_issue_and_tick(self, world):
        assert world.issue_move(["a"], 3) == 1
        assert world.find_unit("a").region == 0
        assert world.route(world.find_unit("a")) == [0, 1, 2, 3]

        for expected in (1, 2, 3):
            assert world.tick() is True
            assert world.find_unit("a").region == expected
        assert world.tick() is True
        assert world.find_unit("a").target is None
        assert world.tick() is False
        assert world.ticks == 5

    def test_unknown_units_ignored(self, world):
        assert world.issue_move(["ghost"], 2) == 0
        assert world.tick() is False

    def test_region_units(self, world):
        assert [u.id for u in world.region_units(0)] == ["a"]
        assert world.region_units(2) == []

    def test_faction_units(self, world):
        assert len(world.faction_units(Faction.NATO)) == 2
        assert world.faction_units(Faction.IRAN) == []

    def test_route_idle(self, world):
        assert world.route(world.find_unit("b")) == []


class TestPause:

    def test_paused_world_refuses_orders(self, make_unit):
        world = World.create(seeds=_line_seeds(3), units=[make_unit("a", region=0)], paused=True)
        assert world.issue_move(["a"], 2) == 0
        assert world.find_unit("a").target is None

    def test_paused_world_does_not_tick(self, make_unit):
        world = World.create(seeds=_line_seeds(3), units=[make_unit("a", region=0)])
        world.issue_move(["a"], 2)
        world.pause()
        assert world.tick() is False
        assert world.ticks == 0
        assert world.find_unit("a").region == 0

        world.resume()
        assert world.tick() is True
        assert world.find_unit("a").region == 1


class TestScenarioMovement:

    def test_marines_walk_to_tehran(self):
        world = World.create()
        hops = hop_distance(world.regions, 121, 107)
        assert world.issue_move(["n1", "n2"], 107) == 2
        first = next_hop(world.regions, 121, 107)

        world.tick()
        assert world.find_unit("n1").region == first
        assert world.find_unit("n3").region == 121

        for _ in range(hops - 1):
            world.tick()
        assert world.find_unit("n1").region == 107
        assert world.find_unit("n2").region == 107
        world.tick()
        assert world.find_unit("n1").target is None


class TestViews:

    def test_full_state(self):
        world = World.create()
        state = world.get_full_state()
        assert state["tick"] == 0
        assert state["ready"] is True
        assert len(state["regions"]) == 46
        tehran = state["regions"][107]
        assert tehran["name"] == "Tehran"
        assert tehran["terrain"] == "ur"
        assert tehran["owner"] == "Iran Regime"
        assert sorted(tehran["units"]) == ["u4", "u5"]
        assert tehran["adjacent"] == list(world.regions[107].neighbors)
        unit = next(u for u in state["units"] if u["id"] == "n1")
        assert unit["region"] == 121
        assert unit["moving"] is False
        assert len(state["army_groups"]) == 2

    def test_geometry(self):
        world = World.create()
        geo = world.get_geometry()
        assert set(geo["regions"]) == set(world.regions)
        assert set(geo["borders"]) == {"IRAN", "IRAQ", "TURKEY", "AFGHANISTAN", "CAUCASUS"}
