"""World state for Red Horizon: generated map plus the units moving across it."""
from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import Collection, Mapping, Sequence

import structlog

from .config import Settings, settings as default_settings
from .map_gen import generate, with_control
from .movement import issue_move, tick
from .pathfinding import shortest_path
from .scenario import ARMY_GROUPS, CONTROL_OVERRIDES, starting_units
from .types import TERRAIN_SHORT, ArmyGroup, Faction, Region, Seed, Unit

logger = structlog.get_logger()


@dataclass
class World:
    regions: dict[int, Region]
    borders: dict[str, str]
    units: list[Unit] = field(default_factory=list)
    army_groups: dict[str, ArmyGroup] = field(default_factory=dict)
    ticks: int = 0
    paused: bool = False  # a foreground sequence (briefing, dialogue) is running
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        seeds: Sequence[Seed] | None = None,
        factions: Mapping[str, Faction] | None = None,
        units: Sequence[Unit] | None = None,
        army_groups: Sequence[ArmyGroup] | None = None,
        control: Mapping[int, Faction] | None = None,
        settings: Settings | None = None,
        paused: bool = False,
    ) -> World:
        cfg = settings or default_settings
        result = generate(seeds, factions, width=cfg.map_width, height=cfg.map_height,
                          margin=cfg.map_margin)
        # Custom maps start bare; the built-in map gets the opening scenario
        scenario = seeds is None
        if control is None:
            control = CONTROL_OVERRIDES if scenario else {}
        if units is None:
            units = starting_units() if scenario else []
        if army_groups is None:
            army_groups = ARMY_GROUPS if scenario else []
        regions = with_control(result.regions, control)
        return cls(regions=regions, borders=result.borders, units=list(units),
                   army_groups={g.id: g for g in army_groups}, paused=paused)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def ready(self) -> bool:
        return bool(self.regions)

    def region_units(self, region_id: int) -> list[Unit]:
        return [u for u in self.units if u.region == region_id]

    def faction_units(self, faction: Faction) -> list[Unit]:
        return [u for u in self.units if u.faction == faction]

    def find_unit(self, uid: str) -> Unit | None:
        for u in self.units:
            if u.id == uid:
                return u
        return None

    def route(self, unit: Unit) -> list[int]:
        """Remaining path of a moving unit, current region first."""
        if unit.target is None:
            return []
        return shortest_path(self.regions, unit.region, unit.target)

    # ── Commands ─────────────────────────────────────────────────────────

    def issue_move(self, unit_ids: Collection[str], target: int) -> int:
        """Order units towards ``target``. Returns how many units took the order."""
        if self.paused:
            logger.info("Move ignored while paused", units=len(unit_ids), target=target)
            return 0
        with self._lock:
            wanted = set(unit_ids)
            self.units = issue_move(self.units, wanted, target)
            ordered = sum(1 for u in self.units if u.id in wanted)
        logger.info("Move ordered", units=ordered, target=target)
        return ordered

    def tick(self) -> bool:
        """Advance every moving unit one region. Returns whether anything changed."""
        if self.paused or not self.ready:
            return False
        with self._lock:
            units, changed = tick(self.units, self.regions)
            if changed:
                self.units = list(units)
            self.ticks += 1
        if changed:
            logger.debug("Tick", tick=self.ticks, moving=sum(1 for u in self.units if u.is_moving))
        return changed

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    # ── State Views ──────────────────────────────────────────────────────

    def get_geometry(self) -> dict:
        """Shapes for the renderer: one path per region plus country outlines."""
        return {
            "regions": {rid: r.path for rid, r in self.regions.items()},
            "borders": dict(self.borders),
        }

    def get_full_state(self) -> dict:
        regions = {}
        for rid, r in self.regions.items():
            regions[rid] = {
                "name": r.name,
                "country": r.country,
                "state": r.state,
                "terrain": TERRAIN_SHORT[r.terrain],
                "owner": r.owner.value,
                "controller": r.controller.value,
                "manpower": r.manpower,
                "factories": r.factories,
                "vp": r.victory_points,
                "coastal": r.is_coastal,
                "port": r.has_port,
                "center": list(r.center),
                "adjacent": list(r.neighbors),
                "units": [u.id for u in self.region_units(rid)],
            }

        units = []
        for u in self.units:
            units.append({
                "id": u.id, "name": u.name, "type": u.type.value,
                "faction": u.faction.value, "region": u.region,
                "target": u.target, "army_group": u.army_group,
                "organization": u.organization, "strength": u.strength,
                "moving": u.is_moving,
            })

        groups = [{"id": g.id, "name": g.name, "commander": g.commander,
                   "color": g.color, "faction": g.faction.value}
                  for g in self.army_groups.values()]

        return {
            "tick": self.ticks,
            "paused": self.paused,
            "ready": self.ready,
            "regions": regions,
            "units": units,
            "army_groups": groups,
        }
