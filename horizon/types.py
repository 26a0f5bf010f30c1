"""Core data types for Red Horizon."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Terrain(str, Enum):
    PLAINS = "Plains"
    DESERT = "Desert"
    MOUNTAIN = "Mountain"
    HILLS = "Hills"
    URBAN = "Urban"
    COASTAL_DESERT = "Coastal Desert"


TERRAIN_SHORT = {
    Terrain.PLAINS: "pl",
    Terrain.DESERT: "de",
    Terrain.MOUNTAIN: "mo",
    Terrain.HILLS: "hi",
    Terrain.URBAN: "ur",
    Terrain.COASTAL_DESERT: "cd",
}


class Faction(str, Enum):
    NATO = "NATO"
    IRAN = "Iran Regime"
    KURDISTAN = "Kurdish Rebels"
    CSTO = "CSTO"
    CHINA = "PRC"
    NEUTRAL = "Neutral"


class UnitType(str, Enum):
    INFANTRY = "Infantry"
    TANK = "Armor"
    MECHANIZED = "Mechanized"
    MOUNTAINEER = "Mountaineer"
    MARINE = "Marine"
    HQ = "HQ"


# Initial attribute derivation from a seed's victory-point value
BASE_MANPOWER = 1000
MANPOWER_PER_VP = 100
BASE_INFRASTRUCTURE = 5
FACTORY_VP_THRESHOLD = 20
FACTORIES_MAJOR = 4
FACTORIES_MINOR = 1
BASE_SUPPLY_LIMIT = 15
BASE_COMPLIANCE = 100


@dataclass(frozen=True)
class Seed:
    id: int
    name: str
    x: float
    y: float
    country: str
    state: str
    terrain: Terrain
    vp: int = 0
    is_coastal: bool = False
    has_port: bool = False


@dataclass(frozen=True)
class Region:
    id: int
    name: str
    country: str = ""
    state: str = ""
    terrain: Terrain = Terrain.PLAINS
    owner: Faction = Faction.NEUTRAL
    controller: Faction = Faction.NEUTRAL
    manpower: int = BASE_MANPOWER
    infrastructure: int = BASE_INFRASTRUCTURE
    factories: int = FACTORIES_MINOR
    anti_air: int = 0
    supply_limit: int = BASE_SUPPLY_LIMIT
    resistance: int = 0
    compliance: int = BASE_COMPLIANCE
    victory_points: int = 0
    is_coastal: bool = False
    has_port: bool = False
    neighbors: tuple[int, ...] = ()
    center: tuple[float, float] = (0.0, 0.0)
    path: str = ""  # rendering geometry, never read by the engine

    @classmethod
    def from_seed(cls, seed: Seed, faction: Faction, neighbors: tuple[int, ...],
                  path: str) -> Region:
        return cls(
            id=seed.id,
            name=seed.name,
            country=seed.country,
            state=seed.state,
            terrain=seed.terrain,
            owner=faction,
            controller=faction,
            manpower=BASE_MANPOWER + seed.vp * MANPOWER_PER_VP,
            infrastructure=BASE_INFRASTRUCTURE,
            factories=FACTORIES_MAJOR if seed.vp > FACTORY_VP_THRESHOLD else FACTORIES_MINOR,
            victory_points=seed.vp,
            is_coastal=seed.is_coastal,
            has_port=seed.has_port,
            neighbors=neighbors,
            center=(seed.x, seed.y),
            path=path,
        )

    @property
    def occupied(self) -> bool:
        return self.controller != self.owner


@dataclass(frozen=True)
class Unit:
    """A mobile unit group. Moves one region per tick towards ``target``."""
    id: str
    name: str
    type: UnitType
    faction: Faction
    region: int
    army_group: str
    organization: int = 100  # 0-100
    strength: int = 100  # 0-100
    target: Optional[int] = None

    @property
    def is_moving(self) -> bool:
        return self.target is not None and self.target != self.region


@dataclass(frozen=True)
class ArmyGroup:
    id: str
    name: str
    commander: str
    color: str  # UI highlight colour
    faction: Faction
    portrait_color: str = ""
    portrait_id: Optional[int] = None


@dataclass
class MapResult:
    regions: dict[int, Region] = field(default_factory=dict)
    borders: dict[str, str] = field(default_factory=dict)  # country -> svg path

    @property
    def ready(self) -> bool:
        return bool(self.regions)
