"""Opening scenario: army groups, starting units and post-generation control."""
from __future__ import annotations
from .types import ArmyGroup, Faction, Unit, UnitType

ARMY_GROUPS = [
    ArmyGroup(id="ag_iran_1", name="1st Armored", commander="Gen. A. Rahimi", color="#ef4444",
              faction=Faction.IRAN, portrait_color="bg-red-800", portrait_id=1),
    ArmyGroup(id="ag_nato_1", name="TF Alpha", commander="Gen. Shepherd", color="#3b82f6",
              faction=Faction.NATO, portrait_color="bg-blue-800", portrait_id=2),
]

UNIT_TABLE = [
    # id, name, type, faction, region, army group, organization, strength
    # ── Iran: north ──
    ("u1", "88th Armor", UnitType.TANK, Faction.IRAN, 101, "ag_iran_1", 95, 100),
    ("u2", "16th Armor", UnitType.TANK, Faction.IRAN, 102, "ag_iran_1", 90, 95),
    # ── Iran: Tehran ──
    ("u4", "27th Div", UnitType.INFANTRY, Faction.IRAN, 107, "ag_iran_1", 100, 100),
    ("u5", "10th Div", UnitType.INFANTRY, Faction.IRAN, 107, "ag_iran_1", 98, 100),
    # ── Iran: south coast ──
    ("u7", "Marines 1", UnitType.MARINE, Faction.IRAN, 113, "ag_iran_1", 80, 100),
    ("u9", "Coastal Art", UnitType.INFANTRY, Faction.IRAN, 119, "ag_iran_1", 60, 80),
    # ── NATO: Baluchestan landing ──
    ("n1", "1st USMC", UnitType.MARINE, Faction.NATO, 121, "ag_nato_1", 100, 100),
    ("n2", "2nd USMC", UnitType.MARINE, Faction.NATO, 121, "ag_nato_1", 100, 100),
    ("n3", "3rd Infantry", UnitType.INFANTRY, Faction.NATO, 121, "ag_nato_1", 100, 100),
    ("n4", "101st Airborne", UnitType.MECHANIZED, Faction.NATO, 121, "ag_nato_1", 95, 100),
    ("n5", "TF Command", UnitType.HQ, Faction.NATO, 121, "ag_nato_1", 100, 100),
    ("n6", "4th Infantry", UnitType.INFANTRY, Faction.NATO, 121, "ag_nato_1", 90, 100),
]


def starting_units() -> list[Unit]:
    return [
        Unit(id=uid, name=name, type=utype, faction=faction, region=region,
             army_group=group, organization=org, strength=strength)
        for uid, name, utype, faction, region, group, org, strength in UNIT_TABLE
    ]


# The landing zone is already in NATO hands when play starts
CONTROL_OVERRIDES = {121: Faction.NATO}
