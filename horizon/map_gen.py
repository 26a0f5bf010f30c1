"""Map generation for Red Horizon: Voronoi provinces from hand-placed seeds."""
from __future__ import annotations
from dataclasses import replace
from typing import Mapping, Optional, Sequence

import numpy as np
import structlog
from scipy.spatial import QhullError, Voronoi

from .types import Faction, MapResult, Region, Seed, Terrain

logger = structlog.get_logger()

MAP_WIDTH = 2000
MAP_HEIGHT = 1200
# The partition box extends past the canvas so border provinces get closed cells
MAP_MARGIN = 500

# Rectangle edges carry this label instead of a site index
_BOX_EDGE = -1
_EPS = 1e-9
_MIN_EDGE = 1e-6

# ── Country borders ──────────────────────────────────────────────────────────
# Hand-drawn outlines handed to the renderer untouched.

COUNTRY_PATHS = {
    "IRAN": "M 950,320 L 1000,310 L 1100,300 L 1180,290 L 1200,310 L 1250,320 L 1350,300 L 1400,280 L 1450,290 L 1550,320 L 1650,350 L 1640,450 L 1660,550 L 1650,650 L 1700,700 L 1650,800 L 1600,900 L 1500,950 L 1400,960 L 1350,920 L 1300,940 L 1250,900 L 1150,850 L 1120,750 L 1050,650 L 980,550 L 950,450 L 950,450 L 950,320 Z",
    "IRAQ": "M 950,450 L 980,550 L 1050,650 L 1120,750 L 1130,820 L 1050,850 L 950,800 L 850,750 L 750,700 L 720,600 L 750,500 L 750,460 L 850,450 L 950,450 Z",
    "TURKEY": "M 950,320 L 950,450 L 850,450 L 750,460 L 700,480 L 650,520 L 620,580 L 600,520 L 550,500 L 450,520 L 400,500 L 350,520 L 300,480 L 250,460 L 200,420 L 150,380 L 100,340 L 100,260 L 200,280 L 250,230 L 350,210 L 500,160 L 600,140 L 700,160 L 800,180 L 920,170 L 930,250 L 950,320 Z",
    "AFGHANISTAN": "M 1650,350 L 1750,360 L 1850,380 L 1950,400 L 1980,420 L 1950,450 L 1900,550 L 1850,650 L 1800,750 L 1700,700 L 1650,650 L 1660,550 L 1640,450 L 1650,350 Z",
    "CAUCASUS": "M 920,170 L 1050,140 L 1150,160 L 1200,190 L 1250,240 L 1220,270 L 1180,290 L 1100,300 L 1000,310 L 950,320 L 930,250 L 920,170 Z",
}

# ── Province seeds ───────────────────────────────────────────────────────────

PROVINCE_TABLE = [
    # id, name, state, country, terrain, x, y, vp, coastal, port
    # ── Iran ──
    (101, "East Azerbaijan", "Azerbaijan", "IRAN", Terrain.MOUNTAIN, 1050, 360, 20, False, False),
    (102, "West Azerbaijan", "Azerbaijan", "IRAN", Terrain.MOUNTAIN, 1000, 320, 10, False, False),
    (103, "Ardabil", "Azerbaijan", "IRAN", Terrain.HILLS, 1120, 380, 5, False, False),
    (104, "Gilan", "Caspian", "IRAN", Terrain.HILLS, 1200, 320, 15, True, False),
    (105, "Mazandaran", "Caspian", "IRAN", Terrain.HILLS, 1300, 320, 15, True, False),
    (106, "Golestan", "Caspian", "IRAN", Terrain.PLAINS, 1400, 320, 10, True, False),
    (107, "Tehran", "Tehran", "IRAN", Terrain.URBAN, 1250, 420, 50, False, False),
    (108, "Qom", "Central", "IRAN", Terrain.PLAINS, 1200, 450, 10, False, False),
    (109, "Kurdistan", "Kurdistan", "IRAN", Terrain.MOUNTAIN, 1100, 450, 10, False, False),
    (110, "Kermanshah", "Kurdistan", "IRAN", Terrain.MOUNTAIN, 1080, 520, 15, False, False),
    (111, "Luristan", "Zagros", "IRAN", Terrain.MOUNTAIN, 1150, 550, 5, False, False),
    (112, "Khuzestan North", "Khuzestan", "IRAN", Terrain.PLAINS, 1150, 700, 20, False, False),
    (113, "Khuzestan South", "Khuzestan", "IRAN", Terrain.URBAN, 1180, 780, 25, True, True),
    (114, "Isfahan", "Isfahan", "IRAN", Terrain.URBAN, 1280, 600, 30, False, False),
    (115, "Yazd", "Central", "IRAN", Terrain.DESERT, 1380, 650, 10, False, False),
    (116, "Fars", "Fars", "IRAN", Terrain.URBAN, 1300, 800, 25, False, False),
    (117, "Bushehr", "Fars", "IRAN", Terrain.COASTAL_DESERT, 1250, 880, 15, True, True),
    (118, "Kerman", "Kerman", "IRAN", Terrain.DESERT, 1450, 750, 15, False, False),
    (119, "Hormozgan", "Hormozgan", "IRAN", Terrain.COASTAL_DESERT, 1350, 900, 20, True, True),
    (120, "Sistan", "Sistan", "IRAN", Terrain.DESERT, 1550, 800, 5, False, False),
    (121, "Baluchestan", "Sistan", "IRAN", Terrain.COASTAL_DESERT, 1450, 920, 5, True, False),
    (122, "South Khorasan", "Khorasan", "IRAN", Terrain.DESERT, 1550, 550, 5, False, False),
    (123, "Razavi Khorasan", "Khorasan", "IRAN", Terrain.URBAN, 1500, 400, 25, False, False),
    (124, "Semnan", "Central", "IRAN", Terrain.DESERT, 1400, 450, 5, False, False),
    # ── Iraq ──
    (201, "Nineveh", "Mosul", "IRAQ", Terrain.URBAN, 880, 480, 15, False, False),
    (202, "Erbil", "Kurdistan", "IRAQ", Terrain.MOUNTAIN, 950, 520, 15, False, False),
    (203, "Kirkuk", "Kurdistan", "IRAQ", Terrain.HILLS, 920, 580, 10, False, False),
    (204, "Baghdad", "Baghdad", "IRAQ", Terrain.URBAN, 950, 650, 30, False, False),
    (205, "Anbar", "West Iraq", "IRAQ", Terrain.DESERT, 850, 600, 5, False, False),
    (206, "Nasiriyah", "South Iraq", "IRAQ", Terrain.PLAINS, 1000, 700, 10, False, False),
    (207, "Basra", "Basra", "IRAQ", Terrain.URBAN, 1080, 780, 20, True, True),
    # ── Turkey ──
    (301, "Van", "East Anatolia", "TURKEY", Terrain.MOUNTAIN, 900, 380, 10, False, False),
    (302, "Diyarbakir", "Kurdistan", "TURKEY", Terrain.HILLS, 800, 420, 10, False, False),
    (303, "Erzurum", "East Anatolia", "TURKEY", Terrain.MOUNTAIN, 850, 300, 10, False, False),
    (304, "Sivas", "Central Anatolia", "TURKEY", Terrain.HILLS, 700, 350, 5, False, False),
    (305, "Ankara", "Ankara", "TURKEY", Terrain.URBAN, 500, 300, 30, False, False),
    (306, "Istanbul", "Istanbul", "TURKEY", Terrain.URBAN, 280, 260, 30, True, False),
    (307, "Izmir", "Izmir", "TURKEY", Terrain.URBAN, 300, 400, 20, True, False),
    (308, "Konya", "Central Anatolia", "TURKEY", Terrain.PLAINS, 500, 450, 10, False, False),
    (309, "Adana", "South Anatolia", "TURKEY", Terrain.PLAINS, 600, 500, 15, True, False),
    # ── Afghanistan ──
    (401, "Herat", "Herat", "AFGHANISTAN", Terrain.PLAINS, 1680, 480, 10, False, False),
    (402, "Kandahar", "Kandahar", "AFGHANISTAN", Terrain.DESERT, 1750, 700, 15, False, False),
    (403, "Kabul", "Kabul", "AFGHANISTAN", Terrain.URBAN, 1850, 550, 20, False, False),
    # ── Caucasus ──
    (501, "Baku", "Azerbaijan", "CAUCASUS", Terrain.URBAN, 1220, 260, 25, True, False),
    (502, "Yerevan", "Armenia", "CAUCASUS", Terrain.MOUNTAIN, 1050, 280, 10, False, False),
    (503, "Tbilisi", "Georgia", "CAUCASUS", Terrain.URBAN, 1020, 220, 15, False, False),
]

PROVINCE_SEEDS = [
    Seed(id=pid, name=name, x=x, y=y, country=country, state=state, terrain=terrain,
         vp=vp, is_coastal=coastal, has_port=port)
    for pid, name, state, country, terrain, x, y, vp, coastal, port in PROVINCE_TABLE
]

# "COUNTRY:State" entries take precedence over plain "COUNTRY" entries
DEFAULT_FACTIONS = {
    "TURKEY": Faction.NATO,
    "IRAN": Faction.IRAN,
    "IRAQ:Kurdistan": Faction.KURDISTAN,
}


def faction_for(seed: Seed, factions: Mapping[str, Faction]) -> Faction:
    for key in (f"{seed.country}:{seed.state}", seed.country):
        if key in factions:
            return Faction(factions[key])
    return Faction.NEUTRAL


# ── Geometry ─────────────────────────────────────────────────────────────────

def _candidate_pairs(sites: np.ndarray) -> set[tuple[int, int]]:
    """Pairs of sites that may share a cell edge.

    The Voronoi dual gives exactly the pairs that can touch. Qhull needs at
    least three non-collinear sites; otherwise every pair is a candidate and
    the clipping below sorts out which ones really touch.
    """
    n = len(sites)
    if n >= 3:
        try:
            vor = Voronoi(sites)
            return {(int(min(a, b)), int(max(a, b))) for a, b in vor.ridge_points}
        except QhullError as e:
            logger.warning("Voronoi dual unavailable, using all pairs", sites=n, error=str(e))
    return {(i, j) for i in range(n) for j in range(i + 1, n)}


def _clip(poly: list[tuple[float, float]], labels: list[int],
          a: float, b: float, c: float, label: int) -> tuple[list, list]:
    """Clip a convex polygon to the half-plane a*x + b*y <= c.

    ``labels[k]`` names the site whose bisector produced edge poly[k] -> poly[k+1];
    the new edge along the clip line gets ``label``.
    """
    out_pts: list[tuple[float, float]] = []
    out_labels: list[int] = []
    n = len(poly)
    for k in range(n):
        p, q = poly[k], poly[(k + 1) % n]
        dp = a * p[0] + b * p[1] - c
        dq = a * q[0] + b * q[1] - c
        p_in, q_in = dp <= _EPS, dq <= _EPS
        if p_in:
            out_pts.append(p)
            out_labels.append(labels[k])
            if not q_in:
                t = dp / (dp - dq)
                out_pts.append((p[0] + t * (q[0] - p[0]), p[1] + t * (q[1] - p[1])))
                out_labels.append(label)
        elif q_in:
            t = dp / (dp - dq)
            out_pts.append((p[0] + t * (q[0] - p[0]), p[1] + t * (q[1] - p[1])))
            out_labels.append(labels[k])
    return out_pts, out_labels


def _cell(i: int, sites: np.ndarray, others: Sequence[int],
          box: tuple[float, float, float, float]) -> tuple[list, set[int]]:
    """Polygon of site ``i`` inside ``box`` and the sites it shares an edge with."""
    x0, y0, x1, y1 = box
    poly = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    labels = [_BOX_EDGE] * 4
    px, py = float(sites[i][0]), float(sites[i][1])
    for j in others:
        qx, qy = float(sites[j][0]), float(sites[j][1])
        # Points closer to site i than to site j
        a, b = qx - px, qy - py
        c = (qx * qx + qy * qy - px * px - py * py) / 2.0
        poly, labels = _clip(poly, labels, a, b, c, j)
        if len(poly) < 3:
            return [], set()

    touching = set()
    n = len(poly)
    for k in range(n):
        if labels[k] == _BOX_EDGE:
            continue
        p, q = poly[k], poly[(k + 1) % n]
        if (q[0] - p[0]) ** 2 + (q[1] - p[1]) ** 2 > _MIN_EDGE ** 2:
            touching.add(labels[k])
    return poly, touching


def _svg_path(poly: list[tuple[float, float]]) -> str:
    if not poly:
        return ""
    return "M" + "L".join(f"{x:.1f},{y:.1f}" for x, y in poly) + "Z"


def _partition(sites: np.ndarray, box: tuple[float, float, float, float]) -> tuple[list, list[set[int]]]:
    n = len(sites)
    candidates: dict[int, list[int]] = {i: [] for i in range(n)}
    for a, b in sorted(_candidate_pairs(sites)):
        candidates[a].append(b)
        candidates[b].append(a)

    polygons = []
    adjacency: list[set[int]] = [set() for _ in range(n)]
    for i in range(n):
        poly, touching = _cell(i, sites, candidates[i], box)
        polygons.append(poly)
        for j in touching:
            adjacency[i].add(j)
            adjacency[j].add(i)
    return polygons, adjacency


# ── Generation ───────────────────────────────────────────────────────────────

def generate(
    seeds: Sequence[Seed] | None = None,
    factions: Mapping[str, Faction] | None = None,
    width: float = MAP_WIDTH,
    height: float = MAP_HEIGHT,
    margin: float = MAP_MARGIN,
    borders: Mapping[str, str] | None = None,
) -> MapResult:
    """Partition the map into one region per seed.

    Never raises: a failure is logged and an empty MapResult is returned, which
    callers treat as "map not ready".
    """
    seeds = PROVINCE_SEEDS if seeds is None else list(seeds)
    factions = DEFAULT_FACTIONS if factions is None else factions
    borders = COUNTRY_PATHS if borders is None else borders

    if not seeds:
        logger.warning("No seeds supplied, map left empty")
        return MapResult()

    try:
        ids = [s.id for s in seeds]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate seed ids")

        # Coincident seeds share one site
        site_index: dict[tuple[float, float], int] = {}
        site_of = []
        for s in seeds:
            key = (float(s.x), float(s.y))
            site_of.append(site_index.setdefault(key, len(site_index)))
        sites = np.array(list(site_index.keys()), dtype=float)

        box = (-margin, -margin, width + margin, height + margin)
        polygons, adjacency = _partition(sites, box)

        seeds_at: dict[int, list[int]] = {}
        for k, site in enumerate(site_of):
            seeds_at.setdefault(site, []).append(k)

        regions: dict[int, Region] = {}
        for k, seed in enumerate(seeds):
            site = site_of[k]
            order = sorted(t for j in adjacency[site] for t in seeds_at[j])
            neighbors = tuple(seeds[t].id for t in order)
            regions[seed.id] = Region.from_seed(
                seed, faction_for(seed, factions), neighbors, _svg_path(polygons[site]))
    except Exception:
        logger.exception("Map generation failed", seeds=len(seeds))
        return MapResult()

    edges = sum(len(r.neighbors) for r in regions.values()) // 2
    logger.info("Map generated", regions=len(regions), edges=edges, sites=len(sites))
    return MapResult(regions=regions, borders=dict(borders))


def with_control(regions: Mapping[int, Region], overrides: Mapping[int, Faction],
                 owner: bool = True) -> dict[int, Region]:
    """Copy of ``regions`` with control (and ownership) handed to new factions."""
    out = dict(regions)
    for rid, faction in overrides.items():
        region = out.get(rid)
        if region is None:
            logger.warning("Control override for unknown region", region=rid)
            continue
        if owner:
            out[rid] = replace(region, owner=faction, controller=faction)
        else:
            out[rid] = replace(region, controller=faction)
    return out


def region_by_name(regions: Mapping[int, Region], name: str) -> Optional[Region]:
    for r in regions.values():
        if r.name.lower() == name.lower():
            return r
    return None
