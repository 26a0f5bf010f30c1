"""Shortest-hop pathfinding over the region adjacency graph."""
from __future__ import annotations
from collections import deque
from typing import Mapping

from .types import Region


def next_hop(graph: Mapping[int, Region], start: int, target: int) -> int:
    """First step from ``start`` on a shortest-hop path to ``target``.

    Returns ``start`` when already there, or when ``target`` cannot be reached.
    Neighbours are explored in their stored order, so equal-length paths are
    broken by whichever is discovered first.
    """
    if start == target:
        return start
    path = shortest_path(graph, start, target)
    return path[1] if path else start


def shortest_path(graph: Mapping[int, Region], start: int, target: int) -> list[int]:
    """Region ids from ``start`` to ``target`` inclusive; empty if unreachable."""
    if start == target:
        return [start]
    visited = {start}
    queue = deque([(start, [start])])
    while queue:
        node, path = queue.popleft()
        region = graph.get(node)
        if region is None:
            continue
        for nb in region.neighbors:
            if nb == target:
                return path + [nb]
            if nb not in visited:
                visited.add(nb)
                queue.append((nb, path + [nb]))
    return []


def hop_distance(graph: Mapping[int, Region], start: int, target: int) -> int:
    """Number of hops between two regions, -1 if unreachable."""
    return len(shortest_path(graph, start, target)) - 1
