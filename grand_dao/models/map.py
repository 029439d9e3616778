"""Region connectivity graph."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Mapping

import networkx as nx

from ..constants import TRAVEL_BASE_SECONDS, TRAVEL_DANGER_SECONDS
from .world import REGIONS, Realm, Region


def build_region_graph(regions: Mapping[str, Region] = REGIONS) -> nx.Graph:
    """Return an undirected graph with one node per region.

    Connection lists are not required to be symmetric; an edge declared by
    either endpoint links both.  Connections to unknown regions are ignored.
    """

    graph = nx.Graph()
    for region in regions.values():
        graph.add_node(
            region.key,
            label=region.name,
            realm=region.realm.value,
            danger=region.danger_level,
        )
    for region in regions.values():
        for target in region.connections:
            if target in regions and target != region.key:
                graph.add_edge(region.key, target)
    return graph


@lru_cache(maxsize=1)
def region_graph() -> nx.Graph:
    return build_region_graph()


def neighbours(region_key: str) -> tuple[str, ...]:
    graph = region_graph()
    if region_key not in graph:
        return ()
    return tuple(sorted(graph.neighbors(region_key)))


def is_adjacent(origin: str, destination: str) -> bool:
    graph = region_graph()
    return graph.has_edge(origin, destination)


def discovery_set(region_key: str) -> tuple[str, ...]:
    """Regions revealed when arriving at ``region_key``: itself and its neighbours."""

    if region_key not in REGIONS:
        return ()
    return (region_key, *neighbours(region_key))


def travel_seconds(destination: str) -> int:
    region = REGIONS[destination]
    return TRAVEL_BASE_SECONDS + TRAVEL_DANGER_SECONDS * region.danger_level


def route(origin: str, destination: str) -> list[str]:
    """Shortest hop sequence between two regions, inclusive of both ends."""

    try:
        return nx.shortest_path(region_graph(), origin, destination)
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return []


def touches_realm(region_keys: Iterable[str], realm: Realm) -> bool:
    return any(
        REGIONS[key].realm is realm for key in region_keys if key in REGIONS
    )


__all__ = [
    "build_region_graph",
    "discovery_set",
    "is_adjacent",
    "neighbours",
    "region_graph",
    "route",
    "touches_realm",
    "travel_seconds",
]
