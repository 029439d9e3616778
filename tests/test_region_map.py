from __future__ import annotations

import sys
from pathlib import Path

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.models.map import (
    build_region_graph,
    discovery_set,
    is_adjacent,
    neighbours,
    route,
    travel_seconds,
)
from grand_dao.models.world import REGIONS, Realm, Region


def test_declared_connections_are_adjacent_both_ways() -> None:
    for region in REGIONS.values():
        for target in region.connections:
            if target in REGIONS:
                assert is_adjacent(region.key, target)
                assert is_adjacent(target, region.key)


def test_discovery_set_is_region_plus_neighbours() -> None:
    assert discovery_set("peaceful_village") == (
        "peaceful_village",
        "forest_path",
        "river_delta",
    )
    assert discovery_set("nowhere") == ()
    assert neighbours("nowhere") == ()


def test_travel_time_scales_with_destination_danger() -> None:
    assert travel_seconds("forest_path") == 90
    assert travel_seconds("river_delta") == 60


def test_route_between_distant_regions() -> None:
    hops = route("peaceful_village", "merchant_hub")
    assert hops[0] == "peaceful_village"
    assert hops[-1] == "merchant_hub"
    assert all(is_adjacent(a, b) for a, b in zip(hops, hops[1:]))
    assert route("peaceful_village", "nowhere") == []


def test_graph_ignores_unknown_connections() -> None:
    regions = {
        "a": Region("a", "A", Realm.MORTAL, 1, ("b", "ghost")),
        "b": Region("b", "B", Realm.MORTAL, 2, ()),
    }
    graph = build_region_graph(regions)
    assert set(graph.nodes) == {"a", "b"}
    assert graph.has_edge("b", "a")
    assert graph.nodes["b"]["danger"] == 2
