#!/usr/bin/env python3
"""Render the region connectivity map, coloured by realm."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.lines import Line2D

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from grand_dao.models.map import build_region_graph
from grand_dao.models.world import REGIONS, Realm

REALM_COLOURS = {
    Realm.MORTAL.value: "#f5deb3",
    Realm.HEAVEN.value: "#aec7e8",
    Realm.UNDERWORLD.value: "#c5b0d5",
}

MARKET_EDGE_COLOUR = "#f0a500"
PLAIN_EDGE_COLOUR = "#333333"


def _highlight_route(graph: nx.Graph, origin: str | None, destination: str | None) -> list[tuple[str, str]]:
    if not origin or not destination:
        return []
    try:
        hops = nx.shortest_path(graph, origin, destination)
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return []
    return list(zip(hops, hops[1:]))


def render_region_graph(
    output_path: Path,
    dpi: int = 200,
    seed: int = 42,
    size: float = 16.0,
    origin: str | None = None,
    destination: str | None = None,
) -> None:
    graph = build_region_graph()
    pos = nx.spring_layout(graph, k=0.9, seed=seed)

    plt.figure(figsize=(size, size * 0.75), dpi=dpi)

    node_colours = [REALM_COLOURS.get(graph.nodes[node]["realm"], "#dddddd") for node in graph]
    node_sizes = [300 + 120 * graph.nodes[node]["danger"] for node in graph]
    borders = [
        MARKET_EDGE_COLOUR if REGIONS[node].has_market else PLAIN_EDGE_COLOUR for node in graph
    ]
    nx.draw_networkx_nodes(
        graph,
        pos,
        node_color=node_colours,
        node_size=node_sizes,
        linewidths=1.5,
        edgecolors=borders,
    )

    labels = {
        node: f"{graph.nodes[node]['label']}\n(danger {graph.nodes[node]['danger']})"
        for node in graph
    }
    nx.draw_networkx_labels(graph, pos, labels=labels, font_size=7)
    nx.draw_networkx_edges(graph, pos, edge_color="#7f7f7f", width=1.0, alpha=0.7)

    highlighted = _highlight_route(graph, origin, destination)
    if highlighted:
        nx.draw_networkx_edges(graph, pos, edgelist=highlighted, edge_color="#d62728", width=3.0)

    legend_handles = [
        Line2D([], [], marker="o", linestyle="", color=colour, label=f"{realm.title()} realm")
        for realm, colour in REALM_COLOURS.items()
    ]
    legend_handles.append(
        Line2D(
            [],
            [],
            marker="o",
            linestyle="",
            markerfacecolor="white",
            markeredgecolor=MARKET_EDGE_COLOUR,
            label="Market",
        )
    )
    if highlighted:
        legend_handles.append(Line2D([], [], color="#d62728", linewidth=3.0, label="Route"))

    plt.legend(handles=legend_handles, loc="upper left", frameon=False, fontsize=8)
    plt.axis("off")
    plt.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, bbox_inches="tight")
    plt.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("img/region-map.png"),
        help="Where to write the rendered map.",
    )
    parser.add_argument("--dpi", type=int, default=200, help="Rendering DPI.")
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for the spring layout so repeated renders match.",
    )
    parser.add_argument("--size", type=float, default=16.0, help="Figure width in inches.")
    parser.add_argument("--origin", help="Region key to start a highlighted route from.")
    parser.add_argument("--destination", help="Region key to end a highlighted route at.")

    args = parser.parse_args()
    render_region_graph(
        args.output,
        dpi=args.dpi,
        seed=args.seed,
        size=args.size,
        origin=args.origin,
        destination=args.destination,
    )


if __name__ == "__main__":
    main()
