# src/graph/layout.py - v1
"""ForceAtlas2 prespatialization.

Writes ``x`` / ``y`` node attributes so the annotated graph opens laid out in
a viewer. Purely cosmetic: no stability metric reads the positions.
"""

from __future__ import annotations

import logging
from typing import Any

import networkx as nx
import numpy as np

logger = logging.getLogger(__name__)


def infer_forceatlas2_settings(graph: nx.Graph) -> dict[str, Any]:
    """Sensible ForceAtlas2 settings for ``graph``.

    Takes the gravity and scaling values of graphology's inferSettings (strong
    gravity, weak pull, fixed scaling ratio). Its slowDown and Barnes-Hut
    switches have no networkx counterpart and are not carried over.
    """
    return {
        "strong_gravity": True,
        "gravity": 0.05,
        "scaling_ratio": 10.0,
    }


def _initial_positions(graph: nx.Graph) -> dict | None:
    """Existing x/y attributes as a start layout, when every node has them."""
    pos = {}
    for node, data in graph.nodes(data=True):
        x, y = data.get("x"), data.get("y")
        if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
            return None
        pos[node] = np.array([float(x), float(y)])
    return pos


def prespatialize(graph: nx.Graph, iterations: int, seed: int | None = None) -> None:
    """Run ``iterations`` ForceAtlas2 steps and store positions on nodes.

    No-op for ``iterations <= 0`` or an empty graph.
    """
    if iterations <= 0 or graph.number_of_nodes() == 0:
        return

    settings = infer_forceatlas2_settings(graph)
    positions = nx.forceatlas2_layout(
        graph,
        pos=_initial_positions(graph),
        max_iter=iterations,
        seed=seed,
        **settings,
    )
    for node, (x, y) in positions.items():
        graph.nodes[node]["x"] = float(x)
        graph.nodes[node]["y"] = float(y)

    logger.debug("ForceAtlas2 placed %d nodes in %d iterations", len(positions), iterations)
