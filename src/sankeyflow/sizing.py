"""
Node sizing.

Computes node values, the padding between nodes, the vertical scale factor
shared by the whole diagram, and the initial heights and ordinal positions
of every node.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .config import LayoutConfig
from .models import Link, Node

logger = logging.getLogger(__name__)


@dataclass
class Scale:
    """Vertical scale factor and inter-node padding for one layout."""

    ky: float
    padding: float


def compute_node_values(nodes: Sequence[Node]) -> None:
    """Set each node's totals and its value, the larger of inflow and outflow."""
    for node in nodes:
        node.total_in = sum(link.value for link in node.incoming)
        node.total_out = sum(link.value for link in node.outgoing)
        node.value = max(node.total_in, node.total_out)


def compute_scale(stages: List[List[Node]], config: LayoutConfig) -> Scale:
    """
    Derive the padding and vertical scale factor.

    Padding comes from the busiest stage: the slack left if each of its
    nodes were one pixel tall (never less than 2), split over its gaps and
    scaled by the spacing factor. The scale factor is the smallest that lets
    every stage, nodes plus padding, fit in the available height. Stages
    whose values sum to zero are skipped; if none remain the scale is 1.
    """
    if not stages:
        return Scale(ky=1.0, padding=0.0)

    busiest = max(len(stage) for stage in stages)
    if busiest == 1:
        padding = 0.0
    else:
        padding = config.spacing_factor * max(2, config.height - busiest) / (busiest - 1)

    candidates = []
    for stage in stages:
        total = sum(node.value for node in stage)
        if total > 0:
            candidates.append((config.height - (len(stage) - 1) * padding) / total)
    ky = min(candidates) if candidates else 1.0

    return Scale(ky=ky, padding=padding)


def initialize_sizes(
    stages: List[List[Node]], links: Sequence[Link], config: LayoutConfig
) -> Scale:
    """
    Size every node and link and give nodes their naive starting order.

    Each node's y becomes its ordinal within its stage (0, 1, 2, ...);
    collision resolution turns those into real positions.

    Returns:
        The Scale used.
    """
    scale = compute_scale(stages, config)
    for stage in stages:
        for ordinal, node in enumerate(stage):
            node.height = node.value * scale.ky
            node.y = ordinal
    for link in links:
        link.thickness = link.value * scale.ky

    logger.debug("Scale factor %.6g with padding %.6g", scale.ky, scale.padding)
    return scale
