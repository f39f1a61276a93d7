"""
Stage assignment.

Assigns every node a horizontal rank (stage) by repeated frontier
expansion, applies the origin/endpoint justification policies, and scales
stages to pixel x-coordinates.
"""

import logging
from typing import Dict, List, Sequence

from .config import LayoutConfig
from .models import Node

logger = logging.getLogger(__name__)


def assign_stages(nodes: Sequence[Node], config: LayoutConfig) -> int:
    """
    Assign a stage to every node.

    Every node starts in the frontier. Each pass stamps the pass number onto
    the frontier's nodes and gathers their targets into the next frontier,
    so a node's final stage is the length of the longest path reaching it.
    The number of passes is capped at the node count; inside a cycle the
    cap is what stops the loop and the resulting stages are arbitrary.

    Args:
        nodes: Linked nodes.
        config: Supplies the justification flags.

    Returns:
        The highest stage reached by layering (``max_stage``).
    """
    max_stage = -1
    frontier: List[Node] = list(nodes)
    while frontier and max_stage < len(nodes) - 1:
        max_stage += 1
        # dict keeps first-seen order while dropping repeats
        next_frontier: Dict[Node, None] = {}
        for node in frontier:
            node.stage = max_stage
            for link in node.outgoing:
                next_frontier[link.target] = None
        frontier = list(next_frontier)

    if config.justify_origins_left:
        for node in nodes:
            if not node.incoming:
                node.stage = 0
    else:
        # Pull each origin right until it sits just before its first target
        for node in nodes:
            if node.is_origin:
                node.stage = min(link.target.stage for link in node.outgoing) - 1

    if config.justify_endpoints_right:
        for node in nodes:
            if not node.outgoing:
                node.stage = max_stage

    logger.debug("Assigned %d nodes to %d stages", len(nodes), max_stage + 1)
    return max_stage


def scale_stages(nodes: Sequence[Node], max_stage: int, config: LayoutConfig) -> None:
    """
    Convert stages to x-coordinates spread across the usable width.

    A diagram with a single stage places every node at x = 0.
    """
    if max_stage > 0:
        width_per_stage = (config.width - config.node_width) / max_stage
    else:
        width_per_stage = 0
    for node in nodes:
        node.x = node.stage * width_per_stage


def group_by_stage(nodes: Sequence[Node]) -> List[List[Node]]:
    """
    Group nodes into stages, ordered by stage number.

    Nodes keep their input order inside each group. Stage numbers with no
    nodes produce no group.
    """
    groups: Dict[int, List[Node]] = {}
    for node in nodes:
        groups.setdefault(node.stage, []).append(node)
    return [groups[stage] for stage in sorted(groups)]
