"""
Barycenter relaxation.

Repeatedly nudges every node toward the value-weighted centre of the link
ends it connects to, alternating direction, with an influence coefficient
that decays each iteration. After every pass collisions are resolved and
link offsets recomputed, since both feed the next pass.
"""

import logging
from typing import List, Optional, Sequence

from .collisions import resolve_all
from .config import LayoutConfig
from .link_depths import place_links
from .models import Node
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)

ALPHA_DECAY = 0.99


def _weighted_center(links, end_center) -> Optional[float]:
    total = sum(link.value for link in links)
    if total <= 0:
        return None
    return sum(end_center(link) * link.value for link in links) / total


def _shift_toward_sources(stages: List[List[Node]], alpha: float) -> None:
    for stage in reversed(stages):
        for node in stage:
            if not node.incoming:
                continue
            goal = _weighted_center(node.incoming, lambda link: link.source_center)
            if goal is not None:
                node.y += alpha * (goal - node.center)


def _shift_toward_targets(stages: List[List[Node]], alpha: float) -> None:
    for stage in stages:
        for node in stage:
            if not node.outgoing:
                continue
            goal = _weighted_center(node.outgoing, lambda link: link.target_center)
            if goal is not None:
                node.y += alpha * (goal - node.center)


def recenter(nodes: Sequence[Node], height: float) -> None:
    """Shift all nodes so their occupied extent is centred in ``height``."""
    if not nodes:
        return
    top = min(node.y for node in nodes)
    extent = max(node.bottom for node in nodes) - top
    if extent < height:
        offset = height / 2 - (top + extent / 2)
        for node in nodes:
            node.y += offset


def relax(
    stages: List[List[Node]],
    nodes: Sequence[Node],
    padding: float,
    config: LayoutConfig,
    trace: Optional[LayoutTrace] = None,
) -> int:
    """
    Run the configured number of relaxation iterations.

    Args:
        stages: Per-stage node lists, ordered by stage.
        nodes: All nodes (used for link placement and recentering).
        padding: Gap kept between nodes of a stage.
        config: Supplies the iteration count, height and recenter flag.
        trace: Optional trace receiving a snapshot after each pass.

    Returns:
        The number of iterations run.
    """
    iterations = config.effective_iterations
    alpha = 1.0
    for iteration in range(1, iterations + 1):
        alpha *= ALPHA_DECAY

        _shift_toward_sources(stages, alpha)
        resolve_all(stages, padding, config.height)
        place_links(nodes)
        if trace is not None:
            trace.add_stage(
                f"relax_{iteration}_right_to_left", {"alpha": alpha}, nodes
            )

        _shift_toward_targets(stages, alpha)
        resolve_all(stages, padding, config.height)
        place_links(nodes)
        if config.recenter:
            recenter(nodes, config.height)
        if trace is not None:
            trace.add_stage(
                f"relax_{iteration}_left_to_right", {"alpha": alpha}, nodes
            )

    logger.debug("Relaxation ran %d iterations (alpha=%.4f)", iterations, alpha)
    return iterations
