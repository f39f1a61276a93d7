"""
Sankey layout engine.

Runs the layout pipeline over caller-owned nodes and links:

1. Link resolution (linker)
2. Stage assignment and x scaling (stages)
3. Node values, scale factor and initial sizes (sizing)
4. Collision resolution (collisions)
5. Link placement inside nodes (link_depths)
6. Barycenter relaxation, re-resolving collisions and links each pass (relax)

Records are annotated in place. ``relayout`` re-runs only the link
placement, for use after nodes have been moved by hand.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .collisions import resolve_all
from .config import LayoutConfig
from .errors import LayoutStateError
from .link_depths import place_links
from .linker import connect_links
from .models import Link, Node
from .relax import relax
from .sizing import compute_node_values, initialize_sizes
from .stages import assign_stages, group_by_stage, scale_stages
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Result of the layout algorithm."""

    nodes: List[Node] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    stages: List[List[Node]] = field(default_factory=list)
    max_stage: int = -1
    ky: float = 1.0
    padding: float = 0.0
    iterations: int = 0


def layout(
    nodes: Sequence[Node],
    links: Sequence[Link],
    config: Optional[LayoutConfig] = None,
    trace: Optional[LayoutTrace] = None,
) -> LayoutResult:
    """
    Compute stages, positions, heights and link offsets for a diagram.

    Args:
        nodes: Node collection; mutated in place.
        links: Link collection; endpoints may be Nodes or indices into
            ``nodes``. Mutated in place.
        config: Layout settings; defaults to ``LayoutConfig()``.
        trace: Optional LayoutTrace that receives a snapshot per phase.

    Returns:
        LayoutResult wrapping the annotated records and the derived scale.

    Raises:
        LinkReferenceError: If a link endpoint index is out of range. No
            record is modified in that case.
    """
    if config is None:
        config = LayoutConfig()
    nodes = list(nodes)
    links = list(links)
    if trace is not None:
        trace.node_count = len(nodes)
        trace.link_count = len(links)

    connect_links(nodes, links, reverse_graph=config.reverse_graph)
    compute_node_values(nodes)
    if trace is not None:
        trace.add_stage("linked", {"links": len(links)})

    if not nodes:
        return LayoutResult(nodes=nodes, links=links)

    max_stage = assign_stages(nodes, config)
    scale_stages(nodes, max_stage, config)
    stages = group_by_stage(nodes)
    if trace is not None:
        trace.add_stage(
            "staged",
            {"max_stage": max_stage, "stage_sizes": [len(s) for s in stages]},
            nodes,
        )

    scale = initialize_sizes(stages, links, config)
    if trace is not None:
        trace.add_stage("sized", {"ky": scale.ky, "padding": scale.padding}, nodes)

    resolve_all(stages, scale.padding, config.height)
    if trace is not None:
        trace.add_stage("collisions_resolved", {}, nodes)

    place_links(nodes)
    if trace is not None:
        trace.add_stage("links_placed", {}, nodes)

    iterations = relax(stages, nodes, scale.padding, config, trace=trace)

    for node in nodes:
        node.orig_pos = (node.x, node.y)
        node.last_pos = (node.x, node.y)
        node.move = (0.0, 0.0)
    if trace is not None:
        trace.add_stage("laid_out", {"iterations": iterations}, nodes)

    logger.debug(
        "Laid out %d nodes and %d links in %d stages",
        len(nodes),
        len(links),
        len(stages),
    )
    return LayoutResult(
        nodes=nodes,
        links=links,
        stages=stages,
        max_stage=max_stage,
        ky=scale.ky,
        padding=scale.padding,
        iterations=iterations,
    )


def relayout(nodes: Sequence[Node], links: Sequence[Link]) -> Sequence[Link]:
    """
    Recompute link offsets from the nodes' current positions.

    Stages, heights and node positions are left alone. Calling this twice
    without moving anything gives identical offsets.

    Returns:
        The same link collection, with updated offsets.
    """
    place_links(nodes)
    return links


class SankeyLayout:
    """
    Stateful Sankey layout engine.

    Holds a configuration and, after ``layout()``, the laid-out diagram, so
    that manual repositioning can be applied and links re-placed.

    Example:
        >>> engine = SankeyLayout(LayoutConfig(width=800, height=500))
        >>> result = engine.layout(nodes, links)
        >>> engine.move_node(result.nodes[0], 0, 120)
        >>> engine.reset_node(result.nodes[0])
    """

    def __init__(self, config: Optional[LayoutConfig] = None, debug: bool = False):
        """
        Initialize the layout engine.

        Args:
            config: Layout settings; defaults to ``LayoutConfig()``.
            debug: Record a LayoutTrace for every layout run.
        """
        self.config = config if config is not None else LayoutConfig()
        self.debug = debug
        self.result: Optional[LayoutResult] = None
        self._trace: Optional[LayoutTrace] = None

    def layout(self, nodes: Sequence[Node], links: Sequence[Link]) -> LayoutResult:
        """Run the full pipeline and remember the result."""
        self._trace = LayoutTrace() if self.debug else None
        self.result = layout(nodes, links, self.config, trace=self._trace)
        return self.result

    def get_trace(self) -> Optional[LayoutTrace]:
        """The trace of the last layout run, or None when debug is off."""
        return self._trace

    def _require_result(self) -> LayoutResult:
        if self.result is None:
            raise LayoutStateError("No layout has been computed yet; call layout() first")
        return self.result

    def relayout(self) -> List[Link]:
        """Recompute link offsets for the laid-out diagram."""
        result = self._require_result()
        relayout(result.nodes, result.links)
        return result.links

    def move_node(self, node: Node, x: float, y: float) -> Node:
        """
        Move a node by hand and re-place links.

        The position is clamped so the node stays inside the diagram.
        ``move`` records the offset from the node's laid-out position.
        """
        self._require_result()
        node.x = max(0.0, min(self.config.width - self.config.node_width, x))
        node.y = max(0.0, min(self.config.height - node.height, y))
        node.last_pos = (node.x, node.y)
        orig_x, orig_y = node.orig_pos
        node.move = (node.x - orig_x, node.y - orig_y)
        self.relayout()
        return node

    def reset_node(self, node: Node) -> Node:
        """Return a node to its laid-out position and re-place links."""
        self._require_result()
        node.x, node.y = node.orig_pos
        node.last_pos = node.orig_pos
        node.move = (0.0, 0.0)
        self.relayout()
        return node
