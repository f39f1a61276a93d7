"""
Graph builder for Sankey diagrams.

Builds the node and link collections the layout engine consumes from named,
weighted flows, and exports them to networkx for analysis.
"""

from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from .balance import BalanceReport, check_balance
from .config import LayoutConfig
from .layout import LayoutResult, layout
from .linker import connect_links
from .models import Link, Node
from .tracer import LayoutTrace


class SankeyGraph:
    """Node and link collections for one diagram, keyed by node name."""

    def __init__(self):
        self.nodes: List[Node] = []
        self.links: List[Link] = []
        self._index: Dict[str, int] = {}
        # (source, target) indices of each flow as added, in link order
        self._endpoints: List[Tuple[int, int]] = []

    def add_node(self, name: str) -> Node:
        """Return the node called ``name``, creating it if needed."""
        if name not in self._index:
            self._index[name] = len(self.nodes)
            self.nodes.append(Node(name=name, index=len(self.nodes)))
        return self.nodes[self._index[name]]

    def add_flow(self, source: str, target: str, value: float) -> Link:
        """Add a flow between two named nodes; endpoints are stored as indices."""
        source_idx = self.add_node(source).index
        target_idx = self.add_node(target).index
        link = Link(source=source_idx, target=target_idx, value=value)
        self.links.append(link)
        self._endpoints.append((source_idx, target_idx))
        return link

    def _reset_endpoints(self) -> None:
        """Point every link back at its flow's original node indices."""
        for link, (source_idx, target_idx) in zip(self.links, self._endpoints):
            link.source = source_idx
            link.target = target_idx

    def get_node(self, name: str) -> Optional[Node]:
        """Get a node by name, or None if it does not exist."""
        idx = self._index.get(name)
        return None if idx is None else self.nodes[idx]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export the diagram as a networkx MultiDiGraph keyed by node name.

        Node attributes carry ``index``, ``value`` and ``stage``; each edge
        carries the flow's ``value``. Parallel flows stay separate edges, and
        edges follow the flows as added even after a reversed layout.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.name, index=node.index, value=node.value, stage=node.stage)
        for link, (source_idx, target_idx) in zip(self.links, self._endpoints):
            graph.add_edge(
                self.nodes[source_idx].name,
                self.nodes[target_idx].name,
                value=link.value,
            )
        return graph

    def layout(
        self,
        config: Optional[LayoutConfig] = None,
        trace: Optional[LayoutTrace] = None,
    ) -> LayoutResult:
        """Lay out this diagram in place, starting from the flows as added."""
        self._reset_endpoints()
        return layout(self.nodes, self.links, config, trace=trace)

    def check_balance(self, epsilon: float = 1e-9) -> BalanceReport:
        """Link the diagram and report inflow/outflow mismatches."""
        self._reset_endpoints()
        connect_links(self.nodes, self.links)
        return check_balance(self.nodes, epsilon)


def create_graph(flows: Iterable[Tuple[str, str, float]]) -> SankeyGraph:
    """
    Create a SankeyGraph from a list of flows.

    Args:
        flows: (source name, target name, value) triples. Nodes are created
            in order of first appearance.

    Returns:
        SankeyGraph object
    """
    graph = SankeyGraph()
    for source, target, value in flows:
        graph.add_flow(source, target, value)
    return graph
