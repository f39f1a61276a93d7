"""
sankeyflow - Sankey diagram layout

A Python library that computes the geometry of a Sankey diagram: node stages,
positions and heights, and where every flow attaches to its nodes.

Example:
    >>> from sankeyflow import LayoutConfig, create_graph
    >>> graph = create_graph([
    ...     ("Wages", "Budget", 1500),
    ...     ("Budget", "Rent", 600),
    ...     ("Budget", "Food", 400),
    ... ])
    >>> result = graph.layout(LayoutConfig(width=600, height=400))
    >>> [(n.name, n.stage) for n in result.nodes]
    [('Wages', 0), ('Budget', 1), ('Rent', 2), ('Food', 2)]

Debug Mode Example:
    >>> engine = SankeyLayout(LayoutConfig(), debug=True)
    >>> engine.layout(graph.nodes, graph.links)
    >>> print(engine.get_trace().summary())
"""

from .balance import BalanceReport, FlowImbalance, check_balance
from .collisions import resolve_collisions
from .config import LayoutConfig
from .errors import ConfigError, LayoutStateError, LinkReferenceError, SankeyError
from .graph import SankeyGraph, create_graph
from .layout import LayoutResult, SankeyLayout, layout, relayout
from .link_depths import place_links
from .linker import connect_links
from .models import Link, Node
from .tracer import LayoutTrace, PipelineStage

__version__ = "0.1.0"

__all__ = [
    # Main API
    "layout",
    "relayout",
    "SankeyLayout",
    "LayoutResult",
    "LayoutConfig",
    # Records
    "Node",
    "Link",
    # Graph building
    "SankeyGraph",
    "create_graph",
    # Pipeline phases
    "connect_links",
    "resolve_collisions",
    "place_links",
    # Balance checking
    "check_balance",
    "BalanceReport",
    "FlowImbalance",
    # Errors
    "SankeyError",
    "LinkReferenceError",
    "LayoutStateError",
    "ConfigError",
    # Debug/Tracing
    "LayoutTrace",
    "PipelineStage",
]
