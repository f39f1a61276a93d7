"""
Link resolution.

Connects links to the nodes they join, turning integer endpoint indices into
node references and filling each node's incoming/outgoing lists.
"""

import logging
import numbers
from typing import List, Sequence

from .errors import LinkReferenceError
from .models import Link, Node

logger = logging.getLogger(__name__)


def _resolve(nodes: Sequence[Node], endpoint, link_idx: int, role: str) -> Node:
    if isinstance(endpoint, Node):
        return endpoint
    if isinstance(endpoint, bool) or not isinstance(endpoint, numbers.Integral):
        raise LinkReferenceError(
            f"Link {link_idx}: {role} must be a Node or an integer index, "
            f"got {endpoint!r}"
        )
    if not 0 <= endpoint < len(nodes):
        raise LinkReferenceError(
            f"Link {link_idx}: {role} index {endpoint} is out of range "
            f"for {len(nodes)} nodes"
        )
    return nodes[int(endpoint)]


def connect_links(
    nodes: Sequence[Node], links: Sequence[Link], reverse_graph: bool = False
) -> None:
    """
    Resolve link endpoints and attach every link to its two nodes.

    All endpoints are resolved before any record is touched, so a bad index
    leaves the nodes and links exactly as they were.

    Args:
        nodes: The node collection; integer endpoints index into it.
        links: The link collection, in input order.
        reverse_graph: Swap each link's source and target.

    Raises:
        LinkReferenceError: If an endpoint index is out of range.
    """
    resolved: List[tuple] = []
    for link_idx, link in enumerate(links):
        source = _resolve(nodes, link.source, link_idx, "source")
        target = _resolve(nodes, link.target, link_idx, "target")
        if reverse_graph:
            source, target = target, source
        resolved.append((source, target))

    for idx, node in enumerate(nodes):
        node.index = idx
        node.incoming = []
        node.outgoing = []

    for link, (source, target) in zip(links, resolved):
        link.source = source
        link.target = target
        source.outgoing.append(link)
        target.incoming.append(link)

    logger.debug("Connected %d links across %d nodes", len(links), len(nodes))
