"""
Link placement inside nodes.

Orders the links on each side of a node and stacks them from the node's top
edge, so each bundle tiles the node without gaps or overlap.
"""

from typing import Iterable

from .models import Node


def place_links(nodes: Iterable[Node]) -> None:
    """
    Assign source and target offsets for every link of the given nodes.

    Outgoing links are stacked in order of their target's y; incoming links
    in order of their source's y. Both sorts are stable, so links whose
    far ends share a y keep their input order. The nodes' own link lists are
    left untouched.
    """
    for node in nodes:
        offset = 0.0
        for link in sorted(node.outgoing, key=lambda link: link.target.y):
            link.source_offset = offset
            offset += link.thickness

        offset = 0.0
        for link in sorted(node.incoming, key=lambda link: link.source.y):
            link.target_offset = offset
            offset += link.thickness
