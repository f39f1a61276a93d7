"""
Collision resolution.

Removes vertical overlap between the nodes of a stage while keeping the
stage inside the available height.
"""

from typing import List

from .models import Node


def resolve_collisions(stage: List[Node], padding: float, height: float) -> None:
    """
    Spread one stage's nodes so neighbours are at least ``padding`` apart.

    The stage list is sorted in place by y. The sort is stable, so nodes with
    equal y keep their previous relative order, and later sorts of the same
    list inherit that order.

    A downward sweep pushes each node below its predecessor; an upward sweep
    then pulls nodes back inside the bottom edge. If the stage needs more
    room than ``height`` offers, nodes end up pressed against both edges
    and can still overlap.

    Args:
        stage: Nodes of one stage; reordered in place.
        padding: Minimum gap between adjacent nodes.
        height: Available height.
    """
    stage.sort(key=lambda node: node.y)

    floor = 0.0
    for node in stage:
        if node.y < floor:
            node.y = floor
        floor = node.bottom + padding

    ceiling = height
    for node in reversed(stage):
        if node.bottom > ceiling:
            node.y = ceiling - node.height
        ceiling = node.y - padding


def resolve_all(stages: List[List[Node]], padding: float, height: float) -> None:
    """Resolve collisions in every stage independently."""
    for stage in stages:
        resolve_collisions(stage, padding, height)
