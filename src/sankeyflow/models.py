"""
Data models for Sankey layout.

This module contains the records that flow through every phase of the layout
pipeline. Every field a phase may fill in is present from construction and
defaults to ``None`` ("unset") until the phase that owns it runs, so no phase
ever attaches new attributes to a record.

Classes:
    Node: A diagram node (a box whose height is proportional to its value).
    Link: A weighted, directed flow between two nodes.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(eq=False)
class Node:
    """
    A node in a Sankey diagram.

    Nodes compare and hash by identity, so they can be used as dictionary
    keys and set members while their geometry changes.

    Attributes:
        name: Display label (not used by the layout itself).
        index: Position of this node within its node collection.
        value: Throughput, the larger of total inflow and total outflow.
        stage: Horizontal rank; 0 is the leftmost stage.
        x: Left edge in pixels, derived from the stage.
        y: Top edge in pixels.
        height: Vertical extent in pixels, proportional to value.
        incoming: Links ending at this node, in input order.
        outgoing: Links starting at this node, in input order.
        total_in: Sum of incoming link values.
        total_out: Sum of outgoing link values.
        orig_pos: (x, y) recorded after the final relaxation iteration.
        last_pos: (x, y) after the most recent manual move.
        move: Offset of the current position from orig_pos.
    """

    name: str = ""
    index: int = -1
    value: Optional[float] = None
    stage: Optional[int] = None
    x: Optional[float] = None
    y: Optional[float] = None
    height: Optional[float] = None
    incoming: List["Link"] = field(default_factory=list)
    outgoing: List["Link"] = field(default_factory=list)
    total_in: float = 0.0
    total_out: float = 0.0
    orig_pos: Optional[Tuple[float, float]] = None
    last_pos: Optional[Tuple[float, float]] = None
    move: Tuple[float, float] = (0.0, 0.0)

    @property
    def center(self) -> float:
        """Vertical middle of the node."""
        return self.y + self.height / 2

    @property
    def bottom(self) -> float:
        """Y coordinate of the node's bottom edge."""
        return self.y + self.height

    @property
    def is_origin(self) -> bool:
        """True when the node has outgoing links but no incoming ones."""
        return not self.incoming and bool(self.outgoing)

    @property
    def is_endpoint(self) -> bool:
        """True when the node has incoming links but no outgoing ones."""
        return bool(self.incoming) and not self.outgoing

    def __repr__(self) -> str:
        return f"Node({self.name or self.index!r}, stage={self.stage}, y={self.y})"


@dataclass(eq=False)
class Link:
    """
    A directed, weighted flow between two nodes.

    Before linking, ``source`` and ``target`` may be integer indices into
    the node collection; the linker replaces them with Node references.

    Attributes:
        source: Node the flow leaves (or its index before linking).
        target: Node the flow enters (or its index before linking).
        value: Positive amount carried by the flow.
        thickness: Vertical extent in pixels, proportional to value.
        source_offset: Distance from source.y to the top of this link.
        target_offset: Distance from target.y to the top of this link.
    """

    source: Union[Node, int]
    target: Union[Node, int]
    value: float
    thickness: Optional[float] = None
    source_offset: Optional[float] = None
    target_offset: Optional[float] = None

    @property
    def source_center(self) -> float:
        """Absolute y of the middle of this link where it leaves its source."""
        return self.source.y + self.source_offset + self.thickness / 2

    @property
    def target_center(self) -> float:
        """Absolute y of the middle of this link where it enters its target."""
        return self.target.y + self.target_offset + self.thickness / 2

    def __repr__(self) -> str:
        def label(end):
            if isinstance(end, Node):
                return end.name or end.index
            return end

        return f"Link({label(self.source)!r} -> {label(self.target)!r}, {self.value})"
