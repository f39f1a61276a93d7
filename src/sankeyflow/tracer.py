"""
Debug tracing infrastructure for sankeyflow.

This module provides data structures for capturing a trace of the layout
pipeline. When tracing is enabled, the engine records a snapshot after every
phase and after every relaxation pass, including the position of every node
at that point.

This is primarily useful for:
1. Debugging layouts (seeing where a node was pushed and by which phase)
2. Watching relaxation converge (displacement between passes)
3. Writing targeted tests (checking intermediate states)

Usage:
    >>> engine = SankeyLayout(LayoutConfig(), debug=True)
    >>> engine.layout(nodes, links)
    >>> trace = engine.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("layout_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import Node

Position = Tuple[Optional[int], Optional[float], Optional[float], Optional[float]]


def node_key(node: Node) -> str:
    """Key used for a node in trace snapshots: its name, else its index."""
    return node.name or str(node.index)


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    The layout pipeline has these stages:
    1. linked - Links attached to nodes
    2. staged - Stages assigned and scaled to x
    3. sized - Values, heights and ordinal y assigned
    4. collisions_resolved - Initial overlap removed
    5. links_placed - Initial link offsets assigned
    6. relax_<n>_right_to_left / relax_<n>_left_to_right - Each relaxation pass
    7. laid_out - Final positions recorded

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
        positions: Optional mapping of node key to (stage, x, y, height)
    """

    name: str
    data: Dict[str, Any]
    positions: Optional[Dict[str, Position]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.positions:
            lines.append("  Node positions (stage, x, y, height):")
            for key, (stage, x, y, height) in list(self.positions.items())[:15]:
                lines.append(f"    {key}: {stage}, {_fmt(x)}, {_fmt(y)}, {_fmt(height)}")
        return "\n".join(lines)


def _fmt(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f}"


@dataclass
class LayoutTrace:
    """
    Complete trace of a layout run.

    Usage:
        >>> trace = LayoutTrace()
        >>> layout(nodes, links, config, trace=trace)
        >>> trace.get_stage("sized").data["ky"]
        >>> trace.displacement("relax_1_left_to_right", "relax_2_left_to_right")

    Attributes:
        stages: List of pipeline stages with their data
        node_count: Number of nodes in the traced diagram
        link_count: Number of links in the traced diagram
    """

    stages: List[PipelineStage] = field(default_factory=list)
    node_count: int = 0
    link_count: int = 0

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        nodes: Optional[Iterable[Node]] = None,
    ) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "sized")
            data: Dictionary of relevant data at this stage
            nodes: Optional nodes whose positions should be captured
        """
        positions = None
        if nodes is not None:
            positions = {
                node_key(node): (node.stage, node.x, node.y, node.height)
                for node in nodes
            }
        self.stages.append(PipelineStage(name, data.copy(), positions))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_positions_at_stage(self, name: str) -> Optional[Dict[str, Position]]:
        """Get the node positions captured at a specific stage."""
        stage = self.get_stage(name)
        if stage and stage.positions:
            return stage.positions
        return None

    def displacement(self, first: str, second: str) -> float:
        """
        Total vertical distance nodes moved between two captured stages.

        Nodes missing from either snapshot, or without a y in both, are
        skipped.

        Raises:
            KeyError: If either stage has no captured positions.
        """
        before = self.get_positions_at_stage(first)
        after = self.get_positions_at_stage(second)
        if before is None or after is None:
            missing = first if before is None else second
            raise KeyError(f"No positions captured for stage '{missing}'")

        total = 0.0
        for key, (_, _, y_after, _) in after.items():
            if key not in before:
                continue
            y_before = before[key][2]
            if y_before is None or y_after is None:
                continue
            total += abs(y_after - y_before)
        return total

    def relaxation_stages(self) -> List[PipelineStage]:
        """Stages recorded by relaxation passes, in order."""
        return [stage for stage in self.stages if stage.name.startswith("relax_")]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the diagram size and the pipeline stages
        recorded (``+`` marks stages with captured positions).
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Nodes: {self.node_count}",
            f"Links: {self.link_count}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            has_positions = "+" if stage.positions else "-"
            lines.append(f"  [{has_positions}] {stage.name}")

        relax = self.relaxation_stages()
        lines.extend(["", f"Relaxation passes: {len(relax)}"])
        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of every stage."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]
        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
