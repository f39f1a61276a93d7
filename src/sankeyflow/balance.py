"""
Flow balance checking.

Reports nodes whose inflow and outflow disagree, and whether what enters the
diagram through its origins matches what leaves through its endpoints.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from .models import Node


@dataclass
class FlowImbalance:
    """A node whose total inflow differs from its total outflow."""

    node: Node
    total_in: float
    total_out: float
    difference: float


@dataclass
class BalanceReport:
    """
    Balance of a whole diagram.

    Attributes:
        imbalances: Intermediate nodes whose in/out totals differ.
        total_inflow: Value entering the diagram (outflow of origins).
        total_outflow: Value leaving the diagram (inflow of endpoints).
        epsilon: Tolerance used for every comparison.
    """

    imbalances: List[FlowImbalance] = field(default_factory=list)
    total_inflow: float = 0.0
    total_outflow: float = 0.0
    epsilon: float = 1e-9

    @property
    def is_balanced(self) -> bool:
        """True when inflow matches outflow and no node is imbalanced."""
        return not self.imbalances and self.totals_match

    @property
    def totals_match(self) -> bool:
        return abs(self.total_inflow - self.total_outflow) <= self.epsilon


def check_balance(nodes: Sequence[Node], epsilon: float = 1e-9) -> BalanceReport:
    """
    Cross-check inflow against outflow for linked nodes.

    Only nodes with both inflow and outflow are checked individually;
    origins and endpoints contribute to the diagram-wide totals instead.
    """
    report = BalanceReport(epsilon=epsilon)
    for node in nodes:
        total_in = sum(link.value for link in node.incoming)
        total_out = sum(link.value for link in node.outgoing)
        if total_in > 0 and total_out > 0:
            difference = total_in - total_out
            if abs(difference) > epsilon:
                report.imbalances.append(
                    FlowImbalance(node, total_in, total_out, difference)
                )
        else:
            report.total_inflow += total_out
            report.total_outflow += total_in
    return report
