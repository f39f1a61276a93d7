"""Unit tests for the balance module."""

import pytest

from sankeyflow import check_balance, create_graph
from sankeyflow.linker import connect_links


def report_for(flows, **kwargs):
    graph = create_graph(flows)
    connect_links(graph.nodes, graph.links)
    return graph, check_balance(graph.nodes, **kwargs)


class TestCheckBalance:
    """Tests for check_balance."""

    def test_balanced_budget(self, budget_flows):
        """Every intermediate node passes and totals match."""
        _, report = report_for(budget_flows)
        assert report.imbalances == []
        assert report.total_inflow == 1600
        assert report.total_outflow == 1600
        assert report.totals_match
        assert report.is_balanced

    def test_intermediate_imbalance(self):
        """A node passing on less than it receives is reported."""
        graph, report = report_for([("A", "B", 10), ("B", "C", 7)])
        assert len(report.imbalances) == 1
        imbalance = report.imbalances[0]
        assert imbalance.node is graph.get_node("B")
        assert imbalance.total_in == 10
        assert imbalance.total_out == 7
        assert imbalance.difference == 3
        assert not report.is_balanced

    def test_surplus_is_negative_difference(self):
        """Sending more than received gives a negative difference."""
        _, report = report_for([("A", "B", 2), ("B", "C", 5)])
        assert report.imbalances[0].difference == -3

    def test_totals_mismatch(self):
        """Origins and endpoints feed the diagram totals."""
        _, report = report_for([("A", "B", 10), ("B", "C", 7)])
        assert report.total_inflow == 10
        assert report.total_outflow == 7
        assert not report.totals_match

    def test_epsilon(self):
        """Differences within epsilon are ignored."""
        _, report = report_for([("A", "B", 1.0), ("B", "C", 1.0004)], epsilon=0.001)
        assert report.imbalances == []
        assert report.totals_match

    def test_isolated_nodes_ignored(self):
        """Nodes without links contribute nothing."""
        graph = create_graph([("A", "B", 4)])
        graph.add_node("Z")
        connect_links(graph.nodes, graph.links)
        report = check_balance(graph.nodes)
        assert report.total_inflow == 4
        assert report.total_outflow == 4
        assert report.is_balanced

    def test_graph_helper_links_first(self):
        """SankeyGraph.check_balance works on an unlinked graph."""
        graph = create_graph([("A", "B", 10), ("B", "C", 7)])
        report = graph.check_balance()
        assert report.imbalances[0].node.name == "B"
        assert report.imbalances[0].difference == pytest.approx(3)
