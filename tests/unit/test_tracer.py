"""
Tests for the tracer module.

These tests verify the debug tracing infrastructure used to capture
intermediate states of the layout pipeline.
"""

import pytest

from sankeyflow import LayoutConfig, SankeyLayout, layout
from sankeyflow.models import Node
from sankeyflow.tracer import LayoutTrace, PipelineStage, node_key


class TestPipelineStage:
    """Tests for PipelineStage dataclass."""

    def test_creation_basic(self):
        """Test basic creation without positions."""
        stage = PipelineStage(name="linked", data={"links": 3})
        assert stage.name == "linked"
        assert stage.data == {"links": 3}
        assert stage.positions is None

    def test_str_lists_data(self):
        """String form shows the stage name and its data."""
        stage = PipelineStage(name="sized", data={"ky": 0.5})
        result = str(stage)
        assert "=== Stage: sized ===" in result
        assert "ky: 0.5" in result

    def test_str_truncates_long_values(self):
        """Very long values are cut short."""
        stage = PipelineStage(name="staged", data={"sizes": list(range(200))})
        assert "..." in str(stage)

    def test_str_with_positions(self):
        """Captured positions are listed."""
        stage = PipelineStage(
            name="laid_out", data={}, positions={"A": (0, 0.0, 12.5, 100.0)}
        )
        result = str(stage)
        assert "A: 0, 0.00, 12.50, 100.00" in result

    def test_str_with_unset_positions(self):
        """Unset geometry prints as a dash."""
        stage = PipelineStage(name="x", data={}, positions={"A": (None, None, None, None)})
        assert "A: None, -, -, -" in str(stage)


class TestNodeKey:
    """Tests for node_key."""

    def test_prefers_name(self):
        assert node_key(Node(name="Rent", index=3)) == "Rent"

    def test_falls_back_to_index(self):
        assert node_key(Node(index=3)) == "3"


class TestLayoutTrace:
    """Tests for LayoutTrace."""

    def test_add_and_get_stage(self):
        """Stages can be looked up by name."""
        trace = LayoutTrace()
        trace.add_stage("linked", {"links": 1})
        assert trace.get_stage("linked").data == {"links": 1}
        assert trace.get_stage("missing") is None

    def test_add_stage_copies_data(self):
        """Later changes to the caller's dict do not leak into the trace."""
        trace = LayoutTrace()
        data = {"n": 1}
        trace.add_stage("s", data)
        data["n"] = 2
        assert trace.get_stage("s").data == {"n": 1}

    def test_positions_captured(self):
        """Node positions are snapshotted, not referenced."""
        node = Node(name="A", stage=0, x=0, y=5, height=10)
        trace = LayoutTrace()
        trace.add_stage("s", {}, [node])
        node.y = 50
        assert trace.get_positions_at_stage("s") == {"A": (0, 0, 5, 10)}

    def test_positions_missing(self):
        """Stages without positions report None."""
        trace = LayoutTrace()
        trace.add_stage("s", {})
        assert trace.get_positions_at_stage("s") is None

    def test_displacement(self):
        """Displacement sums absolute vertical moves."""
        a = Node(name="A", y=0, height=1)
        b = Node(name="B", y=10, height=1)
        trace = LayoutTrace()
        trace.add_stage("before", {}, [a, b])
        a.y, b.y = 4, 7
        trace.add_stage("after", {}, [a, b])
        assert trace.displacement("before", "after") == pytest.approx(7)

    def test_displacement_requires_positions(self):
        """Asking about a stage without positions is an error."""
        trace = LayoutTrace()
        trace.add_stage("bare", {})
        with pytest.raises(KeyError, match="bare"):
            trace.displacement("bare", "bare")

    def test_full_pipeline_stages(self, budget_graph):
        """A layout run records every phase in order."""
        trace = LayoutTrace()
        layout(budget_graph.nodes, budget_graph.links, LayoutConfig(iterations=2), trace=trace)
        names = [stage.name for stage in trace.stages]
        assert names == [
            "linked",
            "staged",
            "sized",
            "collisions_resolved",
            "links_placed",
            "relax_1_right_to_left",
            "relax_1_left_to_right",
            "relax_2_right_to_left",
            "relax_2_left_to_right",
            "laid_out",
        ]
        assert trace.node_count == 8
        assert trace.link_count == 7
        assert len(trace.relaxation_stages()) == 4

    def test_summary(self, budget_graph):
        """Summary lists sizes and stages."""
        engine = SankeyLayout(LayoutConfig(iterations=1), debug=True)
        engine.layout(budget_graph.nodes, budget_graph.links)
        summary = engine.get_trace().summary()
        assert "LAYOUT TRACE SUMMARY" in summary
        assert "Nodes: 8" in summary
        assert "[+] sized" in summary
        assert "[-] linked" in summary
        assert "Relaxation passes: 2" in summary

    def test_dump_to_file(self, budget_graph, tmp_path):
        """A full dump can be written to disk."""
        trace = LayoutTrace()
        layout(budget_graph.nodes, budget_graph.links, LayoutConfig(iterations=1), trace=trace)
        path = tmp_path / "trace.txt"
        trace.dump_to_file(str(path))
        content = path.read_text(encoding="utf-8")
        assert "DETAILED TRACE" in content
        assert "=== Stage: laid_out ===" in content
        assert "Budget:" in content
