"""Pytest configuration and shared fixtures for sankeyflow tests."""

import pytest

from sankeyflow import LayoutConfig, Link, Node, create_graph


@pytest.fixture
def config():
    """Default layout configuration (600x400, node width 9)."""
    return LayoutConfig()


@pytest.fixture
def still_config():
    """Default configuration with relaxation disabled."""
    return LayoutConfig(iterations=0)


@pytest.fixture
def two_nodes():
    """Scenario A: one link A -> B carrying 10."""
    nodes = [Node(name="A"), Node(name="B")]
    links = [Link(source=0, target=1, value=10)]
    return nodes, links


@pytest.fixture
def fan_out():
    """Scenario B: A splits evenly into B and C."""
    nodes = [Node(name="A"), Node(name="B"), Node(name="C")]
    links = [Link(source=0, target=1, value=5), Link(source=0, target=2, value=5)]
    return nodes, links


@pytest.fixture
def budget_flows():
    """Balanced four-stage household budget."""
    return [
        ("Wages", "Budget", 1500),
        ("Interest", "Budget", 100),
        ("Budget", "Taxes", 400),
        ("Budget", "Rent", 600),
        ("Budget", "Savings", 600),
        ("Savings", "Stocks", 300),
        ("Savings", "Bonds", 300),
    ]


@pytest.fixture
def budget_graph(budget_flows):
    """Pre-built budget graph."""
    return create_graph(budget_flows)


@pytest.fixture
def cyclic_graph():
    """Graph fed by an origin into a two-node cycle."""
    return create_graph([("S", "A", 5), ("A", "B", 5), ("B", "A", 2)])


@pytest.fixture
def wide_flows():
    """Crossing-prone diagram with several nodes per stage."""
    return [
        ("Coal", "Electricity", 40),
        ("Gas", "Electricity", 30),
        ("Gas", "Heat", 25),
        ("Oil", "Transport", 60),
        ("Oil", "Heat", 10),
        ("Solar", "Electricity", 15),
        ("Electricity", "Homes", 45),
        ("Electricity", "Industry", 40),
        ("Heat", "Homes", 20),
        ("Heat", "Industry", 15),
        ("Transport", "Losses", 35),
        ("Transport", "Industry", 25),
    ]
