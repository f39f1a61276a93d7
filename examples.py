#!/usr/bin/env python3
"""
Examples of using the Sankey layout engine.

Run this file to lay out a few example diagrams and print where every
node ended up.
"""

from sankeyflow import LayoutConfig, SankeyLayout, create_graph


def print_layout(graph):
    """Print each node's stage, position and height."""
    for node in sorted(graph.nodes, key=lambda n: (n.stage, n.y)):
        print(
            f"  {node.name:<12} stage={node.stage} "
            f"x={node.x:7.2f} y={node.y:7.2f} h={node.height:7.2f}"
        )
    print()


def example_budget():
    """Household budget: income split into spending and savings."""
    print("Example 1: Household Budget")

    graph = create_graph(
        [
            ("Wages", "Budget", 1500),
            ("Interest", "Budget", 100),
            ("Budget", "Taxes", 400),
            ("Budget", "Rent", 600),
            ("Budget", "Savings", 600),
            ("Savings", "Stocks", 300),
            ("Savings", "Bonds", 300),
        ]
    )
    graph.layout()
    print_layout(graph)


def example_energy():
    """Energy sources feeding sectors, endpoints pushed to the right."""
    print("Example 2: Energy Flows")

    graph = create_graph(
        [
            ("Coal", "Electricity", 40),
            ("Gas", "Electricity", 30),
            ("Gas", "Heat", 25),
            ("Oil", "Transport", 60),
            ("Oil", "Heat", 10),
            ("Electricity", "Homes", 45),
            ("Electricity", "Industry", 40),
            ("Heat", "Homes", 35),
            ("Transport", "Losses", 60),
            ("Electricity", "Losses", 15),
        ]
    )
    graph.layout(LayoutConfig(width=800, height=500, justify_endpoints_right=True))
    print_layout(graph)

    report = graph.check_balance()
    if report.is_balanced:
        print("  Every node passes on what it receives.\n")
    for imbalance in report.imbalances:
        print(f"  {imbalance.node.name} is off by {imbalance.difference:g}")


def example_drag():
    """Move a node by hand, then put it back."""
    print("Example 3: Manual Repositioning")

    graph = create_graph([("Visits", "Signups", 30), ("Visits", "Bounces", 70)])
    engine = SankeyLayout(LayoutConfig(iterations=10))
    engine.layout(graph.nodes, graph.links)

    signups = graph.get_node("Signups")
    engine.move_node(signups, signups.x, 0)
    print(f"  Moved Signups by {signups.move}")
    engine.reset_node(signups)
    print(f"  Reset Signups to {signups.orig_pos}\n")


def main():
    """Run all examples."""
    print("=" * 50)
    print("Sankey Layout Examples")
    print("=" * 50)
    print()

    example_budget()
    example_energy()
    example_drag()

    print("=" * 50)
    print("All examples laid out!")
    print("=" * 50)


if __name__ == "__main__":
    main()
