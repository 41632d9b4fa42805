"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def builder():
    """Fresh GraphBuilder instance."""
    from yedgraph.graph import GraphBuilder

    return GraphBuilder()


@pytest.fixture
def simple_graph():
    """Two states (ids 5 and 9) joined by one magenta edge."""
    from tests.core.graph_test_helpers import build, make_edge, make_node

    return build(
        nodes=[make_node(5, "Idle"), make_node(9, "Running")],
        edges=[make_edge(5, 9, label="start", fill="#FF00FF")],
    )


@pytest.fixture
def grouped_graph():
    """Nested groups with edges on every level.

    Outer (10, group)
      Inner (20, group, gid 10)
        Leaf (30, gid 20)
      Sibling (40, gid 10)
    Free (7)

    Edges: Free->Outer, Inner->Free, Free->Leaf, Leaf->Sibling, Sibling->Inner
    """
    from tests.core.graph_test_helpers import build, make_edge, make_node

    return build(
        nodes=[
            make_node(30, "Leaf", gid=20),
            make_node(10, "Outer", is_group=True),
            make_node(40, "Sibling", gid=10),
            make_node(20, "Inner", gid=10, is_group=True),
            make_node(7, "Free"),
        ],
        edges=[
            make_edge(7, 10, label="enter"),
            make_edge(20, 7, label="leave"),
            make_edge(7, 30),
            make_edge(30, 40),
            make_edge(40, 20),
        ],
    )
