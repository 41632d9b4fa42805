"""Tests for command handlers called with a bare argparse.Namespace."""

import argparse
import json

import pytest

from yedgraph.commands import export, summary, tags
from yedgraph.commands.tags import collect_tags
from yedgraph.commands.summary import summarize
from yedgraph.graph.factory import parse_file


@pytest.fixture
def door(state_xgml):
    return parse_file(state_xgml)


class TestCollectTags:
    def test_nodes_before_edges(self, door):
        rows = collect_tags(door.graph)
        kinds = [row["kind"] for row in rows]
        assert kinds == sorted(kinds, key=lambda k: k != "node")
        assert {(row["key"], row["value"]) for row in rows} == {
            ("sound", "thud"),
            ("key", "brass"),
            ("guard", "closed"),
        }

    def test_key_filter(self, door):
        rows = collect_tags(door.graph, key="sound")
        assert rows == [
            {
                "kind": "node",
                "ref": str(door.graph.find_by_original_id(0).id),
                "key": "sound",
                "value": "thud",
            }
        ]

    def test_edge_ref_names_endpoints(self, door):
        (row,) = collect_tags(door.graph, key="guard")
        edge = door.graph.edge(2)
        assert row["ref"] == f"{edge.src} -> {edge.dst}"


class TestSummarize:
    def test_counts(self, door):
        assert summarize(door) == {
            "creator": "yFiles",
            "version": "2.8",
            "label": "Door",
            "directed": True,
            "hierarchic": True,
            "node_count": 4,
            "edge_count": 4,
            "group_count": 1,
        }


class TestRunWithNamespace:
    """Handlers tolerate a Namespace missing optional attributes."""

    def test_summary(self, state_xgml, project_dir, capsys):
        assert summary.run(argparse.Namespace(file=state_xgml)) == 0
        assert "Nodes:    4" in capsys.readouterr().out

    def test_tags_quiet_empty(self, state_xgml, project_dir, capsys):
        args = argparse.Namespace(file=state_xgml, key="nothing", quiet=True)
        assert tags.run(args) == 0
        assert capsys.readouterr().out == ""

    def test_export_format_argument(self, state_xgml, project_dir, capsys):
        args = argparse.Namespace(file=state_xgml, format="json", config=None, output=None)
        assert export.run(args) == 0
        assert json.loads(capsys.readouterr().out)["graph"]["label"] == "Door"
