"""Tests for the Document entry points."""

import io

import pytest

from yedgraph import parse, parse_bytes, parse_file, parse_stream
from yedgraph.errors import GroupReferenceNotAGroup, XGMLError, XGMLSyntaxError
from yedgraph.graph import BuildOptions
from yedgraph.graph.factory import load_document

from tests.core.graph_test_helpers import make_document, make_edge, make_graph, make_node, to_xgml


@pytest.fixture
def loose_group_xgml():
    """A node grouped under a node that is not flagged isGroup."""
    return to_xgml(make_document(make_graph(nodes=[make_node(1, "p"), make_node(2, "c", gid=1)])))


class TestStateFixture:
    """The bundled door fixture, as yEd writes it."""

    def test_red_and_green_edges(self, state_xgml):
        doc = parse_file(state_xgml)

        red = [e for e in doc.graph.iter_edges() if e.r == 255]
        green = [e for e in doc.graph.iter_edges() if e.g == 255]
        assert len(red) == 2
        assert len(green) == 2
        assert not [e for e in doc.graph.iter_edges() if e.r == 255 and e.g == 255]

    def test_structure(self, state_xgml):
        doc = parse_file(state_xgml)
        graph = doc.graph

        assert doc.creator == "yFiles"
        assert doc.version == "2.8"
        assert graph.label == "Door"
        assert graph.node_count() == 4
        assert graph.edge_count() == 4

        unlocked = graph.find_by_original_id(4)
        assert unlocked.is_group
        assert sorted(c.label.split("\n")[0] for c in unlocked.iter_children()) == ["Closed", "Open"]

    def test_tags_and_group_edges(self, state_xgml):
        graph = parse_file(state_xgml).graph
        closed = graph.find_by_original_id(0)

        assert closed.tag("sound") == "thud"
        assert graph.edge(2).tag("guard") == "closed"
        assert [e.line(0) for e in closed.group_outputs()] == ["open", "lock"]
        assert [e.line(0) for e in closed.group_inputs()] == ["close", "unlock"]

    def test_path_as_string(self, state_xgml):
        assert parse_file(str(state_xgml)).graph.node_count() == 4


class TestEntryPoints:
    """Tests for parse, parse_bytes and parse_stream."""

    def test_parse_section_tree(self):
        graph = make_graph(
            nodes=[make_node(5, "A"), make_node(9, "B")],
            edges=[make_edge(5, 9, fill="#FF00FF")],
        )
        doc = parse(make_document(graph))
        assert doc.graph.edge(0).rgba() == (255, 0, 255, 255)

    def test_parse_bytes(self):
        data = to_xgml(make_document(make_graph(nodes=[make_node(1, "only")]))).encode("utf-8")
        assert parse_bytes(data).graph.node(0).label == "only"

    def test_parse_stream(self):
        data = to_xgml(make_document(make_graph())).encode("utf-8")
        assert parse_stream(io.BytesIO(data)).graph.node_count() == 0

    def test_parse_bytes_with_comment_before_declaration(self):
        body = to_xgml(make_document(make_graph(nodes=[make_node(1, "Été")])), declaration="")
        data = b'\n<!-- x --><?xml version="1.0" encoding="Cp1252"?>' + body.encode("cp1252")
        assert parse_bytes(data).graph.node(0).label == "Été"

    def test_syntax_error(self):
        with pytest.raises(XGMLSyntaxError):
            parse_bytes(b"<section")

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            parse_file(tmp_path / "nope.xgml")

    def test_build_failure_is_xgml_error(self, tmp_path):
        path = tmp_path / "bad.xgml"
        path.write_text(to_xgml(make_document(make_graph(edges=[make_edge(1, 2)]))), encoding="utf-8")
        with pytest.raises(XGMLError):
            parse_file(path)


class TestOptionResolution:
    """Explicit options win over config, config wins over defaults."""

    def test_default_is_strict(self, loose_group_xgml):
        with pytest.raises(GroupReferenceNotAGroup):
            parse_bytes(loose_group_xgml)

    def test_config_relaxes_groups(self, loose_group_xgml):
        config = {"build": {"strict_groups": False}}
        doc = parse_bytes(loose_group_xgml, config=config)
        assert doc.graph.node_count() == 2

    def test_options_override_config(self, loose_group_xgml):
        config = {"build": {"strict_groups": False}}
        with pytest.raises(GroupReferenceNotAGroup):
            parse_bytes(loose_group_xgml, options=BuildOptions(strict_groups=True), config=config)

    def test_config_without_build_table(self, loose_group_xgml):
        with pytest.raises(GroupReferenceNotAGroup):
            parse_bytes(loose_group_xgml, config={})


class TestLoadDocument:
    """Tests for load_document, which reads .yedgraph.toml."""

    def test_discovers_config(self, project_dir, loose_group_xgml):
        (project_dir / ".yedgraph.toml").write_text("[build]\nstrict_groups = false\n")
        path = project_dir / "g.xgml"
        path.write_text(loose_group_xgml, encoding="utf-8")

        assert load_document(path).graph.node_count() == 2

    def test_explicit_config_path(self, project_dir, loose_group_xgml):
        cfg = project_dir / "custom.toml"
        cfg.write_text("[build]\nstrict_groups = false\n")
        path = project_dir / "g.xgml"
        path.write_text(loose_group_xgml, encoding="utf-8")

        assert load_document(path, config_path=cfg).graph.node_count() == 2

    def test_defaults_without_config(self, project_dir, loose_group_xgml):
        path = project_dir / "g.xgml"
        path.write_text(loose_group_xgml, encoding="utf-8")
        with pytest.raises(GroupReferenceNotAGroup):
            load_document(path)
