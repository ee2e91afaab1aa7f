import math

import pytest

from dotgraph.ast import Attr, AttrStmt, EdgeStmt, Graph, NodeId, NodeStmt, Subgraph
from dotgraph.graph import DotGraph
from dotgraph.xdot import (
    DEFAULT_SCALE,
    EdgePos,
    XDotGraph,
    is_valid_point,
    parse_float,
    parse_floats,
    parse_pos,
)


class TestEdgePos:
    def test_ten_numbers_have_no_full_control_group(self):
        pos = EdgePos.parse("e,1,2,3,4,5,6,7,8,9,10")

        assert pos.marker == "e"
        assert pos.origin == (1.0, 2.0)
        assert pos.control_points == ()
        assert pos.target == (9.0, 10.0)

    def test_control_groups_are_taken_in_sixes(self):
        pos = EdgePos.parse("e,0,0 1,1 2,2 3,3 4,4 5,5 6,6 7,7")

        assert pos.origin == (0.0, 0.0)
        assert pos.control_points == ((1.0, 1.0, 2.0, 2.0, 3.0, 3.0),)
        assert pos.arrow == (6.0, 6.0, 7.0, 7.0)
        assert pos.target == (7.0, 7.0)

    def test_to_string_emits_origin_groups_and_target(self):
        pos = EdgePos.parse("e,0,0 1,1 2,2 3,3 4,4 5,5 6,6 7,7")

        assert pos.to_string() == "e,0,0,1,1,2,2,3,3,7,7"
        assert str(pos) == pos.to_string()

    def test_reparsing_to_string_drops_the_last_control_group(self):
        pos = EdgePos.parse("e,0,0 1,1 2,2 3,3 4,4 5,5 6,6 7,7")

        reparsed = EdgePos.parse(pos.to_string())

        assert reparsed.origin == pos.origin
        assert reparsed.target == pos.target
        assert reparsed.control_points == ()
        assert reparsed.arrow == (3.0, 3.0, 7.0, 7.0)

    def test_to_string_keeps_fractions(self):
        pos = EdgePos(marker="e", origin=(1.5, 2.0), arrow=(0.0, 0.0, 3.25, 4.0))

        assert pos.to_string() == "e,1.5,2,3.25,4"

    def test_non_numeric_values_become_nan(self):
        pos = EdgePos.parse("e,x,2,3,4")

        assert math.isnan(pos.origin[0])
        assert not is_valid_point(pos.origin)
        assert is_valid_point(pos.target)

    def test_start_marker_is_kept(self):
        pos = parse_pos("s,1,2,3,4,5,6")

        assert isinstance(pos, EdgePos)
        assert pos.marker == "s"
        assert pos.origin == (1.0, 2.0)
        assert pos.target == (5.0, 6.0)
        assert pos.to_string() == "s,1,2,5,6"


class TestParsers:
    def test_parse_float(self):
        assert parse_float("2.0") == 2.0
        assert parse_float(3) == 3.0
        assert parse_float("") is None
        assert parse_float(None) is None
        assert math.isnan(parse_float("wide"))

    def test_parse_floats_accepts_commas_and_spaces(self):
        assert parse_floats("0,0, 62.5 108") == [0.0, 0.0, 62.5, 108.0]
        assert parse_floats("  ") is None

    def test_parse_pos_for_nodes_and_edges(self):
        assert parse_pos("27,18") == [27.0, 18.0]
        assert isinstance(parse_pos("e,1,2,3,4"), EdgePos)
        assert parse_pos("1,2,3,4") == [1.0, 2.0, 3.0, 4.0]
        assert parse_pos(None) is None


def _xdot_tree():
    return Graph(
        type="digraph",
        id="G",
        children=[
            AttrStmt(target="graph", attr_list=[Attr("bb", "0,0,62,108")]),
            NodeStmt(
                node_id=NodeId("a"),
                attr_list=[
                    Attr("width", "2.0"),
                    Attr("height", "0.5"),
                    Attr("pos", "27,90"),
                    Attr("label", "A"),
                ],
            ),
            NodeStmt(node_id=NodeId("b"), attr_list=[Attr("pos", ""), Attr("width", "oops")]),
            EdgeStmt(
                edge_list=[NodeId("a"), NodeId("b")],
                attr_list=[Attr("pos", "e,27,36 27,71.7 27,63.98 27,54.710 27,46.11"), Attr("lp", "30,50")],
            ),
            Subgraph(id="cluster", children=[AttrStmt(target="graph", attr_list=[Attr("bb", "1 2 3 4")])]),
        ],
    )


class TestXDotGraph:
    def test_typed_attributes_replace_strings(self):
        graph = XDotGraph().walk(_xdot_tree())

        a = graph.nodes["a"].attrs
        assert a["width"] == 2.0 * DEFAULT_SCALE
        assert isinstance(a["width"], float)
        assert a["height"] == 0.5 * DEFAULT_SCALE
        assert a["pos"] == [27.0, 90.0]
        assert a["label"] == "A"

        edge = graph.get_edges("a", "b")[0]
        assert isinstance(edge.attrs["pos"], EdgePos)
        assert edge.attrs["pos"].origin == (27.0, 36.0)
        assert edge.attrs["lp"] == [30.0, 50.0]

        assert graph.root.attrs["bb"] == [0.0, 0.0, 62.0, 108.0]
        assert graph.graphs["cluster"].attrs["bb"] == [1.0, 2.0, 3.0, 4.0]

    def test_empty_and_bad_values(self):
        graph = XDotGraph().walk(_xdot_tree())

        b = graph.nodes["b"].attrs
        assert b["pos"] is None
        assert math.isnan(b["width"])

    def test_custom_scale(self):
        graph = XDotGraph(scale=96.0).walk(_xdot_tree())

        assert graph.nodes["a"].attrs["width"] == 192.0

    def test_base_graph_keeps_strings(self):
        graph = DotGraph().walk(_xdot_tree())

        assert graph.nodes["a"].attrs["width"] == "2.0"

    def test_to_ast_restores_string_encodings(self):
        graph = XDotGraph().walk(_xdot_tree())

        regenerated = XDotGraph().walk(graph.to_ast())

        assert regenerated.nodes["a"].attrs == graph.nodes["a"].attrs
        assert regenerated.root.attrs == graph.root.attrs
        pos = regenerated.get_edges("a", "b")[0].attrs["pos"]
        assert pos.origin == (27.0, 36.0)
        assert pos.target == graph.get_edges("a", "b")[0].attrs["pos"].target

    @pytest.mark.parametrize("name", ["color", "label", "shape"])
    def test_other_attributes_pass_through(self, name):
        assert XDotGraph().parse_value(name, "1,2") == "1,2"
