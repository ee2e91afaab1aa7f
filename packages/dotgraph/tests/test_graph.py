import json

from dotgraph.ast import Attr, Graph, Markup, NodeId, NodeStmt, Subgraph
from dotgraph.graph import DotGraph
from dotgraph.model import Edge, EdgeKey, Subgraph as ModelSubgraph


def test_subgraph_membership_helpers():
    root = ModelSubgraph(key="root", id="root")
    child = ModelSubgraph(key="child", id="child")
    grandchild = ModelSubgraph(key="grandchild", id="grandchild")
    root.add_child(child)
    child.add_child(grandchild)
    root.add_node("a")
    root.add_node("a")
    child.add_node("b")
    grandchild.add_node("a")
    grandchild.add_node("c")

    assert root.nodes == ["a"]
    assert root.all_nodes() == ["a", "b", "c"]
    assert grandchild.parent is child
    assert [sub.key for sub in root.walk()] == ["root", "child", "grandchild"]


def test_subgraph_membership_honours_initial_nodes():
    sub = ModelSubgraph(key="s", nodes=["a", "b"])

    for node_id in ["b", "c", "a", "c"]:
        sub.add_node(node_id)

    assert sub.nodes == ["a", "b", "c"]


def test_edge_key_is_directional():
    edge = Edge(tail="a", head="b")

    assert edge.key == EdgeKey("a", "b")
    assert edge.key != EdgeKey("b", "a")
    assert len({EdgeKey("a", "b"), EdgeKey("a", "b")}) == 1


def test_from_ast_and_only_first_top_level_graph_is_root():
    model = DotGraph.from_ast(
        [
            Graph(type="graph", id="first", children=[NodeStmt(node_id=NodeId("a"))]),
            Graph(type="digraph", id="second", strict=True),
        ]
    )

    assert model.id == "first"
    assert model.type == "graph"
    assert model.strict is False
    assert set(model.graphs) == {"first", "second"}


def test_to_dict_is_json_serializable():
    model = DotGraph().walk(
        Graph(
            id="G",
            children=[
                NodeStmt(node_id=NodeId("a"), attr_list=[Attr("label", Markup("<b>A</b>"))]),
                Subgraph(id="s", children=[NodeStmt(node_id=NodeId("b"))]),
            ],
        )
    )

    data = json.loads(json.dumps(model.to_dict()))

    assert data["nodes"]["a"] == {"label": {"type": "id", "value": "<b>A</b>", "html": True}}
    assert data["graphs"]["s"] == {
        "id": "s",
        "type": "subgraph",
        "parent": "G",
        "attrs": {},
        "nodes": ["b"],
        "children": [],
    }
    assert data["graphs"]["G"]["children"] == ["s"]


def test_to_dot_renders_regenerated_tree():
    model = DotGraph().walk(Graph(id="G", children=[NodeStmt(node_id=NodeId("my node"))]))

    assert model.to_dot() == 'digraph G {\n  "my node";\n}'
