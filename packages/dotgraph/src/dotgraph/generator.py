"""Rebuild a DOT syntax tree from a resolved model.

The result describes the same nodes, edges and attributes as the tree the
model was walked from, but not the same statements: default-attribute
statements are gone and every entity carries its final attributes directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from dotgraph import ast
from dotgraph.model import Edge, Subgraph

if TYPE_CHECKING:
    from dotgraph.graph import DotGraph

Encoder = Callable[[str, Any], Any]


def to_ast(model: DotGraph, encode: Encoder | None = None) -> ast.Graph:
    generator = _Generator(model, encode or _identity)
    return generator.generate()


def _identity(name: str, value: Any) -> Any:
    return value


class _Generator:
    def __init__(self, model: DotGraph, encode: Encoder):
        self._model = model
        self._encode = encode
        self._seen_nodes: set[str] = set()
        self._seen_edges: set[int] = set()

    def generate(self) -> ast.Graph:
        model = self._model
        graph = ast.Graph(type=model.type, id=model.id, strict=model.strict)
        if model.root is not None:
            graph.children = self._body(model.root)

        # The root also lists everything no subgraph claimed, including
        # statements walked without an enclosing graph.
        for node_id in model.nodes:
            if node_id not in self._seen_nodes:
                graph.children.append(self._node_stmt(node_id))
        for edge in model.edge_list():
            if id(edge) not in self._seen_edges:
                graph.children.append(self._edge_stmt(edge))
        return graph

    def _body(self, subgraph: Subgraph) -> list[ast.Statement]:
        children: list[ast.Statement] = []
        for child in subgraph.children.values():
            children.append(ast.Subgraph(id=child.id, children=self._body(child)))
        for node_id in subgraph.nodes:
            children.append(self._node_stmt(node_id))
        for edge in subgraph.edges:
            children.append(self._edge_stmt(edge))
        if subgraph.attrs:
            children.append(ast.AttrStmt(target="graph", attr_list=self._attr_list(subgraph.attrs)))
        return children

    def _node_stmt(self, node_id: str) -> ast.NodeStmt:
        self._seen_nodes.add(node_id)
        node = self._model.nodes.get(node_id)
        attrs = {} if node is None else node.attrs
        return ast.NodeStmt(node_id=ast.NodeId(id=node_id), attr_list=self._attr_list(attrs))

    def _edge_stmt(self, edge: Edge) -> ast.EdgeStmt:
        self._seen_edges.add(id(edge))
        return ast.EdgeStmt(
            edge_list=[ast.NodeId(id=edge.tail), ast.NodeId(id=edge.head)],
            attr_list=self._attr_list(edge.attrs),
        )

    def _attr_list(self, attrs: dict[str, Any]) -> list[ast.Attr]:
        return [ast.Attr(id=key, eq=self._encode(key, value)) for key, value in attrs.items()]
