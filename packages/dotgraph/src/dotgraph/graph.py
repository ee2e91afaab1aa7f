from __future__ import annotations

import logging
from typing import Any

from dotgraph import ast
from dotgraph.generator import to_ast
from dotgraph.model import Edge, EdgeKey, Node, Subgraph
from dotgraph.walker import ModelWalker, WalkOptions
from dotgraph.writer import write

log = logging.getLogger(__name__)


class DotGraph:
    """Resolved view of a DOT tree: nodes, edges and subgraphs by identity.

    A model is filled by exactly one :meth:`walk`. Walking a second tree into
    the same model is not supported.
    """

    def __init__(self, options: WalkOptions | None = None):
        self.options = options or WalkOptions()
        self.nodes: dict[str, Node] = {}
        self.edges: dict[EdgeKey, list[Edge]] = {}
        self.graphs: dict[str, Subgraph] = {}
        self.root: Subgraph | None = None
        self.id: str | None = None
        self.type: str = "digraph"
        self.strict: bool = False
        self.diagnostics: list[str] = []

    @classmethod
    def from_ast(cls, tree: Any, **kwargs: Any) -> DotGraph:
        return cls(**kwargs).walk(tree)

    @property
    def directed(self) -> bool:
        return self.type == "digraph"

    def walk(self, tree: Any) -> DotGraph:
        ModelWalker(self, self.options).walk(tree)
        return self

    def set_root(self, subgraph: Subgraph, strict: bool = False) -> None:
        if self.root is not None and self.root is not subgraph:
            log.debug("ignoring extra top-level graph %s", subgraph.key)
            return
        self.root = subgraph
        self.id = subgraph.id
        self.type = subgraph.type
        self.strict = self.strict or strict

    def add_edge(self, edge: Edge) -> None:
        self.edges.setdefault(edge.key, []).append(edge)

    def edge_list(self) -> list[Edge]:
        return [edge for edges in self.edges.values() for edge in edges]

    def get_edges(self, tail: str, head: str) -> list[Edge]:
        return self.edges.get(EdgeKey(tail=tail, head=head), [])

    def encode_value(self, name: str, value: Any) -> Any:
        """Turn a stored attribute value back into its DOT form."""
        return value

    def to_ast(self) -> ast.Graph:
        return to_ast(self, encode=self.encode_value)

    def to_dot(self, indent: str = "  ") -> str:
        return write(self.to_ast(), indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly snapshot of the model."""
        return {
            "id": self.id,
            "type": self.type,
            "strict": self.strict,
            "nodes": {
                node_id: _attrs_to_dict(node.attrs) for node_id, node in self.nodes.items()
            },
            "edges": [
                {"tail": edge.tail, "head": edge.head, "attrs": _attrs_to_dict(edge.attrs)}
                for edge in self.edge_list()
            ],
            "graphs": {key: _subgraph_to_dict(subgraph) for key, subgraph in self.graphs.items()},
            "diagnostics": list(self.diagnostics),
        }


def _subgraph_to_dict(subgraph: Subgraph) -> dict[str, Any]:
    return {
        "id": subgraph.id,
        "type": subgraph.type,
        "parent": None if subgraph.parent is None else subgraph.parent.key,
        "attrs": _attrs_to_dict(subgraph.attrs),
        "nodes": list(subgraph.nodes),
        "children": list(subgraph.children),
    }


def _attrs_to_dict(attrs: dict[str, Any]) -> dict[str, Any]:
    return {key: _json_value(value) for key, value in attrs.items()}


def _json_value(value: Any) -> Any:
    if isinstance(value, ast.Markup):
        return {"type": "id", "value": value.value, "html": True}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    return str(value)
