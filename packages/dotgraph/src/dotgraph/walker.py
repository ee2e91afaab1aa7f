"""Walk a DOT syntax tree into a :class:`~dotgraph.graph.DotGraph`.

DOT resolves attributes by position: ``node [...]``, ``edge [...]`` and
``graph [...]`` statements change the defaults for everything that follows in
the same scope, and a subgraph starts out with a copy of its parent's
defaults. The walker threads a :class:`ScopeState` through the tree to model
that, forking it only when it enters a graph or subgraph.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from dotgraph import ast
from dotgraph.attrs import attrs_from_list, copy_nested, merge_fill, merge_override
from dotgraph.errors import UnrecognizedStatementError
from dotgraph.model import Edge, Node, Subgraph

if TYPE_CHECKING:
    from dotgraph.graph import DotGraph

log = logging.getLogger(__name__)


@dataclass
class WalkOptions:
    """Configuration for a walk."""

    strict: bool = False
    anonymous_prefix: str = "__anon"


@dataclass(slots=True)
class ScopeState:
    """Default attributes in effect at one point of the walk."""

    node: dict[str, Any] = field(default_factory=dict)
    edge: dict[str, Any] = field(default_factory=dict)
    graph: dict[str, Any] = field(default_factory=dict)

    def fork(self) -> ScopeState:
        copied = copy_nested({"node": self.node, "edge": self.edge, "graph": self.graph})
        return ScopeState(**copied)

    def defaults_for(self, target: str) -> dict[str, Any] | None:
        if target == "node":
            return self.node
        if target == "edge":
            return self.edge
        if target == "graph":
            return self.graph
        return None


class ModelWalker:
    def __init__(self, model: DotGraph, options: WalkOptions | None = None):
        self._model = model
        self._options = options or WalkOptions()
        self._anonymous_count = 0

    def walk(
        self,
        tree: Any,
        scope: ScopeState | None = None,
        parent: Subgraph | None = None,
    ) -> None:
        if scope is None:
            scope = ScopeState()
        if isinstance(tree, Sequence) and not isinstance(tree, str):
            for item in tree:
                self._statement(item, scope, parent)
            return
        self._statement(tree, scope, parent)

    def _statement(self, stmt: Any, scope: ScopeState, parent: Subgraph | None) -> None:
        if isinstance(stmt, (ast.Graph, ast.Subgraph)):
            self._graph(stmt, scope, parent)
        elif isinstance(stmt, ast.NodeStmt):
            self._node(stmt.node_id.id, stmt.attr_list, scope, parent)
        elif isinstance(stmt, ast.EdgeStmt):
            self._edge(stmt, scope, parent)
        elif isinstance(stmt, ast.AttrStmt):
            self._attr(stmt, scope)
        else:
            self._skip(stmt)

    def _graph(
        self,
        stmt: ast.Graph | ast.Subgraph,
        scope: ScopeState,
        parent: Subgraph | None,
    ) -> Subgraph:
        key = stmt.id if stmt.id is not None else self._next_anonymous_key()
        subgraph = self._model.graphs.get(key)

        if subgraph is None:
            subgraph = Subgraph(key=key, id=stmt.id)
            self._model.graphs[key] = subgraph
            if parent is not None:
                parent.add_child(subgraph)
        else:
            log.debug("re-entering subgraph %s", key)

        if isinstance(stmt, ast.Graph) and parent is None:
            subgraph.type = stmt.type
            self._model.set_root(subgraph, strict=stmt.strict)

        inner = scope.fork()
        self.walk(stmt.children, inner, subgraph)
        merge_override(subgraph.attrs, inner.graph)
        return subgraph

    def _node(
        self,
        node_id: str,
        attr_list: list[ast.Attr],
        scope: ScopeState,
        parent: Subgraph | None,
    ) -> Node:
        node = self._model.nodes.get(node_id)
        if node is None:
            node = Node(id=node_id)
            self._model.nodes[node_id] = node
        merge_override(node.attrs, attrs_from_list(attr_list))
        merge_fill(node.attrs, scope.node)
        if parent is not None:
            parent.add_node(node_id)
        return node

    def _attr(self, stmt: ast.AttrStmt, scope: ScopeState) -> None:
        defaults = scope.defaults_for(stmt.target)
        if defaults is None:
            self._skip(stmt)
            return
        merge_override(defaults, attrs_from_list(stmt.attr_list))

    def _edge(self, stmt: ast.EdgeStmt, scope: ScopeState, parent: Subgraph | None) -> None:
        # Every endpoint is resolved before any edge is created, so node
        # defaults reach endpoints that first appear here.
        groups: list[list[str]] = []
        ports: list[ast.NodeId | None] = []
        for endpoint in stmt.edge_list:
            if isinstance(endpoint, ast.Subgraph):
                groups.append(self._graph(endpoint, scope, parent).all_nodes())
                ports.append(None)
            elif isinstance(endpoint, ast.NodeId):
                if endpoint.id not in self._model.nodes:
                    self._node(endpoint.id, [], scope, parent)
                groups.append([endpoint.id])
                ports.append(endpoint)
            else:
                # An unusable endpoint still holds its place in the chain.
                self._skip(endpoint)
                groups.append([])
                ports.append(None)

        explicit = attrs_from_list(stmt.attr_list)
        for index in range(len(groups) - 1):
            port_attrs = _port_attrs(ports[index], ports[index + 1])
            for tail in groups[index]:
                for head in groups[index + 1]:
                    attrs = merge_fill(dict(explicit), port_attrs)
                    merge_fill(attrs, scope.edge)
                    edge = Edge(tail=tail, head=head, attrs=attrs)
                    self._model.add_edge(edge)
                    if parent is not None:
                        parent.edges.append(edge)

    def _skip(self, stmt: Any) -> None:
        kind = getattr(stmt, "type", None) or type(stmt).__name__
        message = f"skipping unrecognized statement: {kind}"
        reason = getattr(stmt, "reason", "")
        if reason:
            message = f"{message} ({reason})"
        if self._options.strict:
            raise UnrecognizedStatementError(message, statement=stmt)
        log.warning(message)
        self._model.diagnostics.append(message)

    def _next_anonymous_key(self) -> str:
        while True:
            self._anonymous_count += 1
            key = f"{self._options.anonymous_prefix}{self._anonymous_count}"
            if key not in self._model.graphs:
                return key


def _port_attrs(tail: ast.NodeId | None, head: ast.NodeId | None) -> dict[str, Any]:
    attrs: dict[str, Any] = {}
    if tail is not None and tail.port is not None:
        attrs["tailport"] = _port_text(tail)
    if head is not None and head.port is not None:
        attrs["headport"] = _port_text(head)
    return attrs


def _port_text(node_id: ast.NodeId) -> str:
    if node_id.compass is None:
        return str(node_id.port)
    return f"{node_id.port}:{node_id.compass}"


def walk(tree: Any, model: DotGraph, options: WalkOptions | None = None) -> DotGraph:
    ModelWalker(model, options or model.options).walk(tree)
    return model
