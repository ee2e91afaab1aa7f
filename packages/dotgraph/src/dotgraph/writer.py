"""Serialize DOT syntax trees back to source text."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from dotgraph import ast

RESERVED_WORDS = frozenset({"graph", "digraph", "subgraph", "node", "edge", "strict"})

_BARE_ID = re.compile(r"[A-Za-z0-9]+")


def quote(value: Any) -> str:
    """Render an identifier or attribute value as a DOT token."""
    if value is None:
        return '""'
    if isinstance(value, ast.Markup):
        return f"<{value.value}>"
    text = str(value)
    if _BARE_ID.fullmatch(text) and text not in RESERVED_WORDS:
        return text
    text = text.replace('"', '\\"')
    # An odd run of trailing backslashes would escape the closing quote.
    if (len(text) - len(text.rstrip("\\"))) % 2:
        text += "\\"
    return '"' + text + '"'


class DotWriter:
    def __init__(self, indent: str = "  "):
        self.indent = indent

    def write(self, tree: Any, level: int = 0, directed: bool = True) -> str:
        return "\n".join(self._lines(tree, level, directed))

    def _lines(self, tree: Any, level: int, directed: bool) -> list[str]:
        if isinstance(tree, Sequence) and not isinstance(tree, str):
            lines: list[str] = []
            for item in tree:
                lines.extend(self._lines(item, level, directed))
            return lines

        prefix = self.indent * level
        if isinstance(tree, ast.Graph):
            head = f"{tree.type} {quote(tree.id)}" if tree.id is not None else tree.type
            if tree.strict:
                head = f"strict {head}"
            return self._block(prefix + head, tree.children, level, tree.type == "digraph")
        if isinstance(tree, ast.Subgraph):
            return self._block(prefix + _subgraph_head(tree), tree.children, level, directed)
        if isinstance(tree, ast.NodeStmt):
            return [prefix + _node_id(tree.node_id) + _attr_list(tree.attr_list) + ";"]
        if isinstance(tree, ast.EdgeStmt):
            return [prefix + self._edge(tree, directed) + _attr_list(tree.attr_list) + ";"]
        if isinstance(tree, ast.AttrStmt):
            return [prefix + tree.target + _attr_list(tree.attr_list) + ";"]
        if isinstance(tree, ast.NodeId):
            return [prefix + _node_id(tree)]
        # Anything else has no DOT form.
        return []

    def _block(self, head: str, children: list[Any], level: int, directed: bool) -> list[str]:
        lines = [head + " {"]
        lines.extend(self._lines(children, level + 1, directed))
        lines.append(self.indent * level + "}")
        return lines

    def _edge(self, stmt: ast.EdgeStmt, directed: bool) -> str:
        op = " -> " if directed else " -- "
        parts: list[str] = []
        for endpoint in stmt.edge_list:
            if isinstance(endpoint, ast.Subgraph):
                parts.append(self._inline_subgraph(endpoint, directed))
            else:
                parts.append(_node_id(endpoint))
        return op.join(parts)

    def _inline_subgraph(self, subgraph: ast.Subgraph, directed: bool) -> str:
        inline = DotWriter(indent="")
        body = " ".join(inline._lines(subgraph.children, 0, directed))
        return f"{_subgraph_head(subgraph)} {{ {body} }}" if body else f"{_subgraph_head(subgraph)} {{}}"


def _subgraph_head(subgraph: ast.Subgraph) -> str:
    if subgraph.id is None:
        return "subgraph"
    return f"subgraph {quote(subgraph.id)}"


def _node_id(node_id: ast.NodeId) -> str:
    text = quote(node_id.id)
    if node_id.port is not None:
        text += ":" + quote(node_id.port)
    if node_id.compass is not None:
        text += ":" + quote(node_id.compass)
    return text


def _attr_list(attrs: list[ast.Attr]) -> str:
    if not attrs:
        return ""
    return " [" + ", ".join(f"{quote(attr.id)}={quote(attr.eq)}" for attr in attrs) + "]"


def write(tree: Any, indent: str = "  ", level: int = 0) -> str:
    """Render any syntax tree value (or list of them) as DOT text."""
    return DotWriter(indent=indent).write(tree, level=level)
