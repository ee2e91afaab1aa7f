"""Typed DOT syntax tree, plus conversion from the parser's dict form.

The grammar parser that produces these trees lives outside this package. It
hands over plain dicts tagged with a ``type`` field; :func:`from_dict` turns
them into the dataclasses below and :func:`to_dict` goes the other way.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from dotgraph.errors import MalformedASTError

GRAPH_TYPES = ("graph", "digraph")
ATTR_TARGETS = ("graph", "node", "edge")


@dataclass(slots=True, frozen=True)
class Markup:
    """Raw HTML-like label text, written as ``<...>`` without escaping."""

    value: str

    def __str__(self) -> str:
        return self.value


AttrValue = Union[str, int, float, Markup, None]


@dataclass(slots=True)
class Attr:
    id: str
    eq: AttrValue = None


@dataclass(slots=True)
class NodeId:
    id: str
    port: str | None = None
    compass: str | None = None


@dataclass(slots=True)
class NodeStmt:
    node_id: NodeId
    attr_list: list[Attr] = field(default_factory=list)


@dataclass(slots=True)
class AttrStmt:
    target: str  # "graph", "node" or "edge"
    attr_list: list[Attr] = field(default_factory=list)


@dataclass(slots=True)
class Subgraph:
    id: str | None = None
    children: list[Statement] = field(default_factory=list)


@dataclass(slots=True)
class EdgeStmt:
    edge_list: list[NodeId | Subgraph] = field(default_factory=list)
    attr_list: list[Attr] = field(default_factory=list)


@dataclass(slots=True)
class Graph:
    type: str = "digraph"
    id: str | None = None
    strict: bool = False
    children: list[Statement] = field(default_factory=list)


@dataclass(slots=True)
class UnknownStatement:
    """Placeholder for a tree node that could not be understood."""

    type: str | None
    data: Any = None
    reason: str = ""


Statement = Union[Graph, Subgraph, NodeStmt, EdgeStmt, AttrStmt, UnknownStatement]


def from_dict(data: Any, *, strict: bool = False) -> Any:
    """Convert the parser's dict/list tree into typed statements.

    Unknown tags and nodes missing required fields become
    :class:`UnknownStatement` so a walk can skip them. With ``strict=True``
    they raise :class:`MalformedASTError` instead.
    """
    if isinstance(data, list):
        return [from_dict(item, strict=strict) for item in data]
    try:
        return _statement_from_dict(data, strict)
    except MalformedASTError as e:
        if strict:
            raise
        kind = data.get("type") if isinstance(data, Mapping) else None
        return UnknownStatement(type=kind, data=data, reason=str(e))


def _statement_from_dict(data: Any, strict: bool) -> Any:
    if not isinstance(data, Mapping):
        raise MalformedASTError(f"expected a tagged mapping, got {type(data).__name__}", node=data)

    kind = data.get("type")
    if kind in GRAPH_TYPES:
        return Graph(
            type=kind,
            id=_optional_id(data.get("id")),
            strict=bool(data.get("strict", False)),
            children=_children(data, strict),
        )
    if kind == "subgraph":
        return Subgraph(id=_optional_id(data.get("id")), children=_children(data, strict))
    if kind == "node_stmt":
        return NodeStmt(
            node_id=_node_id_from_dict(_require(data, "node_id")),
            attr_list=_attr_list_from_dict(data.get("attr_list")),
        )
    if kind == "edge_stmt":
        edge_list = _require(data, "edge_list")
        if not isinstance(edge_list, list):
            raise MalformedASTError("edge_list must be a list", node=data)
        return EdgeStmt(
            edge_list=[_endpoint_from_dict(item, strict) for item in edge_list],
            attr_list=_attr_list_from_dict(data.get("attr_list")),
        )
    if kind == "attr_stmt":
        target = _require(data, "target")
        if target not in ATTR_TARGETS:
            raise MalformedASTError(f"unsupported attr_stmt target: {target!r}", node=data)
        return AttrStmt(target=target, attr_list=_attr_list_from_dict(data.get("attr_list")))
    if kind == "node_id":
        # A bare node reference used as a statement behaves like a node statement.
        return NodeStmt(node_id=_node_id_from_dict(data))

    raise MalformedASTError(f"unrecognized node type: {kind!r}", node=data)


def _require(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise MalformedASTError(f"{data.get('type')} is missing {key!r}", node=data)
    return value


def _children(data: Mapping[str, Any], strict: bool) -> list[Any]:
    children = data.get("children") or []
    if not isinstance(children, list):
        raise MalformedASTError("children must be a list", node=data)
    return [from_dict(child, strict=strict) for child in children]


def _endpoint_from_dict(data: Any, strict: bool) -> NodeId | Subgraph:
    if isinstance(data, Mapping) and data.get("type") == "subgraph":
        return Subgraph(id=_optional_id(data.get("id")), children=_children(data, strict))
    return _node_id_from_dict(data)


def _node_id_from_dict(data: Any) -> NodeId:
    if isinstance(data, (str, int, float)):
        return NodeId(id=str(data))
    if not isinstance(data, Mapping):
        raise MalformedASTError("node_id must be a mapping", node=data)
    node_id = _require(data, "id")
    port = data.get("port")
    compass = None
    if isinstance(port, Mapping):
        compass = port.get("compass")
        port = port.get("id")
    return NodeId(
        id=str(node_id),
        port=None if port is None else str(port),
        compass=None if compass is None else str(compass),
    )


def _attr_list_from_dict(data: Any) -> list[Attr]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise MalformedASTError("attr_list must be a list", node=data)
    attrs: list[Attr] = []
    for item in data:
        if not isinstance(item, Mapping) or "id" not in item:
            raise MalformedASTError("attr entry needs an 'id'", node=item)
        attrs.append(Attr(id=str(item["id"]), eq=_value_from_dict(item.get("eq"))))
    return attrs


def _value_from_dict(value: Any) -> AttrValue:
    if isinstance(value, Mapping):
        inner = value.get("value")
        if value.get("html"):
            return Markup("" if inner is None else str(inner))
        return inner
    return value


def _optional_id(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def to_dict(node: Any) -> Any:
    """Inverse of :func:`from_dict`."""
    if isinstance(node, list):
        return [to_dict(item) for item in node]
    if isinstance(node, Graph):
        result: dict[str, Any] = {"type": node.type, "children": to_dict(node.children)}
        if node.id is not None:
            result["id"] = node.id
        if node.strict:
            result["strict"] = True
        return result
    if isinstance(node, Subgraph):
        result = {"type": "subgraph", "children": to_dict(node.children)}
        if node.id is not None:
            result["id"] = node.id
        return result
    if isinstance(node, NodeStmt):
        return {
            "type": "node_stmt",
            "node_id": to_dict(node.node_id),
            "attr_list": to_dict(node.attr_list),
        }
    if isinstance(node, EdgeStmt):
        return {
            "type": "edge_stmt",
            "edge_list": to_dict(node.edge_list),
            "attr_list": to_dict(node.attr_list),
        }
    if isinstance(node, AttrStmt):
        return {"type": "attr_stmt", "target": node.target, "attr_list": to_dict(node.attr_list)}
    if isinstance(node, NodeId):
        result = {"type": "node_id", "id": node.id}
        if node.port is not None:
            port: dict[str, Any] = {"type": "port", "id": node.port}
            if node.compass is not None:
                port["compass"] = node.compass
            result["port"] = port
        return result
    if isinstance(node, Attr):
        return {"type": "attr", "id": node.id, "eq": _value_to_dict(node.eq)}
    if isinstance(node, UnknownStatement):
        return node.data
    raise MalformedASTError(f"cannot convert {type(node).__name__} to a dict", node=node)


def _value_to_dict(value: Any) -> Any:
    if isinstance(value, Markup):
        return {"type": "id", "value": value.value, "html": True}
    return value
