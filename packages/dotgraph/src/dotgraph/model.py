from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Node:
    id: str
    attrs: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Edge:
    tail: str
    head: str
    attrs: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> EdgeKey:
        return EdgeKey(tail=self.tail, head=self.head)


@dataclass(slots=True, frozen=True)
class EdgeKey:
    """Ordered (tail, head) pair grouping parallel edges."""

    tail: str
    head: str


@dataclass(slots=True, eq=False)
class Subgraph:
    """A graph scope: the root graph or one of its (possibly nested) subgraphs.

    Member nodes are referenced by id; the nodes themselves belong to the
    :class:`~dotgraph.graph.DotGraph`. Children are owned, ``parent`` is a
    plain back-reference.
    """

    key: str
    id: str | None = None
    type: str = "subgraph"
    attrs: dict[str, Any] = field(default_factory=dict)
    nodes: list[str] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    children: dict[str, Subgraph] = field(default_factory=dict)
    parent: Subgraph | None = field(default=None, repr=False)
    _members: set[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._members = set(self.nodes)

    @property
    def anonymous(self) -> bool:
        return self.id is None

    def add_node(self, node_id: str) -> None:
        if node_id not in self._members:
            self._members.add(node_id)
            self.nodes.append(node_id)

    def add_child(self, child: Subgraph) -> None:
        self.children[child.key] = child
        child.parent = self

    def all_nodes(self) -> list[str]:
        """Member ids of this subgraph and every descendant, first seen first."""
        seen: dict[str, None] = dict.fromkeys(self.nodes)
        for child in self.children.values():
            for node_id in child.all_nodes():
                seen.setdefault(node_id)
        return list(seen)

    def walk(self):
        """Yield this subgraph and then each descendant, depth first."""
        yield self
        for child in self.children.values():
            yield from child.walk()
