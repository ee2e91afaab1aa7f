from dotgraph.ast import from_dict, to_dict
from dotgraph.errors import DotGraphError, MalformedASTError, UnrecognizedStatementError
from dotgraph.graph import DotGraph
from dotgraph.model import Edge, EdgeKey, Node, Subgraph
from dotgraph.runner import convert, load
from dotgraph.walker import ScopeState, WalkOptions, walk
from dotgraph.writer import quote, write
from dotgraph.xdot import DEFAULT_SCALE, EdgePos, XDotGraph

__all__ = [
    "DEFAULT_SCALE",
    "DotGraph",
    "DotGraphError",
    "Edge",
    "EdgeKey",
    "EdgePos",
    "MalformedASTError",
    "Node",
    "ScopeState",
    "Subgraph",
    "UnrecognizedStatementError",
    "WalkOptions",
    "XDotGraph",
    "convert",
    "from_dict",
    "load",
    "quote",
    "to_dict",
    "walk",
    "write",
]
