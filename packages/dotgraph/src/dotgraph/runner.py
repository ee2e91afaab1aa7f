import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotgraph.ast import from_dict
from dotgraph.graph import DotGraph
from dotgraph.walker import WalkOptions
from dotgraph.writer import write
from dotgraph.xdot import DEFAULT_SCALE, XDotGraph


def loads_ast(text: str, strict: bool = False) -> Any:
    return from_dict(json.loads(text), strict=strict)


def read_ast(path: str | Path, strict: bool = False) -> Any:
    return loads_ast(Path(path).read_text(encoding="utf-8"), strict=strict)


def load(
    tree: Any,
    xdot: bool = False,
    scale: float = DEFAULT_SCALE,
    options: WalkOptions | None = None,
) -> DotGraph:
    """Walk ``tree`` (typed or in the parser's dict form) into a model."""
    options = options or WalkOptions()
    if _is_dict_form(tree):
        tree = from_dict(tree, strict=options.strict)
    graph = XDotGraph(scale=scale, options=options) if xdot else DotGraph(options=options)
    return graph.walk(tree)


def convert(
    tree: Any,
    xdot: bool = False,
    scale: float = DEFAULT_SCALE,
    indent: str = "  ",
    options: WalkOptions | None = None,
    output_path: str | Path | None = None,
) -> str:
    """Resolve ``tree`` and write the regenerated graph as DOT text."""
    graph = load(tree, xdot=xdot, scale=scale, options=options)
    text = write(graph.to_ast(), indent=indent) + "\n"
    if output_path is not None:
        Path(output_path).write_text(text, encoding="utf-8")
    return text


def _is_dict_form(tree: Any) -> bool:
    if isinstance(tree, Mapping):
        return True
    return isinstance(tree, list) and any(isinstance(item, Mapping) for item in tree)
