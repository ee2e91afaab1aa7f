"""Typed geometry for XDOT attributes.

Layout tools write positions and sizes into DOT as strings: ``pos="27,18"``,
``bb="0,0,62,108"``, ``width="0.75"``. :class:`XDotGraph` walks a tree like
:class:`~dotgraph.graph.DotGraph` does and then replaces those strings with
numbers, number lists and :class:`EdgePos` values.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from dotgraph.graph import DotGraph
from dotgraph.model import Subgraph
from dotgraph.walker import WalkOptions

log = logging.getLogger(__name__)

# Graphviz sizes are in inches; 72 points (pixels at 72 dpi) per inch.
DEFAULT_SCALE = 72.0

# An edge pos opens with an end (`e,`) or start (`s,`) arrow point.
EDGE_MARKERS = ("e", "s")

SCALED_ATTRS = frozenset({"width", "height"})
LIST_ATTRS = frozenset({"bb", "lp"})
POSITION_ATTR = "pos"

_SEPARATORS = re.compile(r"[\s,]+")

Point = tuple[float, float]


@dataclass(slots=True, frozen=True)
class EdgePos:
    """Parsed edge ``pos``: origin, six-number control groups, arrow tail."""

    marker: str
    origin: Point
    control_points: tuple[tuple[float, ...], ...] = ()
    arrow: tuple[float, ...] = ()

    @property
    def target(self) -> Point | None:
        if len(self.arrow) < 2:
            return None
        return (self.arrow[-2], self.arrow[-1])

    @classmethod
    def parse(cls, value: str) -> EdgePos:
        tokens = _split(value)
        marker = tokens[0] if tokens else EDGE_MARKERS[0]
        numbers = [_to_float(token) for token in tokens[1:]]

        if len(numbers) >= 2:
            origin = (numbers[0], numbers[1])
        else:
            origin = (math.nan, math.nan)

        # The last four numbers belong to the arrow; whole groups of six
        # are taken from what lies between the origin and the arrow.
        offset = 2
        end = len(numbers) - 4
        groups: list[tuple[float, ...]] = []
        while end - offset >= 6:
            groups.append(tuple(numbers[offset : offset + 6]))
            offset += 6

        arrow = tuple(numbers[max(offset, len(numbers) - 4) :])
        return cls(marker=marker, origin=origin, control_points=tuple(groups), arrow=arrow)

    def to_string(self) -> str:
        """Origin, control groups, then the arrow target.

        Only the last two arrow numbers are written, so the string is shorter
        than the one parsed and re-parsing it regroups the trailing numbers.
        """
        values: list[float] = [*self.origin]
        for group in self.control_points:
            values.extend(group)
        target = self.target
        if target is not None:
            values.extend(target)
        return ",".join([self.marker, *(format_number(value) for value in values)])

    def __str__(self) -> str:
        return self.to_string()


def format_number(value: float) -> str:
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def is_valid_point(point: Any) -> bool:
    """True when ``point`` holds at least two real (non-NaN) coordinates."""
    if point is None or len(point) < 2:
        return False
    return not any(math.isnan(coordinate) for coordinate in point[:2])


def parse_float(value: Any) -> float | None:
    if _is_empty(value):
        return None
    return _to_float(str(value).strip())


def parse_floats(value: Any) -> list[float] | None:
    if _is_empty(value):
        return None
    return [_to_float(token) for token in _split(str(value))]


def parse_pos(value: Any) -> EdgePos | list[float] | None:
    if _is_empty(value):
        return None
    text = str(value).strip()
    if any(text.startswith(marker + ",") for marker in EDGE_MARKERS):
        return EdgePos.parse(text)
    return parse_floats(text)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _split(value: str) -> list[str]:
    return [token for token in _SEPARATORS.split(value.strip()) if token]


def _to_float(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return math.nan


class XDotGraph(DotGraph):
    """A :class:`DotGraph` whose geometry attributes hold typed values.

    ``width`` and ``height`` are multiplied by ``scale``; ``bb`` and ``lp``
    become float lists; ``pos`` becomes an :class:`EdgePos` on edges and an
    ``[x, y]`` list elsewhere. Other attributes are left alone.
    """

    def __init__(self, scale: float = DEFAULT_SCALE, options: WalkOptions | None = None):
        super().__init__(options=options)
        self.scale = scale

    def walk(self, tree: Any) -> XDotGraph:
        super().walk(tree)
        self.apply_typed_attributes()
        return self

    def apply_typed_attributes(self) -> None:
        for node in self.nodes.values():
            self._rewrite(node.attrs)
        for edge in self.edge_list():
            self._rewrite(edge.attrs)
        for subgraph in self.graphs.values():
            if subgraph.parent is None:
                self._rewrite_graph(subgraph)

    def _rewrite_graph(self, subgraph: Subgraph) -> None:
        self._rewrite(subgraph.attrs)
        for child in subgraph.children.values():
            self._rewrite_graph(child)

    def _rewrite(self, attrs: dict[str, Any]) -> None:
        for name, value in attrs.items():
            attrs[name] = self.parse_value(name, value)

    def parse_value(self, name: str, value: Any) -> Any:
        if name in SCALED_ATTRS:
            number = parse_float(value)
            return None if number is None else number * self.scale
        if name in LIST_ATTRS:
            return parse_floats(value)
        if name == POSITION_ATTR:
            return parse_pos(value)
        return value

    def encode_value(self, name: str, value: Any) -> Any:
        if value is None:
            return None
        if name in SCALED_ATTRS and isinstance(value, (int, float)):
            return format_number(value / self.scale)
        if isinstance(value, EdgePos):
            return value.to_string()
        if name in LIST_ATTRS or name == POSITION_ATTR:
            if isinstance(value, list):
                return ",".join(format_number(number) for number in value)
        return value
