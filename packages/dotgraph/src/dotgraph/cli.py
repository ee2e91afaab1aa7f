"""Command-line interface: re-emit or inspect a parsed DOT tree."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotgraph.errors import CliError, DotGraphError
from dotgraph.runner import load, loads_ast, read_ast
from dotgraph.walker import WalkOptions
from dotgraph.writer import write
from dotgraph.xdot import DEFAULT_SCALE

log = logging.getLogger(__name__)


class UsageError(Exception):
    pass


class FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # pragma: no cover - argparse callback
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = FriendlyArgumentParser(
        prog="dotgraph",
        description="Resolve a parsed DOT/XDOT tree (JSON) into a graph model.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("write", "Regenerate DOT text from the resolved model"),
        ("model", "Print the resolved model as JSON"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", nargs="?", help="JSON syntax tree (default: stdin)")
        sub.add_argument("-o", "--output", help="Output path (default: stdout)")
        sub.add_argument("--xdot", action="store_true", help="Parse XDOT geometry attributes")
        sub.add_argument("--scale", type=float, default=DEFAULT_SCALE)
        sub.add_argument("--strict", action="store_true", help="Fail on unrecognized statements")
        if name == "write":
            sub.add_argument("--indent", default="  ")

    return parser


def _read_tree(path: str | None, strict: bool) -> Any:
    try:
        if path:
            input_path = Path(path)
            if not input_path.exists():
                raise CliError(f"input file not found: {input_path}", exit_code=2)
            return read_ast(input_path, strict=strict)

        text = sys.stdin.read()
        if not text.strip():
            raise CliError("stdin was empty", exit_code=2)
        return loads_ast(text, strict=strict)
    except json.JSONDecodeError as exc:
        raise CliError(f"input is not valid JSON: {exc}", exit_code=2, cause=exc)
    except OSError as exc:
        raise CliError(f"failed to read input file: {path}", exit_code=2, cause=exc)


def _emit(text: str, output: str | None) -> None:
    if not output:
        sys.stdout.write(text)
        return
    try:
        Path(output).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise CliError(f"failed to write output file: {output}", exit_code=4, cause=exc)


def _run(args: argparse.Namespace) -> None:
    tree = _read_tree(args.input, args.strict)
    graph = load(tree, xdot=args.xdot, scale=args.scale, options=WalkOptions(strict=args.strict))
    log.debug("resolved %d nodes, %d edges", len(graph.nodes), len(graph.edge_list()))

    if args.command == "write":
        _emit(write(graph.to_ast(), indent=args.indent) + "\n", args.output)
    else:
        _emit(json.dumps(graph.to_dict(), indent=2) + "\n", args.output)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        print("error: a subcommand is required (write or model)", file=sys.stderr)
        return 2

    try:
        _run(args)
    except CliError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    except DotGraphError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
