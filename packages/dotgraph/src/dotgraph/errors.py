"""Error hierarchy for graph model conversion."""

from __future__ import annotations

from typing import Any


class DotGraphError(Exception):
    """Base error for all dotgraph errors."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class MalformedASTError(DotGraphError):
    """An AST value is missing a required field or has the wrong shape."""

    def __init__(
        self,
        message: str,
        *,
        node: Any = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.node = node


class UnrecognizedStatementError(DotGraphError):
    """A statement variant the walker does not know how to handle."""

    def __init__(self, message: str, *, statement: Any = None):
        super().__init__(message)
        self.statement = statement


class CliError(DotGraphError):
    """Command-line failure with a process exit code."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.exit_code = exit_code
