"""Tests for the error hierarchy."""

from dotgraph.errors import (
    CliError,
    DotGraphError,
    MalformedASTError,
    UnrecognizedStatementError,
)


class TestDotGraphError:
    def test_basic(self):
        err = DotGraphError("something broke")
        assert str(err) == "something broke"
        assert err.cause is None

    def test_with_cause(self):
        cause = ValueError("bad value")
        err = DotGraphError("wrapper", cause=cause)
        assert err.cause is cause


class TestSubclasses:
    def test_malformed_ast_keeps_node(self):
        node = {"type": "node_stmt"}
        err = MalformedASTError("missing node_id", node=node)
        assert err.node is node
        assert isinstance(err, DotGraphError)

    def test_unrecognized_statement_keeps_statement(self):
        err = UnrecognizedStatementError("skip", statement="stmt")
        assert err.statement == "stmt"
        assert isinstance(err, DotGraphError)

    def test_cli_error_exit_code(self):
        assert CliError("boom").exit_code == 1
        assert CliError("boom", exit_code=4).exit_code == 4
