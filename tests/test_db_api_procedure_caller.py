from __future__ import annotations

import unittest

from proc_mapper import (
    ArgInfo,
    DbApiProcedureCaller,
    Dialect,
    ExecutionFailed,
    MetadataLookupFailed,
    PostgresDialect,
    RunningFunc,
    SimpleObject,
    TypedArg,
)


class _FakeCursor:
    def __init__(self, conn, result):  # noqa: ANN001
        self._conn = conn
        self._result = result
        self.description = None
        self.closed = False

    def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        self._conn.executed.append((sql, params))
        if isinstance(self._result, Exception):
            raise self._result
        columns, rows = self._result
        self.description = [(c, None, None, None, None, None, None) for c in columns]
        self._rows = rows

    def fetchall(self):  # noqa: ANN201
        return list(self._rows)

    def close(self) -> None:
        self.closed = True
        self._conn.closed_cursors += 1


class _FakeConn:
    """Returns queued results, one per cursor."""

    def __init__(self, *results):  # noqa: ANN002
        self._results = list(results)
        self.executed: list[tuple[str, list]] = []
        self.closed_cursors = 0
        self.commit_calls = 0

    def cursor(self) -> _FakeCursor:
        return _FakeCursor(self, self._results.pop(0))

    def commit(self) -> None:
        self.commit_calls += 1


INFO_COLUMNS = ("proname", "proargnames", "proargmodes", "argtypes")


class _QmarkDialect(PostgresDialect):
    paramstyle = "qmark"


class _InvalidDialect(Dialect):
    paramstyle = "invalid"


class DialectTests(unittest.TestCase):
    def test_quote_and_placeholders(self) -> None:
        self.assertEqual(PostgresDialect().q("customer"), '"customer"')
        self.assertEqual(PostgresDialect().q('odd"name'), '"odd""name"')
        self.assertEqual(PostgresDialect().placeholder(0), "%s")
        self.assertEqual(PostgresDialect().placeholder(3), "%s")

    def test_non_format_paramstyles_raise(self) -> None:
        for dialect in (_QmarkDialect(), _InvalidDialect()):
            with self.assertRaises(ValueError):
                dialect.placeholder(0)


class FunctionInfoTests(unittest.TestCase):
    def setUp(self) -> None:
        self.caller = DbApiProcedureCaller()

    def test_returns_named_input_args(self) -> None:
        conn = _FakeConn(
            (INFO_COLUMNS, [("customer_save", ["in_id", "in_name"], None, ["integer", "text"])])
        )

        info = self.caller.function_info("customer_save", "app", conn)

        self.assertEqual(info, [ArgInfo("in_id", "integer"), ArgInfo("in_name", "text")])
        sql, params = conn.executed[0]
        self.assertIn("pg_catalog.pg_proc", sql)
        self.assertEqual(params, ["customer_save", "app"])
        self.assertEqual(conn.closed_cursors, 1)
        self.assertEqual(conn.commit_calls, 0)

    def test_output_args_are_skipped(self) -> None:
        conn = _FakeConn(
            (
                INFO_COLUMNS,
                [("f", ["in_id", "out_total", "in_flag"], ["i", "o", "b"], ["integer", "boolean"])],
            )
        )

        info = self.caller.function_info("f", None, conn)

        self.assertEqual(info, [ArgInfo("in_id", "integer"), ArgInfo("in_flag", "boolean")])
        self.assertEqual(conn.executed[0][1], ["f", "public"])

    def test_unnamed_args_get_empty_names(self) -> None:
        conn = _FakeConn((INFO_COLUMNS, [("f", None, None, ["integer", "bytea"])]))
        info = self.caller.function_info("f", "public", conn)
        self.assertEqual(info, [ArgInfo("", "integer"), ArgInfo("", "bytea")])

    def test_missing_function(self) -> None:
        conn = _FakeConn((INFO_COLUMNS, []))
        with self.assertRaises(MetadataLookupFailed) as ctx:
            self.caller.function_info("nope", "public", conn)
        self.assertEqual(ctx.exception.procedure, "nope")

    def test_overloaded_function(self) -> None:
        conn = _FakeConn(
            (INFO_COLUMNS, [("f", ["in_id"], None, ["integer"]), ("f", ["in_id"], None, ["text"])])
        )
        with self.assertRaises(MetadataLookupFailed):
            self.caller.function_info("f", "public", conn)

    def test_driver_error_is_chained(self) -> None:
        conn = _FakeConn(RuntimeError("connection lost"))
        with self.assertRaises(MetadataLookupFailed) as ctx:
            self.caller.function_info("f", "public", conn)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertEqual(conn.closed_cursors, 1)


class CallProcedureTests(unittest.TestCase):
    def setUp(self) -> None:
        self.caller = DbApiProcedureCaller()

    def test_call_sql(self) -> None:
        self.assertEqual(
            self.caller.call_sql("customer_get", "public", 1),
            'SELECT * FROM "public"."customer_get"(%s);',
        )
        self.assertEqual(self.caller.call_sql("now_rows", None, 0), 'SELECT * FROM "now_rows"();')

    def test_call_sql_with_running_funcs(self) -> None:
        sql = self.caller.call_sql(
            "ledger",
            "acc",
            2,
            [RunningFunc("sum(amount)", "total"), {"agg": "count(*)", "alias": "n"}],
        )
        self.assertEqual(
            sql,
            'SELECT *, sum(amount) OVER (ROWS UNBOUNDED PRECEDING) AS "total", '
            'count(*) OVER (ROWS UNBOUNDED PRECEDING) AS "n" '
            'FROM "acc"."ledger"(%s, %s);',
        )

    def test_rows_are_mapped_and_binary_args_bound_as_bytes(self) -> None:
        conn = _FakeConn((("id", "name"), [(1, "a"), (2, "b")]))

        rows = self.caller.call_procedure(
            "file_save",
            "public",
            [
                3,
                TypedArg("bytea", "xyz"),
                TypedArg("bytea", bytearray(b"\x00")),
                TypedArg("bytea", memoryview(b"mv")),
                TypedArg("bytea", 5),
                TypedArg("bytea", None),
            ],
            None,
            conn,
        )

        self.assertEqual(rows, [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
        _sql, params = conn.executed[0]
        self.assertEqual(params, [3, b"xyz", b"\x00", b"mv", b"5", None])
        self.assertEqual(conn.closed_cursors, 1)

    def test_mapping_rows_pass_through(self) -> None:
        conn = _FakeConn((("id",), [{"id": 1}]))
        self.assertEqual(self.caller.call_procedure("f", "public", [], None, conn), [{"id": 1}])

    def test_driver_error_becomes_execution_failed(self) -> None:
        conn = _FakeConn(RuntimeError("syntax error"))
        with self.assertRaises(ExecutionFailed) as ctx:
            self.caller.call_procedure("f", "public", [], None, conn)
        self.assertEqual(ctx.exception.procedure, "f")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)


class Customer(SimpleObject):
    caller = DbApiProcedureCaller()

    def get(self):  # noqa: ANN201
        return self.call_db_method("customer_get")


class EndToEndTests(unittest.TestCase):
    def test_customer_get_through_db_api(self) -> None:
        conn = _FakeConn(
            (INFO_COLUMNS, [("customer_get", ["in_id"], None, ["integer"])]),
            (("id", "name"), [(3, "ACME")]),
        )
        customer = Customer(id=3, conn=conn)

        rows = customer.get()

        self.assertEqual(rows, [{"id": 3, "name": "ACME"}])
        self.assertEqual(conn.executed[0][1], ["customer_get", "public"])
        self.assertEqual(conn.executed[1], ('SELECT * FROM "customer_get"(%s);', [3]))

    def test_lookup_failure_stops_before_execution(self) -> None:
        conn = _FakeConn((INFO_COLUMNS, []))
        with self.assertRaises(MetadataLookupFailed):
            Customer(id=3, conn=conn).get()
        self.assertEqual(len(conn.executed), 1)


if __name__ == "__main__":
    unittest.main()
