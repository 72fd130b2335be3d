"""DB-API procedure caller for PostgreSQL stored functions."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from ...core.descriptors import ArgInfo, RunningFuncs, TypedArg, to_running_funcs
from ...core.errors import ExecutionFailed, MetadataLookupFailed
from ...core.types import RowMapping, Rows
from .dialects import Dialect, PostgresDialect

logger = logging.getLogger("proc_mapper")

# proargtypes only lists input arguments; proargmodes is NULL when all are IN.
_INPUT_ARG_MODES = frozenset({"i", "b", "v"})

# Catalog lookups without a schema search here; calls stay unqualified.
DEFAULT_SCHEMA = "public"


class DbApiProcedureCaller:
    """Look up and call stored functions over a DB-API 2.0 connection.

    The caller never commits, rolls back, or closes the connection it is
    given; transaction control stays with the application.
    """

    def __init__(self, dialect: Optional[Dialect] = None):
        self.dialect = dialect or PostgresDialect()

    def function_info_sql(self) -> str:
        """Return catalog query listing one function's signature."""

        return (
            "SELECT p.proname, p.proargnames, p.proargmodes::text[] AS proargmodes, "
            "ARRAY(SELECT format_type(t.oid, NULL) "
            "FROM unnest(p.proargtypes::oid[]) WITH ORDINALITY AS t(oid, pos) "
            "ORDER BY t.pos) AS argtypes "
            "FROM pg_catalog.pg_proc p "
            "JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace "
            f"WHERE p.proname = {self.dialect.placeholder(0)} "
            f"AND n.nspname = {self.dialect.placeholder(1)};"
        )

    def function_info(
        self, name: str, schema: Optional[str], conn: Any
    ) -> List[ArgInfo]:
        """Return input arguments of `schema.name` in declared order.

        Raises:
            MetadataLookupFailed: Function is missing, overloaded, or the
                catalog query failed.
        """

        schema = schema or DEFAULT_SCHEMA
        try:
            rows = self._fetchall(conn, self.function_info_sql(), [name, schema])
        except Exception as exc:
            raise MetadataLookupFailed(
                name, f"Catalog lookup for {schema}.{name} failed: {exc}"
            ) from exc

        if not rows:
            raise MetadataLookupFailed(name, f"No such function: {schema}.{name}")
        if len(rows) > 1:
            raise MetadataLookupFailed(
                name,
                f"Function {schema}.{name} is overloaded ({len(rows)} signatures); "
                "discoverable functions must have a unique name.",
            )
        return _input_args(rows[0])

    def call_sql(
        self,
        name: str,
        schema: Optional[str],
        arg_count: int,
        running_funcs: RunningFuncs = None,
    ) -> str:
        """Render `SELECT * FROM schema.name(...)` with optional window columns."""

        q = self.dialect.q
        columns = ["*"]
        for func in to_running_funcs(running_funcs):
            columns.append(f"{func.agg} OVER (ROWS UNBOUNDED PRECEDING) AS {q(func.alias)}")
        target = f"{q(schema)}.{q(name)}" if schema else q(name)
        placeholders = ", ".join(self.dialect.placeholder(i) for i in range(arg_count))
        return f"SELECT {', '.join(columns)} FROM {target}({placeholders});"

    def call_procedure(
        self,
        name: str,
        schema: Optional[str],
        args: Sequence[Any],
        running_funcs: RunningFuncs,
        conn: Any,
    ) -> Rows:
        """Execute the function and return its rows as mappings.

        Raises:
            ExecutionFailed: The driver rejected the call.
        """

        sql = self.call_sql(name, schema, len(args), running_funcs)
        logger.debug("Calling procedure: %s", sql)
        try:
            params = [_bind_value(arg) for arg in args]
            return self._fetchall(conn, sql, params)
        except Exception as exc:
            raise ExecutionFailed(name, f"Call to {name} failed: {exc}") from exc

    def _fetchall(self, conn: Any, sql: str, params: List[Any]) -> Rows:
        cur = conn.cursor()
        try:
            cur.execute(sql, params)
            rows = cur.fetchall()
            return [_row_to_mapping(cur, row) for row in rows]
        finally:
            close = getattr(cur, "close", None)
            if callable(close):
                close()


def _input_args(row: RowMapping) -> List[ArgInfo]:
    types = list(row.get("argtypes") or [])
    names = list(row.get("proargnames") or [])
    modes = row.get("proargmodes")
    if modes:
        names = [n for n, mode in zip(names, modes) if mode in _INPUT_ARG_MODES]
    names += [""] * (len(types) - len(names))
    return [ArgInfo(name=n or "", type=t) for n, t in zip(names, types)]


def _bind_value(value: Any) -> Any:
    if not isinstance(value, TypedArg):
        return value
    if value.value is None:
        return None
    raw = value.value
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    if not isinstance(raw, str):
        raw = str(raw)
    return raw.encode("utf-8")


def _row_to_mapping(cursor: Any, row: Any) -> RowMapping:
    """Normalize row object to mapping.

    Supports mapping rows directly and tuple/list rows via
    `cursor.description`.
    """

    if isinstance(row, Mapping):
        return row

    if isinstance(row, (tuple, list)):
        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError("Cursor has no description; cannot map tuple rows to dict.")
        cols = [d[0] for d in desc]
        return dict(zip(cols, row))

    raise TypeError(f"Unsupported row type: {type(row)}")
