"""Map a property-bag object onto PostgreSQL stored functions."""

from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path
from typing import Any

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "proc_mapper").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from proc_mapper import DbApiProcedureCaller, RunningFunc, SimpleObject

SCHEMA = "proc_mapper_demo"

SETUP_SQL = """
CREATE SCHEMA proc_mapper_demo;
CREATE TABLE proc_mapper_demo.customer (id serial PRIMARY KEY, name text NOT NULL, balance numeric NOT NULL);
CREATE FUNCTION proc_mapper_demo.customer_save(in_id int, in_name text, in_balance numeric)
RETURNS SETOF proc_mapper_demo.customer LANGUAGE sql AS $$
    INSERT INTO proc_mapper_demo.customer (name, balance) VALUES (in_name, in_balance) RETURNING *;
$$;
CREATE FUNCTION proc_mapper_demo.customer_get(in_id int)
RETURNS SETOF proc_mapper_demo.customer LANGUAGE sql AS $$
    SELECT * FROM proc_mapper_demo.customer WHERE id = in_id;
$$;
CREATE FUNCTION proc_mapper_demo.customer_list()
RETURNS SETOF proc_mapper_demo.customer LANGUAGE sql AS $$
    SELECT * FROM proc_mapper_demo.customer ORDER BY id;
$$;
"""


def _load_connect() -> Any:
    for module_name in ("psycopg", "psycopg2"):
        try:
            module = importlib.import_module(module_name)
        except (ModuleNotFoundError, ImportError):
            continue
        connect = getattr(module, "connect", None)
        if connect is not None:
            return connect
    return None


class Customer(SimpleObject):
    caller = DbApiProcedureCaller()

    def save(self) -> dict[str, Any]:
        # `id` is forced to NULL so the function always inserts.
        rows = self.call_db_method("customer_save", schema=SCHEMA, args={"id": None})
        self.update(rows[0])
        return rows[0]

    def load(self) -> list[Any]:
        return self.call_db_method("customer_get", schema=SCHEMA)

    def ledger(self) -> list[Any]:
        return self.call_procedure(
            "customer_list",
            schema=SCHEMA,
            running_funcs=[RunningFunc("sum(balance)", "running_balance")],
        )


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    connect = _load_connect()
    if connect is None:
        print("Example skipped: psycopg/psycopg2 not installed.")
        print("Install dependency: pip install psycopg")
        return

    params = {
        "host": os.getenv("PROC_MAPPER_PG_HOST", os.getenv("PGHOST", "localhost")),
        "port": int(os.getenv("PROC_MAPPER_PG_PORT", os.getenv("PGPORT", "5432"))),
        "user": os.getenv("PROC_MAPPER_PG_USER", os.getenv("PGUSER", "postgres")),
        "password": os.getenv("PROC_MAPPER_PG_PASSWORD", os.getenv("PGPASSWORD", "password")),
        "dbname": os.getenv("PROC_MAPPER_PG_DATABASE", os.getenv("PGDATABASE", "postgres")),
    }
    try:
        conn = connect(**params)
    except Exception as exc:  # noqa: BLE001 - pragmatic cross-driver OperationalError handling
        print("Example skipped:", exc)
        return

    try:
        with conn.cursor() as cur:
            cur.execute(SETUP_SQL)

        alice = Customer(name="Alice", balance=10, conn=conn)
        print("Saved:", alice.save())
        print("Loaded:", alice.load())

        Customer(name="Bob", balance=32, conn=conn).save()
        for row in alice.ledger():
            print("Ledger:", row)
    finally:
        # Schema, table and functions are dropped with the transaction.
        conn.rollback()
        conn.close()


if __name__ == "__main__":
    main()
