"""Public port exports for concrete procedure caller implementations."""

from .db_api import DbApiProcedureCaller, Dialect, PostgresDialect

__all__ = [
    "DbApiProcedureCaller",
    "Dialect",
    "PostgresDialect",
]
