"""DB-API procedure caller and dialect exports."""

from .dialects import Dialect, PostgresDialect
from .procedure_caller import DbApiProcedureCaller

__all__ = [
    "DbApiProcedureCaller",
    "Dialect",
    "PostgresDialect",
]
