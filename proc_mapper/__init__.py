"""Stored procedure mapper for plain property-bag objects."""

from .core import (
    BYTEA,
    DEFAULT_OPTIONS,
    ArgInfo,
    CallerNotConfigured,
    ExecutionFailed,
    MappingOptions,
    MetadataLookupFailed,
    MissingConnection,
    MissingProcedureName,
    ProcedureCallerPort,
    ProcMapperError,
    RunningFunc,
    SimpleObject,
    StorageSerializable,
    TypedArg,
    resolve_db_args,
    strip_arg_prefix,
    to_db_value,
    wrap_typed_arg,
)
from .ports import DbApiProcedureCaller, Dialect, PostgresDialect

__version__ = "1.0.0"

__all__ = [
    "ArgInfo",
    "BYTEA",
    "CallerNotConfigured",
    "DEFAULT_OPTIONS",
    "DbApiProcedureCaller",
    "Dialect",
    "ExecutionFailed",
    "MappingOptions",
    "MetadataLookupFailed",
    "MissingConnection",
    "MissingProcedureName",
    "PostgresDialect",
    "ProcMapperError",
    "ProcedureCallerPort",
    "RunningFunc",
    "SimpleObject",
    "StorageSerializable",
    "TypedArg",
    "resolve_db_args",
    "strip_arg_prefix",
    "to_db_value",
    "wrap_typed_arg",
]
