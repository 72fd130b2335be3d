"""Public core API for argument mapping and procedure dispatch."""

from .arguments import resolve_db_args
from .codecs import to_db_value, wrap_typed_arg
from .config import BYTEA, DEFAULT_OPTIONS, MappingOptions
from .contracts import ProcedureCallerPort, StorageSerializable
from .descriptors import ArgInfo, RunningFunc, TypedArg, to_arg_info, to_running_funcs
from .errors import (
    CallerNotConfigured,
    ExecutionFailed,
    MetadataLookupFailed,
    MissingConnection,
    MissingProcedureName,
    ProcMapperError,
)
from .naming import strip_arg_prefix
from .simple_object import SimpleObject

__all__ = [
    "ArgInfo",
    "TypedArg",
    "RunningFunc",
    "BYTEA",
    "MappingOptions",
    "DEFAULT_OPTIONS",
    "ProcedureCallerPort",
    "StorageSerializable",
    "SimpleObject",
    "ProcMapperError",
    "MissingProcedureName",
    "MissingConnection",
    "CallerNotConfigured",
    "MetadataLookupFailed",
    "ExecutionFailed",
    "resolve_db_args",
    "strip_arg_prefix",
    "to_arg_info",
    "to_db_value",
    "to_running_funcs",
    "wrap_typed_arg",
]
