"""Error types raised by the mapping layer and procedure callers."""

from __future__ import annotations


class ProcMapperError(Exception):
    """Base error for all proc_mapper errors."""


class MissingProcedureName(ProcMapperError, ValueError):
    """Raised when a call is made without a procedure name."""

    def __init__(self, message: str = "No function name provided") -> None:
        super().__init__(message)


class MissingConnection(ProcMapperError, RuntimeError):
    """Raised when neither the call nor the object carries a connection."""

    def __init__(self, message: str = "No DB connection provided") -> None:
        super().__init__(message)


class CallerNotConfigured(ProcMapperError, RuntimeError):
    """Raised when no procedure caller is attached to the object or its class."""

    def __init__(self, message: str = "No procedure caller configured") -> None:
        super().__init__(message)


class MetadataLookupFailed(ProcMapperError):
    """Procedure argument lookup failed (missing, overloaded, or driver error)."""

    def __init__(self, procedure: str, message: str) -> None:
        super().__init__(message)
        self.procedure = procedure


class ExecutionFailed(ProcMapperError):
    """Procedure execution failed in the database driver."""

    def __init__(self, procedure: str, message: str) -> None:
        super().__init__(message)
        self.procedure = procedure
