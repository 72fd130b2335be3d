"""Property-bag object that maps its properties onto stored procedure calls."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, ClassVar, Dict, Iterator, Mapping, Optional, Sequence

from .arguments import resolve_db_args
from .config import DEFAULT_OPTIONS, MappingOptions
from .contracts import ProcedureCallerPort
from .descriptors import RunningFuncs
from .errors import (
    CallerNotConfigured,
    MetadataLookupFailed,
    MissingConnection,
    MissingProcedureName,
)
from .types import Overrides, Rows

logger = logging.getLogger("proc_mapper")

CONN_KEY = "conn"


class SimpleObject(MutableMapping):
    """Minimal stored procedure mapper over a plain property bag.

    Properties are read and written with mapping syntax (`obj["id"]`). The
    DB connection is held apart from the properties and reused by every call
    unless a call passes `conn=` explicitly.

    Usage:
    - Subclass and set `caller` to a `ProcedureCallerPort` implementation.
    - Write thin methods around `call_db_method()` / `call_procedure()`.

    Example:
        class Customer(SimpleObject):
            caller = DbApiProcedureCaller()

            def get(self):
                return self.call_db_method("customer_get")
    """

    caller: ClassVar[Optional[ProcedureCallerPort]] = None
    options: ClassVar[MappingOptions] = DEFAULT_OPTIONS

    def __init__(self, mapping: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        """Create object from a shallow copy of `mapping` and `kwargs`.

        A `conn` entry is also installed as the active connection.
        """

        self._props: Dict[str, Any] = {}
        self._conn: Any = None
        self._caller: Optional[ProcedureCallerPort] = None
        if mapping is not None:
            self._props.update(mapping)
        self._props.update(kwargs)
        if self._props.get(CONN_KEY) is not None:
            self.set_connection(self._props[CONN_KEY])

    # ── Connection / caller ────────────────────────────────────────

    @property
    def connection(self) -> Any:
        return self._conn

    def set_connection(self, conn: Any) -> None:
        """Replace the connection used by subsequent calls."""

        self._conn = conn

    def set_caller(self, caller: Optional[ProcedureCallerPort]) -> None:
        """Override the class-level procedure caller for this object only."""

        self._caller = caller

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self._props)

    # ── Procedure calls ────────────────────────────────────────────

    def call_db_method(
        self,
        name: Optional[str],
        *,
        schema: Optional[str] = None,
        args: Overrides = None,
        running_funcs: RunningFuncs = None,
        conn: Any = None,
    ) -> Rows:
        """Call a procedure, mapping its declared arguments to properties.

        Args:
            name: Procedure name.
            schema: Procedure schema; `None` is forwarded to the caller as is.
            args: Per-call values that take precedence over properties.
            running_funcs: Window aggregates forwarded to the caller untouched.
            conn: Connection used instead of the stored one.

        Returns:
            Result rows exactly as produced by the procedure caller.
        """

        conn = self._effective_connection(conn)
        if not name:
            raise MissingProcedureName()
        caller = self._require_caller()
        try:
            info = caller.function_info(name, schema, conn)
        except MetadataLookupFailed:
            raise
        except Exception as exc:
            raise MetadataLookupFailed(
                name, f"Cannot look up arguments of {schema}.{name}: {exc}"
            ) from exc

        db_args = resolve_db_args(info, self._props, args, options=self.options)
        logger.debug("Resolved %d argument(s) for %s.%s", len(db_args), schema, name)
        return self.call_procedure(
            name,
            schema=schema,
            args=db_args,
            running_funcs=running_funcs,
            conn=conn,
        )

    def call_procedure(
        self,
        name: Optional[str],
        *,
        schema: Optional[str] = None,
        args: Sequence[Any] = (),
        running_funcs: RunningFuncs = None,
        conn: Any = None,
    ) -> Rows:
        """Call a procedure with positional arguments on the attached connection."""

        conn = self._effective_connection(conn)
        if not name:
            raise MissingProcedureName()
        caller = self._require_caller()
        return caller.call_procedure(name, schema, list(args), running_funcs, conn)

    def _effective_connection(self, conn: Any) -> Any:
        if conn is None:
            conn = self._conn
        if conn is None:
            raise MissingConnection()
        return conn

    def _require_caller(self) -> ProcedureCallerPort:
        caller = self._caller if self._caller is not None else type(self).caller
        if caller is None:
            raise CallerNotConfigured(
                f"{type(self).__name__} has no procedure caller; set `caller` "
                "on the class or call set_caller()."
            )
        return caller

    # ── Mapping protocol ───────────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._props[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._props[key] = value

    def __delitem__(self, key: str) -> None:
        del self._props[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._props!r})"
