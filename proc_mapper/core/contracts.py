"""Core port contracts used by the mapping layer and procedure callers."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from .descriptors import ArgInfoInput, RunningFuncs
from .types import RowMapping


@runtime_checkable
class StorageSerializable(Protocol):
    """Value that knows its own database representation."""

    def to_db(self) -> Any: ...


class ProcedureCallerPort(Protocol):
    """Procedure metadata lookup and execution required by `SimpleObject`."""

    def function_info(
        self, name: str, schema: Optional[str], conn: Any
    ) -> Sequence[ArgInfoInput]: ...

    def call_procedure(
        self,
        name: str,
        schema: Optional[str],
        args: Sequence[Any],
        running_funcs: RunningFuncs,
        conn: Any,
    ) -> List[RowMapping]: ...
