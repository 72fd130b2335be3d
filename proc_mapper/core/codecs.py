"""Value conversion helpers applied to procedure arguments before binding."""

from __future__ import annotations

from typing import AbstractSet, Any, Callable, Optional

from .config import DEFAULT_OPTIONS
from .descriptors import TypedArg


def to_db_value(value: Any) -> Any:
    """Return `value.to_db()` for `StorageSerializable` values, otherwise `value`.

    The capability is detected by duck typing, so values need not inherit
    from the protocol.

    Only the lookup is guarded; errors raised by `to_db()` itself propagate.
    """

    to_db = _to_db_method(value)
    if to_db is None:
        return value
    return to_db()


def wrap_typed_arg(
    value: Any,
    type_name: str,
    binary_types: AbstractSet[str] = DEFAULT_OPTIONS.binary_types,
) -> Any:
    """Tag values for binary argument types, pass everything else through."""

    if type_name in binary_types:
        return TypedArg(type=type_name, value=value)
    return value


def _to_db_method(value: Any) -> Optional[Callable[[], Any]]:
    if value is None or isinstance(value, type):
        return None
    try:
        method = getattr(value, "to_db", None)
    except Exception:
        return None
    return method if callable(method) else None
