"""Records exchanged between the mapping layer and procedure callers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union


@dataclass(frozen=True)
class ArgInfo:
    """One declared procedure argument as reported by `function_info`."""

    name: str
    type: str = ""


@dataclass(frozen=True)
class TypedArg:
    """Argument value tagged with a database type for binary-safe binding."""

    type: str
    value: Any


@dataclass(frozen=True)
class RunningFunc:
    """Window aggregate appended to a procedure result, e.g. a running total."""

    agg: str
    alias: str

    def __post_init__(self) -> None:
        if not isinstance(self.agg, str) or not self.agg:
            raise ValueError("RunningFunc.agg must be a non-empty string.")
        if not isinstance(self.alias, str) or not self.alias:
            raise ValueError("RunningFunc.alias must be a non-empty string.")


ArgInfoInput = Union[ArgInfo, Mapping[str, Any]]
RunningFuncInput = Union[RunningFunc, Mapping[str, Any]]
RunningFuncs = Optional[Sequence[RunningFuncInput]]


def to_arg_info(raw: ArgInfoInput) -> ArgInfo:
    """Normalize one descriptor from `ArgInfo` or a `{name, type}` mapping."""

    if isinstance(raw, ArgInfo):
        return raw
    if isinstance(raw, Mapping):
        name = raw.get("name")
        if not isinstance(name, str):
            raise TypeError(f"Argument descriptor has no string name: {raw!r}.")
        type_name = raw.get("type")
        return ArgInfo(name=name, type="" if type_name is None else str(type_name))
    raise TypeError(
        f"Unsupported argument descriptor type {type(raw).__name__}; "
        "expected ArgInfo or mapping."
    )


def to_running_funcs(raw: RunningFuncs) -> List[RunningFunc]:
    if not raw:
        return []
    parsed: List[RunningFunc] = []
    for item in raw:
        if isinstance(item, RunningFunc):
            parsed.append(item)
        elif isinstance(item, Mapping):
            parsed.append(RunningFunc(agg=item.get("agg"), alias=item.get("alias")))
        else:
            raise TypeError(
                f"Unsupported running func type {type(item).__name__}; "
                "expected RunningFunc or mapping."
            )
    return parsed
