"""Resolution of procedure arguments from object properties and overrides."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from .codecs import to_db_value, wrap_typed_arg
from .config import DEFAULT_OPTIONS, MappingOptions
from .descriptors import ArgInfoInput, to_arg_info
from .naming import strip_arg_prefix
from .types import Overrides, PositionalArgs


def resolve_db_args(
    descriptors: Sequence[ArgInfoInput],
    properties: Mapping[str, Any],
    overrides: Overrides = None,
    *,
    options: MappingOptions = DEFAULT_OPTIONS,
) -> PositionalArgs:
    """Build positional arguments in descriptor order.

    Each declared name is stripped of `options.arg_prefix` and looked up in
    `overrides` first, then in `properties`. A key present in `overrides`
    wins even when its value is falsy. Missing keys resolve to `None`.

    Args:
        descriptors: Argument descriptors as returned by `function_info`.
        properties: Object property bag used as the default value source.
        overrides: Optional per-call values keyed by property name.
        options: Prefix and binary type conventions.
    """

    overrides = overrides or {}
    db_args: PositionalArgs = []
    for raw in descriptors:
        info = to_arg_info(raw)
        key = strip_arg_prefix(info.name, options.arg_prefix)
        if key in overrides:
            value = overrides[key]
        else:
            value = properties.get(key)
        value = to_db_value(value)
        db_args.append(wrap_typed_arg(value, info.type, options.binary_types))
    return db_args
