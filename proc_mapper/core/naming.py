"""Naming convention between procedure arguments and object properties."""

from __future__ import annotations

from .config import DEFAULT_ARG_PREFIX


def strip_arg_prefix(name: str, prefix: str = DEFAULT_ARG_PREFIX) -> str:
    """Return property key for a declared procedure argument name.

    Exactly one leading `prefix` is removed; names without it are returned
    unchanged, so `in_in_id` maps to `in_id`.
    """

    if prefix and name.startswith(prefix):
        return name[len(prefix) :]
    return name
