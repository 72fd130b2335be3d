"""Mapping conventions shared by the dispatcher and argument resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_ARG_PREFIX = "in_"
BYTEA = "bytea"


@dataclass(frozen=True)
class MappingOptions:
    arg_prefix: str = DEFAULT_ARG_PREFIX
    binary_types: frozenset[str] = field(default_factory=lambda: frozenset({BYTEA}))


DEFAULT_OPTIONS = MappingOptions()
