"""Shared core type aliases used across contracts, dispatch, and ports."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

RowMapping = Mapping[str, Any]
Rows = List[RowMapping]

PositionalArgs = List[Any]
Overrides = Optional[Mapping[str, Any]]
