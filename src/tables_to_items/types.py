"""Shared type aliases for conversion modules."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TypeAlias

FieldScalar: TypeAlias = str | int | float | bool | None | Path
FieldValue: TypeAlias = (
    FieldScalar
    | tuple["FieldValue", ...]
    | list["FieldValue"]
    | dict[str, "FieldValue"]
)
FieldMap: TypeAlias = Mapping[str, FieldValue]
Document: TypeAlias = dict[str, FieldValue]
