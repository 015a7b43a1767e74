"""JSON Patch operation records and conversion between API flavours."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


def _first_set(*members: Any) -> Any:
    for member in members:
        if member is not None:
            return member
    return None


@dataclass
class PatchValue:
    """One-of value carried by a patch operation; at most one member is set."""

    string: str | None = None
    int32: int | None = None
    boolean: bool | None = None
    mapping: dict[str, Any] | None = None
    array: list[Any] | None = None

    def to_json(self) -> Any:
        """Return the member that is set, or None when the value is empty."""
        return _first_set(self.array, self.boolean, self.int32, self.mapping, self.string)


@dataclass
class V3PatchValue:
    """Patch value in the shape expected by the v3 API."""

    string: str | None = None
    int32: int | None = None
    boolean: bool | None = None
    mapping: dict[str, Any] | None = None
    array: list[Any] | None = None

    def to_json(self) -> Any:
        """Return the member that is set, or None when the value is empty."""
        return _first_set(self.array, self.boolean, self.int32, self.mapping, self.string)


def _operation_dict(op: str, path: str, value: PatchValue | V3PatchValue | None) -> dict[str, Any]:
    result: dict[str, Any] = {"op": op, "path": path}
    if value is not None:
        result["value"] = value.to_json()
    return result


@dataclass
class PatchOperation:
    """A single JSON Patch operation."""

    op: str
    path: str
    value: PatchValue | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the operation as a JSON-ready dictionary."""
        return _operation_dict(self.op, self.path, self.value)


@dataclass
class V3PatchOperation:
    """A single JSON Patch operation for the v3 API."""

    op: str
    path: str
    value: V3PatchValue | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the operation as a JSON-ready dictionary."""
        return _operation_dict(self.op, self.path, self.value)


def _convert_value(value: PatchValue | None) -> V3PatchValue | None:
    if value is None:
        return None
    array = None
    if value.array is not None:
        try:
            array = json.loads(json.dumps(value.array, allow_nan=False))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"array value is not JSON serialisable: {exc}") from exc
    return V3PatchValue(
        string=value.string,
        int32=value.int32,
        boolean=value.boolean,
        mapping=value.mapping,
        array=array,
    )


def convert_to_v3(operations) -> list[V3PatchOperation]:
    """Convert patch operations into their v3 counterparts."""
    return [
        V3PatchOperation(op=operation.op, path=operation.path, value=_convert_value(operation.value))
        for operation in operations
    ]