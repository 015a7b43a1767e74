"""Comparison engine that turns two versions of an object into JSON Patch operations."""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import math
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import Any

from .operations import PatchOperation, PatchValue

JSON_KEY = "json"
SEQUENCE_KEY = "sequence"
_REFERENCE_FIELD = "id"
_SEQUENCE_NAMES = frozenset({"list", "tuple", "List", "Tuple", "Sequence", "MutableSequence"})
_UNION_WRAPPERS = ("typing.Optional[", "Optional[", "typing.Union[", "Union[")


class PatchError(ValueError):
    """Raised when two values cannot be turned into patch operations."""


@dataclass(frozen=True)
class Nullable:
    """An explicitly nullable value, compared through what it holds."""

    value: Any = None

    def get(self) -> Any:
        """Return the wrapped value, or None."""
        return self.value


@dataclass(frozen=True)
class ComparableValue:
    """A pair of values to compare and the patch path they live at.

    With ``sequence`` set, None stands for an empty list of a known type:
    any difference is sent as a replacement of the whole list.
    """

    modified: Any
    current: Any
    path: str
    sequence: bool = False


def json_field(name, **kwargs):
    """Declare a dataclass field that is compared and serialised under ``name``.

    ``sequence=True`` marks the field as a list whatever its annotation says.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    sequence = kwargs.pop("sequence", None)
    metadata[JSON_KEY] = name
    if sequence is not None:
        metadata[SEQUENCE_KEY] = bool(sequence)
    return field(metadata=metadata, **kwargs)


def _json_name(dc_field: dataclasses.Field) -> str | None:
    name = dc_field.metadata.get(JSON_KEY)
    if not name or name == "_" or dc_field.name.startswith("_"):
        return None
    return name


def _split_top_level(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    start = 0
    for position, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:position])
            start = position + 1
    parts.append(text[start:])
    return [part.strip() for part in parts]


def _is_sequence_text(text: str) -> bool:
    text = text.strip().strip("'\"")
    for wrapper in _UNION_WRAPPERS:
        if text.startswith(wrapper) and text.endswith("]"):
            inner = text[len(wrapper):-1]
            return any(_is_sequence_text(part) for part in _split_top_level(inner, ","))
    members = _split_top_level(text, "|")
    if len(members) > 1:
        return any(_is_sequence_text(member) for member in members if member != "None")
    base = text.split("[", 1)[0].strip()
    return base.rsplit(".", 1)[-1] in _SEQUENCE_NAMES


def _is_sequence_hint(hint: Any) -> bool:
    if isinstance(hint, str):
        return _is_sequence_text(hint)
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        return any(_is_sequence_hint(arg) for arg in typing.get_args(hint) if arg is not type(None))
    if origin in (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence):
        return True
    return hint in (list, tuple)


@lru_cache(maxsize=None)
def _sequence_fields(cls: type) -> frozenset[str]:
    names = set()
    for dc_field in dataclasses.fields(cls):
        flag = dc_field.metadata.get(SEQUENCE_KEY)
        if flag is None:
            flag = _is_sequence_hint(dc_field.type)
        if flag:
            names.add(dc_field.name)
    return frozenset(names)


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, (list, tuple)):
        return "slice"
    if isinstance(value, Nullable) or (dataclasses.is_dataclass(value) and not isinstance(value, type)):
        return "struct"
    return type(value).__name__


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Nullable):
        return _to_jsonable(value.get())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result = {}
        for dc_field in dataclasses.fields(value):
            name = _json_name(dc_field)
            if name is None:
                continue
            item = getattr(value, dc_field.name)
            if isinstance(item, Nullable):
                item = item.get()
            if item is None:
                continue
            result[name] = _to_jsonable(item)
        return result
    if isinstance(value, Mapping):
        return {str(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def _json_round_trip(value: Any, path: str) -> Any:
    try:
        return json.loads(json.dumps(_to_jsonable(value), allow_nan=False))
    except (TypeError, ValueError) as exc:
        raise PatchError(f"cannot serialise value at: {path}: {exc}") from exc


def _to_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def to_operation_value(value, path) -> PatchValue:
    """Wrap a Python value as a patch value; floats travel as strings."""
    if isinstance(value, Nullable):
        value = value.get()
    if value is None:
        raise PatchError(f"unsupported kind for a patch value: invalid at: {path}")
    kind = _kind(value)
    if kind == "string":
        return PatchValue(string=value)
    if kind == "bool":
        return PatchValue(boolean=value)
    if kind == "int":
        return PatchValue(int32=_to_int32(value))
    if kind == "float":
        return PatchValue(string=_format_float(value))
    if kind == "map":
        return PatchValue(mapping=dict(value))
    if kind == "slice":
        return PatchValue(array=_json_round_trip(value, path))
    if kind == "struct":
        return PatchValue(mapping=_json_round_trip(value, path))
    raise PatchError(f"unsupported kind for a patch value: {kind} at: {path}")


def _inner_object(value: Any) -> Any:
    if isinstance(value, Nullable):
        return value.get()
    return value


def _identifier(obj: Any, path: str) -> str:
    if isinstance(obj, Mapping):
        if _REFERENCE_FIELD not in obj:
            raise PatchError(f"reference has no {_REFERENCE_FIELD} at: {path}")
        identifier = obj[_REFERENCE_FIELD]
    elif hasattr(obj, _REFERENCE_FIELD):
        identifier = getattr(obj, _REFERENCE_FIELD)
    else:
        raise PatchError(f"reference has no {_REFERENCE_FIELD} at: {path}")
    if identifier is None:
        return ""
    if not isinstance(identifier, str):
        raise PatchError(f"unsupported reference {_REFERENCE_FIELD} type {type(identifier).__name__} at: {path}")
    return identifier


class PatchBuilder:
    """Compares modified values with current ones and collects patch operations.

    Values are compared in depth; references are compared only by their id.
    Subclasses override ``define_values_to_compare`` to set
    ``values_to_compare`` and ``references_to_compare``.
    """

    def __init__(self, values=(), references=()):
        self._defined_values = list(values)
        self._defined_references = list(references)
        self.values_to_compare: list[ComparableValue] = []
        self.references_to_compare: list[ComparableValue] = []
        self.operations: list[PatchOperation] = []

    def define_values_to_compare(self) -> None:
        """Set the values and references that the patch is built from."""
        self.values_to_compare = list(self._defined_values)
        self.references_to_compare = list(self._defined_references)

    def generate_json_patch(self) -> list[PatchOperation]:
        """Return the operations that turn the current values into the modified ones."""
        self.operations = []
        self.define_values_to_compare()
        for item in self.values_to_compare:
            if item.sequence:
                self._compare_sequence(item.modified, item.current, item.path)
            else:
                self._compare_value(item.modified, item.current, item.path)
        for item in self.references_to_compare:
            self._compare_reference(item.modified, item.current, item.path)
        return list(self.operations)

    def _compare_value(self, modified: Any, current: Any, path: str) -> None:
        if modified is None:
            if current is not None:
                self._remove(path)
            return
        if current is None:
            if isinstance(modified, Nullable):
                self._compare_value(modified.get(), None, path)
            else:
                self._add(modified, path)
            return
        modified_kind, current_kind = _kind(modified), _kind(current)
        if modified_kind != current_kind:
            raise PatchError(
                f"kind does not match at: {path} modified: {modified_kind} current: {current_kind}"
            )
        if modified_kind == "struct":
            self._compare_struct(modified, current, path)
        elif modified_kind == "slice":
            self._compare_sequence(modified, current, path)
        elif modified_kind == "map":
            self._compare_map(modified, current, path)
        elif modified_kind == "string":
            self._compare_scalar(modified, current, path, "")
        elif modified_kind in ("int", "float"):
            self._compare_scalar(modified, current, path, 0)
        elif modified_kind == "bool":
            if modified != current:
                self._replace(modified, path)
        else:
            raise PatchError(f"unsupported kind: {modified_kind} at: {path}")

    def _compare_scalar(self, modified: Any, current: Any, path: str, empty: Any) -> None:
        if modified == current:
            return
        if modified == empty:
            self._remove(path)
        elif current == empty:
            self._add(modified, path)
        else:
            self._replace(modified, path)

    def _compare_sequence(self, modified: Any, current: Any, path: str) -> None:
        if modified == current:
            return
        self._replace(modified if modified is not None else [], path)

    def _compare_map(self, modified: Mapping, current: Mapping, path: str) -> None:
        base = path + "/"
        for key, current_value in current.items():
            if key in modified:
                self._compare_value(modified[key], current_value, f"{base}{key}")
            else:
                self._remove(f"{base}{key}")
        for key, modified_value in modified.items():
            if key not in current:
                self._add(modified_value, f"{base}{key}")

    def _compare_struct(self, modified: Any, current: Any, path: str) -> None:
        if modified == current:
            return
        if isinstance(modified, Nullable) or isinstance(current, Nullable):
            if not (isinstance(modified, Nullable) and isinstance(current, Nullable)):
                raise PatchError(f"type does not match at: {path}")
            self._compare_value(modified.get(), current.get(), path)
            return
        if type(modified) is not type(current):
            raise PatchError(
                f"type does not match at: {path} modified: {type(modified).__name__} "
                f"current: {type(current).__name__}"
            )
        sequences = _sequence_fields(type(modified))
        for dc_field in dataclasses.fields(modified):
            name = _json_name(dc_field)
            if name is None:
                continue
            sub_path = f"{path}/{name}"
            modified_value = getattr(modified, dc_field.name)
            current_value = getattr(current, dc_field.name)
            if dc_field.name in sequences:
                self._compare_sequence(modified_value, current_value, sub_path)
            else:
                self._compare_value(modified_value, current_value, sub_path)

    def _compare_reference(self, modified: Any, current: Any, path: str) -> None:
        modified = _inner_object(modified)
        current = _inner_object(current)
        if modified is None and current is None:
            return
        if current is None:
            self._add(modified, path)
            return
        if modified is None:
            self._remove(path)
            return
        modified_id = _identifier(modified, path)
        current_id = _identifier(current, path)
        if modified_id != current_id:
            self._replace(modified_id, f"{path}/{_REFERENCE_FIELD}")

    def _remove(self, path: str) -> None:
        self.operations.append(PatchOperation(op="remove", path=path))

    def _add(self, value: Any, path: str) -> None:
        self.operations.append(PatchOperation(op="add", path=path, value=to_operation_value(value, path)))

    def _replace(self, value: Any, path: str) -> None:
        self.operations.append(PatchOperation(op="replace", path=path, value=to_operation_value(value, path)))