# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Classification of runtime values and type names into :class:`ValueType`."""

from __future__ import annotations

import numbers
import re
from collections.abc import Sequence
from enum import Enum
from typing import Any, Dict


class ValueType(str, Enum):
    """The closed set of value kinds a constraint can apply to."""

    NONE = "none"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    REGEX = "regex"


_TEXT_TYPES = (str, bytes, bytearray)

_NAMES: Dict[str, ValueType] = {
    "number": ValueType.NUMBER,
    "int": ValueType.NUMBER,
    "float": ValueType.NUMBER,
    "string": ValueType.STRING,
    "str": ValueType.STRING,
    "boolean": ValueType.BOOLEAN,
    "bool": ValueType.BOOLEAN,
    "object": ValueType.OBJECT,
    "dict": ValueType.OBJECT,
    "array": ValueType.ARRAY,
    "list": ValueType.ARRAY,
    "tuple": ValueType.ARRAY,
    "regex": ValueType.REGEX,
    "regexp": ValueType.REGEX,
    "none": ValueType.NONE,
    "null": ValueType.NONE,
}


def is_array(value: Any) -> bool:
    """True for ordered, indexable sequences that are not text."""

    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def value_type_of(value: Any) -> ValueType:
    """Classify *value* by its runtime kind.

    ``bool`` is tested before numbers because it subclasses ``int``, and
    arrays are tested before the generic object fallback.
    """

    if value is None:
        return ValueType.NONE
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, numbers.Real):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, re.Pattern):
        return ValueType.REGEX
    if is_array(value):
        return ValueType.ARRAY
    return ValueType.OBJECT


def value_type_from_string(name: str) -> ValueType:
    """Translate a declared type name into a :class:`ValueType`.

    Matching is case-insensitive. Unknown non-empty names are objects,
    unless they carry the ``[]`` array marker.
    """

    text = (name or "").strip()
    if not text:
        return ValueType.NONE
    found = _NAMES.get(text.lower())
    if found is not None:
        return found
    return ValueType.ARRAY if "[]" in text else ValueType.OBJECT


def string_from_value_type(value_type: ValueType) -> str:
    """Inverse of :func:`value_type_from_string` for the canonical names."""

    if value_type is ValueType.NONE:
        return ""
    return value_type.value


def type_name_of(value: Any) -> str:
    return string_from_value_type(value_type_of(value))


__all__ = [
    "ValueType",
    "is_array",
    "value_type_of",
    "value_type_from_string",
    "string_from_value_type",
    "type_name_of",
]
