# Copyright 2026 The lenra-check Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# THE MATCHER - STRUCTURAL VALUE DIFF
# -----------------------------------------------------------------------------
# Responsibility: Deep-compare an actual JSON-like value against an expected
# one and list every located deviation.
#
# Rules of the diff:
# - Different type tags stop the descent with a single type mismatch
# - Sequences are compared by position only (no alignment by content)
# - Mappings report missing keys (expected side) and additional keys (actual)
# - Numbers compare as floats when either side is a float, else exactly
#
# The matcher never raises: it only reports zero or more mismatches.
# -----------------------------------------------------------------------------

import math
from typing import Any

from lenra_check.domain.models import Mismatch, MismatchKind

NULL = "null"
BOOL = "bool"
NUMBER = "number"
STRING = "string"
ARRAY = "array"
OBJECT = "object"
TAGGED = "tagged"


def type_name(value: Any) -> str:
    """Return the type tag of a value: null, bool, number, string, array, object or tagged."""
    if value is None:
        return NULL
    # bool is an int subclass, test it first
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, (list, tuple)):
        return ARRAY
    if isinstance(value, dict):
        return OBJECT
    return TAGGED


def compare(actual: Any, expected: Any) -> list[Mismatch]:
    """
    Compare `actual` against `expected` and return the located mismatches.

    The walk keeps its own stack, so the nesting depth of the values is not
    bounded by the interpreter recursion limit.

    Args:
        actual: The value produced by the app.
        expected: The reference value.

    Returns:
        Mismatches in document order. An empty list means the values match.
    """
    mismatches: list[Mismatch] = []
    # pending work, last item first: a (path, actual, expected) pair to
    # compare or an already located Mismatch
    stack: list[tuple[str, Any, Any] | Mismatch] = [("", actual, expected)]

    while stack:
        item = stack.pop()
        if isinstance(item, Mismatch):
            mismatches.append(item)
            continue

        path, actual_value, expected_value = item
        value_type = type_name(actual_value)
        if value_type != type_name(expected_value):
            mismatches.append(Mismatch(path, MismatchKind.NOT_SAME_TYPE, actual_value, expected_value))
        elif value_type == ARRAY:
            stack.extend(reversed(_sequence_items(path, actual_value, expected_value)))
        elif value_type == OBJECT:
            stack.extend(reversed(_mapping_items(path, actual_value, expected_value)))
        elif not _scalars_equal(value_type, actual_value, expected_value):
            mismatches.append(Mismatch(path, MismatchKind.NOT_SAME_VALUE, actual_value, expected_value))

    return mismatches


def _child_path(path: str, segment: Any) -> str:
    return f"{path}.{segment}" if path else str(segment)


def _sequence_items(path: str, actual: Any, expected: Any) -> list:
    common_length = min(len(actual), len(expected))
    items: list = [
        (_child_path(path, index), actual[index], expected[index]) for index in range(common_length)
    ]
    for index in range(common_length, len(actual)):
        items.append(Mismatch(_child_path(path, index), MismatchKind.ADDITIONAL_PROPERTY))
    for index in range(common_length, len(expected)):
        items.append(Mismatch(_child_path(path, index), MismatchKind.MISSING_PROPERTY))
    return items


def _mapping_items(path: str, actual: dict, expected: dict) -> list:
    items: list = []
    for key, expected_value in expected.items():
        if key not in actual:
            items.append(Mismatch(_child_path(path, key), MismatchKind.MISSING_PROPERTY))
        else:
            items.append((_child_path(path, key), actual[key], expected_value))

    for key in actual:
        if key not in expected:
            items.append(Mismatch(_child_path(path, key), MismatchKind.ADDITIONAL_PROPERTY))
    return items


def _scalars_equal(value_type: str, actual: Any, expected: Any) -> bool:
    if value_type == NUMBER:
        return _numbers_equal(actual, expected)
    return value_type == NULL or actual == expected


def _numbers_equal(actual: int | float, expected: int | float) -> bool:
    """
    Compare two numbers in the widest domain either side needs.

    Floats win over integers: `2**53 + 1` and `float(2**53)` are equal since the
    integer rounds to the same float. Two integers compare exactly, whatever
    their magnitude or sign. NaN equals NaN.
    """
    if isinstance(actual, float) or isinstance(expected, float):
        left, right = _as_float(actual), _as_float(expected)
        if math.isnan(left) and math.isnan(right):
            return True
        return left == right
    return actual == expected


def _as_float(number: int | float) -> float:
    try:
        return float(number)
    except OverflowError:
        # integers past the float range saturate
        return math.copysign(math.inf, number)
