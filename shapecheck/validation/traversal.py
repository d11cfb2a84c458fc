# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Element traversal for array constraints.

Large arrays need not be checked element by element. The ``checkType``
directive picks a sampling mode, and :func:`select_indices` turns that mode
into the concrete list of indices to test:

==================  =====================================================
mode                indices
==================  =====================================================
none                nothing
all                 every index
first(n)            ``[0, n)``
last(n)             ``[len - n, len)``
step(n)             ``0, n, 2n, ...``
random(n)           ``n`` distinct indices drawn without replacement
firstThenLast(a,b)  ``[0, a)`` then ``[len - b, len)``
firstThenStep(a,b)  ``[0, a)`` then every ``b``-th index from ``a``
firstThenRandom     ``[0, a)`` then ``b`` distinct random indices from the rest
==================  =====================================================

Parameters larger than the array clamp to its length; no index is picked
twice.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..exceptions import ConstraintError
from ..telemetry.metrics import elements_tested_total
from ..valuetype import type_name_of
from .constraints import Constraint, ElementCheckType

logger = logging.getLogger(__name__)

ElementTest = Callable[[Constraint, Any], None]

_WHOLE_ARRAY_DEFAULT = frozenset({ElementCheckType.FIRST, ElementCheckType.LAST, ElementCheckType.RANDOM})


def _parse_count(text: Any) -> Optional[int]:
    if isinstance(text, int) and not isinstance(text, bool):
        return text
    candidate = str(text if text is not None else "").strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        pass
    try:
        number = float(candidate)
    except ValueError:
        return None
    return int(number) if math.isfinite(number) else None


def _resolve_parameters(mode: ElementCheckType, p1: Any, p2: Any, length: int) -> Tuple[int, int]:
    first = _parse_count(p1)
    if first is None:
        if mode in _WHOLE_ARRAY_DEFAULT:
            first = length
        elif mode is ElementCheckType.STEP:
            first = 1
        else:
            first = 0
    second = _parse_count(p2)
    if second is None:
        second = first
    return max(first, 0), max(second, 0)


def select_indices(
    length: int,
    mode: ElementCheckType,
    p1: Any = "",
    p2: Any = "",
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Return the indices of a *length*-element array that *mode* selects."""

    if length <= 0 or mode is ElementCheckType.NONE:
        return []
    if mode is ElementCheckType.ALL:
        return list(range(length))

    rng = rng if rng is not None else random.Random()
    first, second = _resolve_parameters(mode, p1, p2, length)
    head = list(range(min(first, length)))

    if mode is ElementCheckType.FIRST:
        return head
    if mode is ElementCheckType.LAST:
        return list(range(length - min(first, length), length))
    if mode is ElementCheckType.STEP:
        if first == 0:
            return [0]
        return list(range(0, length, first))
    if mode is ElementCheckType.RANDOM:
        return rng.sample(range(length), min(first, length))
    if mode is ElementCheckType.FIRST_THEN_LAST:
        tail_start = max(length - second, len(head))
        return head + list(range(tail_start, length))
    if mode is ElementCheckType.FIRST_THEN_STEP:
        if second == 0:
            return head
        return head + list(range(len(head), length, second))
    if mode is ElementCheckType.FIRST_THEN_RANDOM:
        remainder = range(len(head), length)
        return head + rng.sample(remainder, min(second, len(remainder)))

    logger.debug("Unhandled element check type %s; testing every element", mode)
    return list(range(length))


def traverse(
    values: Sequence[Any],
    mode: ElementCheckType,
    p1: Any,
    p2: Any,
    element_constraints: Dict[str, Constraint],
    *,
    test: ElementTest,
    rng: Optional[random.Random] = None,
) -> int:
    """Evaluate the selected elements against their per-type sub-constraints.

    Elements whose runtime type has no entry in *element_constraints* are
    skipped. The first element violation propagates with its ``index`` set.

    Returns:
        The number of elements actually evaluated.
    """
    indices = select_indices(len(values), mode, p1, p2, rng)
    tested = 0
    for index in indices:
        element = values[index]
        constraint = element_constraints.get(type_name_of(element))
        if constraint is None:
            continue
        try:
            test(constraint, element)
        except ConstraintError as error:
            error.index = index
            logger.debug("Array element %d failed its %s constraint: %s", index, constraint.type_name, error)
            raise
        finally:
            tested += 1
            elements_tested_total.add(1, {"value_type": constraint.type_name or "none"})
    logger.debug("Tested %d of %d array elements (%s)", tested, len(values), mode.value)
    return tested


__all__ = ["ElementTest", "select_indices", "traverse"]
