# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint builder: directive sequence -> typed constraint record.

A :class:`ConstraintBuilder` lives for exactly one :func:`build` call and
accumulates directives into a fresh record of the variant matching the
value type. Unknown keywords are kept as ``bad_name`` and never abort the
build. Conflicting pairs (``startsWith`` with ``!startsWith``) are kept as
declared; the evaluator reports them.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..config import get_settings
from ..telemetry.metrics import directive_unknown_total
from ..validation.constraints import (
    ArrayConstraint,
    Constraint,
    NumberConstraint,
    ObjectConstraint,
    StringConstraint,
    check_type_from_string,
    new_constraint,
)
from ..valuetype import ValueType, string_from_value_type, value_type_from_string
from .keywords import Keyword, lookup
from .tokenizer import Directive, parse_number, tokenize, unquote

logger = logging.getLogger(__name__)

_PROPERTY_SEPARATORS = re.compile(r"[,|]")

# (field, negated field) per string pair keyword
_STRING_PAIRS = {
    Keyword.STARTS_WITH: ("starts_with", "not_starts_with"),
    Keyword.ENDS_WITH: ("ends_with", "not_ends_with"),
    Keyword.CONTAINS: ("contains", "not_contains"),
    Keyword.MATCH: ("match", "not_match"),
}

_OBJECT_FLAGS = {
    Keyword.NOT_NESTED: "not_nested",
    Keyword.NO_PROTOTYPE: "no_prototype",
    Keyword.CAN_SERIALIZE: "can_serialize",
    Keyword.NO_FALSEY_PROPS: "no_falsey_props",
    Keyword.NO_TRUTHY_PROPS: "no_truthy_props",
}

_NUMBER_FLAGS = {
    Keyword.INTEGER: "is_integer",
    Keyword.POSITIVE: "is_positive",
    Keyword.NEGATIVE: "is_negative",
    Keyword.NOT_ZERO: "not_zero",
}

_NUMBER_BOUNDS = {
    Keyword.MIN: "min",
    Keyword.MAX: "max",
    Keyword.MAX_EXCLUSIVE: "max_exclusive",
}

_LENGTHS = {
    Keyword.MIN_LENGTH: "min_length",
    Keyword.MAX_LENGTH: "max_length",
}


def parse_check_type(text: str) -> Tuple[str, str, str]:
    """Split ``first(3,5)`` / ``step("2,2")`` into ``(name, p1, p2)``."""

    text = text.strip()
    paren = text.find("(")
    if paren == -1:
        return text, "", ""
    name = text[:paren].strip()
    close = text.rfind(")")
    inner = text[paren + 1:close] if close > paren else text[paren + 1:]
    params = unquote(inner.strip()).strip()
    parts = [part.strip() for part in params.split(",")] if params else []
    p1 = parts[0] if parts else ""
    p2 = parts[1] if len(parts) > 1 else ""
    return name, p1, p2


def parse_each(text: str, *, warn_unknown: bool = False) -> Dict[str, Constraint]:
    """Parse ``<type>,<directives>|<type>,<directives>`` into sub-constraints.

    Each block is built recursively; a block with no directives yields an
    empty record for its type. Keys are canonical type names, so ``int`` and
    ``number`` share one entry; a repeated type keeps its last block and logs
    a warning.
    """

    element_constraints: Dict[str, Constraint] = {}
    for block in text.split("|"):
        type_name, _, directives = block.strip().partition(",")
        type_name = unquote(type_name.strip()).strip()
        if not type_name:
            continue
        value_type = value_type_from_string(type_name)
        constraint = build(value_type, directives, warn_unknown=warn_unknown)
        if constraint is None:
            constraint = new_constraint(value_type)
        key = string_from_value_type(value_type)
        if key in element_constraints:
            logger.warning(
                "each() declares element type '%s' more than once; keeping the last block %r",
                key,
                block.strip(),
            )
        element_constraints[key] = constraint
    return element_constraints


class ConstraintBuilder:
    """Accumulates directives into one constraint record."""

    def __init__(self, value_type: ValueType, *, warn_unknown: bool = False):
        self.value_type = value_type
        self.warn_unknown = warn_unknown
        self.constraint = new_constraint(value_type)
        self._handlers: Dict[ValueType, Callable[[Keyword, bool, Directive], None]] = {
            ValueType.NUMBER: self._number,
            ValueType.STRING: self._string,
            ValueType.OBJECT: self._object,
            ValueType.ARRAY: self._array,
        }

    def add(self, directive: Directive) -> bool:
        """Apply one directive. Returns False once ``noconstraint`` ends the build."""

        keyword, implied_negation = lookup(directive.keyword, self.value_type)
        if keyword is None:
            self._unknown(directive)
            return True
        negated = directive.negated != implied_negation

        if keyword is Keyword.NO_CONSTRAINT:
            return False
        if keyword is Keyword.NOTE:
            self.constraint.note = directive.text
            return True

        handler = self._handlers.get(self.value_type)
        if handler is not None:
            handler(keyword, negated, directive)
        return True

    def _unknown(self, directive: Directive) -> None:
        self.constraint.bad_name = directive.name
        level = logging.WARNING if self.warn_unknown else logging.DEBUG
        logger.log(
            level,
            "Unrecognized directive '%s' for %s constraint; ignoring",
            directive.name,
            string_from_value_type(self.value_type) or "none",
        )
        directive_unknown_total.add(1, {"value_type": self.value_type.value})

    def _number_value(self, directive: Directive) -> Optional[Union[int, float]]:
        number = parse_number(directive.text)
        if number is None:
            logger.warning(
                "Directive '%s' expects a number, got %r; ignoring",
                directive.name,
                directive.text,
            )
        return number

    def _length_value(self, directive: Directive) -> Optional[int]:
        number = self._number_value(directive)
        return None if number is None else int(number)

    def _number(self, keyword: Keyword, negated: bool, directive: Directive) -> None:
        constraint: NumberConstraint = self.constraint  # type: ignore[assignment]
        if keyword in _NUMBER_FLAGS:
            setattr(constraint, _NUMBER_FLAGS[keyword], True)
        elif keyword in _NUMBER_BOUNDS:
            setattr(constraint, _NUMBER_BOUNDS[keyword], self._number_value(directive))

    def _string(self, keyword: Keyword, negated: bool, directive: Directive) -> None:
        constraint: StringConstraint = self.constraint  # type: ignore[assignment]
        if keyword in _LENGTHS:
            setattr(constraint, _LENGTHS[keyword], self._length_value(directive))
        elif keyword in _STRING_PAIRS:
            if not directive.has_value:
                logger.debug("Directive '%s' has no value; ignoring", directive.name)
                return
            positive, negative = _STRING_PAIRS[keyword]
            setattr(constraint, negative if negated else positive, directive.text)

    def _object(self, keyword: Keyword, negated: bool, directive: Directive) -> None:
        constraint: ObjectConstraint = self.constraint  # type: ignore[assignment]
        if keyword is Keyword.EMPTY:
            if negated:
                constraint.not_empty = True
            else:
                constraint.empty = True
        elif keyword is Keyword.HAS_PROPERTIES:
            names = _property_names(directive.text)
            if not names:
                logger.debug("Directive '%s' lists no properties; ignoring", directive.name)
                return
            if negated:
                constraint.not_has_properties = names
            else:
                constraint.has_properties = names
        elif keyword in _OBJECT_FLAGS:
            setattr(constraint, _OBJECT_FLAGS[keyword], True)
        elif keyword is Keyword.INSTANCE_OF:
            if not directive.has_value:
                return
            if negated:
                constraint.not_instance_of = directive.text
            else:
                constraint.instance_of = directive.text

    def _array(self, keyword: Keyword, negated: bool, directive: Directive) -> None:
        constraint: ArrayConstraint = self.constraint  # type: ignore[assignment]
        if keyword in _LENGTHS:
            setattr(constraint, _LENGTHS[keyword], self._length_value(directive))
        elif keyword is Keyword.CONTAINS:
            if not directive.has_value:
                return
            if negated:
                constraint.not_contains = directive.value
            else:
                constraint.contains = directive.value
        elif keyword is Keyword.EACH:
            constraint.element_constraints.update(
                parse_each(directive.text, warn_unknown=self.warn_unknown)
            )
        elif keyword is Keyword.CHECK_TYPE:
            name, p1, p2 = parse_check_type(directive.text)
            constraint.element_check_type = check_type_from_string(name)
            constraint.element_check_parameter = p1
            constraint.element_check_parameter2 = p2


def _property_names(text: str) -> List[str]:
    return [name.strip() for name in _PROPERTY_SEPARATORS.split(text) if name.strip()]


def build(
    value_type: Union[ValueType, str],
    block: Optional[str],
    *,
    warn_unknown: Optional[bool] = None,
) -> Optional[Constraint]:
    """Build the constraint record for *value_type* from a constraint string.

    Args:
        value_type: A :class:`ValueType` or a declared type name
        block: The raw constraint string (optionally quoted)
        warn_unknown: Log unknown keywords at WARNING; defaults to the
            ``SHAPECHECK_WARN_UNKNOWN`` setting

    Returns:
        The populated record, or ``None`` when the block is empty or the
        type is ``none``.
    """
    if not isinstance(value_type, ValueType):
        value_type = value_type_from_string(value_type)
    if value_type is ValueType.NONE:
        return None
    directives = tokenize(block or "")
    if not directives:
        return None
    if warn_unknown is None:
        warn_unknown = get_settings().warn_unknown

    builder = ConstraintBuilder(value_type, warn_unknown=warn_unknown)
    for directive in directives:
        if not builder.add(directive):
            logger.debug("'%s' disables all constraints in %r", directive.name, block)
            return new_constraint(value_type)
    return builder.constraint


parse_constraints = build


__all__ = [
    "ConstraintBuilder",
    "build",
    "parse_constraints",
    "parse_check_type",
    "parse_each",
]
