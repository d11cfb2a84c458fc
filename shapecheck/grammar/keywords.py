# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Directive keyword table.

Keywords are matched after normalisation (trimmed, lower-cased, whitespace
removed) against a static alias map, so ``not zero``, ``NotZero`` and
``nonzero`` all resolve to :attr:`Keyword.NOT_ZERO`. Some aliases imply
negation (``notContains`` behaves like ``!contains``).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from ..valuetype import ValueType


class Keyword(str, Enum):
    NO_CONSTRAINT = "noconstraint"
    NOTE = "note"
    # number
    INTEGER = "integer"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NOT_ZERO = "notzero"
    MIN = "min"
    MAX = "max"
    MAX_EXCLUSIVE = "maxx"
    # string and array
    MIN_LENGTH = "minlength"
    MAX_LENGTH = "maxlength"
    CONTAINS = "contains"
    # string
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"
    MATCH = "match"
    # object
    EMPTY = "empty"
    HAS_PROPERTIES = "hasproperties"
    NOT_NESTED = "notnested"
    NO_PROTOTYPE = "noprototype"
    CAN_SERIALIZE = "canserialize"
    NO_FALSEY_PROPS = "nofalseyprops"
    NO_TRUTHY_PROPS = "notruthyprops"
    INSTANCE_OF = "instanceof"
    # array
    EACH = "each"
    CHECK_TYPE = "checktype"


# normalised spelling -> (keyword, implied negation)
ALIASES: Dict[str, Tuple[Keyword, bool]] = {
    **{kw.value: (kw, False) for kw in Keyword},
    "nonzero": (Keyword.NOT_ZERO, False),
    "maxexclusive": (Keyword.MAX_EXCLUSIVE, False),
    "notstartswith": (Keyword.STARTS_WITH, True),
    "notendswith": (Keyword.ENDS_WITH, True),
    "notcontains": (Keyword.CONTAINS, True),
    "notmatch": (Keyword.MATCH, True),
    "notempty": (Keyword.EMPTY, True),
    "nothasproperties": (Keyword.HAS_PROPERTIES, True),
    "notinstanceof": (Keyword.INSTANCE_OF, True),
}

_UNIVERSAL = frozenset({Keyword.NO_CONSTRAINT, Keyword.NOTE})

KEYWORDS_BY_TYPE: Dict[ValueType, FrozenSet[Keyword]] = {
    ValueType.NUMBER: _UNIVERSAL
    | {
        Keyword.INTEGER,
        Keyword.POSITIVE,
        Keyword.NEGATIVE,
        Keyword.NOT_ZERO,
        Keyword.MIN,
        Keyword.MAX,
        Keyword.MAX_EXCLUSIVE,
    },
    ValueType.STRING: _UNIVERSAL
    | {
        Keyword.MIN_LENGTH,
        Keyword.MAX_LENGTH,
        Keyword.STARTS_WITH,
        Keyword.ENDS_WITH,
        Keyword.CONTAINS,
        Keyword.MATCH,
    },
    ValueType.OBJECT: _UNIVERSAL
    | {
        Keyword.EMPTY,
        Keyword.HAS_PROPERTIES,
        Keyword.NOT_NESTED,
        Keyword.NO_PROTOTYPE,
        Keyword.CAN_SERIALIZE,
        Keyword.NO_FALSEY_PROPS,
        Keyword.NO_TRUTHY_PROPS,
        Keyword.INSTANCE_OF,
    },
    ValueType.ARRAY: _UNIVERSAL
    | {
        Keyword.MIN_LENGTH,
        Keyword.MAX_LENGTH,
        Keyword.CONTAINS,
        Keyword.EACH,
        Keyword.CHECK_TYPE,
    },
    ValueType.BOOLEAN: _UNIVERSAL,
    ValueType.REGEX: _UNIVERSAL,
    ValueType.NONE: _UNIVERSAL,
}

_WHITESPACE = re.compile(r"\s+")


def normalize_keyword(text: str) -> str:
    """Fold case and whitespace: ``"Not Zero" -> "notzero"``."""

    return _WHITESPACE.sub("", text.strip().lower())


def lookup(keyword: str, value_type: Optional[ValueType] = None) -> Tuple[Optional[Keyword], bool]:
    """Resolve *keyword* to ``(Keyword, implied_negation)``.

    Returns ``(None, False)`` for unknown spellings, and for known keywords
    that *value_type* does not accept.
    """

    found = ALIASES.get(normalize_keyword(keyword))
    if found is None:
        return None, False
    if value_type is not None and found[0] not in KEYWORDS_BY_TYPE.get(value_type, _UNIVERSAL):
        return None, False
    return found


__all__ = [
    "Keyword",
    "ALIASES",
    "KEYWORDS_BY_TYPE",
    "normalize_keyword",
    "lookup",
]
