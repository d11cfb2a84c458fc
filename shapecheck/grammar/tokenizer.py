# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Directive tokenizer.

Splits a constraint string such as::

    minLength=3, !startsWith=X, each(number,positive|string,minLength=2)

into :class:`Directive` records. Commas inside parenthesised argument lists
do not split, so they are swapped for a sentinel during the top-level split
and restored per token.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .keywords import normalize_keyword

logger = logging.getLogger(__name__)

_SENTINEL = "\x00"
_QUOTES = ("'", '"')

Literal = Union[str, int, float, List[str]]


@dataclass(frozen=True)
class Directive:
    """One parsed directive expression.

    ``keyword`` is normalised for table lookup; ``name`` keeps the spelling
    used in the constraint string. ``text`` is the unquoted value (or call
    parameter) text, ``value`` the literal parsed from it.
    """

    keyword: str
    name: str
    negated: bool = False
    value: Any = None
    text: str = ""
    is_call: bool = False

    @property
    def has_value(self) -> bool:
        return self.text != ""


def unquote(text: str) -> str:
    """Strip a single matching pair of surrounding quotes."""

    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


def parse_number(text: Any) -> Optional[Union[int, float]]:
    """Parse *text* as a finite number, or return ``None``."""

    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return text if math.isfinite(text) else None
    candidate = str(text).strip()
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
    return number if math.isfinite(number) else None


def parse_literal(text: str) -> Literal:
    """Read a directive value as a list (comma separated), a number or a string."""

    value = unquote(text.strip())
    if "," in value:
        return [part.strip() for part in value.split(",")]
    number = parse_number(value)
    if number is not None:
        return number
    return value


def _protect_call_commas(block: str) -> str:
    out = []
    depth = 0
    for char in block:
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        elif char == "," and depth > 0:
            out.append(_SENTINEL)
            continue
        out.append(char)
    return "".join(out)


def split_expressions(block: str) -> List[str]:
    """Split *block* on top-level commas, keeping ``(...)`` contents intact."""

    text = unquote((block or "").strip()).strip()
    if not text:
        return []
    tokens = []
    for part in _protect_call_commas(text).split(","):
        token = part.replace(_SENTINEL, ",").strip()
        if token:
            tokens.append(token)
    return tokens


def parse_directive(expression: str) -> Optional[Directive]:
    """Parse one top-level expression into a :class:`Directive`."""

    text = expression.strip()
    negated = False
    if text.startswith("!"):
        negated = True
        text = text[1:].strip()
    if not text:
        return None

    equals = text.find("=")
    paren = text.find("(")

    if equals != -1 and (paren == -1 or equals < paren):
        # only the first '=' separates keyword from value
        name = text[:equals].strip()
        value_text = unquote(text[equals + 1:].strip())
        return Directive(
            keyword=normalize_keyword(name),
            name=name,
            negated=negated,
            value=parse_literal(value_text),
            text=value_text,
        )

    if paren != -1:
        name = text[:paren].strip()
        close = text.rfind(")")
        inner = text[paren + 1:close] if close > paren else text[paren + 1:]
        params = unquote(inner.strip()).strip()
        return Directive(
            keyword=normalize_keyword(name),
            name=name,
            negated=negated,
            value=parse_literal(params),
            text=params,
            is_call=True,
        )

    return Directive(keyword=normalize_keyword(text), name=text, negated=negated)


def tokenize(block: str) -> List[Directive]:
    """Turn a raw constraint string into its directive sequence."""

    directives = []
    for expression in split_expressions(block):
        directive = parse_directive(expression)
        if directive is None:
            logger.debug("Skipping empty directive in constraint block %r", block)
            continue
        directives.append(directive)
    return directives


__all__ = [
    "Directive",
    "Literal",
    "unquote",
    "parse_number",
    "parse_literal",
    "split_expressions",
    "parse_directive",
    "tokenize",
]
