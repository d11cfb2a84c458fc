"""Constraint grammar - tokenizer, keyword table and builder."""

from .builder import ConstraintBuilder, build, parse_constraints
from .keywords import Keyword, lookup, normalize_keyword
from .tokenizer import Directive, parse_literal, tokenize

__all__ = [
    "ConstraintBuilder",
    "Directive",
    "Keyword",
    "build",
    "lookup",
    "normalize_keyword",
    "parse_constraints",
    "parse_literal",
    "tokenize",
]
