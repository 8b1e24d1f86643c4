"""Dump parsing subsystem for dumpkit."""

from dumppack.parse.exceptions import MalformedInputError, NoOpeningBracketError, ParseError
from dumppack.parse.parser import (
    DEFAULT_PARSE_OPTIONS,
    ParseOptions,
    normalize,
    parse,
    parse_item,
    parse_object,
    parse_strict,
    parse_value,
)
from dumppack.parse.tokenizer import tokenize

__all__ = [
    "ParseError",
    "NoOpeningBracketError",
    "MalformedInputError",
    "ParseOptions",
    "DEFAULT_PARSE_OPTIONS",
    "normalize",
    "tokenize",
    "parse",
    "parse_strict",
    "parse_object",
    "parse_item",
    "parse_value",
]
