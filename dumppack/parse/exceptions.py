"""Dump parser exceptions."""


class ParseError(Exception):
    """Base class for dump parse errors."""


class NoOpeningBracketError(ParseError):
    """Input has no `[` and therefore no structure to extract."""


class MalformedInputError(ParseError):
    """Strict mode detected unbalanced brackets."""
