"""Depth-aware scope tokenizer for bracketed dumps."""

from __future__ import annotations

from dumppack.parse.exceptions import MalformedInputError


def tokenize(scope: str, *, strict: bool = False) -> list[str]:
    """Split one scope on commas that sit at bracket depth zero.

    Commas inside nested `[...]` stay in the current token, so a nested
    record or list is emitted as a single token. Tokens are whitespace
    trimmed. A blank scope yields no tokens.

    In strict mode a `]` without a matching `[`, or a `[` left open at the
    end of the scope, raises `MalformedInputError`. Otherwise depth is
    tracked as-is and only commas at exactly depth zero split.
    """
    if not scope.strip():
        return []

    tokens: list[str] = []
    buffer: list[str] = []
    depth = 0

    for offset, char in enumerate(scope):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if strict and depth < 0:
                raise MalformedInputError(f"unmatched ']' at offset {offset}: {scope!r}")
        elif char == "," and depth == 0:
            tokens.append("".join(buffer).strip())
            buffer = []
            continue
        buffer.append(char)

    if strict and depth != 0:
        raise MalformedInputError(f"{depth} unclosed '[' in scope: {scope!r}")

    tokens.append("".join(buffer).strip())
    return tokens
