"""Recursive-descent parser for `Label[key=value, ...]` object dumps."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from dumppack.core.values import NULL, Bool, List, Number, Object, String, Value
from dumppack.parse.exceptions import MalformedInputError, NoOpeningBracketError
from dumppack.parse.tokenizer import tokenize

logger = logging.getLogger(__name__)

NULL_TOKEN = "<null>"

# `key=some.pkg.ClassName[` -> `key=[`
_CLASS_PREFIX_RE = re.compile(r"\b(\w+)=[\w.$]+\[")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Parser behavior switches.

    strict: fail with `MalformedInputError` on unbalanced brackets instead of
        extracting whatever is recoverable.
    bare_entries_key: collect unkeyed tokens found at record scope into a
        list under this key. By default they are dropped.
    """

    strict: bool = False
    bare_entries_key: str | None = None


DEFAULT_PARSE_OPTIONS = ParseOptions()


def normalize(text: str) -> str:
    """Rewrite `<null>` to `null` and drop class names before inner brackets."""
    return _CLASS_PREFIX_RE.sub(r"\1=[", text.replace(NULL_TOKEN, "null"))


def parse(text: str, *, options: ParseOptions | None = None) -> Object:
    """Parse a dump such as `Person[name=Alice, age=30]` into an `Object`.

    Everything between the first `[` and the last character is parsed as the
    top-level record. The closing bracket is assumed, not verified, unless
    strict mode is on.
    """
    opts = options or DEFAULT_PARSE_OPTIONS
    normalized = normalize(text.strip())

    start = normalized.find("[")
    if start == -1:
        raise NoOpeningBracketError(f"no opening '[' found in input: {text[:80]!r}")

    if opts.strict:
        _check_top_level_brackets(normalized, start)

    return parse_object(normalized[start + 1 : -1], options=opts)


def parse_strict(text: str) -> Object:
    return parse(text, options=ParseOptions(strict=True))


def parse_object(scope: str, *, options: ParseOptions | None = None) -> Object:
    """Assemble one record scope; later keys overwrite earlier ones."""
    opts = options or DEFAULT_PARSE_OPTIONS
    return _assemble_object(tokenize(scope, strict=opts.strict), opts)


def parse_item(token: str, *, options: ParseOptions | None = None) -> Value:
    """Parse one scope token.

    Keyed tokens yield a single-entry `Object`. Unkeyed tokens yield the bare
    value, which is how list elements are produced.
    """
    opts = options or DEFAULT_PARSE_OPTIONS
    text = token.strip()
    equals = text.find("=")
    bracket = text.find("[")

    if equals != -1 and bracket != -1 and text.endswith("]"):
        body = text[bracket + 1 : -1]
        if equals < bracket:
            key = text[:equals].strip()
            body_tokens = tokenize(body, strict=opts.strict)
            if all(_is_keyed(item) for item in body_tokens):
                return Object({key: _assemble_object(body_tokens, opts)})
            return Object({key: parse_value(text[equals + 1 :], options=opts)})
        # `Item[a=1]` inside a list, or a nested list such as `[x=1]`.
        if text.startswith("["):
            return parse_value(text, options=opts)
        return parse_object(body, options=opts)

    if equals != -1:
        key, _, value_text = text.partition("=")
        return Object({key.strip(): parse_value(value_text, options=opts)})

    return parse_value(text, options=opts)


def parse_value(token: str, *, options: ParseOptions | None = None) -> Value:
    """Reconstruct a right-hand-side value.

    Order: null, booleans, numbers, `[...]` lists, then the raw text.
    """
    opts = options or DEFAULT_PARSE_OPTIONS
    text = token.strip()

    if text == "null":
        return NULL
    if text == "true":
        return Bool(True)
    if text == "false":
        return Bool(False)
    if _NUMBER_RE.fullmatch(text):
        return Number(float(text))
    if text.startswith("[") and text.endswith("]"):
        return List(
            tuple(
                parse_item(item, options=opts)
                for item in tokenize(text[1:-1], strict=opts.strict)
            )
        )
    return String(text)


def _assemble_object(tokens: list[str], opts: ParseOptions) -> Object:
    entries: dict[str, Value] = {}
    bare: list[Value] = []

    for token in tokens:
        item = parse_item(token, options=opts)
        if opts.bare_entries_key is not None and not _is_keyed(token):
            bare.append(item)
            continue
        if isinstance(item, Object):
            entries.update(item.entries)
            continue
        logger.debug("dropping unkeyed token at record scope: %r", token)

    if opts.bare_entries_key is not None and bare:
        entries[opts.bare_entries_key] = List(tuple(bare))
    return Object(entries)


def _is_keyed(token: str) -> bool:
    equals = token.find("=")
    if equals == -1:
        return False
    bracket = token.find("[")
    return bracket == -1 or equals < bracket


def _check_top_level_brackets(text: str, start: int) -> None:
    depth = 0
    for offset in range(start, len(text)):
        char = text[offset]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                if offset != len(text) - 1:
                    raise MalformedInputError(
                        f"unexpected text after closing ']' at offset {offset}"
                    )
                return
    raise MalformedInputError(f"top-level '[' at offset {start} is never closed")
