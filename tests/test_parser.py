from pathlib import Path
import time

import pytest

from dumppack.core.values import NULL, Bool, List, Number, Object, String, to_python
from dumppack.parse import (
    MalformedInputError,
    NoOpeningBracketError,
    ParseError,
    ParseOptions,
    normalize,
    parse,
    parse_item,
    parse_strict,
    parse_value,
)

DUMPS_DIR = Path(__file__).resolve().parents[1] / "examples" / "dumps"


def test_normalize_rewrites_null_and_class_prefix() -> None:
    text = "Person[addr=com.example.Address[city=<null>]]"

    assert normalize(text) == "Person[addr=[city=null]]"


def test_parse_flat_record() -> None:
    parsed = parse("Foo[a=1, b=hello, c=true, d=false, e=null]")

    assert parsed == Object(
        {
            "a": Number(1.0),
            "b": String("hello"),
            "c": Bool(True),
            "d": Bool(False),
            "e": NULL,
        }
    )


def test_parse_null_token_becomes_null() -> None:
    assert parse("Foo[name=<null>]")["name"] == NULL


def test_parse_nested_keyed_record() -> None:
    parsed = parse("Foo[addr=Addr[city=NYC, zip=10001]]")

    assert to_python(parsed) == {"addr": {"city": "NYC", "zip": 10001}}
    assert parsed["addr"] == Object({"city": String("NYC"), "zip": Number(10001.0)})


def test_parse_list_of_scalars() -> None:
    parsed = parse("Foo[tags=[a, b, c]]")

    assert parsed["tags"] == List((String("a"), String("b"), String("c")))


def test_parse_nested_scope_with_inner_commas() -> None:
    parsed = parse("Foo[a=1, b=[x=2, y=3], c=4]")

    assert to_python(parsed) == {"a": 1, "b": {"x": 2, "y": 3}, "c": 4}


def test_parse_list_of_class_prefixed_records() -> None:
    parsed = parse("Order[items=[Item[sku=A1, qty=2], Item[sku=B7, qty=1]]]")

    assert to_python(parsed) == {
        "items": [{"sku": "A1", "qty": 2}, {"sku": "B7", "qty": 1}],
    }


def test_parse_list_element_may_be_single_key_record() -> None:
    parsed = parse("Foo[values=[a, b=[c=1]]]")

    assert parsed["values"] == List(
        (
            String("a"),
            Object({"b": Object({"c": Number(1.0)})}),
        )
    )


def test_parse_empty_label_is_empty_object() -> None:
    assert parse("Label[]") == Object()


def test_parse_empty_nested_scope_is_empty_object() -> None:
    assert parse("Foo[addr=Addr[]]")["addr"] == Object()


def test_parse_value_splits_only_on_first_equals() -> None:
    parsed = parse("Foo[query=a=b=c]")

    assert parsed["query"] == String("a=b=c")


def test_parse_last_duplicate_key_wins() -> None:
    parsed = parse("Foo[a=1, a=2]")

    assert parsed["a"] == Number(2.0)


def test_parse_drops_bare_tokens_at_record_scope() -> None:
    parsed = parse("Foo[a=1, stray, 42]")

    assert parsed == Object({"a": Number(1.0)})


def test_parse_collects_bare_tokens_when_key_configured() -> None:
    parsed = parse(
        "Foo[a=1, stray, 42]",
        options=ParseOptions(bare_entries_key="_entries"),
    )

    assert parsed["_entries"] == List((String("stray"), Number(42.0)))
    assert parsed["a"] == Number(1.0)


def test_parse_numeric_coercion_before_string_fallback() -> None:
    parsed = parse("Foo[a=-3.5, b=1e3, c=007, d=12abc, e=.5]")

    assert parsed["a"] == Number(-3.5)
    assert parsed["b"] == Number(1000.0)
    assert parsed["c"] == Number(7.0)
    assert parsed["d"] == String("12abc")
    assert parsed["e"] == Number(0.5)


def test_parse_value_keeps_text_verbatim() -> None:
    assert parse_value("a@x.com") == String("a@x.com")
    assert parse_value("  two words  ") == String("two words")
    assert parse_value("nan") == String("nan")


def test_parse_value_empty_list() -> None:
    assert parse_value("[]") == List()


def test_parse_item_unkeyed_returns_bare_value() -> None:
    assert parse_item("42") == Number(42.0)
    assert parse_item("k=v") == Object({"k": String("v")})


def test_parse_ignores_surrounding_whitespace() -> None:
    assert parse("  Foo[a=1]\n") == Object({"a": Number(1.0)})


def test_parse_without_bracket_raises() -> None:
    with pytest.raises(NoOpeningBracketError):
        parse("just some text")


def test_no_opening_bracket_is_a_parse_error() -> None:
    assert issubclass(NoOpeningBracketError, ParseError)
    assert issubclass(MalformedInputError, ParseError)


def test_parse_permissive_tolerates_unbalanced_brackets() -> None:
    parsed = parse("Foo[a=1, b=[x=2, c=3]")

    assert isinstance(parsed, Object)
    assert parsed["a"] == Number(1.0)


def test_parse_strict_rejects_unbalanced_brackets() -> None:
    with pytest.raises(MalformedInputError):
        parse_strict("Foo[a=1, b=[x=2, c=3]")


def test_parse_strict_rejects_trailing_text() -> None:
    with pytest.raises(MalformedInputError):
        parse_strict("Foo[a=1] extra]")


def test_parse_strict_accepts_well_formed_input() -> None:
    text = "Person[name=Alice, address=Address[city=NYC, zip=<null>], tags=[a, b]]"

    assert parse_strict(text) == parse(text)


def test_parse_order_example_dump() -> None:
    parsed = parse((DUMPS_DIR / "order.txt").read_text(encoding="utf-8"))

    assert to_python(parsed) == {
        "id": 1001,
        "customer": {"name": "Bob", "vip": False},
        "items": [{"sku": "A1", "qty": 2}, {"sku": "B7", "qty": 1}],
        "tags": ["rush", "gift"],
        "note": None,
    }


def test_parse_long_word_value_stays_linear() -> None:
    blob = "a" * 50_000

    started = time.perf_counter()
    parsed = parse(f"Foo[data={blob}]")
    elapsed = time.perf_counter() - started

    assert parsed["data"] == String(blob)
    assert elapsed < 2.0


def test_normalize_only_strips_prefix_at_word_start() -> None:
    assert normalize("Foo[xkey=pkg.Cls[a=1]]") == "Foo[xkey=[a=1]]"
    assert normalize("Foo[note=a b=Cls[c=1]]") == "Foo[note=a b=[c=1]]"
