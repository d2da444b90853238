"""The `json` macro and its helper procedure.

    (let ([word "hello"] [bar "ignored"])
      (json {
          "foo": [1, 2, null, {bar: word}]
      }))

evaluates to the string

    {"foo":[1,2,null,{"bar":"hello"}]}

Bracket flavor matters: `[...]` is an array, `{...}` an object of key/value
pairs, and `(...)` is ordinary evaluation that must not survive into the
result. Numbers are written exactly as they appear in the source.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from llama import Datum
from llama.debug_utils.pprint import sexpr
from llama.types.datum import List, Macro, Number, Procedure, Quote, Splice, String, variant_name
from llama.types.environment import Environment
from llama.types.errors import LlamaArityError, LlamaRenderError
from llama.types.symbol import Symbol

NULL = Symbol("null")
SEPARATORS = (Symbol(":"), Symbol(","))


class RawNumber:
    """A JSON number kept as source text, so no precision is lost."""

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def __eq__(self, other) -> bool:
        return isinstance(other, RawNumber) and self.text == other.text

    def __repr__(self):
        return f"RawNumber({self.text!r})"


def _is_separator(datum: Datum) -> bool:
    if isinstance(datum, Quote):
        datum = datum.datum
    return datum in SEPARATORS


def _strip_trailing_comma(datum: Datum) -> Datum:
    # `1,` and `null,` lex as a single number or symbol.
    if isinstance(datum, Number) and datum.text.endswith(","):
        return Number(datum.text[:-1])
    if isinstance(datum, Symbol) and len(datum.id) > 1 and datum.id.endswith(","):
        return Symbol(datum.id[:-1])
    return datum


def _convert_property_name(datum: Datum) -> Datum:
    if isinstance(datum, Quote):
        return Quote(_convert_property_name(datum.datum))
    if isinstance(datum, Symbol) and len(datum.id) > 1 and datum.id.endswith(":"):
        return String(datum.id[:-1])
    return datum


def remove_separators(datum: Datum) -> Datum:
    """
    Prepare an unevaluated `json` form:

    1. drop `:` and `,` separators (and trailing commas glued to a token);
    2. within objects, turn `name:` symbols into the string "name";
    3. quote bare `null`, so `null` always means null.
    """
    if isinstance(datum, Quote):
        return Quote(remove_separators(datum.datum))
    if isinstance(datum, Splice):
        return Splice(remove_separators(item) for item in datum.items)
    if isinstance(datum, List):
        items = [_strip_trailing_comma(item) for item in datum.items if not _is_separator(item)]
        items = [item for item in items if not _is_separator(item)]
        if datum.delimiter == "}":
            items = [_convert_property_name(item) for item in items]
        return datum.with_items(remove_separators(item) for item in items)

    datum = _strip_trailing_comma(datum)
    if datum == NULL:
        return Quote(datum)
    return datum


def _jsonify_object(datum: List) -> Dict[str, Any]:
    if len(datum) % 2:
        raise LlamaRenderError(
            "Since an object is key/value pairs, it must have an even number of "
            f"elements, but found object with {len(datum)} elements: {sexpr(datum)}"
        )

    result: Dict[str, Any] = {}
    items = datum.items
    for key_datum, value_datum in zip(items[::2], items[1::2]):
        key = jsonify(key_datum)
        if isinstance(key, list):
            if len(key) != 1:
                raise LlamaRenderError(
                    "JSON computed property names must contain only one element, "
                    f"but encountered {len(key)}: {sexpr(key_datum)}"
                )
            key = key[0]
        if isinstance(key, RawNumber):
            key = key.text
        elif key is None:
            key = "null"
        elif not isinstance(key, str):
            raise LlamaRenderError(f"JSON property names must be strings, got {sexpr(key_datum)}")
        result[key] = jsonify(value_datum)
    return result


def jsonify(datum: Datum) -> Any:
    """Interpret an evaluated datum as a JSON value (Python side)."""
    match datum:
        case String():
            return datum.text
        case Number():
            return RawNumber(datum.text)
        case Symbol():
            if datum != NULL:
                raise LlamaRenderError(
                    "Symbols (words) are not allowed within JSON, except for null, "
                    f"but encountered: {datum.id}"
                )
            return None
        case Quote():
            return jsonify(datum.datum)
        case List() if datum.delimiter == "]":
            return [jsonify(item) for item in datum.items]
        case List() if datum.delimiter == "}":
            return _jsonify_object(datum)
        case List():
            raise LlamaRenderError(
                f"JSON cannot contain parenthesized lists, but encountered: {sexpr(datum)}"
            )
    raise LlamaRenderError(
        f"A {variant_name(datum)} cannot appear within JSON: {sexpr(datum)}"
    )


def stringify(value: Any) -> str:
    """Like json.dumps(value, separators=(",", ":")), but RawNumber is written
    as its text."""
    if isinstance(value, RawNumber):
        return value.text
    if isinstance(value, dict):
        return "{" + ",".join(json.dumps(k, ensure_ascii=False) + ":" + stringify(v) for k, v in value.items()) + "}"
    if isinstance(value, list):
        return "[" + ",".join(stringify(v) for v in value) + "]"
    return json.dumps(value, ensure_ascii=False)


def jsonify_and_stringify(env: Environment, *args: Datum) -> Datum:
    if len(args) != 1:
        raise LlamaArityError(f"json takes exactly one value, but got {len(args)}: {sexpr(list(args))}")
    return String(stringify(jsonify(args[0])))


def json_macro(env: Environment, *args: Datum) -> Datum:
    """(json form) => (<jsonify-and-stringify> prepared-form)

    The prepared form is evaluated as a procedure argument before it is
    turned into JSON text.
    """
    if len(args) != 1:
        raise LlamaArityError(
            '"json" macro requires exactly one argument, but was called with '
            f"{len(args)}: {sexpr(list(args))}"
        )
    return List([Procedure(jsonify_and_stringify), remove_separators(args[0])])


def register(bindings: Dict[str, Datum]) -> None:
    bindings["json"] = Macro(json_macro)
