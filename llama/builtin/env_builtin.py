"""Builtin procedures for the Llama default environment.

Procedures receive their arguments already evaluated, with splices
flattened, and their result is not evaluated again.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Dict

from llama import Datum
from llama.debug_utils.pprint import sexpr
from llama.types.datum import Number, Procedure, Quote, Splice, String, variant_name
from llama.types.environment import Environment
from llama.types.errors import LlamaArityError, LlamaTypeError
from llama.types.symbol import Symbol


def _unquote(datum: Datum) -> Datum:
    while isinstance(datum, Quote):
        datum = datum.datum
    return datum


def conc(env: Environment, *args: Datum) -> Datum:
    """Concatenate strings, or symbols, into one string or symbol.

    Quotes are stripped first. All arguments must then be strings, or all
    symbols.
    """
    values = [_unquote(arg) for arg in args]
    kinds = sorted({variant_name(value) for value in values})

    if len(kinds) != 1 or kinds[0] not in ("string", "symbol"):
        raise LlamaTypeError(
            "conc expected arguments having the same type (either symbol or string), "
            f"but instead the following {len(kinds)} types were included together: "
            f"{', '.join(kinds) or 'none'}"
        )

    if kinds[0] == "string":
        return String("".join(value.text for value in values))
    return Symbol("".join(value.id for value in values))


def repeat(env: Environment, *args: Datum) -> Datum:
    """(repeat count what) => `count` copies of `what`, spliced."""
    if len(args) != 2:
        raise LlamaArityError(f"repeat takes a count and a value, but was called with {len(args)} arguments")

    count, what = args
    if not isinstance(count, Number):
        raise LlamaTypeError(f"repeat count must be a number, got {sexpr(count)}")
    try:
        value = Decimal(count.text)
    except InvalidOperation:
        raise LlamaTypeError(f"repeat count must be a whole number, got {count.text}") from None
    if not value.is_finite() or value != value.to_integral_value():
        raise LlamaTypeError(f"repeat count must be a whole number, got {count.text}")
    times = int(value)
    if times < 0:
        raise LlamaTypeError(f"repeat count must not be negative, got {count.text}")

    return Splice([what] * times)


def register(bindings: Dict[str, Datum]) -> None:
    """Register builtin procedures in the provided bindings."""
    bindings["conc"] = Procedure(conc)
    bindings["repeat"] = Procedure(repeat)
