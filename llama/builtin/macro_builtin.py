"""Builtin macros for Llama (implemented in Python).

Each is a native procedure `fn(env, *args)` wrapped in a Macro, so it
receives its arguments unevaluated and whatever it returns is evaluated
again at the call site.
"""

from __future__ import annotations

from typing import Dict

from llama import Datum
from llama.debug_utils.pprint import sexpr
from llama.types.datum import ELLIPSIS, List, Macro, Procedure, Splice
from llama.types.environment import Environment
from llama.types.errors import LlamaArityError, LlamaMalformedPattern, LlamaTypeError
from llama.types.procedure import UserProcedure
from llama.types.symbol import Symbol

LET = Symbol("let")


def reposition_ellipses(datum: Datum) -> Datum:
    """
    Return a copy of the template `datum` in which every trailing
    `<etc> ...` has been replaced by `(... <etc>)`.

    Patterns keep "..." at the end of a list, where the matcher looks for it.
    In a body, "..." is the ellipsis macro, which needs to be in head
    position. Several "..." in a row nest: `x ... ...` => `(... (... x))`.
    """
    if not isinstance(datum, List) or not datum.items:
        return datum

    if datum.items[0] == ELLIPSIS:
        raise LlamaMalformedPattern(
            f'"..." cannot appear first in a procedure body (template): {sexpr(datum)}'
        )

    result: list[Datum] = []
    depth = 0
    for item in reversed(datum.items):
        if item == ELLIPSIS:
            depth += 1
            continue
        wrapped = reposition_ellipses(item)
        for _ in range(depth):
            wrapped = List([ELLIPSIS, wrapped])
        depth = 0
        result.append(wrapped)

    result.reverse()
    return datum.with_items(result)


def let_macro(env: Environment, *args: Datum) -> Datum:
    """
    (let ([name value] ...) body...)
    (let ([(name params...) template] ...) body...)

    No bindings      => body, spliced
    Several bindings => (let (first) (let (rest...) body...))
    One binding      => ((lambda (name) body...) value), where for the
                        procedure form the value is a procedure with pattern
                        (params...) and body `template`.
    """
    if not args:
        raise LlamaArityError("let requires a list of bindings")

    bindings, body = args[0], args[1:]
    if not isinstance(bindings, List):
        raise LlamaTypeError(f"let bindings must be a list, got {sexpr(bindings)}")

    if not bindings.items:
        return Splice(body)

    if len(bindings) > 1:
        first, *rest = bindings.items
        return List([LET, List([first]), List([LET, List(rest), *body])])

    binding = bindings.items[0]
    if not isinstance(binding, List) or len(binding) != 2:
        raise LlamaTypeError(
            f"let binding must be a list of a pattern and a value, got {sexpr(binding)}"
        )
    pattern, template = binding.items

    if isinstance(pattern, Symbol):
        arg_symbol, arg_value = pattern, template
    elif isinstance(pattern, List) and pattern.items and isinstance(pattern.items[0], Symbol):
        arg_symbol = pattern.items[0]
        arg_value = Procedure(
            UserProcedure(List(pattern.items[1:]), reposition_ellipses(template))
        )
    else:
        raise LlamaTypeError(
            "let binding pattern must be a name or a list starting with a name, "
            f"got {sexpr(pattern)}"
        )

    # A single body form is used as is; several are spliced in place.
    body_form = body[0] if len(body) == 1 else Splice(body)
    return List([Procedure(UserProcedure(List([arg_symbol]), body_form)), arg_value])


def local_bindings_referenced(
    env: Environment, datum: Datum, result: Dict[str, Datum] | None = None
) -> Dict[str, Datum]:
    """Names in `datum` bound in the innermost frame of `env`, in order of
    first appearance, mapped to their values. Quoted data is not searched."""
    if result is None:
        result = {}

    if isinstance(datum, Symbol):
        value = env.local(datum)
        if value is not None and datum.id not in result:
            result[datum.id] = value
    elif isinstance(datum, (List, Splice)):
        for item in datum.items:
            local_bindings_referenced(env, item, result)
    return result


def transpose(columns: Dict[str, tuple]) -> list[Dict[str, Datum]]:
    """`{a: (a1, a2), b: (b1, b2, b3)}` => `[{a: a1, b: b1}, {a: a2, b: b2}]`.

    Rows stop at the shortest column; no columns means no rows.
    """
    if not columns:
        return []
    length = min(len(values) for values in columns.values())
    return [{name: values[i] for name, values in columns.items()} for i in range(length)]


def ellipsis_macro(env: Environment, *args: Datum) -> Datum:
    """
    (... form)

    Repeats `form` once per element of the lists bound to the names it
    mentions, so that with a bound to (a1 a2) and b bound to (b1 b2)

        (... (a b))

    becomes

        (let ([a a1] [b b1]) (a b))
        (let ([a a2] [b b2]) (a b))

    spliced in place. Only the innermost frame of the call site is searched,
    i.e. the bindings of the procedure whose body contains the "...", so
    list-valued names further out are left alone.
    """
    if len(args) != 1:
        raise LlamaArityError(
            'The "..." macro takes exactly one argument, but was called with '
            f"{len(args)}: {sexpr(list(args))}."
        )

    form = args[0]
    columns: Dict[str, tuple] = {}
    for name, value in local_bindings_referenced(env, form).items():
        if not isinstance(value, List):
            raise LlamaTypeError(
                'When used in a context with "...", a variable must be bound to a '
                f"list, but {name} is bound to {sexpr(value)}."
            )
        columns[name] = value.items

    return Splice(
        List([
            LET,
            List([List([Symbol(name), value]) for name, value in row.items()]),
            form,
        ])
        for row in transpose(columns)
    )


def comment_macro(env: Environment, *args: Datum) -> Datum:
    """(comment anything...) => nothing at all."""
    return Splice()


def register(bindings: Dict[str, Datum]) -> None:
    """Register builtin macros in the provided bindings."""
    bindings["let"] = Macro(let_macro)
    bindings["..."] = Macro(ellipsis_macro)
    bindings["comment"] = Macro(comment_macro)
