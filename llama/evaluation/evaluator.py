"""Core evaluator for the Llama macro language.

Evaluation rules, by variant:

- String, Number, Quote, Macro and Procedure evaluate to themselves.
- A Symbol evaluates to its binding. Unbound symbols are not an error: they
  evaluate to themselves, quoted, so templates can emit tag and attribute
  names freely.
- An empty List or Splice evaluates to itself.
- Otherwise the first item is evaluated, and
    * a Macro is applied to the remaining items unevaluated, and what it
      returns is evaluated again;
    * a Procedure is applied to the remaining items evaluated, with splices
      flattened, and what it returns is the result;
    * anything else is kept as the head of a new container of the same kind
      holding the evaluated, flattened remaining items.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from llama import Datum
from llama.config import get_max_depth
from llama.debug_utils.pprint import sexpr
from llama.evaluation.apply import apply
from llama.types.datum import List, Macro, Number, Procedure, Quote, Splice, String
from llama.types.environment import Environment
from llama.types.errors import LlamaAssertionFailure, LlamaRecursionError
from llama.types.symbol import Symbol

logger = logging.getLogger(__name__)

FROM_CONFIG = object()


def flatten_splices(items: Iterable[Datum]) -> list[Datum]:
    """Inline the contents of every Splice in `items`, one level deep."""
    result: list[Datum] = []
    for item in items:
        if isinstance(item, Splice):
            result.extend(item.items)
        else:
            result.append(item)
    return result


def evaluate(datum: Datum, env: Environment, max_depth=FROM_CONFIG) -> Datum:
    """
    Evaluate `datum` in `env`.

    `max_depth` bounds the nesting of evaluation steps; by default it comes
    from LLAMA_MAX_DEPTH, and None means unbounded.
    """
    if max_depth is FROM_CONFIG:
        max_depth = get_max_depth()
    return evaluate0(datum, env, 0, max_depth)


def evaluate0(
    datum: Datum,
    env: Environment,
    depth: int = 0,
    max_depth: Optional[int] = None,
) -> Datum:
    """Single evaluation step, recursing through sub-forms."""
    if max_depth is not None and depth > max_depth:
        raise LlamaRecursionError(
            f"Evaluation exceeded the maximum depth of {max_depth} while evaluating {sexpr(datum)}"
        )

    match datum:
        case String() | Number() | Quote() | Macro() | Procedure():
            return datum

        case Symbol():
            value = env.lookup(datum)
            if value is None:
                return Quote(datum)
            return value

        case List() | Splice():
            if not datum.items:
                return datum

            def recur(item: Datum) -> Datum:
                return evaluate0(item, env, depth + 1, max_depth)

            first = recur(datum.items[0])
            rest = datum.items[1:]

            if isinstance(first, Macro):
                expansion = apply(first.procedure, rest, env, evaluate0, depth, max_depth)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("expanded %s => %s", sexpr(datum), sexpr(expansion))
                return recur(expansion)

            if isinstance(first, Procedure):
                args = flatten_splices(recur(arg) for arg in rest)
                return apply(first.procedure, args, env, evaluate0, depth, max_depth)

            return datum.with_items(flatten_splices([first, *(recur(arg) for arg in rest)]))

        case _:
            raise LlamaAssertionFailure(
                f"Object must have exactly one active Datum variant, got {datum!r}"
            )
