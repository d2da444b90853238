"""Application engine for Llama.

Native procedures are Python callables invoked as `fn(env, *args)`. User
procedures have their bindings deduced by matching the arguments against
their pattern, and their body is then evaluated in a new frame holding those
bindings. The new frame's parent is the procedure's definition environment
when it has one, otherwise the caller's environment.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from llama import Datum, EvaluatorFn
from llama.types.bind import deduce_bindings
from llama.types.environment import Environment
from llama.types.procedure import UserProcedure
from llama.types.errors import LlamaAssertionFailure


def apply(
    procedure: UserProcedure | Callable[..., Datum],
    args: Sequence[Datum],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int = 0,
    max_depth: Optional[int] = None,
) -> Datum:
    """Apply either a UserProcedure or a native Python callable to `args`.

    `args` are used as given: the caller decides whether they were evaluated
    (procedure call) or not (macro call).
    """
    if isinstance(procedure, UserProcedure):
        scope = procedure.env if procedure.env is not None else env
        call_env = scope.child(deduce_bindings(procedure.pattern, args))
        return evaluate_fn(procedure.body, call_env, depth + 1, max_depth)
    elif callable(procedure):
        return procedure(env, *args)
    else:
        raise LlamaAssertionFailure(f"Cannot apply non-procedure {procedure!r}")
