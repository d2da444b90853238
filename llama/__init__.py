# Core type aliases for Llama's data model.
# Every node, whether produced by the reader, handed to the evaluator or
# returned by it, is one of the Datum variants in llama.types.datum.
#
# Naming guidance:
# - Datum: any node of the tree (source form or evaluated value).
# - EvaluatorFn: the evaluate(datum, env) callable handed to builtins that
#   need to recurse.

from typing import Any, Callable

__version__ = "0.3.0"

# Any of String, Number, Symbol, Quote, List, Splice, Macro, Procedure
Datum = Any

EvaluatorFn = Callable[..., Datum]
