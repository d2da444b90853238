"""S-expression printer for Llama data, used by diagnostics and error messages."""

import json
from typing import Optional

from llama.types.datum import DELIMITERS, List, Macro, Number, Procedure, Quote, Splice, String
from llama.types.errors import LlamaAssertionFailure
from llama.types.symbol import Symbol

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "indent_width": 2,
}


def _native_name(fn) -> str:
    return getattr(fn, "__name__", type(fn).__name__)


def _callable_sexpr(keyword: str, procedure) -> str:
    from llama.types.procedure import UserProcedure

    if isinstance(procedure, UserProcedure):
        return f"({keyword} {sexpr(procedure.pattern)} {sexpr(procedure.body)})"
    return f"({keyword} #native {_native_name(procedure)})"


def sexpr(datum) -> str:
    """Return the s-expression text of `datum`.

    A plain Python list or tuple prints as if it were a List, which is handy
    for argument lists in diagnostics.
    """
    if isinstance(datum, (list, tuple)):
        return sexpr(List(datum))
    if isinstance(datum, (Symbol,)):
        return datum.id
    if isinstance(datum, Number):
        return datum.text
    if isinstance(datum, String):
        return json.dumps(datum.text, ensure_ascii=False)
    if isinstance(datum, Quote):
        return "'" + sexpr(datum.datum)
    if isinstance(datum, List):
        inner = " ".join(sexpr(item) for item in datum.items)
        return f"{DELIMITERS[datum.delimiter]}{inner}{datum.delimiter}"
    if isinstance(datum, Splice):
        return " ".join(sexpr(item) for item in datum.items)
    if isinstance(datum, Procedure):
        return _callable_sexpr("lambda", datum.procedure)
    if isinstance(datum, Macro):
        return _callable_sexpr("macro", datum.procedure)
    raise LlamaAssertionFailure(f"Unrecognized node type: {datum!r}")


# ----------------- Pretty printer -----------------
def pprint_expr(datum, indent: int = 0, options: Optional[dict] = None) -> str:
    """Like `sexpr`, but lists that do not fit on one line are broken up with
    one item per line. Items after the first are indented one level deeper
    than the list itself."""
    if options is None:
        options = DEFAULT_OPTIONS

    single_line = sexpr(datum)
    width = options.get("indent_width", 2)
    if (
        not isinstance(datum, List)
        or not datum.items
        or len(single_line) + indent * width <= options.get("max_line_length", 80)
    ):
        return single_line

    pad = " " * (width * (indent + 1))
    parts = [pprint_expr(item, indent + 1, options) for item in datum.items]
    lines = [DELIMITERS[datum.delimiter] + parts[0]]
    lines.extend(pad + part for part in parts[1:])
    lines[-1] += datum.delimiter
    return "\n".join(lines)

