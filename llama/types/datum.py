"""The Datum variants.

Every node the reader produces, the evaluator consumes, and the renderers
interpret is exactly one of:

    String(text)        remains verbatim
    Number(text)        remains verbatim; the text as written, never coerced
    Symbol(name)        looked up in the environment; quoted if not found
    Quote(datum)        remains verbatim
    List(items)         evaluate first element, then apply or rebuild
    Splice(items)       like List, but inlined into the enclosing container
    Macro(procedure)    procedure invoked with unevaluated arguments
    Procedure(procedure)

where `procedure` is either a Python callable `fn(env, *args)` (native) or a
UserProcedure. Symbol lives in llama.types.symbol.

Item sequences are stored as tuples; nothing here is mutated after
construction.
"""

from __future__ import annotations

from typing import Iterable

from llama.types.errors import LlamaAssertionFailure
from llama.types.symbol import Symbol

# Reserved "zero or more of" marker in patterns and templates.
ELLIPSIS = Symbol("...")

# Closing delimiters a List may carry. Only renderers care.
DELIMITERS = {")": "(", "]": "[", "}": "{"}


class _Text:
    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.kind, self.text))

    def __repr__(self):
        return f"{type(self).__name__}({self.text!r})"

    def __str__(self):
        from llama.debug_utils.pprint import sexpr
        return sexpr(self)


class String(_Text):
    kind = "string"


class Number(_Text):
    """A number, kept as the text it was written with."""

    kind = "number"

    def __init__(self, text: str | int):
        super().__init__(str(text))


class Quote:
    __slots__ = ("datum",)
    kind = "quote"

    def __init__(self, datum):
        self.datum = datum

    def __eq__(self, other) -> bool:
        return isinstance(other, Quote) and self.datum == other.datum

    def __hash__(self) -> int:
        return hash(("quote", self.datum))

    def __repr__(self):
        return f"Quote({self.datum!r})"

    def __str__(self):
        from llama.debug_utils.pprint import sexpr
        return sexpr(self)


class _Sequence:
    __slots__ = ("items",)

    def __init__(self, items: Iterable = ()):
        self.items: tuple = tuple(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __eq__(self, other) -> bool:
        # The delimiter of a List is presentation only; it does not take part.
        return type(other) is type(self) and self.items == other.items

    def __hash__(self) -> int:
        return hash((self.kind, self.items))

    def __str__(self):
        from llama.debug_utils.pprint import sexpr
        return sexpr(self)


class List(_Sequence):
    __slots__ = ("delimiter",)
    kind = "list"

    def __init__(self, items: Iterable = (), delimiter: str = ")"):
        super().__init__(items)
        if delimiter not in DELIMITERS:
            raise LlamaAssertionFailure(f"Unknown list delimiter {delimiter!r}")
        self.delimiter = delimiter

    def with_items(self, items: Iterable) -> List:
        """A new List holding `items`, keeping this list's delimiter."""
        return List(items, self.delimiter)

    def __repr__(self):
        if self.delimiter == ")":
            return f"List({list(self.items)!r})"
        return f"List({list(self.items)!r}, {self.delimiter!r})"


class Splice(_Sequence):
    kind = "splice"

    def with_items(self, items: Iterable) -> Splice:
        return Splice(items)

    def __repr__(self):
        return f"Splice({list(self.items)!r})"


class _Callable:
    __slots__ = ("procedure",)

    def __init__(self, procedure):
        self.procedure = procedure

    def is_native(self) -> bool:
        from llama.types.procedure import UserProcedure
        return not isinstance(self.procedure, UserProcedure)

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.procedure is other.procedure

    def __hash__(self) -> int:
        return hash((self.kind, id(self.procedure)))

    def __repr__(self):
        return f"{type(self).__name__}({self.procedure!r})"

    def __str__(self):
        from llama.debug_utils.pprint import sexpr
        return sexpr(self)


class Macro(_Callable):
    """A procedure marked macro-style: arguments are passed unevaluated."""

    kind = "macro"


class Procedure(_Callable):
    kind = "procedure"


_VARIANTS = (String, Number, Symbol, Quote, List, Splice, Macro, Procedure)


def variant_name(datum) -> str:
    """Return the name of the active variant of `datum`.

    Anything that is not a Datum is an engine bug, never a user error.
    """
    if isinstance(datum, _VARIANTS):
        return datum.kind
    raise LlamaAssertionFailure(
        f"Object must have exactly one active Datum variant, got {datum!r}"
    )
