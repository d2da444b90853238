"""User-defined procedure representation for Llama."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from llama import Datum
from llama.types.datum import List
from llama.types.errors import LlamaAssertionFailure

if TYPE_CHECKING:
    from llama.types.environment import Environment


class UserProcedure:
    """A procedure written in Llama: a parameter pattern, a body template and,
    optionally, the environment it closes over.

    With `env` set, free identifiers in the body resolve where the procedure
    was created. With `env` left as None they resolve at the call site, which
    is how macro-style and `let`-synthesized procedures see their caller.
    """

    __slots__ = ("pattern", "body", "env")

    def __init__(self, pattern: List, body: Datum, env: Environment | None = None):
        if not isinstance(pattern, List):
            raise LlamaAssertionFailure(f"Procedure pattern must be a list, got {pattern!r}")
        self.pattern: List = pattern
        self.body: Datum = body
        self.env: Environment | None = env

    def __str__(self) -> str:
        from llama.debug_utils.pprint import sexpr
        with StringIO() as buffer:
            buffer.write("(lambda ")
            buffer.write(sexpr(self.pattern))
            buffer.write(" ")
            buffer.write(sexpr(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
