from __future__ import annotations

import logging
from typing import Optional

from llama import Datum
from llama.builtin import default_environment
from llama.debug_utils.pprint import sexpr
from llama.evaluation.evaluator import evaluate, FROM_CONFIG
from llama.reader.parser import lex, TokenStream
from llama.render.xml import to_node, to_xml
from llama.types.environment import Environment
from llama.types.errors import LlamaSyntaxError

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads Llama source text, evaluates it against an environment, and
    renders the result. The environment is never modified; to add builtins,
    pass a child of `default_environment`.
    """

    def __init__(self, environment: Environment = default_environment, max_depth=FROM_CONFIG):
        self.env: Environment = environment
        self.max_depth: Optional[int] = max_depth

    def read(self, code: str) -> list[Datum]:
        """Parse every top-level datum in `code`."""
        return list(TokenStream(lex(code)).parse_all())

    def evaluate(self, datum: Datum) -> Datum:
        result = evaluate(datum, self.env, self.max_depth)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s => %s", sexpr(datum), sexpr(result))
        return result

    def eval(self, code: str) -> Datum | list[Datum] | None:
        """Evaluate every top-level datum in `code`. A single result is
        returned bare, several as a list, and None if there were none."""
        results = [self.evaluate(expr) for expr in self.read(code)]
        if not results:
            return None
        if len(results) == 1:
            return results[0]
        return results

    def to_xml(self, code: str) -> str:
        """Evaluate `code`, which must hold exactly one datum, and render the
        result as XML."""
        exprs = self.read(code)
        if len(exprs) != 1:
            raise LlamaSyntaxError(f"Expected exactly one top-level form, found {len(exprs)}")
        return to_xml(to_node(self.evaluate(exprs[0])))
