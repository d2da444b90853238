"""
  Llama Lexer and Parser

Grammar:

    datum  ::=  STRING | NUMBER | SYMBOL | quote | list
    list   ::=  "(" datum* ")"  |  "[" datum* "]"  |  "{" datum* "}"
    quote  ::=  "'" datum

Whitespace and `;` comments are dropped. The parser emits Datum values:

    - strings -> String, unescaped
    - numbers -> Number, keeping the text as written
    - symbols -> Symbol
    - 'x      -> Quote(x)
    - lists   -> List, remembering which delimiter closed them
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from llama import Datum
from llama.types.datum import DELIMITERS, List, Number, Quote, String
from llama.types.errors import LlamaSyntaxError
from llama.types.symbol import Symbol


TOKEN_RE = re.compile(
    r'(?P<string>"(?:[^"\\]|\\.)*")'
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<lbracket>\[)"
    r"|(?P<rbracket>\])"
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})"
    r"|(?P<whitespace>\s+)"
    r"|(?P<number>\d[^;'\s()\[\]{}]*)"
    r"|(?P<symbol>[^;'\d\s()\[\]{}][^;'\s()\[\]{}]*)"
    r"|(?P<quote>')"
    r"|(?P<comment>;[^\n]*(?:\n|$))",
    re.DOTALL,
)

OPENERS = {"lparen": ")", "lbracket": "]", "lbrace": "}"}
CLOSERS = ("rparen", "rbracket", "rbrace")

ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def unescape(token: str) -> str:
    """Strip the quotes from a string token and resolve its escapes."""
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(1)), token[1:-1])


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, whitespace
    and comments included."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise LlamaSyntaxError(
                f"Text from offset {pos} does not form a valid token. "
                f"The text is: {source[pos:pos + 20]!r}"
            )
        yield m.lastgroup, m.group()
        pos = m.end()


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.tokens = (t for t in token_iter if t[0] not in ("whitespace", "comment"))
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[Datum]:
        """Parse one datum, or return None at the end of input."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None

        if tok_type == "string":
            return String(unescape(tok_val))

        if tok_type == "number":
            return Number(tok_val)

        if tok_type == "symbol":
            return Symbol(tok_val)

        if tok_type == "quote":
            quoted = self.parse_expr()
            if quoted is None:
                raise LlamaSyntaxError("Reached end of input after a quote (')")
            return Quote(quoted)

        if tok_type in OPENERS:
            return self._parse_list(OPENERS[tok_type])

        raise LlamaSyntaxError(f"Unexpected closing {tok_val!r} without a matching opening {_opener(tok_val)!r}")

    def _parse_list(self, suffix: str) -> List:
        items = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise LlamaSyntaxError(f'Reached end without expected "{suffix}"')
            if tok_type in CLOSERS:
                self.advance()
                if tok_val != suffix:
                    raise LlamaSyntaxError(
                        f'Mismatched grouping tokens. Expected a closing "{suffix}" '
                        f'but found "{tok_val}"'
                    )
                return List(items, suffix)
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[Datum]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def _opener(closer: str) -> str:
    return DELIMITERS[closer]


def parse(source: str) -> Optional[Datum]:
    """Parse the first datum in `source`; None if there is none."""
    return TokenStream(lex(source)).parse_expr()


def parse_all(source: str) -> list[Datum]:
    """Parse every top-level datum in `source`."""
    return list(TokenStream(lex(source)).parse_all())
