from __future__ import annotations

from typing import Dict, Iterable

from llama import Datum
from llama.types.datum import ELLIPSIS, List, Number, Quote, String, variant_name
from llama.types.errors import LlamaMalformedPattern, LlamaPatternMismatch
from llama.types.symbol import Symbol
from llama.debug_utils.pprint import sexpr

Bindings = Dict[str, Datum]


def check_ellipsis(pattern_items: tuple) -> bool:
    """Return whether a pattern list ends in "...".

    Only `pattern_items` itself is checked, not its elements. "..." anywhere
    but the last position, or "..." with nothing before it, is malformed.
    """
    if not pattern_items:
        return False

    if any(item == ELLIPSIS for item in pattern_items[:-1]):
        raise LlamaMalformedPattern(
            'Improper use of "..." in pattern. "..." must appear only at the end '
            f"of a list, but here it appears elsewhere: {sexpr(list(pattern_items))}"
        )

    if pattern_items[-1] != ELLIPSIS:
        return False

    if len(pattern_items) == 1:
        raise LlamaMalformedPattern(
            '"..." must follow the sub-pattern it repeats, but the pattern is just (...)'
        )
    return True


def pattern_names(pattern: Datum) -> list[str]:
    """Names a pattern binds, in order of first appearance."""
    if isinstance(pattern, Symbol):
        return [] if pattern == ELLIPSIS else [pattern.id]
    if not isinstance(pattern, List):
        return []
    names: list[str] = []
    for item in pattern.items:
        for name in pattern_names(item):
            if name not in names:
                names.append(name)
    return names


def bindings_from_match(
    pattern: Datum, subject: Datum, bindings: Bindings | None = None
) -> Bindings:
    """
    Insert into `bindings` the variable bindings deduced by matching `subject`
    against `pattern`, and return `bindings`.

    - String, Number and Quote patterns are literals: the subject must be
      structurally equal to them.
    - A Symbol pattern binds its name to the subject, whatever it is.
    - A List pattern needs a List subject of the same length, matched
      position by position. When two positions bind the same name the later
      one wins.
    - A List pattern ending in `<sub-pattern> ...` matches "zero or more of"
      the sub-pattern. The leading items match as usual; every remaining
      subject item is matched against the sub-pattern on its own, and each
      name bound that way ends up bound to a List of the per-item values, in
      subject order. Names in the sub-pattern are bound even when nothing
      repeats, to an empty List, so sibling names stay aligned row by row.
      Every enclosing "..." adds one level of List, e.g. the
      pattern

          (foo (bar baz ...) ...)

      given the subject

          (hello (names Bob George) (ages 23 57))

      binds foo to hello, bar to (names ages) and baz to
      ((Bob George) (23 57)).
    """
    if bindings is None:
        bindings = {}

    if isinstance(pattern, (String, Number, Quote)):
        if pattern != subject:
            raise LlamaPatternMismatch(
                f"The value {sexpr(subject)} does not match the literal pattern {sexpr(pattern)}."
            )
        return bindings

    if isinstance(pattern, Symbol):
        bindings[pattern.id] = subject
        return bindings

    if not isinstance(pattern, List):
        raise LlamaMalformedPattern(
            f"A pattern cannot contain a {variant_name(pattern)}: {sexpr(pattern)}"
        )

    if not isinstance(subject, List):
        raise LlamaPatternMismatch(
            f"Pattern contains a list {sexpr(pattern)}, but the value is a "
            f"{variant_name(subject)}: {sexpr(subject)}"
        )

    if check_ellipsis(pattern.items):
        fixed = pattern.items[:-2]
        repeated = pattern.items[-2]

        # The part before the repeated sub-pattern matches normally.
        bindings_from_match(List(fixed), List(subject.items[: len(fixed)]), bindings)

        # Every name gets a list, even an empty one, so rows stay aligned.
        collected: Dict[str, list] = {name: [] for name in pattern_names(repeated)}
        for item in subject.items[len(fixed):]:
            for name, value in bindings_from_match(repeated, item, {}).items():
                collected[name].append(value)

        for name, values in collected.items():
            bindings[name] = List(values)
        return bindings

    if len(subject) != len(pattern):
        difference = "shorter" if len(subject) < len(pattern) else "longer"
        raise LlamaPatternMismatch(
            f"The value {sexpr(subject)} is {difference} than, and thus doesn't "
            f"match, the pattern {sexpr(pattern)}."
        )

    for pattern_item, subject_item in zip(pattern.items, subject.items):
        bindings_from_match(pattern_item, subject_item, bindings)
    return bindings


def deduce_bindings(pattern: List, args: Iterable[Datum]) -> Bindings:
    """Match an argument list against a procedure's parameter pattern."""
    return bindings_from_match(pattern, List(args))
