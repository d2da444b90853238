"""XML rendering of an evaluated Llama tree.

A node is one of:

    String / Number / Symbol        text
    Element(tag, attributes, children)

After every Quote wrapper is stripped and splices are inlined, a list is
read as an element in one of these shapes:

    (tag ([name value] ...) children...)    tag with attributes
    (tag () children...)                    tag with empty attributes
    (tag children...)                       tag without attributes

The second item is an attribute list only if it is a list whose items are
all two-item lists starting with a symbol. Attribute values may be strings,
numbers, symbols (written as strings) or lists (read as nested elements,
serialized as "{tag name=value, child}").
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Dict, List as TList, Union

from llama import Datum
from llama.debug_utils.pprint import sexpr
from llama.evaluation.evaluator import flatten_splices
from llama.types.datum import List, Number, Quote, Splice, String, variant_name
from llama.types.errors import LlamaRenderError
from llama.types.symbol import Symbol


@dataclass
class Element:
    tag: str
    attributes: Dict[str, "Node"] = field(default_factory=dict)
    children: TList["Node"] = field(default_factory=list)


Node = Union[String, Number, Symbol, Element]

XML_ESCAPES = {
    '"': "&quot;",
    "'": "&apos;",
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
}

_ESCAPE_RE = re.compile(r"[\"'<>&]")
_NUMBER_LIKE_RE = re.compile(r"^[.\-+\d]")


def strip_quote(tree: Datum) -> Datum:
    """Remove every Quote wrapper, at any depth."""
    if isinstance(tree, Quote):
        return strip_quote(tree.datum)
    if isinstance(tree, (List, Splice)):
        return tree.with_items(strip_quote(item) for item in tree.items)
    return tree


def _looks_like_attribute_list(datum: Datum) -> bool:
    return isinstance(datum, List) and all(
        isinstance(item, List) and len(item) == 2 and isinstance(item.items[0], Symbol)
        for item in datum.items
    )


def _parse_attributes(attribute_list: List) -> Dict[str, Node]:
    attributes: Dict[str, Node] = {}
    for key, value in attribute_list.items:
        name = key.id
        if name in attributes:
            raise LlamaRenderError(f"Duplicate attribute {json.dumps(name)}.")
        if isinstance(value, (String, Number)):
            attributes[name] = value
        elif isinstance(value, Symbol):
            attributes[name] = String(value.id)
        elif isinstance(value, List):
            attributes[name] = _to_node_no_quote(value)
        else:
            raise LlamaRenderError(
                f"Attribute {json.dumps(name)} cannot have a {variant_name(value)} value: {sexpr(value)}"
            )
    return attributes


def _to_node_no_quote(tree: Datum) -> Node:
    if isinstance(tree, (String, Number, Symbol)):
        return tree

    if not isinstance(tree, List):
        raise LlamaRenderError(
            f"XML node cannot have type {json.dumps(variant_name(tree))}. It must be "
            "of type string, number, or list. Tag names and attributes may contain "
            "symbols, but the nodes themselves cannot be."
        )

    items = flatten_splices(tree.items)
    if not items or not isinstance(items[0], Symbol):
        first = sexpr(items[0]) if items else "nothing"
        raise LlamaRenderError(
            f"{first} is invalid for use as a tag name. Tag names must be nonempty symbols."
        )

    tag, rest = items[0].id, items[1:]
    if rest and _looks_like_attribute_list(rest[0]):
        return Element(tag, _parse_attributes(rest[0]), [_to_node_no_quote(c) for c in rest[1:]])
    return Element(tag, {}, [_to_node_no_quote(c) for c in rest])


def to_node(tree: Datum) -> Node:
    """Interpret an evaluated tree as an XML node.

    A top-level splice must hold exactly one node once flattened.
    """
    tree = strip_quote(tree)
    if isinstance(tree, Splice):
        roots = flatten_splices(tree.items)
        if len(roots) != 1:
            raise LlamaRenderError(
                f"An XML document needs exactly one root node, but found {len(roots)}: {sexpr(tree)}"
            )
        return to_node(roots[0])
    return _to_node_no_quote(tree)


def escape_xml(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: XML_ESCAPES[m.group()], text)


def _text(node: Node) -> str:
    return node.id if isinstance(node, Symbol) else node.text


def to_attribute_value(node: Node) -> str:
    if isinstance(node, Number):
        return node.text

    if isinstance(node, (String, Symbol)):
        value = _text(node)
        # Strings that begin the way a number could are escaped with a backtick.
        if _NUMBER_LIKE_RE.match(value):
            return "`" + value
        return value

    args = [f"{name}={to_attribute_value(value)}" for name, value in node.attributes.items()]
    args.extend(to_attribute_value(child) for child in node.children)
    return f"{{{node.tag} {', '.join(args)}}}"


def to_xml(node: Node) -> str:
    """Serialize a node as XML text."""
    if isinstance(node, (String, Number, Symbol)):
        return escape_xml(_text(node))

    attrs = [
        f"{name}={json.dumps(escape_xml(to_attribute_value(value)), ensure_ascii=False)}"
        for name, value in node.attributes.items()
    ]
    tag_and_attrs = " ".join([node.tag, *attrs])

    if not node.children:
        return f"<{tag_and_attrs}/>"

    kids = "".join(to_xml(child) for child in node.children)
    return f"<{tag_and_attrs}>{kids}</{node.tag}>"
