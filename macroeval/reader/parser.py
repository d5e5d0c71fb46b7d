"""
  Host AST layer

Parses JavaScript with tree-sitter and wraps nodes in NodePath handles.

A NodePath is the evaluator's only view of the tree:

    - kind         -> closed NodeKind tag the evaluator dispatches on
    - get(slot)    -> named sub-slot; single slots give a NodePath (or None),
                      list slots give a list of NodePaths
    - parent, walk -> navigation
    - text         -> source text of the node

Slot names follow the usual ESTree vocabulary (callee, test, consequent, ...)
and are mapped onto tree-sitter-javascript field names here, so the
evaluator never sees grammar details.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, TypeVar

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from macroeval.errors import MacroStructureError, MacroSyntaxError

JS_LANGUAGE = Language(tree_sitter_javascript.language())


class NodeKind(Enum):
    MEMBER = "member"
    OPTIONAL_MEMBER = "optional-member"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    TEMPLATE = "template"
    OBJECT = "object"
    ARRAY = "array"
    ASSIGNMENT = "assignment"
    CALL = "call"
    BINARY = "binary"
    CONDITIONAL = "conditional"
    UNARY = "unary"
    IDENTIFIER = "identifier"
    PROPERTY_NAME = "property-name"
    PARENTHESIZED = "parenthesized"
    OTHER = "other"


NODE_KINDS: dict[str, NodeKind] = {
    "member_expression": NodeKind.MEMBER,
    "subscript_expression": NodeKind.MEMBER,
    "string": NodeKind.STRING,
    "number": NodeKind.NUMBER,
    "true": NodeKind.BOOLEAN,
    "false": NodeKind.BOOLEAN,
    "null": NodeKind.NULL,
    "undefined": NodeKind.UNDEFINED,
    "template_string": NodeKind.TEMPLATE,
    "object": NodeKind.OBJECT,
    "array": NodeKind.ARRAY,
    "assignment_expression": NodeKind.ASSIGNMENT,
    "call_expression": NodeKind.CALL,
    "binary_expression": NodeKind.BINARY,
    "ternary_expression": NodeKind.CONDITIONAL,
    "unary_expression": NodeKind.UNARY,
    "identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.PROPERTY_NAME,
    "parenthesized_expression": NodeKind.PARENTHESIZED,
    "computed_property_name": NodeKind.PARENTHESIZED,
}

# ESTree slot name -> tree-sitter field name, where they differ.
SLOT_FIELDS: dict[str, str] = {
    "callee": "function",
    "test": "condition",
    "consequent": "consequence",
    "alternate": "alternative",
}

LIST_SLOTS = frozenset({"arguments", "properties", "elements", "body"})

# Node types that continue an optional chain through their `object`/`function`.
_CHAIN_TYPES = frozenset({"member_expression", "subscript_expression", "call_expression"})


class NodePath:
    """Handle on one syntax node. Equal handles denote the same occurrence."""

    __slots__ = ("node",)

    def __init__(self, node: Node):
        self.node = node

    # --- identity -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NodePath) and self.node == other.node

    def __hash__(self) -> int:
        return hash((self.node.id, self.node.start_byte, self.node.end_byte))

    def __repr__(self) -> str:
        return f"NodePath({self.type}, {self.text!r})"

    # --- basic facts --------------------------------------------------------

    @property
    def type(self) -> str:
        return self.node.type

    @property
    def kind(self) -> NodeKind:
        kind = NODE_KINDS.get(self.node.type, NodeKind.OTHER)
        if kind is NodeKind.MEMBER and self.in_optional_chain:
            return NodeKind.OPTIONAL_MEMBER
        return kind

    @property
    def text(self) -> str:
        return self.node.text.decode("utf-8")

    @property
    def start_byte(self) -> int:
        return self.node.start_byte

    @property
    def end_byte(self) -> int:
        return self.node.end_byte

    @property
    def parent(self) -> Optional[NodePath]:
        parent = self.node.parent
        return NodePath(parent) if parent is not None else None

    @property
    def computed(self) -> bool:
        """True for `a[b]`, false for `a.b`."""
        return self.node.type == "subscript_expression"

    @property
    def optional(self) -> bool:
        """True when this node itself carries `?.`."""
        return any(child.type == "optional_chain" for child in self.node.children)

    @property
    def in_optional_chain(self) -> bool:
        """True when this node or any link below it in the chain carries `?.`."""
        node: Node | None = self.node
        while node is not None and node.type in _CHAIN_TYPES:
            if any(child.type == "optional_chain" for child in node.children):
                return True
            field = "function" if node.type == "call_expression" else "object"
            node = node.child_by_field_name(field)
        return False

    @property
    def operator(self) -> Optional[str]:
        op = self.node.child_by_field_name("operator")
        return op.type if op is not None else None

    # --- navigation ---------------------------------------------------------

    def get(self, slot: str) -> NodePath | list[NodePath] | None:
        """Return the node(s) in the named slot.

        List slots (arguments, properties, elements, body) always give a list;
        every other slot gives a single NodePath or None when empty.
        """
        if slot in LIST_SLOTS:
            return self._list_slot(slot)
        if slot == "expression":
            inner = _named(self.node)
            return NodePath(inner[0]) if inner else None
        field = SLOT_FIELDS.get(slot, slot)
        if slot == "property" and self.node.type == "subscript_expression":
            field = "index"
        child = self.node.child_by_field_name(field)
        return NodePath(child) if child is not None else None

    def _list_slot(self, slot: str) -> list[NodePath]:
        if slot == "arguments":
            args = self.node.child_by_field_name("arguments")
            if args is None or args.type != "arguments":
                return []
            return [NodePath(n) for n in _named(args)]
        if slot == "properties" and self.node.type != "object":
            return []
        if slot == "elements" and self.node.type != "array":
            return []
        return [NodePath(n) for n in _named(self.node)]

    def named_children(self) -> list[NodePath]:
        return [NodePath(n) for n in _named(self.node)]

    def walk(self) -> Iterator[NodePath]:
        """Yield this node and every named descendant, pre-order."""
        stack = [self.node]
        while stack:
            node = stack.pop()
            yield NodePath(node)
            stack.extend(reversed(node.named_children))

    def ancestors(self) -> Iterator[NodePath]:
        node = self.node.parent
        while node is not None:
            yield NodePath(node)
            node = node.parent

    def has_holes(self) -> bool:
        """True for array literals with elided elements, e.g. `[1, , 2]`."""
        if self.node.type != "array":
            return False
        expecting_element = True
        for child in self.node.children:
            if child.type == ",":
                if expecting_element:
                    return True
                expecting_element = True
            elif child.type in ("[", "]", "comment"):
                continue
            else:
                expecting_element = False
        return False


def _named(node: Node) -> list[Node]:
    return [n for n in node.named_children if n.type != "comment"]


# these next two functions are here because slot lookups are typed as
# "node or list of nodes", and callers know which one they asked for.
T = TypeVar("T")


def assert_not_array(value: T | list[T]) -> T:
    if isinstance(value, list):
        raise MacroStructureError("bug: not supposed to be an array")
    return value


def assert_array(value: T | list[T]) -> list[T]:
    if not isinstance(value, list):
        raise MacroStructureError("bug: supposed to be an array")
    return value


# --- parsing ------------------------------------------------------------------

def parse_tree(source: str) -> Tree:
    parser = Parser(JS_LANGUAGE)
    tree = parser.parse(source.encode("utf-8"))
    if tree.root_node.has_error:
        raise MacroSyntaxError(f"Cannot parse JavaScript source: {_first_error(tree.root_node)}")
    return tree


def _first_error(node: Node) -> str:
    for path in NodePath(node).walk():
        if path.node.is_missing or path.type == "ERROR":
            point = path.node.start_point
            return f"line {point[0] + 1}, column {point[1] + 1}"
    return "unknown position"


def parse_program(source: str) -> NodePath:
    """Parse a module and return the `program` node."""
    return NodePath(parse_tree(source).root_node)


def parse_expression(source: str, prelude: str = "") -> NodePath:
    """Parse a single expression, optionally after some module-level prelude.

    The expression is wrapped in parentheses so that object literals are not
    read as blocks; the returned handle is the expression inside them.
    """
    program = parse_program(f"{prelude}\n({source});")
    statement = program.named_children()[-1]
    if statement.type != "expression_statement":
        raise MacroSyntaxError(f"Not an expression: {source!r}")
    wrapper = statement.named_children()[0]
    return assert_not_array(wrapper.get("expression"))
