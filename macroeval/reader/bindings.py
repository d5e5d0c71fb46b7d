"""Host binding resolution.

Resolves a referencing identifier to the declaration it names by walking
outwards through lexical scopes, and answers the import-identity question
"does this expression denote export `name` of module `source`?".

Handled declarations: imports (default, named, namespace), var/let/const
declarators including destructuring patterns, function and class
declarations, parameters, catch parameters and for-loop heads. `var`
declarations are hoisted to the enclosing function or program.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from tree_sitter import Node

from macroeval.reader.parser import NodePath
from macroeval.reader.tokens import decode_string_parts

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
})

BLOCK_TYPES = frozenset({"program", "statement_block", "class_body", "switch_body"})

LOOP_TYPES = frozenset({"for_statement", "for_in_statement"})

DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


@dataclass(frozen=True)
class Binding:
    name: str
    kind: str  # import | const | let | var | param | function | class | catch
    node: NodePath
    source: Optional[str] = None
    imported: Optional[str] = None


def resolve_binding(identifier: NodePath) -> Optional[Binding]:
    """Return the binding a referencing identifier resolves to, if declared."""
    name = identifier.text
    for scope in identifier.ancestors():
        binding = _declared_in(scope.node, name)
        if binding is not None:
            return binding
    return None


def references_import(path: NodePath, source: str, name: str) -> bool:
    """True if `path` evaluates to export `name` of module `source`.

    Matches a local identifier bound by `import { name } from source` (under
    any local alias) and `ns.name` where `ns` is `import * as ns from source`.
    Shadowed names, other modules and default imports never match.
    """
    if path.type == "identifier":
        binding = resolve_binding(path)
        return (
            binding is not None
            and binding.kind == "import"
            and binding.source == source
            and binding.imported == name
        )
    if path.type == "member_expression" and not path.optional:
        obj = path.get("object")
        prop = path.get("property")
        if obj is None or prop is None or obj.type != "identifier":
            return False
        binding = resolve_binding(obj)
        return (
            binding is not None
            and binding.kind == "import"
            and binding.source == source
            and binding.imported == "*"
            and prop.text == name
        )
    return False


# --- scope scanning -----------------------------------------------------------

def _declared_in(scope: Node, name: str) -> Optional[Binding]:
    if scope.type in FUNCTION_TYPES:
        return _function_binding(scope, name)
    if scope.type in BLOCK_TYPES:
        for statement in scope.named_children:
            binding = _statement_binding(statement, name)
            if binding is not None:
                return binding
        if scope.type == "program":
            return _hoisted_var(scope, name)
        return None
    if scope.type in LOOP_TYPES:
        return _loop_binding(scope, name)
    if scope.type == "catch_clause":
        param = scope.child_by_field_name("parameter")
        if param is not None and name in _pattern_names(param):
            return Binding(name, "catch", NodePath(param))
    return None


def _function_binding(fn: Node, name: str) -> Optional[Binding]:
    params = fn.child_by_field_name("parameters")
    if params is not None:
        for param in params.named_children:
            if name in _pattern_names(param):
                return Binding(name, "param", NodePath(param))
    single = fn.child_by_field_name("parameter")
    if single is not None and single.text.decode("utf-8") == name:
        return Binding(name, "param", NodePath(single))
    # A named function expression sees its own name.
    if fn.type in ("function_expression", "function", "generator_function"):
        own = fn.child_by_field_name("name")
        if own is not None and own.text.decode("utf-8") == name:
            return Binding(name, "function", NodePath(fn))
    body = fn.child_by_field_name("body")
    if body is not None and body.type == "statement_block":
        return _hoisted_var(body, name)
    return None


def _statement_binding(statement: Node, name: str) -> Optional[Binding]:
    kind = statement.type
    if kind == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        return _statement_binding(declaration, name) if declaration is not None else None
    if kind == "import_statement":
        return _import_binding(statement, name)
    if kind in DECLARATION_TYPES:
        decl_kind = _declaration_kind(statement)
        if decl_kind == "var":
            # vars are found by the hoisting pass of the enclosing function
            return None
        return _declarator_binding(statement, name, decl_kind)
    if kind in ("function_declaration", "generator_function_declaration", "class_declaration"):
        own = statement.child_by_field_name("name")
        if own is not None and own.text.decode("utf-8") == name:
            return Binding(name, "class" if kind == "class_declaration" else "function", NodePath(statement))
    return None


def _declaration_kind(declaration: Node) -> str:
    first = declaration.children[0] if declaration.children else None
    return first.type if first is not None else "var"


def _declarator_binding(declaration: Node, name: str, decl_kind: str) -> Optional[Binding]:
    for declarator in declaration.named_children:
        if declarator.type != "variable_declarator":
            continue
        target = declarator.child_by_field_name("name")
        if target is not None and name in _pattern_names(target):
            return Binding(name, decl_kind, NodePath(declarator))
    return None


def _hoisted_var(body: Node, name: str) -> Optional[Binding]:
    for declaration in _var_declarations(body):
        binding = _declarator_binding(declaration, name, "var")
        if binding is not None:
            return binding
    return None


def _var_declarations(node: Node) -> Iterator[Node]:
    for child in node.named_children:
        if child.type in FUNCTION_TYPES or child.type == "class_declaration":
            continue
        if child.type == "variable_declaration":
            yield child
        yield from _var_declarations(child)


def _loop_binding(loop: Node, name: str) -> Optional[Binding]:
    if loop.type == "for_statement":
        init = loop.child_by_field_name("initializer")
        if init is not None and init.type == "lexical_declaration":
            return _declarator_binding(init, name, _declaration_kind(init))
        return None
    kind = loop.child_by_field_name("kind")
    left = loop.child_by_field_name("left")
    if kind is not None and kind.type in ("let", "const") and left is not None:
        if name in _pattern_names(left):
            return Binding(name, kind.type, NodePath(loop))
    return None


def _import_binding(statement: Node, name: str) -> Optional[Binding]:
    source_node = statement.child_by_field_name("source")
    if source_node is None:
        return None
    source = string_value(source_node)
    for clause in statement.named_children:
        if clause.type != "import_clause":
            continue
        for part in clause.named_children:
            if part.type == "identifier" and part.text.decode("utf-8") == name:
                return Binding(name, "import", NodePath(part), source, "default")
            if part.type == "namespace_import":
                local = _first_of_type(part, "identifier")
                if local is not None and local.text.decode("utf-8") == name:
                    return Binding(name, "import", NodePath(part), source, "*")
            if part.type == "named_imports":
                for spec in part.named_children:
                    if spec.type != "import_specifier":
                        continue
                    imported = spec.child_by_field_name("name")
                    alias = spec.child_by_field_name("alias")
                    local = alias if alias is not None else imported
                    if local is not None and local.text.decode("utf-8") == name:
                        return Binding(name, "import", NodePath(spec), source, _export_name(imported))
    return None


def _export_name(node: Node) -> str:
    if node.type == "string":
        return string_value(node)
    return node.text.decode("utf-8")


def _first_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def _pattern_names(pattern: Node) -> set[str]:
    """Names bound by a binding pattern (identifier or destructuring)."""
    t = pattern.type
    if t in ("identifier", "shorthand_property_identifier_pattern"):
        return {pattern.text.decode("utf-8")}
    if t == "assignment_pattern" or t == "object_assignment_pattern":
        left = pattern.child_by_field_name("left")
        return _pattern_names(left) if left is not None else set()
    if t == "pair_pattern":
        value = pattern.child_by_field_name("value")
        return _pattern_names(value) if value is not None else set()
    if t in ("object_pattern", "array_pattern", "rest_pattern"):
        names: set[str] = set()
        for child in pattern.named_children:
            names |= _pattern_names(child)
        return names
    return set()


def string_value(node: Node) -> str:
    """Decoded value of a string literal node."""
    return decode_string_parts((child.type, child.text.decode("utf-8")) for child in node.named_children)
