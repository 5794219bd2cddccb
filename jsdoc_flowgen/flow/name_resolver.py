"""
Name Path Resolver

Derives the dotted, fully-qualified name of a documented construct from its
lexical placement:

    function foo(bar) {}                       → foo
    ObjClass.prototype.foo = function(bar) {}  → ObjClass.prototype.foo
    var Color = { RED: 1 }                     → Color
    class Obj { foo(bar) {} }                  → Obj.prototype.foo
    var obj = { key: function(bar) {} }        → obj.key

Resolution walks upward through parents until a rule yields a name. Reaching
the top without one is a hard error.
"""

from tree_sitter import Node as TSNode

from jsdoc_flowgen.common.exceptions import UnresolvableNameError
from jsdoc_flowgen.parsing.ast_tree import AstTree

PROTOTYPE = "prototype"

IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "private_property_identifier",
        "statement_identifier",
    }
)

# Upward walk stops here without contributing a segment
TERMINAL_TYPES = frozenset({"program", "expression_statement"})

DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration", "class_declaration"})


def _join(*segments: str | None) -> str | None:
    parts = [s for s in segments if s]
    return ".".join(parts) if parts else None


def _string_content(ast: AstTree, node: TSNode) -> str:
    return "".join(ast.text(c) for c in node.named_children if c.type == "string_fragment")


class NameResolver:
    """
    Resolves dotted names for construct nodes of one tree.

    Pure function of the node and its ancestor chain.
    """

    def __init__(self, ast: AstTree):
        self._ast = ast

    def resolve(self, node: TSNode) -> str:
        """
        Resolve a construct node to its dotted name.

        Args:
            node: Function, method or enum object-literal node

        Returns:
            Dot-joined name path

        Raises:
            UnresolvableNameError: If no enclosing structure yields a name
        """
        name = self._resolve(node)
        if not name:
            raise UnresolvableNameError(
                "Cannot resolve a name for documented construct",
                details={
                    "node_type": node.type,
                    "line": node.start_point[0] + 1,
                    "file": self._ast.source.file_path,
                },
            )
        return name

    # ------------------------------------------------------------
    # Upward rules
    # ------------------------------------------------------------

    def _resolve(self, node: TSNode | None) -> str | None:
        if node is None or node.type in TERMINAL_TYPES:
            return None

        node_type = node.type
        if node_type in IDENTIFIER_TYPES:
            return self._ast.text(node)
        if node_type == "member_expression":
            return self._target(node)
        if node_type == "assignment_expression":
            return self._target(node.child_by_field_name("left"))
        if node_type == "variable_declarator":
            return self._target(node.child_by_field_name("name"))
        if node_type in DECLARATION_TYPES:
            return _join(self._resolve(node.parent), self._declared_name(node))
        if node_type == "method_definition":
            return self._method(node)
        if node_type == "object":
            return self._object_owner(node)
        if node_type == "pair":
            key = self._property_key(node)
            return _join(self._resolve(node.parent), key) if key else None
        return self._resolve(node.parent)

    def _object_owner(self, node: TSNode) -> str | None:
        parent = node.parent
        if parent is not None and parent.type == "variable_declarator":
            return self._target(parent.child_by_field_name("name"))
        if parent is not None and parent.type == "assignment_expression":
            return self._target(parent.child_by_field_name("left"))
        return self._resolve(parent)

    def _method(self, node: TSNode) -> str | None:
        name = self._declared_name(node)
        if name is None:
            # Computed names ([Symbol.iterator]) have no static segment
            return None

        if node.parent is not None and node.parent.type == "object":
            # Shorthand method in an object literal: { key(bar) {} }
            return _join(self._resolve(node.parent), name)

        class_body = node.parent
        class_node = class_body.parent if class_body is not None else None
        class_path = self._resolve(class_node)
        if not class_path:
            return None

        if name == "constructor":
            return class_path
        if any(child.type == "static" for child in node.children):
            return _join(class_path, name)
        return _join(class_path, PROTOTYPE, name)

    # ------------------------------------------------------------
    # Target (downward) rules
    # ------------------------------------------------------------

    def _target(self, node: TSNode | None) -> str | None:
        """Name of an assignment target; never walks upward."""
        if node is None:
            return None
        if node.type in IDENTIFIER_TYPES:
            return self._ast.text(node)
        if node.type == "member_expression":
            prop = node.child_by_field_name("property")
            return _join(
                self._target(node.child_by_field_name("object")),
                self._ast.text(prop) if prop is not None else None,
            )
        if node.type == "subscript_expression":
            index = node.child_by_field_name("index")
            if index is not None and index.type == "string":
                return _join(self._target(node.child_by_field_name("object")), _string_content(self._ast, index))
        return None

    def _declared_name(self, node: TSNode) -> str | None:
        name = node.child_by_field_name("name")
        if name is None or name.type not in IDENTIFIER_TYPES | {"type_identifier"}:
            return None
        return self._ast.text(name)

    def _property_key(self, node: TSNode) -> str | None:
        key = node.child_by_field_name("key")
        if key is None:
            return None
        if key.type in IDENTIFIER_TYPES or key.type == "number":
            return self._ast.text(key)
        if key.type == "string":
            return _string_content(self._ast, key)
        return None


def resolve_name(ast: AstTree, node: TSNode) -> str:
    """Resolve a construct node to its dotted name (see NameResolver.resolve)."""
    return NameResolver(ast).resolve(node)
