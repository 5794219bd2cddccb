"""
Construct Locator

Decides whether an AST node is a documented function/method or a documented
@enum object literal, and extracts the underlying node plus its doc tags.

Handled shapes (fixed, not inferred):

    Shape       tree-sitter node         Path to function          Example
    ===========================================================================================
    DECLARATION function_declaration     -                         function foo(bar) {}
    ASSIGNMENT  expression_statement     .expression.right         Obj.prototype.foo = function(bar) {}
    VARIABLE    variable_declaration     .declarator[0].value      var foo = function(bar) {}
    METHOD      method_definition        -                         class Obj { foo(bar) {} }
    PROPERTY    pair                     .value                    var obj = { key: function(bar) {} }
    RETURN      return_statement         .argument                 return function(foo, bar) {}

Enums use the ASSIGNMENT and VARIABLE shapes with an object literal initializer.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from tree_sitter import Node as TSNode

from jsdoc_flowgen.common.exceptions import MalformedDocCommentError
from jsdoc_flowgen.common.observability import get_logger
from jsdoc_flowgen.flow.type_translator import translate
from jsdoc_flowgen.jsdoc.comment_parser import parse_comment
from jsdoc_flowgen.jsdoc.models import Tag, TypeExpression
from jsdoc_flowgen.parsing.ast_tree import AstTree

logger = get_logger(__name__)

ENUM_MARKER = "@enum"

PARAM_TITLES = frozenset({"param"})
RETURN_TITLES = frozenset({"return", "returns", "enum"})

# Node types that are functions (candidates must be one of these)
FUNCTION_NODE_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",  # older grammars name function expressions "function"
        "generator_function",
        "method_definition",
    }
)

OBJECT_NODE_TYPE = "object"


class FunctionShape(str, Enum):
    """Statement shapes that can carry a documented function"""

    DECLARATION = "declaration"
    ASSIGNMENT = "assignment"
    VARIABLE = "variable"
    METHOD = "method"
    PROPERTY = "property"
    RETURN = "return"


class EnumShape(str, Enum):
    """Statement shapes that can carry a documented enum"""

    ASSIGNMENT = "assignment"
    VARIABLE = "variable"


FUNCTION_SHAPES: dict[str, FunctionShape] = {
    "function_declaration": FunctionShape.DECLARATION,
    "generator_function_declaration": FunctionShape.DECLARATION,
    "expression_statement": FunctionShape.ASSIGNMENT,
    "variable_declaration": FunctionShape.VARIABLE,
    "lexical_declaration": FunctionShape.VARIABLE,
    "method_definition": FunctionShape.METHOD,
    "pair": FunctionShape.PROPERTY,
    "return_statement": FunctionShape.RETURN,
}

ENUM_SHAPES: dict[str, EnumShape] = {
    "expression_statement": EnumShape.ASSIGNMENT,
    "variable_declaration": EnumShape.VARIABLE,
    "lexical_declaration": EnumShape.VARIABLE,
}


# ============================================================
# Records
# ============================================================


@dataclass(frozen=True, slots=True)
class DocTag:
    """
    A @param or @return-like tag folded into a construct.

    Attributes:
        location: Tag title (param, return, returns, enum)
        name: Parameter name, None for return tags
        type: Parsed type expression, None when the tag has no type
    """

    location: str
    name: str | None
    type: TypeExpression | None

    @classmethod
    def from_tag(cls, tag: Tag) -> "DocTag":
        return cls(location=tag.title, name=tag.name, type=tag.type)

    @property
    def flow_type(self) -> str | None:
        """Translated Flow type (None or empty when untranslatable)"""
        return translate(self.type)


@dataclass(frozen=True, slots=True)
class ParamSlot:
    """
    One declared parameter of a function node.

    Attributes:
        name: Identifier matched against @param names (None for destructuring)
        label: Text used for the parameter in a declaration
        anchor: Node after which an inline annotation goes
    """

    name: str | None
    label: str
    anchor: TSNode


def param_slots(ast: AstTree, func_node: TSNode) -> list[ParamSlot]:
    """Declared parameters of a function node, in order."""
    params = func_node.child_by_field_name("parameters")
    if params is None:
        return []

    slots = []
    for param in params.named_children:
        if param.type == "comment":
            continue
        if param.type == "identifier":
            name = ast.text(param)
            slots.append(ParamSlot(name=name, label=name, anchor=param))
        elif param.type == "assignment_pattern":
            left = param.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                name = ast.text(left)
                slots.append(ParamSlot(name=name, label=name, anchor=left))
            else:
                slots.append(ParamSlot(name=None, label=ast.text(param), anchor=param))
        elif param.type == "rest_pattern":
            inner = next((c for c in param.named_children if c.type == "identifier"), None)
            name = ast.text(inner) if inner is not None else None
            slots.append(ParamSlot(name=name, label=ast.text(param), anchor=param))
        else:
            slots.append(ParamSlot(name=None, label=ast.text(param), anchor=param))
    return slots


@dataclass(frozen=True)
class FunctionConstruct:
    """A documented function, method or function expression."""

    node: TSNode
    params: tuple[DocTag, ...]
    returns: tuple[DocTag, ...]

    @property
    def body(self) -> TSNode | None:
        return self.node.child_by_field_name("body")

    @cached_property
    def return_type(self) -> str | None:
        """Flow type of the first return tag (only one return type is honoured)"""
        if not self.returns:
            return None
        return self.returns[0].flow_type or None

    def param_type(self, name: str) -> str | None:
        """Flow type documented for a parameter name, if any translates"""
        for tag in self.params:
            if tag.name == name:
                flow_type = tag.flow_type
                if flow_type:
                    return flow_type
        return None


@dataclass(frozen=True)
class EnumConstruct:
    """A documented @enum object literal."""

    node: TSNode
    values: tuple[str | int | float | bool | None, ...]
    source_text: str
    returns: tuple[DocTag, ...]

    @cached_property
    def return_type(self) -> str | None:
        """Flow type of the @enum tag, e.g. {number}"""
        if not self.returns:
            return None
        return self.returns[0].flow_type or None


Construct = FunctionConstruct | EnumConstruct


# ============================================================
# Shape → underlying node
# ============================================================


def _first_declarator_value(node: TSNode) -> TSNode | None:
    for child in node.named_children:
        if child.type == "variable_declarator":
            return child.child_by_field_name("value")
    return None


def _assignment_right(node: TSNode) -> TSNode | None:
    expression = node.named_children[0] if node.named_children else None
    if expression is None or expression.type != "assignment_expression":
        return None
    return expression.child_by_field_name("right")


def _return_argument(node: TSNode) -> TSNode | None:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


_FUNCTION_EXTRACTORS = {
    FunctionShape.DECLARATION: lambda node: node,
    FunctionShape.ASSIGNMENT: _assignment_right,
    FunctionShape.VARIABLE: _first_declarator_value,
    FunctionShape.METHOD: lambda node: node,
    FunctionShape.PROPERTY: lambda node: node.child_by_field_name("value"),
    FunctionShape.RETURN: _return_argument,
}

_ENUM_EXTRACTORS = {
    EnumShape.ASSIGNMENT: _assignment_right,
    EnumShape.VARIABLE: _first_declarator_value,
}


# ============================================================
# Doc tag extraction
# ============================================================


def _split_tags(tags: list[Tag]) -> tuple[tuple[DocTag, ...], tuple[DocTag, ...]]:
    params = tuple(DocTag.from_tag(t) for t in tags if t.title in PARAM_TITLES)
    returns = tuple(DocTag.from_tag(t) for t in tags if t.title in RETURN_TITLES)
    return params, returns


def _parse_tags(body: str) -> list[Tag] | None:
    try:
        return parse_comment(body)
    except MalformedDocCommentError:
        return None


# ============================================================
# Locator
# ============================================================


def locate_function(ast: AstTree, node: TSNode) -> FunctionConstruct | None:
    """
    Retrieve a documented function for a node.

    Args:
        ast: Tree the node belongs to
        node: Node to inspect

    Returns:
        FunctionConstruct, or None when the node is not a documented function
    """
    shape = FUNCTION_SHAPES.get(node.type)
    if shape is None:
        return None

    func_node = _FUNCTION_EXTRACTORS[shape](node)
    if func_node is None or func_node.type not in FUNCTION_NODE_TYPES:
        return None

    block = next((c for c in ast.leading_comments(node) if c.is_block), None)
    if block is None:
        return None

    tags = _parse_tags(block.value)
    if tags is None:
        logger.debug("undocumented_function", shape=shape.value, line=node.start_point[0] + 1)
        return None

    params, returns = _split_tags(tags)
    return FunctionConstruct(node=func_node, params=params, returns=returns)


def locate_enum(ast: AstTree, node: TSNode) -> EnumConstruct | None:
    """
    Retrieve a documented @enum object literal for a node.

    Args:
        ast: Tree the node belongs to
        node: Node to inspect

    Returns:
        EnumConstruct, or None when the node is not a documented enum
    """
    shape = ENUM_SHAPES.get(node.type)
    if shape is None:
        return None

    block = next((c for c in ast.leading_comments(node) if c.is_block and ENUM_MARKER in c.value), None)
    if block is None:
        return None

    tags = _parse_tags(block.value)
    if tags is None:
        return None

    enum_node = _ENUM_EXTRACTORS[shape](node)
    if enum_node is None or enum_node.type != OBJECT_NODE_TYPE:
        logger.debug("enum_without_object_literal", line=node.start_point[0] + 1)
        return None

    _, returns = _split_tags(tags)
    return EnumConstruct(
        node=enum_node,
        values=tuple(_enum_values(ast, enum_node)),
        source_text=ast.text(enum_node),
        returns=returns,
    )


def locate(ast: AstTree, node: TSNode) -> Construct | None:
    """Function first, then enum."""
    return locate_function(ast, node) or locate_enum(ast, node)


# ============================================================
# Enum literal values
# ============================================================

_KEYWORD_LITERALS = {"true": True, "false": False, "null": None}
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_NOT_LITERAL = object()
_CODE_POINT_ESCAPE_RE = re.compile(r"u\{([0-9a-fA-F]+)\}|[ux]([0-9a-fA-F]+)")


def _enum_values(ast: AstTree, obj: TSNode):
    for prop in obj.named_children:
        if prop.type != "pair":
            continue
        value = prop.child_by_field_name("value")
        literal = _literal_value(ast, value) if value is not None else _NOT_LITERAL
        if literal is _NOT_LITERAL:
            logger.debug("enum_value_not_literal", text=ast.text(prop))
            continue
        yield literal


def _literal_value(ast: AstTree, node: TSNode):
    if node.type == "number":
        return _number_value(ast.text(node))
    if node.type == "string":
        return _string_value(ast, node)
    if node.type in _KEYWORD_LITERALS:
        return _KEYWORD_LITERALS[node.type]
    if node.type == "unary_expression":
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is not None and argument is not None and argument.type == "number":
            number = _number_value(ast.text(argument))
            if ast.text(operator) == "-":
                return -number
            if ast.text(operator) == "+":
                return number
    if node.type == "parenthesized_expression" and node.named_children:
        return _literal_value(ast, node.named_children[0])
    return _NOT_LITERAL


def _number_value(text: str) -> int | float:
    cleaned = text.replace("_", "")
    lowered = cleaned.lower()
    for prefix, base in (("0x", 16), ("0o", 8), ("0b", 2)):
        if lowered.startswith(prefix):
            return int(cleaned[2:].rstrip("nN"), base)
    if lowered.endswith("n"):
        return int(cleaned[:-1])
    try:
        return int(cleaned)
    except ValueError:
        return float(cleaned)


def _string_value(ast: AstTree, node: TSNode) -> str:
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(ast.text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(ast.text(child)[1:]))
    return "".join(parts)


def _decode_escape(escaped: str) -> str:
    """Decode one escape sequence body (text after the backslash)."""
    if escaped in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[escaped]
    match = _CODE_POINT_ESCAPE_RE.fullmatch(escaped)
    if match:
        return chr(int(match.group(1) or match.group(2), 16))
    if escaped in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        # Line continuation
        return ""
    return escaped
