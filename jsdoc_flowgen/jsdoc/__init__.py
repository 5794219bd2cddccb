"""
JSDoc: doc-comment and type-expression parsing.
"""

from jsdoc_flowgen.jsdoc.comment_parser import parse_comment, unwrap
from jsdoc_flowgen.jsdoc.models import (
    AnyType,
    FunctionType,
    GenericType,
    LiteralType,
    NamedType,
    NonNullableType,
    NullableType,
    OptionalType,
    RecordType,
    Tag,
    TypeExpression,
    UnionType,
    UnknownType,
)
from jsdoc_flowgen.jsdoc.type_parser import parse_type

__all__ = [
    "parse_comment",
    "parse_type",
    "unwrap",
    "Tag",
    "TypeExpression",
    "NamedType",
    "GenericType",
    "UnionType",
    "NullableType",
    "OptionalType",
    "AnyType",
    "UnknownType",
    "NonNullableType",
    "LiteralType",
    "RecordType",
    "FunctionType",
]
