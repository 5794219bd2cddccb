"""
JSDoc models: type expressions and tags.

Type expressions follow the closure-compiler type grammar used in JSDoc
`{...}` blocks. All variants are immutable.
"""

from dataclasses import dataclass, field


class TypeExpression:
    """Base class for parsed JSDoc type expressions."""

    __slots__ = ()


# ============================================================
# Variants understood by the Flow translator
# ============================================================


@dataclass(frozen=True, slots=True)
class NamedType(TypeExpression):
    """{string}, {Foo.Bar}, {module:foo/bar}"""

    name: str


@dataclass(frozen=True, slots=True)
class GenericType(TypeExpression):
    """{Array.<string>}, {Object<string, number>}, {string[]}"""

    base: TypeExpression
    arguments: tuple[TypeExpression, ...]


@dataclass(frozen=True, slots=True)
class UnionType(TypeExpression):
    """{(string|number)}"""

    members: tuple[TypeExpression, ...]


@dataclass(frozen=True, slots=True)
class NullableType(TypeExpression):
    """{?string} or {string?}"""

    inner: TypeExpression
    prefix: bool = True


@dataclass(frozen=True, slots=True)
class OptionalType(TypeExpression):
    """{string=} and bracketed parameter names"""

    inner: TypeExpression


@dataclass(frozen=True, slots=True)
class AnyType(TypeExpression):
    """{*}"""


# ============================================================
# Variants the translator does not map
# ============================================================


@dataclass(frozen=True, slots=True)
class UnknownType(TypeExpression):
    """{?}"""


@dataclass(frozen=True, slots=True)
class NonNullableType(TypeExpression):
    """{!Object}"""

    inner: TypeExpression


@dataclass(frozen=True, slots=True)
class NullType(TypeExpression):
    """{null}"""


@dataclass(frozen=True, slots=True)
class UndefinedType(TypeExpression):
    """{undefined}"""


@dataclass(frozen=True, slots=True)
class VoidType(TypeExpression):
    """{void}"""


@dataclass(frozen=True, slots=True)
class LiteralType(TypeExpression):
    """{"a"} or {42}"""

    value: str | int | float


@dataclass(frozen=True, slots=True)
class RestType(TypeExpression):
    """{...number}"""

    inner: TypeExpression | None


@dataclass(frozen=True, slots=True)
class TupleType(TypeExpression):
    """{[string, number]}"""

    elements: tuple[TypeExpression, ...]


@dataclass(frozen=True, slots=True)
class FieldType(TypeExpression):
    key: str
    value: TypeExpression | None


@dataclass(frozen=True, slots=True)
class RecordType(TypeExpression):
    """{{a: number, b}}"""

    fields: tuple[FieldType, ...]


@dataclass(frozen=True, slots=True)
class FunctionType(TypeExpression):
    """{function(string, number): boolean}"""

    params: tuple[TypeExpression, ...]
    result: TypeExpression | None = None
    this: TypeExpression | None = None
    new: TypeExpression | None = None


# ============================================================
# Tags
# ============================================================


@dataclass(frozen=True, slots=True)
class Tag:
    """
    One `@title` entry of a doc comment.

    Attributes:
        title: Tag title without "@" (synonyms normalised, e.g. arg → param)
        name: Parameter/property name, if the tag takes one
        type: Parsed type expression, None if absent or unparseable
        description: Free text after type and name
    """

    title: str
    name: str | None = None
    type: TypeExpression | None = None
    description: str = ""
    raw_type: str | None = field(default=None, compare=False)
