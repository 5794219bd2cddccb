"""
JSDoc type expression parser.

Recursive descent over the closure-compiler type grammar:

    {string}  {?string}  {string=}  {!Object}  {*}  {?}
    {(string|number)}  {string|number}
    {Array.<string>}  {Object<string, number>}  {string[]}
    {function(string, number): boolean}  {{a: number}}  {...number}
"""

import re
from dataclasses import dataclass

from jsdoc_flowgen.common.exceptions import TypeExpressionSyntaxError
from jsdoc_flowgen.jsdoc.models import (
    AnyType,
    FieldType,
    FunctionType,
    GenericType,
    LiteralType,
    NamedType,
    NonNullableType,
    NullableType,
    NullType,
    OptionalType,
    RecordType,
    RestType,
    TupleType,
    TypeExpression,
    UndefinedType,
    UnionType,
    UnknownType,
    VoidType,
)

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<ellipsis>\.\.\.)
  | (?P<apply>\.<)
  | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
  | (?P<number>-?(?:0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?))
  | (?P<name>(?:module|external|event):[\w$./~#-]+|[A-Za-z_$][\w$]*(?:[.#~/][A-Za-z_$][\w$]*)*)
  | (?P<punct>[(){}\[\]<>,|?!=*:])
    """,
    re.VERBOSE,
)

_LITERAL_NAMES = {
    "null": NullType(),
    "undefined": UndefinedType(),
    "void": VoidType(),
}

# Tokens after a bare "?" that make it the unknown type rather than a prefix
_UNKNOWN_FOLLOWERS = {",", ")", ">", "|", "=", "]", "}", ":"}


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    value: str
    pos: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise TypeExpressionSyntaxError(f"Unexpected character {text[pos]!r}", text, pos)
        kind = match.lastgroup
        if kind != "ws":
            value = match.group(kind)
            tokens.append(_Token(kind="punct" if kind in ("ellipsis", "apply") else kind, value=value, pos=pos))
        pos = match.end()
    return tokens


class _TypeParser:
    def __init__(self, text: str):
        self._text = text
        self._tokens = _tokenize(text)
        self._index = 0

    # ------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------

    def _peek(self) -> _Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _at(self, value: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "punct" and token.value == value

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise TypeExpressionSyntaxError("Unexpected end of type expression", self._text, len(self._text))
        self._index += 1
        return token

    def _expect(self, value: str) -> None:
        token = self._next()
        if token.kind != "punct" or token.value != value:
            raise TypeExpressionSyntaxError(f"Expected {value!r}, got {token.value!r}", self._text, token.pos)

    def _error(self, message: str) -> TypeExpressionSyntaxError:
        token = self._peek()
        pos = token.pos if token else len(self._text)
        return TypeExpressionSyntaxError(message, self._text, pos)

    # ------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------

    def parse(self) -> TypeExpression:
        if self._peek() is None:
            raise self._error("Empty type expression")
        expr = self._parse_union_members(closing=None)
        if self._peek() is not None:
            raise self._error(f"Unexpected token {self._peek().value!r}")
        return expr

    def _parse_union_members(self, closing: str | None) -> TypeExpression:
        members = [self._parse_type()]
        while self._at("|"):
            self._next()
            members.append(self._parse_type())
        if closing is None and len(members) == 1:
            return members[0]
        return UnionType(members=tuple(members))

    def _parse_type(self) -> TypeExpression:
        if self._at("?"):
            self._next()
            token = self._peek()
            if token is None or (token.kind == "punct" and token.value in _UNKNOWN_FOLLOWERS):
                return self._parse_postfix(UnknownType())
            return NullableType(inner=self._parse_type(), prefix=True)
        if self._at("!"):
            self._next()
            return NonNullableType(inner=self._parse_type())
        if self._at("..."):
            self._next()
            token = self._peek()
            if token is None or (token.kind == "punct" and token.value in (",", ")", "]")):
                return RestType(inner=None)
            return RestType(inner=self._parse_type())
        return self._parse_postfix(self._parse_basic())

    def _parse_postfix(self, expr: TypeExpression) -> TypeExpression:
        while True:
            if self._at("["):
                self._next()
                self._expect("]")
                expr = GenericType(base=NamedType("Array"), arguments=(expr,))
            elif self._at("="):
                self._next()
                expr = OptionalType(inner=expr)
            elif self._at("?"):
                self._next()
                expr = NullableType(inner=expr, prefix=False)
            elif self._at("!"):
                self._next()
                expr = NonNullableType(inner=expr)
            else:
                return expr

    def _parse_basic(self) -> TypeExpression:
        token = self._next()

        if token.kind == "punct":
            if token.value == "*":
                return AnyType()
            if token.value == "(":
                expr = self._parse_union_members(closing=")")
                self._expect(")")
                return expr
            if token.value == "{":
                return self._parse_record()
            if token.value == "[":
                return self._parse_tuple()
            raise TypeExpressionSyntaxError(f"Unexpected token {token.value!r}", self._text, token.pos)

        if token.kind == "string":
            return LiteralType(value=token.value[1:-1])

        if token.kind == "number":
            return LiteralType(value=_parse_number(token.value))

        # name
        if token.value == "function" and self._at("("):
            return self._parse_function()
        if token.value in _LITERAL_NAMES:
            return _LITERAL_NAMES[token.value]

        base: TypeExpression = NamedType(name=token.value)
        if self._at(".<") or self._at("<"):
            self._next()
            arguments = [self._parse_union_members(closing=None)]
            while self._at(","):
                self._next()
                arguments.append(self._parse_union_members(closing=None))
            self._expect(">")
            return GenericType(base=base, arguments=tuple(arguments))
        return base

    def _parse_record(self) -> RecordType:
        fields: list[FieldType] = []
        while not self._at("}"):
            key = self._next()
            if key.kind not in ("name", "string", "number"):
                raise TypeExpressionSyntaxError(f"Invalid record key {key.value!r}", self._text, key.pos)
            value = None
            if self._at(":"):
                self._next()
                value = self._parse_union_members(closing=None)
            fields.append(FieldType(key=key.value.strip("\"'"), value=value))
            if not self._at(","):
                break
            self._next()
        self._expect("}")
        return RecordType(fields=tuple(fields))

    def _parse_tuple(self) -> TupleType:
        elements: list[TypeExpression] = []
        while not self._at("]"):
            elements.append(self._parse_union_members(closing=None))
            if not self._at(","):
                break
            self._next()
        self._expect("]")
        return TupleType(elements=tuple(elements))

    def _parse_function(self) -> FunctionType:
        self._expect("(")
        params: list[TypeExpression] = []
        this_type = None
        new_type = None
        while not self._at(")"):
            token = self._peek()
            if token is not None and token.kind == "name" and token.value in ("this", "new"):
                following = self._tokens[self._index + 1] if self._index + 1 < len(self._tokens) else None
                if following is not None and following.value == ":":
                    self._index += 2
                    bound = self._parse_union_members(closing=None)
                    if token.value == "this":
                        this_type = bound
                    else:
                        new_type = bound
                    if not self._at(","):
                        break
                    self._next()
                    continue
            params.append(self._parse_union_members(closing=None))
            if not self._at(","):
                break
            self._next()
        self._expect(")")

        result = None
        if self._at(":"):
            self._next()
            result = self._parse_type()
        return FunctionType(params=tuple(params), result=result, this=this_type, new=new_type)


def _parse_number(text: str) -> int | float:
    sign = -1 if text.startswith("-") else 1
    digits = text.lstrip("-")
    if digits[:2] in ("0x", "0X"):
        return sign * int(digits, 16)
    if "." in digits:
        return sign * float(digits)
    return sign * int(digits)


def parse_type(text: str) -> TypeExpression:
    """
    Parse a JSDoc type expression (the text between the braces).

    Raises:
        TypeExpressionSyntaxError: If the text is not a valid type expression
    """
    return _TypeParser(text.strip()).parse()
