"""
JSDoc type expression → Flow type syntax.

    {string}                 → string
    {Array.<string>}         → Array<string>
    {(Object|string)}        → Object | string
    {?string} / {string=}    → ?string
    {*}                      → any

Anything else has no Flow rendering and translates to None; callers omit the
annotation rather than fail.
"""

from jsdoc_flowgen.jsdoc.models import (
    AnyType,
    GenericType,
    NamedType,
    NullableType,
    OptionalType,
    TypeExpression,
    UnionType,
)


def translate(expr: TypeExpression | None) -> str | None:
    """
    Translate a type expression to Flow syntax.

    Args:
        expr: Parsed JSDoc type expression (None is accepted and yields None)

    Returns:
        Flow type string, or None when the expression has no Flow form
    """
    if expr is None:
        return None

    if isinstance(expr, NamedType):
        return expr.name

    if isinstance(expr, GenericType):
        # Flow generics here take a single argument; the rest are dropped
        base = translate(expr.base)
        argument = translate(expr.arguments[0]) if expr.arguments else None
        if base and argument:
            return f"{base}<{argument}>"
        return None

    if isinstance(expr, UnionType):
        # Members without a Flow form are skipped, not fatal
        members = [translate(member) for member in expr.members]
        return " | ".join(m for m in members if m is not None)

    if isinstance(expr, (NullableType, OptionalType)):
        inner = translate(expr.inner)
        if inner is None:
            return None
        return f"?{inner}"

    if isinstance(expr, AnyType):
        return "any"

    return None
