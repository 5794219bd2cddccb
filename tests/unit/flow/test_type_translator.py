"""
JSDoc → Flow type translation tests.
"""

import pytest

from jsdoc_flowgen.flow.type_translator import translate
from jsdoc_flowgen.jsdoc.models import (
    AnyType,
    FunctionType,
    GenericType,
    NamedType,
    NonNullableType,
    NullableType,
    OptionalType,
    RecordType,
    UnionType,
    UnknownType,
)
from jsdoc_flowgen.jsdoc.type_parser import parse_type


class TestTranslate:
    """Structural translation of the supported variants"""

    def test_named_type_unchanged(self):
        assert translate(NamedType("string")) == "string"
        assert translate(NamedType("Foo.Bar")) == "Foo.Bar"

    def test_generic(self):
        assert translate(GenericType(NamedType("Array"), (NamedType("string"),))) == "Array<string>"

    def test_generic_keeps_first_argument_only(self):
        expr = GenericType(NamedType("Object"), (NamedType("string"), NamedType("number")))

        assert translate(expr) == "Object<string>"

    def test_generic_with_untranslatable_argument_is_absent(self):
        inner = GenericType(NamedType("Promise"), (FunctionType(params=()),))
        expr = GenericType(NamedType("Array"), (inner,))

        assert translate(expr) is None

    def test_union_preserves_order(self):
        expr = UnionType((NamedType("Object"), NamedType("string")))

        assert translate(expr) == "Object | string"

    def test_union_skips_untranslatable_members(self):
        expr = UnionType((NamedType("string"), RecordType(fields=()), NamedType("number")))

        assert translate(expr) == "string | number"

    def test_union_of_untranslatable_members_is_empty(self):
        expr = UnionType((RecordType(fields=()), UnknownType()))

        assert translate(expr) == ""

    def test_nullable(self):
        assert translate(NullableType(NamedType("string"))) == "?string"

    def test_optional(self):
        assert translate(OptionalType(NamedType("number"))) == "?number"

    def test_nullable_of_untranslatable_is_absent(self):
        assert translate(NullableType(UnknownType())) is None

    def test_any(self):
        assert translate(AnyType()) == "any"

    @pytest.mark.parametrize(
        "expr",
        [UnknownType(), NonNullableType(NamedType("Object")), FunctionType(params=()), RecordType(fields=())],
    )
    def test_unsupported_variants_are_absent(self, expr):
        assert translate(expr) is None

    def test_none_is_absent(self):
        assert translate(None) is None


class TestTranslateParsed:
    """Translation of parsed JSDoc text"""

    @pytest.mark.parametrize(
        "jsdoc, flow",
        [
            ("string", "string"),
            ("Array.<string>", "Array<string>"),
            ("string[]", "Array<string>"),
            ("(Object|string)", "Object | string"),
            ("?string", "?string"),
            ("string=", "?string"),
            ("*", "any"),
            ("Array.<?number>", "Array<?number>"),
            ("Object.<string, number>", "Object<string>"),
        ],
    )
    def test_common_annotations(self, jsdoc, flow):
        assert translate(parse_type(jsdoc)) == flow
