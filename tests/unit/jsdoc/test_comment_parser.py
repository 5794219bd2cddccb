"""
JSDoc comment parser tests.
"""

import pytest

from jsdoc_flowgen.common.exceptions import MalformedDocCommentError
from jsdoc_flowgen.jsdoc.comment_parser import parse_comment, unwrap
from jsdoc_flowgen.jsdoc.models import GenericType, NamedType, OptionalType


class TestUnwrap:
    """Comment decoration stripping"""

    def test_multiline_block(self):
        body = "*\n * Formats a value.\n * @param {string} s The value\n "

        assert unwrap(body) == "Formats a value.\n@param {string} s The value"

    def test_single_line(self):
        assert unwrap("* @return {number} ") == "@return {number}"


class TestParseComment:
    """Tag extraction"""

    def test_param_and_return_on_one_line(self):
        tags = parse_comment("* @param {string} name @return {number} ")

        assert [t.title for t in tags] == ["param", "return"]
        assert tags[0].name == "name"
        assert tags[0].type == NamedType("string")
        assert tags[1].name is None
        assert tags[1].type == NamedType("number")

    def test_multiline_with_descriptions(self):
        body = """*
         * Join words.
         * @param {Array.<string>} words Words to join
         * @param {string=} sep Separator
         * @returns {string} The joined text
         """
        tags = parse_comment(body)

        assert [(t.title, t.name) for t in tags] == [("param", "words"), ("param", "sep"), ("returns", None)]
        assert tags[0].type == GenericType(NamedType("Array"), (NamedType("string"),))
        assert tags[0].description == "Words to join"
        assert tags[1].type == OptionalType(NamedType("string"))
        assert tags[2].description == "The joined text"

    def test_bracketed_optional_name(self):
        tags = parse_comment("* @param {number} [retries=3] How often")

        assert tags[0].name == "retries"
        assert tags[0].type == OptionalType(NamedType("number"))

    def test_arg_synonym(self):
        tags = parse_comment("* @arg {string} a")

        assert tags[0].title == "param"
        assert tags[0].name == "a"

    def test_enum_tag_with_type(self):
        tags = parse_comment("* @enum {number} ")

        assert tags[0].title == "enum"
        assert tags[0].type == NamedType("number")

    def test_enum_tag_without_type(self):
        tags = parse_comment("* @enum ")

        assert tags[0].title == "enum"
        assert tags[0].type is None

    def test_param_without_type(self):
        tags = parse_comment("* @param x the thing")

        assert tags[0].name == "x"
        assert tags[0].type is None
        assert tags[0].description == "the thing"

    def test_inline_link_does_not_start_a_tag(self):
        tags = parse_comment("* @param {Foo} foo See {@link Foo} for details")

        assert len(tags) == 1
        assert tags[0].description == "See {@link Foo} for details"

    def test_email_does_not_start_a_tag(self):
        tags = parse_comment("* @author someone@example.com")

        assert len(tags) == 1
        assert tags[0].title == "author"

    def test_unparseable_type_keeps_tag(self):
        tags = parse_comment("* @param {Array.<} items")

        assert tags[0].name == "items"
        assert tags[0].type is None
        assert tags[0].raw_type == "Array.<"

    def test_nested_braces_in_type(self):
        tags = parse_comment("* @param {{a: number}} opts")

        assert tags[0].name == "opts"
        assert tags[0].raw_type == "{a: number}"

    @pytest.mark.parametrize("body", ["", "* just a description ", "*\n * nothing to see\n "])
    def test_no_tags(self, body):
        with pytest.raises(MalformedDocCommentError):
            parse_comment(body)
