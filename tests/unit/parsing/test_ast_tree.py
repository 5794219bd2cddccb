"""
AstTree tests: parsing, traversal, node text and leading comments.
"""

import pytest

from jsdoc_flowgen.common.exceptions import ParsingError
from jsdoc_flowgen.parsing import AstTree, CommentKind, SourceFile


class TestParse:
    """Parsing entry point"""

    def test_unsupported_language(self):
        source = SourceFile.from_content("x = 1", language="cobol")

        with pytest.raises(ParsingError, match="Language not supported"):
            AstTree.parse(source)

    def test_language_alias(self):
        ast = AstTree.parse(SourceFile.from_content("var x = 1;", language="js"))

        assert ast.root.type == "program"

    def test_syntax_errors_are_tolerated(self, parse_js):
        ast = parse_js("function f( {")

        assert ast.count_error_nodes() > 0

    def test_from_file_detects_language(self, tmp_path):
        path = tmp_path / "lib.mjs"
        path.write_text("export const a = 1;\n")

        source = SourceFile.from_file(path)

        assert source.language == "javascript"
        assert source.content == "export const a = 1;\n"

    def test_from_file_unknown_extension(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        with pytest.raises(ValueError, match="Could not detect language"):
            SourceFile.from_file(path)


class TestTraversal:
    """walk() and text()"""

    def test_walk_is_preorder(self, parse_js):
        ast = parse_js("function a() {}\nfunction b() {}\n")

        names = [ast.text(n) for n in ast.walk() if n.type == "identifier"]

        assert names == ["a", "b"]
        assert next(iter(ast.walk())).type == "program"

    def test_text_handles_multibyte_source(self, parse_js, find_node):
        ast = parse_js('var s = "héllo"; function g(x) {}')

        assert ast.text(find_node(ast, "formal_parameters")) == "(x)"


class TestLeadingComments:
    """Comment attachment"""

    def test_block_comment_before_function(self, parse_js, find_node):
        ast = parse_js("/** @return {number} */\nfunction f() {}")

        comments = ast.leading_comments(find_node(ast, "function_declaration"))

        assert len(comments) == 1
        assert comments[0].kind is CommentKind.BLOCK
        assert comments[0].value == "* @return {number} "

    def test_line_and_block_comments_in_order(self, parse_js, find_node):
        ast = parse_js("// first\n/* second */\nfunction f() {}")

        comments = ast.leading_comments(find_node(ast, "function_declaration"))

        assert [c.kind for c in comments] == [CommentKind.LINE, CommentKind.BLOCK]
        assert comments[0].value == " first"
        assert comments[1].value == " second "

    def test_no_comments(self, parse_js, find_node):
        ast = parse_js("var x = 1;\nfunction f() {}")

        assert ast.leading_comments(find_node(ast, "function_declaration")) == []

    def test_trailing_comment_of_previous_statement_also_leads(self, parse_js, find_node):
        ast = parse_js("foo(); // trailing\n/** @return {number} */\nfunction f() {}")

        comments = ast.leading_comments(find_node(ast, "function_declaration"))

        assert [c.value for c in comments] == [" trailing", "* @return {number} "]

    def test_doc_comment_after_statement_on_same_line(self, parse_js, find_node):
        ast = parse_js("var x = 1; /** @param {string} a */\nfunction k(a) {}\n")

        comments = ast.leading_comments(find_node(ast, "function_declaration"))

        assert [c.value for c in comments] == ["* @param {string} a "]
        assert comments[0].is_block

    def test_comment_after_opening_brace_belongs_to_property(self, parse_js, find_node):
        ast = parse_js("var o = { /** @param {string} s */ greet: function(s) {} };")

        comments = ast.leading_comments(find_node(ast, "pair"))

        assert len(comments) == 1
        assert comments[0].is_block
