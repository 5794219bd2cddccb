"""
SourceRewriter tests: edits keep every untouched byte.
"""

from jsdoc_flowgen.parsing import SourceRewriter


class TestSourceRewriter:
    """Text-preserving edits"""

    def test_no_edits_returns_source(self, parse_js):
        code = "function f(a,   b) {\n  return a;\n}\n"
        ast = parse_js(code)

        assert SourceRewriter(ast).render() == code

    def test_insert_after_and_before(self, parse_js, find_node):
        ast = parse_js("function f(a) { return a; }")
        rewriter = SourceRewriter(ast)

        rewriter.insert_after(find_node(ast, "identifier", 1), "/* : string*/")
        rewriter.insert_before(find_node(ast, "statement_block"), "/* : string*/ ")

        assert rewriter.render() == "function f(a/* : string*/) /* : string*/ { return a; }"
        assert rewriter.edit_count == 2

    def test_insertions_at_same_offset_keep_order(self, parse_js, find_node):
        ast = parse_js("f(a);")
        rewriter = SourceRewriter(ast)
        node = find_node(ast, "arguments")

        rewriter.insert_before(node, "1")
        rewriter.insert_before(node, "2")

        assert rewriter.render() == "f12(a);"

    def test_multibyte_offsets(self, parse_js, find_node):
        ast = parse_js('var s = "é"; function g(b) {}')
        rewriter = SourceRewriter(ast)

        rewriter.insert_after(find_node(ast, "identifier", 2), "/* : number*/")

        assert rewriter.render() == 'var s = "é"; function g(b/* : number*/) {}'
