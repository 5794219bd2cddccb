"""
Inline Annotator

Rewrites the source in place with Flow comment annotations:

    /** @param {string} name @return {number} */
    function f(name) {}
        →
    function f(name/* : string*/) /* : number*/ {}

Enums are not annotated in this mode.
"""

from jsdoc_flowgen.common.observability import get_logger
from jsdoc_flowgen.flow.constructs import FunctionConstruct, locate_function, param_slots
from jsdoc_flowgen.parsing.ast_tree import AstTree
from jsdoc_flowgen.parsing.rewriter import SourceRewriter

logger = get_logger(__name__)


def flow_comment(flow_type: str) -> str:
    return f"/* : {flow_type}*/"


class InlineAnnotator:
    """Collects inline annotation edits for every documented function of a tree."""

    def __init__(self, ast: AstTree):
        self._ast = ast
        self._rewriter = SourceRewriter(ast)
        self.function_count = 0

    def annotate(self) -> str:
        """Traverse once, apply all edits, and return the rewritten source."""
        for node in self._ast.walk():
            construct = locate_function(self._ast, node)
            if construct is not None:
                self.annotate_function(construct)

        logger.info(
            "inline_annotations_applied",
            file=self._ast.source.file_path,
            functions=self.function_count,
            edits=self._rewriter.edit_count,
        )
        return self._rewriter.render()

    def annotate_function(self, construct: FunctionConstruct) -> None:
        for slot in param_slots(self._ast, construct.node):
            if slot.name is None:
                continue
            flow_type = construct.param_type(slot.name)
            if flow_type:
                self._rewriter.insert_after(slot.anchor, flow_comment(flow_type))

        # Only one return type is supported
        body = construct.body
        if construct.return_type and body is not None:
            self._rewriter.insert_before(body, flow_comment(construct.return_type) + " ")

        self.function_count += 1


def annotate_inline(ast: AstTree) -> str:
    """Rewrite a parsed source with inline Flow annotations."""
    return InlineAnnotator(ast).annotate()
