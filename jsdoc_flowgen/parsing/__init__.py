"""
Parsing Layer

Tree-sitter based parsing infrastructure.

Components:
- parser_registry: Language parser management
- source_file: Source file representation
- ast_tree: AST wrapper with traversal, node text and leading comments
- rewriter: Text-preserving source edits
"""

from jsdoc_flowgen.parsing.ast_tree import AstTree, Comment, CommentKind
from jsdoc_flowgen.parsing.parser_registry import ParserRegistry, get_registry
from jsdoc_flowgen.parsing.rewriter import SourceRewriter
from jsdoc_flowgen.parsing.source_file import SourceFile

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "AstTree",
    "Comment",
    "CommentKind",
    "SourceRewriter",
]
