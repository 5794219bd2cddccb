"""
AST Tree wrapper for Tree-sitter

Adds the pieces the converters need on top of a raw tree-sitter tree:
pre-order traversal, verbatim node text and leading-comment attachment.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from jsdoc_flowgen.common.exceptions import ParsingError
from jsdoc_flowgen.common.observability import get_logger
from jsdoc_flowgen.parsing.parser_registry import get_registry
from jsdoc_flowgen.parsing.source_file import SourceFile

logger = get_logger(__name__)

COMMENT_NODE_TYPE = "comment"


class CommentKind(str, Enum):
    """Comment syntax"""

    BLOCK = "block"  # /* ... */
    LINE = "line"  # // ...


@dataclass(frozen=True, slots=True)
class Comment:
    """
    A comment attached to the node that follows it.

    Attributes:
        kind: Block or line comment
        value: Comment body without its delimiters
        node: The tree-sitter comment node
    """

    kind: CommentKind
    value: str
    node: TSNode

    @property
    def is_block(self) -> bool:
        return self.kind is CommentKind.BLOCK


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Provides convenient methods for traversing and reading the AST.
    """

    def __init__(self, source: SourceFile, tree: TSTree):
        """
        Initialize AST tree.

        Args:
            source: Source file
            tree: Tree-sitter tree
        """
        self.source = source
        self.tree = tree
        self._root = tree.root_node
        self._source_bytes = source.content_bytes

    @classmethod
    def parse(cls, source: SourceFile) -> "AstTree":
        """
        Parse source file into AST.

        Args:
            source: Source file to parse

        Returns:
            AstTree instance

        Raises:
            ParsingError: If language not supported or parsing fails
        """
        registry = get_registry()
        if not registry.supports_language(source.language):
            raise ParsingError(f"Language not supported: {source.language}", details={"file": source.file_path})

        parser = registry.get_parser(source.language)

        tree = parser.parse(source.content_bytes)
        if tree is None:
            raise ParsingError(f"Failed to parse file: {source.file_path}")

        ast = cls(source, tree)
        error_count = ast.count_error_nodes()
        if error_count:
            # Best-effort: documented constructs outside the broken region still convert
            logger.warning("parse_errors", file=source.file_path, error_nodes=error_count)
        return ast

    @property
    def root(self) -> TSNode:
        """Get root node"""
        return self._root

    @property
    def source_bytes(self) -> bytes:
        return self._source_bytes

    def walk(self, node: TSNode | None = None) -> Iterator[TSNode]:
        """
        Walk AST in pre-order (document order).

        Iterative, so deeply nested code cannot overflow the stack.
        """
        stack = [node if node is not None else self._root]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def text(self, node: TSNode) -> str:
        """Verbatim source text of a node"""
        return self._source_bytes[node.start_byte : node.end_byte].decode(self.source.encoding)

    def leading_comments(self, node: TSNode) -> list[Comment]:
        """
        Comments immediately preceding a node, in source order.

        Only the contiguous run of comment siblings counts. A comment trailing the
        previous statement on its line also leads this node.
        """
        preceding: list[TSNode] = []
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == COMMENT_NODE_TYPE:
            preceding.append(sibling)
            sibling = sibling.prev_sibling

        return [self._to_comment(c) for c in reversed(preceding)]

    def _to_comment(self, node: TSNode) -> Comment:
        raw = self.text(node)
        if raw.startswith("/*"):
            body = raw[2:-2] if raw.endswith("*/") else raw[2:]
            return Comment(kind=CommentKind.BLOCK, value=body, node=node)
        return Comment(kind=CommentKind.LINE, value=raw[2:], node=node)

    def count_error_nodes(self) -> int:
        """Count ERROR/MISSING nodes"""
        if not self._root.has_error:
            return 0
        return sum(1 for n in self.walk() if n.type == "ERROR" or n.is_missing)
