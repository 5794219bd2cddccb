"""
Text-preserving source rewriting.

Insertions are recorded against node byte offsets of the parsed source and
applied in one pass; every other byte is copied through unchanged.
"""

from dataclasses import dataclass

from tree_sitter import Node as TSNode

from jsdoc_flowgen.parsing.ast_tree import AstTree


@dataclass(frozen=True, slots=True)
class Edit:
    """Text inserted at a byte offset of the parsed source."""

    offset: int
    text: str
    seq: int  # insertion order, keeps same-offset insertions stable


class SourceRewriter:
    """
    Collects insertions on an AstTree and renders the rewritten source.

    Example:
        rewriter = SourceRewriter(ast)
        rewriter.insert_after(param_node, "/* : string*/")
        new_source = rewriter.render()
    """

    def __init__(self, ast: AstTree):
        self._ast = ast
        self._edits: list[Edit] = []

    def insert_after(self, node: TSNode, text: str) -> None:
        """Append text right after the node's text."""
        self._add(node.end_byte, text)

    def insert_before(self, node: TSNode, text: str) -> None:
        """Prepend text right before the node's text."""
        self._add(node.start_byte, text)

    def _add(self, offset: int, text: str) -> None:
        self._edits.append(Edit(offset=offset, text=text, seq=len(self._edits)))

    @property
    def edit_count(self) -> int:
        return len(self._edits)

    def render(self) -> str:
        """Apply all insertions and return the new source text."""
        encoding = self._ast.source.encoding
        source = self._ast.source_bytes
        parts: list[bytes] = []
        cursor = 0
        for edit in sorted(self._edits, key=lambda e: (e.offset, e.seq)):
            parts.append(source[cursor : edit.offset])
            parts.append(edit.text.encode(encoding))
            cursor = edit.offset
        parts.append(source[cursor:])
        return b"".join(parts).decode(encoding)
