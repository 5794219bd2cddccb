"""
Conversion entry points.

    convert(src)                     → Flow declaration text
    convert(src, declaration=False)  → source with inline Flow annotations

Each call parses once, traverses once and keeps no state afterwards.
"""

from jsdoc_flowgen.config import get_settings
from jsdoc_flowgen.flow.declaration_tree import build_declaration_tree
from jsdoc_flowgen.flow.inline_annotator import annotate_inline
from jsdoc_flowgen.flow.renderer import render_declarations
from jsdoc_flowgen.parsing import AstTree, SourceFile


def _parse(source: str | SourceFile, language: str | None) -> AstTree:
    if isinstance(source, str):
        source = SourceFile.from_content(source, language=language or get_settings().language)
    return AstTree.parse(source)


def output_declaration(source: str | SourceFile, language: str | None = None, indent: str | None = None) -> str:
    """
    Render the Flow declaration of a source's documented surface.

    Raises:
        UnresolvableNameError: A documented construct has no derivable name
        ReservedSegmentError: A name path uses the reserved "meta" segment
        ParsingError: The language is not supported
    """
    ast = _parse(source, language)
    root = build_declaration_tree(ast)
    return render_declarations(root, indent=indent if indent is not None else get_settings().indent)


def update_source(source: str | SourceFile, language: str | None = None) -> str:
    """Return the source with inline Flow annotations for documented functions."""
    return annotate_inline(_parse(source, language))


def convert(source: str | SourceFile, *, declaration: bool | None = None, language: str | None = None) -> str:
    """
    Convert JSDoc-annotated JavaScript.

    Args:
        source: Source text or SourceFile
        declaration: True for a declaration, False for inline rewrite
            (defaults to settings.declaration)
        language: Grammar name (defaults to settings.language)

    Returns:
        Declaration text or rewritten source
    """
    if declaration is None:
        declaration = get_settings().declaration
    if declaration:
        return output_declaration(source, language=language)
    return update_source(source, language=language)
