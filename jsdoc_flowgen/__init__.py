"""
jsdoc-flowgen

Flow type declarations from JSDoc comments.

Modes:
- declaration (default): ambient `declare module/class/function/var` text
- inline: the source rewritten with `/* : T*/` annotations
"""

__version__ = "0.1.0"

from .converter import convert, output_declaration, update_source

__all__ = [
    "convert",
    "output_declaration",
    "update_source",
]
