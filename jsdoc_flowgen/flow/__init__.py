"""
Flow: JSDoc → Flow conversion pipeline.

Components (leaves first):
- type_translator: JSDoc type expression → Flow type string
- constructs: documented function/enum locator
- name_resolver: dotted name of a construct
- declaration_tree: nested declaration tree builder
- renderer: declaration tree → Flow declaration text
- inline_annotator: in-place Flow comment annotations
"""

from jsdoc_flowgen.flow.constructs import (
    DocTag,
    EnumConstruct,
    FunctionConstruct,
    locate,
    locate_enum,
    locate_function,
)
from jsdoc_flowgen.flow.declaration_tree import (
    DeclarationKind,
    DeclarationMeta,
    DeclarationNode,
    DeclarationTreeBuilder,
    build_declaration_tree,
)
from jsdoc_flowgen.flow.inline_annotator import InlineAnnotator, annotate_inline
from jsdoc_flowgen.flow.name_resolver import NameResolver, resolve_name
from jsdoc_flowgen.flow.renderer import DeclarationRenderer, render_declarations
from jsdoc_flowgen.flow.type_translator import translate

__all__ = [
    "translate",
    "DocTag",
    "FunctionConstruct",
    "EnumConstruct",
    "locate",
    "locate_function",
    "locate_enum",
    "NameResolver",
    "resolve_name",
    "DeclarationKind",
    "DeclarationMeta",
    "DeclarationNode",
    "DeclarationTreeBuilder",
    "build_declaration_tree",
    "DeclarationRenderer",
    "render_declarations",
    "InlineAnnotator",
    "annotate_inline",
]
