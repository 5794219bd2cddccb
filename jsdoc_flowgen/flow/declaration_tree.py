"""
Declaration Tree Builder

Folds every located construct into a nested tree keyed by name-path segment:

    Foo.prototype.bar  →  root ─ Foo (class) ─ bar (method)
    util.format        →  root ─ util (namespace) ─ format (function)

A "prototype" segment is never a node of its own; it marks the node it
follows as a class. Constructs resolving to the same path overwrite each
other (last visited wins).
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from tree_sitter import Node as TSNode

from jsdoc_flowgen.common.exceptions import ReservedSegmentError
from jsdoc_flowgen.common.observability import get_logger
from jsdoc_flowgen.flow.constructs import (
    EnumConstruct,
    FunctionConstruct,
    locate_enum,
    locate_function,
    param_slots,
)
from jsdoc_flowgen.flow.name_resolver import PROTOTYPE, NameResolver
from jsdoc_flowgen.parsing.ast_tree import AstTree

logger = get_logger(__name__)

# Reserved for node bookkeeping; never valid as a name segment
META_SEGMENT = "meta"


class DeclarationKind(str, Enum):
    """Kind of declaration a tree node renders as"""

    NAMESPACE = "namespace"
    CLASS = "class"
    FUNCTION = "function"
    METHOD = "method"
    ENUM = "enum"


@dataclass(frozen=True, slots=True)
class Param:
    """A rendered parameter: bare name, or name with a Flow type."""

    name: str
    type: str | None = None

    def __str__(self) -> str:
        if self.type:
            return f"{self.name}: {self.type}"
        return self.name


@dataclass(frozen=True, slots=True)
class DeclarationMeta:
    """What a node declares. Namespace metas are synthesized at render time."""

    kind: DeclarationKind
    name: str | None = None
    params: tuple[Param, ...] = ()
    return_type: str | None = None
    enum_values: tuple = ()
    enum_source_text: str | None = None

    @property
    def has_leaf(self) -> bool:
        """True when a construct was assigned (a bare class flag has no name)"""
        return self.name is not None


@dataclass
class DeclarationNode:
    """One name-path segment. Children keep insertion (source) order."""

    children: dict[str, "DeclarationNode"] = field(default_factory=dict)
    meta: DeclarationMeta | None = None

    def child(self, segment: str) -> "DeclarationNode":
        node = self.children.get(segment)
        if node is None:
            node = self.children[segment] = DeclarationNode()
        return node

    def mark_class(self) -> None:
        if self.meta is None:
            self.meta = DeclarationMeta(kind=DeclarationKind.CLASS)
        elif self.meta.kind in (DeclarationKind.FUNCTION, DeclarationKind.METHOD):
            self.meta = replace(self.meta, kind=DeclarationKind.CLASS)

    def assign(self, meta: DeclarationMeta) -> None:
        # A function assigned to a class node is its constructor
        if (
            self.meta is not None
            and self.meta.kind is DeclarationKind.CLASS
            and meta.kind in (DeclarationKind.FUNCTION, DeclarationKind.METHOD)
        ):
            meta = replace(meta, kind=DeclarationKind.CLASS)
        self.meta = meta

    @property
    def is_class(self) -> bool:
        return self.meta is not None and self.meta.kind is DeclarationKind.CLASS


def _check_segments(name: str, segments: list[str]) -> None:
    if META_SEGMENT in segments:
        raise ReservedSegmentError(
            f"Name path uses reserved segment '{META_SEGMENT}'",
            details={"name": name},
        )


class DeclarationTreeBuilder:
    """
    Builds the declaration tree for one source tree.

    Example:
        builder = DeclarationTreeBuilder(ast)
        root = builder.build()
    """

    def __init__(self, ast: AstTree):
        self._ast = ast
        self._resolver = NameResolver(ast)
        self.root = DeclarationNode()
        self.function_count = 0
        self.enum_count = 0

    def build(self) -> DeclarationNode:
        """Traverse the whole tree once (pre-order) and return the root."""
        for node in self._ast.walk():
            self.visit(node)
        logger.info(
            "declaration_tree_built",
            file=self._ast.source.file_path,
            functions=self.function_count,
            enums=self.enum_count,
        )
        return self.root

    def visit(self, node: TSNode) -> None:
        function = locate_function(self._ast, node)
        if function is not None:
            self.add_function(function)
            return

        enum = locate_enum(self._ast, node)
        if enum is not None:
            self.add_enum(enum)

    def add_function(self, construct: FunctionConstruct) -> None:
        params = tuple(
            Param(name=slot.label, type=construct.param_type(slot.name) if slot.name else None)
            for slot in param_slots(self._ast, construct.node)
        )
        name = self._resolver.resolve(construct.node)
        segments = name.split(".")
        _check_segments(name, segments)

        current = self.root
        is_prototype = False
        for i, segment in enumerate(segments):
            if segment == PROTOTYPE:
                if current is self.root:
                    logger.debug("prototype_at_top_level_ignored", name=name)
                else:
                    is_prototype = True
                    current.mark_class()
                continue

            current = current.child(segment)
            if i == len(segments) - 1:
                current.assign(
                    DeclarationMeta(
                        kind=DeclarationKind.METHOD if is_prototype else DeclarationKind.FUNCTION,
                        name=segment,
                        params=params,
                        return_type=construct.return_type,
                    )
                )

        self.function_count += 1
        logger.debug("function_declared", name=name, params=len(params))

    def add_enum(self, construct: EnumConstruct) -> None:
        name = self._resolver.resolve(construct.node)
        segments = name.split(".")
        _check_segments(name, segments)

        current = self.root
        for segment in segments:
            current = current.child(segment)
        current.assign(
            DeclarationMeta(
                kind=DeclarationKind.ENUM,
                name=segments[-1],
                return_type=construct.return_type,
                enum_values=construct.values,
                enum_source_text=construct.source_text,
            )
        )

        self.enum_count += 1
        logger.debug("enum_declared", name=name, values=len(construct.values))


def build_declaration_tree(ast: AstTree) -> DeclarationNode:
    """Build the declaration tree for a parsed source."""
    return DeclarationTreeBuilder(ast).build()
