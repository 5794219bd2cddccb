"""
Declaration Renderer

Renders a declaration tree as Flow ambient declarations:

    declare module util {
        declare function format(s: string): string;
    }
    declare class Foo {
        constructor(x: number): void;
        bar(): void;
        static create(): Foo;
    }
    declare var Color: { RED: 1, BLUE: 2 };
    declare type ColorValue = 1|2;

After rendering, enum names used as types (": Color", ": ?Color") are
retargeted to their value alias ("ColorValue").
"""

import json
import re
from dataclasses import dataclass, field

from jsdoc_flowgen.flow.declaration_tree import DeclarationKind, DeclarationMeta, DeclarationNode, Param

ENUM_VALUE_SUFFIX = "Value"
DEFAULT_INDENT = "    "
EMPTY_UNION = "empty"  # Flow's bottom type, for enums without literal values


@dataclass
class RenderContext:
    """State of one render pass."""

    indent: str = DEFAULT_INDENT
    enum_names: list[str] = field(default_factory=list)

    def record_enum(self, name: str) -> None:
        if name not in self.enum_names:
            self.enum_names.append(name)


@dataclass(frozen=True, slots=True)
class _Scope:
    """What a child sees of its parent while rendering."""

    kind: DeclarationKind | None
    module: str | None


def format_literal(value) -> str:
    """Render an enum value as a Flow literal type."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


def strip_module(type_text: str | None, module: str | None) -> str | None:
    """Drop "<module>." where it starts a type name inside that module."""
    if not type_text or not module:
        return type_text
    return re.sub(rf"(?<![\w$.]){re.escape(module)}\.", "", type_text)


def rename_enum_references(output: str, enum_names: list[str]) -> str:
    """Point type-position references to an enum at its value alias."""
    for name in enum_names:
        pattern = rf"(:\s*\??\s*){re.escape(name)}(?![\w$])"
        output = re.sub(pattern, lambda m, n=name: m.group(1) + n + ENUM_VALUE_SUFFIX, output)
    return output


class DeclarationRenderer:
    """
    Renders a declaration tree.

    Thread-Safety: Safe (all pass state lives in a RenderContext)
    """

    def __init__(self, indent: str = DEFAULT_INDENT):
        self._indent = indent

    def render(self, root: DeclarationNode) -> str:
        """
        Render the whole tree, then apply the enum rename pass.

        Args:
            root: Root of the declaration tree

        Returns:
            Flow declaration text
        """
        context = RenderContext(indent=self._indent)
        output = self._render_node(root, key=None, parent=None, depth=-1, context=context)
        return rename_enum_references(output, context.enum_names)

    def _render_node(
        self,
        node: DeclarationNode,
        key: str | None,
        parent: _Scope | None,
        depth: int,
        context: RenderContext,
    ) -> str:
        pad = context.indent * max(depth, 0)
        output: list[str] = []

        meta = node.meta
        opens_module = meta is None and key is not None
        if opens_module:
            output.append(f"{pad}declare module {key} {{\n")
            meta = DeclarationMeta(kind=DeclarationKind.NAMESPACE, name=key)

        # The outermost module qualifies everything below it
        module = parent.module if parent is not None and parent.module else (key if opens_module else None)
        scope = _Scope(kind=meta.kind if meta is not None else None, module=module)

        if meta is not None:
            params = ", ".join(str(Param(p.name, strip_module(p.type, module))) for p in meta.params)
            return_type = strip_module(meta.return_type, module) or "void"

            if meta.kind is DeclarationKind.CLASS:
                output.append(f"{pad}declare class {key} {{\n")
                if meta.has_leaf:
                    output.append(f"{context.indent * (depth + 1)}constructor({params}): {return_type};\n")
                for segment, child in node.children.items():
                    output.append(self._render_node(child, segment, scope, depth + 1, context))
                output.append(f"{pad}}}\n")
                return "".join(output)

            if meta.kind is DeclarationKind.METHOD:
                output.append(f"{pad}{meta.name}({params}): {return_type};\n")
            elif meta.kind is DeclarationKind.FUNCTION:
                in_class = parent is not None and parent.kind is DeclarationKind.CLASS
                prefix = "static " if in_class else "declare function "
                output.append(f"{pad}{prefix}{meta.name}({params}): {return_type};\n")
            elif meta.kind is DeclarationKind.ENUM:
                output.append(self._render_enum(meta, pad, context))

        for segment, child in node.children.items():
            output.append(self._render_node(child, segment, scope, depth + 1, context))

        if opens_module:
            output.append(f"{pad}}}\n")
        return "".join(output)

    def _render_enum(self, meta: DeclarationMeta, pad: str, context: RenderContext) -> str:
        context.record_enum(meta.name)
        source = (meta.enum_source_text or "{}").replace("\n", "\n" + pad)
        values = "|".join(format_literal(v) for v in meta.enum_values) or EMPTY_UNION
        return (
            f"{pad}declare var {meta.name}: {source};\n"
            f"{pad}declare type {meta.name}{ENUM_VALUE_SUFFIX} = {values};\n"
        )


def render_declarations(root: DeclarationNode, indent: str = DEFAULT_INDENT) -> str:
    """Render a declaration tree (see DeclarationRenderer.render)."""
    return DeclarationRenderer(indent=indent).render(root)
