"""
Declaration Renderer tests.
"""

import pytest

from jsdoc_flowgen.flow.declaration_tree import DeclarationKind, DeclarationMeta, DeclarationNode, Param
from jsdoc_flowgen.flow.renderer import (
    DeclarationRenderer,
    format_literal,
    rename_enum_references,
    render_declarations,
    strip_module,
)


def _leaf(kind, name, params=(), return_type=None, **extra):
    return DeclarationNode(meta=DeclarationMeta(kind=kind, name=name, params=params, return_type=return_type, **extra))


def _tree(**children):
    return DeclarationNode(children=dict(children))


class TestRenderNodes:
    """One node kind at a time"""

    def test_function(self):
        root = _tree(f=_leaf(DeclarationKind.FUNCTION, "f", (Param("name", "string"),), "number"))

        assert render_declarations(root) == "declare function f(name: string): number;\n"

    def test_missing_return_is_void(self):
        root = _tree(g=_leaf(DeclarationKind.FUNCTION, "g", (Param("x"),)))

        assert render_declarations(root) == "declare function g(x): void;\n"

    def test_namespace(self):
        root = _tree(util=_tree(format=_leaf(DeclarationKind.FUNCTION, "format", (Param("s", "string"),), "string")))

        assert render_declarations(root) == (
            "declare module util {\n"
            "    declare function format(s: string): string;\n"
            "}\n"
        )

    def test_nested_namespaces_are_closed(self):
        root = _tree(a=_tree(b=_tree(f=_leaf(DeclarationKind.FUNCTION, "f"))))

        assert render_declarations(root) == (
            "declare module a {\n"
            "    declare module b {\n"
            "        declare function f(): void;\n"
            "    }\n"
            "}\n"
        )

    def test_class_without_constructor(self):
        cls = DeclarationNode(
            children={"foo": _leaf(DeclarationKind.METHOD, "foo", (Param("bar", "string"),))},
            meta=DeclarationMeta(kind=DeclarationKind.CLASS),
        )

        assert render_declarations(_tree(ObjClass=cls)) == (
            "declare class ObjClass {\n"
            "    foo(bar: string): void;\n"
            "}\n"
        )

    def test_class_with_constructor_and_static(self):
        cls = DeclarationNode(
            children={
                "norm": _leaf(DeclarationKind.METHOD, "norm", (), "number"),
                "create": _leaf(DeclarationKind.FUNCTION, "create", (Param("x", "number"),), "Point"),
            },
            meta=DeclarationMeta(kind=DeclarationKind.CLASS, name="Point", params=(Param("x", "number"),)),
        )

        assert render_declarations(_tree(Point=cls)) == (
            "declare class Point {\n"
            "    constructor(x: number): void;\n"
            "    norm(): number;\n"
            "    static create(x: number): Point;\n"
            "}\n"
        )

    def test_enum(self):
        root = _tree(
            Color=_leaf(DeclarationKind.ENUM, "Color", enum_values=(1, 2), enum_source_text="{ RED: 1, BLUE: 2 }")
        )

        assert render_declarations(root) == (
            "declare var Color: { RED: 1, BLUE: 2 };\n"
            "declare type ColorValue = 1|2;\n"
        )

    def test_multiline_enum_is_reindented(self):
        enum = _leaf(
            DeclarationKind.ENUM,
            "Mode",
            enum_values=("on", "off"),
            enum_source_text="{\n    ON: 'on',\n    OFF: 'off'\n}",
        )

        assert render_declarations(_tree(ui=_tree(Mode=enum))) == (
            "declare module ui {\n"
            "    declare var Mode: {\n"
            "        ON: 'on',\n"
            "        OFF: 'off'\n"
            "    };\n"
            '    declare type ModeValue = "on"|"off";\n'
            "}\n"
        )

    def test_module_qualifier_is_stripped(self):
        fmt = _leaf(DeclarationKind.FUNCTION, "format", (Param("opts", "?util.Options"),), "util.Result")

        assert render_declarations(_tree(util=_tree(format=fmt))) == (
            "declare module util {\n"
            "    declare function format(opts: ?Options): Result;\n"
            "}\n"
        )

    def test_qualifier_kept_outside_module(self):
        root = _tree(f=_leaf(DeclarationKind.FUNCTION, "f", (Param("o", "util.Options"),)))

        assert render_declarations(root) == "declare function f(o: util.Options): void;\n"

    def test_custom_indent(self):
        root = _tree(ns=_tree(f=_leaf(DeclarationKind.FUNCTION, "f")))

        assert DeclarationRenderer(indent="  ").render(root) == (
            "declare module ns {\n"
            "  declare function f(): void;\n"
            "}\n"
        )

    def test_empty_tree(self):
        assert render_declarations(DeclarationNode()) == ""


class TestEnumRename:
    """Final rename pass"""

    def test_retargets_type_positions_only(self):
        output = (
            "declare var Color: { RED: 1 };\n"
            "declare type ColorValue = 1;\n"
            "declare function paint(c: Color, d: ?Color): ColorScheme;\n"
            "declare function Color2(): Color;\n"
        )

        assert rename_enum_references(output, ["Color"]) == (
            "declare var Color: { RED: 1 };\n"
            "declare type ColorValue = 1;\n"
            "declare function paint(c: ColorValue, d: ?ColorValue): ColorScheme;\n"
            "declare function Color2(): ColorValue;\n"
        )

    def test_rename_applies_after_rendering(self):
        root = _tree(
            Color=_leaf(DeclarationKind.ENUM, "Color", enum_values=(1,), enum_source_text="{ RED: 1 }"),
            paint=_leaf(DeclarationKind.FUNCTION, "paint", (Param("c", "Color"),), "Color"),
        )

        assert render_declarations(root) == (
            "declare var Color: { RED: 1 };\n"
            "declare type ColorValue = 1;\n"
            "declare function paint(c: ColorValue): ColorValue;\n"
        )


class TestHelpers:
    """Literal formatting and qualifier stripping"""

    @pytest.mark.parametrize(
        "value, text",
        [
            (1, "1"),
            (-2, "-2"),
            (1.5, "1.5"),
            (2.0, "2"),
            ("on", '"on"'),
            (True, "true"),
            (False, "false"),
            (None, "null"),
        ],
    )
    def test_format_literal(self, value, text):
        assert format_literal(value) == text

    def test_strip_module_at_type_name_starts(self):
        assert strip_module("Array<ns.Item> | ns.Other", "ns") == "Array<Item> | Other"

    def test_strip_module_ignores_longer_names(self):
        assert strip_module("ons.Item", "ns") == "ons.Item"
        assert strip_module("x.ns.Item", "ns") == "x.ns.Item"

    def test_strip_module_without_module(self):
        assert strip_module("ns.Item", None) == "ns.Item"
        assert strip_module(None, "ns") is None

    def test_empty_enum_renders_empty_union(self):
        root = _tree(E=_leaf(DeclarationKind.ENUM, "E", enum_values=(), enum_source_text="{}"))

        assert "declare type EValue = empty;\n" in render_declarations(root)
