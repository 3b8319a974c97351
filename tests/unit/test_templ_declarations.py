"""Tests for the templ, css and script declaration parsers."""

from __future__ import annotations

import pytest

from templfile.core.cursor import Cursor
from templfile.core.declarations import (
    is_declaration_start,
    parse_css,
    parse_script,
    parse_template,
)
from templfile.core.errors import ParseError


class TestIsDeclarationStart:
    @pytest.mark.parametrize(
        "line",
        [
            "templ Foo() {",
            "css red() {",
            "script run() {",
            "templ Foo() // open {",
        ],
    )
    def test_boundary(self, line: str) -> None:
        assert is_declaration_start(line)

    @pytest.mark.parametrize(
        "line",
        [
            "templ Foo()",
            "templ Foo() { ",
            " templ Foo() {",
            "templates := x{",
            "func main() {",
            "",
        ],
    )
    def test_not_boundary(self, line: str) -> None:
        assert not is_declaration_start(line)


class TestTemplate:
    def test_simple(self) -> None:
        cursor = Cursor("templ Hello(name string) {\n\t<p>{ name }</p>\n}\nrest")
        node = parse_template(cursor)
        assert node is not None
        assert node.name == "Hello"
        assert node.expression.text == "Hello(name string)"
        assert node.expression.start.index == len("templ ")
        assert node.body == "<p>{ name }</p>"
        assert node.source.text == "templ Hello(name string) {\n\t<p>{ name }</p>\n}"
        assert cursor.remaining() == "\nrest"

    def test_method_receiver(self) -> None:
        node = parse_template(Cursor("templ (p Page) Title() {\n}"))
        assert node is not None
        assert node.name == "Title"
        assert node.expression.text == "(p Page) Title()"

    def test_nested_braces(self) -> None:
        src = "templ List(items []string) {\n\tfor _, i := range items {\n\t\t<li>{ i }</li>\n\t}\n}"
        node = parse_template(Cursor(src))
        assert node is not None
        assert node.body.startswith("for _, i := range items {")
        assert node.body.endswith("}")

    def test_brace_in_go_string(self) -> None:
        node = parse_template(Cursor('templ Brace() {\n\t<p>{ "}" }</p>\n}'))
        assert node is not None
        assert node.body == '<p>{ "}" }</p>'

    def test_apostrophe_in_markup(self) -> None:
        node = parse_template(Cursor("templ Note() {\n\t<p>Don't panic</p>\n}"))
        assert node is not None
        assert node.body == "<p>Don't panic</p>"

    def test_trailing_whitespace_after_brace(self) -> None:
        node = parse_template(Cursor("templ Foo() {  \n}"))
        assert node is not None
        assert node.name == "Foo"

    def test_declines_without_brace(self) -> None:
        cursor = Cursor("templ Foo()\n{\n}")
        assert parse_template(cursor) is None
        assert cursor.index() == 0

    def test_declines_other_keyword(self) -> None:
        cursor = Cursor("css red() {\n}")
        assert parse_template(cursor) is None
        assert cursor.index() == 0

    def test_missing_closing_brace(self) -> None:
        with pytest.raises(ParseError, match="templ: missing closing brace for Foo"):
            parse_template(Cursor("templ Foo() {\n<div>\n"))

    def test_malformed_signature(self) -> None:
        with pytest.raises(ParseError, match="templ: malformed declaration"):
            parse_template(Cursor("templ {\n}"))


class TestCss:
    def test_properties(self) -> None:
        src = "css button() {\n\tcolor: #fff;\n\tbackground-color: { bg };\n\n\tpadding: 4px\n}"
        node = parse_css(Cursor(src))
        assert node is not None
        assert node.name == "button"
        assert [(p.name, p.value) for p in node.properties] == [
            ("color", "#fff"),
            ("background-color", "{ bg }"),
            ("padding", "4px"),
        ]
        assert str(node.properties[0]) == "color: #fff;"

    def test_empty_body(self) -> None:
        node = parse_css(Cursor("css empty() {\n}"))
        assert node is not None
        assert node.properties == []

    def test_brace_in_string_value(self) -> None:
        node = parse_css(Cursor('css quoted() {\n\tcontent: "}";\n}'))
        assert node is not None
        assert node.properties[0].value == '"}"'

    def test_requires_empty_parameters(self) -> None:
        with pytest.raises(ParseError, match="css: malformed declaration"):
            parse_css(Cursor("css red(x string) {\n}"))

    def test_property_without_colon(self) -> None:
        with pytest.raises(ParseError, match="css: expected 'name: value;'") as exc_info:
            parse_css(Cursor("css bad() {\n\tcolor red;\n}"))
        assert exc_info.value.context is not None
        assert exc_info.value.context.line == 2


class TestScript:
    def test_body(self) -> None:
        node = parse_script(Cursor('script greet(name string) {\n\talert("hi }" + name);\n}'))
        assert node is not None
        assert node.name == "greet"
        assert node.expression.text == "greet(name string)"
        assert node.body == 'alert("hi }" + name);'

    def test_template_literal(self) -> None:
        node = parse_script(Cursor("script log() {\n\tconsole.log(`${a}`);\n}"))
        assert node is not None
        assert node.body == "console.log(`${a}`);"

    def test_missing_closing_brace(self) -> None:
        with pytest.raises(ParseError, match="script: missing closing brace"):
            parse_script(Cursor("script run() {\n\tif (x) {\n}"))
