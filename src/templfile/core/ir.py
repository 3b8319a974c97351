"""
Document tree types for parsed templ files.

A parsed file is a ``Document``: the leading whitespace and comments
(``header``), the package section, and the ordered body of declarations and
code spans. Every type is an immutable pydantic model so the tree can be
handed to the code generator, or serialized to JSON, as a value.

Body nodes and header items are closed tagged unions discriminated on their
``kind`` field.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Positions and expressions
# ---------------------------------------------------------------------------


class Position(BaseModel):
    """A cursor coordinate. All fields are 0-based."""

    index: int = Field(default=0, description="Character offset into the input")
    line: int = Field(default=0, description="Line number")
    col: int = Field(default=0, description="Column within the line")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.col + 1}"


class Expression(BaseModel):
    """
    Raw source text plus its originating span.

    The span is half-open: ``start`` is the first character and ``end`` is
    one past the last. Synthesized expressions have a zero-width span and
    text that need not appear in the source.
    """

    text: str = Field(description="Source text")
    start: Position = Field(default_factory=Position)
    end: Position = Field(default_factory=Position)

    model_config = ConfigDict(frozen=True)

    @property
    def is_synthesized(self) -> bool:
        return self.start.index == self.end.index

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Header items
# ---------------------------------------------------------------------------


class Whitespace(BaseModel):
    """Whitespace that precedes the package section."""

    kind: Literal["whitespace"] = "whitespace"
    text: str

    model_config = ConfigDict(frozen=True)


class Comment(BaseModel):
    """
    A ``//`` line comment or ``/* */`` block comment.

    ``text`` holds the comment contents without the delimiters.
    """

    kind: Literal["comment"] = "comment"
    text: str
    start: Position = Field(default_factory=Position)
    end: Position = Field(default_factory=Position)
    multiline: bool = False

    model_config = ConfigDict(frozen=True)


HeaderItem = Annotated[Union[Whitespace, Comment], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Package section
# ---------------------------------------------------------------------------


class PackageSection(BaseModel):
    """The ``package <name>`` line, parsed or synthesized."""

    expression: Expression

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        return self.expression.text

    @property
    def name(self) -> str:
        return self.expression.text.removeprefix("package").strip()


# ---------------------------------------------------------------------------
# Body nodes
# ---------------------------------------------------------------------------


class TemplateDeclaration(BaseModel):
    """
    A ``templ Name(params) { ... }`` component.

    Attributes:
        name: Component name
        expression: Signature between the keyword and the opening brace
        body: Trimmed markup between the braces
        source: The whole declaration as written
    """

    kind: Literal["template"] = "template"
    name: str
    expression: Expression
    body: str = ""
    source: Expression

    model_config = ConfigDict(frozen=True)


class StyleProperty(BaseModel):
    """A single ``name: value;`` line inside a css declaration."""

    name: str
    value: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name}: {self.value};"


class StyleDeclaration(BaseModel):
    """A ``css Name() { ... }`` class declaration."""

    kind: Literal["css"] = "css"
    name: str
    expression: Expression
    properties: list[StyleProperty] = Field(default_factory=list)
    source: Expression

    model_config = ConfigDict(frozen=True)


class ScriptDeclaration(BaseModel):
    """A ``script Name(params) { ... }`` function declaration."""

    kind: Literal["script"] = "script"
    name: str
    expression: Expression
    body: str = ""
    source: Expression

    model_config = ConfigDict(frozen=True)


class CodeSpan(BaseModel):
    """A run of ordinary source lines, stored trimmed."""

    kind: Literal["code"] = "code"
    expression: Expression

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        return self.expression.text


Declaration = Union[TemplateDeclaration, StyleDeclaration, ScriptDeclaration]

BodyNode = Annotated[
    Union[TemplateDeclaration, StyleDeclaration, ScriptDeclaration, CodeSpan],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class Document(BaseModel):
    """
    Complete parse result for one templ file.

    Attributes:
        header: Whitespace and comments before the package section
        package: Parsed or synthesized package section (always present)
        body: Declarations and code spans in document order
    """

    header: list[HeaderItem] = Field(default_factory=list)
    package: PackageSection
    body: list[BodyNode] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def code_spans(self) -> list[CodeSpan]:
        return [node for node in self.body if isinstance(node, CodeSpan)]

    def declarations(self) -> list[Declaration]:
        return [node for node in self.body if not isinstance(node, CodeSpan)]

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, raw: str) -> Document:
        return cls.model_validate_json(raw)
