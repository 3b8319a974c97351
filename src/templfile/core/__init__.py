"""
Core templ file parsing: cursor, document tree, and parsers.
"""

from .cursor import Cursor
from .errors import (
    ConfigError,
    LegacyFormatError,
    ParseError,
    TemplateNotFoundError,
    TemplfileError,
)
from .ir import (
    CodeSpan,
    Comment,
    Document,
    Expression,
    PackageSection,
    Position,
    ScriptDeclaration,
    StyleDeclaration,
    StyleProperty,
    TemplateDeclaration,
    Whitespace,
)
from .package import default_package_name, is_identifier
from .templatefile import (
    TemplateFileParser,
    new_template_file_parser,
    parse_file,
    parse_string,
)

__all__ = [
    "CodeSpan",
    "Comment",
    "ConfigError",
    "Cursor",
    "Document",
    "Expression",
    "LegacyFormatError",
    "PackageSection",
    "ParseError",
    "Position",
    "ScriptDeclaration",
    "StyleDeclaration",
    "StyleProperty",
    "TemplateDeclaration",
    "TemplateFileParser",
    "TemplateNotFoundError",
    "TemplfileError",
    "Whitespace",
    "default_package_name",
    "is_identifier",
    "new_template_file_parser",
    "parse_file",
    "parse_string",
]
