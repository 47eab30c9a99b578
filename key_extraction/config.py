"""
Configuration constants for i18n key extraction.

Defines the tree-sitter node type strings, the recognized identifiers and the
diagnostic reasons used by the classifiers.
"""

from typing import Dict, Set

# Node types dispatched to the classifiers
CALL_EXPRESSION: str = "call_expression"
JSX_ELEMENT: str = "jsx_element"
JSX_SELF_CLOSING_ELEMENT: str = "jsx_self_closing_element"

# Call expression parts
ARGUMENTS_NODE: str = "arguments"
IDENTIFIER_NODE: str = "identifier"
PROPERTY_IDENTIFIER_NODE: str = "property_identifier"
MEMBER_EXPRESSION: str = "member_expression"
OPTIONAL_CHAIN: str = "optional_chain"
OPTIONAL_CHAIN_TOKEN: str = "?."
PARENTHESIZED_EXPRESSION: str = "parenthesized_expression"
COMMENT_NODE: str = "comment"

# Literal node types
STRING_NODE: str = "string"
TEMPLATE_STRING_NODE: str = "template_string"
TEMPLATE_SUBSTITUTION: str = "template_substitution"
STRING_FRAGMENT: str = "string_fragment"
ESCAPE_SEQUENCE: str = "escape_sequence"
HTML_CHARACTER_REFERENCE: str = "html_character_reference"

# JSX parts
JSX_OPENING_ELEMENT: str = "jsx_opening_element"
JSX_CLOSING_ELEMENT: str = "jsx_closing_element"
JSX_ATTRIBUTE: str = "jsx_attribute"

# Child node types that carry plain JSX text
JSX_TEXT_TYPES: Set[str] = {
    "jsx_text",
    HTML_CHARACTER_REFERENCE,
}

# Attribute name node types (plain names only, namespaced names are skipped)
JSX_ATTRIBUTE_NAME_TYPES: Set[str] = {
    PROPERTY_IDENTIFIER_NODE,
    IDENTIFIER_NODE,
}

# Recognized identifiers, matched by spelling only
TRANSLATE_FUNCTION: str = "t"
I18NEXT_OBJECT: str = "i18next"
TRANS_COMPONENT: str = "Trans"
I18N_KEY_ATTRIBUTE: str = "i18nKey"

# Diagnostic reasons
REASON_TEMPLATE_NO_EXPRESSIONS: str = "TemplateLiteral with no expressions"
REASON_TEMPLATE_WITH_EXPRESSIONS: str = "TemplateLiteral with expressions"
REASON_UNSUPPORTED_ARGUMENT: str = "Unsupported argument type"
REASON_COMPLEX_CHILDREN: str = "Complex children in <Trans>"
REASON_MISSING_KEY: str = "Missing i18nKey or complex children"

# Placeholder line when no position information is available
UNKNOWN_LINE: str = "?"

# Source file extensions handled by the file-level helpers
SOURCE_EXTENSIONS: Set[str] = {
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
}

# Single-character JS escapes (the character after the backslash)
SIMPLE_ESCAPES: Dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
