"""
Literal value helpers.

Turns string, template and JSX literal nodes into their cooked values (the
value the program sees at runtime) and renders source snippets for
diagnostics.
"""

import re
from html.entities import name2codepoint
from typing import List, Optional

from tree_sitter import Node

from key_extraction.config import (
    COMMENT_NODE,
    ESCAPE_SEQUENCE,
    PARENTHESIZED_EXPRESSION,
    SIMPLE_ESCAPES,
    TEMPLATE_SUBSTITUTION,
    UNKNOWN_LINE,
)
from key_extraction.models import Line

_LINE_TERMINATORS = "\r\n\u2028\u2029"
_OCTAL_RE = re.compile(r"^[0-7]{1,3}$")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")
_MAX_CODE_POINT = 0x10FFFF
_CHARACTER_REFERENCE_RE = re.compile(r"&(#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def node_text(node: Node, source_bytes: bytes) -> str:
    """Return the exact source text spanned by a node."""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_line(node: Optional[Node]) -> Line:
    """Return the 1-indexed start line of a node, or "?" when unknown."""
    point = getattr(node, "start_point", None)
    if point is None:
        return UNKNOWN_LINE
    return point[0] + 1


def unwrap_parentheses(node: Node) -> Node:
    """Strip redundant parentheses: ``((x))`` -> ``x``."""
    while node.type == PARENTHESIZED_EXPRESSION:
        inner = [child for child in node.named_children if child.type != COMMENT_NODE]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def _code_point(digits: str, fallback: str) -> str:
    value = int(digits, 16)
    if value > _MAX_CODE_POINT:
        return fallback
    return chr(value)


def decode_escape(escape: str) -> str:
    """Decode one JS escape sequence, backslash included.

    Unknown single-character escapes map to the character itself, as in JS
    (``\\q`` -> ``q``). A backslash before a line terminator is a line
    continuation and yields nothing.
    """
    body = escape[1:]
    if not body or body[0] in _LINE_TERMINATORS:
        return ""
    if body in SIMPLE_ESCAPES:
        return SIMPLE_ESCAPES[body]
    if body[0] == "x" and len(body) == 3:
        return chr(int(body[1:], 16))
    if body.startswith("u{") and body.endswith("}"):
        return _code_point(body[2:-1], body)
    if body[0] == "u" and len(body) == 5:
        return chr(int(body[1:], 16))
    if _OCTAL_RE.match(body):
        return chr(int(body, 8))
    return body


def _join_surrogates(text: str) -> str:
    # "\\ud83d\\ude00" decodes to two lone surrogates; JS reads them as one code point
    if not _SURROGATE_RE.search(text):
        return text
    return text.encode("utf-16", "surrogatepass").decode("utf-16", errors="replace")


def _cook_js_literal(node: Node, source_bytes: bytes, normalize_newlines: bool = False) -> str:
    parts = []
    cursor = node.start_byte + 1
    end = node.end_byte - 1

    def raw(start: int, stop: int) -> str:
        text = source_bytes[start:stop].decode("utf-8", errors="replace")
        if normalize_newlines:
            text = text.replace("\r\n", "\n").replace("\r", "\n")
        return text

    for child in node.named_children:
        if child.type not in (ESCAPE_SEQUENCE, TEMPLATE_SUBSTITUTION):
            continue
        parts.append(raw(cursor, child.start_byte))
        if child.type == ESCAPE_SEQUENCE:
            parts.append(decode_escape(node_text(child, source_bytes)))
        cursor = child.end_byte
    parts.append(raw(cursor, end))
    return _join_surrogates("".join(parts))


def cook_string(node: Node, source_bytes: bytes) -> str:
    """Return the runtime value of a quoted JS string literal."""
    return _cook_js_literal(node, source_bytes)


def template_substitutions(node: Node) -> List[Node]:
    """Return the ``${...}`` substitution nodes of a template literal."""
    return [child for child in node.named_children if child.type == TEMPLATE_SUBSTITUTION]


def cook_template(node: Node, source_bytes: bytes) -> str:
    """Concatenate the cooked text segments of a template literal.

    Substitutions contribute nothing. Raw line terminators are normalized to
    ``\\n`` as JS does for cooked template values; escaped ones are kept.
    """
    return _cook_js_literal(node, source_bytes, normalize_newlines=True)


def cook_jsx_string(node: Node, source_bytes: bytes) -> str:
    """Return the value of a JSX attribute string.

    JSX attribute strings do not process backslash escapes; only character
    references such as ``&amp;`` are decoded.
    """
    content = source_bytes[node.start_byte + 1:node.end_byte - 1]
    return cook_jsx_text(content)


def _decode_character_reference(match: "re.Match[str]") -> str:
    ref = match.group(1)
    if ref.startswith("#x") or ref.startswith("#X"):
        value = int(ref[2:], 16)
    elif ref.startswith("#"):
        value = int(ref[1:])
    elif ref in name2codepoint:
        value = name2codepoint[ref]
    else:
        return match.group(0)
    if value > _MAX_CODE_POINT:
        return match.group(0)
    return chr(value)


def cook_jsx_text(raw: bytes) -> str:
    """Decode character references in a run of JSX text.

    Only terminated references are decoded (``&amp;``, ``&#38;``,
    ``&#x26;``); ``&amp`` without a semicolon and unknown names stay as
    written.
    """
    text = raw.decode("utf-8", errors="replace")
    return _CHARACTER_REFERENCE_RE.sub(_decode_character_reference, text)
