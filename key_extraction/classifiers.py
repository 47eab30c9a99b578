"""
Occurrence classifiers for translation calls and <Trans> markup.

Each classifier looks at one node and returns an Outcome, or None when the
node is not a translation occurrence at all. Identifiers are matched by
spelling (``t``, ``i18next``, ``Trans``, ``i18nKey``); imports and bindings
are not resolved, so aliased or shadowed names are missed or over-matched.
"""

import logging
from typing import List, Optional, Union

from tree_sitter import Node

from key_extraction.config import (
    ARGUMENTS_NODE,
    COMMENT_NODE,
    I18N_KEY_ATTRIBUTE,
    I18NEXT_OBJECT,
    IDENTIFIER_NODE,
    JSX_ATTRIBUTE,
    JSX_ATTRIBUTE_NAME_TYPES,
    JSX_CLOSING_ELEMENT,
    JSX_OPENING_ELEMENT,
    JSX_SELF_CLOSING_ELEMENT,
    JSX_TEXT_TYPES,
    MEMBER_EXPRESSION,
    OPTIONAL_CHAIN,
    OPTIONAL_CHAIN_TOKEN,
    PROPERTY_IDENTIFIER_NODE,
    REASON_COMPLEX_CHILDREN,
    REASON_MISSING_KEY,
    REASON_TEMPLATE_NO_EXPRESSIONS,
    REASON_TEMPLATE_WITH_EXPRESSIONS,
    REASON_UNSUPPORTED_ARGUMENT,
    STRING_NODE,
    TEMPLATE_STRING_NODE,
    TRANS_COMPONENT,
    TRANSLATE_FUNCTION,
)
from key_extraction.literals import (
    cook_jsx_string,
    cook_jsx_text,
    cook_string,
    cook_template,
    node_line,
    node_text,
    template_substitutions,
    unwrap_parentheses,
)
from key_extraction.models import Outcome

logger = logging.getLogger(__name__)

# A JSX child is either a decoded text run or a non-text node
JsxChild = Union[str, Node]


def _has_optional_chain(node: Node) -> bool:
    # "?." shows up as an optional_chain node or as a bare token, by grammar version
    return any(child.type in (OPTIONAL_CHAIN, OPTIONAL_CHAIN_TOKEN) for child in node.children)


def is_translation_callee(callee: Node, source_bytes: bytes) -> bool:
    """Check whether a callee is ``t`` or ``i18next.t``.

    Args:
        callee: The ``function`` field of a call_expression.
        source_bytes: The raw source bytes.

    Returns:
        True for a bare ``t`` identifier or a plain ``i18next.t`` member
        access. Optional (``?.``) and computed (``[...]``) accesses do not
        match.
    """
    callee = unwrap_parentheses(callee)

    if callee.type == IDENTIFIER_NODE:
        return node_text(callee, source_bytes) == TRANSLATE_FUNCTION

    if callee.type == MEMBER_EXPRESSION and not _has_optional_chain(callee):
        obj = callee.child_by_field_name("object")
        prop = callee.child_by_field_name("property")
        if obj is None or prop is None:
            return False
        return (
            obj.type == IDENTIFIER_NODE
            and node_text(obj, source_bytes) == I18NEXT_OBJECT
            and prop.type == PROPERTY_IDENTIFIER_NODE
            and node_text(prop, source_bytes) == TRANSLATE_FUNCTION
        )

    return False


def first_argument(arguments: Node) -> Optional[Node]:
    """Return the first argument node of an ``arguments`` list, or None."""
    for child in arguments.named_children:
        if child.type != COMMENT_NODE:
            return child
    return None


def classify_call_expression(node: Node, source_bytes: bytes) -> Optional[Outcome]:
    """Classify a ``t(...)`` / ``i18next.t(...)`` call by its first argument.

    Args:
        node: A call_expression node.
        source_bytes: The raw source bytes.

    Returns:
        The Outcome for a translation call with at least one argument, or
        None for any other call.
    """
    callee = node.child_by_field_name("function")
    if callee is None or _has_optional_chain(node):
        return None
    if not is_translation_callee(callee, source_bytes):
        return None

    # Tagged templates (t`key`) put a template_string in the arguments slot
    arguments = node.child_by_field_name("arguments")
    if arguments is None or arguments.type != ARGUMENTS_NODE:
        return None

    arg = first_argument(arguments)
    if arg is None:
        return None
    arg = unwrap_parentheses(arg)
    line = node_line(node)

    if arg.type == STRING_NODE:
        return Outcome.accepted(cook_string(arg, source_bytes), line)

    if arg.type == TEMPLATE_STRING_NODE:
        if not template_substitutions(arg):
            key = cook_template(arg, source_bytes)
            return Outcome.accepted_with_warning(key, REASON_TEMPLATE_NO_EXPRESSIONS, line)
        return Outcome.rejected(
            node_text(node, source_bytes), REASON_TEMPLATE_WITH_EXPRESSIONS, line
        )

    logger.debug(f"Unsupported argument type {arg.type} at line {line}")
    return Outcome.rejected(node_text(node, source_bytes), REASON_UNSUPPORTED_ARGUMENT, line)


def opening_element(node: Node) -> Optional[Node]:
    """Return the node holding the tag name and attributes of an element."""
    if node.type == JSX_SELF_CLOSING_ELEMENT:
        return node
    opening = node.child_by_field_name("open_tag")
    if opening is not None:
        return opening
    for child in node.named_children:
        if child.type == JSX_OPENING_ELEMENT:
            return child
    return None


def is_trans_element(node: Node, source_bytes: bytes) -> bool:
    """Check whether an element's tag is the plain identifier ``Trans``."""
    opening = opening_element(node)
    if opening is None:
        return False
    name = opening.child_by_field_name("name")
    if name is None or name.type != IDENTIFIER_NODE:
        return False
    return node_text(name, source_bytes) == TRANS_COMPONENT


def find_attribute(opening: Node, name: str, source_bytes: bytes) -> Optional[Node]:
    """Return the first jsx_attribute called ``name``, or None."""
    for attr in opening.named_children:
        if attr.type != JSX_ATTRIBUTE or not attr.named_children:
            continue
        attr_name = attr.named_children[0]
        if attr_name.type not in JSX_ATTRIBUTE_NAME_TYPES:
            continue
        if node_text(attr_name, source_bytes) == name:
            return attr
    return None


def attribute_string_value(attr: Node, source_bytes: bytes) -> Optional[str]:
    """Return the value of a string-literal attribute.

    Returns:
        The decoded value, or None when the attribute has no value or its
        value is an expression container or element.
    """
    values = attr.named_children[1:]
    if not values or values[0].type != STRING_NODE:
        return None
    return cook_jsx_string(values[0], source_bytes)


def jsx_children(node: Node, source_bytes: bytes) -> List[JsxChild]:
    """Return the children of an element in JSX semantics.

    Every maximal run of text between non-text children counts as one text
    child, including whitespace-only runs, so indentation around a nested
    element makes it a multi-child element.

    Args:
        node: A jsx_element or jsx_self_closing_element node.
        source_bytes: The raw source bytes.

    Returns:
        Decoded text runs (str) and non-text child nodes, in source order.
    """
    if node.type == JSX_SELF_CLOSING_ELEMENT:
        return []

    opening = opening_element(node)
    closing = node.child_by_field_name("close_tag")
    if closing is None:
        closing = next(
            (child for child in node.named_children if child.type == JSX_CLOSING_ELEMENT),
            None,
        )

    cursor = opening.end_byte if opening is not None else node.start_byte
    end = closing.start_byte if closing is not None else node.end_byte

    children: List[JsxChild] = []
    for child in node.named_children:
        if child.type in (JSX_OPENING_ELEMENT, JSX_CLOSING_ELEMENT, COMMENT_NODE):
            continue
        if child.type in JSX_TEXT_TYPES:
            continue
        if child.start_byte > cursor:
            children.append(cook_jsx_text(source_bytes[cursor:child.start_byte]))
        children.append(child)
        cursor = child.end_byte

    if end > cursor:
        children.append(cook_jsx_text(source_bytes[cursor:end]))
    return children


def simple_text(children: List[JsxChild]) -> Optional[str]:
    """Return the trimmed text of a single non-blank text child, else None."""
    if len(children) != 1 or not isinstance(children[0], str):
        return None
    text = children[0].strip()
    return text or None


def classify_trans_element(node: Node, source_bytes: bytes) -> Optional[Outcome]:
    """Classify a ``<Trans>`` element by its i18nKey attribute and children.

    Args:
        node: A jsx_element or jsx_self_closing_element node.
        source_bytes: The raw source bytes.

    Returns:
        The Outcome for a ``<Trans>`` element, or None for any other tag.
    """
    if not is_trans_element(node, source_bytes):
        return None

    line = node_line(node)
    opening = opening_element(node)
    key_attr = find_attribute(opening, I18N_KEY_ATTRIBUTE, source_bytes)
    explicit_key = attribute_string_value(key_attr, source_bytes) if key_attr is not None else None
    children = jsx_children(node, source_bytes)
    text = simple_text(children)

    if explicit_key is not None:
        if text is not None or not children:
            return Outcome.accepted(explicit_key, line)
        return Outcome.rejected(explicit_key, REASON_COMPLEX_CHILDREN, line)

    if text is not None:
        return Outcome.accepted(text, line)

    return Outcome.rejected(node_text(node, source_bytes), REASON_MISSING_KEY, line)
