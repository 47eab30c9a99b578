"""
Tree-sitter parser initialization and source parsing utilities.

This module provides functions to initialize the TSX parser and parse source
text. The TSX grammar accepts TypeScript type syntax and JSX markup in the
same file, so it is used for .js, .jsx, .ts and .tsx sources alike.
"""

import logging
from typing import Tuple
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
TSX_LANGUAGE = Language(tstypescript.language_tsx())


class SourceParseError(ValueError):
    """Raised when source text cannot be parsed into a clean syntax tree."""

    def __init__(self, message: str, error_count: int = 0):
        super().__init__(message)
        self.error_count = error_count


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for TSX.

    Returns:
        A Parser instance configured with the TSX language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"t('hello.world')")
    """
    parser = Parser(TSX_LANGUAGE)
    logger.debug("Created tree-sitter TSX parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of JS/TS/JSX source code.

    The returned tree may contain ERROR or MISSING nodes; tree-sitter
    recovers from syntax errors instead of failing.

    Args:
        source: UTF-8 encoded bytes of source code.

    Returns:
        A Tree object representing the parsed AST.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"const a = t('key');")
        >>> tree.root_node.type
        'program'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug(f"Parsed {len(source)} bytes of TSX code")
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree.

    Args:
        tree: The parsed AST tree.

    Returns:
        Number of error or missing nodes. Zero for a clean parse.
    """
    if not tree.root_node.has_error:
        return 0

    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            count += 1
        # Clean subtrees cannot hold error nodes
        stack.extend(child for child in node.children if child.has_error or child.is_missing)
    return count


def parse_source(source: str) -> Tuple[Tree, bytes]:
    """Parse source text and reject trees that contain syntax errors.

    Args:
        source: Full text of one source unit.

    Returns:
        A tuple of (Tree, source_bytes) where:
        - Tree is the parsed AST
        - source_bytes is the UTF-8 encoding the tree's byte offsets refer to

    Raises:
        SourceParseError: If the tree contains ERROR or MISSING nodes.
    """
    # Lone surrogates are encoded as-is instead of raising
    source_bytes = source.encode("utf-8", errors="surrogatepass")
    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        error_count = count_error_nodes(tree)
        first_error = first_error_node(tree.root_node)
        location = ""
        if first_error is not None:
            location = f" at line {first_error.start_point.row + 1}"
        raise SourceParseError(
            f"Syntax error{location} ({error_count} error nodes)",
            error_count=error_count,
        )

    return tree, source_bytes


def first_error_node(node: Node):
    """Return the first ERROR or MISSING node in document order, or None."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        stack.extend(
            child for child in reversed(current.children)
            if child.has_error or child.is_missing
        )
    return None
