"""
AST traversal and key extraction logic.

This module walks a parsed TSX tree once, depth-first, and dispatches call
expressions and JSX elements to the classifiers. Outcomes are folded into a
per-unit result: accepted keys, warnings and errors.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Set

from tree_sitter import Node, Tree

from key_extraction.classifiers import classify_call_expression, classify_trans_element
from key_extraction.config import CALL_EXPRESSION, JSX_ELEMENT, JSX_SELF_CLOSING_ELEMENT
from key_extraction.models import DiagnosticRecord, ExtractionResult, Outcome, OutcomeKind

logger = logging.getLogger(__name__)

Classifier = Callable[[Node, bytes], Optional[Outcome]]

# Single dispatch point: node type -> classifier. Other node types are walked
# through without inspection.
CLASSIFIERS: Dict[str, Classifier] = {
    CALL_EXPRESSION: classify_call_expression,
    JSX_ELEMENT: classify_trans_element,
    JSX_SELF_CLOSING_ELEMENT: classify_trans_element,
}


def walk_tree(root: Node) -> Iterator[Node]:
    """Yield every named node under root in depth-first pre-order.

    Parents are yielded before their children and siblings in source order.
    The walk is iterative so deeply nested sources do not hit the recursion
    limit.

    Args:
        root: The node to start from (usually ``tree.root_node``).
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


class ResultAccumulator:
    """Collects outcomes for one source unit."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.success: Set[str] = set()
        self.warnings: List[DiagnosticRecord] = []
        self.errors: List[DiagnosticRecord] = []

    def add(self, outcome: Outcome) -> None:
        if outcome.is_accepted:
            self.success.add(outcome.key)
        if outcome.kind is OutcomeKind.ACCEPTED_WITH_WARNING:
            self.warnings.append(outcome.to_diagnostic(self.file_path))
        elif outcome.kind is OutcomeKind.REJECTED:
            self.errors.append(outcome.to_diagnostic(self.file_path))

    def build(self) -> ExtractionResult:
        return ExtractionResult(
            success=frozenset(self.success),
            warnings=tuple(self.warnings),
            errors=tuple(self.errors),
        )


def iter_outcomes(tree: Tree, source_bytes: bytes) -> Iterator[Outcome]:
    """Yield the outcome of every translation occurrence in visit order.

    Args:
        tree: The parsed AST tree.
        source_bytes: The raw source bytes the tree was parsed from.
    """
    for node in walk_tree(tree.root_node):
        classifier = CLASSIFIERS.get(node.type)
        if classifier is None:
            continue
        outcome = classifier(node, source_bytes)
        if outcome is not None:
            yield outcome


def extract_keys_from_tree(tree: Tree, source_bytes: bytes, file_path: str) -> ExtractionResult:
    """Extract translation keys and diagnostics from a parsed tree.

    This is the main entry point for key extraction from an existing tree.

    Args:
        tree: The parsed AST tree.
        source_bytes: The raw source bytes the tree was parsed from.
        file_path: Label stamped on every diagnostic record.

    Returns:
        The ExtractionResult for this source unit.
    """
    accumulator = ResultAccumulator(file_path)
    for outcome in iter_outcomes(tree, source_bytes):
        accumulator.add(outcome)

    result = accumulator.build()
    logger.debug(
        f"Extracted {len(result.success)} keys, {len(result.warnings)} warnings, "
        f"{len(result.errors)} errors from {file_path}"
    )
    return result
