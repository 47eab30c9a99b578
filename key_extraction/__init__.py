"""
i18n Key Extraction Engine

Tree-sitter-based JavaScript/TypeScript/JSX key extractor.
Finds t(...) / i18next.t(...) calls and <Trans> elements and classifies each
occurrence as an accepted key, an accepted key with a warning, or an error.
"""

from key_extraction.models import DiagnosticRecord, ExtractionResult, Outcome, OutcomeKind
from key_extraction.parser import (
    SourceParseError,
    create_parser,
    parse_bytes,
    parse_source,
    count_error_nodes,
)
from key_extraction.classifiers import classify_call_expression, classify_trans_element
from key_extraction.traversal import extract_keys_from_tree, walk_tree
from key_extraction.extractor import (
    extract_from_source,
    extract_file,
    extract_files,
    filter_new_keys,
    is_supported_source,
    ExtractionStats,
)

__all__ = [
    # Data models
    "DiagnosticRecord",
    "ExtractionResult",
    "Outcome",
    "OutcomeKind",
    "ExtractionStats",
    # Low-level parsing
    "SourceParseError",
    "create_parser",
    "parse_bytes",
    "parse_source",
    "count_error_nodes",
    # Mid-level extraction
    "classify_call_expression",
    "classify_trans_element",
    "extract_keys_from_tree",
    "walk_tree",
    # High-level entry points
    "extract_from_source",
    "extract_file",
    "extract_files",
    "filter_new_keys",
    "is_supported_source",
]
