"""
High-level entry points for i18n key extraction.

This module provides the per-source engine entry point and thin file-level
helpers that read caller-supplied files and merge their results.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional, Tuple

from key_extraction.config import SOURCE_EXTENSIONS
from key_extraction.models import ExtractionResult
from key_extraction.parser import SourceParseError, parse_source
from key_extraction.traversal import extract_keys_from_tree

logger = logging.getLogger(__name__)


class ExtractionStats:
    """Statistics for a multi-file extraction."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.keys_extracted = 0
        self.warnings = 0
        self.errors = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "keys_extracted": self.keys_extracted,
            "warnings": self.warnings,
            "errors": self.errors,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, keys={self.keys_extracted}, "
            f"warnings={self.warnings}, errors={self.errors})"
        )


def extract_from_source(source: str, file_path: str) -> ExtractionResult:
    """Extract translation keys from one unit of JS/TS/JSX source text.

    Malformed source never raises: the failure is logged against
    ``file_path`` and an empty result is returned, so one bad file does not
    stop a multi-file run.

    Args:
        source: Full text of the source unit.
        file_path: Label stamped on diagnostics, usually the originating path.

    Returns:
        ExtractionResult with accepted keys, warnings and errors.

    Raises:
        TypeError: If source is not a str.

    Example:
        >>> result = extract_from_source("t('hello.world')", "app.ts")
        >>> sorted(result.success)
        ['hello.world']
    """
    if not isinstance(source, str):
        raise TypeError(f"Source must be str, got {type(source).__name__}")

    try:
        tree, source_bytes = parse_source(source)
    except SourceParseError as e:
        logger.error(f"Failed to parse {file_path}: {e}")
        return ExtractionResult.empty()

    return extract_keys_from_tree(tree, source_bytes, file_path)


def is_supported_source(file_path: str) -> bool:
    """Check whether a path has a .ts, .tsx, .js or .jsx extension."""
    return os.path.splitext(file_path)[1] in SOURCE_EXTENSIONS


def extract_file(file_path: str, label: Optional[str] = None) -> ExtractionResult:
    """Extract translation keys from a single source file.

    Args:
        file_path: Path to a .ts, .tsx, .js or .jsx file.
        label: Label for diagnostics. Defaults to the absolute file path.

    Returns:
        ExtractionResult for the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a supported source file.
        OSError: If the file cannot be read.
    """
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    if not is_supported_source(file_path):
        raise ValueError(
            f"File {file_path} is not a JS/TS source file. "
            f"Expected one of: {sorted(SOURCE_EXTENSIONS)}"
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise

    result = extract_from_source(source, label or file_path)
    logger.info(
        f"Extracted {len(result.success)} keys ({len(result.warnings)} warnings, "
        f"{len(result.errors)} errors) from {file_path}"
    )
    return result


def extract_files(
    file_paths: Iterable[str],
    continue_on_error: bool = True,
) -> Tuple[ExtractionResult, ExtractionStats]:
    """Extract and merge translation keys from a list of files.

    Files are processed in the given order; discovery is left to the caller.
    Keys are unioned and diagnostics concatenated in file order.

    Args:
        file_paths: Paths of the files to process.
        continue_on_error: If True, log and count unreadable or unsupported
            files and keep going. If False, re-raise the first such error.

    Returns:
        A tuple of (result, stats) where:
        - result: the merged ExtractionResult
        - stats: ExtractionStats with processing counters
    """
    stats = ExtractionStats()
    results: List[ExtractionResult] = []

    for file_path in file_paths:
        try:
            result = extract_file(file_path)
        except FileNotFoundError as e:
            logger.error(f"File not found: {e}")
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue
        except ValueError as e:
            logger.error(f"Invalid file: {e}")
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue
        except OSError as e:
            logger.error(f"Unreadable file {file_path}: {e}")
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue

        results.append(result)
        stats.files_processed += 1

    merged = ExtractionResult.merge(results)
    stats.keys_extracted = len(merged.success)
    stats.warnings = len(merged.warnings)
    stats.errors = len(merged.errors)

    logger.info(f"Extraction complete: {stats}")
    return merged, stats


def filter_new_keys(keys: Iterable[str], existing_keys: Iterable[str]) -> List[str]:
    """Return the sorted keys that are not already known.

    Args:
        keys: Extracted keys, e.g. ``result.success``.
        existing_keys: Keys from a previous extraction or translation catalog.

    Returns:
        Sorted list of keys absent from ``existing_keys``.

    Example:
        >>> filter_new_keys({"a", "b", "c"}, ["b"])
        ['a', 'c']
    """
    known = set(existing_keys)
    return sorted(key for key in set(keys) if key not in known)
