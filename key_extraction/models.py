"""
Data models for extracted i18n keys and diagnostics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

Line = Union[int, str]


@dataclass(frozen=True)
class DiagnosticRecord:
    """One warning or error raised for a single occurrence.

    Attributes:
        key: Extracted text (warnings) or a source snippet of the offending
            expression (errors on unresolvable constructs).
        reason: Human-readable classification reason.
        file_path: Label of the source unit, usually its file path.
        line: 1-indexed line of the occurrence, or "?" when unknown.
    """

    key: str
    reason: str
    file_path: str
    line: Line

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to the JSON shape used by diagnostic reports."""
        return {
            "key": self.key,
            "reason": self.reason,
            "filePath": self.file_path,
            "line": self.line,
        }


class OutcomeKind(Enum):
    ACCEPTED = "accepted"
    ACCEPTED_WITH_WARNING = "accepted_with_warning"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Outcome:
    """Classification of one call or markup occurrence."""

    kind: OutcomeKind
    key: str
    line: Line
    reason: Optional[str] = None

    @classmethod
    def accepted(cls, key: str, line: Line) -> "Outcome":
        return cls(OutcomeKind.ACCEPTED, key, line)

    @classmethod
    def accepted_with_warning(cls, key: str, reason: str, line: Line) -> "Outcome":
        return cls(OutcomeKind.ACCEPTED_WITH_WARNING, key, line, reason)

    @classmethod
    def rejected(cls, key: str, reason: str, line: Line) -> "Outcome":
        return cls(OutcomeKind.REJECTED, key, line, reason)

    @property
    def is_accepted(self) -> bool:
        return self.kind is not OutcomeKind.REJECTED

    def to_diagnostic(self, file_path: str) -> DiagnosticRecord:
        """Build the diagnostic record for a warned or rejected outcome.

        Raises:
            ValueError: If the outcome is a plain acceptance.
        """
        if self.reason is None:
            raise ValueError(f"Outcome {self.kind.value} carries no diagnostic")
        return DiagnosticRecord(
            key=self.key,
            reason=self.reason,
            file_path=file_path,
            line=self.line,
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Keys and diagnostics extracted from one or more source units.

    Attributes:
        success: Deduplicated accepted keys.
        warnings: Warnings in visit order.
        errors: Errors in visit order.
    """

    success: FrozenSet[str] = field(default_factory=frozenset)
    warnings: Tuple[DiagnosticRecord, ...] = ()
    errors: Tuple[DiagnosticRecord, ...] = ()

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls()

    @classmethod
    def merge(cls, results: Iterable["ExtractionResult"]) -> "ExtractionResult":
        """Union the key sets and concatenate diagnostics in input order."""
        success = set()
        warnings = []
        errors = []
        for result in results:
            success.update(result.success)
            warnings.extend(result.warnings)
            errors.extend(result.errors)
        return cls(frozenset(success), tuple(warnings), tuple(errors))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary suitable for JSON serialization.

        Keys are sorted so the output is stable across runs.
        """
        return {
            "success": sorted(self.success),
            "warnings": [w.to_dict() for w in self.warnings],
            "errors": [e.to_dict() for e in self.errors],
        }
