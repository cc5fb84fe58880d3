# src/fpga_arch_core/parser/exceptions.py
"""
Diagnosable exceptions for reading an architecture description file.

Every error found while tokenizing, scanning for pin classes or loading fields
is fatal. Each concrete class names one failure kind and carries the line of
the logical statement being read, so the report always points at the offending
line of the file. All of them derive from `ArchitectureParsingError`, which
lets callers catch the whole family with a single `except` clause.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Union

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ArchitectureParsingError(DiagnosableError):
    """
    Base class for all architecture file errors.

    Subclasses only override the report title and the suggestion text; the
    location fields are shared.
    """
    details: str
    source: Optional[Union[str, Path]] = None
    line_number: Optional[int] = None
    field_name: Optional[str] = None
    token: Optional[str] = None

    error_type: ClassVar[str] = "Architecture Parsing Error"
    suggestion: ClassVar[str] = "Check the format of the indicated line in the architecture file."

    def __str__(self):
        where = f" on line {self.line_number}" if self.line_number is not None else ""
        return f"Error in architecture file '{self.source}'{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type=self.error_type,
            details=self.details,
            suggestion=self.suggestion,
            context={
                'source_file': self.source,
                'line_number': self.line_number,
                'field': self.field_name,
                'user_input': self.token,
            }
        )


@dataclass()
class ArchitectureFileError(ArchitectureParsingError):
    """The architecture file could not be opened or decoded."""
    error_type: ClassVar[str] = "Architecture File Error"
    suggestion: ClassVar[str] = "Ensure the file exists, has read permissions and is plain text."


@dataclass()
class MissingValueError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Missing Value"
    suggestion: ClassVar[str] = "Supply the value(s) the statement expects after its keyword."


@dataclass()
class MalformedNumberError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Malformed Number"
    suggestion: ClassVar[str] = "Write integers without a decimal point and floats in plain or exponent notation."


@dataclass()
class OutOfRangeError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Out Of Range Value"
    suggestion: ClassVar[str] = "Use a value within the documented bounds for this field."


@dataclass()
class TrailingTokensError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Trailing Tokens"
    suggestion: ClassVar[str] = "Remove the extra values at the end of the statement."


@dataclass()
class UnknownKeywordError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Unknown Keyword"
    suggestion: ClassVar[str] = "Keywords are case-sensitive; use one of the values listed above."


@dataclass()
class UnknownDistributionKindError(UnknownKeywordError):
    error_type: ClassVar[str] = "Unknown Channel Distribution"
    suggestion: ClassVar[str] = "Use one of: uniform, gaussian, pulse, delta."


@dataclass()
class ClassIdGapError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Non-Consecutive Pin Classes"
    suggestion: ClassVar[str] = "Pin class numbers must start at 0 and be consecutive."


@dataclass()
class MixedDirectionClassError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Mixed Direction Pin Class"
    suggestion: ClassVar[str] = "A pin class may contain only inpin or only outpin statements."


@dataclass()
class NoPinLocationError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Missing Pin Location"
    suggestion: ClassVar[str] = "List at least one of top, bottom, left, right after the class number."


@dataclass()
class InvalidPinLocationError(ArchitectureParsingError):
    error_type: ClassVar[str] = "Invalid Pin Location"
    suggestion: ClassVar[str] = "Pin locations must be one of: top, bottom, left, right."
