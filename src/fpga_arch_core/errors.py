# src/fpga_arch_core/errors.py
"""
Error types shared by every stage of an architecture build.

Parse, validation, grid and configuration failures all derive from
`DiagnosableError` and render themselves through `format_diagnostic_report`,
so the builder can hand the user one report layout regardless of which stage
failed.
"""
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol
from typing import runtime_checkable

logger = logging.getLogger(__name__)


class FpgaArchError(Exception):
    """Base class for errors raised to callers of the package."""


class ArchitectureBuildError(FpgaArchError):
    """
    Raised by `ArchitectureBuilder` when any stage fails. The message is the
    failing stage's diagnostic report; the original exception is `__cause__`.
    """


@runtime_checkable
class Diagnosable(Protocol):
    def get_diagnostic_report(self) -> str:
        ...


class DiagnosableError(Exception, Diagnosable):
    """Stage-level error that can describe itself with file, line and field context."""
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Lays out a report as a header block, indented details and a suggestion.

    Recognized context keys are 'source_file', 'line_number', 'field' and
    'user_input'; missing or empty ones are left out of the header.
    """
    lines = [
        "\n",
        "================ FPGA Architecture Build: Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if (line_number := context.get('line_number')) is not None:
        lines.append(f"Line:           {line_number}")
    if field_name := context.get('field'):
        lines.append(f"Field:          {field_name}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=" * 76)
    return "\n".join(lines)
