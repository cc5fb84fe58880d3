# src/fpga_arch_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when an architecture fails its
consistency checks.

All error-level issues found in one validation run are carried together, so a
file missing several mandatory fields reports every one of them at once.
"""
from pathlib import Path
from typing import List, Optional, Union

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class ArchitectureValidationError(DiagnosableError):
    """
    Container for all error-level `ValidationIssue` objects found during a
    consistency validation pass.
    """
    def __init__(self, issues: List[ValidationIssue], source: Optional[Union[str, Path]] = None):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        self.source = source
        if not self.issues:
            summary_message = "ArchitectureValidationError was raised with no error-level issues."
        else:
            error_lines = [str(issue) for issue in self.issues]
            summary_message = (
                f"Architecture validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {line}" for line in error_lines)
            )
        super().__init__(summary_message)

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]

    def get_diagnostic_report(self) -> str:
        error_lines = [str(issue) for issue in self.issues]
        details = (
            f"The architecture file is incomplete or inconsistent.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {line}" for line in error_lines)
        )

        context = {'source_file': self.source}
        first_issue = self.issues[0] if self.issues else None
        if first_issue:
            context['field'] = first_issue.field_name
            if lines := first_issue.details.get('lines'):
                context['line_number'] = lines[-1]

        return format_diagnostic_report(
            error_type="Architecture Consistency Error",
            details=details,
            suggestion="Set every mandatory field exactly once and make the detailed routing parameters agree with each other.",
            context=context
        )
