# src/fpga_arch_core/validation/issues.py
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


class ValidationIssueLevel(Enum):
    """ERROR aborts the parse; INFO is only logged."""
    ERROR = "ERROR"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass
class ValidationIssue:
    """
    A single problem found by the consistency checks, with the field it concerns
    and the line(s) where that field was set, when there are any.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    field_name: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.field_name:
            parts.append(f"Field: {self.field_name}")
        parts.append(f"Message: {self.message}")
        return " ".join(parts)
