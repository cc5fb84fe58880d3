# src/fpga_arch_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import ArchIssueCode
from .consistency_validator import ConsistencyValidator
from .exceptions import ArchitectureValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "ArchIssueCode",
    "ConsistencyValidator",
    "ArchitectureValidationError",
]
