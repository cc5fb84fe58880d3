# src/fpga_arch_core/layout/exceptions.py
"""
Diagnosable exceptions for sizing the FPGA grid.
"""
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class GridLayoutError(DiagnosableError):
    """Base class for grid sizing failures."""
    details: str
    width: Optional[int] = None
    height: Optional[int] = None

    error_type: ClassVar[str] = "Grid Layout Error"
    suggestion: ClassVar[str] = "Review the grid sizing inputs."

    def __str__(self):
        return f"Grid layout error ({self.width} x {self.height}): {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type=self.error_type,
            details=f"{self.details}\nGrid size: {self.width} x {self.height}.",
            suggestion=self.suggestion,
            context={}
        )


@dataclass()
class SizeTooSmallError(GridLayoutError):
    error_type: ClassVar[str] = "Grid Too Small"
    suggestion: ClassVar[str] = "Increase the requested width/height, or let the grid be sized automatically."


@dataclass()
class DegenerateGridError(GridLayoutError):
    error_type: ClassVar[str] = "Degenerate Grid"
    suggestion: ClassVar[str] = "A 1 x 1 grid leaves the placer no legal moves; use a larger grid or a larger circuit."


@dataclass()
class CoordinateOverflowError(GridLayoutError):
    error_type: ClassVar[str] = "Grid Coordinate Overflow"
    suggestion: ClassVar[str] = "Width and height must not exceed 32766; reduce the circuit size or adjust the aspect ratio."
