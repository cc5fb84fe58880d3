# src/fpga_arch_core/layout/__init__.py
from .exceptions import (
    GridLayoutError,
    SizeTooSmallError,
    DegenerateGridError,
    CoordinateOverflowError,
)
from .grid import GridLayout, PlacementSizing, compute_grid_size, derive_grid_layout

__all__ = [
    "GridLayout",
    "PlacementSizing",
    "compute_grid_size",
    "derive_grid_layout",
    "GridLayoutError",
    "SizeTooSmallError",
    "DegenerateGridError",
    "CoordinateOverflowError",
]
