# src/fpga_arch_core/layout/grid.py
"""
Sizes the FPGA grid and fills the per-cell metadata.

The grid has `width x height` logic cells surrounded by a ring of I/O cells.
All arrays are indexed `[x, y]` with x in `[0, width + 1]` and y in
`[0, height + 1]`; the four corners are unusable.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..arch_enums import CellKind
from ..constants import MAX_GRID_DIMENSION
from .exceptions import CoordinateOverflowError, DegenerateGridError, SizeTooSmallError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementSizing:
    """Circuit-side inputs to grid sizing."""
    num_blocks: int
    num_pads: int
    aspect_ratio: float = 1.0
    fixed_size: Optional[Tuple[int, int]] = None  # (width, height)

    def __post_init__(self):
        if self.num_blocks < 0 or self.num_pads < 0:
            raise ValueError("Block and pad counts must be non-negative.")
        if not (math.isfinite(self.aspect_ratio) and self.aspect_ratio > 0):
            raise ValueError(f"Aspect ratio must be positive and finite, got {self.aspect_ratio}.")


@dataclass(frozen=True, eq=False)
class GridLayout:
    """
    Read-only grid description handed to placement and routing.

    `chan_width_x` has one entry per horizontal channel (`height + 1`) and
    `chan_width_y` one per vertical channel (`width + 1`).
    """
    width: int
    height: int
    io_rat: int
    cell_kind: np.ndarray
    capacity: np.ndarray
    occupancy: np.ndarray
    chan_width_x: np.ndarray
    chan_width_y: np.ndarray

    @property
    def io_slot_count(self) -> int:
        return 2 * self.io_rat * (self.width + self.height)

    def kind_at(self, x: int, y: int) -> CellKind:
        return CellKind(int(self.cell_kind[x, y]))

    def same_as(self, other: "GridLayout") -> bool:
        """Element-wise comparison of two layouts."""
        return (
            (self.width, self.height, self.io_rat) == (other.width, other.height, other.io_rat)
            and np.array_equal(self.cell_kind, other.cell_kind)
            and np.array_equal(self.capacity, other.capacity)
            and np.array_equal(self.occupancy, other.occupancy)
            and np.array_equal(self.chan_width_x, other.chan_width_x)
            and np.array_equal(self.chan_width_y, other.chan_width_y)
        )


def compute_grid_size(io_rat: int, sizing: PlacementSizing) -> Tuple[int, int]:
    """
    Returns (width, height). A user-fixed size is only checked for capacity;
    otherwise the smallest grid with the requested aspect ratio that holds all
    blocks and, on its perimeter, all pads is chosen.
    """
    if sizing.fixed_size is not None:
        width, height = sizing.fixed_size
        if (width < 1 or height < 1 or sizing.num_blocks > width * height
                or sizing.num_pads > 2 * io_rat * (width + height)):
            raise SizeTooSmallError(
                details=(
                    f"User-specified size is too small for circuit: {sizing.num_blocks} block(s) need "
                    f"{sizing.num_blocks} site(s) and {sizing.num_pads} pad(s) need "
                    f"{sizing.num_pads} I/O slot(s); the grid offers {max(width, 0) * max(height, 0)} "
                    f"site(s) and {2 * io_rat * (width + height)} slot(s)."
                ),
                width=width,
                height=height,
            )
        return width, height

    # Area = width * height = height^2 * aspect; perimeter = 2 * height * (1 + aspect).
    height = math.ceil(math.sqrt(sizing.num_blocks / sizing.aspect_ratio))
    io_limit = math.ceil(sizing.num_pads / (2 * io_rat * (1.0 + sizing.aspect_ratio)))
    height = max(height, io_limit, 1)
    width = math.ceil(height * sizing.aspect_ratio)
    return width, height


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def derive_grid_layout(io_rat: int, sizing: PlacementSizing) -> GridLayout:
    """
    Sizes the grid and builds its cell tables.

    Raises:
        SizeTooSmallError: a user-fixed size cannot hold the blocks or pads.
        DegenerateGridError: the grid is 1 x 1 and there is at least one block.
        CoordinateOverflowError: width or height exceeds 32766.
    """
    width, height = compute_grid_size(io_rat, sizing)

    if width == 1 and height == 1 and sizing.num_blocks != 0:
        raise DegenerateGridError(
            details="Cannot place a circuit with only one valid location for a logic block.",
            width=width,
            height=height,
        )

    if width > MAX_GRID_DIMENSION or height > MAX_GRID_DIMENSION:
        raise CoordinateOverflowError(
            details=f"Width and height must be at most {MAX_GRID_DIMENSION}; got {width} and {height}.",
            width=width,
            height=height,
        )

    cell_kind = np.full((width + 2, height + 2), CellKind.ILLEGAL, dtype=np.int8)
    cell_kind[1:width + 1, 0] = CellKind.IO
    cell_kind[1:width + 1, height + 1] = CellKind.IO
    cell_kind[0, 1:height + 1] = CellKind.IO
    cell_kind[width + 1, 1:height + 1] = CellKind.IO
    cell_kind[1:width + 1, 1:height + 1] = CellKind.LOGIC

    # Indexed by CellKind value: ILLEGAL, IO, LOGIC.
    capacity_by_kind = np.array([0, io_rat, 1], dtype=np.int64)
    capacity = capacity_by_kind[cell_kind]

    layout = GridLayout(
        width=width,
        height=height,
        io_rat=io_rat,
        cell_kind=_read_only(cell_kind),
        capacity=_read_only(capacity),
        occupancy=_read_only(np.zeros_like(capacity)),
        chan_width_x=_read_only(np.zeros(height + 1, dtype=np.int64)),
        chan_width_y=_read_only(np.zeros(width + 1, dtype=np.int64)),
    )
    logger.info(
        f"Grid sized to {width} x {height} logic cells with {layout.io_slot_count} I/O slot(s) "
        f"for {sizing.num_blocks} block(s) and {sizing.num_pads} pad(s)."
    )
    return layout
