# src/fpga_arch_core/data_structures.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

import numpy as np

from .arch_enums import ChannelKind, FcType, PinDirection, PinSide, SwitchBlockType

logger = logging.getLogger(__name__)

# Row order of the pin location matrix.
SIDE_ORDER: Tuple[PinSide, ...] = (PinSide.TOP, PinSide.BOTTOM, PinSide.LEFT, PinSide.RIGHT)


@dataclass(frozen=True)
class PinClass:
    """
    A group of logically-equivalent pins (e.g., all the inputs of a LUT).
    `members` holds global pin indices in declaration order.
    """
    id: int
    direction: Optional[PinDirection]
    members: Tuple[int, ...]

    @property
    def num_pins(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class PinRecord:
    """One physical pin of the logic block. `class_id` indexes the pin class table."""
    index: int
    class_id: int
    sides: FrozenSet[PinSide]


@dataclass(frozen=True)
class ChannelDistribution:
    """
    Track distribution of one channel axis. Fields unused by `kind` are 0.0:
    uniform only sets `peak`, delta has no `width`.
    """
    kind: ChannelKind
    peak: float
    width: float = 0.0
    xpeak: float = 0.0
    dc: float = 0.0


@dataclass(frozen=True)
class DetailedRoutingArchitecture:
    fc_output: float
    fc_input: float
    fc_pad: float
    fc_type: FcType
    switch_block_type: SwitchBlockType


@dataclass(frozen=True)
class ArchitectureDescription:
    """
    The validated architecture of one FPGA fabric.

    Built once per parse by the ArchitectureParser and never mutated afterwards.
    `pins[i].index == i` for every pin and every class id in
    `[0, num_classes)` has at least one member.
    """
    io_rat: int
    chan_width_io: float
    chan_x: ChannelDistribution
    chan_y: ChannelDistribution
    pin_classes: Tuple[PinClass, ...]
    pins: Tuple[PinRecord, ...]
    max_subblocks_per_block: int
    subblock_lut_size: int
    detailed_routing: Optional[DetailedRoutingArchitecture] = None

    @property
    def num_classes(self) -> int:
        return len(self.pin_classes)

    @property
    def pins_per_block(self) -> int:
        return len(self.pins)

    def pin_class_of(self, pin_index: int) -> PinClass:
        return self.pin_classes[self.pins[pin_index].class_id]

    def pins_on_side(self, side: PinSide) -> Tuple[int, ...]:
        return tuple(pin.index for pin in self.pins if side in pin.sides)

    def pin_location_matrix(self) -> np.ndarray:
        """
        Returns a boolean matrix of shape (4, pins_per_block); row order is
        top, bottom, left, right and entry [s, p] is set when pin p is on side s.
        """
        matrix = np.zeros((len(SIDE_ORDER), self.pins_per_block), dtype=bool)
        for pin in self.pins:
            for row, side in enumerate(SIDE_ORDER):
                if side in pin.sides:
                    matrix[row, pin.index] = True
        return matrix
