# src/fpga_arch_core/parser/discovery.py
"""
Pass 1 of the architecture parser: pin class discovery and storage allocation.

The number of pin classes is never declared in the file. This pass scans every
`inpin`/`outpin` statement, learns the largest class id and how many pins cite
each id, and freezes that into a `ClassSchema`. `allocate_pin_storage` then
sizes every per-class and per-pin array exactly, before the loading pass
starts writing into them.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

import numpy as np

from ..arch_enums import PinDirection, PinSide
from ..constants import PIN_FIELDS
from .exceptions import ClassIdGapError
from .scalars import read_class_id
from .tokenizer import TokenStream

logger = logging.getLogger(__name__)

UNASSIGNED = -1


@dataclass(frozen=True)
class ClassSchema:
    """Finalized result of the discovery pass."""
    pins_per_class: Tuple[int, ...]

    @property
    def num_classes(self) -> int:
        return len(self.pins_per_class)

    @property
    def total_pins(self) -> int:
        return sum(self.pins_per_class)


@dataclass
class PinStorage:
    """
    Fixed-size tables filled in by the loading pass. Nothing here grows after
    allocation; `fill_counts[c]` is the next free slot of `class_members[c]`.
    """
    class_members: List[np.ndarray]
    fill_counts: List[int]
    directions: List[Optional[PinDirection]]
    pin_class: np.ndarray
    pin_sides: List[Set[PinSide]] = field(default_factory=list)


def discover_classes(stream: TokenStream) -> ClassSchema:
    """
    Scans the whole stream once, recognizing only pin statements.

    Raises:
        ClassIdGapError: if some id below the largest one is never used.
        ArchitectureParsingError: if a pin statement has a malformed `class:` part.
    """
    stream.rewind()
    counts: Counter = Counter()
    last_line = 0

    for cursor in stream:
        last_line = cursor.line_number
        if cursor.keyword in PIN_FIELDS:
            counts[read_class_id(cursor)] += 1
        # Drain the logical line so every statement is consumed the same way.
        cursor.skip_rest()

    num_classes = max(counts) + 1 if counts else 0
    if len(counts) != num_classes:
        missing = next(class_id for class_id in range(len(counts) + 1) if class_id not in counts)
        raise ClassIdGapError(
            details=(
                f"Class index {missing} not used in architecture file. "
                f"Specified class indices are not consecutive (highest index is {num_classes - 1})."
            ),
            source=stream.source,
            line_number=last_line,
            field_name="class:",
        )

    schema = ClassSchema(pins_per_class=tuple(counts[class_id] for class_id in range(num_classes)))
    logger.info(
        f"Pass 1 complete: {schema.num_classes} pin class(es), "
        f"{schema.total_pins} pin(s) per block."
    )
    return schema


def allocate_pin_storage(schema: ClassSchema) -> PinStorage:
    """Sizes all pin and class tables from the discovery result."""
    storage = PinStorage(
        class_members=[np.full(count, UNASSIGNED, dtype=np.int64) for count in schema.pins_per_class],
        fill_counts=[0] * schema.num_classes,
        directions=[None] * schema.num_classes,
        pin_class=np.full(schema.total_pins, UNASSIGNED, dtype=np.int64),
        pin_sides=[set() for _ in range(schema.total_pins)],
    )
    logger.debug(f"Allocated storage for {schema.num_classes} classes and {schema.total_pins} pins.")
    return storage
