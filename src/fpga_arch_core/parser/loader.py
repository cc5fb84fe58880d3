# src/fpga_arch_core/parser/loader.py
"""
Pass 2 of the architecture parser: field loading.

Re-reads the stream from the start and dispatches each statement on its
leading keyword. Values and per-field occurrence counts are collected in a
`ParseContext` that is threaded through every reader; nothing is stored in
module state, so the parser is re-entrant.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ..arch_enums import ChannelKind, FcType, PinDirection, SwitchBlockType
from ..constants import (
    CHAN_WIDTH_IO, CHAN_WIDTH_IO_BOUNDS, CHAN_WIDTH_X, CHAN_WIDTH_Y,
    CHANNEL_WIDTH_BOUNDS, DELTA_PEAK_BOUNDS, FC_BOUNDS, FC_INPUT, FC_OUTPUT,
    FC_PAD, FC_TYPE, FRACTION_BOUNDS, INPIN, IO_RAT, OUTPIN, SHAPED_PEAK_BOUNDS,
    SUBBLOCK_LUT_SIZE, SUBBLOCKS_PER_CLUSTER, SWITCH_BLOCK_TYPE, UNIFORM_PEAK_BOUNDS,
)
from ..data_structures import (
    ArchitectureDescription,
    ChannelDistribution,
    DetailedRoutingArchitecture,
    PinClass,
    PinRecord,
)
from .discovery import ClassSchema, PinStorage
from .exceptions import MixedDirectionClassError, NoPinLocationError, UnknownDistributionKindError
from .scalars import parse_side, read_class_id, read_enum_statement, read_float, read_keyword, read_positive_int
from .tokenizer import LineCursor, TokenStream

logger = logging.getLogger(__name__)


class FieldPresenceCounters:
    """Records the lines on which each field was set, to spot missing and repeated fields."""

    def __init__(self):
        self._lines: Dict[str, List[int]] = defaultdict(list)

    def record(self, field_name: str, line_number: int) -> None:
        self._lines[field_name].append(line_number)

    def count(self, field_name: str) -> int:
        return len(self._lines.get(field_name, ()))

    def lines(self, field_name: str) -> List[int]:
        return list(self._lines.get(field_name, ()))


@dataclass
class ParseContext:
    """Everything the loading pass accumulates for one parse call."""
    source: Union[str, Path]
    schema: ClassSchema
    storage: PinStorage
    counters: FieldPresenceCounters = field(default_factory=FieldPresenceCounters)
    next_pin: int = 0
    io_rat: Optional[int] = None
    chan_width_io: Optional[float] = None
    chan_x: Optional[ChannelDistribution] = None
    chan_y: Optional[ChannelDistribution] = None
    max_subblocks_per_block: Optional[int] = None
    subblock_lut_size: Optional[int] = None
    fc_output: Optional[float] = None
    fc_input: Optional[float] = None
    fc_pad: Optional[float] = None
    fc_type: Optional[FcType] = None
    switch_block_type: Optional[SwitchBlockType] = None

    @property
    def has_detailed_routing(self) -> bool:
        return None not in (self.fc_output, self.fc_input, self.fc_pad, self.fc_type, self.switch_block_type)

    def build_description(self) -> ArchitectureDescription:
        """Freezes the loaded values. Only valid after the consistency checks passed."""
        pin_classes = tuple(
            PinClass(
                id=class_id,
                direction=self.storage.directions[class_id],
                members=tuple(int(pin) for pin in self.storage.class_members[class_id]),
            )
            for class_id in range(self.schema.num_classes)
        )
        pins = tuple(
            PinRecord(
                index=pin,
                class_id=int(self.storage.pin_class[pin]),
                sides=frozenset(self.storage.pin_sides[pin]),
            )
            for pin in range(self.schema.total_pins)
        )
        detailed = None
        if self.has_detailed_routing:
            detailed = DetailedRoutingArchitecture(
                fc_output=self.fc_output,
                fc_input=self.fc_input,
                fc_pad=self.fc_pad,
                fc_type=self.fc_type,
                switch_block_type=self.switch_block_type,
            )
        return ArchitectureDescription(
            io_rat=self.io_rat,
            chan_width_io=self.chan_width_io,
            chan_x=self.chan_x,
            chan_y=self.chan_y,
            pin_classes=pin_classes,
            pins=pins,
            max_subblocks_per_block=self.max_subblocks_per_block,
            subblock_lut_size=self.subblock_lut_size,
            detailed_routing=detailed,
        )


def read_channel(cursor: LineCursor, context: ParseContext) -> ChannelDistribution:
    """
    Reads `<kind> peak [width] [xpeak dc]` for chan_width_x / chan_width_y.
    uniform takes only peak, delta takes peak xpeak dc, gaussian and pulse take all four.
    """
    kind = read_keyword(
        cursor, ChannelKind, what=f"{cursor.keyword} distribution",
        exc_cls=UnknownDistributionKindError,
    )
    context.counters.record(cursor.keyword, cursor.line_number)

    if kind is ChannelKind.UNIFORM:
        channel = ChannelDistribution(kind=kind, peak=read_float(cursor, UNIFORM_PEAK_BOUNDS, "peak"))
    elif kind is ChannelKind.DELTA:
        peak = read_float(cursor, DELTA_PEAK_BOUNDS, "peak")
        xpeak = read_float(cursor, FRACTION_BOUNDS, "xpeak")
        dc = read_float(cursor, FRACTION_BOUNDS, "dc")
        channel = ChannelDistribution(kind=kind, peak=peak, xpeak=xpeak, dc=dc)
    else:
        peak = read_float(cursor, SHAPED_PEAK_BOUNDS, "peak")
        width = read_float(cursor, CHANNEL_WIDTH_BOUNDS, "width")
        xpeak = read_float(cursor, FRACTION_BOUNDS, "xpeak")
        dc = read_float(cursor, FRACTION_BOUNDS, "dc")
        channel = ChannelDistribution(kind=kind, peak=peak, width=width, xpeak=xpeak, dc=dc)

    cursor.expect_end()
    return channel


def read_pin(cursor: LineCursor, context: ParseContext, direction: PinDirection) -> None:
    """
    Loads one `inpin`/`outpin` statement into the preallocated pin tables.
    The pin index is the statement's position among all pin statements.
    """
    storage = context.storage
    pin = context.next_pin
    class_id = read_class_id(cursor)

    recorded = storage.directions[class_id]
    if recorded is None:
        storage.directions[class_id] = direction
    elif recorded is not direction:
        raise cursor.error(
            MixedDirectionClassError,
            f"Class {class_id} contains both input and output pins.",
            field_name=cursor.keyword,
            token=str(class_id),
        )

    slot = storage.fill_counts[class_id]
    storage.class_members[class_id][slot] = pin
    storage.fill_counts[class_id] = slot + 1
    storage.pin_class[pin] = class_id

    if cursor.peek() is None:
        raise cursor.error(
            NoPinLocationError,
            f"Pin statement for pin {pin} specifies no locations.",
            field_name=cursor.keyword,
        )
    for token in cursor.remaining():
        storage.pin_sides[pin].add(parse_side(cursor, token))
    cursor.skip_rest()

    context.next_pin = pin + 1
    context.counters.record(cursor.keyword, cursor.line_number)


# --- Statement handlers, keyed by leading keyword ---

def _load_io_rat(cursor: LineCursor, context: ParseContext) -> None:
    context.io_rat = read_positive_int(cursor)
    context.counters.record(IO_RAT, cursor.line_number)


def _load_chan_x(cursor: LineCursor, context: ParseContext) -> None:
    context.chan_x = read_channel(cursor, context)


def _load_chan_y(cursor: LineCursor, context: ParseContext) -> None:
    context.chan_y = read_channel(cursor, context)


def _load_chan_width_io(cursor: LineCursor, context: ParseContext) -> None:
    context.chan_width_io = read_float(cursor, CHAN_WIDTH_IO_BOUNDS)
    cursor.expect_end()
    context.counters.record(CHAN_WIDTH_IO, cursor.line_number)


def _load_outpin(cursor: LineCursor, context: ParseContext) -> None:
    read_pin(cursor, context, PinDirection.DRIVER)


def _load_inpin(cursor: LineCursor, context: ParseContext) -> None:
    read_pin(cursor, context, PinDirection.RECEIVER)


def _load_subblocks(cursor: LineCursor, context: ParseContext) -> None:
    context.max_subblocks_per_block = read_positive_int(cursor)
    context.counters.record(SUBBLOCKS_PER_CLUSTER, cursor.line_number)


def _load_lut_size(cursor: LineCursor, context: ParseContext) -> None:
    context.subblock_lut_size = read_positive_int(cursor)
    context.counters.record(SUBBLOCK_LUT_SIZE, cursor.line_number)


def _fc_loader(attribute: str) -> Callable[[LineCursor, ParseContext], None]:
    def load(cursor: LineCursor, context: ParseContext) -> None:
        setattr(context, attribute, read_float(cursor, FC_BOUNDS))
        cursor.expect_end()
        context.counters.record(cursor.keyword, cursor.line_number)
    return load


def _load_fc_type(cursor: LineCursor, context: ParseContext) -> None:
    context.fc_type = read_enum_statement(cursor, FcType)
    context.counters.record(FC_TYPE, cursor.line_number)


def _load_switch_block_type(cursor: LineCursor, context: ParseContext) -> None:
    context.switch_block_type = read_enum_statement(cursor, SwitchBlockType)
    context.counters.record(SWITCH_BLOCK_TYPE, cursor.line_number)


STATEMENT_HANDLERS: Dict[str, Callable[[LineCursor, ParseContext], None]] = {
    IO_RAT: _load_io_rat,
    CHAN_WIDTH_X: _load_chan_x,
    CHAN_WIDTH_Y: _load_chan_y,
    CHAN_WIDTH_IO: _load_chan_width_io,
    OUTPIN: _load_outpin,
    INPIN: _load_inpin,
    SUBBLOCKS_PER_CLUSTER: _load_subblocks,
    SUBBLOCK_LUT_SIZE: _load_lut_size,
    FC_OUTPUT: _fc_loader("fc_output"),
    FC_INPUT: _fc_loader("fc_input"),
    FC_PAD: _fc_loader("fc_pad"),
    FC_TYPE: _load_fc_type,
    SWITCH_BLOCK_TYPE: _load_switch_block_type,
}


def load_fields(stream: TokenStream, schema: ClassSchema, storage: PinStorage) -> ParseContext:
    """Runs the loading pass over the whole stream, starting from its first line."""
    stream.rewind()
    context = ParseContext(source=stream.source, schema=schema, storage=storage)

    for cursor in stream:
        handler = STATEMENT_HANDLERS.get(cursor.keyword)
        if handler is None:
            logger.debug(f"Line {cursor.line_number}: skipping unrecognized keyword '{cursor.keyword}'.")
            continue
        handler(cursor, context)
        logger.debug(f"Line {cursor.line_number}: loaded '{cursor.keyword}'.")

    logger.info(f"Pass 2 complete: loaded {context.next_pin} pin statement(s) from '{stream.source}'.")
    return context
