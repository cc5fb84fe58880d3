# src/fpga_arch_core/echo.py
"""
Text output for a parsed architecture: the human-readable echo report used to
verify what was read, and a serializer back into the architecture file format.
"""
import logging
from pathlib import Path
from typing import List, Union

from .arch_enums import ChannelKind, FcType, PinDirection, RouteType
from .constants import (
    CHAN_WIDTH_IO, CHAN_WIDTH_X, CHAN_WIDTH_Y, CLASS_MARKER, DEFAULT_ECHO_FILE,
    FC_INPUT, FC_OUTPUT, FC_PAD, FC_TYPE, INPIN, IO_RAT, OUTPIN,
    SUBBLOCK_LUT_SIZE, SUBBLOCKS_PER_CLUSTER, SWITCH_BLOCK_TYPE,
)
from .data_structures import SIDE_ORDER, ArchitectureDescription, ChannelDistribution

logger = logging.getLogger(__name__)


def _channel_statement(keyword: str, chan: ChannelDistribution) -> str:
    if chan.kind is ChannelKind.UNIFORM:
        values = [chan.peak]
    elif chan.kind is ChannelKind.DELTA:
        values = [chan.peak, chan.xpeak, chan.dc]
    else:
        values = [chan.peak, chan.width, chan.xpeak, chan.dc]
    return " ".join([keyword, chan.kind.value] + [repr(v) for v in values])


def format_architecture(arch: ArchitectureDescription) -> str:
    """
    Renders `arch` in the architecture file language. Floats use repr() so
    that parsing the result gives back the same values.
    """
    lines: List[str] = [
        f"{IO_RAT} {arch.io_rat}",
        f"{CHAN_WIDTH_IO} {arch.chan_width_io!r}",
        _channel_statement(CHAN_WIDTH_X, arch.chan_x),
        _channel_statement(CHAN_WIDTH_Y, arch.chan_y),
        "",
    ]
    for pin in arch.pins:
        keyword = OUTPIN if arch.pin_classes[pin.class_id].direction is PinDirection.DRIVER else INPIN
        sides = " ".join(side.value for side in SIDE_ORDER if side in pin.sides)
        lines.append(f"{keyword} {CLASS_MARKER} {pin.class_id} {sides}")
    lines += [
        "",
        f"{SUBBLOCKS_PER_CLUSTER} {arch.max_subblocks_per_block}",
        f"{SUBBLOCK_LUT_SIZE} {arch.subblock_lut_size}",
    ]
    if (det := arch.detailed_routing) is not None:
        lines += [
            "",
            f"{FC_TYPE} {det.fc_type.value}",
            f"{FC_OUTPUT} {det.fc_output!r}",
            f"{FC_INPUT} {det.fc_input!r}",
            f"{FC_PAD} {det.fc_pad!r}",
            f"{SWITCH_BLOCK_TYPE} {det.switch_block_type.value}",
        ]
    return "\n".join(lines) + "\n"


def _channel_echo(name: str, chan: ChannelDistribution) -> List[str]:
    return [
        f"{name}:",
        f"type: {chan.kind.name}  peak: {chan.peak:g}  width: {chan.width:g}  "
        f"xpeak: {chan.xpeak:g}  dc: {chan.dc:g}",
        "",
    ]


def render_echo_report(arch: ArchitectureDescription, source: Union[str, Path],
                       route_type: RouteType) -> str:
    lines = [
        f"Input architecture file: {source}",
        "",
        f"io_rat: {arch.io_rat}.",
        f"chan_width_io: {arch.chan_width_io:g}  pins_per_clb (pins per clb): {arch.pins_per_block}",
        "",
    ]
    lines += _channel_echo("chan_width_x", arch.chan_x)
    lines += _channel_echo("chan_width_y", arch.chan_y)

    lines.append("Pin #\tclass\t" + "\t".join(side.value for side in SIDE_ORDER))
    for pin in arch.pins:
        flags = "\t".join("1" if side in pin.sides else "0" for side in SIDE_ORDER)
        lines.append(f"{pin.index}\t{pin.class_id}\t{flags}")
    lines.append("")

    lines.append("Class\tType\tNumpins\tPins")
    for pin_class in arch.pin_classes:
        members = "\t".join(str(pin) for pin in pin_class.members)
        lines.append(f"{pin_class.id}\t{pin_class.direction.name}\t{pin_class.num_pins}\t{members}")
    lines.append("")

    lines.append(f"subblocks_per_cluster (maximum): {arch.max_subblocks_per_block}")
    lines.append(f"subblock_lut_size: {arch.subblock_lut_size}")

    if route_type is RouteType.DETAILED and (det := arch.detailed_routing) is not None:
        lines.append("")
        if det.fc_type is FcType.ABSOLUTE:
            lines.append("Fc value is absolute number of tracks.")
        else:
            lines.append("Fc value is fraction of tracks in a channel.")
        lines.append(f"Fc_output: {det.fc_output:g}.  Fc_input: {det.fc_input:g}.  Fc_pad: {det.fc_pad:g}.")
        lines.append(f"switch_block_type: {det.switch_block_type.name}.")

    return "\n".join(lines) + "\n"


def write_echo_report(arch: ArchitectureDescription, source: Union[str, Path],
                      route_type: RouteType,
                      destination: Union[str, Path] = DEFAULT_ECHO_FILE) -> Path:
    """Writes the echo report for `arch` and returns the path written."""
    path = Path(destination)
    path.write_text(render_echo_report(arch, source, route_type), encoding="utf-8")
    logger.info(f"Architecture echo written to {path}")
    return path
