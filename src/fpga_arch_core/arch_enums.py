# src/fpga_arch_core/arch_enums.py
from enum import Enum, IntEnum


class PinDirection(Enum):
    """Direction shared by every pin of a pin class."""
    DRIVER = "driver"      # outpin
    RECEIVER = "receiver"  # inpin


class PinSide(Enum):
    """Logic-block side a pin can be reached from. Values are the file keywords."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class ChannelKind(Enum):
    """Statistical profile of the track distribution along one channel axis."""
    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"
    PULSE = "pulse"
    DELTA = "delta"


class FcType(Enum):
    ABSOLUTE = "absolute"
    FRACTIONAL = "fractional"


class SwitchBlockType(Enum):
    SUBSET = "subset"
    WILTON = "wilton"
    UNIVERSAL = "universal"


class RouteType(Enum):
    """Routing mode requested by the caller; only DETAILED adds requirements."""
    GLOBAL = "global"
    DETAILED = "detailed"


class CellKind(IntEnum):
    """Kind of a grid cell. Integer valued so it can be stored in numpy arrays."""
    ILLEGAL = 0
    IO = 1
    LOGIC = 2
