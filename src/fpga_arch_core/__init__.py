# src/fpga_arch_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("FPGA Arch Core package initialized.")

from .arch_enums import (
    CellKind, ChannelKind, FcType, PinDirection, PinSide, RouteType, SwitchBlockType,
)
from .data_structures import (
    ArchitectureDescription,
    ChannelDistribution,
    DetailedRoutingArchitecture,
    PinClass,
    PinRecord,
)
from .parser import ArchitectureParser, ArchitectureParsingError
from .validation import ArchitectureValidationError, ArchIssueCode, ConsistencyValidator
from .layout import GridLayout, GridLayoutError, PlacementSizing, derive_grid_layout
from .config import RunConfig, RunConfigLoader, ConfigurationError, ConfigSchemaError
from .echo import format_architecture, render_echo_report, write_echo_report
from .builder import ArchitectureBuilder, ArchitectureBuildResult
from .errors import FpgaArchError, ArchitectureBuildError, DiagnosableError

__all__ = [
    # Enums
    "CellKind", "ChannelKind", "FcType", "PinDirection", "PinSide", "RouteType", "SwitchBlockType",
    # Data Structures
    "ArchitectureDescription", "ChannelDistribution", "DetailedRoutingArchitecture",
    "PinClass", "PinRecord",
    # Parser and Validation
    "ArchitectureParser", "ArchitectureParsingError",
    "ConsistencyValidator", "ArchitectureValidationError", "ArchIssueCode",
    # Layout
    "GridLayout", "GridLayoutError", "PlacementSizing", "derive_grid_layout",
    # Configuration
    "RunConfig", "RunConfigLoader", "ConfigurationError", "ConfigSchemaError",
    # Echo
    "format_architecture", "render_echo_report", "write_echo_report",
    # Builder
    "ArchitectureBuilder", "ArchitectureBuildResult",
    # Top-Level Errors
    "FpgaArchError", "ArchitectureBuildError", "DiagnosableError",
]
