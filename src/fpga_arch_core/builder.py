# src/fpga_arch_core/builder.py
"""
Top-level entry point: reads an architecture file under a run configuration,
derives the grid layout, and optionally writes the echo report.

Any diagnosable error from the parser, the validator, the grid sizing or the
configuration loader is re-raised as a single `ArchitectureBuildError` whose
message is the full diagnostic report. Nothing built before the failure is
returned.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .config import RunConfig, RunConfigLoader
from .data_structures import ArchitectureDescription
from .echo import write_echo_report
from .errors import ArchitectureBuildError, DiagnosableError, format_diagnostic_report
from .layout import GridLayout, derive_grid_layout
from .parser import ArchitectureParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchitectureBuildResult:
    architecture: ArchitectureDescription
    layout: GridLayout


class ArchitectureBuilder:
    """Runs parse, validation and grid sizing as one all-or-nothing operation."""

    def build(self, arch_path: Union[str, Path], run_config: RunConfig) -> ArchitectureBuildResult:
        logger.info(f"--- Building architecture from '{arch_path}' ({run_config.route_type.value} routing) ---")
        try:
            parser = ArchitectureParser(route_type=run_config.route_type)
            architecture = parser.parse(arch_path)
            layout = derive_grid_layout(architecture.io_rat, run_config.sizing)
            if run_config.echo_file is not None:
                write_echo_report(architecture, arch_path, run_config.route_type, run_config.echo_file)
            logger.info(f"--- Architecture build for '{arch_path}' successful. ---")
            return ArchitectureBuildResult(architecture=architecture, layout=layout)

        except DiagnosableError as e:
            raise ArchitectureBuildError(e.get_diagnostic_report()) from e

        except OSError as e:
            report = format_diagnostic_report(
                error_type=f"I/O Error ({type(e).__name__})",
                details=f"The architecture build could not read or write a file: {e}",
                suggestion="Check the paths and permissions of the architecture file and the echo file.",
                context={'source_file': arch_path}
            )
            raise ArchitectureBuildError(report) from e

    def build_from_files(self, arch_path: Union[str, Path], config_path: Union[str, Path]) -> ArchitectureBuildResult:
        """Loads the run configuration YAML, then builds."""
        try:
            run_config = RunConfigLoader().load(config_path)
        except DiagnosableError as e:
            raise ArchitectureBuildError(e.get_diagnostic_report()) from e
        return self.build(arch_path, run_config)
