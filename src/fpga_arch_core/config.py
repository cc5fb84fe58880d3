# src/fpga_arch_core/config.py
"""
Run configuration for building an architecture: routing mode and grid sizing
inputs, read from a YAML file and checked against a Cerberus schema.
"""
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import cerberus
import yaml

from .arch_enums import RouteType
from .errors import DiagnosableError, format_diagnostic_report
from .layout import PlacementSizing

logger = logging.getLogger(__name__)


@dataclass()
class ConfigurationError(DiagnosableError):
    """The run configuration file is missing, unreadable or not valid YAML."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Configuration error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Run Configuration File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains a YAML mapping.",
            context={'source_file': self.file_path}
        )


def _flatten_errors(errors: Dict[str, Any], prefix: str = "") -> List[Tuple[str, str]]:
    """Turns Cerberus' nested error tree into (dotted.field, message) pairs."""
    flat = []
    for key, entries in sorted(errors.items(), key=lambda item: str(item[0])):
        name = f"{prefix}{key}"
        for entry in entries:
            if isinstance(entry, dict):
                flat.extend(_flatten_errors(entry, prefix=f"{name}."))
            else:
                flat.append((name, str(entry)))
    return flat


@dataclass()
class ConfigSchemaError(DiagnosableError):
    """The run configuration does not match the expected structure."""
    errors: Dict[str, Any]
    file_path: Path

    def __str__(self):
        error_lines = [f"  - In field '{name}': {message}" for name, message in _flatten_errors(self.errors)]
        return (
            f"Run configuration validation failed for file '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        flat = _flatten_errors(self.errors)
        error_list_str = "\n".join(f"  - Field '{name}': {message}" for name, message in flat)
        details = (
            "The run configuration does not conform to the required schema.\n"
            f"See details for {len(flat)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Run Configuration Schema Error",
            details=details,
            suggestion="Correct the listed fields. 'num_blocks' and 'num_pads' are required; 'route_type' is 'global' or 'detailed'.",
            context={'source_file': self.file_path}
        )


class ConfigValidator(cerberus.Validator):
    """Cerberus validator with a strict-positivity rule for real-valued fields."""
    def __init__(self, *args, **kwargs):
        super(ConfigValidator, self).__init__(*args, **kwargs)
        self.rules['positive'] = {'schema': {'type': 'boolean'}}

    def _validate_positive(self, constraint: bool, field: str, value: Any):
        """
        Rejects values that are zero, negative or not finite.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, (int, float)):
            return
        try:
            finite = math.isfinite(value)
        except OverflowError:
            # Integers too large for a float.
            finite = False
        if not finite:
            self._error(field, f"must be a finite number, got {value}")
        elif not value > 0:
            self._error(field, f"must be greater than 0, got {value}")


@dataclass(frozen=True)
class RunConfig:
    """Validated run configuration."""
    route_type: RouteType
    sizing: PlacementSizing
    echo_file: Optional[Path] = None


class RunConfigLoader:
    """Loads and validates run configuration YAML files."""

    _schema = {
        "route_type": {"type": "string", "allowed": [t.value for t in RouteType], "default": RouteType.GLOBAL.value},
        "aspect_ratio": {"type": "number", "positive": True, "default": 1.0},
        "grid": {
            "type": "dict", "required": False, "schema": {
                "width": {"type": "integer", "required": True, "min": 1},
                "height": {"type": "integer", "required": True, "min": 1},
            },
        },
        "num_blocks": {"type": "integer", "required": True, "min": 0},
        "num_pads": {"type": "integer", "required": True, "min": 0},
        "echo_file": {"type": "string", "required": False, "empty": False},
    }

    def __init__(self):
        self._validator = ConfigValidator(self._schema)
        self._validator.allow_unknown = False

    def load(self, config_path: Union[str, Path]) -> RunConfig:
        path = Path(config_path).resolve()
        logger.info(f"Loading run configuration: {path}")
        return self.from_dict(self._load_yaml(path), path)

    def from_dict(self, content: Dict[str, Any], path: Path = Path("<memory>")) -> RunConfig:
        if not self._validator.validate(content):
            raise ConfigSchemaError(self._validator.errors, path)
        document = self._validator.document

        fixed_size = None
        if grid := document.get("grid"):
            fixed_size = (grid["width"], grid["height"])

        echo_file = None
        if document.get("echo_file"):
            echo_file = Path(document["echo_file"])
            if not echo_file.is_absolute() and path.parent.exists():
                echo_file = path.parent / echo_file

        config = RunConfig(
            route_type=RouteType(document["route_type"]),
            sizing=PlacementSizing(
                num_blocks=document["num_blocks"],
                num_pads=document["num_pads"],
                aspect_ratio=float(document["aspect_ratio"]),
                fixed_size=fixed_size,
            ),
            echo_file=echo_file,
        )
        logger.debug(f"Run configuration: {config}")
        return config

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        if not source.is_file():
            raise ConfigurationError(details=f"Run configuration file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
            if content is None:
                raise ConfigurationError(details="The YAML file is empty or contains no valid content.", file_path=source)
            if not isinstance(content, dict):
                raise ConfigurationError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
            return content
        except PermissionError as e:
            raise ConfigurationError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
