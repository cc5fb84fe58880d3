# src/fpga_arch_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ArchIssueCode(Enum):
    """
    Registry of architecture consistency issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Field presence ---
    MISSING_FIELD = ("MISSING_FIELD", "'{field_name}' not set in file {source}.")
    DUPLICATE_FIELD = ("DUPLICATE_FIELD", "'{field_name}' set {count} times in file {source} (lines {lines}).")
    NO_PINS_DEFINED = ("NO_PINS_DEFINED", "Logic block in file {source} has no inpin or outpin statements.")

    # --- Detailed routing ---
    INCONSISTENT_DETAILED_ROUTING = ("INCONSISTENT_DETAILED_ROUTING", "{reason}")
    DETAILED_FIELDS_IGNORED = ("DETAILED_FIELDS_IGNORED", "'{field_name}' is only used for detailed routing and is ignored in {route_type} mode.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
