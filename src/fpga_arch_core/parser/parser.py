# src/fpga_arch_core/parser/parser.py
import logging
from pathlib import Path
from typing import Union

from ..arch_enums import RouteType
from ..data_structures import ArchitectureDescription
from ..validation import ArchitectureValidationError, ConsistencyValidator, ValidationIssueLevel
from .discovery import allocate_pin_storage, discover_classes
from .loader import load_fields
from .tokenizer import TokenStream

logger = logging.getLogger(__name__)


class ArchitectureParser:
    """
    Reads an architecture description file into an `ArchitectureDescription`.

    The file is scanned twice. Pass 1 discovers the pin classes and sizes the
    pin tables; pass 2 re-reads from the first line and fills the fields and
    tables. The loaded values are then checked against the requested routing
    mode and frozen. Any error aborts the whole parse; nothing partial is
    returned.
    """

    def __init__(self, route_type: RouteType = RouteType.GLOBAL):
        self.route_type = route_type

    def parse(self, arch_path: Union[str, Path]) -> ArchitectureDescription:
        """Parses the architecture file at `arch_path`."""
        path = Path(arch_path)
        logger.info(f"Reading architecture file: {path}")
        return self.parse_stream(TokenStream.from_file(path))

    def parse_text(self, text: str, source: str = "<string>") -> ArchitectureDescription:
        """Parses architecture statements held in memory."""
        return self.parse_stream(TokenStream(text, source=source))

    def parse_stream(self, stream: TokenStream) -> ArchitectureDescription:
        schema = discover_classes(stream)
        storage = allocate_pin_storage(schema)
        context = load_fields(stream, schema, storage)

        issues = ConsistencyValidator(context, self.route_type).validate()
        for issue in issues:
            if issue.level != ValidationIssueLevel.ERROR:
                logger.info(str(issue))
        if any(issue.level == ValidationIssueLevel.ERROR for issue in issues):
            raise ArchitectureValidationError(issues, source=stream.source)

        arch = context.build_description()
        logger.info(
            f"Architecture '{stream.source}' accepted: {arch.num_classes} pin class(es), "
            f"{arch.pins_per_block} pin(s) per block."
        )
        return arch
