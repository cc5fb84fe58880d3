# src/fpga_arch_core/parser/__init__.py
from .exceptions import (
    ArchitectureParsingError,
    ArchitectureFileError,
    MissingValueError,
    MalformedNumberError,
    OutOfRangeError,
    TrailingTokensError,
    UnknownKeywordError,
    UnknownDistributionKindError,
    ClassIdGapError,
    MixedDirectionClassError,
    NoPinLocationError,
    InvalidPinLocationError,
)
from .tokenizer import LineCursor, TokenStream
from .discovery import ClassSchema, PinStorage, allocate_pin_storage, discover_classes
from .loader import FieldPresenceCounters, ParseContext, load_fields
from .parser import ArchitectureParser

__all__ = [
    # Tokenizer
    "LineCursor",
    "TokenStream",
    # Passes
    "ClassSchema",
    "PinStorage",
    "discover_classes",
    "allocate_pin_storage",
    "FieldPresenceCounters",
    "ParseContext",
    "load_fields",
    # Parser
    "ArchitectureParser",
    # Exceptions
    "ArchitectureParsingError",
    "ArchitectureFileError",
    "MissingValueError",
    "MalformedNumberError",
    "OutOfRangeError",
    "TrailingTokensError",
    "UnknownKeywordError",
    "UnknownDistributionKindError",
    "ClassIdGapError",
    "MixedDirectionClassError",
    "NoPinLocationError",
    "InvalidPinLocationError",
]
