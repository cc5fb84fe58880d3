# src/fpga_arch_core/parser/scalars.py
"""
Scalar value readers. Each one consumes tokens from a `LineCursor` and returns
a typed, range-checked value or raises a located parsing error.
"""
import logging
import re
from enum import Enum
from typing import Tuple, Type, TypeVar

from ..arch_enums import PinSide
from ..constants import CLASS_MARKER
from .exceptions import (
    InvalidPinLocationError,
    MalformedNumberError,
    OutOfRangeError,
    UnknownKeywordError,
)
from .tokenizer import LineCursor

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _to_int(cursor: LineCursor, token: str, what: str) -> int:
    try:
        if not _INTEGER_PATTERN.fullmatch(token):
            raise ValueError(token)
        # int() also refuses digit strings beyond the interpreter's conversion limit.
        return int(token)
    except ValueError as e:
        raise cursor.error(
            MalformedNumberError,
            f"Expected an integer for {what}, got '{token}'.",
            field_name=cursor.keyword,
            token=token,
        ) from e


def _to_float(cursor: LineCursor, token: str, what: str) -> float:
    try:
        if not token.isascii() or "_" in token:
            raise ValueError(token)
        return float(token)
    except ValueError as e:
        raise cursor.error(
            MalformedNumberError,
            f"Expected a number for {what}, got '{token}'.",
            field_name=cursor.keyword,
            token=token,
        ) from e


def read_positive_int(cursor: LineCursor) -> int:
    """Reads the single natural-number value of a statement; nothing may follow it."""
    what = cursor.keyword
    token = cursor.take(what)
    value = _to_int(cursor, token, what)
    if value <= 0:
        raise cursor.error(
            OutOfRangeError,
            f"Bad value. {what} = {value}; the value must be greater than 0.",
            field_name=what,
            token=token,
        )
    cursor.expect_end()
    return value


def read_float(cursor: LineCursor, bounds: Tuple[float, float], what: str = None) -> float:
    """
    Reads one float that must satisfy low < value <= high. Trailing tokens are
    left for the caller, since channel statements read several floats in a row.
    """
    what = what or cursor.keyword
    low, high = bounds
    token = cursor.take(what)
    value = _to_float(cursor, token, what)
    if not (low < value <= high):
        raise cursor.error(
            OutOfRangeError,
            f"Bad value parsing {what}: {value:g} is outside ({low:g}, {high:g}].",
            field_name=cursor.keyword,
            token=token,
        )
    return value


def read_keyword(cursor: LineCursor, enum_cls: Type[E], what: str = None,
                 exc_cls: Type[UnknownKeywordError] = UnknownKeywordError) -> E:
    """Matches the next token exactly against the values of `enum_cls`."""
    what = what or cursor.keyword
    token = cursor.take(what)
    for member in enum_cls:
        if member.value == token:
            return member
    allowed = ", ".join(member.value for member in enum_cls)
    raise cursor.error(
        exc_cls,
        f"Bad {what} value '{token}'. Expected one of: {allowed}.",
        field_name=cursor.keyword,
        token=token,
    )


def read_enum_statement(cursor: LineCursor, enum_cls: Type[E]) -> E:
    """Reads a statement whose whole payload is one enum keyword."""
    value = read_keyword(cursor, enum_cls)
    cursor.expect_end()
    return value


def read_class_id(cursor: LineCursor) -> int:
    """
    Reads the `class: <id>` pair that follows `inpin`/`outpin`.
    The id must be an integer >= 0.
    """
    marker = cursor.take(CLASS_MARKER)
    if marker != CLASS_MARKER:
        raise cursor.error(
            UnknownKeywordError,
            f"Expected '{CLASS_MARKER}' keyword after '{cursor.keyword}', got '{marker}'.",
            field_name=cursor.keyword,
            token=marker,
        )
    token = cursor.take("class number")
    class_id = _to_int(cursor, token, "class number")
    if class_id < 0:
        raise cursor.error(
            OutOfRangeError,
            f"Expected class number >= 0, got {class_id}.",
            field_name=cursor.keyword,
            token=token,
        )
    return class_id


def parse_side(cursor: LineCursor, token: str) -> PinSide:
    for side in PinSide:
        if side.value == token:
            return side
    raise cursor.error(
        InvalidPinLocationError,
        f"Bad pin location '{token}'.",
        field_name=cursor.keyword,
        token=token,
    )
