# src/fpga_arch_core/parser/tokenizer.py
"""
Line-oriented tokenizer for architecture description files.

A `#` starts a comment that runs to the end of the physical line, and a line
ending in `\\` continues on the next one. The stream hands out one
`LineCursor` per non-empty logical line.
"""
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Type, Union

from .exceptions import (
    ArchitectureFileError,
    ArchitectureParsingError,
    MissingValueError,
    TrailingTokensError,
)

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"
CONTINUATION_CHAR = "\\"


class LineCursor:
    """Sequential access to the tokens of one logical line."""

    def __init__(self, tokens: List[str], line_number: int, source: str):
        self._tokens = tokens
        self._position = 1
        self.line_number = line_number
        self.source = source

    @property
    def keyword(self) -> str:
        return self._tokens[0]

    def peek(self) -> Optional[str]:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def take(self, what: str) -> str:
        """Consumes the next token; `what` names the expected value in the error."""
        token = self.peek()
        if token is None:
            raise self.error(
                MissingValueError,
                f"Missing {what} value for '{self.keyword}'.",
                field_name=self.keyword,
            )
        self._position += 1
        return token

    def remaining(self) -> List[str]:
        return self._tokens[self._position:]

    def skip_rest(self) -> None:
        self._position = len(self._tokens)

    def expect_end(self) -> None:
        extra = self.remaining()
        if extra:
            raise self.error(
                TrailingTokensError,
                f"Extra characters at end of '{self.keyword}' statement: {' '.join(extra)}",
                field_name=self.keyword,
                token=" ".join(extra),
            )

    def error(self, exc_cls: Type[ArchitectureParsingError], details: str, **kwargs) -> ArchitectureParsingError:
        """Builds (does not raise) an exception located at this line."""
        return exc_cls(details=details, source=self.source, line_number=self.line_number, **kwargs)


class TokenStream:
    """
    Stateful, single-owner reader over the logical lines of one source text.
    `rewind()` restarts from the first line so a second pass can re-read it.
    """

    def __init__(self, text: str, source: str = "<string>"):
        self.source = source
        # Only "\n" ends a physical line; form feeds and Unicode separators do not.
        self._physical_lines = text.split("\n")
        if self._physical_lines[-1] == "":
            self._physical_lines.pop()
        self._next_index = 0
        self.line_number = 0

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TokenStream":
        file_path = Path(path)
        if not file_path.is_file():
            raise ArchitectureFileError(
                details=f"Architecture file not found at path: {file_path}",
                source=str(file_path),
            )
        try:
            text = file_path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ArchitectureFileError(
                details=f"Permission denied when trying to read file: {e}",
                source=str(file_path),
            ) from e
        except UnicodeDecodeError as e:
            raise ArchitectureFileError(
                details=f"File is not valid UTF-8 text: {e}",
                source=str(file_path),
            ) from e
        logger.debug(f"Read {len(text)} characters from '{file_path}'.")
        return cls(text, source=str(file_path))

    def rewind(self) -> None:
        self._next_index = 0
        self.line_number = 0

    def _read_logical_line(self) -> Optional[List[str]]:
        """Joins continued physical lines; returns None at end of stream."""
        if self._next_index >= len(self._physical_lines):
            return None
        tokens: List[str] = []
        while self._next_index < len(self._physical_lines):
            raw = self._physical_lines[self._next_index]
            self._next_index += 1
            self.line_number += 1
            content = raw.split(COMMENT_CHAR, 1)[0].rstrip()
            if content.endswith(CONTINUATION_CHAR):
                tokens.extend(content[:-1].split())
                continue
            tokens.extend(content.split())
            break
        return tokens

    def next_line(self) -> Optional[LineCursor]:
        """Returns the next non-empty logical line, or None at end of stream."""
        while True:
            tokens = self._read_logical_line()
            if tokens is None:
                return None
            if tokens:
                return LineCursor(tokens, self.line_number, self.source)

    def __iter__(self) -> Iterator[LineCursor]:
        while (cursor := self.next_line()) is not None:
            yield cursor
