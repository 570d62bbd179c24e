from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from ..config import LoaderConfig
from ..core.buffer import INT_MAX, INT_MIN, IntBuffer


logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Base class for loader failures other than missing files."""


class ParseError(LoaderError, ValueError):
    def __init__(self, line_number: int, token: str, reason: str = "not an integer") -> None:
        self.line_number = line_number
        self.token = token
        super().__init__(f"line {line_number}: cannot parse reading {token!r} ({reason})")


class DecodeError(LoaderError, ValueError):
    def __init__(self, line_number: int, encoding: str, cause: UnicodeDecodeError) -> None:
        self.line_number = line_number
        self.encoding = encoding
        super().__init__(
            f"line {line_number}: invalid {encoding} bytes ({cause.reason}); "
            "set loader.encoding to match the export"
        )


@dataclass
class LoadResult:
    lines_read: int = 0
    header_lines_skipped: int = 0
    values_appended: int = 0
    missing_skipped: int = 0
    short_rows_skipped: int = 0
    malformed_skipped: int = 0


class CsvColumnLoader:
    """Append one integer column of a delimited export to an IntBuffer.

    The first ``header_lines`` lines are metadata. Every later line is split on
    ``delimiter`` and the field at ``value_column`` is read. A field equal to
    ``missing_token`` (or empty) marks a missing reading and is skipped, as is
    a row too short to have the column. Values appended before a failing line
    stay in the buffer.
    """

    def __init__(self, settings: LoaderConfig) -> None:
        self.settings = settings

    def load(self, path: Union[str, Path], buffer: IntBuffer) -> LoadResult:
        path = Path(path)
        logger.info("Loading readings from %s", path)
        with open(path, "r", encoding=self.settings.encoding, newline="") as fh:
            result = self.parse_lines(fh, buffer)
        logger.info(
            "Loaded %d readings from %s (%d missing, %d short rows, %d malformed)",
            result.values_appended,
            path.name,
            result.missing_skipped,
            result.short_rows_skipped,
            result.malformed_skipped,
        )
        return result

    def parse_lines(self, lines: Iterable[str], buffer: IntBuffer) -> LoadResult:
        s = self.settings
        result = LoadResult()
        for line_number, line in self._numbered(lines):
            result.lines_read += 1
            if line_number <= s.header_lines:
                result.header_lines_skipped += 1
                continue
            if not line.strip():
                continue
            try:
                row = self._split(line_number, line)
                if len(row) <= s.value_column:
                    result.short_rows_skipped += 1
                    continue
                token = row[s.value_column].strip()
                if token == "" or token == s.missing_token:
                    result.missing_skipped += 1
                    continue
                value = self._parse_int(line_number, token)
            except ParseError as exc:
                if not s.skip_malformed:
                    raise
                logger.warning("Skipping malformed reading: %s", exc)
                result.malformed_skipped += 1
                continue
            buffer.append(value)
            result.values_appended += 1
        return result

    def _numbered(self, lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
        # Decoding happens while iterating a text file, so errors surface here.
        it = iter(lines)
        line_number = 0
        while True:
            try:
                line = next(it)
            except StopIteration:
                return
            except UnicodeDecodeError as exc:
                raise DecodeError(line_number + 1, self.settings.encoding, exc) from exc
            line_number += 1
            yield line_number, line

    def _split(self, line_number: int, line: str) -> List[str]:
        try:
            return next(csv.reader([line.rstrip("\r\n")], delimiter=self.settings.delimiter), [])
        except csv.Error as exc:
            raise ParseError(line_number, _shorten(line), str(exc)) from None

    @staticmethod
    def _parse_int(line_number: int, token: str) -> int:
        digits = token[1:] if token[:1] in ("+", "-") else token
        if not (digits.isascii() and digits.isdigit()):
            raise ParseError(line_number, _shorten(token))
        # int64 holds at most 19 digits
        if len(digits.lstrip("0")) > 19:
            raise ParseError(line_number, _shorten(token), "out of 64-bit range")
        value = int(token, 10)
        if value < INT_MIN or value > INT_MAX:
            raise ParseError(line_number, token, "out of 64-bit range")
        return value


def _shorten(text: str, limit: int = 40) -> str:
    text = text.rstrip("\r\n")
    return text if len(text) <= limit else text[:limit] + "..."
