"""Cell references and rectangular cell ranges in A1 notation."""

from __future__ import annotations

import re
from dataclasses import dataclass

_CELL_RE = re.compile(r"^\$?([A-Z]{1,3})\$?(\d+)$")


def _column_name(column: int) -> str:
    letters = []
    while column > 0:
        column, rem = divmod(column - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def _column_number(name: str) -> int:
    number = 0
    for char in name:
        number = number * 26 + ord(char) - ord("A") + 1
    return number


@dataclass(frozen=True)
class CellReference:
    """A single cell given by a 1-based row and column."""

    row: int = -1
    column: int = -1

    @classmethod
    def from_string(cls, text: str) -> CellReference:
        """Parse a reference such as ``B3`` or ``$B$3``; bad text gives an invalid reference."""
        match = _CELL_RE.match(text.strip())
        if match is None:
            return cls()
        return cls(int(match.group(2)), _column_number(match.group(1)))

    def to_string(self, row_abs: bool = False, col_abs: bool = False) -> str:
        """Return the A1 form, or an empty string for an invalid reference."""
        if not self.is_valid():
            return ""
        col = _column_name(self.column)
        row = str(self.row)
        if col_abs:
            col = "$" + col
        if row_abs:
            row = "$" + row
        return col + row

    def is_valid(self) -> bool:
        return self.row > 0 and self.column > 0

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class CellRange:
    """A rectangular block of cells; the default range is invalid."""

    first_row: int = -1
    first_column: int = -1
    last_row: int = -2
    last_column: int = -2

    @classmethod
    def from_string(cls, text: str) -> CellRange:
        """Parse ``A1:B2`` or a single cell such as ``A1``."""
        parts = text.split(":")
        if len(parts) == 2:
            start = CellReference.from_string(parts[0])
            end = CellReference.from_string(parts[1])
        else:
            start = end = CellReference.from_string(parts[0])
        return cls.from_references(start, end)

    @classmethod
    def from_references(cls, top_left: CellReference, bottom_right: CellReference) -> CellRange:
        return cls(top_left.row, top_left.column, bottom_right.row, bottom_right.column)

    def to_string(self, row_abs: bool = False, col_abs: bool = False) -> str:
        """Return the A1 form; a one-cell range is written as that cell alone."""
        if not self.is_valid():
            return ""
        top_left = self.top_left()
        bottom_right = self.bottom_right()
        if top_left == bottom_right:
            return top_left.to_string(row_abs, col_abs)
        return (
            f"{top_left.to_string(row_abs, col_abs)}:"
            f"{bottom_right.to_string(row_abs, col_abs)}"
        )

    def is_valid(self) -> bool:
        return (
            self.first_column <= self.last_column
            and self.first_row <= self.last_row
            and self.first_column > 0
            and self.last_column > 0
            and self.first_row > 0
            and self.last_row > 0
        )

    def row_count(self) -> int:
        return self.last_row - self.first_row + 1

    def column_count(self) -> int:
        return self.last_column - self.first_column + 1

    def top_left(self) -> CellReference:
        return CellReference(self.first_row, self.first_column)

    def top_right(self) -> CellReference:
        return CellReference(self.first_row, self.last_column)

    def bottom_left(self) -> CellReference:
        return CellReference(self.last_row, self.first_column)

    def bottom_right(self) -> CellReference:
        return CellReference(self.last_row, self.last_column)

    def __str__(self) -> str:
        return self.to_string()