"""
Well
====
A coordinate-addressed sequence of integer measurements.

Coordinates are 0-based on both axes. Labels use letters for the row and a
1-based number for the column, so label "A1" is (0, 0) and "B12" is (1, 11).

Usage:
    from microflex.plate import Well, WellIndex

    well = Well(0, 0, [1, 2, 3])
    well = Well.from_label('A1', [1, 2, 3])
    well.label              # 'A1'
    well.data               # read-only int64 array
    well.sub_well(1, 2)     # Well A1 [2, 3]
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from microflex.config import MICROFLEX_CONFIG
from microflex.util.overflow import checked_cast
from microflex.util.validation import require, validate_range


_LABEL = re.compile(r'^([A-Z]+)([0-9]+)$')
_LETTERS = re.compile(r'^[A-Z]+$')


def _alpha_base() -> int:
    return MICROFLEX_CONFIG['labels']['alpha_base']


def _column_offset() -> int:
    return MICROFLEX_CONFIG['labels']['column_offset']


def parse_row(row: str) -> int:
    """Row letters to a 0-based index: 'A' -> 0, 'Z' -> 25, 'AA' -> 26."""
    text = row.strip().upper()
    if not _LETTERS.match(text):
        raise ValueError(f"Invalid row ID: {row!r}")
    base = _alpha_base()
    value = 0
    for char in text:
        value = value * base + (ord(char) - ord('A') + 1)
    return value - 1


def row_label(row: int) -> str:
    """0-based row index to letters: 0 -> 'A', 26 -> 'AA'."""
    base = _alpha_base()
    letters = ''
    while row >= 0:
        letters = chr(row % base + ord('A')) + letters
        row = row // base - 1
    return letters


def parse_column(column: str) -> int:
    """1-based column label to a 0-based index: '1' -> 0."""
    text = column.strip()
    if not text.isdigit():
        raise ValueError(f"Illegal column value: {column!r}")
    index = int(text) - _column_offset()
    if index < 0:
        raise ValueError(f"Illegal column value: {column!r}")
    return index


@dataclass(frozen=True, order=True)
class WellIndex:
    """Well coordinate. Orders by row, then column."""
    row: int
    column: int

    def __post_init__(self):
        if self.row < 0:
            raise ValueError(f"Invalid row index: {self.row}. Row must be non-negative.")
        if self.column < 0:
            raise ValueError(f"Invalid column index: {self.column}. Column must be non-negative.")

    @classmethod
    def from_label(cls, label: str) -> 'WellIndex':
        """Parse labels like 'A1', 'h12', 'AB7'."""
        match = _LABEL.match(label.strip().upper())
        if not match:
            raise ValueError(f"Invalid well index: {label!r}")
        return cls(parse_row(match.group(1)), parse_column(match.group(2)))

    @property
    def row_label(self) -> str:
        return row_label(self.row)

    @property
    def label(self) -> str:
        return f"{self.row_label}{self.column + _column_offset()}"

    def __str__(self) -> str:
        return self.label


IndexLike = Union[WellIndex, 'Well', str, Tuple[int, int]]


def to_index(key: IndexLike) -> WellIndex:
    """Normalize a WellIndex, Well, label string or (row, column) tuple."""
    require(key, "well index")
    if isinstance(key, WellIndex):
        return key
    if isinstance(key, Well):
        return key.index
    if isinstance(key, str):
        return WellIndex.from_label(key)
    if isinstance(key, tuple) and len(key) == 2:
        return WellIndex(int(key[0]), int(key[1]))
    raise TypeError(f"Cannot interpret {key!r} as a well index.")


def as_values(values, name: str = "values") -> np.ndarray:
    """Coerce a sequence (or Well) to a 1-D int64 array."""
    require(values, name)
    if isinstance(values, Well):
        return values.data
    array = np.asarray(values)
    if array.ndim == 0:
        array = array.reshape(1)
    array = array.ravel()
    if array.size and array.dtype.kind == 'f':
        if not np.all(np.isfinite(array)) or not np.all(array == np.floor(array)):
            raise ValueError(f"{name} must hold integer values.")
    elif array.size and array.dtype.kind == 'O' and all(isinstance(v, int) for v in array):
        raise OverflowError(f"{name} holds integers outside the int64 range.")
    elif array.size and array.dtype.kind not in 'iub':
        raise TypeError(f"{name} must be numeric, got dtype {array.dtype}.")
    return checked_cast(array, MICROFLEX_CONFIG['values']['dtype'])


class Well:
    """
    One well: a WellIndex plus an ordered int64 payload.

    Wells compare equal when both coordinate and payload match. The payload
    is exposed read-only; use the mutators to change it.
    """

    __hash__ = None

    def __init__(self, row: Union[int, str], column: Union[int, str],
                 data: Optional[Iterable[int]] = None):
        row = parse_row(row) if isinstance(row, str) else int(row)
        column = parse_column(column) if isinstance(column, str) else int(column)
        self._index = WellIndex(row, column)
        self._data = as_values([] if data is None else data, "data").copy()

    @classmethod
    def from_label(cls, label: str, data: Optional[Iterable[int]] = None) -> 'Well':
        index = WellIndex.from_label(label)
        return cls(index.row, index.column, data)

    @classmethod
    def at(cls, index: IndexLike, data: Optional[Iterable[int]] = None) -> 'Well':
        index = to_index(index)
        return cls(index.row, index.column, data)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def index(self) -> WellIndex:
        return self._index

    @property
    def row(self) -> int:
        return self._index.row

    @property
    def column(self) -> int:
        return self._index.column

    @property
    def label(self) -> str:
        return self._index.label

    # ------------------------------------------------------------------
    # Payload access
    # ------------------------------------------------------------------

    @property
    def data(self) -> np.ndarray:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        return (int(v) for v in self._data)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [int(v) for v in self._data[i]]
        return int(self._data[i])

    def __contains__(self, value) -> bool:
        return bool(np.any(self._data == value))

    def is_empty(self) -> bool:
        return len(self._data) == 0

    def index_of(self, value: int) -> int:
        """First position of value, or -1."""
        hits = np.flatnonzero(self._data == value)
        return int(hits[0]) if hits.size else -1

    def last_index_of(self, value: int) -> int:
        hits = np.flatnonzero(self._data == value)
        return int(hits[-1]) if hits.size else -1

    def sub_well(self, begin: int, length: int) -> 'Well':
        """New well holding only [begin, begin + length)."""
        validate_range(len(self._data), begin, length)
        return Well(self.row, self.column, self._data[begin:begin + length])

    def copy(self) -> 'Well':
        return Well(self.row, self.column, self._data)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add(self, values) -> None:
        """Append a value, a sequence, or another well's payload."""
        self._data = np.concatenate([self._data, as_values(values)])

    def replace_data(self, values) -> None:
        self._data = as_values(values).copy()

    def remove(self, values) -> None:
        """Drop every occurrence of the given values."""
        self._data = self._data[~np.isin(self._data, as_values(values))]

    def retain(self, values) -> None:
        """Keep only occurrences of the given values."""
        self._data = self._data[np.isin(self._data, as_values(values))]

    def remove_range(self, begin: int, length: int) -> None:
        validate_range(len(self._data), begin, length)
        self._data = np.concatenate([self._data[:begin], self._data[begin + length:]])

    def retain_range(self, begin: int, length: int) -> None:
        validate_range(len(self._data), begin, length)
        self._data = self._data[begin:begin + length].copy()

    def clear(self) -> None:
        self._data = self._data[:0].copy()

    # ------------------------------------------------------------------
    # Conversions (overflow-checked)
    # ------------------------------------------------------------------

    def to_list(self) -> List[int]:
        return [int(v) for v in self._data]

    def to_int8(self) -> np.ndarray:
        return checked_cast(self._data, 'int8')

    def to_int16(self) -> np.ndarray:
        return checked_cast(self._data, 'int16')

    def to_int32(self) -> np.ndarray:
        return checked_cast(self._data, 'int32')

    def to_float64(self) -> np.ndarray:
        return self._data.astype(np.float64)

    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Well):
            return NotImplemented
        return self._index == other._index and np.array_equal(self._data, other._data)

    def __repr__(self) -> str:
        return f"Well({self.label} {self.to_list()})"
