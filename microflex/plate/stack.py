"""
Stack
=====
Ordered sequence of plates sharing one set of dimensions.

Plates keep insertion order. Adding a plate with different dimensions
raises DimensionMismatchError.
"""

from typing import Iterable, Iterator, List, Optional, Union

from microflex.config import get_plate_format
from microflex.plate.plate import Plate
from microflex.util.validation import require, validate_dimensions


PlatesLike = Union[Plate, Iterable[Plate]]


class Stack:
    """rows x columns stack of plates."""

    def __init__(self, rows: int, columns: int, label: Optional[str] = None,
                 plates: Optional[PlatesLike] = None):
        if rows < 1 or columns < 1:
            raise ValueError(f"Stack dimensions must be positive, got {rows}x{columns}.")
        self._rows = int(rows)
        self._columns = int(columns)
        self.label = label
        self._plates: List[Plate] = []
        if plates is not None:
            self.add(plates)

    @classmethod
    def from_format(cls, n_wells: int, label: Optional[str] = None) -> 'Stack':
        rows, columns = get_plate_format(n_wells)
        return cls(rows, columns, label)

    @classmethod
    def of(cls, plates: Iterable[Plate], label: Optional[str] = None) -> 'Stack':
        """Stack sized from its first plate."""
        plates = list(plates)
        if not plates:
            raise ValueError("Cannot size a stack from an empty plate list.")
        return cls(plates[0].rows, plates[0].columns, label, plates)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def dimensions(self):
        return self._rows, self._columns

    def add(self, plates: PlatesLike) -> None:
        """Append plates. Dimensions are checked for all before any append."""
        require(plates, "plate")
        items = [plates] if isinstance(plates, Plate) else list(plates)
        for plate in items:
            validate_dimensions(self._rows, self._columns, plate)
        self._plates.extend(items)

    def remove(self, key: Union[str, Plate]) -> bool:
        """Remove by plate label or identity. True if anything was removed."""
        require(key, "plate")
        before = len(self._plates)
        if isinstance(key, str):
            self._plates = [p for p in self._plates if p.label != key]
        else:
            self._plates = [p for p in self._plates if p is not key]
        return len(self._plates) != before

    def get(self, label: str) -> Optional[Plate]:
        """First plate with the given label."""
        for plate in self._plates:
            if plate.label == label:
                return plate
        return None

    def contains(self, label: str) -> bool:
        return self.get(label) is not None

    def clear(self) -> None:
        self._plates.clear()

    def plates(self) -> List[Plate]:
        return list(self._plates)

    def __getitem__(self, i: int) -> Plate:
        return self._plates[i]

    def __iter__(self) -> Iterator[Plate]:
        return iter(list(self._plates))

    def __len__(self) -> int:
        return len(self._plates)

    def is_empty(self) -> bool:
        return not self._plates

    def copy(self) -> 'Stack':
        return Stack(self._rows, self._columns, self.label,
                     [p.copy() for p in self._plates])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Stack):
            return NotImplemented
        return (self.dimensions == other.dimensions
                and self.label == other.label
                and self._plates == other._plates)

    __hash__ = None

    def __repr__(self) -> str:
        name = f"{self.label!r}, " if self.label else ""
        return f"Stack({name}{self._rows}x{self._columns}, {len(self)} plates)"
