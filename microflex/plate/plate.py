"""
Plate
=====
Fixed-dimension grid of wells plus named groups.

A plate owns one WellSet whose coordinates satisfy row < rows and
column < columns (0-based), and an ordered mapping of group label ->
WellList. Groups may reference coordinates that hold no data.

Usage:
    from microflex.plate import Plate, Well, WellList

    plate = Plate.from_format(96, label='assay_1')     # 8 x 12
    plate.add_wells([Well(0, 0, [1, 2]), Well(7, 11, [9])])
    plate.add_group(WellList.from_labels('A1, A2', label='blanks'))
    plate.group_wells('blanks')                         # WellSet with A1
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from microflex.config import get_plate_format
from microflex.errors import ContainerStateError
from microflex.plate.well import IndexLike, Well
from microflex.plate.well_list import WellList
from microflex.plate.well_set import WellSet, WellsLike, as_well_list
from microflex.util.validation import require, validate_well


class Plate:
    """rows x columns grid owning a WellSet and named groups."""

    def __init__(self, rows: int, columns: int, label: Optional[str] = None,
                 wells: Optional[WellsLike] = None,
                 groups: Optional[Iterable[WellList]] = None):
        if rows < 1 or columns < 1:
            raise ValueError(f"Plate dimensions must be positive, got {rows}x{columns}.")
        self._rows = int(rows)
        self._columns = int(columns)
        self.label = label
        self._data = WellSet()
        self._groups: Dict[str, WellList] = {}
        if wells is not None:
            self.add_wells(wells)
        for group in groups or []:
            self.add_group(group)

    @classmethod
    def from_format(cls, n_wells: int, label: Optional[str] = None,
                    wells: Optional[WellsLike] = None) -> 'Plate':
        """Standard plate by well count: 6, 12, 24, 48, 96, 384, 1536."""
        rows, columns = get_plate_format(n_wells)
        return cls(rows, columns, label, wells)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self._rows, self._columns

    @property
    def capacity(self) -> int:
        return self._rows * self._columns

    @property
    def descriptor(self) -> str:
        return f"{self.capacity}-Well"

    # ------------------------------------------------------------------
    # Wells
    # ------------------------------------------------------------------

    @property
    def data(self) -> WellSet:
        """The owned well set."""
        return self._data

    def add_wells(self, wells: WellsLike) -> None:
        """Insert wells. Bounds and duplicates are checked before any insert."""
        items = as_well_list(wells)
        for well in items:
            validate_well(self._rows, self._columns, well)
        self._data.add(items)

    def replace_wells(self, wells: WellsLike) -> None:
        items = as_well_list(wells)
        for well in items:
            validate_well(self._rows, self._columns, well)
        self._data.replace(items)

    def remove_wells(self, keys) -> bool:
        return self._data.remove(keys)

    def retain_wells(self, keys) -> bool:
        return self._data.retain(keys)

    def clear_wells(self) -> None:
        self._data.clear()

    def get_well(self, key: IndexLike) -> Optional[Well]:
        return self._data.get(key)

    def __getitem__(self, key: IndexLike) -> Well:
        return self._data[key]

    def __contains__(self, key) -> bool:
        return key in self._data

    def row(self, row: int) -> WellSet:
        return self._data.row(row)

    def column(self, column: int) -> WellSet:
        return self._data.column(column)

    def __iter__(self) -> Iterator[Well]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return self._data.is_empty()

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def add_group(self, group: WellList, merge: bool = False) -> None:
        """
        Register a group under its label. An existing label is an error
        unless merge=True, which appends the new group's unseen indices.
        """
        require(group, "group")
        if not group.label:
            raise ValueError("Plate groups need a label.")
        existing = self._groups.get(group.label)
        if existing is None:
            self._groups[group.label] = group.copy()
        elif merge:
            self._groups[group.label] = existing.merge(group)
        else:
            raise ContainerStateError(f"Group {group.label!r} already exists on plate.")

    def remove_group(self, label: str) -> None:
        if label not in self._groups:
            raise KeyError(f"Unknown group: {label!r}")
        del self._groups[label]

    def clear_groups(self) -> None:
        self._groups.clear()

    def group(self, label: str) -> WellList:
        if label not in self._groups:
            raise KeyError(f"Unknown group: {label!r}. Available: {self.group_labels}")
        return self._groups[label]

    def groups(self) -> List[WellList]:
        return list(self._groups.values())

    @property
    def group_labels(self) -> List[str]:
        return list(self._groups.keys())

    def has_group(self, label: str) -> bool:
        return label in self._groups

    def group_wells(self, label: str) -> WellSet:
        """The data wells referenced by a group, labelled with the group name."""
        group = self.group(label)
        return WellSet([w for w in self._data if w.index in group], label)

    # ------------------------------------------------------------------

    def copy(self) -> 'Plate':
        """Deep copy of wells and groups."""
        return Plate(self._rows, self._columns, self.label,
                     [w.copy() for w in self._data], self.groups())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Plate):
            return NotImplemented
        return (self.dimensions == other.dimensions
                and self.label == other.label
                and self._data == other._data
                and self.groups() == other.groups())

    __hash__ = None

    def __repr__(self) -> str:
        name = f"{self.label!r}, " if self.label else ""
        return f"Plate({name}{self._rows}x{self._columns}, {len(self)} wells)"
