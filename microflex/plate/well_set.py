"""
WellSet
=======
Coordinate-keyed, duplicate-free collection of wells.

Iteration is always ascending by (row, column) regardless of insert order.
Inserting a second well at an occupied coordinate raises DuplicateWellError;
use replace() to overwrite.

Usage:
    from microflex.plate import Well, WellSet

    s = WellSet([Well(0, 0, [1, 2]), Well(0, 1, [3])], label='controls')
    s.add(Well(1, 0, [4]))
    'A1' in s                        # True
    s.union(other) / s & other       # membership algebra, new sets
"""

from numbers import Integral
from typing import Dict, Iterable, Iterator, List, Optional, Union

from microflex.errors import DuplicateWellError
from microflex.plate.well import IndexLike, Well, WellIndex, to_index
from microflex.util.validation import require


WellsLike = Union[Well, 'WellSet', Iterable[Well]]


def as_well_list(wells: WellsLike) -> List[Well]:
    require(wells, "wells")
    if isinstance(wells, Well):
        return [wells]
    items = list(wells)
    for item in items:
        require(item, "well")
        if not isinstance(item, Well):
            raise TypeError(f"Expected Well, got {type(item).__name__}.")
    return items


def _is_pair(key) -> bool:
    return (isinstance(key, tuple) and len(key) == 2
            and all(isinstance(k, Integral) and not isinstance(k, bool) for k in key))


def _iter_keys(keys) -> List[WellIndex]:
    """
    Normalize one key or a collection of keys (WellSet, WellList, list,
    tuple). Only a tuple of two integers is read as a single (row, column).
    """
    require(keys, "wells")
    if isinstance(keys, (Well, WellIndex, str)) or _is_pair(keys):
        return [to_index(keys)]
    return [to_index(k) for k in keys]


class WellSet:
    """Ordered map WellIndex -> Well with set algebra over coordinates."""

    def __init__(self, wells: Optional[WellsLike] = None, label: Optional[str] = None):
        self._wells: Dict[WellIndex, Well] = {}
        self.label = label
        if wells is not None:
            self.add(wells)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, wells: WellsLike) -> None:
        """
        Insert one well or many. All-or-nothing: if any coordinate is
        already present (or repeated in the input), nothing is inserted.
        """
        items = as_well_list(wells)
        seen = set()
        for well in items:
            if well.index in self._wells or well.index in seen:
                raise DuplicateWellError(well.index)
            seen.add(well.index)
        for well in items:
            self._wells[well.index] = well

    def replace(self, wells: WellsLike) -> None:
        """Insert, overwriting any well at the same coordinate."""
        for well in as_well_list(wells):
            self._wells[well.index] = well

    def remove(self, keys) -> bool:
        """Remove by membership. Missing keys are ignored. True if anything changed."""
        removed = False
        for index in _iter_keys(keys):
            if self._wells.pop(index, None) is not None:
                removed = True
        return removed

    def retain(self, keys) -> bool:
        """Keep only the given coordinates. True if anything changed."""
        keep = set(_iter_keys(keys))
        dropped = [index for index in self._wells if index not in keep]
        for index in dropped:
            del self._wells[index]
        return bool(dropped)

    def clear(self) -> None:
        self._wells.clear()

    # ------------------------------------------------------------------
    # Membership algebra (new sets, copied wells)
    # ------------------------------------------------------------------

    def union(self, other: 'WellSet') -> 'WellSet':
        """All coordinates of both sets. Wells from self win on overlap."""
        require(other, "other set")
        result = self.copy()
        result.add([w.copy() for w in other if w.index not in self._wells])
        return result

    def intersection(self, other: 'WellSet') -> 'WellSet':
        """Wells of self whose coordinate is also in other."""
        require(other, "other set")
        return WellSet([w.copy() for w in self if w.index in other], self.label)

    def difference(self, other: 'WellSet') -> 'WellSet':
        """Wells of self whose coordinate is not in other."""
        require(other, "other set")
        return WellSet([w.copy() for w in self if w.index not in other], self.label)

    __or__ = union
    __and__ = intersection
    __sub__ = difference

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, key: IndexLike, default=None) -> Optional[Well]:
        return self._wells.get(to_index(key), default)

    def __getitem__(self, key: IndexLike) -> Well:
        index = to_index(key)
        if index not in self._wells:
            raise KeyError(f"Well {index} not found in set.")
        return self._wells[index]

    def __contains__(self, key) -> bool:
        try:
            return to_index(key) in self._wells
        except (TypeError, ValueError):
            return False

    def contains_all(self, keys) -> bool:
        return all(index in self._wells for index in _iter_keys(keys))

    def indices(self) -> List[WellIndex]:
        return sorted(self._wells)

    def wells(self) -> List[Well]:
        return [self._wells[index] for index in sorted(self._wells)]

    def row(self, row: int) -> 'WellSet':
        return WellSet([w for w in self if w.row == row])

    def column(self, column: int) -> 'WellSet':
        return WellSet([w for w in self if w.column == column])

    def first(self) -> Well:
        if not self._wells:
            raise KeyError("Empty well set.")
        return self._wells[min(self._wells)]

    def last(self) -> Well:
        if not self._wells:
            raise KeyError("Empty well set.")
        return self._wells[max(self._wells)]

    def labels(self) -> List[str]:
        return [index.label for index in self.indices()]

    def copy(self) -> 'WellSet':
        """Deep copy: payloads are not shared with the original."""
        return WellSet([w.copy() for w in self], self.label)

    def __iter__(self) -> Iterator[Well]:
        return iter(self.wells())

    def __len__(self) -> int:
        return len(self._wells)

    def is_empty(self) -> bool:
        return not self._wells

    def __eq__(self, other) -> bool:
        if not isinstance(other, WellSet):
            return NotImplemented
        return self.indices() == other.indices() and all(
            self._wells[i] == other._wells[i] for i in self._wells
        )

    __hash__ = None

    def __repr__(self) -> str:
        name = f"{self.label!r}, " if self.label else ""
        return f"WellSet({name}{len(self)} wells: {', '.join(self.labels())})"
