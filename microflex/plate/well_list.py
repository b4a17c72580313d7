"""
WellList
========
A labelled, ordered list of coordinates used as a plate group.

Groups only reference coordinates; they may name wells the plate does not
(yet) hold, and two groups may overlap.
"""

from typing import Iterable, Iterator, List, Optional

from microflex.config import MICROFLEX_CONFIG
from microflex.plate.well import IndexLike, WellIndex, to_index


class WellList:
    """Label + ordered, de-duplicated WellIndex list."""

    def __init__(self, indices: Optional[Iterable[IndexLike]] = None,
                 label: Optional[str] = None):
        self.label = label
        self._indices: List[WellIndex] = []
        for key in indices or []:
            self.add(key)

    @classmethod
    def from_labels(cls, text: str, label: Optional[str] = None,
                    delimiter: Optional[str] = None) -> 'WellList':
        """Parse 'A1, A2, B3' into a WellList."""
        delimiter = delimiter or MICROFLEX_CONFIG['labels']['list_delimiter']
        parts = [p.strip() for p in text.split(delimiter) if p.strip()]
        return cls(parts, label)

    @classmethod
    def from_wells(cls, wells, label: Optional[str] = None) -> 'WellList':
        """Group covering every well of a WellSet (or any iterable of wells)."""
        return cls((w.index for w in wells), label if label is not None else getattr(wells, 'label', None))

    def add(self, key: IndexLike) -> None:
        index = to_index(key)
        if index not in self._indices:
            self._indices.append(index)

    def remove(self, key: IndexLike) -> None:
        index = to_index(key)
        if index in self._indices:
            self._indices.remove(index)

    def merge(self, other: 'WellList') -> 'WellList':
        """New list: self's indices, then other's unseen indices."""
        merged = WellList(self._indices, self.label)
        for index in other:
            merged.add(index)
        return merged

    def copy(self) -> 'WellList':
        return WellList(self._indices, self.label)

    @property
    def indices(self) -> List[WellIndex]:
        return list(self._indices)

    def __iter__(self) -> Iterator[WellIndex]:
        return iter(list(self._indices))

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, key) -> bool:
        try:
            return to_index(key) in self._indices
        except (TypeError, ValueError):
            return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, WellList):
            return NotImplemented
        return self.label == other.label and self._indices == other._indices

    __hash__ = None

    def __repr__(self) -> str:
        return f"WellList({self.label!r}: {', '.join(i.label for i in self._indices)})"
