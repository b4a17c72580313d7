"""
microflex: integer microplate data with pluggable elementwise math.

Containers (well -> set -> plate -> stack) live in microflex.plate,
kernels and engines in microflex.math, statistics in microflex.stat.
"""

__version__ = '0.1.0'

from microflex.errors import (
    ContainerStateError,
    DimensionMismatchError,
    DuplicateWellError,
    IndexRangeError,
    MicroflexError,
    NullArgumentError,
)
from microflex.plate import Plate, Stack, Well, WellIndex, WellList, WellSet

__all__ = [
    '__version__',
    'Well', 'WellIndex', 'WellSet', 'WellList', 'Plate', 'Stack',
    'MicroflexError', 'NullArgumentError', 'DimensionMismatchError',
    'IndexRangeError', 'ContainerStateError', 'DuplicateWellError',
]
