"""
Plate containers: Well -> WellSet -> Plate -> Stack.

    from microflex.plate import Well, WellIndex, WellSet, WellList, Plate, Stack
"""

from microflex.plate.well import Well, WellIndex, to_index, row_label, parse_row
from microflex.plate.well_set import WellSet
from microflex.plate.well_list import WellList
from microflex.plate.plate import Plate
from microflex.plate.stack import Stack

__all__ = [
    'Well',
    'WellIndex',
    'WellSet',
    'WellList',
    'Plate',
    'Stack',
    'to_index',
    'row_label',
    'parse_row',
]
