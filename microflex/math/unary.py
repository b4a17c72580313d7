"""
Unary Engine
============
Applies a one-operand kernel to every well of a container. Membership,
plate dimensions, labels and groups are preserved; only payloads change.
With a window, each result well holds only the windowed elements.
"""

import logging
from typing import Optional

from microflex.math import align
from microflex.math.contract import UnaryKernel
from microflex.plate import Plate, Stack, Well, WellSet
from microflex.plate.well import as_values
from microflex.util.validation import require, validate_window

logger = logging.getLogger(__name__)


class UnaryEngine:
    """Per-well application of a UnaryKernel at every container level."""

    def __init__(self, kernel: UnaryKernel):
        self.kernel = require(kernel, "kernel")

    def _apply(self, values, begin: Optional[int], length: Optional[int]):
        if begin is None:
            return self.kernel.calculate(values)
        return self.kernel.calculate_range(values, begin, length)

    @staticmethod
    def _check(wells, begin: Optional[int], length: Optional[int]) -> None:
        if validate_window(begin, length):
            for well in wells:
                align.check_single(len(well), begin, length)

    def wells(self, well: Well, begin: Optional[int] = None,
              length: Optional[int] = None) -> Well:
        require(well, "well")
        self._check([well], begin, length)
        return Well.at(well.index, self._apply(well.data, begin, length))

    def sets(self, wells: WellSet, begin: Optional[int] = None,
             length: Optional[int] = None) -> WellSet:
        require(wells, "well set")
        self._check(wells, begin, length)
        return self._set(wells, begin, length)

    def plates(self, plate: Plate, begin: Optional[int] = None,
               length: Optional[int] = None) -> Plate:
        require(plate, "plate")
        self._check(plate, begin, length)
        return self._plate(plate, begin, length)

    def stacks(self, stack: Stack, begin: Optional[int] = None,
               length: Optional[int] = None) -> Stack:
        require(stack, "stack")
        for plate in stack:
            self._check(plate, begin, length)
        result = Stack(stack.rows, stack.columns, stack.label)
        result.add([self._plate(p, begin, length) for p in stack])
        logger.debug(f"unary {self.kernel.name}: {len(stack)} plates")
        return result

    def broadcast(self, target, begin: Optional[int] = None,
                  length: Optional[int] = None):
        """Dispatch on the target type; sequences return an array."""
        require(target, "target")
        if isinstance(target, Stack):
            return self.stacks(target, begin, length)
        if isinstance(target, Plate):
            return self.plates(target, begin, length)
        if isinstance(target, WellSet):
            return self.sets(target, begin, length)
        if isinstance(target, Well):
            return self.wells(target, begin, length)
        values = as_values(target, "target")
        align.check_single(len(values), begin, length)
        return self._apply(values, begin, length)

    def _set(self, wells: WellSet, begin, length) -> WellSet:
        return WellSet(
            [Well.at(w.index, self._apply(w.data, begin, length)) for w in wells],
            wells.label,
        )

    def _plate(self, plate: Plate, begin, length) -> Plate:
        return Plate(plate.rows, plate.columns, plate.label,
                     self._set(plate.data, begin, length), plate.groups())
