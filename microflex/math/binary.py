"""
Combination Engine
==================
Applies a binary kernel across the four container levels:

    Well      -> alignment of two value sequences
    WellSet   -> alignment per shared coordinate, membership by mode
    Plate     -> WellSet alignment + union of groups, equal dimensions
    Stack     -> Plate combine per position, remainder by mode

Same rules, one level up each time. Standard mode keeps everything that is
present in either operand (unpaired parts pass through untouched); strict
mode keeps only what is present in both.

The second operand may be a container of the same or a lower level, a bare
sequence, or an integer constant. Every public call validates the whole
operation first (nulls, dimensions, every window) and only then builds the
result, so no partial result is ever produced.

Usage:
    from microflex.math import CombineEngine, get_kernel

    engine = CombineEngine(get_kernel('addition'))
    plate = engine.plates(plate_a, plate_b)
    strict = CombineEngine(get_kernel('bitwise_xor'), strict=True)
    stack = strict.stacks(stack_a, stack_b, begin=0, length=4)
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

import numpy as np

from microflex.config import MICROFLEX_CONFIG
from microflex.errors import NullArgumentError
from microflex.math import align
from microflex.math.contract import BinaryKernel
from microflex.plate import Plate, Stack, Well, WellSet
from microflex.plate.well import as_values
from microflex.util.validation import (
    require,
    validate_plate_dimensions,
    validate_set,
    validate_window,
)

logger = logging.getLogger(__name__)


class OperandKind(str, Enum):
    """What the second operand of a combine is."""
    CONSTANT = "constant"
    SEQUENCE = "sequence"
    WELL = "well"
    SET = "set"
    PLATE = "plate"
    STACK = "stack"


_RANK = {
    OperandKind.CONSTANT: 0,
    OperandKind.SEQUENCE: 0,
    OperandKind.WELL: 1,
    OperandKind.SET: 2,
    OperandKind.PLATE: 3,
    OperandKind.STACK: 4,
}


def operand_kind(value: Any) -> OperandKind:
    """Classify an operand. None is a NullArgumentError."""
    if value is None:
        raise NullArgumentError("operand")
    if isinstance(value, Stack):
        return OperandKind.STACK
    if isinstance(value, Plate):
        return OperandKind.PLATE
    if isinstance(value, WellSet):
        return OperandKind.SET
    if isinstance(value, Well):
        return OperandKind.WELL
    if isinstance(value, (bool, int, np.integer)):
        return OperandKind.CONSTANT
    if isinstance(value, (list, tuple, range, np.ndarray)):
        return OperandKind.SEQUENCE
    raise TypeError(f"Unsupported operand type: {type(value).__name__}")


Operand = Union[int, list, tuple, np.ndarray, Well, WellSet, Plate, Stack]


class CombineEngine:
    """
    Binary combination over wells, sets, plates and stacks.

    Args:
        kernel: BinaryKernel strategy; the engine holds no arithmetic.
        strict: False = standard (union, passthrough), True = strict
            (intersection, mismatches dropped).
    """

    def __init__(self, kernel: BinaryKernel, strict: bool = False):
        self.kernel = require(kernel, "kernel")
        self.strict = strict

    @property
    def mode(self) -> str:
        return 'strict' if self.strict else 'standard'

    def _slices_passthrough(self, begin: Optional[int]) -> bool:
        return (not self.strict and begin is not None
                and MICROFLEX_CONFIG['engine']['subrange_passthrough'] == 'slice')

    # ==================================================================
    # Public entry points
    # ==================================================================

    def wells(self, a: Well, b: Operand, begin: Optional[int] = None,
              length: Optional[int] = None) -> Well:
        """Combine a well with a well, sequence or constant. Result sits at a's coordinate."""
        require(a, "well")
        kind, b = self._prepare(b, OperandKind.WELL)
        validate_window(begin, length)
        self._check_values(len(a), b, kind, begin, length)
        return Well.at(a.index, self._values(a.data, b, kind, begin, length))

    def sets(self, a: WellSet, b: Operand, begin: Optional[int] = None,
             length: Optional[int] = None) -> WellSet:
        """Combine a well set with a set, well, sequence or constant."""
        require(a, "well set")
        kind, b = self._prepare(b, OperandKind.SET)
        validate_window(begin, length)
        self._check_set(a, b, kind, begin, length)
        return self._combine_set(a, b, kind, begin, length)

    def plates(self, a: Plate, b: Operand, begin: Optional[int] = None,
               length: Optional[int] = None) -> Plate:
        """Combine a plate with a plate, set, well, sequence or constant."""
        require(a, "plate")
        kind, b = self._prepare(b, OperandKind.PLATE)
        validate_window(begin, length)
        self._check_plate(a, b, kind, begin, length)
        return self._combine_plate(a, b, kind, begin, length)

    def stacks(self, a: Stack, b: Operand, begin: Optional[int] = None,
               length: Optional[int] = None) -> Stack:
        """Combine a stack with a stack, plate, set, well, sequence or constant."""
        require(a, "stack")
        kind, b = self._prepare(b, OperandKind.STACK)
        validate_window(begin, length)
        self._check_stack(a, b, kind, begin, length)
        return self._combine_stack(a, b, kind, begin, length)

    def combine(self, a: Operand, b: Operand, begin: Optional[int] = None,
                length: Optional[int] = None):
        """
        Dispatch on operand types. The result has the level of the richer
        operand; if b is richer, the kernel is flipped so that a stays the
        left-hand argument of every kernel call.
        """
        kind_a = operand_kind(a)
        kind_b = operand_kind(b)
        constant_first = (kind_a is OperandKind.CONSTANT
                          and kind_b is OperandKind.SEQUENCE)
        if _RANK[kind_b] > _RANK[kind_a] or constant_first:
            flipped = CombineEngine(self.kernel.flipped(), self.strict)
            return flipped.combine(b, a, begin, length)

        if kind_a is OperandKind.STACK:
            return self.stacks(a, b, begin, length)
        if kind_a is OperandKind.PLATE:
            return self.plates(a, b, begin, length)
        if kind_a is OperandKind.SET:
            return self.sets(a, b, begin, length)
        if kind_a is OperandKind.WELL:
            return self.wells(a, b, begin, length)
        if kind_a is OperandKind.CONSTANT:
            raise TypeError("At least one operand must be a sequence or container.")

        values = as_values(a, "first operand")
        kind, b = self._prepare(b, OperandKind.WELL)
        validate_window(begin, length)
        self._check_values(len(values), b, kind, begin, length)
        return self._values(values, b, kind, begin, length)

    # ==================================================================
    # Validation pass (no computation)
    # ==================================================================

    def _prepare(self, b: Operand, level: OperandKind):
        """Classify b and reduce value-like operands to arrays."""
        kind = operand_kind(b)
        if _RANK[kind] > _RANK[level]:
            raise TypeError(
                f"Cannot combine a {level.value} with a richer {kind.value}; "
                "use combine() to dispatch."
            )
        # A well below the top level acts as a plain sequence
        if kind in (OperandKind.SEQUENCE, OperandKind.WELL):
            return OperandKind.SEQUENCE, as_values(b, "operand")
        return kind, b

    def _check_values(self, size: int, b, kind: OperandKind,
                      begin: Optional[int], length: Optional[int]) -> None:
        if kind is OperandKind.CONSTANT:
            align.check_single(size, begin, length)
        else:
            align.check_pair(size, len(b), begin, length, self.strict)

    def _check_set(self, a: WellSet, b, kind: OperandKind,
                   begin: Optional[int], length: Optional[int]) -> None:
        if kind is not OperandKind.SET:
            for well in a:
                self._check_values(len(well), b, kind, begin, length)
            return

        slicing = self._slices_passthrough(begin)
        for well in a:
            other = b.get(well.index)
            if other is not None:
                align.check_pair(len(well), len(other), begin, length, self.strict)
            elif slicing:
                align.check_single(len(well), begin, length)
        if slicing:
            for well in b:
                if well.index not in a:
                    align.check_single(len(well), begin, length)

    def _check_plate(self, a: Plate, b, kind: OperandKind,
                     begin: Optional[int], length: Optional[int]) -> None:
        if kind is OperandKind.PLATE:
            validate_plate_dimensions(a, b)
            self._check_set(a.data, b.data, OperandKind.SET, begin, length)
            return
        if kind is OperandKind.SET and not self.strict:
            # Passthrough wells from the set land on this plate
            validate_set(a.rows, a.columns, [w for w in b if w.index not in a.data])
        self._check_set(a.data, b, kind, begin, length)

    def _check_stack(self, a: Stack, b, kind: OperandKind,
                     begin: Optional[int], length: Optional[int]) -> None:
        if kind is OperandKind.STACK:
            validate_plate_dimensions(a, b)
            for plate_a, plate_b in zip(a, b):
                self._check_plate(plate_a, plate_b, OperandKind.PLATE, begin, length)
            if self._slices_passthrough(begin):
                for plate in self._remainder(a, b):
                    for well in plate:
                        align.check_single(len(well), begin, length)
            return
        if kind is OperandKind.PLATE:
            validate_plate_dimensions(a, b)
        for plate in a:
            self._check_plate(plate, b, kind, begin, length)

    # ==================================================================
    # Computation pass (inputs already validated)
    # ==================================================================

    def _pair(self, a: np.ndarray, b: np.ndarray,
              begin: Optional[int], length: Optional[int]) -> np.ndarray:
        k = self.kernel
        if begin is None:
            return k.combine_strict(a, b) if self.strict else k.combine(a, b)
        if self.strict:
            return k.combine_strict_range(a, b, begin, length)
        return k.combine_range(a, b, begin, length)

    def _values(self, a: np.ndarray, b, kind: OperandKind,
                begin: Optional[int], length: Optional[int]) -> np.ndarray:
        if kind is OperandKind.CONSTANT:
            return self.kernel.combine_constant(a, b, begin, length)
        return self._pair(a, b, begin, length)

    def _passthrough(self, well: Well, begin: Optional[int], length: Optional[int]) -> Well:
        if self._slices_passthrough(begin):
            return well.sub_well(begin, length)
        return well.copy()

    def _combine_set(self, a: WellSet, b, kind: OperandKind,
                     begin: Optional[int], length: Optional[int]) -> WellSet:
        if kind is not OperandKind.SET:
            return WellSet(
                [Well.at(w.index, self._values(w.data, b, kind, begin, length)) for w in a],
                a.label,
            )

        label = a.label if a.label == b.label else None
        result = WellSet(label=label)
        only_a = []
        for well in a:
            other = b.get(well.index)
            if other is None:
                only_a.append(well)
            else:
                result.add(Well.at(well.index, self._pair(well.data, other.data, begin, length)))
        only_b = [w for w in b if w.index not in a]

        if not self.strict:
            result.add([self._passthrough(w, begin, length) for w in only_a + only_b])

        logger.debug(
            f"sets ({self.mode}, {self.kernel.name}): {len(a) - len(only_a)} paired, "
            f"{len(only_a)}+{len(only_b)} unpaired "
            f"{'dropped' if self.strict else 'passed through'}"
        )
        return result

    def _combine_plate(self, a: Plate, b, kind: OperandKind,
                       begin: Optional[int], length: Optional[int]) -> Plate:
        result = Plate(a.rows, a.columns, a.label)
        for group in a.groups():
            result.add_group(group)

        if kind is OperandKind.PLATE:
            for group in b.groups():
                result.add_group(group, merge=True)
            wells = self._combine_set(a.data, b.data, OperandKind.SET, begin, length)
        else:
            wells = self._combine_set(a.data, b, kind, begin, length)

        result.add_wells(wells)
        return result

    def _combine_stack(self, a: Stack, b, kind: OperandKind,
                       begin: Optional[int], length: Optional[int]) -> Stack:
        result = Stack(a.rows, a.columns, a.label)

        if kind is not OperandKind.STACK:
            result.add([self._combine_plate(p, b, kind, begin, length) for p in a])
            return result

        result.add([
            self._combine_plate(plate_a, plate_b, OperandKind.PLATE, begin, length)
            for plate_a, plate_b in zip(a, b)
        ])
        remainder = self._remainder(a, b)
        if not self.strict:
            result.add([self._passthrough_plate(p, begin, length) for p in remainder])

        logger.debug(
            f"stacks ({self.mode}, {self.kernel.name}): {min(len(a), len(b))} paired, "
            f"{len(remainder)} unpaired {'dropped' if self.strict else 'passed through'}"
        )
        return result

    @staticmethod
    def _remainder(a: Stack, b: Stack):
        """Plates of the longer stack beyond the shorter one's length."""
        n = min(len(a), len(b))
        longer = a if len(a) > len(b) else b
        return longer.plates()[n:]

    def _passthrough_plate(self, plate: Plate, begin: Optional[int],
                           length: Optional[int]) -> Plate:
        if not self._slices_passthrough(begin):
            return plate.copy()
        return Plate(plate.rows, plate.columns, plate.label,
                     [w.sub_well(begin, length) for w in plate], plate.groups())
