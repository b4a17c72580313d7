"""
Bounds and argument validation shared by containers and engines.

All checks raise the typed errors from microflex.errors and never
return partial state.
"""

from typing import Any, Optional

from microflex.errors import (
    DimensionMismatchError,
    IndexRangeError,
    NullArgumentError,
)


def require(value: Any, name: str = "argument") -> Any:
    """Raise NullArgumentError if value is None, else return it."""
    if value is None:
        raise NullArgumentError(name)
    return value


def validate_window(begin: Optional[int], length: Optional[int]) -> bool:
    """
    Check a (begin, length) pair.

    Returns True if a window was requested, False if both are None.
    Giving only one of the two is a usage error.
    """
    if begin is None and length is None:
        return False
    if begin is None or length is None:
        raise ValueError("begin and length must be given together.")
    if begin < 0 or length < 0:
        raise IndexRangeError(
            f"Invalid indices: begin={begin}, length={length}. "
            "Both must be non-negative.",
            begin, length,
        )
    return True


def validate_range(size: int, begin: int, length: int) -> None:
    """Require [begin, begin + length) to lie within a sequence of `size`."""
    validate_window(begin, length)
    if begin + length > size:
        raise IndexRangeError(
            f"Invalid indices: [{begin}, {begin + length}) exceeds length {size}.",
            begin, length,
        )


def validate_pair_range(size_a: int, size_b: int, begin: int, length: int,
                        strict: bool) -> None:
    """
    Window check for two operands.

    Standard combines only need the window inside the longer operand; the
    shorter one is padded by passthrough. Strict combines read both
    operands at every index of the window.
    """
    limit = min(size_a, size_b) if strict else max(size_a, size_b)
    validate_range(limit, begin, length)


def validate_well(rows: int, columns: int, well) -> None:
    """Require a well's coordinate to lie inside a rows x columns plate."""
    require(well, "well")
    if not (0 <= well.row < rows and 0 <= well.column < columns):
        raise IndexRangeError(
            f"Invalid well indices for well {well.label}: "
            f"plate is {rows}x{columns}."
        )


def validate_set(rows: int, columns: int, wells) -> None:
    """validate_well for every member of a well set."""
    require(wells, "well set")
    for well in wells:
        validate_well(rows, columns, well)


def validate_dimensions(rows: int, columns: int, container) -> None:
    """Require a plate (or stack) to have the given dimensions."""
    require(container, "plate")
    if (container.rows, container.columns) != (rows, columns):
        raise DimensionMismatchError(
            (rows, columns), (container.rows, container.columns)
        )


def validate_plate_dimensions(first, second) -> None:
    """Require two plates (or stacks) to share dimensions."""
    require(first, "first plate")
    require(second, "second plate")
    validate_dimensions(first.rows, first.columns, second)
