"""
Vector Alignment
================
How two integer sequences of possibly different length are combined by an
elementwise kernel.

    standard  result[i] = op(a[i], b[i])  for i < min(len)
              result[i] = longer[i]       for min(len) <= i < max(len)
    strict    result[i] = op(a[i], b[i])  for i < min(len), nothing else

A (begin, length) window restricts both operands to [begin, begin + length)
before the rules above apply, so a windowed combine equals combining the
pre-sliced windows. Indices outside the window are never read or emitted.

The kernel `op` is always called with two arrays of equal length.
"""

from typing import Callable, Optional

import numpy as np

from microflex.config import MICROFLEX_CONFIG
from microflex.plate.well import as_values
from microflex.util.validation import (
    require,
    validate_pair_range,
    validate_range,
    validate_window,
)


BinaryOp = Callable[[np.ndarray, np.ndarray], np.ndarray]
UnaryOp = Callable[[np.ndarray], np.ndarray]


def _dtype():
    return MICROFLEX_CONFIG['values']['dtype']


def _checked(result, size: int) -> np.ndarray:
    """
    Kernels must return one integral value per input element. Float output
    is accepted only when every value is a whole number within range.
    """
    result = np.asarray(result)
    if result.shape != (size,):
        raise ValueError(
            f"Kernel returned shape {result.shape}, expected ({size},)."
        )
    return as_values(result, "kernel result")


def window(values: np.ndarray, begin: Optional[int], length: Optional[int]) -> np.ndarray:
    """Clip values to [begin, begin + length). No window -> values unchanged."""
    if begin is None:
        return values
    return values[begin:begin + length]


def check_pair(size_a: int, size_b: int, begin: Optional[int], length: Optional[int],
               strict: bool) -> None:
    """Validate a window for two operands without computing anything."""
    if validate_window(begin, length):
        validate_pair_range(size_a, size_b, begin, length, strict)


def check_single(size: int, begin: Optional[int], length: Optional[int]) -> None:
    """Validate a window for one operand (constant or unary combines)."""
    if validate_window(begin, length):
        validate_range(size, begin, length)


def combine_standard(a, b, op: BinaryOp, begin: Optional[int] = None,
                     length: Optional[int] = None) -> np.ndarray:
    """Union-preserving combine: the longer operand's tail passes through."""
    require(op, "kernel")
    a = as_values(a, "first operand")
    b = as_values(b, "second operand")
    check_pair(len(a), len(b), begin, length, strict=False)

    a = window(a, begin, length)
    b = window(b, begin, length)
    n = min(len(a), len(b))
    head = _checked(op(a[:n], b[:n]), n)
    tail = a[n:] if len(a) > len(b) else b[n:]
    return np.concatenate([head, tail]).astype(_dtype(), copy=False)


def combine_strict(a, b, op: BinaryOp, begin: Optional[int] = None,
                   length: Optional[int] = None) -> np.ndarray:
    """Intersection-only combine: trailing elements of the longer operand are dropped."""
    require(op, "kernel")
    a = as_values(a, "first operand")
    b = as_values(b, "second operand")
    check_pair(len(a), len(b), begin, length, strict=True)

    a = window(a, begin, length)
    b = window(b, begin, length)
    n = min(len(a), len(b))
    return _checked(op(a[:n], b[:n]), n)


def combine_constant(a, constant, op: BinaryOp, begin: Optional[int] = None,
                     length: Optional[int] = None) -> np.ndarray:
    """Broadcast a scalar: op(a[i], constant) for every i in range."""
    require(op, "kernel")
    require(constant, "constant")
    a = as_values(a, "first operand")
    check_single(len(a), begin, length)

    a = window(a, begin, length)
    b = np.full(len(a), int(constant), dtype=_dtype())
    return _checked(op(a, b), len(a))


def apply_unary(a, op: UnaryOp, begin: Optional[int] = None,
                length: Optional[int] = None) -> np.ndarray:
    """op over every element of a (or of its window)."""
    require(op, "kernel")
    a = as_values(a, "operand")
    check_single(len(a), begin, length)

    a = window(a, begin, length)
    return _checked(op(a), len(a))
