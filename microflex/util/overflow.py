"""
Overflow-checked numeric conversion.

numpy casts silently wrap (int64 -> int8 turns 300 into 44). These helpers
refuse any value that does not fit the target type.

Usage:
    from microflex.util.overflow import checked_cast, fits

    checked_cast([1, 2, 3], 'int8')     # array([1, 2, 3], dtype=int8)
    checked_cast([300], 'int8')         # OverflowError
    fits(2 ** 31, 'int32')              # False
"""

from typing import Union

import numpy as np


SUPPORTED = ('int8', 'int16', 'int32', 'int64', 'float32', 'float64')


def _bounds(dtype: np.dtype):
    if dtype.kind in 'iu':
        info = np.iinfo(dtype)
    else:
        info = np.finfo(dtype)
    return info.min, info.max


def _resolve(dtype: Union[str, np.dtype, type]) -> np.dtype:
    resolved = np.dtype(dtype)
    if resolved.name not in SUPPORTED:
        raise ValueError(f"Unsupported target type: {resolved.name}. Supported: {SUPPORTED}")
    return resolved


def fits(value, dtype: Union[str, np.dtype, type]) -> bool:
    """True if every value lies within the range of dtype."""
    target = _resolve(dtype)
    values = np.asarray(value)
    if values.size == 0:
        return True
    lo, hi = _bounds(target)
    if values.dtype.kind in 'iub':
        # Compare as Python ints so int64 extremes don't wrap in the check
        return int(values.min()) >= lo and int(values.max()) <= hi
    if not np.all(np.isfinite(values)):
        return False
    if target.kind in 'iu':
        # float(hi) rounds int64 max up to 2**63, itself out of range
        return bool(values.min() >= float(lo) and values.max() < float(hi) + 1)
    return bool(values.min() >= lo and values.max() <= hi)


def checked_cast(values, dtype: Union[str, np.dtype, type]) -> np.ndarray:
    """Convert values to dtype, raising OverflowError if any do not fit."""
    target = _resolve(dtype)
    values = np.asarray(values)
    if not fits(values, target):
        lo, hi = _bounds(target)
        raise OverflowError(
            f"Overflow converting to {target.name}: values must lie in [{lo}, {hi}]."
        )
    return values.astype(target)
