"""
Kernel: right_shift_logical (zero-filling shift).

Values are shifted as unsigned words of `logical_shift_bits` width, so
-8 >>> 1 on a 32-bit word gives 2147483644.
"""
import numpy as np

from microflex.config import MICROFLEX_CONFIG


def compute(a: np.ndarray, n: int = 1) -> np.ndarray:
    bits = MICROFLEX_CONFIG['values']['logical_shift_bits']
    if not 0 <= n < bits:
        raise ValueError(f"Shift distance must be in [0, {bits}), got {n}.")
    mask = (1 << bits) - 1
    return np.right_shift(np.bitwise_and(a, mask), n)
