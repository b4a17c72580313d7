"""Kernel: left_shift (a << n)."""
import numpy as np


def compute(a: np.ndarray, n: int = 1) -> np.ndarray:
    if n < 0:
        raise ValueError(f"Shift distance must be non-negative, got {n}.")
    return np.left_shift(a, n)
