"""Kernel: division (integer quotient, truncated toward zero)."""
import numpy as np


def compute(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    if np.any(b == 0):
        raise ZeroDivisionError("Integer division by zero.")
    # numpy floors; move inexact negative quotients back toward zero
    q = a // b
    r = a - q * b
    return q + ((r != 0) & ((a < 0) != (b < 0)))
