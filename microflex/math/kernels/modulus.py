"""Kernel: modulus (remainder carrying the sign of the dividend)."""
import numpy as np


def compute(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    if np.any(b == 0):
        raise ZeroDivisionError("Integer modulus by zero.")
    return np.fmod(a, b)
