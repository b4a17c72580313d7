"""Kernel: bitwise_and (a & b)."""
import numpy as np


def compute(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.bitwise_and(a, b)
