"""Kernel: bitwise_xor (a ^ b)."""
import numpy as np


def compute(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.bitwise_xor(a, b)
