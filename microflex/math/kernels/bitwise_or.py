"""Kernel: bitwise_or (a | b)."""
import numpy as np


def compute(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.bitwise_or(a, b)
