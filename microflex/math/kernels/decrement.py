"""Kernel: decrement (a - 1)."""
import numpy as np


def compute(a: np.ndarray) -> np.ndarray:
    return a - 1
