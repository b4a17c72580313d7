"""Kernel: multiplication (a * b)."""
import numpy as np


def compute(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a * b
