"""
Descriptive calculations over one 1-D array.

Each function takes the raw values and returns a float (or, for
equal_bins, a list of bins). Empty input gives nan / [].
"""

from typing import List

import numpy as np


def _floats(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).ravel()


def n(values) -> float:
    return float(len(_floats(values)))


def total(values) -> float:
    y = _floats(values)
    return float(np.sum(y)) if len(y) else np.nan


def mean(values) -> float:
    y = _floats(values)
    return float(np.mean(y)) if len(y) else np.nan


def geometric_mean(values) -> float:
    """exp(mean(log(y))). Any negative value -> nan; a zero gives 0."""
    y = _floats(values)
    if not len(y) or np.any(y < 0):
        return np.nan
    with np.errstate(divide='ignore'):
        return float(np.exp(np.mean(np.log(y))))


def minimum(values) -> float:
    y = _floats(values)
    return float(np.min(y)) if len(y) else np.nan


def maximum(values) -> float:
    y = _floats(values)
    return float(np.max(y)) if len(y) else np.nan


def std(values) -> float:
    """Sample standard deviation (ddof=1). Fewer than two values -> nan."""
    y = _floats(values)
    if len(y) < 2:
        return np.nan
    return float(np.std(y, ddof=1))


# The p * (n + 1) position rule, clamped at both ends, is numpy's 'weibull'.

def percentile(values, p: int) -> float:
    """p-th percentile, p in 1..100, position p * (n + 1) / 100."""
    if not 1 <= p <= 100:
        raise ValueError(f"Percentile must be in 1..100, got {p}.")
    y = _floats(values)
    if not len(y):
        return np.nan
    return float(np.percentile(y, p, method='weibull'))


def quantile(values, q: float) -> float:
    """q-th quantile, q in (0, 1], position q * (n + 1)."""
    if not 0 < q <= 1:
        raise ValueError(f"Quantile must be in (0, 1], got {q}.")
    y = _floats(values)
    if not len(y):
        return np.nan
    return float(np.quantile(y, q, method='weibull'))


def interquartile_range(values) -> float:
    """Q3 - Q1 with Tukey hinges: medians of the lower and upper halves."""
    y = np.sort(_floats(values))
    if not len(y):
        return np.nan
    if len(y) < 2:
        return 0.0
    half = len(y) // 2
    return float(np.median(y[half + len(y) % 2:]) - np.median(y[:half]))


def equal_bins(values, k: int) -> List[list]:
    """
    Split values into k equal-width bins over [min, max]. Each bin is a
    sorted list; the maximum always lands in the last bin.
    """
    if k < 1:
        raise ValueError(f"Bin count must be positive, got {k}.")
    y = np.sort(np.asarray(values).ravel())
    if not len(y):
        return []

    if y[0] == y[-1]:
        index = np.full(len(y), k - 1)
    else:
        edges = np.histogram_bin_edges(y, bins=k)
        index = np.digitize(y, edges[1:-1])
    return [y[index == i].tolist() for i in range(k)]
