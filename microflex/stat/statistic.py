"""
Statistic
=========
A named calculation applied at every container level.

    well(w)             -> value
    set(s), plate(p)    -> {WellIndex: value}, coordinate order
    stack(s)            -> [ {WellIndex: value}, ... ] one dict per plate
    aggregated(c)       -> one value over every pooled element of c
    aggregated_each(cs) -> [ value, ... ] one pooled value per container

An optional (begin, length) window restricts each well before the
calculation; aggregated() windows each well, then pools.

Optional weights multiply each well's values position by position before
the calculation: weights[i] scales the i-th value fed in (after
windowing), and must cover every such value.

Usage:
    from microflex.stat import MEAN, GEOMETRIC_MEAN, percentile

    MEAN.plate(plate)                      # {WellIndex(0, 0): 2.5, ...}
    percentile(90).aggregated(stack)
    GEOMETRIC_MEAN.well(well, weights=[0.5, 1.0, 2.0])
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import numpy as np

from microflex.plate import Plate, Stack, Well, WellIndex, WellSet
from microflex.plate.well import as_values
from microflex.stat import descriptive
from microflex.util.validation import require, validate_range, validate_window

logger = logging.getLogger(__name__)


def _as_weights(weights) -> Optional[np.ndarray]:
    if weights is None:
        return None
    w = np.asarray(weights, dtype=np.float64).ravel()
    if not np.all(np.isfinite(w)):
        raise ValueError("Weights must be finite.")
    return w


class Statistic:
    """Wrap f(values) -> result with per-level application."""

    def __init__(self, name: str, func: Callable[[np.ndarray], Any]):
        self.name = name
        self.func = func

    def __call__(self, values, weights=None) -> Any:
        return self.func(self._weighted(as_values(values, "values"), _as_weights(weights)))

    @staticmethod
    def _weighted(values: np.ndarray, weights: Optional[np.ndarray]) -> np.ndarray:
        if weights is None:
            return values
        if len(weights) < len(values):
            raise ValueError(
                f"Weights cover {len(weights)} values, well has {len(values)}."
            )
        return values * weights[:len(values)]

    def _values(self, well: Well, begin: Optional[int], length: Optional[int],
                weights: Optional[np.ndarray] = None) -> np.ndarray:
        values = well.data
        if validate_window(begin, length):
            validate_range(len(well), begin, length)
            values = values[begin:begin + length]
        return self._weighted(values, weights)

    def well(self, well: Well, begin: Optional[int] = None,
             length: Optional[int] = None, weights=None) -> Any:
        require(well, "well")
        return self.func(self._values(well, begin, length, _as_weights(weights)))

    def set(self, wells: WellSet, begin: Optional[int] = None,
            length: Optional[int] = None, weights=None) -> Dict[WellIndex, Any]:
        require(wells, "well set")
        w = _as_weights(weights)
        return {well.index: self.func(self._values(well, begin, length, w)) for well in wells}

    def plate(self, plate: Plate, begin: Optional[int] = None,
              length: Optional[int] = None, weights=None) -> Dict[WellIndex, Any]:
        require(plate, "plate")
        return self.set(plate.data, begin, length, weights)

    def stack(self, stack: Stack, begin: Optional[int] = None,
              length: Optional[int] = None, weights=None) -> List[Dict[WellIndex, Any]]:
        require(stack, "stack")
        return [self.plate(p, begin, length, weights) for p in stack]

    def aggregated(self, container, begin: Optional[int] = None,
                   length: Optional[int] = None, weights=None) -> Any:
        """Pool every well of a well, set, plate or stack into one calculation."""
        require(container, "container")
        if isinstance(container, Well):
            wells = [container]
        elif isinstance(container, Stack):
            wells = [w for plate in container for w in plate]
        elif isinstance(container, (Plate, WellSet)):
            wells = list(container)
        else:
            raise TypeError(f"Cannot aggregate {type(container).__name__}.")

        w = _as_weights(weights)
        parts = [self._values(well, begin, length, w) for well in wells]
        pooled = np.concatenate(parts) if parts else np.array([], dtype=np.int64)
        logger.debug(f"{self.name}: pooled {len(pooled)} values from {len(wells)} wells")
        return self.func(pooled)

    def aggregated_each(self, containers: Iterable, begin: Optional[int] = None,
                        length: Optional[int] = None, weights=None) -> List[Any]:
        """aggregated() for each member of a collection of plates, sets or wells."""
        require(containers, "containers")
        return [self.aggregated(c, begin, length, weights) for c in containers]

    def __repr__(self) -> str:
        return f"Statistic({self.name!r})"


# ============================================================
# Built-ins
# ============================================================

N = Statistic('n', descriptive.n)
SUM = Statistic('sum', descriptive.total)
MEAN = Statistic('mean', descriptive.mean)
GEOMETRIC_MEAN = Statistic('geometric_mean', descriptive.geometric_mean)
MIN = Statistic('min', descriptive.minimum)
MAX = Statistic('max', descriptive.maximum)
STD = Statistic('std', descriptive.std)
IQR = Statistic('interquartile_range', descriptive.interquartile_range)


def percentile(p: int) -> Statistic:
    if not 1 <= p <= 100:
        raise ValueError(f"Percentile must be in 1..100, got {p}.")
    return Statistic(f'percentile_{p}', lambda y: descriptive.percentile(y, p))


def quantile(q: float) -> Statistic:
    if not 0 < q <= 1:
        raise ValueError(f"Quantile must be in (0, 1], got {q}.")
    return Statistic(f'quantile_{q}', lambda y: descriptive.quantile(y, q))


def equal_bins(k: int) -> Statistic:
    if k < 1:
        raise ValueError(f"Bin count must be positive, got {k}.")
    return Statistic(f'equal_bins_{k}', lambda y: descriptive.equal_bins(y, k))


BUILTINS = {s.name: s for s in (N, SUM, MEAN, GEOMETRIC_MEAN, MIN, MAX, STD, IQR)}


def get_statistic(name: str) -> Statistic:
    if name not in BUILTINS:
        raise KeyError(f"Unknown statistic: {name}. Available: {sorted(BUILTINS)}")
    return BUILTINS[name]
