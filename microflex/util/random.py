"""
Random container generation for tests and demos.

All builders draw from a numpy Generator. Pass `rng` to share one stream,
or `seed` for a fresh reproducible one; defaults come from
MICROFLEX_CONFIG['random'].

Usage:
    from microflex.util.random import random_plate

    plate = random_plate(96, seed=7)          # 10 random wells on an 8x12 plate
"""

from typing import Optional

import numpy as np

from microflex.config import MICROFLEX_CONFIG, get_plate_format
from microflex.plate import Plate, Stack, Well, WellIndex, WellSet


def _defaults() -> dict:
    return MICROFLEX_CONFIG['random']


def _generator(rng: Optional[np.random.Generator], seed: Optional[int]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng(seed)


def random_values(min_value: Optional[int] = None, max_value: Optional[int] = None,
                  min_length: Optional[int] = None, max_length: Optional[int] = None,
                  rng: Optional[np.random.Generator] = None,
                  seed: Optional[int] = None) -> np.ndarray:
    """Integers in [min_value, max_value), length in [min_length, max_length]."""
    cfg = _defaults()
    min_value = cfg['min_value'] if min_value is None else min_value
    max_value = cfg['max_value'] if max_value is None else max_value
    min_length = cfg['min_length'] if min_length is None else min_length
    max_length = cfg['max_length'] if max_length is None else max_length
    if min_value >= max_value:
        raise ValueError(f"Empty value range [{min_value}, {max_value}).")
    if not 0 <= min_length <= max_length:
        raise ValueError(f"Invalid length range [{min_length}, {max_length}].")

    gen = _generator(rng, seed)
    size = int(gen.integers(min_length, max_length + 1))
    return gen.integers(min_value, max_value, size=size, dtype=np.int64)


def random_well(row: int, column: int, rng: Optional[np.random.Generator] = None,
                seed: Optional[int] = None, **value_kwargs) -> Well:
    gen = _generator(rng, seed)
    return Well(row, column, random_values(rng=gen, **value_kwargs))


def random_set(rows: int, columns: int, n_wells: Optional[int] = None,
               label: Optional[str] = None, rng: Optional[np.random.Generator] = None,
               seed: Optional[int] = None, **value_kwargs) -> WellSet:
    """n_wells distinct coordinates drawn without replacement from rows x columns."""
    n_wells = _defaults()['n_wells'] if n_wells is None else n_wells
    n_wells = min(n_wells, rows * columns)
    gen = _generator(rng, seed)
    picks = gen.choice(rows * columns, size=n_wells, replace=False)
    return WellSet(
        [Well.at(WellIndex(int(p) // columns, int(p) % columns),
                 random_values(rng=gen, **value_kwargs)) for p in picks],
        label,
    )


def random_plate(n_wells_format: int = 96, n_wells: Optional[int] = None,
                 label: Optional[str] = None, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None, **value_kwargs) -> Plate:
    rows, columns = get_plate_format(n_wells_format)
    gen = _generator(rng, seed)
    return Plate(rows, columns, label,
                 random_set(rows, columns, n_wells, rng=gen, **value_kwargs))


def random_stack(n_wells_format: int = 96, n_plates: Optional[int] = None,
                 n_wells: Optional[int] = None, label: Optional[str] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None, **value_kwargs) -> Stack:
    n_plates = _defaults()['n_plates'] if n_plates is None else n_plates
    rows, columns = get_plate_format(n_wells_format)
    gen = _generator(rng, seed)
    return Stack(rows, columns, label, [
        random_plate(n_wells_format, n_wells, f"plate_{i + 1}", rng=gen, **value_kwargs)
        for i in range(n_plates)
    ])
