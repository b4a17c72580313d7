# Microflex Configuration
# =======================
# Plate formats, label conventions and engine defaults.
#
# Usage:
#   from microflex.config import MICROFLEX_CONFIG, get_plate_format
#   rows, columns = get_plate_format(96)   # (8, 12)

from typing import Any, List, Tuple

import numpy as np


MICROFLEX_CONFIG = {

    # =========================================================
    # Standard plate formats: n_wells -> (rows, columns)
    # =========================================================
    'plate_formats': {
        6: (2, 3),
        12: (3, 4),
        24: (4, 6),
        48: (6, 8),
        96: (8, 12),
        384: (16, 24),
        1536: (32, 48),
    },

    # =========================================================
    # Well labels
    # =========================================================
    'labels': {
        'alpha_base': 26,          # Row letters A..Z, AA..ZZ, ...
        'column_offset': 1,        # Label "A1" is column index 0
        'list_delimiter': ',',
    },

    # =========================================================
    # Well payload
    # =========================================================
    'values': {
        'dtype': np.int64,
        'logical_shift_bits': 32,  # Word width for unsigned right shift
    },

    # =========================================================
    # Combination engine
    # =========================================================
    'engine': {
        # Wells present in only one operand under a sub-ranged standard
        # combine: 'slice' emits only the window, 'full' emits the whole well.
        'subrange_passthrough': 'slice',
    },

    # =========================================================
    # Random data generation
    # =========================================================
    'random': {
        'min_value': 0,
        'max_value': 100,
        'min_length': 1,
        'max_length': 10,
        'n_wells': 10,
        'n_plates': 3,
    },
}


def get_plate_format(n_wells: int) -> Tuple[int, int]:
    """Return (rows, columns) for a standard plate size."""
    formats = MICROFLEX_CONFIG['plate_formats']
    if n_wells not in formats:
        raise KeyError(
            f"Unknown plate format: {n_wells}. Available: {sorted(formats)}"
        )
    return formats[n_wells]


def get_setting(*path: str) -> Any:
    """
    Walk the config by key path.

    Example:
        get_setting('engine', 'subrange_passthrough')  # 'slice'
    """
    node: Any = MICROFLEX_CONFIG
    for key in path:
        node = node[key]
    return node


def validate_config() -> List[str]:
    """Check config consistency. Returns a list of problems (empty if OK)."""
    problems = []

    for n_wells, (rows, columns) in MICROFLEX_CONFIG['plate_formats'].items():
        if rows * columns != n_wells:
            problems.append(f"Plate format {n_wells}: {rows}x{columns} != {n_wells}")

    if MICROFLEX_CONFIG['engine']['subrange_passthrough'] not in ('slice', 'full'):
        problems.append("engine.subrange_passthrough must be 'slice' or 'full'")

    rnd = MICROFLEX_CONFIG['random']
    if rnd['min_value'] > rnd['max_value']:
        problems.append("random.min_value > random.max_value")
    if rnd['min_length'] > rnd['max_length']:
        problems.append("random.min_length > random.max_length")

    return problems
