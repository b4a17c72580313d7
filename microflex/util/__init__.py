"""microflex.util: validation, overflow-checked casts, random containers."""

from microflex.util.overflow import SUPPORTED, checked_cast, fits
from microflex.util.validation import (
    require,
    validate_dimensions,
    validate_pair_range,
    validate_plate_dimensions,
    validate_range,
    validate_set,
    validate_well,
    validate_window,
)

__all__ = [
    'SUPPORTED', 'checked_cast', 'fits',
    'require', 'validate_window', 'validate_range', 'validate_pair_range',
    'validate_well', 'validate_set', 'validate_dimensions',
    'validate_plate_dimensions',
]
