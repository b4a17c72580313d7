"""microflex.stat: descriptive statistics per well, set, plate and stack."""

from microflex.stat import descriptive
from microflex.stat.statistic import (
    BUILTINS,
    GEOMETRIC_MEAN,
    IQR,
    MAX,
    MEAN,
    MIN,
    N,
    STD,
    SUM,
    Statistic,
    equal_bins,
    get_statistic,
    percentile,
    quantile,
)

__all__ = [
    'descriptive', 'Statistic', 'BUILTINS', 'get_statistic',
    'N', 'SUM', 'MEAN', 'GEOMETRIC_MEAN', 'MIN', 'MAX', 'STD', 'IQR',
    'percentile', 'quantile', 'equal_bins',
]
