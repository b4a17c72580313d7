"""
Polars Frames
=============
Long-format conversion between containers and polars DataFrames.

One row per element:

    plate     Int64    position in the stack (null outside a stack)
    row       Int64    0-based
    column    Int64    0-based
    well      String   label, e.g. 'A1'
    position  Int64    index within the well
    value     Int64

Usage:
    from microflex.frame import to_frame, from_frame

    df = to_frame(plate)
    df.group_by('well').agg(pl.col('value').mean())
    plate = from_frame(df, 8, 12)
"""

from typing import List, Optional

import polars as pl

from microflex.plate import Plate, Stack, Well, WellSet
from microflex.util.validation import require

SCHEMA = {
    'plate': pl.Int64,
    'row': pl.Int64,
    'column': pl.Int64,
    'well': pl.String,
    'position': pl.Int64,
    'value': pl.Int64,
}


def _wells_of(container) -> List[tuple]:
    """(plate position or None, well) pairs in container order."""
    if isinstance(container, Stack):
        return [(i, w) for i, plate in enumerate(container) for w in plate]
    if isinstance(container, Well):
        return [(None, container)]
    if isinstance(container, (Plate, WellSet)):
        return [(None, w) for w in container]
    raise TypeError(f"Cannot convert {type(container).__name__} to a frame.")


def to_frame(container) -> pl.DataFrame:
    """Flatten a well, set, plate or stack to one row per element."""
    require(container, "container")
    columns = {name: [] for name in SCHEMA}
    for plate, well in _wells_of(container):
        size = len(well)
        columns['plate'].extend([plate] * size)
        columns['row'].extend([well.row] * size)
        columns['column'].extend([well.column] * size)
        columns['well'].extend([well.label] * size)
        columns['position'].extend(range(size))
        columns['value'].extend(well.to_list())
    return pl.DataFrame(columns, schema=SCHEMA)


def _plate_from_rows(df: pl.DataFrame, rows: int, columns: int,
                     label: Optional[str]) -> Plate:
    grouped = (
        df.sort(['row', 'column', 'position'])
        .group_by(['row', 'column'], maintain_order=True)
        .agg(pl.col('value'))
    )
    wells = [Well(r, c, values) for r, c, values in grouped.iter_rows()]
    return Plate(rows, columns, label, wells)


def from_frame(df: pl.DataFrame, rows: int, columns: int,
               label: Optional[str] = None) -> Plate:
    """
    Rebuild a Plate from a frame laid out as by to_frame. Only rows with a
    null `plate` are used when that column is present.
    """
    require(df, "frame")
    missing = {'row', 'column', 'position', 'value'} - set(df.columns)
    if missing:
        raise ValueError(f"Frame is missing columns: {sorted(missing)}")
    if 'plate' in df.columns:
        df = df.filter(pl.col('plate').is_null())
    return _plate_from_rows(df, rows, columns, label)


def stack_from_frame(df: pl.DataFrame, rows: int, columns: int,
                     label: Optional[str] = None) -> Stack:
    """Rebuild a Stack, one plate per distinct non-null `plate` value."""
    require(df, "frame")
    if 'plate' not in df.columns:
        raise ValueError("Frame has no 'plate' column.")
    df = df.filter(pl.col('plate').is_not_null())
    positions = sorted(df.get_column('plate').unique().to_list())
    return Stack(rows, columns, label, [
        _plate_from_rows(df.filter(pl.col('plate') == p), rows, columns, None)
        for p in positions
    ])
