"""Tests for polars frame conversion."""

import polars as pl
import pytest

from microflex.frame import from_frame, stack_from_frame, to_frame
from microflex.plate import Plate, Stack, Well, WellSet


@pytest.fixture
def plate():
    return Plate(2, 3, wells=[Well(0, 0, [1, 2]), Well(1, 2, [7])])


class TestToFrame:

    def test_columns_and_rows(self, plate):
        df = to_frame(plate)
        assert df.columns == ['plate', 'row', 'column', 'well', 'position', 'value']
        assert df.height == 3
        assert df.get_column('well').to_list() == ['A1', 'A1', 'B3']
        assert df.get_column('position').to_list() == [0, 1, 0]
        assert df.get_column('plate').null_count() == 3

    def test_stack_positions(self, plate):
        df = to_frame(Stack.of([plate, plate]))
        assert df.get_column('plate').to_list() == [0, 0, 0, 1, 1, 1]

    def test_empty(self):
        df = to_frame(WellSet())
        assert df.height == 0
        assert df.schema['value'] == pl.Int64

    def test_aggregation(self, plate):
        means = (to_frame(plate).group_by('well').agg(pl.col('value').sum())
                 .sort('well'))
        assert means.get_column('value').to_list() == [3, 7]


class TestFromFrame:

    def test_plate_round_trip(self, plate):
        assert from_frame(to_frame(plate), 2, 3) == plate

    def test_stack_round_trip(self, plate):
        stack = Stack.of([plate, Plate(2, 3, wells=[Well(0, 1, [5])])])
        rebuilt = stack_from_frame(to_frame(stack), 2, 3)
        assert [p.data for p in rebuilt] == [p.data for p in stack]

    def test_positions_ordered(self):
        df = pl.DataFrame({'row': [0, 0], 'column': [0, 0],
                           'position': [1, 0], 'value': [20, 10]})
        assert from_frame(df, 2, 3)['A1'].to_list() == [10, 20]

    def test_missing_columns(self):
        with pytest.raises(ValueError):
            from_frame(pl.DataFrame({'row': [0]}), 2, 3)
