"""Tests for config, validation, overflow and random helpers."""

import numpy as np
import pytest

from microflex.config import MICROFLEX_CONFIG, get_plate_format, get_setting, validate_config
from microflex.errors import (
    DimensionMismatchError,
    IndexRangeError,
    NullArgumentError,
)
from microflex.math import combine
from microflex.plate import Plate, Well
from microflex.util import (
    checked_cast,
    fits,
    validate_pair_range,
    validate_plate_dimensions,
    validate_range,
    validate_set,
    validate_well,
)
from microflex.util.random import random_plate, random_set, random_stack, random_values


class TestConfig:

    def test_plate_formats(self):
        assert get_plate_format(96) == (8, 12)
        assert get_plate_format(1536) == (32, 48)

    def test_get_setting(self):
        assert get_setting('engine', 'subrange_passthrough') == 'slice'
        assert get_setting('values', 'logical_shift_bits') == 32

    def test_config_is_consistent(self):
        assert validate_config() == []

    def test_bad_policy_reported(self, monkeypatch):
        monkeypatch.setitem(MICROFLEX_CONFIG['engine'], 'subrange_passthrough', 'pad')
        assert len(validate_config()) == 1


class TestValidation:

    def test_range(self):
        validate_range(4, 1, 3)
        validate_range(0, 0, 0)
        with pytest.raises(IndexRangeError):
            validate_range(4, 2, 3)

    def test_pair_range_modes(self):
        validate_pair_range(4, 2, 1, 3, strict=False)
        with pytest.raises(IndexRangeError):
            validate_pair_range(4, 2, 1, 3, strict=True)

    def test_well_bounds(self):
        validate_well(2, 3, Well(1, 2))
        with pytest.raises(IndexRangeError):
            validate_well(2, 3, Well(2, 0))
        with pytest.raises(IndexRangeError):
            validate_set(2, 3, [Well(0, 0), Well(0, 3)])

    def test_plate_dimensions(self):
        validate_plate_dimensions(Plate(2, 3), Plate(2, 3))
        with pytest.raises(DimensionMismatchError) as err:
            validate_plate_dimensions(Plate(2, 3), Plate(3, 2))
        assert err.value.expected == (2, 3)
        assert err.value.actual == (3, 2)

    def test_errors_are_builtin_subclasses(self):
        with pytest.raises(ValueError):
            validate_plate_dimensions(Plate(2, 3), None)
        with pytest.raises(NullArgumentError):
            validate_plate_dimensions(None, Plate(2, 3))
        with pytest.raises(IndexError):
            validate_range(1, 0, 2)


class TestOverflow:

    def test_fits(self):
        assert fits([127, -128], 'int8')
        assert not fits([128], 'int8')
        assert not fits(2 ** 31, 'int32')
        assert fits(np.iinfo(np.int64).max, 'int64')
        assert not fits([np.inf], 'float32')

    def test_checked_cast(self):
        result = checked_cast([1, 2], 'int16')
        assert result.dtype == np.int16
        with pytest.raises(OverflowError):
            checked_cast([70000], 'int16')

    def test_unsupported_type(self):
        with pytest.raises(ValueError):
            checked_cast([1], 'uint8')


class TestRandom:

    def test_values_bounds(self):
        values = random_values(5, 10, 3, 3, seed=1)
        assert len(values) == 3
        assert values.min() >= 5 and values.max() < 10

    def test_seed_reproducible(self):
        assert random_plate(96, seed=3) == random_plate(96, seed=3)

    def test_set_draws_distinct_coordinates(self):
        s = random_set(2, 3, n_wells=6, seed=0)
        assert len(s) == 6
        assert s.labels() == ['A1', 'A2', 'A3', 'B1', 'B2', 'B3']

    def test_stack_shape(self):
        stack = random_stack(24, n_plates=2, n_wells=4, seed=5)
        assert stack.dimensions == (4, 6)
        assert [len(p) for p in stack] == [4, 4]

    def test_bad_ranges(self):
        with pytest.raises(ValueError):
            random_values(10, 10)
        with pytest.raises(ValueError):
            random_values(min_length=5, max_length=2)


class TestFloatBounds:

    def test_float_at_int64_limit(self):
        assert not fits([2.0 ** 63], 'int64')
        assert fits([-2.0 ** 63], 'int64')
        assert not fits([1e20], 'int64')

    def test_float_operand_overflow(self):
        with pytest.raises(OverflowError):
            combine(Well(0, 0, [1]), [1e20], 'addition')
