"""Tests for the unary engine and broadcast()."""

import numpy as np
import pytest

from microflex.errors import IndexRangeError, NullArgumentError
from microflex.math import UnaryEngine, broadcast, get_kernel
from microflex.plate import Plate, Stack, Well, WellList, WellSet


@pytest.fixture
def plate():
    return Plate(2, 3, 'p', [Well(0, 0, [1, 2, 3]), Well(1, 2, [4])],
                 [WellList(['A1'], 'g')])


class TestBroadcast:

    def test_well(self):
        assert broadcast(Well(0, 0, [1, 2]), 'increment').to_list() == [2, 3]

    def test_plate_keeps_structure(self, plate):
        result = broadcast(plate, 'left_shift', n=2)
        assert result.dimensions == (2, 3)
        assert result.label == 'p'
        assert result.group_labels == ['g']
        assert result['A1'].to_list() == [4, 8, 12]
        assert result['B3'].to_list() == [16]
        assert plate['A1'].to_list() == [1, 2, 3]

    def test_window(self):
        s = WellSet([Well(0, 0, [1, 2, 3])])
        assert broadcast(s, 'decrement', begin=1, length=2)['A1'].to_list() == [1, 2]

    def test_window_checked_for_every_well(self, plate):
        with pytest.raises(IndexRangeError):
            broadcast(plate, 'increment', begin=0, length=2)

    def test_stack(self, plate):
        stack = Stack.of([plate, plate.copy()])
        result = broadcast(stack, 'increment')
        assert len(result) == 2
        assert result[1]['B3'].to_list() == [5]

    def test_sequence(self):
        np.testing.assert_array_equal(broadcast([-8], 'right_shift', n=1), [-4])

    def test_callable_kernel(self):
        assert broadcast(Well(0, 0, [3]), lambda a: -a).to_list() == [-3]

    def test_binary_name_rejected(self):
        with pytest.raises(TypeError):
            broadcast(Well(0, 0, [1]), 'addition')


class TestUnaryEngine:

    def test_null_kernel(self):
        with pytest.raises(NullArgumentError):
            UnaryEngine(None)

    def test_null_target(self):
        with pytest.raises(NullArgumentError):
            UnaryEngine(get_kernel('increment')).broadcast(None)

    def test_logical_shift(self):
        engine = UnaryEngine(get_kernel('right_shift_logical', n=1))
        assert engine.wells(Well(0, 0, [-8, 8])).to_list() == [2147483644, 4]
