"""Tests for descriptive statistics and level application."""

import math

import numpy as np
import pytest

from microflex.errors import IndexRangeError
from microflex.plate import Plate, Stack, Well, WellIndex, WellSet
from microflex.stat import (
    GEOMETRIC_MEAN,
    IQR,
    MAX,
    MEAN,
    N,
    STD,
    SUM,
    descriptive,
    equal_bins,
    get_statistic,
    percentile,
    quantile,
)


class TestDescriptive:

    def test_basic(self):
        y = [2, 4, 4, 4, 5, 5, 7, 9]
        assert descriptive.n(y) == 8
        assert descriptive.total(y) == 40
        assert descriptive.mean(y) == 5
        assert descriptive.minimum(y) == 2
        assert descriptive.maximum(y) == 9
        assert descriptive.std(y) == pytest.approx(math.sqrt(32 / 7))

    def test_empty(self):
        assert descriptive.n([]) == 0
        assert math.isnan(descriptive.mean([]))
        assert math.isnan(descriptive.std([1]))
        assert math.isnan(descriptive.percentile([], 50))
        assert descriptive.equal_bins([], 3) == []

    def test_percentile_positions(self):
        y = [35, 20, 50, 15, 40]
        assert descriptive.percentile(y, 40) == pytest.approx(26.0)
        assert descriptive.percentile(y, 50) == 35
        assert descriptive.percentile(y, 1) == 15
        assert descriptive.percentile(y, 100) == 50
        assert descriptive.quantile(y, 0.4) == pytest.approx(26.0)

    def test_percentile_bounds(self):
        with pytest.raises(ValueError):
            descriptive.percentile([1], 0)
        with pytest.raises(ValueError):
            descriptive.quantile([1], 1.5)

    def test_interquartile_range(self):
        assert descriptive.interquartile_range(range(1, 9)) == 4.0
        assert descriptive.interquartile_range(range(1, 8)) == 4.0
        assert descriptive.interquartile_range([5]) == 0.0

    def test_equal_bins(self):
        assert descriptive.equal_bins([10, 1, 2, 3, 4], 3) == [[1, 2, 3], [4], [10]]
        assert descriptive.equal_bins([7, 7], 2) == [[], [7, 7]]


@pytest.fixture
def plate():
    return Plate(2, 3, 'p', [Well(0, 0, [1, 2, 3]), Well(1, 1, [10, 20])])


class TestLevels:

    def test_well(self):
        assert MEAN.well(Well(0, 0, [1, 2, 3])) == 2.0
        assert MEAN.well(Well(0, 0, [1, 2, 3]), begin=1, length=2) == 2.5

    def test_set_and_plate(self, plate):
        assert SUM.plate(plate) == {WellIndex(0, 0): 6.0, WellIndex(1, 1): 30.0}
        assert list(MAX.set(plate.data)) == [WellIndex(0, 0), WellIndex(1, 1)]

    def test_stack(self, plate):
        stack = Stack.of([plate, Plate(2, 3)])
        assert N.stack(stack) == [{WellIndex(0, 0): 3.0, WellIndex(1, 1): 2.0}, {}]

    def test_aggregated(self, plate):
        assert SUM.aggregated(plate) == 36.0
        assert SUM.aggregated(Stack.of([plate, plate])) == 72.0
        assert SUM.aggregated(plate, begin=0, length=2) == 33.0
        assert math.isnan(MEAN.aggregated(WellSet()))

    def test_window_out_of_range(self, plate):
        with pytest.raises(IndexRangeError):
            SUM.plate(plate, begin=0, length=3)

    def test_parameterised(self, plate):
        assert percentile(50).well(plate['A1']) == 2.0
        assert quantile(0.5).aggregated(plate) == 3.0
        assert equal_bins(2).well(plate['B2']) == [[10], [20]]
        assert IQR.well(plate['B2']) == 10.0
        assert math.isnan(STD.well(Well(0, 0, [1])))

    def test_lookup(self):
        assert get_statistic('mean') is MEAN
        with pytest.raises(KeyError):
            get_statistic('mode')

    def test_call_on_raw_values(self):
        assert MEAN(np.array([1, 3])) == 2.0


class TestNumpyAgreement:

    @pytest.fixture
    def samples(self):
        rng = np.random.default_rng(7)
        return [rng.integers(-50, 50, size=rng.integers(1, 40)) for _ in range(50)]

    def test_percentile_matches_weibull(self, samples):
        for y in samples:
            for p in (1, 10, 25, 50, 75, 90, 100):
                assert descriptive.percentile(y, p) == pytest.approx(
                    np.percentile(y, p, method='weibull'))
                assert descriptive.quantile(y, p / 100) == pytest.approx(
                    np.quantile(y, p / 100, method='weibull'))

    def test_equal_bins_match_histogram_counts(self, samples):
        for y in samples:
            if y.min() == y.max():
                continue
            for k in (1, 3, 5):
                counts = [len(b) for b in descriptive.equal_bins(y, k)]
                assert counts == np.histogram(y, bins=k)[0].tolist()


class TestGeometricMean:

    def test_values(self):
        assert descriptive.geometric_mean([1, 4]) == pytest.approx(2.0)
        assert descriptive.geometric_mean([2, 0, 8]) == 0.0
        assert math.isnan(descriptive.geometric_mean([]))
        assert math.isnan(descriptive.geometric_mean([4, -1]))

    def test_builtin(self):
        assert get_statistic('geometric_mean') is GEOMETRIC_MEAN
        assert GEOMETRIC_MEAN.well(Well(0, 0, [1, 4, 16])) == pytest.approx(4.0)


class TestWeights:

    @pytest.fixture
    def plate(self):
        return Plate(2, 3, 'p', [Well(0, 0, [1, 2, 3]), Well(1, 1, [10, 20])])

    def test_well(self):
        well = Well(0, 0, [1, 2, 3])
        assert MEAN.well(well, weights=[1, 0.5, 2]) == pytest.approx(8 / 3)
        assert GEOMETRIC_MEAN.well(Well(0, 0, [2, 8]), weights=[0.5, 0.5]) == pytest.approx(2.0)
        assert MEAN(well.data, weights=[2, 2, 2]) == pytest.approx(4.0)

    def test_weights_follow_window(self):
        well = Well(0, 0, [1, 2, 3])
        assert MEAN.well(well, begin=1, length=2, weights=[2, 2]) == pytest.approx(5.0)

    def test_longer_weights_allowed(self):
        assert SUM.well(Well(0, 0, [1, 2]), weights=[3, 3, 3]) == pytest.approx(9.0)

    def test_short_weights_rejected(self):
        with pytest.raises(ValueError):
            SUM.well(Well(0, 0, [1, 2, 3]), weights=[1, 1])

    def test_non_finite_weights_rejected(self):
        with pytest.raises(ValueError):
            SUM.well(Well(0, 0, [1]), weights=[np.nan])

    def test_plate_and_set(self, plate):
        expected = {WellIndex(0, 0): pytest.approx(8.0), WellIndex(1, 1): pytest.approx(20.0)}
        assert SUM.plate(plate, weights=[1, 0.5, 2]) == expected
        assert SUM.set(plate.data, weights=[1, 0.5, 2]) == expected

    def test_stack(self, plate):
        result = SUM.stack(Stack.of([plate, plate.copy()]), weights=[2, 2, 2])
        assert [r[WellIndex(0, 0)] for r in result] == [pytest.approx(12.0)] * 2

    def test_aggregated_weights_each_well(self, plate):
        assert SUM.aggregated(plate, weights=[1, 0.5, 2]) == pytest.approx(28.0)


class TestAggregatedEach:

    def test_one_value_per_plate(self):
        p1 = Plate(2, 3, 'a', [Well(0, 0, [1, 2]), Well(0, 1, [3])])
        p2 = Plate(2, 3, 'b', [Well(0, 0, [10])])
        assert SUM.aggregated_each([p1, p2]) == [6, 10]
        assert MAX.aggregated_each([p1, p2], begin=0, length=1) == [3, 10]

    def test_sets_and_weights(self):
        s1 = WellSet([Well(0, 0, [1, 1])])
        s2 = WellSet([Well(0, 0, [2, 2])])
        assert SUM.aggregated_each([s1, s2], weights=[1, 3]) == [
            pytest.approx(4.0), pytest.approx(8.0)]

    def test_empty_collection(self):
        assert MEAN.aggregated_each([]) == []
