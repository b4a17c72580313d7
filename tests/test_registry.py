"""Tests for kernel discovery and the concrete kernels."""

import logging

import numpy as np
import pytest

from microflex.math import BinaryKernel, UnaryKernel
from microflex.math.registry import Registry, get_kernel, get_registry

BINARY = ['addition', 'bitwise_and', 'bitwise_or', 'bitwise_xor',
          'division', 'modulus', 'multiplication', 'subtraction']
UNARY = ['decrement', 'increment', 'left_shift', 'right_shift', 'right_shift_logical']


class TestRegistry:

    def test_discovers_13_kernels(self):
        reg = get_registry()
        assert sorted(reg.names(arity='binary')) == BINARY
        assert sorted(reg.names(arity='unary')) == UNARY

    def test_get_spec(self):
        spec = get_registry().get_spec('bitwise_xor')
        assert spec.arity == 'binary'
        assert spec.symbol == '^'
        assert spec.category == 'bitwise'

    def test_unknown_kernel(self):
        with pytest.raises(KeyError):
            get_kernel('nonexistent_kernel')

    def test_kernel_types(self):
        assert isinstance(get_kernel('addition'), BinaryKernel)
        assert isinstance(get_kernel('increment'), UnaryKernel)

    def test_parameters_bound(self):
        assert get_kernel('left_shift').params == {'n': 1}
        assert get_kernel('left_shift', n=3).params == {'n': 3}

    def test_bad_parameters(self):
        with pytest.raises(TypeError):
            get_kernel('addition', n=1)
        with pytest.raises(TypeError):
            get_kernel('left_shift', bits=3)

    def test_malformed_config_skipped(self, tmp_path, caplog):
        (tmp_path / 'good.yaml').write_text("kernel: addition\narity: binary\n")
        (tmp_path / 'bad.yaml').write_text("kernel: broken\narity: ternary\n")
        with caplog.at_level(logging.WARNING, logger='microflex.math.registry'):
            reg = Registry(config_dir=tmp_path)
        assert reg.kernel_names == ['addition']
        assert 'bad.yaml' in caplog.text


class TestBinaryKernels:

    @pytest.mark.parametrize('name, expected', [
        ('addition', [9, -5, 5, -9]),
        ('subtraction', [5, -9, 9, -5]),
        ('multiplication', [14, -14, -14, 14]),
        ('division', [3, -3, -3, 3]),
        ('modulus', [1, -1, 1, -1]),
    ])
    def test_arithmetic(self, name, expected):
        a = np.array([7, -7, 7, -7])
        b = np.array([2, 2, -2, -2])
        np.testing.assert_array_equal(get_kernel(name)(a, b), expected)

    def test_bitwise(self):
        a, b = np.array([12]), np.array([10])
        assert get_kernel('bitwise_and')(a, b)[0] == 8
        assert get_kernel('bitwise_or')(a, b)[0] == 14
        assert get_kernel('bitwise_xor')(a, b)[0] == 6

    @pytest.mark.parametrize('name', ['division', 'modulus'])
    def test_zero_divisor(self, name):
        with pytest.raises(ZeroDivisionError):
            get_kernel(name)(np.array([1, 2]), np.array([1, 0]))


class TestUnaryKernels:

    def test_step(self):
        np.testing.assert_array_equal(get_kernel('increment')(np.array([0, -1])), [1, 0])
        np.testing.assert_array_equal(get_kernel('decrement')(np.array([0, -1])), [-1, -2])

    def test_shifts(self):
        a = np.array([-8, 12])
        np.testing.assert_array_equal(get_kernel('left_shift', n=2)(a), [-32, 48])
        np.testing.assert_array_equal(get_kernel('right_shift', n=2)(a), [-2, 3])
        np.testing.assert_array_equal(
            get_kernel('right_shift_logical', n=2)(a), [1073741822, 3])

    def test_negative_shift(self):
        with pytest.raises(ValueError):
            get_kernel('left_shift', n=-1)(np.array([1]))
