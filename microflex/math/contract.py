"""
Kernel contract.

A kernel is the only place arithmetic lives. Engines receive one as a
strategy object and never inspect what it computes.

Binary kernels implement apply(a, b) over equal-length int64 arrays; the
base class derives the four alignment entry points from it:

    combine(a, b)                         standard
    combine_strict(a, b)                  strict
    combine_range(a, b, begin, length)    standard, windowed
    combine_strict_range(a, b, begin, length)

Unary kernels implement apply(a) and get calculate / calculate_range.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import numpy as np

from microflex.math import align


class BinaryKernel(ABC):
    """Two-operand elementwise kernel."""

    name: str = 'binary'
    symbol: Optional[str] = None

    @abstractmethod
    def apply(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Elementwise op over two arrays of equal length."""

    def combine(self, a, b) -> np.ndarray:
        return align.combine_standard(a, b, self.apply)

    def combine_strict(self, a, b) -> np.ndarray:
        return align.combine_strict(a, b, self.apply)

    def combine_range(self, a, b, begin: int, length: int) -> np.ndarray:
        return align.combine_standard(a, b, self.apply, begin, length)

    def combine_strict_range(self, a, b, begin: int, length: int) -> np.ndarray:
        return align.combine_strict(a, b, self.apply, begin, length)

    def combine_constant(self, a, constant: int, begin: Optional[int] = None,
                         length: Optional[int] = None) -> np.ndarray:
        return align.combine_constant(a, constant, self.apply, begin, length)

    def flipped(self) -> 'BinaryKernel':
        """Same kernel with operands swapped: flipped().apply(a, b) == apply(b, a)."""
        return _Flipped(self)

    def __call__(self, a, b) -> np.ndarray:
        return self.apply(np.asarray(a), np.asarray(b))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class _Flipped(BinaryKernel):
    """Wrapped kernel with its operands swapped."""

    def __init__(self, kernel: BinaryKernel):
        self.kernel = kernel
        self.name = f"flipped_{kernel.name}"

    def apply(self, a, b):
        return self.kernel.apply(b, a)

    def flipped(self) -> BinaryKernel:
        return self.kernel


class FunctionKernel(BinaryKernel):
    """Wrap a plain function f(a, b) -> array as a BinaryKernel."""

    def __init__(self, func: Callable[[np.ndarray, np.ndarray], np.ndarray],
                 name: Optional[str] = None, symbol: Optional[str] = None):
        self.func = func
        self.name = name or getattr(func, '__name__', 'binary')
        self.symbol = symbol

    def apply(self, a, b):
        return self.func(a, b)


class UnaryKernel(ABC):
    """One-operand elementwise kernel."""

    name: str = 'unary'

    @abstractmethod
    def apply(self, a: np.ndarray) -> np.ndarray:
        """Elementwise op over one array."""

    def calculate(self, a) -> np.ndarray:
        return align.apply_unary(a, self.apply)

    def calculate_range(self, a, begin: int, length: int) -> np.ndarray:
        return align.apply_unary(a, self.apply, begin, length)

    def __call__(self, a) -> np.ndarray:
        return self.apply(np.asarray(a))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FunctionUnaryKernel(UnaryKernel):
    """
    Wrap f(a, **params) -> array as a UnaryKernel, with params bound.

    FunctionUnaryKernel(left_shift.compute, 'left_shift', {'n': 2})
    """

    def __init__(self, func: Callable[..., np.ndarray], name: Optional[str] = None,
                 params: Optional[Dict[str, Any]] = None):
        self.func = func
        self.name = name or getattr(func, '__name__', 'unary')
        self.params = dict(params or {})

    def apply(self, a):
        return self.func(a, **self.params)

    def __repr__(self) -> str:
        bound = ', '.join(f"{k}={v}" for k, v in self.params.items())
        return f"FunctionUnaryKernel({self.name!r}{', ' + bound if bound else ''})"
