"""
microflex.math: kernels and the engines that apply them.

    from microflex.math import combine, broadcast

    combine(plate_a, plate_b, 'addition')                 # standard
    combine(stack_a, stack_b, 'bitwise_xor', strict=True)
    combine(well, 5, 'multiplication', begin=0, length=2)
    broadcast(plate, 'left_shift', n=2)
"""

from microflex.math import align
from microflex.math.contract import (
    BinaryKernel,
    FunctionKernel,
    FunctionUnaryKernel,
    UnaryKernel,
)
from microflex.math.binary import CombineEngine, OperandKind, operand_kind
from microflex.math.unary import UnaryEngine
from microflex.math.registry import (
    KernelSpec,
    Registry,
    get_kernel,
    get_registry,
    resolve_binary,
    resolve_unary,
)


def combine(a, b, kernel, strict=False, begin=None, length=None):
    """
    Combine two operands with a binary kernel.

    kernel may be a BinaryKernel, a registry name or a plain f(a, b).
    The result has the level of the richer operand.
    """
    engine = CombineEngine(resolve_binary(kernel), strict)
    return engine.combine(a, b, begin, length)


def broadcast(target, kernel, begin=None, length=None, **params):
    """Apply a unary kernel to every well of target. params bind kernel parameters."""
    engine = UnaryEngine(resolve_unary(kernel, **params))
    return engine.broadcast(target, begin, length)


__all__ = [
    'align',
    'BinaryKernel', 'UnaryKernel', 'FunctionKernel', 'FunctionUnaryKernel',
    'CombineEngine', 'UnaryEngine', 'OperandKind', 'operand_kind',
    'Registry', 'KernelSpec', 'get_registry', 'get_kernel',
    'resolve_binary', 'resolve_unary',
    'combine', 'broadcast',
]
