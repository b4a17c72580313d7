"""
Error types raised by microflex containers and engines.

Every error also derives from the built-in exception a caller would
naturally catch, so ``except ValueError`` keeps working alongside the
typed ``except DimensionMismatchError``.
"""

from typing import Optional, Tuple


class MicroflexError(Exception):
    """Base class for all microflex errors."""


class NullArgumentError(MicroflexError, ValueError):
    """A required container, operand or kernel was None."""

    def __init__(self, name: str = "argument"):
        self.name = name
        super().__init__(f"Null argument: {name} cannot be None.")


class DimensionMismatchError(MicroflexError, ValueError):
    """Two plates or stacks with different rows/columns were combined."""

    def __init__(self, expected: Tuple[int, int], actual: Tuple[int, int]):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Unequal plate dimensions: {expected[0]}x{expected[1]} "
            f"vs {actual[0]}x{actual[1]}."
        )


class IndexRangeError(MicroflexError, IndexError):
    """A sub-range or coordinate lies outside the container bounds."""

    def __init__(self, message: str, begin: Optional[int] = None,
                 length: Optional[int] = None):
        self.begin = begin
        self.length = length
        super().__init__(message)


class ContainerStateError(MicroflexError, ValueError):
    """A container invariant would be violated."""


class DuplicateWellError(ContainerStateError):
    """A well was inserted at a coordinate that is already occupied."""

    def __init__(self, index):
        self.index = index
        super().__init__(
            f"Failed to add well {index}. This well already exists in the set."
        )
