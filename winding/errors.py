"""Exceptions raised by the winding number evaluator.

Both error kinds are detected while validating the inputs, before any
predicate is evaluated, so a failed call never leaves partial output behind.
Degenerate geometry and empty inputs are not errors.
"""


class WindingNumberError(Exception):
    """Base class for every error raised by :mod:`winding`."""


class IndexOutOfRangeError(WindingNumberError, IndexError):
    """A face or edge references a vertex index outside ``[0, n)``."""

    def __init__(self, face: int, index: int, n_vertices: int) -> None:
        self.face = face
        self.index = index
        self.n_vertices = n_vertices
        super().__init__(
            f"face {face} references vertex {index}, "
            f"but only {n_vertices} vertices were given"
        )


class ShapeMismatchError(WindingNumberError, ValueError):
    """Array shapes disagree with the declared counts or the dimension."""
