"""Small dense matrices of floats."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple


class Matrix:
    """A rectangular matrix; ragged rows are padded with zeros."""

    def __init__(self, data: Iterable[Sequence[float]] = ()) -> None:
        rows = [list(row) for row in data]
        columns = max((len(row) for row in rows), default=0)
        self.data: list[list[float]] = [row + [0.0] * (columns - len(row)) for row in rows]
        self._columns = columns

    @classmethod
    def zeros(cls, rows: int, columns: int) -> "Matrix":
        matrix = cls([[0.0] * columns for _ in range(rows)])
        matrix._columns = columns
        return matrix

    @classmethod
    def identity(cls, dim: int) -> "Matrix":
        return cls([[1.0 if r == c else 0.0 for c in range(dim)] for r in range(dim)])

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.data), self._columns

    def can_multiply(self, other: "Matrix") -> bool:
        """True when this matrix's column count equals the other's row count."""
        return self.shape[1] == other.shape[0]

    def multiply(self, other: "Matrix") -> "Matrix":
        """Matrix product; raises ValueError when the shapes do not match."""
        if not self.can_multiply(other):
            raise ValueError(f"cannot multiply matrices of shapes {self.shape} and {other.shape}")
        columns = [[row[c] for row in other.data] for c in range(other.shape[1])]
        result = Matrix.zeros(self.shape[0], other.shape[1])
        result.data = [
            [sum(a * b for a, b in zip(row, column)) for column in columns] for row in self.data
        ]
        return result

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return self.multiply(other)

    def __mul__(self, scale: float) -> "Matrix":
        result = Matrix.zeros(*self.shape)
        result.data = [[value * scale for value in row] for row in self.data]
        return result

    __rmul__ = __mul__

    def __imul__(self, scale: float) -> "Matrix":
        self.data = [[value * scale for value in row] for row in self.data]
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    def __repr__(self) -> str:
        return f"Matrix({self.data!r})"

    def __str__(self) -> str:
        return "".join(
            "".join(f"{value:.3f}\t" for value in row) + "\n" for row in self.data
        )