from typing import Tuple, Any
import cairo
import numpy as np


class Matrix:
    """
    A 3x3 affine transformation matrix for 2D drawing.

    Wraps a numpy array. Composition follows the usual mathematical
    convention: `(A @ B).transform_point(p)` applies B first, then A.
    """

    def __init__(self, data: Any = None):
        """
        Initializes a 3x3 matrix.

        Args:
            data: Another Matrix, a 3x3 list/tuple or numpy array, or None
                  for the identity matrix.
        """
        if data is None:
            self.m: np.ndarray = np.identity(3, dtype=float)
        elif isinstance(data, Matrix):
            self.m = data.m.copy()
        else:
            try:
                self.m = np.array(data, dtype=float)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Could not create Matrix from data: {e}")
            if self.m.shape != (3, 3):
                raise ValueError("Input data must be a 3x3 matrix.")

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(np.dot(self.m, other.m))

    def __eq__(self, other: Any) -> bool:
        """Compares with np.allclose to absorb floating-point noise."""
        if not isinstance(other, Matrix):
            return False
        return np.allclose(self.m, other.m)

    def __repr__(self) -> str:
        return f"Matrix({self.m.tolist()})"

    @staticmethod
    def translation(tx: float, ty: float) -> "Matrix":
        """Creates a pure translation matrix."""
        return Matrix(
            [
                [1, 0, tx],
                [0, 1, ty],
                [0, 0, 1],
            ]
        )

    @staticmethod
    def scale(sx: float, sy: float) -> "Matrix":
        """Creates a scaling matrix around the origin."""
        return Matrix(
            [
                [sx, 0, 0],
                [0, sy, 0],
                [0, 0, 1],
            ]
        )

    def invert(self) -> "Matrix":
        """
        Returns the exact inverse of this matrix.

        Raises `numpy.linalg.LinAlgError` if the matrix is singular, e.g.
        for a zero scale.
        """
        return Matrix(np.linalg.inv(self.m))

    def transform_point(
        self, point: Tuple[float, float]
    ) -> Tuple[float, float]:
        """Applies the full affine transformation to a 2D point."""
        vec = np.array([point[0], point[1], 1.0])
        res = np.dot(self.m, vec)
        return float(res[0]), float(res[1])

    def transform_rect(
        self, rect: Tuple[float, float, float, float]
    ) -> Tuple[float, float, float, float]:
        """
        Transforms an (x, y, w, h) rectangle and returns the axis-aligned
        bounding box of the four transformed corners.
        """
        x, y, w, h = rect
        corners = [
            self.transform_point(p)
            for p in ((x, y), (x + w, y), (x + w, y + h), (x, y + h))
        ]
        min_x = min(p[0] for p in corners)
        min_y = min(p[1] for p in corners)
        max_x = max(p[0] for p in corners)
        max_y = max(p[1] for p in corners)
        return min_x, min_y, max_x - min_x, max_y - min_y

    def to_cairo(self) -> cairo.Matrix:
        """Converts to a cairo.Matrix for use with Context.transform()."""
        m = self.m
        return cairo.Matrix(
            m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2]
        )
