"""Vector algebra on small 2D/3D tuples"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from bzderiv.common import ControlPoints, Vector, Vector3D


###############################################################################
# VectorMath
###############################################################################
class VectorMath:
    """Class to provide static methods for 2D and 3D vector arithmetic.

    Vectors are plain tuples of floats. Every method works on both 2D and 3D
    vectors unless its name says otherwise.
    """

    @staticmethod
    def sub(a: Vector, b: Vector) -> Vector:
        """Component-wise difference a - b."""
        if len(a) == 2:
            return (a[0] - b[0], a[1] - b[1])
        return (a[0] - b[0], a[1] - b[1], a[2] - b[2])

    @staticmethod
    def dot(a: Vector, b: Vector) -> float:
        """Dot product of a and b."""
        if len(a) == 2:
            return a[0] * b[0] + a[1] * b[1]
        return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

    @staticmethod
    def squared_length(v: Vector) -> float:
        """Squared Euclidean length of v."""
        return VectorMath.dot(v, v)

    @staticmethod
    def length(v: Vector) -> float:
        """Euclidean length of v."""
        return math.sqrt(VectorMath.dot(v, v))

    @staticmethod
    def cross_2d(a: Vector, b: Vector) -> float:
        """
        Scalar cross product of two 2D vectors.

        The result is twice the signed area of the triangle (0, a, b):
        positive if b lies counter-clockwise of a, negative if clockwise.

        Args:
            a (Tuple[float, float]): first vector
            b (Tuple[float, float]): second vector

        Returns:
            float: a.x * b.y - a.y * b.x
        """
        return a[0] * b[1] - a[1] * b[0]

    @staticmethod
    def cross_3d(a: Vector, b: Vector) -> Vector3D:
        """Vector cross product of two 3D vectors."""
        return (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        )

    @staticmethod
    def cross_length(a: Vector, b: Vector) -> float:
        """Length of the cross product, i.e. twice the area of the triangle (0, a, b)."""
        if len(a) == 2:
            return abs(VectorMath.cross_2d(a, b))
        return VectorMath.length(VectorMath.cross_3d(a, b))

    @staticmethod
    def control_vectors(points: ControlPoints, count: int, dim: int) -> Tuple[Vector, ...]:
        """
        Derive the edge vectors between consecutive control points.

        Points given as tuples must have exactly _dim_ coordinates. An NDArray of
        shape (count, dim+1) is accepted as well: its last column is the type column
        of path point arrays and is ignored.

        Args:
            points: Control points as sequence of tuples, NDArray of shape (count, dim)
                    or path NDArray of shape (count, dim+1)
            count (int): Required number of control points (3 = quadratic, 4 = cubic)
            dim (int): Dimension of the points (2 or 3)

        Returns:
            Tuple[Vector, ...]: count-1 edge vectors P[i+1] - P[i]

        Raises:
            ValueError: If the number of points or of coordinates does not fit
        """
        if len(points) != count:
            raise ValueError(f"Bezier curve of degree {count - 1} needs {count} points, got {len(points)}")

        max_coords = dim + 1 if isinstance(points, np.ndarray) else dim
        coords = []
        for idx, point in enumerate(points):
            if not dim <= len(point) <= max_coords:
                raise ValueError(f"Point {idx} needs {dim} coordinates, got {len(point)}")
            coords.append(tuple(float(point[axis]) for axis in range(dim)))

        return tuple(VectorMath.sub(coords[i + 1], coords[i]) for i in range(count - 1))
