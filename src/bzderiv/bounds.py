"""Bounds on the derivative magnitude of quadratic and cubic Bezier curves."""

from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from bzderiv.common import (
    ControlPoints,
    CubicPoints2D,
    CubicPoints3D,
    QuadraticPoints2D,
    QuadraticPoints3D,
    Vector,
)
from bzderiv.consts import PLANE_NORMAL_REL_EPS
from bzderiv.interval import Interval
from bzderiv.vector import VectorMath

logger = logging.getLogger(__name__)


class DerivativeBounds:
    """Class to compute the magnitude interval of Bezier curve derivatives over t in [0, 1].

    The first derivative of a quadratic curve is a straight segment in vector space,
    the first derivative of a cubic curve is a quadratic curve whose control vectors
    are the edges of the control polygon. The bounds are derived from the control
    points only, the curve is never evaluated.

    Each (degree, dimension) pair has its own entry point. Batch variants working on
    NumPy arrays of many curves return the same values as the scalar ones.
    """

    @staticmethod
    def _interval(min_value: float, max_value: float) -> Interval:
        # Rounding must not invert the bounds
        return Interval(min(min_value, max_value), max_value)

    @staticmethod
    def _segment_distance_to_origin(a: Vector, b: Vector, a_sq: float, b_sq: float) -> float:
        """
        Distance from the origin to the segment [a, b].

        Args:
            a: Start vector of the segment
            b: End vector of the segment
            a_sq: Squared length of a
            b_sq: Squared length of b

        Returns:
            float: The smallest length of (1-t)*a + t*b for t in [0, 1]
        """
        ab = VectorMath.sub(b, a)
        ab_sq = VectorMath.squared_length(ab)

        # Segment collapsed to a single point
        if ab_sq == 0.0:
            return math.sqrt(a_sq)

        # Foot of the perpendicular lies beyond b
        if a_sq >= b_sq + ab_sq:
            return math.sqrt(b_sq)

        # Foot of the perpendicular lies beyond a
        if b_sq >= a_sq + ab_sq:
            return math.sqrt(a_sq)

        # Height of the triangle (0, a, b) over the base ab
        return VectorMath.cross_length(a, b) / math.sqrt(ab_sq)

    @classmethod
    def _edge_distance_to_origin(cls, a: Vector, b: Vector, c: Vector) -> float:
        """Distance from the origin to the boundary of the triangle (a, b, c)."""
        a_sq = VectorMath.squared_length(a)
        b_sq = VectorMath.squared_length(b)
        c_sq = VectorMath.squared_length(c)
        return min(
            cls._segment_distance_to_origin(a, b, a_sq, b_sq),
            cls._segment_distance_to_origin(b, c, b_sq, c_sq),
            cls._segment_distance_to_origin(c, a, c_sq, a_sq),
        )

    @classmethod
    def _quadratic(cls, points: ControlPoints, dim: int) -> Interval:
        vec_a, vec_b = VectorMath.control_vectors(points, 3, dim)
        a_sq = VectorMath.squared_length(vec_a)
        b_sq = VectorMath.squared_length(vec_b)

        # B'(t) = 2 * ((1-t)*A + t*B)
        min_value = 2.0 * cls._segment_distance_to_origin(vec_a, vec_b, a_sq, b_sq)
        max_value = 2.0 * math.sqrt(max(a_sq, b_sq))
        return cls._interval(min_value, max_value)

    @classmethod
    def quadratic_2d(cls, points: QuadraticPoints2D) -> Interval:
        """
        Magnitude interval of the first derivative of a 2D quadratic Bezier curve.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 3 points: start, control, end

        Returns:
            Interval: The exact [min, max] of |B'(t)| for t in [0, 1]

        Raises:
            ValueError: If points does not contain 3 points with 2 coordinates each
        """
        return cls._quadratic(points, 2)

    @classmethod
    def quadratic_3d(cls, points: QuadraticPoints3D) -> Interval:
        """
        Magnitude interval of the first derivative of a 3D quadratic Bezier curve.

        Args:
            points: Control points as Sequence[Tuple[float, float, float]] or NDArray[np.float64]
                    Must contain exactly 3 points: start, control, end

        Returns:
            Interval: The exact [min, max] of |B'(t)| for t in [0, 1]

        Raises:
            ValueError: If points does not contain 3 points with 3 coordinates each
        """
        return cls._quadratic(points, 3)

    @classmethod
    def cubic_2d(cls, points: CubicPoints2D, plane_eps: float = PLANE_NORMAL_REL_EPS) -> Interval:
        """
        Magnitude interval of the first derivative of a 2D cubic Bezier curve.

        B'(t) / 3 is a quadratic curve with control vectors A, B, C (the edges of the
        control polygon). If the triangle (A, B, C) contains the origin, the derivative
        may vanish and the lower bound is 0. Otherwise the lower bound is the distance
        from the origin to the closest triangle edge.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 4 points: start, control1, control2, end
            plane_eps: Minimum sine of the angle between B-A and C-B for which the
                       triangle is treated as having an interior; flatter triangles
                       (straight-line curves) use the edge distance

        Returns:
            Interval: The [min, max] of |B'(t)| for t in [0, 1]

        Raises:
            ValueError: If points does not contain 4 points with 2 coordinates each
        """
        vec_a, vec_b, vec_c = VectorMath.control_vectors(points, 4, 2)
        vec_ab = VectorMath.sub(vec_b, vec_a)
        vec_bc = VectorMath.sub(vec_c, vec_b)
        vec_ca = VectorMath.sub(vec_a, vec_c)

        max_value = 3.0 * VectorMath.length(max(vec_a, vec_b, vec_c, key=VectorMath.squared_length))

        # Orientation of the origin relative to each triangle edge
        a_area = VectorMath.cross_2d(vec_b, vec_bc)
        b_area = VectorMath.cross_2d(vec_c, vec_ca)
        c_area = VectorMath.cross_2d(vec_a, vec_ab)

        # A, B, C (nearly) collinear: the triangle has no interior to contain the origin
        flat_area = VectorMath.cross_2d(vec_ab, vec_bc)
        limit_sq = plane_eps * plane_eps * VectorMath.squared_length(vec_ab) * VectorMath.squared_length(vec_bc)
        degenerate = flat_area * flat_area <= limit_sq
        inside = (a_area >= 0.0 and b_area >= 0.0 and c_area >= 0.0) or (
            a_area <= 0.0 and b_area <= 0.0 and c_area <= 0.0
        )
        if inside and not degenerate:
            return cls._interval(0.0, max_value)

        return cls._interval(3.0 * cls._edge_distance_to_origin(vec_a, vec_b, vec_c), max_value)

    @classmethod
    def cubic_3d(cls, points: CubicPoints3D, plane_eps: float = PLANE_NORMAL_REL_EPS) -> Interval:
        """
        Magnitude interval of the first derivative of a 3D cubic Bezier curve.

        The control vectors A, B, C span a plane that contains B'(t) / 3 for all t.
        If the projection of the origin onto that plane lies inside the triangle
        (A, B, C), the lower bound is the distance from the origin to the plane.
        Otherwise it is the distance from the origin to the closest triangle edge.

        Args:
            points: Control points as Sequence[Tuple[float, float, float]] or NDArray[np.float64]
                    Must contain exactly 4 points: start, control1, control2, end
            plane_eps: Minimum sine of the angle between B-A and C-B for which the
                       plane test is used; flatter triangles use the edge distance

        Returns:
            Interval: The [min, max] of |B'(t)| for t in [0, 1]

        Raises:
            ValueError: If points does not contain 4 points with 3 coordinates each
        """
        vec_a, vec_b, vec_c = VectorMath.control_vectors(points, 4, 3)
        vec_ab = VectorMath.sub(vec_b, vec_a)
        vec_bc = VectorMath.sub(vec_c, vec_b)

        max_value = 3.0 * VectorMath.length(max(vec_a, vec_b, vec_c, key=VectorMath.squared_length))

        normal = VectorMath.cross_3d(vec_ab, vec_bc)
        normal_sq = VectorMath.squared_length(normal)
        limit_sq = plane_eps * plane_eps * VectorMath.squared_length(vec_ab) * VectorMath.squared_length(vec_bc)

        if normal_sq > limit_sq:
            a_ab = VectorMath.dot(VectorMath.cross_3d(vec_a, vec_b), normal)
            a_bc = VectorMath.dot(VectorMath.cross_3d(vec_b, vec_c), normal)
            a_ca = VectorMath.dot(VectorMath.cross_3d(vec_c, vec_a), normal)
            if a_ab > 0.0 and a_bc > 0.0 and a_ca > 0.0:
                plane_distance = abs(VectorMath.dot(vec_a, normal)) / math.sqrt(normal_sq)
                return cls._interval(3.0 * plane_distance, max_value)
        else:
            logger.debug("Derivative hull of cubic %s is flat, using edge distance", points)

        return cls._interval(3.0 * cls._edge_distance_to_origin(vec_a, vec_b, vec_c), max_value)

    @classmethod
    def quadratic_second_derivative(cls, points: ControlPoints) -> Interval:
        """
        Magnitude interval of the second derivative of a quadratic Bezier curve.

        B''(t) = 2 * (B - A) does not depend on t, so both bounds are equal.
        The dimension (2 or 3) is the coordinate count of the first point, so the
        points must be pure coordinates without a path type column.

        Args:
            points: 3 control points in 2D or 3D

        Returns:
            Interval: [|B''|, |B''|]
        """
        vec_a, vec_b = VectorMath.control_vectors(points, 3, cls._dimension(points))
        magnitude = 2.0 * VectorMath.length(VectorMath.sub(vec_b, vec_a))
        return Interval(magnitude, magnitude)

    @classmethod
    def cubic_second_derivative(cls, points: ControlPoints) -> Interval:
        """
        Magnitude interval of the second derivative of a cubic Bezier curve.

        B''(t) = 6 * ((1-t)*(B-A) + t*(C-B)) is a straight segment in vector space,
        handled the same way as the first derivative of a quadratic curve.
        The dimension (2 or 3) is the coordinate count of the first point, so the
        points must be pure coordinates without a path type column.

        Args:
            points: 4 control points in 2D or 3D

        Returns:
            Interval: The exact [min, max] of |B''(t)| for t in [0, 1]
        """
        vec_a, vec_b, vec_c = VectorMath.control_vectors(points, 4, cls._dimension(points))
        vec_ab = VectorMath.sub(vec_b, vec_a)
        vec_bc = VectorMath.sub(vec_c, vec_b)
        ab_sq = VectorMath.squared_length(vec_ab)
        bc_sq = VectorMath.squared_length(vec_bc)

        min_value = 6.0 * cls._segment_distance_to_origin(vec_ab, vec_bc, ab_sq, bc_sq)
        max_value = 6.0 * math.sqrt(max(ab_sq, bc_sq))
        return cls._interval(min_value, max_value)

    @staticmethod
    def _dimension(points: ControlPoints) -> int:
        if len(points) == 0:
            raise ValueError("Bezier curve needs at least one point")
        dim = len(points[0])
        if dim not in (2, 3):
            raise ValueError(f"Points must have 2 or 3 coordinates, got {dim}")
        return dim

    ###########################################################################
    # NumPy batch variants
    ###########################################################################

    @staticmethod
    def _as_batch(points: NDArray[np.float64], count: int, dims: Tuple[int, ...]) -> NDArray[np.float64]:
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.ndim != 3 or points_array.shape[1] != count or points_array.shape[2] not in dims:
            dims_str = "|".join(str(dim) for dim in dims)
            raise ValueError(f"points must have shape (N, {count}, {dims_str}), got {points_array.shape}")
        return points_array

    @staticmethod
    def _row_dot(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.einsum("ij,ij->i", a, b)

    @classmethod
    def _cross_length_numpy(cls, a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        if a.shape[1] == 2:
            return np.abs(a[:, 0] * b[:, 1] - a[:, 1] * b[:, 0])
        cross = np.cross(a, b)
        return np.sqrt(cls._row_dot(cross, cross))

    @classmethod
    def _segment_distance_to_origin_numpy(
        cls, a: NDArray[np.float64], b: NDArray[np.float64], a_sq: NDArray[np.float64], b_sq: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Row-wise version of _segment_distance_to_origin for arrays of shape (N, D)."""
        ab = b - a
        ab_sq = cls._row_dot(ab, ab)
        with np.errstate(divide="ignore", invalid="ignore"):
            height = cls._cross_length_numpy(a, b) / np.sqrt(ab_sq)
        return np.select(
            [ab_sq == 0.0, a_sq >= b_sq + ab_sq, b_sq >= a_sq + ab_sq],
            [np.sqrt(a_sq), np.sqrt(b_sq), np.sqrt(a_sq)],
            default=height,
        )

    @classmethod
    def _edge_distance_to_origin_numpy(
        cls, a: NDArray[np.float64], b: NDArray[np.float64], c: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        a_sq = cls._row_dot(a, a)
        b_sq = cls._row_dot(b, b)
        c_sq = cls._row_dot(c, c)
        return np.minimum.reduce(
            [
                cls._segment_distance_to_origin_numpy(a, b, a_sq, b_sq),
                cls._segment_distance_to_origin_numpy(b, c, b_sq, c_sq),
                cls._segment_distance_to_origin_numpy(c, a, c_sq, a_sq),
            ]
        )

    @classmethod
    def quadratic_numpy(cls, points: NDArray[np.float64]) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Magnitude intervals of the first derivatives of many quadratic Bezier curves.

        Args:
            points: NDArray of shape (N, 3, 2) or (N, 3, 3) holding N control polygons
                    of pure coordinates; slice path arrays to [..., :2] first

        Returns:
            Tuple of (min_values, max_values), each NDArray of shape (N,)

        Raises:
            ValueError: If points has the wrong shape
        """
        points_array = cls._as_batch(points, 3, (2, 3))
        vec_a = points_array[:, 1] - points_array[:, 0]
        vec_b = points_array[:, 2] - points_array[:, 1]
        a_sq = cls._row_dot(vec_a, vec_a)
        b_sq = cls._row_dot(vec_b, vec_b)

        min_values = 2.0 * cls._segment_distance_to_origin_numpy(vec_a, vec_b, a_sq, b_sq)
        max_values = 2.0 * np.sqrt(np.maximum(a_sq, b_sq))
        return np.minimum(min_values, max_values), max_values

    @classmethod
    def _cubic_control_vectors_numpy(cls, points_array: NDArray[np.float64]):
        vec_a = points_array[:, 1] - points_array[:, 0]
        vec_b = points_array[:, 2] - points_array[:, 1]
        vec_c = points_array[:, 3] - points_array[:, 2]
        max_sq = np.maximum.reduce(
            [cls._row_dot(vec_a, vec_a), cls._row_dot(vec_b, vec_b), cls._row_dot(vec_c, vec_c)]
        )
        return vec_a, vec_b, vec_c, 3.0 * np.sqrt(max_sq)

    @classmethod
    def cubic_2d_numpy(
        cls, points: NDArray[np.float64], plane_eps: float = PLANE_NORMAL_REL_EPS
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Magnitude intervals of the first derivatives of many 2D cubic Bezier curves.

        Args:
            points: NDArray of shape (N, 4, 2) holding N control polygons
            plane_eps: See cubic_2d

        Returns:
            Tuple of (min_values, max_values), each NDArray of shape (N,)

        Raises:
            ValueError: If points has the wrong shape
        """
        points_array = cls._as_batch(points, 4, (2,))
        vec_a, vec_b, vec_c, max_values = cls._cubic_control_vectors_numpy(points_array)

        def cross(u, v):
            return u[:, 0] * v[:, 1] - u[:, 1] * v[:, 0]

        vec_ab = vec_b - vec_a
        vec_bc = vec_c - vec_b
        a_area = cross(vec_b, vec_bc)
        b_area = cross(vec_c, vec_a - vec_c)
        c_area = cross(vec_a, vec_ab)

        flat_area = cross(vec_ab, vec_bc)
        limit_sq = plane_eps * plane_eps * cls._row_dot(vec_ab, vec_ab) * cls._row_dot(vec_bc, vec_bc)
        degenerate = flat_area * flat_area <= limit_sq
        inside = ((a_area >= 0.0) & (b_area >= 0.0) & (c_area >= 0.0)) | (
            (a_area <= 0.0) & (b_area <= 0.0) & (c_area <= 0.0)
        )

        edge_distance = cls._edge_distance_to_origin_numpy(vec_a, vec_b, vec_c)
        min_values = np.where(inside & ~degenerate, 0.0, 3.0 * edge_distance)
        return np.minimum(min_values, max_values), max_values

    @classmethod
    def cubic_3d_numpy(
        cls, points: NDArray[np.float64], plane_eps: float = PLANE_NORMAL_REL_EPS
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Magnitude intervals of the first derivatives of many 3D cubic Bezier curves.

        Args:
            points: NDArray of shape (N, 4, 3) holding N control polygons
            plane_eps: See cubic_3d

        Returns:
            Tuple of (min_values, max_values), each NDArray of shape (N,)

        Raises:
            ValueError: If points has the wrong shape
        """
        points_array = cls._as_batch(points, 4, (3,))
        vec_a, vec_b, vec_c, max_values = cls._cubic_control_vectors_numpy(points_array)
        vec_ab = vec_b - vec_a
        vec_bc = vec_c - vec_b

        normal = np.cross(vec_ab, vec_bc)
        normal_sq = cls._row_dot(normal, normal)
        limit_sq = plane_eps * plane_eps * cls._row_dot(vec_ab, vec_ab) * cls._row_dot(vec_bc, vec_bc)

        a_ab = cls._row_dot(np.cross(vec_a, vec_b), normal)
        a_bc = cls._row_dot(np.cross(vec_b, vec_c), normal)
        a_ca = cls._row_dot(np.cross(vec_c, vec_a), normal)
        in_plane = (normal_sq > limit_sq) & (a_ab > 0.0) & (a_bc > 0.0) & (a_ca > 0.0)

        with np.errstate(divide="ignore", invalid="ignore"):
            plane_distance = np.abs(cls._row_dot(vec_a, normal)) / np.sqrt(normal_sq)
        edge_distance = cls._edge_distance_to_origin_numpy(vec_a, vec_b, vec_c)

        min_values = 3.0 * np.where(in_plane, plane_distance, edge_distance)
        return np.minimum(min_values, max_values), max_values
