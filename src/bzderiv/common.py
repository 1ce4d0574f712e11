"""Central module containing type definitions for points, vectors and control polygons."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

###############################################################################
# Types
###############################################################################

Point2D = Tuple[float, float]
Point3D = Tuple[float, float, float]

# Edge vectors are differences of points and share their layout
Vector2D = Tuple[float, float]
Vector3D = Tuple[float, float, float]
Vector = Union[Vector2D, Vector3D]

# Control polygons: 3 points for a quadratic segment, 4 points for a cubic segment.
# NumPy arrays of shape (3, D) / (4, D) are accepted wherever a tuple is.
QuadraticPoints2D = Union[Tuple[Point2D, Point2D, Point2D], NDArray[np.float64]]
QuadraticPoints3D = Union[Tuple[Point3D, Point3D, Point3D], NDArray[np.float64]]
CubicPoints2D = Union[Tuple[Point2D, Point2D, Point2D, Point2D], NDArray[np.float64]]
CubicPoints3D = Union[Tuple[Point3D, Point3D, Point3D, Point3D], NDArray[np.float64]]

ControlPoints = Union[Sequence[Sequence[float]], NDArray[np.float64]]
