"""Central module containing numeric constants and tolerances"""

from __future__ import annotations

# Smallest sine of the angle between the second-difference vectors AB and BC
# for which the supporting plane of a 3D cubic's derivative hull is trusted.
PLANE_NORMAL_REL_EPS: float = 1.0e-9

# Absolute slack used by Interval.contains
INTERVAL_CONTAINS_TOL: float = 1.0e-9

# Tolerances used by Interval.approx_equal (same meaning as numpy.isclose)
INTERVAL_APPROX_RTOL: float = 1.0e-9
INTERVAL_APPROX_ATOL: float = 1.0e-12
