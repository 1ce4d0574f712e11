"""
This script demonstrates how to use DerivativeBounds to print the interval of
the first and second derivative magnitude of some quadratic and cubic Bezier curves.
"""

import numpy as np

from bzderiv.bounds import DerivativeBounds
from bzderiv.interval import Interval

QUADRATIC_2D = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0))
QUADRATIC_3D = ((0.0, 0.0, 0.0), (1.0, 0.0, 1.0), (1.0, 1.0, 2.0))
CUBIC_2D = ((0.0, 0.0), (50.0, 200.0), (150.0, -100.0), (200.0, 0.0))
CUBIC_3D = ((0.0, 0.0, 0.0), (1.0, 2.0, 0.5), (3.0, -1.0, 1.0), (4.0, 0.0, 2.0))


def print_interval(name: str, interval: Interval) -> None:
    """
    Prints the bounds of a given interval.

    Args:
        name (str): Label printed in front of the bounds.
        interval (Interval): The interval to print.
    """
    print(f"    {name:<24}: [{interval.min_value:12.6f}, {interval.max_value:12.6f}]")


def main():
    """Main"""
    print("First derivative magnitude:")
    print_interval("quadratic 2D", DerivativeBounds.quadratic_2d(QUADRATIC_2D))
    print_interval("quadratic 3D", DerivativeBounds.quadratic_3d(QUADRATIC_3D))
    print_interval("cubic 2D", DerivativeBounds.cubic_2d(CUBIC_2D))
    print_interval("cubic 3D", DerivativeBounds.cubic_3d(CUBIC_3D))

    print("Second derivative magnitude:")
    print_interval("quadratic 2D", DerivativeBounds.quadratic_second_derivative(QUADRATIC_2D))
    print_interval("cubic 3D", DerivativeBounds.cubic_second_derivative(CUBIC_3D))

    print("Batch of 2D cubics:")
    batch = np.array([CUBIC_2D, [(x, 2.0 * y) for x, y in CUBIC_2D]], dtype=np.float64)
    min_values, max_values = DerivativeBounds.cubic_2d_numpy(batch)
    for idx, (min_value, max_value) in enumerate(zip(min_values, max_values)):
        print_interval(f"cubic 2D #{idx}", Interval(min_value, max_value))


if __name__ == "__main__":
    main()
