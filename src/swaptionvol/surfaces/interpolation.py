"""
One-dimensional interpolation with node weights.

Provides:
- LinearInterpolator: Linear between knots, flat beyond the boundaries
- CubicSplineInterpolator: Natural cubic spline, flat beyond the boundaries

Both schemes are linear in the node values, so the interpolated value is
a weighted sum of the nodes. node_weights(t) returns those weights, which
are also the exact derivatives of the value with respect to each node.
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class Interpolator(ABC):
    """Abstract base class for node-weighted interpolation."""

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.values: Optional[np.ndarray] = None

    def fit(self, times: np.ndarray, values: np.ndarray) -> None:
        """
        Fit the interpolator to data points.

        Args:
            times: Node x-coordinates, strictly increasing
            values: Node values
        """
        times = np.asarray(times, dtype=np.float64)
        values = np.asarray(values, dtype=np.float64)
        if len(times) != len(values):
            raise ValueError("Times and values must have same length")
        if len(times) == 0:
            raise ValueError("Need at least 1 point for interpolation")
        if np.any(np.diff(times) <= 0):
            raise ValueError("Times must be strictly increasing")

        self.times = times
        self.values = values
        self._prepare()

    def _prepare(self) -> None:
        """Precompute anything node_weights needs once times are known."""
        pass

    def interpolate(self, t: float) -> float:
        """Interpolated value at t."""
        if self.values is None:
            raise RuntimeError("Interpolator not fitted")
        return float(self.node_weights(t) @ self.values)

    def __call__(self, t: float) -> float:
        """Convenience method to call interpolate."""
        return self.interpolate(t)

    def node_weights(self, t: float) -> np.ndarray:
        """
        Weight of every node in the value at t.

        Returns:
            Array with one weight per node, in node order
        """
        if self.times is None:
            raise RuntimeError("Interpolator not fitted")

        n = len(self.times)
        weights = np.zeros(n)

        # Flat extrapolation
        if n == 1 or t <= self.times[0]:
            weights[0] = 1.0
            return weights
        if t >= self.times[-1]:
            weights[-1] = 1.0
            return weights

        idx = np.searchsorted(self.times, t, side='right') - 1
        idx = max(0, min(idx, n - 2))
        self._interior_weights(idx, t, weights)
        return weights

    @abstractmethod
    def _interior_weights(self, idx: int, t: float, weights: np.ndarray) -> None:
        """Fill weights for t inside [times[idx], times[idx + 1]]."""
        pass


class LinearInterpolator(Interpolator):
    """
    Linear interpolation.

    Simple linear interpolation between knot points.
    Extrapolates flat beyond boundaries.
    """

    def _interior_weights(self, idx: int, t: float, weights: np.ndarray) -> None:
        t0, t1 = self.times[idx], self.times[idx + 1]
        w = (t - t0) / (t1 - t0)
        weights[idx] = 1.0 - w
        weights[idx + 1] = w


class CubicSplineInterpolator(Interpolator):
    """
    Natural cubic spline interpolation.

    Second derivatives vanish at both boundaries. The second derivatives
    at the knots are linear in the node values; the matrix mapping values
    to second derivatives is solved once per fit.
    """

    def __init__(self):
        super().__init__()
        self._second_derivative_matrix: Optional[np.ndarray] = None

    def _prepare(self) -> None:
        n = len(self.times)
        if n < 3:
            # Two nodes degenerate to linear
            self._second_derivative_matrix = np.zeros((n, n))
            return

        h = np.diff(self.times)

        # Tridiagonal system A M = B y with natural boundaries M[0] = M[n-1] = 0
        A = np.zeros((n, n))
        B = np.zeros((n, n))
        A[0, 0] = 1.0
        A[n-1, n-1] = 1.0

        for i in range(1, n-1):
            A[i, i-1] = h[i-1]
            A[i, i] = 2 * (h[i-1] + h[i])
            A[i, i+1] = h[i]
            B[i, i-1] = 6 / h[i-1]
            B[i, i] = -6 / h[i-1] - 6 / h[i]
            B[i, i+1] = 6 / h[i]

        self._second_derivative_matrix = np.linalg.solve(A, B)

    def _interior_weights(self, idx: int, t: float, weights: np.ndarray) -> None:
        h = self.times[idx + 1] - self.times[idx]
        dx = t - self.times[idx]
        m = self._second_derivative_matrix

        # S(t) = y_i (1 - dx/h) + y_{i+1} dx/h + M_i c_i + M_{i+1} c_{i+1}
        c_i = -h * dx / 3 + dx**2 / 2 - dx**3 / (6 * h)
        c_next = -h * dx / 6 + dx**3 / (6 * h)
        weights += m[idx] * c_i + m[idx + 1] * c_next
        weights[idx] += 1.0 - dx / h
        weights[idx + 1] += dx / h


def create_interpolator(method: str) -> Interpolator:
    """
    Factory function to create an interpolator by name.

    Args:
        method: One of "linear", "cubic_spline"

    Returns:
        Interpolator instance
    """
    method = method.lower().replace("-", "_").replace(" ", "_")

    if method in ("linear", "lin"):
        return LinearInterpolator()
    elif method in ("cubic_spline", "cubic", "spline", "natural_cubic_spline"):
        return CubicSplineInterpolator()
    else:
        raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "create_interpolator",
]
