"""
Named surfaces of a model parameter over (expiry, tenor).

Provides:
- Surface: abstract named surface with node sensitivities
- InterpolatedNodalSurface: nodes interpolated along tenor, then expiry
- ConstantSurface: a single node, the same value everywhere

Surfaces are immutable, compare by value and can be used as dict keys.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Sequence, Tuple

import numpy as np

from .interpolation import create_interpolator
from ..sensitivity.parameter import UnitParameterSensitivity


class Surface(ABC):
    """A named function of (x, y) backed by a fixed list of nodes."""

    name: str

    @property
    @abstractmethod
    def parameter_count(self) -> int:
        """Number of nodes."""
        pass

    @property
    @abstractmethod
    def parameter_metadata(self) -> Tuple[Hashable, ...]:
        """One label per node, in node order."""
        pass

    @abstractmethod
    def z_value(self, x: float, y: float) -> float:
        """Surface value at (x, y)."""
        pass

    @abstractmethod
    def z_value_parameter_sensitivity(self, x: float, y: float) -> UnitParameterSensitivity:
        """Derivative of z_value(x, y) with respect to every node value."""
        pass


@dataclass(frozen=True, eq=False)
class InterpolatedNodalSurface(Surface):
    """
    Surface interpolated from scattered (x, y, z) nodes.

    Nodes are grouped by distinct x. A value is obtained by interpolating
    along y within each x group, then along x across the group results.
    The same interpolator scheme is used in both directions.

    Attributes:
        name: Surface name, used as the sensitivity key
        x_values: Node x-coordinates (expiry times)
        y_values: Node y-coordinates (tenors)
        z_values: Node values
        interpolator: Interpolation scheme name, "linear" or "cubic_spline"
    """
    name: str
    x_values: np.ndarray
    y_values: np.ndarray
    z_values: np.ndarray
    interpolator: str = "linear"
    _columns: Tuple[Tuple[float, np.ndarray], ...] = field(init=False, repr=False)

    def __post_init__(self):
        x = np.array(self.x_values, dtype=np.float64).reshape(-1)
        y = np.array(self.y_values, dtype=np.float64).reshape(-1)
        z = np.array(self.z_values, dtype=np.float64).reshape(-1)
        if not (len(x) == len(y) == len(z)):
            raise ValueError("x, y and z values must have same length")
        if len(x) == 0:
            raise ValueError(f"Surface {self.name} has no nodes")
        # Validates the scheme name
        create_interpolator(self.interpolator)

        columns: Dict[float, List[int]] = {}
        for i, xi in enumerate(x):
            columns.setdefault(float(xi), []).append(i)
        ordered = []
        for xi in sorted(columns):
            idx = np.array(sorted(columns[xi], key=lambda k: y[k]), dtype=int)
            if len(np.unique(y[idx])) != len(idx):
                raise ValueError(f"Surface {self.name} has duplicate nodes at x={xi}")
            idx.setflags(write=False)
            ordered.append((xi, idx))

        for arr in (x, y, z):
            arr.setflags(write=False)
        object.__setattr__(self, "x_values", x)
        object.__setattr__(self, "y_values", y)
        object.__setattr__(self, "z_values", z)
        object.__setattr__(self, "_columns", tuple(ordered))

    def __eq__(self, other) -> bool:
        if not isinstance(other, InterpolatedNodalSurface):
            return NotImplemented
        return (
            self.name == other.name
            and self.interpolator == other.interpolator
            and np.array_equal(self.x_values, other.x_values)
            and np.array_equal(self.y_values, other.y_values)
            and np.array_equal(self.z_values, other.z_values)
        )

    def __hash__(self) -> int:
        # Adding 0.0 maps -0.0 to 0.0, matching array_equal
        return hash((self.name, self.interpolator, (self.x_values + 0.0).tobytes(),
                     (self.y_values + 0.0).tobytes(), (self.z_values + 0.0).tobytes()))

    @property
    def parameter_count(self) -> int:
        return len(self.z_values)

    @property
    def parameter_metadata(self) -> Tuple[Hashable, ...]:
        return tuple(zip(self.x_values.tolist(), self.y_values.tolist()))

    def with_z_values(self, z_values: Sequence[float]) -> "InterpolatedNodalSurface":
        """Copy of the surface with new node values, same nodes and scheme."""
        return InterpolatedNodalSurface(
            name=self.name,
            x_values=self.x_values,
            y_values=self.y_values,
            z_values=np.asarray(z_values, dtype=np.float64),
            interpolator=self.interpolator,
        )

    def _node_weights(self, x: float, y: float) -> np.ndarray:
        weights = np.zeros(self.parameter_count)
        x_nodes = np.array([xi for xi, _ in self._columns])
        x_interp = create_interpolator(self.interpolator)
        x_interp.fit(x_nodes, np.zeros(len(x_nodes)))
        x_weights = x_interp.node_weights(x)

        for wx, (_, idx) in zip(x_weights, self._columns):
            if wx == 0.0:
                continue
            y_interp = create_interpolator(self.interpolator)
            y_interp.fit(self.y_values[idx], self.z_values[idx])
            weights[idx] += wx * y_interp.node_weights(y)
        return weights

    def z_value(self, x: float, y: float) -> float:
        return float(self._node_weights(x, y) @ self.z_values)

    def z_value_parameter_sensitivity(self, x: float, y: float) -> UnitParameterSensitivity:
        return UnitParameterSensitivity(
            surface_name=self.name,
            sensitivity=self._node_weights(x, y),
            parameter_metadata=self.parameter_metadata,
        )


@dataclass(frozen=True)
class ConstantSurface(Surface):
    """
    Surface with one node and the same value everywhere.

    Attributes:
        name: Surface name, used as the sensitivity key
        value: The constant value
    """
    name: str
    value: float

    @property
    def parameter_count(self) -> int:
        return 1

    @property
    def parameter_metadata(self) -> Tuple[Hashable, ...]:
        return ("constant",)

    def z_value(self, x: float, y: float) -> float:
        return float(self.value)

    def z_value_parameter_sensitivity(self, x: float, y: float) -> UnitParameterSensitivity:
        return UnitParameterSensitivity(
            surface_name=self.name,
            sensitivity=np.ones(1),
            parameter_metadata=self.parameter_metadata,
        )


__all__ = [
    "Surface",
    "InterpolatedNodalSurface",
    "ConstantSurface",
]
