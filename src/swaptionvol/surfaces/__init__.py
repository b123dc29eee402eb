"""
Surfaces module - parameter surfaces over (expiry, tenor).

Provides:
- Node-weighted 1D interpolators (linear, natural cubic spline)
- Interpolated and constant surfaces with node sensitivities
"""

from .interpolation import (
    Interpolator,
    LinearInterpolator,
    CubicSplineInterpolator,
    create_interpolator,
)
from .surface import Surface, InterpolatedNodalSurface, ConstantSurface

__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "create_interpolator",
    "Surface",
    "InterpolatedNodalSurface",
    "ConstantSurface",
]
