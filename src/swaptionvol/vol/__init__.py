"""
Volatility module - SABR swaption volatilities.

Provides:
- Hagan implied volatility approximation and its derivatives
- SABR parameters as surfaces of expiry time and tenor
- The swaption volatility provider and its sensitivities
- Loading parameter grids from CSV
"""

from .sabr import (
    SabrVolatilityDerivatives,
    hagan_black_vol,
    hagan_normal_vol,
    hagan_black_vol_adjoint,
)
from .parameters import SabrInterestRateParameters
from .swaption_volatilities import SabrParametersSwaptionVolatilities
from .loader import load_sabr_parameters, sabr_parameters_from_frame

__all__ = [
    "SabrVolatilityDerivatives",
    "hagan_black_vol",
    "hagan_normal_vol",
    "hagan_black_vol_adjoint",
    "SabrInterestRateParameters",
    "SabrParametersSwaptionVolatilities",
    "load_sabr_parameters",
    "sabr_parameters_from_frame",
]
