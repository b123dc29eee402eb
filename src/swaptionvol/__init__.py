"""
SwaptionVol: SABR swaption volatilities and parameter sensitivities

A modular library for:
- Converting option expiries and swap dates to model times
- Interpolating alpha, beta, rho, nu surfaces over (expiry, tenor)
- Evaluating SABR implied volatilities for swaptions
- Distributing SABR point sensitivities onto surface nodes for risk reports

Scope: evaluation and risk of already-fitted SABR surfaces; no calibration.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import DayCount, SwapConvention, year_fraction
from .dates import DateUtils, relative_time, swaption_tenor
from .errors import SwaptionVolError, SensitivityMismatchError, SensitivityNotFoundError

# Surfaces
from .surfaces import (
    InterpolatedNodalSurface,
    ConstantSurface,
    LinearInterpolator,
    CubicSplineInterpolator,
    create_interpolator,
)

# Sensitivities
from .sensitivity import (
    UnitParameterSensitivity,
    CurrencyParameterSensitivity,
    CurrencyParameterSensitivities,
    SwaptionSabrSensitivity,
    SwaptionSabrSensitivities,
)

# Options
from .options import PutCall, shifted_black_price, shifted_black_greeks

# Volatility (SABR)
from .vol import (
    SabrVolatilityDerivatives,
    hagan_black_vol,
    hagan_normal_vol,
    hagan_black_vol_adjoint,
    SabrInterestRateParameters,
    SabrParametersSwaptionVolatilities,
    load_sabr_parameters,
    sabr_parameters_from_frame,
)

__all__ = [
    # Version
    "__version__",
    # Conventions
    "DayCount",
    "SwapConvention",
    "year_fraction",
    # Dates
    "DateUtils",
    "relative_time",
    "swaption_tenor",
    # Errors
    "SwaptionVolError",
    "SensitivityMismatchError",
    "SensitivityNotFoundError",
    # Surfaces
    "InterpolatedNodalSurface",
    "ConstantSurface",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "create_interpolator",
    # Sensitivities
    "UnitParameterSensitivity",
    "CurrencyParameterSensitivity",
    "CurrencyParameterSensitivities",
    "SwaptionSabrSensitivity",
    "SwaptionSabrSensitivities",
    # Options
    "PutCall",
    "shifted_black_price",
    "shifted_black_greeks",
    # Volatility (SABR)
    "SabrVolatilityDerivatives",
    "hagan_black_vol",
    "hagan_normal_vol",
    "hagan_black_vol_adjoint",
    "SabrInterestRateParameters",
    "SabrParametersSwaptionVolatilities",
    "load_sabr_parameters",
    "sabr_parameters_from_frame",
]
