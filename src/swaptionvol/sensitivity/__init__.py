"""
Sensitivity module - point and node sensitivities.

Provides:
- SABR point sensitivities and their normalization
- Node sensitivities per surface and currency
- Bundles that combine node sensitivities across points
"""

from .parameter import (
    UnitParameterSensitivity,
    CurrencyParameterSensitivity,
    CurrencyParameterSensitivities,
)
from .points import SwaptionSabrSensitivity, SwaptionSabrSensitivities

__all__ = [
    "UnitParameterSensitivity",
    "CurrencyParameterSensitivity",
    "CurrencyParameterSensitivities",
    "SwaptionSabrSensitivity",
    "SwaptionSabrSensitivities",
]
