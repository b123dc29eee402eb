"""
Shifted Black'76 option pricing.

The provider's SABR volatility is a shifted Black volatility; these
functions turn it into undiscounted option prices and Greeks:
d(F + shift) = sigma_b * (F + shift) * dW
"""

from enum import Enum
from typing import Dict
import numpy as np
from scipy.stats import norm


# Standard normal CDF and PDF
N = norm.cdf
n = norm.pdf


class PutCall(Enum):
    """Option type: call/payer or put/receiver."""
    CALL = "Call"
    PUT = "Put"

    @property
    def is_call(self) -> bool:
        return self is PutCall.CALL


def _shifted(F: float, K: float, shift: float):
    F_shifted = F + shift
    K_shifted = K + shift
    if F_shifted <= 0 or K_shifted <= 0:
        raise ValueError(f"Shifted forward ({F_shifted}) and strike ({K_shifted}) must be positive")
    return F_shifted, K_shifted


def shifted_black_price(
    F: float,
    K: float,
    T: float,
    sigma_b: float,
    put_call: PutCall,
    shift: float = 0.0
) -> float:
    """
    Undiscounted shifted Black'76 option price.

    Args:
        F: Forward rate (can be negative down to -shift)
        K: Strike (can be negative down to -shift)
        T: Time to expiry
        sigma_b: Shifted Black volatility
        put_call: Option type
        shift: Shift parameter

    Returns:
        Option price
    """
    F_s, K_s = _shifted(F, K, shift)
    sign = 1.0 if put_call.is_call else -1.0

    if T <= 0 or sigma_b <= 0:
        return max(sign * (F_s - K_s), 0.0)

    sqrt_t = np.sqrt(T)
    d1 = (np.log(F_s / K_s) + 0.5 * sigma_b**2 * T) / (sigma_b * sqrt_t)
    d2 = d1 - sigma_b * sqrt_t

    return float(sign * (F_s * N(sign * d1) - K_s * N(sign * d2)))


def shifted_black_greeks(
    F: float,
    K: float,
    T: float,
    sigma_b: float,
    put_call: PutCall,
    shift: float = 0.0
) -> Dict[str, float]:
    """
    Compute Greeks for the shifted Black'76 model.

    Args:
        F: Forward rate
        K: Strike
        T: Time to expiry
        sigma_b: Shifted Black volatility
        put_call: Option type
        shift: Shift parameter

    Returns:
        Dict with delta, gamma, vega, theta (undiscounted)
    """
    F_s, K_s = _shifted(F, K, shift)
    is_call = put_call.is_call

    if T <= 0 or sigma_b <= 0:
        in_the_money = (F_s > K_s and is_call) or (F_s < K_s and not is_call)
        return {
            'delta': (1.0 if is_call else -1.0) if in_the_money else 0.0,
            'gamma': 0.0,
            'vega': 0.0,
            'theta': 0.0
        }

    sqrt_t = np.sqrt(T)
    d1 = (np.log(F_s / K_s) + 0.5 * sigma_b**2 * T) / (sigma_b * sqrt_t)

    # Delta
    if is_call:
        delta = N(d1)
    else:
        delta = -N(-d1)

    # Gamma (same for call and put)
    gamma = n(d1) / (F_s * sigma_b * sqrt_t)

    # Vega (sensitivity to Black vol)
    vega = F_s * sqrt_t * n(d1)

    # Theta (driftless time decay)
    theta = -F_s * sigma_b * n(d1) / (2 * sqrt_t)

    return {
        'delta': float(delta),
        'gamma': float(gamma),
        'vega': float(vega),
        'theta': float(theta)
    }


__all__ = [
    "PutCall",
    "shifted_black_price",
    "shifted_black_greeks",
]
