"""
SABR implied volatility formula.

Implements the Hagan et al. approximation for rates volatility:
- Lognormal (Black) implied volatility
- Normal (Bachelier) implied volatility
- Shifted SABR for negative rates
- First-order derivatives of the Black volatility

References:
- Hagan, P.S. et al. (2002). "Managing Smile Risk." Wilmott Magazine.
"""

from dataclasses import dataclass
from typing import Dict
import numpy as np


@dataclass(frozen=True)
class SabrVolatilityDerivatives:
    """
    Black volatility and its derivatives.

    Attributes:
        volatility: Black implied volatility
        d_forward: Derivative with respect to the forward
        d_strike: Derivative with respect to the strike
        d_alpha: Derivative with respect to alpha
        d_beta: Derivative with respect to beta
        d_rho: Derivative with respect to rho
        d_nu: Derivative with respect to nu
    """
    volatility: float
    d_forward: float
    d_strike: float
    d_alpha: float
    d_beta: float
    d_rho: float
    d_nu: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {
            "volatility": self.volatility,
            "d_forward": self.d_forward,
            "d_strike": self.d_strike,
            "d_alpha": self.d_alpha,
            "d_beta": self.d_beta,
            "d_rho": self.d_rho,
            "d_nu": self.d_nu,
        }


def hagan_black_vol(
    F: float,
    K: float,
    T: float,
    alpha: float,
    beta: float,
    rho: float,
    nu: float,
    shift: float = 0.0
) -> float:
    """
    Hagan et al. approximation for SABR Black implied volatility.

    Args:
        F: Forward rate
        K: Strike
        T: Time to expiry (years)
        alpha: SABR alpha (instantaneous vol)
        beta: CEV exponent
        rho: Correlation
        nu: Vol of vol
        shift: Shift for negative rates

    Returns:
        Black implied volatility
    """
    # Apply shift for negative rates
    F_s = F + shift
    K_s = K + shift

    if F_s <= 0 or K_s <= 0:
        raise ValueError(f"Shifted forward ({F_s}) and strike ({K_s}) must be positive")

    # Handle ATM case
    if abs(F_s - K_s) < 1e-10:
        return _hagan_atm_vol(F_s, T, alpha, beta, rho, nu)

    log_fk = np.log(F_s / K_s)
    fk_mid = (F_s * K_s) ** ((1 - beta) / 2)

    one_minus_beta = 1 - beta
    denom = fk_mid * (1 + one_minus_beta**2 / 24 * log_fk**2
                      + one_minus_beta**4 / 1920 * log_fk**4)

    # z / x(z)
    z = nu / alpha * fk_mid * log_fk

    if abs(z) < 1e-10:
        z_over_x = 1.0
    else:
        sqrt_term = np.sqrt(1 - 2 * rho * z + z**2)
        z_over_x = z / np.log((sqrt_term + z - rho) / (1 - rho))

    # Time correction terms
    term1 = one_minus_beta**2 * alpha**2 / (24 * fk_mid**2)
    term2 = rho * beta * nu * alpha / (4 * fk_mid)
    term3 = (2 - 3 * rho**2) * nu**2 / 24

    time_adj = 1 + (term1 + term2 + term3) * T

    return float(alpha / denom * z_over_x * time_adj)


def _hagan_atm_vol(
    F: float,
    T: float,
    alpha: float,
    beta: float,
    rho: float,
    nu: float
) -> float:
    """ATM Black vol from Hagan formula."""
    F_beta = F ** (1 - beta)

    term1 = (1 - beta)**2 * alpha**2 / (24 * F**(2 - 2*beta))
    term2 = rho * beta * nu * alpha / (4 * F**(1 - beta))
    term3 = (2 - 3 * rho**2) * nu**2 / 24

    return float(alpha / F_beta * (1 + (term1 + term2 + term3) * T))


def hagan_normal_vol(
    F: float,
    K: float,
    T: float,
    alpha: float,
    beta: float,
    rho: float,
    nu: float,
    shift: float = 0.0
) -> float:
    """
    SABR normal (Bachelier) implied volatility.

    Converts Black vol to normal vol using the approximation
    sigma_N = sigma_B * sqrt(F K) * (1 - log(F/K)^2 / 24),
    which reduces to sigma_B * F at the money.

    Args:
        F: Forward rate
        K: Strike
        T: Time to expiry
        alpha, beta, rho, nu: SABR parameters
        shift: Shift for negative rates

    Returns:
        Normal (Bachelier) implied volatility
    """
    F_s = F + shift
    K_s = K + shift

    sigma_b = hagan_black_vol(F, K, T, alpha, beta, rho, nu, shift)

    if abs(F_s - K_s) < 1e-10:
        return float(sigma_b * F_s)

    log_fk = np.log(F_s / K_s)
    fk_sqrt = np.sqrt(F_s * K_s)
    return float(sigma_b * fk_sqrt * (1 - log_fk**2 / 24))


def hagan_black_vol_adjoint(
    F: float,
    K: float,
    T: float,
    alpha: float,
    beta: float,
    rho: float,
    nu: float,
    shift: float = 0.0
) -> SabrVolatilityDerivatives:
    """
    Black volatility and its first-order derivatives.

    Derivatives are central finite differences. Bumps are relative for
    forward, strike, alpha and nu, absolute for beta and rho.

    Args:
        F: Forward rate
        K: Strike
        T: Time to expiry
        alpha, beta, rho, nu: SABR parameters
        shift: Shift for negative rates

    Returns:
        SabrVolatilityDerivatives
    """
    vol = hagan_black_vol(F, K, T, alpha, beta, rho, nu, shift)

    def central(fn, x: float, eps: float) -> float:
        return (fn(x + eps) - fn(x - eps)) / (2 * eps)

    eps_rate = max(abs(F + shift), abs(K + shift)) * 1e-6
    d_forward = central(lambda f: hagan_black_vol(f, K, T, alpha, beta, rho, nu, shift), F, eps_rate)
    d_strike = central(lambda k: hagan_black_vol(F, k, T, alpha, beta, rho, nu, shift), K, eps_rate)
    d_alpha = central(lambda a: hagan_black_vol(F, K, T, a, beta, rho, nu, shift), alpha, abs(alpha) * 1e-6)
    d_beta = central(lambda b: hagan_black_vol(F, K, T, alpha, b, rho, nu, shift), beta, 1e-6)
    d_rho = central(lambda r: hagan_black_vol(F, K, T, alpha, beta, r, nu, shift), rho, 1e-6)
    d_nu = central(lambda v: hagan_black_vol(F, K, T, alpha, beta, rho, v, shift), nu, max(abs(nu) * 1e-6, 1e-8))

    return SabrVolatilityDerivatives(
        volatility=vol,
        d_forward=d_forward,
        d_strike=d_strike,
        d_alpha=d_alpha,
        d_beta=d_beta,
        d_rho=d_rho,
        d_nu=d_nu,
    )


__all__ = [
    "SabrVolatilityDerivatives",
    "hagan_black_vol",
    "hagan_normal_vol",
    "hagan_black_vol_adjoint",
]
