"""
SABR interest rate parameters.

Holds the alpha, beta, rho, nu and shift surfaces over (expiry time, tenor)
together with the swap convention they were fitted for.
"""

from dataclasses import dataclass
from typing import Optional

from .sabr import SabrVolatilityDerivatives, hagan_black_vol, hagan_black_vol_adjoint
from ..conventions import SwapConvention
from ..surfaces import ConstantSurface, Surface


@dataclass(frozen=True)
class SabrInterestRateParameters:
    """
    SABR model parameters as surfaces of (expiry time, tenor).

    Attributes:
        alpha_surface: Alpha (instantaneous vol) surface
        beta_surface: Beta (CEV exponent) surface
        rho_surface: Rho (correlation) surface
        nu_surface: Nu (vol of vol) surface
        shift_surface: Shift surface for negative rates
        convention: Convention of the underlying swaps
    """
    alpha_surface: Surface
    beta_surface: Surface
    rho_surface: Surface
    nu_surface: Surface
    shift_surface: Surface
    convention: SwapConvention

    def __post_init__(self):
        names = [s.name for s in self.surfaces()]
        if len(set(names)) != len(names):
            raise ValueError(f"SABR surface names must be distinct, got {names}")

    @classmethod
    def of(
        cls,
        alpha_surface: Surface,
        beta_surface: Surface,
        rho_surface: Surface,
        nu_surface: Surface,
        convention: SwapConvention,
        shift_surface: Optional[Surface] = None
    ) -> "SabrInterestRateParameters":
        """
        Create parameters; without a shift surface the shift is zero.
        """
        if shift_surface is None:
            shift_surface = ConstantSurface(f"{alpha_surface.name}-ZeroShift", 0.0)
        return cls(
            alpha_surface=alpha_surface,
            beta_surface=beta_surface,
            rho_surface=rho_surface,
            nu_surface=nu_surface,
            shift_surface=shift_surface,
            convention=convention,
        )

    def surfaces(self):
        """The five surfaces, alpha, beta, rho, nu, shift in that order."""
        return (self.alpha_surface, self.beta_surface, self.rho_surface,
                self.nu_surface, self.shift_surface)

    def alpha(self, expiry_time: float, tenor: float) -> float:
        return self.alpha_surface.z_value(expiry_time, tenor)

    def beta(self, expiry_time: float, tenor: float) -> float:
        return self.beta_surface.z_value(expiry_time, tenor)

    def rho(self, expiry_time: float, tenor: float) -> float:
        return self.rho_surface.z_value(expiry_time, tenor)

    def nu(self, expiry_time: float, tenor: float) -> float:
        return self.nu_surface.z_value(expiry_time, tenor)

    def shift(self, expiry_time: float, tenor: float) -> float:
        return self.shift_surface.z_value(expiry_time, tenor)

    def volatility(self, expiry_time: float, tenor: float, strike: float, forward: float) -> float:
        """
        Black volatility from the SABR formula at the surfaces' values.

        Args:
            expiry_time: Time to expiry in years
            tenor: Underlying swap tenor in years
            strike: Option strike
            forward: Forward swap rate

        Returns:
            Shifted Black implied volatility
        """
        return hagan_black_vol(
            forward, strike, expiry_time,
            self.alpha(expiry_time, tenor),
            self.beta(expiry_time, tenor),
            self.rho(expiry_time, tenor),
            self.nu(expiry_time, tenor),
            self.shift(expiry_time, tenor),
        )

    def volatility_adjoint(
        self,
        expiry_time: float,
        tenor: float,
        strike: float,
        forward: float
    ) -> SabrVolatilityDerivatives:
        """Black volatility with its forward, strike and parameter derivatives."""
        return hagan_black_vol_adjoint(
            forward, strike, expiry_time,
            self.alpha(expiry_time, tenor),
            self.beta(expiry_time, tenor),
            self.rho(expiry_time, tenor),
            self.nu(expiry_time, tenor),
            self.shift(expiry_time, tenor),
        )


__all__ = ["SabrInterestRateParameters"]
