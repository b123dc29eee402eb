"""
Shared market data for tests: USD SABR parameter sets.
"""

import numpy as np
import pytest

from swaptionvol.conventions import SwapConvention
from swaptionvol.surfaces import ConstantSurface, InterpolatedNodalSurface
from swaptionvol.vol import SabrInterestRateParameters


EXPIRIES = [0.0, 0.5, 1.0, 2.0, 5.0, 10.0]
TENORS = [1.0, 2.0, 5.0, 10.0, 30.0]

ALPHA_GRID = np.array([
    [0.060, 0.058, 0.055, 0.052, 0.050],
    [0.058, 0.056, 0.054, 0.051, 0.049],
    [0.056, 0.055, 0.053, 0.050, 0.048],
    [0.054, 0.053, 0.051, 0.049, 0.047],
    [0.050, 0.049, 0.048, 0.046, 0.045],
    [0.046, 0.045, 0.044, 0.043, 0.042],
])
RHO_GRID = np.array([
    [-0.25, -0.24, -0.22, -0.20, -0.18],
    [-0.24, -0.23, -0.21, -0.19, -0.17],
    [-0.22, -0.21, -0.20, -0.18, -0.16],
    [-0.20, -0.19, -0.18, -0.16, -0.14],
    [-0.15, -0.14, -0.13, -0.12, -0.10],
    [-0.10, -0.09, -0.08, -0.07, -0.05],
])
NU_GRID = np.array([
    [0.50, 0.48, 0.45, 0.42, 0.40],
    [0.48, 0.46, 0.43, 0.40, 0.38],
    [0.45, 0.43, 0.41, 0.38, 0.36],
    [0.42, 0.40, 0.38, 0.36, 0.34],
    [0.38, 0.36, 0.34, 0.32, 0.30],
    [0.34, 0.33, 0.31, 0.30, 0.28],
])


def _grid_surface(name, grid, interpolator="linear"):
    x, y = np.meshgrid(EXPIRIES, TENORS, indexing="ij")
    return InterpolatedNodalSurface(
        name=name,
        x_values=x.ravel(),
        y_values=y.ravel(),
        z_values=np.asarray(grid).ravel(),
        interpolator=interpolator,
    )


def _beta_surface(name):
    # Coarser grid than the other parameters
    return InterpolatedNodalSurface(
        name=name,
        x_values=[0.0, 0.0, 10.0, 10.0],
        y_values=[0.0, 10.0, 0.0, 10.0],
        z_values=[0.50, 0.50, 0.55, 0.50],
    )


@pytest.fixture
def usd_convention():
    return SwapConvention.usd_fixed_6m_libor_3m()


@pytest.fixture
def sabr_param_shift_usd(usd_convention):
    """USD SABR parameters with a 2% shift."""
    return SabrInterestRateParameters.of(
        alpha_surface=_grid_surface("Test-SABR-Alpha", ALPHA_GRID),
        beta_surface=_beta_surface("Test-SABR-Beta"),
        rho_surface=_grid_surface("Test-SABR-Rho", RHO_GRID),
        nu_surface=_grid_surface("Test-SABR-Nu", NU_GRID),
        convention=usd_convention,
        shift_surface=ConstantSurface("Test-SABR-Shift", 0.02),
    )


@pytest.fixture
def sabr_param_usd(usd_convention):
    """USD SABR parameters without shift, cubic spline interpolation."""
    return SabrInterestRateParameters.of(
        alpha_surface=_grid_surface("Test-SABR-Alpha", ALPHA_GRID, "cubic_spline"),
        beta_surface=_beta_surface("Test-SABR-Beta"),
        rho_surface=_grid_surface("Test-SABR-Rho", RHO_GRID, "cubic_spline"),
        nu_surface=_grid_surface("Test-SABR-Nu", NU_GRID, "cubic_spline"),
        convention=usd_convention,
    )
