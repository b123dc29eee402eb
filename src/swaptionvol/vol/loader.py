"""
Loading SABR parameter grids from CSV.

Expected columns: parameter, expiry, tenor, value
- parameter: alpha, beta, rho, nu or shift (case-insensitive)
- expiry, tenor: year fractions or tenor strings such as "6M", "10Y"
"""

from typing import Dict, Union
import logging

import pandas as pd

from .parameters import SabrInterestRateParameters
from ..conventions import SwapConvention
from ..dates import DateUtils
from ..surfaces import InterpolatedNodalSurface

logger = logging.getLogger(__name__)

REQUIRED_PARAMETERS = ("alpha", "beta", "rho", "nu")
OPTIONAL_PARAMETERS = ("shift",)
REQUIRED_COLUMNS = ("parameter", "expiry", "tenor", "value")


def _to_years(value: Union[str, float]) -> float:
    """Convert a year fraction or tenor string to years."""
    if isinstance(value, str):
        text = value.strip()
        try:
            return float(text)
        except ValueError:
            return DateUtils.tenor_to_years(text)
    return float(value)


def sabr_parameters_from_frame(
    df: pd.DataFrame,
    convention: SwapConvention,
    interpolator: str = "linear",
    name_prefix: str = "SABR"
) -> SabrInterestRateParameters:
    """
    Build SABR parameters from a DataFrame of nodes.

    Args:
        df: One row per node with columns parameter, expiry, tenor, value
        convention: Swap convention the parameters apply to
        interpolator: Interpolation scheme for every surface
        name_prefix: Surfaces are named "{prefix}-Alpha", "{prefix}-Beta", ...

    Returns:
        SabrInterestRateParameters
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in SABR parameter grid: {missing}")

    nodes = df.loc[:, list(REQUIRED_COLUMNS)].copy()
    nodes["parameter"] = nodes["parameter"].astype(str).str.strip().str.lower()
    nodes["expiry"] = nodes["expiry"].map(_to_years)
    nodes["tenor"] = nodes["tenor"].map(_to_years)
    nodes["value"] = nodes["value"].astype(float)

    unknown = set(nodes["parameter"]) - set(REQUIRED_PARAMETERS) - set(OPTIONAL_PARAMETERS)
    if unknown:
        raise ValueError(f"Unknown SABR parameters: {sorted(unknown)}")

    duplicated = nodes.duplicated(subset=["parameter", "expiry", "tenor"], keep="last")
    if duplicated.any():
        logger.warning("SABR parameter grid has %d duplicate nodes, keeping the last value", int(duplicated.sum()))
        nodes = nodes[~duplicated]

    surfaces: Dict[str, InterpolatedNodalSurface] = {}
    for param, group in nodes.groupby("parameter", sort=False):
        group = group.sort_values(["expiry", "tenor"])
        surfaces[param] = InterpolatedNodalSurface(
            name=f"{name_prefix}-{param.capitalize()}",
            x_values=group["expiry"].to_numpy(),
            y_values=group["tenor"].to_numpy(),
            z_values=group["value"].to_numpy(),
            interpolator=interpolator,
        )

    absent = [p for p in REQUIRED_PARAMETERS if p not in surfaces]
    if absent:
        raise ValueError(f"SABR parameter grid has no nodes for: {absent}")

    return SabrInterestRateParameters.of(
        alpha_surface=surfaces["alpha"],
        beta_surface=surfaces["beta"],
        rho_surface=surfaces["rho"],
        nu_surface=surfaces["nu"],
        convention=convention,
        shift_surface=surfaces.get("shift"),
    )


def load_sabr_parameters(
    filepath: str,
    convention: SwapConvention,
    interpolator: str = "linear",
    name_prefix: str = "SABR"
) -> SabrInterestRateParameters:
    """
    Load SABR parameters from a CSV file.

    Args:
        filepath: Path to CSV file
        convention: Swap convention the parameters apply to
        interpolator: Interpolation scheme for every surface
        name_prefix: Prefix of the surface names

    Returns:
        SabrInterestRateParameters
    """
    df = pd.read_csv(filepath, dtype={"expiry": str, "tenor": str})
    df.columns = df.columns.str.strip().str.lower()
    return sabr_parameters_from_frame(df, convention, interpolator, name_prefix)


__all__ = [
    "sabr_parameters_from_frame",
    "load_sabr_parameters",
]
