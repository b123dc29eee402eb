#!/usr/bin/env python3
"""
SABR Swaption Volatility Demo Script

Demonstrates the swaption volatility workflow:
1. Build (or load from CSV) SABR parameter surfaces
2. Create a volatility provider at a valuation date-time
3. Print a volatility grid over expiries and tenors
4. Distribute a SABR point sensitivity onto surface nodes

Usage:
    python run_swaption_vol_demo.py [--params-csv PATH] [--zone ZONE] [--verbose]
"""

import argparse
import logging
import sys
from datetime import date, datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from swaptionvol import (
    ConstantSurface,
    InterpolatedNodalSurface,
    PutCall,
    SabrInterestRateParameters,
    SabrParametersSwaptionVolatilities,
    SwapConvention,
    SwaptionSabrSensitivities,
    SwaptionSabrSensitivity,
    load_sabr_parameters,
)


EXPIRIES = [0.0, 0.5, 1.0, 2.0, 5.0, 10.0]
TENORS = [1.0, 2.0, 5.0, 10.0, 30.0]


def print_section(title: str):
    """Print section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def build_default_parameters(convention: SwapConvention) -> SabrInterestRateParameters:
    """SABR surfaces on a regular expiry x tenor grid with a 2% shift."""
    x, y = np.meshgrid(EXPIRIES, TENORS, indexing="ij")
    x = x.ravel()
    y = y.ravel()

    # Smooth shapes: alpha and nu fall with expiry, rho rises towards zero
    alpha = 0.060 - 0.0015 * x - 0.0003 * y
    rho = -0.25 + 0.015 * x + 0.002 * y
    nu = 0.50 - 0.015 * x - 0.003 * y

    def surface(name, z):
        return InterpolatedNodalSurface(name=name, x_values=x, y_values=y, z_values=z)

    return SabrInterestRateParameters.of(
        alpha_surface=surface("USD-SABR-Alpha", alpha),
        beta_surface=ConstantSurface("USD-SABR-Beta", 0.5),
        rho_surface=surface("USD-SABR-Rho", rho),
        nu_surface=surface("USD-SABR-Nu", nu),
        convention=convention,
        shift_surface=ConstantSurface("USD-SABR-Shift", 0.02),
    )


def demo_volatility_grid(provider: SabrParametersSwaptionVolatilities, forward: float):
    """Print ATM vols for expiry dates one to ten years out."""
    print_section("2. ATM Volatility Grid")

    zone = provider.valuation_date_time.tzinfo
    rows = {}
    for years in (1, 2, 5, 10):
        expiry_date = provider.valuation_date.replace(year=provider.valuation_date.year + years)
        expiry = datetime.combine(expiry_date, time(11, 0), tzinfo=zone)
        rows[f"{years}Y"] = {
            f"{int(tenor)}Y": provider.volatility(expiry, tenor, forward, forward)
            for tenor in TENORS
        }

    grid = pd.DataFrame(rows).T
    print(f"Forward = {forward*100:.2f}%, strike at the money (Black vol, %)")
    print((grid * 100).round(2).to_string())


def demo_smile(provider: SabrParametersSwaptionVolatilities, forward: float):
    """Print a 1Y x 5Y smile with prices."""
    print_section("3. Smile and Prices (1Y x 5Y)")

    zone = provider.valuation_date_time.tzinfo
    expiry_date = provider.valuation_date.replace(year=provider.valuation_date.year + 1)
    expiry = datetime.combine(expiry_date, time(11, 0), tzinfo=zone)
    swap_start = expiry_date
    swap_end = swap_start.replace(year=swap_start.year + 5)
    tenor = provider.tenor(swap_start, swap_end)

    print(f"Expiry time: {provider.relative_time(expiry):.4f}y, tenor: {tenor:.0f}y")
    print(f"{'Strike':>10} {'Vol (%)':>10} {'Payer':>12} {'Receiver':>12} {'Vega':>10}")
    print("-" * 58)
    for offset in (-0.01, -0.005, 0.0, 0.005, 0.01):
        strike = forward + offset
        vol = provider.volatility(expiry, tenor, strike, forward)
        payer = provider.price(expiry, tenor, PutCall.CALL, strike, forward, vol)
        receiver = provider.price(expiry, tenor, PutCall.PUT, strike, forward, vol)
        vega = provider.price_vega(expiry, tenor, PutCall.CALL, strike, forward, vol)
        print(f"{strike*100:>9.2f}% {vol*100:>10.2f} {payer*1e4:>10.2f}bp {receiver*1e4:>10.2f}bp {vega:>10.5f}")


def demo_node_sensitivities(provider: SabrParametersSwaptionVolatilities, forward: float):
    """Distribute two overlapping point sensitivities onto surface nodes."""
    print_section("4. Node Sensitivities")

    zone = provider.valuation_date_time.tzinfo
    expiry_date = provider.valuation_date.replace(year=provider.valuation_date.year + 3)
    expiry = datetime.combine(expiry_date, time(11, 0), tzinfo=zone)
    tenor = 7.0
    strike = forward + 0.0025

    adjoint = provider.volatility_adjoint(expiry, tenor, strike, forward)
    vega = provider.price_vega(expiry, tenor, PutCall.CALL, strike, forward, adjoint.volatility)
    notional = 10_000_000
    point = SwaptionSabrSensitivity(
        convention=provider.convention,
        expiry=expiry,
        tenor=tenor,
        currency="USD",
        alpha_sensitivity=notional * vega * adjoint.d_alpha,
        beta_sensitivity=notional * vega * adjoint.d_beta,
        rho_sensitivity=notional * vega * adjoint.d_rho,
        nu_sensitivity=notional * vega * adjoint.d_nu,
    )
    print(f"3Y x 7Y payer, strike {strike*100:.2f}%, vol {adjoint.volatility*100:.2f}%")
    print(f"  dPrice/dalpha = {point.alpha_sensitivity:,.2f}")
    print(f"  dPrice/drho   = {point.rho_sensitivity:,.2f}")
    print(f"  dPrice/dnu    = {point.nu_sensitivity:,.2f}")

    # The same trade booked twice normalizes into a single point
    points = SwaptionSabrSensitivities.of([point, point])
    bundle = provider.parameter_sensitivity(points)

    df = bundle.to_frame()
    df = df[df["sensitivity"].abs() > 1e-8]
    print(f"\nNon-zero node sensitivities ({len(df)} rows):")
    print(df.to_string(index=False))
    print("\nTotals by currency:")
    for currency, total in bundle.total().items():
        print(f"  {currency}: {total:,.2f}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="SABR Swaption Volatility Demo")
    parser.add_argument(
        "--params-csv",
        type=str,
        default=None,
        help="CSV with columns parameter, expiry, tenor, value"
    )
    parser.add_argument(
        "--zone",
        type=str,
        default="Europe/London",
        help="Valuation time zone"
    )
    parser.add_argument(
        "--forward",
        type=float,
        default=0.025,
        help="Forward swap rate"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    valuation_date = date(2014, 1, 3)
    valuation_time = time(10, 0)

    print("="*60)
    print("SABR SWAPTION VOLATILITY DEMO")
    print(f"Valuation: {valuation_date} {valuation_time} {args.zone}")
    print("="*60)

    print_section("1. SABR Parameters")
    convention = SwapConvention.usd_fixed_6m_libor_3m()
    if args.params_csv:
        params = load_sabr_parameters(args.params_csv, convention, name_prefix="USD-SABR")
        print(f"Loaded parameters from {args.params_csv}")
    else:
        params = build_default_parameters(convention)
        print("Using built-in parameter grid")
    print(f"  Convention: {convention}")
    for surface in params.surfaces():
        print(f"  {surface.name:<20} {surface.parameter_count:>3} nodes")

    provider = SabrParametersSwaptionVolatilities.of_date_time_zone(
        params, valuation_date, valuation_time, ZoneInfo(args.zone))

    demo_volatility_grid(provider, args.forward)
    demo_smile(provider, args.forward)
    demo_node_sensitivities(provider, args.forward)

    print_section("Demo Complete")


if __name__ == "__main__":
    main()
