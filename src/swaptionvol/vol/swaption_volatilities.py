"""
Swaption volatilities from SABR parameter surfaces.

The provider binds a valuation date-time and a day count to a set of SABR
parameters. It provides:
- Black volatility for an expiry date-time, tenor, strike and forward
- Conversion of dates to expiry times and tenors
- Distribution of SABR point sensitivities onto surface nodes
- Shifted Black prices and Greeks at the SABR volatility
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, tzinfo
from typing import Union
from zoneinfo import ZoneInfo
import logging

from .parameters import SabrInterestRateParameters
from .sabr import SabrVolatilityDerivatives
from ..conventions import DayCount, SwapConvention
from ..dates import relative_time, swaption_tenor
from ..options.black import PutCall, shifted_black_greeks, shifted_black_price
from ..sensitivity.parameter import CurrencyParameterSensitivities
from ..sensitivity.points import SwaptionSabrSensitivities, SwaptionSabrSensitivity

logger = logging.getLogger(__name__)


def _date_time_key(dt: datetime):
    # Aware datetimes compare by instant; the zone matters for relative times
    zone = dt.tzinfo
    return (dt.replace(tzinfo=None), dt.utcoffset(), getattr(zone, "key", zone))


@dataclass(frozen=True, eq=False)
class SabrParametersSwaptionVolatilities:
    """
    Volatility provider for swaptions based on SABR parameter surfaces.

    Immutable; every method is a pure function of its arguments and the
    construction-time state.

    Equality compares the valuation date-time by wall clock, UTC offset
    and zone rather than by instant.

    Attributes:
        parameters: SABR parameter surfaces and swap convention
        valuation_date_time: Valuation instant, all times are relative to it
        day_count: Day count used to measure expiry times
    """
    parameters: SabrInterestRateParameters
    valuation_date_time: datetime
    day_count: DayCount = DayCount.ACT_ACT_ISDA

    def __post_init__(self):
        logger.debug(
            "SABR swaption volatilities for %s at %s (%s)",
            self.parameters.convention.name,
            self.valuation_date_time.isoformat(),
            self.day_count.value,
        )

    def _key(self):
        return (self.parameters, _date_time_key(self.valuation_date_time), self.day_count)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SabrParametersSwaptionVolatilities):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @classmethod
    def of(
        cls,
        parameters: SabrInterestRateParameters,
        valuation_date_time: datetime,
        day_count: DayCount = DayCount.ACT_ACT_ISDA
    ) -> "SabrParametersSwaptionVolatilities":
        """Create a provider from a valuation date-time."""
        return cls(parameters=parameters, valuation_date_time=valuation_date_time, day_count=day_count)

    @classmethod
    def of_date_time_zone(
        cls,
        parameters: SabrInterestRateParameters,
        valuation_date: date,
        valuation_time: time,
        zone: Union[str, tzinfo],
        day_count: DayCount = DayCount.ACT_ACT_ISDA
    ) -> "SabrParametersSwaptionVolatilities":
        """
        Create a provider from a date, a time of day and a zone.

        Args:
            parameters: SABR parameters
            valuation_date: Valuation date
            valuation_time: Valuation time of day
            zone: IANA zone name (e.g. "Europe/London") or tzinfo
            day_count: Day count for expiry times
        """
        tz = ZoneInfo(zone) if isinstance(zone, str) else zone
        valuation_date_time = datetime.combine(valuation_date, valuation_time, tzinfo=tz)
        return cls.of(parameters, valuation_date_time, day_count)

    @property
    def convention(self) -> SwapConvention:
        """Swap convention of the parameters."""
        return self.parameters.convention

    @property
    def valuation_date(self) -> date:
        return self.valuation_date_time.date()

    def with_parameters(self, parameters: SabrInterestRateParameters) -> "SabrParametersSwaptionVolatilities":
        """Same valuation instant and day count, different parameters."""
        return replace(self, parameters=parameters)

    # -------------------------------------------------------------------------
    # Time conversion

    def relative_time(self, date_time: datetime) -> float:
        """Signed year fraction from the valuation date-time to date_time."""
        return relative_time(self.valuation_date_time, date_time, self.day_count)

    def tenor(self, start_date: date, end_date: date) -> float:
        """Swap tenor in whole years between two dates."""
        return swaption_tenor(start_date, end_date)

    # -------------------------------------------------------------------------
    # Volatility

    def volatility(self, expiry: datetime, tenor: float, strike: float, forward: float) -> float:
        """
        SABR Black volatility.

        Args:
            expiry: Option expiry date-time
            tenor: Underlying swap tenor in years
            strike: Option strike
            forward: Forward swap rate

        Returns:
            Shifted Black implied volatility
        """
        expiry_time = self.relative_time(expiry)
        return self.parameters.volatility(expiry_time, tenor, strike, forward)

    def volatility_adjoint(
        self,
        expiry: datetime,
        tenor: float,
        strike: float,
        forward: float
    ) -> SabrVolatilityDerivatives:
        """SABR Black volatility with its forward, strike and parameter derivatives."""
        expiry_time = self.relative_time(expiry)
        return self.parameters.volatility_adjoint(expiry_time, tenor, strike, forward)

    # -------------------------------------------------------------------------
    # Sensitivities

    def parameter_sensitivity(
        self,
        sensitivity: Union[SwaptionSabrSensitivity, SwaptionSabrSensitivities]
    ) -> CurrencyParameterSensitivities:
        """
        Node sensitivities of the alpha, beta, rho and nu surfaces.

        A single point is distributed onto each surface's nodes: the surface's
        node sensitivity at (expiry time, tenor) is scaled by the matching
        component of the point. A collection is normalized first, then the
        per-point results are combined.

        Args:
            sensitivity: A point sensitivity or a collection of them

        Returns:
            Bundle keyed by (surface name, currency)
        """
        if isinstance(sensitivity, SwaptionSabrSensitivity):
            return self._point_parameter_sensitivity(sensitivity)

        result = CurrencyParameterSensitivities.empty()
        for point in sensitivity.normalize():
            result = result.combined_with(self._point_parameter_sensitivity(point))
        return result

    def _point_parameter_sensitivity(self, point: SwaptionSabrSensitivity) -> CurrencyParameterSensitivities:
        expiry_time = self.relative_time(point.expiry)
        tenor = point.tenor
        params = self.parameters
        scaled = [
            (params.alpha_surface, point.alpha_sensitivity),
            (params.beta_surface, point.beta_sensitivity),
            (params.rho_surface, point.rho_sensitivity),
            (params.nu_surface, point.nu_sensitivity),
        ]
        sensitivities = []
        for surface, factor in scaled:
            unit = surface.z_value_parameter_sensitivity(expiry_time, tenor)
            if len(unit) == 0:
                continue
            sensitivities.append(unit.multiplied_by(point.currency, factor))
        logger.debug(
            "Distributed SABR point at expiry %.6f, tenor %.4f onto %d surfaces",
            expiry_time, tenor, len(sensitivities),
        )
        return CurrencyParameterSensitivities.of(sensitivities)

    # -------------------------------------------------------------------------
    # Shifted Black price and Greeks at the SABR volatility

    def price(
        self,
        expiry: datetime,
        tenor: float,
        put_call: PutCall,
        strike: float,
        forward: float,
        volatility: float
    ) -> float:
        """Undiscounted shifted Black price with the shift surface's shift."""
        expiry_time = self.relative_time(expiry)
        shift = self.parameters.shift(expiry_time, tenor)
        return shifted_black_price(forward, strike, expiry_time, volatility, put_call, shift)

    def price_delta(self, expiry: datetime, tenor: float, put_call: PutCall,
                    strike: float, forward: float, volatility: float) -> float:
        return self._greek("delta", expiry, tenor, put_call, strike, forward, volatility)

    def price_gamma(self, expiry: datetime, tenor: float, put_call: PutCall,
                    strike: float, forward: float, volatility: float) -> float:
        return self._greek("gamma", expiry, tenor, put_call, strike, forward, volatility)

    def price_theta(self, expiry: datetime, tenor: float, put_call: PutCall,
                    strike: float, forward: float, volatility: float) -> float:
        return self._greek("theta", expiry, tenor, put_call, strike, forward, volatility)

    def price_vega(self, expiry: datetime, tenor: float, put_call: PutCall,
                   strike: float, forward: float, volatility: float) -> float:
        return self._greek("vega", expiry, tenor, put_call, strike, forward, volatility)

    def _greek(self, name: str, expiry: datetime, tenor: float, put_call: PutCall,
               strike: float, forward: float, volatility: float) -> float:
        expiry_time = self.relative_time(expiry)
        shift = self.parameters.shift(expiry_time, tenor)
        return shifted_black_greeks(forward, strike, expiry_time, volatility, put_call, shift)[name]


__all__ = ["SabrParametersSwaptionVolatilities"]
