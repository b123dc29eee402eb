"""
Point sensitivities to the SABR parameters of a swaption.

A point sensitivity holds the derivative of some quantity, typically a
present value, to alpha, beta, rho and nu at a single (expiry, tenor)
coordinate. The volatility provider distributes it onto surface nodes.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Tuple
import logging

from ..conventions import SwapConvention

logger = logging.getLogger(__name__)

PointKey = Tuple[SwapConvention, datetime, float, str]


@dataclass(frozen=True)
class SwaptionSabrSensitivity:
    """
    Sensitivity to the four SABR parameters at one expiry and tenor.

    Attributes:
        convention: Convention of the underlying swap
        expiry: Option expiry date-time
        tenor: Underlying swap tenor in years
        currency: Currency of the sensitivity amounts
        alpha_sensitivity: Derivative with respect to alpha
        beta_sensitivity: Derivative with respect to beta
        rho_sensitivity: Derivative with respect to rho
        nu_sensitivity: Derivative with respect to nu
    """
    convention: SwapConvention
    expiry: datetime
    tenor: float
    currency: str
    alpha_sensitivity: float
    beta_sensitivity: float
    rho_sensitivity: float
    nu_sensitivity: float

    def __post_init__(self):
        if self.tenor < 0:
            raise ValueError(f"Tenor must be non-negative, got {self.tenor}")
        object.__setattr__(self, "tenor", float(self.tenor))
        object.__setattr__(self, "currency", str(self.currency).upper())

    @property
    def key(self) -> PointKey:
        """Grouping key: points with equal keys can be merged."""
        return (self.convention, self.expiry, self.tenor, self.currency)

    def with_currency(self, currency: str) -> "SwaptionSabrSensitivity":
        return replace(self, currency=currency)

    def multiplied_by(self, factor: float) -> "SwaptionSabrSensitivity":
        return replace(
            self,
            alpha_sensitivity=self.alpha_sensitivity * factor,
            beta_sensitivity=self.beta_sensitivity * factor,
            rho_sensitivity=self.rho_sensitivity * factor,
            nu_sensitivity=self.nu_sensitivity * factor,
        )

    def plus(self, other: "SwaptionSabrSensitivity") -> "SwaptionSabrSensitivity":
        """Component-wise sum with a point of the same key."""
        if other.key != self.key:
            raise ValueError("Cannot add point sensitivities with different keys")
        return replace(
            self,
            alpha_sensitivity=self.alpha_sensitivity + other.alpha_sensitivity,
            beta_sensitivity=self.beta_sensitivity + other.beta_sensitivity,
            rho_sensitivity=self.rho_sensitivity + other.rho_sensitivity,
            nu_sensitivity=self.nu_sensitivity + other.nu_sensitivity,
        )


def _sort_key(point: SwaptionSabrSensitivity):
    c = point.convention
    return (point.currency, point.expiry.timestamp(), point.tenor,
            c.name, c.fixed_day_count.value, c.fixed_frequency, c.float_index, c.spot_days)


@dataclass(frozen=True)
class SwaptionSabrSensitivities:
    """Immutable collection of SABR point sensitivities."""

    sensitivities: Tuple[SwaptionSabrSensitivity, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "sensitivities", tuple(self.sensitivities))

    @classmethod
    def of(cls, sensitivities: Iterable[SwaptionSabrSensitivity]) -> "SwaptionSabrSensitivities":
        return cls(tuple(sensitivities))

    @classmethod
    def empty(cls) -> "SwaptionSabrSensitivities":
        return cls(())

    def __len__(self) -> int:
        return len(self.sensitivities)

    def __iter__(self) -> Iterator[SwaptionSabrSensitivity]:
        return iter(self.sensitivities)

    def combined_with(self, other) -> "SwaptionSabrSensitivities":
        """Concatenate with another collection or a single point."""
        if isinstance(other, SwaptionSabrSensitivity):
            return SwaptionSabrSensitivities(self.sensitivities + (other,))
        return SwaptionSabrSensitivities(self.sensitivities + tuple(other))

    def multiplied_by(self, factor: float) -> "SwaptionSabrSensitivities":
        return SwaptionSabrSensitivities(tuple(p.multiplied_by(factor) for p in self.sensitivities))

    def normalize(self) -> "SwaptionSabrSensitivities":
        """
        Merge points sharing convention, expiry, tenor and currency.

        The four components are summed within each group. The result holds
        one point per group, ordered by currency, expiry, tenor and then
        the convention fields.
        """
        grouped: Dict[PointKey, SwaptionSabrSensitivity] = {}
        for point in self.sensitivities:
            existing = grouped.get(point.key)
            grouped[point.key] = point if existing is None else existing.plus(point)
        merged: List[SwaptionSabrSensitivity] = sorted(grouped.values(), key=_sort_key)
        logger.debug("Normalized %d SABR point sensitivities into %d", len(self), len(merged))
        return SwaptionSabrSensitivities(tuple(merged))


__all__ = [
    "SwaptionSabrSensitivity",
    "SwaptionSabrSensitivities",
]
