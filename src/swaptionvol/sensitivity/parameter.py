"""
Parameter sensitivities: derivatives against the nodes of named surfaces.

Provides:
- UnitParameterSensitivity: node sensitivities of one surface, no currency
- CurrencyParameterSensitivity: node sensitivities tagged with a currency
- CurrencyParameterSensitivities: a bundle keyed by (surface name, currency)

Node order is the surface's node order and is never rearranged, so two
sensitivities to the same surface can be summed element-wise.
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..errors import SensitivityMismatchError, SensitivityNotFoundError

SensitivityKey = Tuple[str, str]


def _frozen_array(values: Iterable[float]) -> np.ndarray:
    arr = np.array(values, dtype=np.float64).reshape(-1)
    arr.setflags(write=False)
    return arr


def _check_currency(currency: str) -> str:
    code = str(currency).upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"Invalid currency code: {currency}")
    return code


@dataclass(frozen=True, eq=False)
class UnitParameterSensitivity:
    """
    Sensitivity of a value to each node of a surface, without a currency.

    Attributes:
        surface_name: Name of the surface the nodes belong to
        sensitivity: One derivative per node, in node order
        parameter_metadata: One label per node, e.g. (expiry, tenor)
    """
    surface_name: str
    sensitivity: np.ndarray
    parameter_metadata: Tuple[Hashable, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sensitivity", _frozen_array(self.sensitivity))
        object.__setattr__(self, "parameter_metadata", tuple(self.parameter_metadata))
        if self.parameter_metadata and len(self.parameter_metadata) != len(self.sensitivity):
            raise ValueError("Parameter metadata and sensitivity must have same length")

    def __len__(self) -> int:
        return len(self.sensitivity)

    def __eq__(self, other) -> bool:
        if not isinstance(other, UnitParameterSensitivity):
            return NotImplemented
        return (
            self.surface_name == other.surface_name
            and self.parameter_metadata == other.parameter_metadata
            and np.array_equal(self.sensitivity, other.sensitivity)
        )

    def multiplied_by(self, currency: str, factor: float) -> "CurrencyParameterSensitivity":
        """Scale by factor and tag with a currency."""
        return CurrencyParameterSensitivity(
            surface_name=self.surface_name,
            currency=currency,
            sensitivity=self.sensitivity * factor,
            parameter_metadata=self.parameter_metadata,
        )


@dataclass(frozen=True, eq=False)
class CurrencyParameterSensitivity:
    """
    Sensitivity to each node of a surface, expressed in a currency.

    Attributes:
        surface_name: Name of the surface the nodes belong to
        currency: ISO currency code of the sensitivity amounts
        sensitivity: One amount per node, in node order
        parameter_metadata: One label per node, e.g. (expiry, tenor)
    """
    surface_name: str
    currency: str
    sensitivity: np.ndarray
    parameter_metadata: Tuple[Hashable, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "currency", _check_currency(self.currency))
        object.__setattr__(self, "sensitivity", _frozen_array(self.sensitivity))
        object.__setattr__(self, "parameter_metadata", tuple(self.parameter_metadata))
        if self.parameter_metadata and len(self.parameter_metadata) != len(self.sensitivity):
            raise ValueError("Parameter metadata and sensitivity must have same length")

    @property
    def key(self) -> SensitivityKey:
        return (self.surface_name, self.currency)

    def __len__(self) -> int:
        return len(self.sensitivity)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurrencyParameterSensitivity):
            return NotImplemented
        return (
            self.key == other.key
            and self.parameter_metadata == other.parameter_metadata
            and np.array_equal(self.sensitivity, other.sensitivity)
        )

    def plus(self, other: "CurrencyParameterSensitivity") -> "CurrencyParameterSensitivity":
        """
        Element-wise sum with a sensitivity to the same surface and currency.

        Raises:
            ValueError: If the keys differ
            SensitivityMismatchError: If the node counts differ
        """
        if other.key != self.key:
            raise ValueError(f"Cannot add sensitivity {other.key} to {self.key}")
        if len(other) != len(self):
            raise SensitivityMismatchError(self.surface_name, self.currency, len(self), len(other))
        return CurrencyParameterSensitivity(
            surface_name=self.surface_name,
            currency=self.currency,
            sensitivity=self.sensitivity + other.sensitivity,
            parameter_metadata=self.parameter_metadata or other.parameter_metadata,
        )

    def multiplied_by(self, factor: float) -> "CurrencyParameterSensitivity":
        """Scale every node amount by factor."""
        return CurrencyParameterSensitivity(
            surface_name=self.surface_name,
            currency=self.currency,
            sensitivity=self.sensitivity * factor,
            parameter_metadata=self.parameter_metadata,
        )

    def total(self) -> float:
        """Sum of the node amounts."""
        return float(self.sensitivity.sum())


@dataclass(frozen=True, eq=False)
class CurrencyParameterSensitivities:
    """
    Bundle of node sensitivities keyed by (surface name, currency).

    At most one entry exists per key; entries are kept sorted by key so
    that equal bundles compare equal however they were assembled.
    """
    sensitivities: Tuple[CurrencyParameterSensitivity, ...] = field(default_factory=tuple)

    def __post_init__(self):
        merged: Dict[SensitivityKey, CurrencyParameterSensitivity] = {}
        for sens in self.sensitivities:
            existing = merged.get(sens.key)
            merged[sens.key] = sens if existing is None else existing.plus(sens)
        ordered = tuple(merged[key] for key in sorted(merged))
        object.__setattr__(self, "sensitivities", ordered)

    @classmethod
    def empty(cls) -> "CurrencyParameterSensitivities":
        return cls(())

    @classmethod
    def of(cls, sensitivities: Iterable[CurrencyParameterSensitivity]) -> "CurrencyParameterSensitivities":
        """Build a bundle, summing entries that share a key."""
        return cls(tuple(sensitivities))

    def __len__(self) -> int:
        return len(self.sensitivities)

    def __iter__(self) -> Iterator[CurrencyParameterSensitivity]:
        return iter(self.sensitivities)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurrencyParameterSensitivities):
            return NotImplemented
        return self.sensitivities == other.sensitivities

    def keys(self) -> List[SensitivityKey]:
        return [sens.key for sens in self.sensitivities]

    def find_sensitivity(self, surface_name: str, currency: str) -> Optional[CurrencyParameterSensitivity]:
        """Return the sensitivity for the key, or None if there is none."""
        key = (surface_name, _check_currency(currency))
        for sens in self.sensitivities:
            if sens.key == key:
                return sens
        return None

    def get_sensitivity(self, surface_name: str, currency: str) -> CurrencyParameterSensitivity:
        """
        Return the sensitivity for the key.

        Raises:
            SensitivityNotFoundError: If no sensitivity exists for the key
        """
        sens = self.find_sensitivity(surface_name, currency)
        if sens is None:
            raise SensitivityNotFoundError(surface_name, currency)
        return sens

    def combined_with(self, other) -> "CurrencyParameterSensitivities":
        """
        Combine with another bundle or a single sensitivity.

        Entries with a common key are summed node by node; the rest are
        carried over unchanged. The operation is associative and commutative.
        """
        if isinstance(other, CurrencyParameterSensitivity):
            return CurrencyParameterSensitivities(self.sensitivities + (other,))
        return CurrencyParameterSensitivities(self.sensitivities + other.sensitivities)

    def multiplied_by(self, factor: float) -> "CurrencyParameterSensitivities":
        return CurrencyParameterSensitivities(tuple(s.multiplied_by(factor) for s in self.sensitivities))

    def total(self) -> Dict[str, float]:
        """Sum of all node amounts, per currency."""
        totals: Dict[str, float] = {}
        for sens in self.sensitivities:
            totals[sens.currency] = totals.get(sens.currency, 0.0) + sens.total()
        return totals

    def equal_within_tolerance(self, other: "CurrencyParameterSensitivities", tolerance: float) -> bool:
        """
        Compare two bundles node by node with an absolute tolerance.

        A key missing on one side compares as all zeros.
        """
        for key in set(self.keys()) | set(other.keys()):
            mine = self.find_sensitivity(*key)
            theirs = other.find_sensitivity(*key)
            if mine is None or theirs is None:
                present = mine if mine is not None else theirs
                if np.any(np.abs(present.sensitivity) > tolerance):
                    return False
                continue
            if len(mine) != len(theirs):
                return False
            if not np.allclose(mine.sensitivity, theirs.sensitivity, rtol=0.0, atol=tolerance):
                return False
        return True

    def to_frame(self) -> pd.DataFrame:
        """
        One row per node, for risk reporting.

        Columns: surface, currency, node, label, sensitivity.
        """
        rows = []
        for sens in self.sensitivities:
            for i, value in enumerate(sens.sensitivity):
                label = sens.parameter_metadata[i] if sens.parameter_metadata else i
                rows.append({
                    "surface": sens.surface_name,
                    "currency": sens.currency,
                    "node": i,
                    "label": label,
                    "sensitivity": float(value),
                })
        return pd.DataFrame(rows, columns=["surface", "currency", "node", "label", "sensitivity"])


__all__ = [
    "UnitParameterSensitivity",
    "CurrencyParameterSensitivity",
    "CurrencyParameterSensitivities",
    "SensitivityKey",
]
