"""Exception classes for swaption volatilities and sensitivities."""


class SwaptionVolError(Exception):
    """Base exception for swaption volatility errors."""

    pass


class SensitivityMismatchError(SwaptionVolError, ValueError):
    """
    Two sensitivities to the same surface and currency differ in length.

    The node grids behind them are incompatible, so they cannot be summed.
    """

    def __init__(self, surface_name: str, currency: str, size1: int, size2: int):
        super().__init__(
            f"Sensitivity to {surface_name} in {currency} has {size1} nodes, "
            f"cannot combine with {size2} nodes"
        )
        self.surface_name = surface_name
        self.currency = currency


class SensitivityNotFoundError(SwaptionVolError, KeyError):
    """No sensitivity exists for the requested surface and currency."""

    def __init__(self, surface_name: str, currency: str):
        super().__init__(f"No sensitivity to {surface_name} in {currency}")
        self.surface_name = surface_name
        self.currency = currency

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "SwaptionVolError",
    "SensitivityMismatchError",
    "SensitivityNotFoundError",
]
