"""
Options module - shifted Black pricing for swaptions.

SABR provides the implied vol, then these functions price.
"""

from .black import PutCall, shifted_black_price, shifted_black_greeks

__all__ = [
    "PutCall",
    "shifted_black_price",
    "shifted_black_greeks",
]
