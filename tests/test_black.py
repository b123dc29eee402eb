"""
Tests for shifted Black pricing.
"""

import pytest

from swaptionvol.options import PutCall, shifted_black_greeks, shifted_black_price


class TestShiftedBlack:
    """Tests for shifted Black'76 prices and Greeks."""

    def test_put_call_parity(self):
        """Call minus put equals forward minus strike."""
        F, K, T, vol = 0.01, 0.015, 2.0, 0.3
        call = shifted_black_price(F, K, T, vol, PutCall.CALL, shift=0.02)
        put = shifted_black_price(F, K, T, vol, PutCall.PUT, shift=0.02)
        assert call - put == pytest.approx(F - K)

    def test_negative_rates(self):
        """Negative forward and strike are priced above -shift."""
        price = shifted_black_price(-0.002, -0.001, 1.0, 0.4, PutCall.PUT, shift=0.01)
        assert price > 0
        with pytest.raises(ValueError):
            shifted_black_price(-0.02, 0.01, 1.0, 0.4, PutCall.CALL, shift=0.01)

    def test_expired_is_intrinsic(self):
        assert shifted_black_price(0.03, 0.02, 0.0, 0.3, PutCall.CALL) == pytest.approx(0.01)
        assert shifted_black_price(0.03, 0.02, -0.1, 0.3, PutCall.PUT) == 0.0
        greeks = shifted_black_greeks(0.03, 0.02, 0.0, 0.3, PutCall.CALL)
        assert greeks == {'delta': 1.0, 'gamma': 0.0, 'vega': 0.0, 'theta': 0.0}

    def test_delta_bounds(self):
        call = shifted_black_greeks(0.03, 0.025, 1.0, 0.3, PutCall.CALL)
        put = shifted_black_greeks(0.03, 0.025, 1.0, 0.3, PutCall.PUT)
        assert 0 < call['delta'] < 1
        assert -1 < put['delta'] < 0
        assert call['delta'] - put['delta'] == pytest.approx(1.0)
        assert call['gamma'] == pytest.approx(put['gamma'])
        assert call['vega'] == pytest.approx(put['vega'])
