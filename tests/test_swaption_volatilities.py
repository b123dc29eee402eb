"""
Tests for SABR swaption volatilities provider.
"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import numpy as np
import pytest

from swaptionvol.conventions import DayCount
from swaptionvol.dates import DateUtils
from swaptionvol.errors import SensitivityNotFoundError
from swaptionvol.options import PutCall, shifted_black_price
from swaptionvol.sensitivity import SwaptionSabrSensitivities, SwaptionSabrSensitivity
from swaptionvol.vol import SabrParametersSwaptionVolatilities


DATE = date(2014, 1, 3)
TIME = time(10, 0)
ZONE = ZoneInfo("Europe/London")
DATE_TIME = datetime.combine(DATE, TIME, tzinfo=ZONE)


def date_utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


TEST_OPTION_EXPIRY = [date_utc(2014, 1, 3), date_utc(2014, 1, 3), date_utc(2015, 1, 3), date_utc(2017, 1, 3)]
TEST_TENOR = [2.0, 6.0, 7.0, 15.0]
TEST_FORWARD = 0.025
TEST_STRIKE = [0.02, 0.025, 0.03]

TOLERANCE_VOL = 1.0e-10


def plus_years(dt, years):
    return dt.replace(year=dt.year + years)


@pytest.fixture
def provider(sabr_param_shift_usd):
    return SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, DATE_TIME)


class TestConstruction:
    """Tests for provider construction and accessors."""

    def test_of(self, sabr_param_shift_usd, usd_convention):
        """Accessors return construction-time fields."""
        test = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, DATE_TIME)
        assert test.convention == usd_convention
        assert test.day_count == DayCount.ACT_ACT_ISDA
        assert test.parameters == sabr_param_shift_usd
        assert test.valuation_date_time == DATE_TIME
        assert test.valuation_date == DATE

    def test_of_date_time_zone(self, sabr_param_shift_usd, usd_convention):
        """Date, time and zone give the same provider as the combined date-time."""
        test1 = SabrParametersSwaptionVolatilities.of_date_time_zone(
            sabr_param_shift_usd, DATE, TIME, "Europe/London")
        assert test1.convention == usd_convention
        assert test1.day_count == DayCount.ACT_ACT_ISDA
        assert test1.parameters == sabr_param_shift_usd
        assert test1.valuation_date_time == DATE_TIME
        test2 = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, DATE_TIME)
        assert test1 == test2
        assert hash(test1) == hash(test2)

    def test_of_date_time_zone_tzinfo(self, sabr_param_shift_usd):
        """A tzinfo is accepted in place of a zone name."""
        test1 = SabrParametersSwaptionVolatilities.of_date_time_zone(sabr_param_shift_usd, DATE, TIME, ZONE)
        test2 = SabrParametersSwaptionVolatilities.of_date_time_zone(
            sabr_param_shift_usd, DATE, TIME, "Europe/London")
        assert test1 == test2
        for expiry in TEST_OPTION_EXPIRY:
            assert test1.volatility(expiry, 5.0, 0.02, TEST_FORWARD) == test2.volatility(expiry, 5.0, 0.02, TEST_FORWARD)

    def test_equality(self, sabr_param_shift_usd, sabr_param_usd):
        """Providers differ when parameters or valuation times differ."""
        test1 = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, DATE_TIME)
        test2 = SabrParametersSwaptionVolatilities.of(sabr_param_usd, DATE_TIME + timedelta(days=1))
        assert test1 != test2
        assert test1 != SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, DATE_TIME + timedelta(days=1))
        assert test1 != SabrParametersSwaptionVolatilities.of(sabr_param_usd, DATE_TIME)
        assert test1 == SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, DATE_TIME)

    def test_with_parameters(self, provider, sabr_param_usd):
        """with_parameters keeps valuation date-time and day count."""
        test = provider.with_parameters(sabr_param_usd)
        assert test.parameters == sabr_param_usd
        assert test.valuation_date_time == provider.valuation_date_time
        assert test.day_count == provider.day_count

    def test_immutable(self, provider):
        """Fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            provider.valuation_date_time = DATE_TIME + timedelta(days=1)

    def test_same_instant_other_zone_not_equal(self, sabr_param_shift_usd):
        """Valuation at one instant in two zones gives distinct providers."""
        new_york = datetime(2016, 2, 29, 22, 0, tzinfo=ZoneInfo("America/New_York"))
        utc = new_york.astimezone(timezone.utc)
        prov_ny = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, new_york, DayCount.THIRTY_360)
        prov_utc = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, utc, DayCount.THIRTY_360)
        assert prov_ny != prov_utc

        expiry = datetime(2016, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert prov_ny.relative_time(expiry) == pytest.approx((2 - 15 / 24) / 360)
        assert prov_utc.relative_time(expiry) == pytest.approx(9 / 24 / 360)

        same = SabrParametersSwaptionVolatilities.of(
            sabr_param_shift_usd, datetime(2016, 2, 29, 22, 0, tzinfo=ZoneInfo("America/New_York")),
            DayCount.THIRTY_360)
        assert same == prov_ny
        assert hash(same) == hash(prov_ny)

    def test_same_instant_other_zone_act_act(self, sabr_param_shift_usd):
        london = datetime(2015, 12, 31, 22, 0, tzinfo=ZONE)
        new_york = london.astimezone(ZoneInfo("America/New_York"))
        prov_london = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, london)
        prov_ny = SabrParametersSwaptionVolatilities.of(sabr_param_shift_usd, new_york)
        assert prov_london != prov_ny
        # New Year in London, still 2015 in New York
        expiry = datetime(2016, 1, 1, 3, 0, tzinfo=timezone.utc)
        assert prov_london.relative_time(expiry) == pytest.approx(1 / 365 - 19 / 24 / 366)
        assert prov_ny.relative_time(expiry) == pytest.approx(5 / 24 / 365)


class TestTimeConversion:
    """Tests for tenor and relative time."""

    def test_tenor(self, provider):
        """Tenor identity, antisymmetry and month-end snapping."""
        assert provider.tenor(DATE, DATE) == 0.0
        test2 = provider.tenor(DATE, DateUtils.add_tenor(DATE, "2Y"))
        test3 = provider.tenor(DATE, date(2012, 1, 3))
        assert test2 == -test3
        assert provider.tenor(DATE, date(2019, 2, 2)) == 5.0
        assert provider.tenor(DATE, date(2018, 12, 31)) == 5.0

    def test_relative_time(self, provider):
        """Relative time is zero at valuation and nearly antisymmetric."""
        assert provider.relative_time(DATE_TIME) == 0.0
        test2 = provider.relative_time(plus_years(DATE_TIME, 2))
        test3 = provider.relative_time(plus_years(DATE_TIME, -2))
        assert test2 == pytest.approx(-test3, abs=1e-2)

    def test_relative_time_other_zone(self, provider):
        """The same instant in another zone has zero relative time."""
        same_instant = DATE_TIME.astimezone(ZoneInfo("America/New_York"))
        assert provider.relative_time(same_instant) == pytest.approx(0.0, abs=1e-15)


class TestVolatility:
    """Tests for volatility delegation to the SABR formula."""

    def test_volatility(self, provider, sabr_param_shift_usd):
        """Provider volatility equals the formula at surface values."""
        for expiry, tenor in zip(TEST_OPTION_EXPIRY, TEST_TENOR):
            for strike in TEST_STRIKE:
                expiry_time = provider.relative_time(expiry)
                vol_expected = sabr_param_shift_usd.volatility(expiry_time, tenor, strike, TEST_FORWARD)
                vol_computed = provider.volatility(expiry, tenor, strike, TEST_FORWARD)
                assert vol_computed == pytest.approx(vol_expected, abs=TOLERANCE_VOL)

    def test_volatility_adjoint(self, provider):
        """Adjoint volatility matches the plain volatility."""
        for expiry, tenor in zip(TEST_OPTION_EXPIRY, TEST_TENOR):
            for strike in TEST_STRIKE:
                adjoint = provider.volatility_adjoint(expiry, tenor, strike, TEST_FORWARD)
                assert adjoint.volatility == pytest.approx(
                    provider.volatility(expiry, tenor, strike, TEST_FORWARD), abs=TOLERANCE_VOL)
                assert adjoint.d_alpha > 0

    def test_volatility_unshifted_parameters(self, sabr_param_usd):
        """Parameters without shift give the unshifted formula."""
        prov = SabrParametersSwaptionVolatilities.of(sabr_param_usd, DATE_TIME)
        expiry = TEST_OPTION_EXPIRY[2]
        expiry_time = prov.relative_time(expiry)
        assert sabr_param_usd.shift(expiry_time, 7.0) == 0.0
        assert prov.volatility(expiry, 7.0, 0.03, TEST_FORWARD) == pytest.approx(
            sabr_param_usd.volatility(expiry_time, 7.0, 0.03, TEST_FORWARD), abs=TOLERANCE_VOL)


class TestParameterSensitivity:
    """Tests for distribution of point sensitivities onto surface nodes."""

    def test_parameter_sensitivity(self, provider, usd_convention):
        """Each surface's node vector is its raw sensitivity times the component."""
        alpha_sensi, beta_sensi, rho_sensi, nu_sensi = 2.24, 3.45, -2.12, -0.56
        params = provider.parameters
        for expiry, tenor in zip(TEST_OPTION_EXPIRY, TEST_TENOR):
            expiry_time = provider.relative_time(expiry)
            point = SwaptionSabrSensitivity(
                usd_convention, expiry, tenor, "USD", alpha_sensi, beta_sensi, rho_sensi, nu_sensi)
            computed = provider.parameter_sensitivity(point)
            assert len(computed) == 4

            for surface, factor in [
                (params.alpha_surface, alpha_sensi),
                (params.beta_surface, beta_sensi),
                (params.rho_surface, rho_sensi),
                (params.nu_surface, nu_sensi),
            ]:
                raw = surface.z_value_parameter_sensitivity(expiry_time, tenor).sensitivity
                node = computed.get_sensitivity(surface.name, "USD").sensitivity
                assert len(node) == len(raw)
                np.testing.assert_allclose(node, raw * factor, rtol=0, atol=TOLERANCE_VOL)

    def test_parameter_sensitivity_excludes_shift(self, provider, usd_convention):
        """No sensitivity is produced for the shift surface or other currencies."""
        point = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[2], 5.0, "USD", 1.0, 1.0, 1.0, 1.0)
        computed = provider.parameter_sensitivity(point)
        shift_name = provider.parameters.shift_surface.name
        assert computed.find_sensitivity(shift_name, "USD") is None
        with pytest.raises(SensitivityNotFoundError):
            computed.get_sensitivity(provider.parameters.alpha_surface.name, "EUR")

    def test_parameter_sensitivity_zero_component(self, provider, usd_convention):
        """A zero component gives a zero vector, not a missing one."""
        point = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[2], 5.0, "USD", 1.0, 0.0, 1.0, 1.0)
        computed = provider.parameter_sensitivity(point)
        beta = computed.get_sensitivity(provider.parameters.beta_surface.name, "USD")
        assert np.all(beta.sensitivity == 0.0)

    def test_parameter_sensitivity_multi(self, provider, usd_convention):
        """Collection result equals the combination of single-point results."""
        points1 = [2.24, 3.45, -2.12, -0.56]
        points2 = [-0.145, 1.01, -5.0, -11.0]
        points3 = [1.3, -4.32, 2.1, -7.18]
        params = provider.parameters
        for tenor in TEST_TENOR:
            sensi1 = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[0], tenor, "USD", *points1)
            sensi2 = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[0], tenor, "USD", *points2)
            sensi3 = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[3], tenor, "USD", *points3)
            sensis = SwaptionSabrSensitivities.of([sensi1, sensi2, sensi3]).normalize()
            assert len(sensis) == 2

            computed = provider.parameter_sensitivity(sensis)
            expected = (provider.parameter_sensitivity(sensi1)
                        .combined_with(provider.parameter_sensitivity(sensi2))
                        .combined_with(provider.parameter_sensitivity(sensi3)))

            for surface in (params.alpha_surface, params.beta_surface, params.rho_surface, params.nu_surface):
                np.testing.assert_allclose(
                    computed.get_sensitivity(surface.name, "USD").sensitivity,
                    expected.get_sensitivity(surface.name, "USD").sensitivity,
                    rtol=0,
                    atol=TOLERANCE_VOL,
                )
            assert computed.equal_within_tolerance(expected, TOLERANCE_VOL)

    def test_parameter_sensitivity_unnormalized_collection(self, provider, usd_convention):
        """A collection is normalized internally, input order does not matter."""
        sensi1 = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[2], 5.0, "USD", 1.0, 2.0, 3.0, 4.0)
        sensi2 = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[3], 10.0, "USD", -1.0, 0.5, 0.2, 0.1)
        sensi3 = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[2], 5.0, "USD", 0.5, 0.5, 0.5, 0.5)
        forward = provider.parameter_sensitivity(SwaptionSabrSensitivities.of([sensi1, sensi2, sensi3]))
        backward = provider.parameter_sensitivity(SwaptionSabrSensitivities.of([sensi3, sensi2, sensi1]))
        assert forward.equal_within_tolerance(backward, TOLERANCE_VOL)

    def test_parameter_sensitivity_currencies(self, provider, usd_convention):
        """Points in different currencies stay in separate entries."""
        usd = SwaptionSabrSensitivity(usd_convention, TEST_OPTION_EXPIRY[2], 5.0, "USD", 1.0, 1.0, 1.0, 1.0)
        eur = usd.with_currency("EUR")
        computed = provider.parameter_sensitivity(SwaptionSabrSensitivities.of([usd, eur]))
        assert len(computed) == 8
        alpha_name = provider.parameters.alpha_surface.name
        np.testing.assert_array_equal(
            computed.get_sensitivity(alpha_name, "USD").sensitivity,
            computed.get_sensitivity(alpha_name, "EUR").sensitivity,
        )

    def test_parameter_sensitivity_empty_collection(self, provider):
        """An empty collection gives an empty bundle."""
        computed = provider.parameter_sensitivity(SwaptionSabrSensitivities.empty())
        assert len(computed) == 0


class TestPrice:
    """Tests for shifted Black prices at the SABR volatility."""

    def test_price_uses_shift(self, provider):
        """Price matches shifted Black with the shift surface's shift."""
        expiry = TEST_OPTION_EXPIRY[3]
        vol = provider.volatility(expiry, 5.0, 0.02, TEST_FORWARD)
        expiry_time = provider.relative_time(expiry)
        expected = shifted_black_price(TEST_FORWARD, 0.02, expiry_time, vol, PutCall.CALL, 0.02)
        assert provider.price(expiry, 5.0, PutCall.CALL, 0.02, TEST_FORWARD, vol) == pytest.approx(expected)

    def test_price_delta_finite_difference(self, provider):
        """Delta agrees with a central difference of the price."""
        expiry = TEST_OPTION_EXPIRY[3]
        vol = 0.25
        eps = 1e-6
        for put_call in (PutCall.CALL, PutCall.PUT):
            up = provider.price(expiry, 5.0, put_call, 0.02, TEST_FORWARD + eps, vol)
            down = provider.price(expiry, 5.0, put_call, 0.02, TEST_FORWARD - eps, vol)
            delta = provider.price_delta(expiry, 5.0, put_call, 0.02, TEST_FORWARD, vol)
            assert delta == pytest.approx((up - down) / (2 * eps), rel=1e-5)

    def test_price_vega_finite_difference(self, provider):
        """Vega agrees with a central difference of the price."""
        expiry = TEST_OPTION_EXPIRY[3]
        eps = 1e-6
        up = provider.price(expiry, 5.0, PutCall.PUT, 0.03, TEST_FORWARD, 0.25 + eps)
        down = provider.price(expiry, 5.0, PutCall.PUT, 0.03, TEST_FORWARD, 0.25 - eps)
        vega = provider.price_vega(expiry, 5.0, PutCall.PUT, 0.03, TEST_FORWARD, 0.25)
        assert vega == pytest.approx((up - down) / (2 * eps), rel=1e-5)

    def test_gamma_theta_signs(self, provider):
        """Gamma is positive and theta negative before expiry."""
        expiry = TEST_OPTION_EXPIRY[2]
        assert provider.price_gamma(expiry, 5.0, PutCall.CALL, 0.025, TEST_FORWARD, 0.25) > 0
        assert provider.price_theta(expiry, 5.0, PutCall.CALL, 0.025, TEST_FORWARD, 0.25) < 0
