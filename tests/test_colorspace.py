# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for colour space conversions (sRGB ↔ XYZ ↔ CAM16-UCS) and CCT."""

import numpy as np
import pytest

from censor.engine.colorspace import (
    CCT_MAX,
    CCT_MIN,
    CCT_STEP,
    DEFAULT_VIEWING,
    DEFAULT_WHITE_TEMPERATURE,
    ViewingConditions,
    adapt_to_viewing_white,
    appearance_from_polar,
    cct_from_tristimulus,
    daylight_xy,
    estimate_cct,
    from_appearance,
    linear_to_srgb,
    parse_hex,
    planckian_xy,
    rgb_to_hex,
    srgb_to_linear,
    temperature_score,
    to_appearance,
    to_tristimulus,
    tristimulus_to_rgb,
    xy_to_uv,
    xyz_to_xy,
)
from censor.errors import InvalidColour, OutOfLocusRange
from censor.schema import AppearanceCoord, Colour


def _random_rgb(n=50, seed=42):
    return np.random.RandomState(seed).randint(0, 256, size=(n, 3))


class TestSRGBLinearRoundtrip:
    """sRGB ↔ Linear RGB conversions must roundtrip accurately."""

    def test_roundtrip_mid_grey(self):
        srgb = np.array([0.5, 0.5, 0.5])
        np.testing.assert_allclose(linear_to_srgb(srgb_to_linear(srgb)), srgb, atol=1e-10)

    def test_gamma_threshold(self):
        """Values below 0.04045 use the linear segment."""
        linear = srgb_to_linear(np.array([0.03]))
        assert float(linear[0]) == pytest.approx(0.03 / 12.92, abs=1e-10)

    def test_batch_roundtrip(self):
        srgb = np.random.RandomState(7).random((100, 3))
        np.testing.assert_allclose(linear_to_srgb(srgb_to_linear(srgb)), srgb, atol=1e-10)


class TestTristimulus:
    """Encoded sRGB ↔ XYZ."""

    def test_white_has_unit_luminance(self):
        xyz = to_tristimulus(np.array([255, 255, 255]))
        assert xyz[1] == pytest.approx(100.0, abs=1e-9)
        np.testing.assert_allclose(xyz, [95.05, 100.0, 108.9], atol=0.01)

    def test_black_is_zero(self):
        np.testing.assert_allclose(to_tristimulus(np.array([0, 0, 0])), 0.0, atol=1e-12)

    def test_normalized_input(self):
        a = to_tristimulus(np.array([255, 128, 0]))
        b = to_tristimulus(np.array([1.0, 128 / 255, 0.0]), normalized=True)
        np.testing.assert_allclose(a, b, atol=1e-9)

    def test_rgb_roundtrip(self):
        rgb = _random_rgb()
        np.testing.assert_array_equal(tristimulus_to_rgb(to_tristimulus(rgb)), rgb)

    @pytest.mark.parametrize("rgb", [[256, 0, 0], [-1, 0, 0], [1.5, 0, 0], [np.nan, 0, 0]])
    def test_invalid_components(self, rgb):
        with pytest.raises(InvalidColour):
            to_tristimulus(np.array(rgb, dtype=np.float64))

    def test_wrong_shape(self):
        with pytest.raises(InvalidColour):
            to_tristimulus(np.array([1, 2]))

    def test_normalized_out_of_range(self):
        with pytest.raises(InvalidColour):
            to_tristimulus(np.array([0.5, 1.2, 0.0]), normalized=True)


class TestHex:

    def test_parse_with_hash(self):
        assert parse_hex("#1a1c2c") == (26, 28, 44)

    def test_parse_without_hash(self):
        assert parse_hex("1A1C2C") == (26, 28, 44)

    def test_parse_strips_whitespace(self):
        assert parse_hex("  #FFFFFF\n") == (255, 255, 255)

    @pytest.mark.parametrize("bad", ["#12345", "#GGGGGG", "#1234567", "", "##123456"])
    def test_parse_invalid(self, bad):
        with pytest.raises(InvalidColour):
            parse_hex(bad)

    def test_format_uppercase(self):
        assert rgb_to_hex((26, 28, 44)) == "#1A1C2C"


class TestChromaticity:

    def test_d65_daylight(self):
        x, y = daylight_xy(6504.0)
        assert x == pytest.approx(0.3127, abs=1e-3)
        assert y == pytest.approx(0.3291, abs=1e-3)

    def test_daylight_out_of_range(self):
        with pytest.raises(ValueError):
            daylight_xy(3000.0)

    def test_zero_luminance_xy(self):
        np.testing.assert_allclose(xyz_to_xy(np.zeros(3)), [0.0, 0.0])

    def test_uv_of_equal_energy(self):
        u, v = xy_to_uv(np.array([1 / 3, 1 / 3]))
        assert u == pytest.approx(4 / 19, abs=1e-9)
        assert v == pytest.approx(6 / 19, abs=1e-9)

    def test_planckian_2000k(self):
        """Warm black body sits near (0.527, 0.413)."""
        x, y = planckian_xy(np.array([2000.0]))[0]
        assert x == pytest.approx(0.527, abs=0.01)
        assert y == pytest.approx(0.413, abs=0.01)


class TestAppearance:
    """XYZ ↔ CAM16-UCS under the default viewing conditions."""

    def test_black_is_origin(self):
        np.testing.assert_allclose(to_appearance(np.zeros(3)), [0.0, 0.0, 0.0], atol=1e-9)

    def test_adopted_white_lightness(self):
        jab = to_appearance(np.array(DEFAULT_VIEWING.white_xyz))
        assert jab[0] == pytest.approx(100.0, abs=1e-6)

    def test_srgb_white_is_light_and_near_neutral(self):
        jab = to_appearance(to_tristimulus(np.array([255, 255, 255])))
        assert jab[0] == pytest.approx(100.0, abs=3.0)
        assert np.hypot(jab[1], jab[2]) < 10.0

    def test_roundtrip(self):
        xyz = to_tristimulus(_random_rgb())
        np.testing.assert_allclose(from_appearance(to_appearance(xyz)), xyz, atol=1e-6)

    def test_roundtrip_black(self):
        np.testing.assert_allclose(from_appearance(np.zeros(3)), np.zeros(3), atol=1e-9)

    def test_grey_ramp_is_monotonic(self):
        greys = np.repeat(np.arange(0, 256, 15)[:, None], 3, axis=1)
        J = to_appearance(to_tristimulus(greys))[:, 0]
        assert np.all(np.diff(J) > 0)

    def test_custom_viewing_changes_coordinates(self):
        xyz = to_tristimulus(np.array([200, 120, 40]))
        warm = ViewingConditions.daylight(4000.0)
        assert not np.allclose(to_appearance(xyz, warm), to_appearance(xyz))

    def test_from_polar(self):
        jab = appearance_from_polar(50.0, 10.0, np.pi / 2)
        np.testing.assert_allclose(jab, [50.0, 0.0, 10.0], atol=1e-12)

    def test_from_polar_broadcasts(self):
        jab = appearance_from_polar(np.linspace(0, 100, 5), 20.0, 0.0)
        assert jab.shape == (5, 3)


class TestCCT:

    def test_display_white_tristimulus_is_d65(self):
        estimate = cct_from_tristimulus(to_tristimulus(np.array([255, 255, 255])))
        assert estimate.kelvin == pytest.approx(6500.0, abs=300.0)
        assert estimate.weight > 0.0

    def test_viewing_white_locus_temperature(self):
        estimate = cct_from_tristimulus(np.array(DEFAULT_VIEWING.white_xyz))
        assert estimate.kelvin == pytest.approx(DEFAULT_WHITE_TEMPERATURE, abs=CCT_STEP)

    def test_white_matches_viewing_white(self):
        white = Colour.from_hex("#FFFFFF")
        estimate = estimate_cct(white.appearance)
        assert estimate.kelvin == pytest.approx(DEFAULT_WHITE_TEMPERATURE, abs=CCT_STEP)
        assert estimate.weight > 0.0

    def test_white_follows_custom_viewing(self):
        warm = ViewingConditions.daylight(4000.0)
        jab = to_appearance(to_tristimulus(np.array([255, 255, 255])), warm)
        estimate = estimate_cct(AppearanceCoord(*jab), warm)
        assert estimate.kelvin == pytest.approx(4000.0, abs=300.0)

    def test_adaptation_maps_display_white(self):
        white = adapt_to_viewing_white(to_tristimulus(np.array([255, 255, 255])))
        np.testing.assert_allclose(white, DEFAULT_VIEWING.white_xyz, rtol=1e-9)

    def test_adaptation_keeps_black(self):
        np.testing.assert_allclose(adapt_to_viewing_white(np.zeros(3)), 0.0, atol=1e-12)

    def test_black_has_no_temperature(self):
        with pytest.raises(OutOfLocusRange):
            estimate_cct(AppearanceCoord(0.0, 0.0, 0.0))

    def test_green_is_off_locus(self):
        with pytest.raises(OutOfLocusRange):
            cct_from_tristimulus(to_tristimulus(np.array([0, 255, 0])))

    def test_warm_colour_is_warmer_than_white(self):
        orange = cct_from_tristimulus(to_tristimulus(np.array([255, 200, 150])))
        white = cct_from_tristimulus(to_tristimulus(np.array([255, 255, 255])))
        assert orange.kelvin < white.kelvin
        assert orange.score > white.score

    def test_score_bounds(self):
        assert temperature_score(CCT_MIN) == pytest.approx(1.0)
        assert temperature_score(CCT_MAX) == pytest.approx(0.0)
