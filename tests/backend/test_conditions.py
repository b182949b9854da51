"""Tests for weather code classification."""

import pytest

from weathercard.services.conditions import (
    RAIN_CODES,
    SNOW_CODES,
    STORM_CODES,
    IconCategory,
    classify,
)
from weathercard.services.forecast_owm import synthesize_condition


class TestClassify:
    def test_clear_sky_is_sunny(self):
        assert classify(800) is IconCategory.SUNNY

    @pytest.mark.parametrize("code", [801, 802, 803, 804])
    def test_cloud_codes(self, code):
        assert classify(code) is IconCategory.CLOUDY

    def test_thunderstorm(self):
        assert classify(201) is IconCategory.STORM

    def test_snow(self):
        assert classify(611) is IconCategory.SNOW

    def test_every_listed_code_maps_to_its_group(self):
        for code in RAIN_CODES:
            assert classify(code) is IconCategory.RAIN
        for code in STORM_CODES:
            assert classify(code) is IconCategory.STORM
        for code in SNOW_CODES:
            assert classify(code) is IconCategory.SNOW

    @pytest.mark.parametrize("code", [999, 0, -1, 701, 781, 203, 10**9])
    def test_unknown_codes_fall_back_to_cloudy(self, code):
        assert classify(code) is IconCategory.CLOUDY

    def test_category_values_are_plain_strings(self):
        assert classify(500).value == "rain"


class TestSynthesizeCondition:
    def test_heavy_precipitation_is_rain(self):
        condition = synthesize_condition(cloud_cover=10, precipitation=30.5)
        assert (condition.code, condition.text) == (500, "Rain")

    def test_any_precipitation_up_to_30_is_light_rain(self):
        assert synthesize_condition(95, 30).code == 300
        assert synthesize_condition(0, 0.1).text == "Light rain"

    def test_precipitation_beats_cloud_cover(self):
        assert synthesize_condition(100, 5).code == 300

    def test_overcast(self):
        condition = synthesize_condition(90, 0)
        assert (condition.code, condition.text) == (804, "Overcast")
        assert classify(condition.code) is IconCategory.CLOUDY

    def test_cloud_thresholds_are_exclusive(self):
        assert synthesize_condition(80, 0).code == 802
        assert synthesize_condition(50, 0).code == 801
        assert synthesize_condition(20, 0).code == 800

    def test_partly_cloudy_and_few_clouds(self):
        assert synthesize_condition(51, 0).text == "Partly cloudy"
        assert synthesize_condition(21, 0).text == "Few clouds"

    def test_clear_sky(self):
        condition = synthesize_condition(0, 0)
        assert (condition.code, condition.text) == (800, "Clear sky")
        assert classify(condition.code) is IconCategory.SUNNY
