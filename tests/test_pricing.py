"""
Tests for service-line time/price aggregation.
"""
import pytest

from calculations import pricing


class TestParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [(1.5, 1.5), (2, 2.0), ("1.5", 1.5), ("1.5h", 1.5), (" .5", 0.5), ("abc", None), ("", None), (None, None), (True, None)],
    )
    def test_parse_float(self, raw, expected):
        assert pricing.parse_float(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [(3, 3), ("3", 3), ("2.7", 2), (2.9, 2), ("x", None), (None, None)],
    )
    def test_parse_int(self, raw, expected):
        assert pricing.parse_int(raw) == expected

    def test_empty_string_line_rate_means_no_override(self):
        assert pricing.line_rate("") is None
        assert pricing.line_rate(None) is None
        assert pricing.line_rate("80") == 80.0


class TestPriceLine:
    def test_defaults_for_missing_duration_and_quantity(self):
        line = pricing.price_line({"beschreibung": "Beratung"}, 100.0)
        assert line.dauer_pro_einheit == 0.0
        assert line.anzahl == 1
        assert line.gesamtdauer == 0.0
        assert line.preis == 0.0

    def test_zero_quantity_counts_as_one(self):
        line = pricing.price_line({"dauer_pro_einheit": 2, "anzahl": 0}, 50.0)
        assert line.anzahl == 1
        assert line.gesamtdauer == 2.0
        assert line.preis == 100.0

    def test_own_rate_overrides_base_rate(self):
        line = pricing.price_line({"dauer_pro_einheit": 2, "anzahl": 3, "stundensatz": 80}, 100.0)
        assert line.stundensatz == 80.0
        assert line.preis == 480.0

    def test_empty_own_rate_falls_back_to_base_rate(self):
        line = pricing.price_line({"dauer_pro_einheit": 1, "stundensatz": ""}, 100.0)
        assert line.stundensatz is None
        assert line.preis == 100.0

    def test_empty_info_is_stored_as_null(self):
        assert pricing.price_line({"info": ""}, 1.0).info is None
        assert pricing.price_line({"info": "vor Ort"}, 1.0).info == "vor Ort"


class TestSummarize:
    @pytest.mark.parametrize(
        "lines, base_rate, hours, price",
        [
            ([{"dauer_pro_einheit": 1, "anzahl": 1}], 90.0, 1.0, 90.0),
            (
                [
                    {"dauer_pro_einheit": "1.5", "anzahl": 2},
                    {"dauer_pro_einheit": 2, "anzahl": "3", "stundensatz": "80"},
                    {"dauer_pro_einheit": 1, "stundensatz": ""},
                ],
                100.0,
                10.0,
                880.0,
            ),
            (
                [
                    {"dauer_pro_einheit": 0.25, "anzahl": 4, "stundensatz": 120},
                    {"dauer_pro_einheit": "kaputt", "anzahl": 5},
                ],
                60.0,
                1.0,
                120.0,
            ),
        ],
    )
    def test_totals_are_sums_over_lines(self, lines, base_rate, hours, price):
        totals = pricing.summarize(lines, base_rate)
        assert totals.gesamtzeit == pytest.approx(hours)
        assert totals.gesamtpreis == pytest.approx(price)
        assert totals.gesamtzeit == pytest.approx(sum(line.gesamtdauer for line in totals.lines))
        assert totals.gesamtpreis == pytest.approx(sum(line.preis for line in totals.lines))

    def test_lines_keep_input_order(self):
        totals = pricing.summarize([{"beschreibung": "a"}, {"beschreibung": "b"}], 1.0)
        assert [line.beschreibung for line in totals.lines] == ["a", "b"]


class TestOversizedNumbers:
    HUGE = 10 ** 400

    def test_huge_integer_is_unusable_not_an_error(self):
        assert pricing.parse_float(self.HUGE) is None
        assert pricing.parse_float("1" + "0" * 400) is None

    def test_huge_duration_counts_as_zero(self):
        line = pricing.price_line({"dauer_pro_einheit": self.HUGE, "anzahl": 2}, 100.0)
        assert line.gesamtdauer == 0.0

    def test_huge_line_rate_falls_back_to_base_rate(self):
        line = pricing.price_line({"dauer_pro_einheit": 1, "stundensatz": self.HUGE}, 100.0)
        assert line.preis == 100.0

    def test_product_that_overflows_is_rejected(self):
        with pytest.raises(pricing.PricingError):
            pricing.price_line({"dauer_pro_einheit": 1e200, "stundensatz": 1e200}, 1.0)

    def test_huge_quantity_is_rejected(self):
        with pytest.raises(pricing.PricingError):
            pricing.summarize([{"dauer_pro_einheit": 1, "anzahl": self.HUGE}], 1.0)

    def test_sum_that_overflows_is_rejected(self):
        lines = [{"dauer_pro_einheit": 1e308, "stundensatz": 1}] * 2
        with pytest.raises(pricing.PricingError):
            pricing.summarize(lines, 1.0)
