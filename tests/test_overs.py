"""Tests for overs notation handling."""

import pytest

from nrr_api.overs import (
    balls_to_overs,
    format_overs,
    overs_to_balls,
    parse_overs,
    to_decimal_overs,
    to_mixed_radix_overs,
)


class TestToDecimalOvers:
    def test_whole_overs_unchanged(self):
        assert to_decimal_overs(20) == 20
        assert to_decimal_overs(126.0) == 126

    def test_balls_are_sixths(self):
        assert to_decimal_overs(128.2) == pytest.approx(128 + 2 / 6)
        assert to_decimal_overs(137.1) == pytest.approx(137 + 1 / 6)
        assert to_decimal_overs(0.1) == pytest.approx(1 / 6)

    def test_five_balls(self):
        assert to_decimal_overs(19.5) == pytest.approx(19 + 5 / 6)


class TestToMixedRadixOvers:
    def test_back_to_balls(self):
        assert to_mixed_radix_overs(128 + 2 / 6) == pytest.approx(128.2)
        assert to_mixed_radix_overs(18.649365234375) == pytest.approx(18.4)

    def test_full_over_carries(self):
        # 18.99 decimal is 5.94 balls -> rounds to a full over
        assert to_mixed_radix_overs(18.99) == pytest.approx(19.0)

    def test_round_trip_valid_values(self):
        for whole in (0, 1, 19, 128, 155):
            for balls in range(6):
                x = whole + balls / 10
                assert to_mixed_radix_overs(to_decimal_overs(x)) == pytest.approx(x, abs=0.01)


class TestOversToBalls:
    def test_strings(self):
        assert overs_to_balls("19.4") == 118
        assert overs_to_balls("20.0") == 120
        assert overs_to_balls("20") == 120
        assert overs_to_balls("0.1") == 1

    def test_float_and_int(self):
        assert overs_to_balls(128.2) == 770
        assert overs_to_balls(7) == 42

    def test_rejects_ball_digit_above_five(self):
        with pytest.raises(ValueError, match="balls part must be 0-5"):
            overs_to_balls("19.6")

    def test_rejects_negative_and_garbage(self):
        with pytest.raises(ValueError):
            overs_to_balls("-1.0")
        with pytest.raises(ValueError):
            overs_to_balls("abc")
        with pytest.raises(ValueError):
            overs_to_balls("")
        with pytest.raises(ValueError):
            overs_to_balls(None)


class TestParseOvers:
    def test_parse(self):
        assert parse_overs("18.4") == pytest.approx(18.4)
        assert parse_overs(20) == 20.0

    def test_balls_to_overs(self):
        assert balls_to_overs(119) == pytest.approx(19.5)
        assert balls_to_overs(0) == 0.0

    def test_format(self):
        assert format_overs(18.4) == "18.4"
        assert format_overs(0.1) == "0.1"
