"""Tests for human-readable requirement reports."""

import pytest

from nrr_api.models import BattingFirstRange
from nrr_api.points_table import current_standings
from nrr_api.report import render_infeasible, render_requirement, render_standings, result_to_dict
from nrr_api.solver import solve_requirement


class TestRenderRequirement:
    def test_rcb_batting_first(self, table, make_query):
        q = make_query("RR", "RCB", 80, 3, strategy="threshold")
        out = render_requirement(table, q, solve_requirement(table, q))
        assert out["message"] == (
            "If Rajasthan Royals scores 80 runs in 20 overs, Rajasthan Royals needs to restrict "
            "Royal Challengers Bangalore between 0 to 69 runs in 20 overs."
        )
        assert out["nrr_message"] == "Revised NRR of Rajasthan Royals will be between 0.325 to 0.764."

    def test_rcb_bowling_first(self, table, make_query):
        q = make_query("RR", "RCB", 79, 3, scenario="bowling_first", strategy="threshold")
        out = render_requirement(table, q, solve_requirement(table, q))
        assert out["message"] == "Rajasthan Royals needs to chase 80 runs between 0.1 and 18.3 overs."
        assert out["nrr_message"] == "Revised NRR for Rajasthan Royals will be between 0.323 to 1.440."

    def test_none_is_rejected(self, table, make_query):
        with pytest.raises(ValueError):
            render_requirement(table, make_query("RR", "DC", 120, 1), None)


class TestRenderInfeasible:
    def test_batting_first(self, table, make_query):
        msg = render_infeasible(table, make_query("RR", "DC", 120, 1), 2)
        assert msg == (
            "Impossible for Rajasthan Royals to finish exactly at position 1 "
            "(even restricting Delhi Capitals to 0, the best reachable position is 2)."
        )

    def test_bowling_first(self, table, make_query):
        msg = render_infeasible(table, make_query("MI", "CSK", 150, 4, scenario="bowling_first"), 5)
        assert "fastest possible chase" in msg


class TestSerialization:
    def test_standings_lines(self, table):
        lines = render_standings(current_standings(table))
        assert lines[0] == "1. Chennai Super Kings - Points: 10, NRR: 0.771"
        assert lines[-1] == "5. Mumbai Indians - Points: 4, NRR: -1.750"

    def test_batting_result_dict(self):
        d = result_to_dict(BattingFirstRange(0, 112, 0.32128, 1.03314, -0.5685, -0.1027))
        assert d["scenario"] == "batting_first"
        assert (d["restrict_min"], d["restrict_max"]) == (0, 112)
        assert d["nrr_min"] == 0.321

    def test_nothing_to_serialize(self):
        with pytest.raises(ValueError):
            result_to_dict(None)
