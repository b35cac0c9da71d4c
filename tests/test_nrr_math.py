"""Tests for NRR evaluation and post-match projection."""

import pytest

from nrr_api.models import TeamId
from nrr_api.nrr_math import net_rate, project_rate
from nrr_api.overs import balls_to_overs


class TestNetRate:
    def test_rajasthan_current_nrr(self):
        assert net_rate(1066, 128.2, 1094, 137.1) == pytest.approx(0.331, abs=1e-3)

    def test_symmetric_match_is_zero(self):
        assert net_rate(160, 20, 160, 20) == pytest.approx(0.0)

    def test_stored_nrr_matches_aggregates(self, table):
        for r in table:
            assert net_rate(r.runs_for, r.overs_for, r.runs_against, r.overs_against) == pytest.approx(r.nrr, abs=2e-3)


class TestProjectRate:
    def test_rajasthan_defending_120(self, table):
        rr = table.get(TeamId("RR"))
        assert project_rate(rr, 120, 20, 112, 20) == pytest.approx(0.321, abs=1e-3)
        assert project_rate(rr, 120, 20, 0, 20) == pytest.approx(1.033, abs=1e-3)

    def test_one_ball_chase(self, table):
        rr = table.get(TeamId("RR"))
        assert project_rate(rr, 120, 0.1, 119, 20) == pytest.approx(1.496, abs=1e-3)

    def test_more_runs_conceded_lowers_rate(self, table):
        rr = table.get(TeamId("RR"))
        rates = [project_rate(rr, 120, 20, x, 20) for x in range(0, 120, 10)]
        assert rates == sorted(rates, reverse=True)

    def test_does_not_touch_record(self, table):
        dc = table.get(TeamId("DC"))
        before = (dc.runs_for, dc.overs_for, dc.runs_against, dc.overs_against, dc.nrr)
        project_rate(dc, 119, 20, 120, 18.4)
        assert (dc.runs_for, dc.overs_for, dc.runs_against, dc.overs_against, dc.nrr) == before

    def test_exact_totals(self, table):
        rr = table.get(TeamId("RR"))
        assert project_rate(rr, 120, 20, 112, 20, reread_totals=False) == pytest.approx(0.3221, abs=1e-4)
        assert project_rate(rr, 120, 0.1, 119, 20, reread_totals=False) == pytest.approx(1.5117, abs=1e-4)

    def test_exact_totals_fall_with_every_ball_of_a_chase(self, table):
        rr = table.get(TeamId("RR"))
        rates = [project_rate(rr, 120, balls_to_overs(b), 119, 20, reread_totals=False) for b in range(1, 121)]
        assert all(a > b for a, b in zip(rates, rates[1:]))
