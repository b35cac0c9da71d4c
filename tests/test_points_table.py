"""Tests for the points table and hypothetical re-ranking."""

import pytest

from nrr_api.models import TeamId, TeamRecord
from nrr_api.points_table import (
    PointsTable,
    current_standings,
    resolve_standings,
    target_rate_for_rank,
)

RR = TeamId("RR")
DC = TeamId("DC")


class TestPointsTable:
    def test_lookup_and_order(self, table):
        assert len(table) == 5
        assert table.team_ids == ["CSK", "RCB", "DC", "RR", "MI"]
        assert table.get(RR).name == "Rajasthan Royals"

    def test_resolve_id_by_code_or_name(self, table):
        assert table.resolve_id("rr") == "RR"
        assert table.resolve_id("  Delhi Capitals ") == "DC"
        assert table.resolve_id("Punjab Kings") is None
        assert table.resolve_id("") is None

    def test_duplicate_team_rejected(self, table):
        rr = table.get(RR)
        with pytest.raises(ValueError, match="Duplicate"):
            PointsTable([rr, rr])


class TestCurrentStandings:
    def test_sorted_by_points_then_nrr(self, table):
        rows = current_standings(table)
        assert [r.team for r in rows] == ["CSK", "RCB", "DC", "RR", "MI"]
        assert [r.pos for r in rows] == [1, 2, 3, 4, 5]


class TestResolveStandings:
    def test_win_moves_team_up(self, table):
        rank, snapshot = resolve_standings(table, RR, DC, 0.5, 0.2)
        assert rank == 3
        assert [r.team for r in snapshot] == ["CSK", "RCB", "RR", "DC", "MI"]
        assert snapshot[2].points == 8

    def test_opponent_rate_is_replaced(self, table):
        # DC keeps 8 points but its new NRR drops below RR's
        rank, snapshot = resolve_standings(table, RR, DC, 0.30, 0.25)
        assert rank == 3
        assert snapshot[3].team == "DC"
        assert snapshot[3].nrr == 0.25

    def test_better_rate_than_rcb(self, table):
        rank, _ = resolve_standings(table, RR, DC, 0.6, 0.2)
        assert rank == 2

    def test_exact_tie_keeps_table_order(self, table):
        # RCB is listed before RR, so an equal NRR does not lift RR above it
        rank, _ = resolve_standings(table, RR, DC, 0.597, 0.2)
        assert rank == 3

    def test_table_is_not_modified(self, table):
        resolve_standings(table, RR, DC, 2.0, -2.0)
        assert table.get(RR).points == 6
        assert table.get(DC).nrr == 0.319

    def test_unknown_acting_team(self, table):
        with pytest.raises(ValueError):
            resolve_standings(table, TeamId("PBKS"), DC, 0.1, 0.1)

    def test_deterministic(self, table):
        a = resolve_standings(table, RR, DC, 0.4, 0.3)
        b = resolve_standings(table, RR, DC, 0.4, 0.3)
        assert a == b


class TestTargetRateForRank:
    def test_team_at_position_is_level_on_points(self, table):
        assert target_rate_for_rank(table, RR, 3) == 0.319
        assert target_rate_for_rank(table, RR, 2) == 0.597

    def test_falls_back_to_best_level_team(self, table):
        # CSK (10 pts) holds 1st, so the best team level on 8 points sets the bar
        assert target_rate_for_rank(table, RR, 1) == 0.597

    def test_no_level_team(self):
        t = PointsTable([
            TeamRecord(TeamId("AA"), "Alpha", 5, 5, 0, 10, 1.0, 900, 100.0, 800, 100.0),
            TeamRecord(TeamId("BB"), "Beta", 5, 0, 5, 0, -1.0, 800, 100.0, 900, 100.0),
        ])
        assert target_rate_for_rank(t, TeamId("BB"), 2) == float("-inf")
