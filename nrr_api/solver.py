# nrr_api/solver.py
from __future__ import annotations

from typing import Callable, Optional, Tuple

from nrr_api.models import (
    BattingFirstRange,
    BowlingFirstRange,
    RankStrategy,
    RequirementQuery,
    RequirementResult,
    TeamId,
)
from nrr_api.nrr_math import project_rate
from nrr_api.overs import to_mixed_radix_overs
from nrr_api.points_table import PointsTable, resolve_standings, target_rate_for_rank

MIN_CHASE_OVERS = 0.1  # one ball
CHASE_PRECISION_OVERS = 0.01

# free variable -> (acting team NRR, opponent NRR)
RateFn = Callable[[float], Tuple[float, float]]
Check = Callable[[float], bool]


def _make_checks(
    table: PointsTable,
    acting: TeamId,
    opponent: TeamId,
    desired_rank: int,
    strategy: RankStrategy,
    rates: RateFn,
) -> Tuple[Check, Check]:
    """
    Returns (at_or_better, exact):
      at_or_better(x): rank <= desired_rank  (phase 1)
      exact(x):        rank == desired_rank  (phase 2)
    """
    if strategy == "live":
        def rank_at(x: float) -> int:
            own, opp = rates(x)
            rank, _ = resolve_standings(table, acting, opponent, own, opp)
            return rank

        return (lambda x: rank_at(x) <= desired_rank), (lambda x: rank_at(x) == desired_rank)

    if strategy == "threshold":
        target = target_rate_for_rank(table, acting, desired_rank)
        return (lambda x: rates(x)[0] > target), (lambda x: True)

    raise ValueError(f"Invalid rank strategy: {strategy}")


def _highest_int(lo: int, hi: int, check: Check) -> int:
    """Largest x in [lo, hi] passing check; check(lo) must hold."""
    best = lo
    while lo <= hi:
        mid = (lo + hi) // 2
        if check(mid):
            best = mid
            lo = mid + 1
        else:
            hi = mid - 1
    return best


def _lowest_int(lo: int, hi: int, check: Check) -> int:
    """Smallest x in [lo, hi] passing check; check(hi) must hold."""
    best = hi
    while lo <= hi:
        mid = (lo + hi) // 2
        if check(mid):
            best = mid
            hi = mid - 1
        else:
            lo = mid + 1
    return best


def _highest_float(lo: float, hi: float, check: Check, precision: float) -> float:
    if check(hi):
        return hi
    best = lo
    while hi - lo > precision:
        mid = (lo + hi) / 2
        if check(mid):
            best = mid
            lo = mid
        else:
            hi = mid
    return best


def _lowest_float(lo: float, hi: float, check: Check, precision: float) -> float:
    if check(lo):
        return lo
    best = hi
    while hi - lo > precision:
        mid = (lo + hi) / 2
        if check(mid):
            best = mid
            hi = mid
        else:
            lo = mid
    return best


def _batting_rates(table: PointsTable, query: RequirementQuery) -> RateFn:
    own = table.get(query.acting_team)
    opp = table.get(query.opponent_team)
    runs, overs = query.runs, query.match_overs
    reread = query.strategy == "threshold"

    def rates(conceded: float) -> Tuple[float, float]:
        return (
            project_rate(own, runs, overs, conceded, overs, reread_totals=reread),
            project_rate(opp, conceded, overs, runs, overs, reread_totals=reread),
        )

    return rates


def _bowling_rates(table: PointsTable, query: RequirementQuery) -> RateFn:
    own = table.get(query.acting_team)
    opp = table.get(query.opponent_team)
    opp_runs, overs = query.runs, query.match_overs
    chase_runs = opp_runs + 1
    threshold = query.strategy == "threshold"

    def rates(chase_overs: float) -> Tuple[float, float]:
        if threshold:
            # threshold figures take the decimal probe as-is
            played = chase_overs
        else:
            # searched in decimal, evaluated at one-ball resolution
            played = to_mixed_radix_overs(chase_overs)
        return (
            project_rate(own, chase_runs, played, opp_runs, overs, reread_totals=threshold),
            project_rate(opp, opp_runs, overs, chase_runs, played, reread_totals=threshold),
        )

    return rates


def solve_batting_first(table: PointsTable, query: RequirementQuery) -> Optional[BattingFirstRange]:
    """
    Acting team bats first and makes query.runs in query.match_overs.
    Find the range of opponent scores (0..runs-1, same overs) that leaves the
    acting team exactly at query.desired_rank. None if no such score exists.
    """
    rates = _batting_rates(table, query)
    at_or_better, exact = _make_checks(
        table, query.acting_team, query.opponent_team, query.desired_rank, query.strategy, rates
    )

    lo, hi = 0, query.runs - 1
    if hi < lo:
        return None

    # If even restricting opponent to 0 doesn't reach the rank -> impossible
    if not at_or_better(lo):
        return None
    runs_max = _highest_int(lo, hi, at_or_better)

    # Worst admissible score already overshoots -> no score gives exactly this rank
    if not exact(runs_max):
        return None
    runs_min = lo if exact(lo) else _lowest_int(lo, runs_max, exact)

    own_at_min, opp_at_min = rates(runs_min)
    own_at_max, opp_at_max = rates(runs_max)

    return BattingFirstRange(
        restrict_runs_min=runs_min,
        restrict_runs_max=runs_max,
        own_rate_min=own_at_max,
        own_rate_max=own_at_min,
        opponent_rate_min=min(opp_at_min, opp_at_max),
        opponent_rate_max=max(opp_at_min, opp_at_max),
    )


def solve_bowling_first(
    table: PointsTable,
    query: RequirementQuery,
    precision: float = CHASE_PRECISION_OVERS,
) -> Optional[BowlingFirstRange]:
    """
    Opponent bats first and makes query.runs in query.match_overs; acting team chases runs+1.
    Find the range of chase overs (0.1..match_overs) that leaves the acting team exactly at
    query.desired_rank. Overs are searched as decimals down to `precision`, so boundaries
    are only that accurate. None if no chase speed gives the rank.
    """
    rates = _bowling_rates(table, query)
    at_or_better, exact = _make_checks(
        table, query.acting_team, query.opponent_team, query.desired_rank, query.strategy, rates
    )

    lo, hi = MIN_CHASE_OVERS, float(query.match_overs)
    if hi < lo:
        return None

    # If even winning off one ball doesn't reach the rank -> impossible
    if not at_or_better(lo):
        return None
    overs_max = _highest_float(lo, hi, at_or_better, precision)

    if not exact(overs_max):
        return None
    overs_min = _lowest_float(lo, overs_max, exact, precision)

    own_at_min, opp_at_min = rates(overs_min)
    own_at_max, opp_at_max = rates(overs_max)

    return BowlingFirstRange(
        chase_target=query.runs + 1,
        chase_overs_min=to_mixed_radix_overs(overs_min),
        chase_overs_max=to_mixed_radix_overs(overs_max),
        chase_overs_min_decimal=overs_min,
        chase_overs_max_decimal=overs_max,
        own_rate_min=own_at_max,
        own_rate_max=own_at_min,
        opponent_rate_min=min(opp_at_min, opp_at_max),
        opponent_rate_max=max(opp_at_min, opp_at_max),
    )


def solve_requirement(
    table: PointsTable,
    query: RequirementQuery,
    precision: float = CHASE_PRECISION_OVERS,
) -> RequirementResult:
    if query.scenario == "batting_first":
        return solve_batting_first(table, query)
    if query.scenario == "bowling_first":
        return solve_bowling_first(table, query, precision=precision)
    raise ValueError(f"Invalid scenario: {query.scenario}")


def best_achievable_rank(table: PointsTable, query: RequirementQuery) -> int:
    """
    Rank after the most dominant win the scenario allows
    (opponent bowled out for 0, or target chased off one ball).
    """
    if query.scenario == "batting_first":
        own, opp = _batting_rates(table, query)(0)
    elif query.scenario == "bowling_first":
        own, opp = _bowling_rates(table, query)(MIN_CHASE_OVERS)
    else:
        raise ValueError(f"Invalid scenario: {query.scenario}")

    rank, _ = resolve_standings(table, query.acting_team, query.opponent_team, own, opp)
    return rank
