# nrr_api/nrr_math.py
from __future__ import annotations

from nrr_api.models import TeamRecord
from nrr_api.overs import to_decimal_overs


def net_rate(runs_for: float, overs_for: float, runs_against: float, overs_against: float) -> float:
    """
    Net Run Rate = (runs_for / overs_for) - (runs_against / overs_against)

    Both overs arguments are read as overs.balls and converted to decimal overs first.
    Zero overs is a caller error.
    """
    rr_for = runs_for / to_decimal_overs(overs_for)
    rr_against = runs_against / to_decimal_overs(overs_against)
    return rr_for - rr_against


def project_rate(
    team: TeamRecord,
    match_runs_for: float,
    match_overs_for: float,
    match_runs_against: float,
    match_overs_against: float,
    reread_totals: bool = True,
) -> float:
    """
    NRR of `team` after one more match.

    Overs are accumulated in decimal space (balls do not add up in overs.balls notation).
    With reread_totals the decimal totals are handed to net_rate like any other overs
    figure, which is what the threshold strategy's figures are built on. Without it the totals
    are divided as they are, so NRR moves monotonically with every ball.
    `team` is not modified.
    """
    total_runs_for = team.runs_for + match_runs_for
    total_overs_for = to_decimal_overs(team.overs_for) + to_decimal_overs(match_overs_for)
    total_runs_against = team.runs_against + match_runs_against
    total_overs_against = to_decimal_overs(team.overs_against) + to_decimal_overs(match_overs_against)

    if reread_totals:
        return net_rate(total_runs_for, total_overs_for, total_runs_against, total_overs_against)
    return total_runs_for / total_overs_for - total_runs_against / total_overs_against
