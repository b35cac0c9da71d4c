# nrr_api/report.py
from __future__ import annotations

from typing import Any, Dict, List

from nrr_api.models import (
    BattingFirstRange,
    BowlingFirstRange,
    RequirementQuery,
    RequirementResult,
    StandingRow,
)
from nrr_api.overs import format_overs
from nrr_api.points_table import PointsTable


def _fmt_overs(overs: float) -> str:
    return str(int(overs)) if float(overs).is_integer() else format_overs(overs)


def render_standings(rows: List[StandingRow]) -> List[str]:
    return [f"{r.pos}. {r.name} - Points: {r.points}, NRR: {r.nrr:.3f}" for r in rows]


def render_infeasible(table: PointsTable, query: RequirementQuery, best_rank: int) -> str:
    you = table.get(query.acting_team).name
    if query.scenario == "batting_first":
        how = f"even restricting {table.get(query.opponent_team).name} to 0"
    else:
        how = "even with the fastest possible chase"
    return (
        f"Impossible for {you} to finish exactly at position {query.desired_rank} "
        f"({how}, the best reachable position is {best_rank})."
    )


def render_requirement(table: PointsTable, query: RequirementQuery, result: RequirementResult) -> Dict[str, str]:
    """
    Human-readable lines for a solved requirement:
      message:     what the team has to do
      nrr_message: where its NRR lands
    """
    if result is None:
        raise ValueError("render_requirement needs a feasible result; use render_infeasible")

    you = table.get(query.acting_team).name
    opp = table.get(query.opponent_team).name
    overs = _fmt_overs(query.match_overs)

    if isinstance(result, BattingFirstRange):
        return {
            "message": (
                f"If {you} scores {query.runs} runs in {overs} overs, {you} needs to restrict {opp} "
                f"between {result.restrict_runs_min} to {result.restrict_runs_max} runs in {overs} overs."
            ),
            "nrr_message": (
                f"Revised NRR of {you} will be between {result.own_rate_min:.3f} to {result.own_rate_max:.3f}."
            ),
        }

    if isinstance(result, BowlingFirstRange):
        return {
            "message": (
                f"{you} needs to chase {result.chase_target} runs between "
                f"{format_overs(result.chase_overs_min)} and {format_overs(result.chase_overs_max)} overs."
            ),
            "nrr_message": (
                f"Revised NRR for {you} will be between {result.own_rate_min:.3f} to {result.own_rate_max:.3f}."
            ),
        }

    raise ValueError(f"Unsupported result type: {type(result).__name__}")


def result_to_dict(result: RequirementResult) -> Dict[str, Any]:
    if isinstance(result, BattingFirstRange):
        return {
            "scenario": "batting_first",
            "restrict_min": result.restrict_runs_min,
            "restrict_max": result.restrict_runs_max,
            "nrr_min": round(result.own_rate_min, 3),
            "nrr_max": round(result.own_rate_max, 3),
            "opponent_nrr_min": round(result.opponent_rate_min, 3),
            "opponent_nrr_max": round(result.opponent_rate_max, 3),
        }
    if isinstance(result, BowlingFirstRange):
        return {
            "scenario": "bowling_first",
            "runs_to_chase": result.chase_target,
            "min_overs": format_overs(result.chase_overs_min),
            "max_overs": format_overs(result.chase_overs_max),
            "min_overs_decimal": round(result.chase_overs_min_decimal, 3),
            "max_overs_decimal": round(result.chase_overs_max_decimal, 3),
            "nrr_min": round(result.own_rate_min, 3),
            "nrr_max": round(result.own_rate_max, 3),
            "opponent_nrr_min": round(result.opponent_rate_min, 3),
            "opponent_nrr_max": round(result.opponent_rate_max, 3),
        }
    raise ValueError("No result to serialize")
