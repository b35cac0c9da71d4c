# main.py (IPL NRR requirement calculator)
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from nrr_api import cache
from nrr_api.config import (
    CHASE_PRECISION_OVERS,
    DEFAULT_MATCH_OVERS,
    DEFAULT_SEASON,
    LOG_LEVEL,
    STANDINGS_CACHE_TTL_SECONDS,
    STANDINGS_STALE_TTL_SECONDS,
    validate_config,
)
from nrr_api.espn_standings import StandingsScrapeError, fetch_espn_points_table
from nrr_api.nrr_math import project_rate
from nrr_api.overs import overs_to_balls, to_decimal_overs
from nrr_api.points_table import PointsTable, current_standings, resolve_standings
from nrr_api.report import render_infeasible, render_requirement, render_standings, result_to_dict
from nrr_api.solver import best_achievable_rank, solve_requirement
from nrr_api.table_provider import build_table_from_standings, create_mock_ipl_table
from nrr_api.validation import (
    RequirementInputError,
    parse_positive_overs,
    parse_runs,
    resolve_pair,
    validate_requirement,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

TableSource = Literal["mock", "live"]

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="IPL NRR Requirement Calculator API",
    version="0.1.0",
    description="How much a team must win by to finish at a chosen points-table position",
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")}


# -----------------------
# Helpers
# -----------------------
def _get_live_standings_cached(season: int) -> Dict[str, Any]:
    """
    Cache-first standings fetch with fresh/stale fallback.
    """
    key_fresh = cache.standings_key(season, "fresh")
    key_stale = cache.standings_key(season, "stale")

    cached_fresh = cache.get(key_fresh)
    if cached_fresh is not None:
        return cached_fresh

    try:
        data = fetch_espn_points_table(season)
    except StandingsScrapeError as e:
        cached_stale = cache.get(key_stale)
        if cached_stale is not None:
            logger.warning("Live standings fetch failed, serving stale copy season=%s: %s", season, e)
            return cached_stale
        raise HTTPException(status_code=502, detail=f"Unable to fetch IPL standings: {e}")

    if not data.get("teams"):
        raise HTTPException(
            status_code=502,
            detail=f"Standings scrape returned empty teams for season={season}. Note={data.get('note')}",
        )

    cache.set(key_fresh, data, ttl_seconds=STANDINGS_CACHE_TTL_SECONDS)
    cache.set(key_stale, data, ttl_seconds=STANDINGS_STALE_TTL_SECONDS)
    return data


def _load_table(source: TableSource, season: int) -> PointsTable:
    if source == "mock":
        return create_mock_ipl_table()

    standings = _get_live_standings_cached(season)
    try:
        return build_table_from_standings(standings)
    except ValueError as e:
        raise HTTPException(status_code=502, detail=str(e))


def _table_source_name(source: TableSource) -> str:
    return "mock_ipl_2022" if source == "mock" else "live_standings"


# -----------------------
# Standings endpoint
# -----------------------
@app.get("/api/standings")
def get_standings(source: TableSource = "mock", season: int = DEFAULT_SEASON):
    table = _load_table(source, season)
    rows = current_standings(table)
    return {
        "table_source": _table_source_name(source),
        "season": season,
        "standings": [r.as_dict() for r in rows],
        "lines": render_standings(rows),
    }


# -----------------------
# Requirement endpoint
# -----------------------
class RequirementRequest(BaseModel):
    your_team: str = Field(..., description="Team code or name, e.g. RR or Rajasthan Royals")
    opponent_team: str = Field(..., description="Opposition team code or name")
    match_overs: Union[int, float, str] = Field(DEFAULT_MATCH_OVERS, description="e.g. 20 or 19.4")
    desired_position: int = Field(..., description="Target position in the points table (1-based)")
    toss_result: Literal["batting", "bowling"] = Field(..., description="Whether your_team bats or bowls first")
    runs: int = Field(..., description="Runs scored (if batting) OR opponent's runs (if bowling)")
    strategy: Literal["live", "threshold"] = Field("live", description="live = full re-ranking, threshold = fixed target NRR")


@app.post("/api/requirement")
def requirement(req: RequirementRequest, source: TableSource = "mock", season: int = DEFAULT_SEASON):
    table = _load_table(source, season)

    try:
        query = validate_requirement(
            table,
            your_team=req.your_team,
            opponent_team=req.opponent_team,
            match_overs=req.match_overs,
            desired_position=req.desired_position,
            toss_result=req.toss_result,
            runs=req.runs,
            strategy=req.strategy,
        )
    except RequirementInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = solve_requirement(table, query, precision=CHASE_PRECISION_OVERS)

    resp: Dict[str, Any] = {
        "table_source": _table_source_name(source),
        "season": season,
        "input": req.model_dump(),
        "your_team": query.acting_team,
        "opponent_team": query.opponent_team,
        "desired_position": query.desired_rank,
        "strategy": query.strategy,
    }

    if result is None:
        best = best_achievable_rank(table, query)
        logger.info(
            "Infeasible requirement team=%s opp=%s scenario=%s desired=%s best=%s",
            query.acting_team, query.opponent_team, query.scenario, query.desired_rank, best,
        )
        resp.update({
            "feasible": False,
            "best_achievable_position": best,
            "message": render_infeasible(table, query, best),
        })
        return resp

    resp.update({"feasible": True, "result": result_to_dict(result)})
    resp.update(render_requirement(table, query, result))
    return resp


# -----------------------
# Simulation Endpoint (one concrete result)
# -----------------------
class SimulateRequest(BaseModel):
    winner: str = Field(..., description="Winning team code or name")
    loser: str = Field(..., description="Losing team code or name")
    winner_runs: int = Field(..., ge=0)
    winner_overs: str = Field(..., description="e.g. 20.0 or 18.4")
    loser_runs: int = Field(..., ge=0)
    loser_overs: str = Field(..., description="e.g. 20.0 or 19.2")
    strategy: Literal["live", "threshold"] = Field("live", description="threshold = NRR accounting of the threshold strategy")


@app.post("/api/simulate")
def simulate(req: SimulateRequest, source: TableSource = "mock", season: int = DEFAULT_SEASON):
    table = _load_table(source, season)

    try:
        winner, loser = resolve_pair(table, req.winner, req.loser)
        w_runs = parse_runs(req.winner_runs, "winner_runs")
        l_runs = parse_runs(req.loser_runs, "loser_runs")
        w_overs = parse_positive_overs(req.winner_overs, "winner_overs")
        l_overs = parse_positive_overs(req.loser_overs, "loser_overs")
    except RequirementInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if w_runs <= l_runs:
        raise HTTPException(status_code=400, detail="winner_runs must be greater than loser_runs")

    reread = req.strategy == "threshold"
    winner_rate = project_rate(table.get(winner), w_runs, w_overs, l_runs, l_overs, reread_totals=reread)
    loser_rate = project_rate(table.get(loser), l_runs, l_overs, w_runs, w_overs, reread_totals=reread)
    rank, snapshot = resolve_standings(table, winner, loser, winner_rate, loser_rate)

    return {
        "table_source": _table_source_name(source),
        "season": season,
        "input": req.model_dump(),
        "winner_nrr": round(winner_rate, 3),
        "loser_nrr": round(loser_rate, 3),
        "winner_position": rank,
        "updated_table": [r.as_dict() for r in snapshot],
    }


# -----------------------
# Overs conversion
# -----------------------
@app.get("/api/overs/convert")
def convert_overs(overs: str):
    try:
        mixed = parse_positive_overs(overs, "overs")
    except RequirementInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "overs": f"{mixed:.1f}",
        "balls": overs_to_balls(mixed),
        "decimal_overs": round(to_decimal_overs(mixed), 6),
    }
