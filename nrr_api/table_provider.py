# nrr_api/table_provider.py
from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from nrr_api.models import TeamId, TeamRecord
from nrr_api.nrr_math import net_rate
from nrr_api.overs import parse_overs
from nrr_api.points_table import PointsTable

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(r"^[A-Z]{2,5}$")


def create_mock_ipl_table() -> PointsTable:
    """
    IPL 2022 snapshot (five teams, mid-season).
    Mock only.
    """
    return PointsTable([
        TeamRecord(TeamId("CSK"), "Chennai Super Kings", 7, 5, 2, 10, 0.771, 1130, 133.1, 1071, 138.5),
        TeamRecord(TeamId("RCB"), "Royal Challengers Bangalore", 7, 4, 3, 8, 0.597, 1217, 140.0, 1066, 131.4),
        TeamRecord(TeamId("DC"), "Delhi Capitals", 7, 4, 3, 8, 0.319, 1085, 126.0, 1136, 137.0),
        TeamRecord(TeamId("RR"), "Rajasthan Royals", 7, 3, 4, 6, 0.331, 1066, 128.2, 1094, 137.1),
        TeamRecord(TeamId("MI"), "Mumbai Indians", 8, 2, 6, 4, -1.75, 1003, 155.2, 1134, 138.1),
    ])


def team_code_from_name(name: str) -> str:
    """
    "Rajasthan Royals" -> "RR", "Mumbai Indians" -> "MI".
    Short codes pass through unchanged.
    """
    s = re.sub(r"\s+", " ", str(name or "")).strip()
    if not s:
        return ""
    if _CODE_RE.fullmatch(s):
        return s
    return "".join(tok[0] for tok in s.split() if tok[0].isalpha()).upper()


def _safe_int(x: object, default: int = 0) -> int:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default
        return int(float(sx))
    except ValueError:
        return default


def _safe_float(x: object) -> Optional[float]:
    try:
        if x is None:
            return None
        return float(x)
    except (TypeError, ValueError):
        return None


def build_table_from_standings(standings: dict) -> PointsTable:
    """
    Convert a standings dict (ESPN scraper output) -> PointsTable.

    Rules:
      - Prefer `code` if present, else derive from the team name.
      - for/against aggregates are required: the calculator works from real totals.
      - NRR falls back to the value recomputed from the aggregates when the feed omits it.
    """
    records: List[TeamRecord] = []
    teams: List[Any] = standings.get("teams", []) or []

    for t in teams:
        raw_code = (t.get("code") or "").strip()
        name = (t.get("team") or "").strip()

        team_code = raw_code.upper() if raw_code else team_code_from_name(name)
        if not team_code:
            continue

        runs_for = t.get("runs_for")
        overs_for = t.get("overs_for")
        runs_against = t.get("runs_against")
        overs_against = t.get("overs_against")

        if any(v is None for v in (runs_for, overs_for, runs_against, overs_against)):
            raise ValueError(f"Standings row for {team_code} has no for/against aggregates")

        of = parse_overs(overs_for)
        oa = parse_overs(overs_against)
        if of <= 0 or oa <= 0:
            raise ValueError(f"Standings row for {team_code} has zero overs")

        rate = _safe_float(t.get("nrr"))
        if rate is None:
            rate = net_rate(int(runs_for), of, int(runs_against), oa)

        logger.debug(
            "standings row team=%s rf/of=%s/%s ra/oa=%s/%s nrr=%s",
            team_code, runs_for, of, runs_against, oa, rate,
        )

        records.append(
            TeamRecord(
                team=TeamId(team_code),
                name=name or team_code,
                played=_safe_int(t.get("matches")),
                won=_safe_int(t.get("won")),
                lost=_safe_int(t.get("lost")),
                points=_safe_int(t.get("points")),
                nrr=float(rate),
                runs_for=int(runs_for),
                overs_for=of,
                runs_against=int(runs_against),
                overs_against=oa,
                nr=_safe_int(t.get("nr")),
            )
        )

    return PointsTable(records)
