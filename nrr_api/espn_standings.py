# nrr_api/espn_standings.py
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import requests

from nrr_api.config import ESPN_TABLE_URL_TEMPLATE, ESPN_TIMEOUT_SECONDS, IPL_SERIES_ID
from nrr_api.overs import parse_overs

logger = logging.getLogger(__name__)


class StandingsScrapeError(Exception):
    """Raised when ESPN standings scraping/parsing fails."""
    pass


def _now_utc() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _flatten_columns(df: pd.DataFrame) -> pd.DataFrame:
    cols: List[str] = []
    for c in df.columns:
        if isinstance(c, tuple):
            c = " ".join([str(x) for x in c if x and str(x) != "nan"]).strip()
        cols.append(str(c).strip())
    df.columns = cols
    return df


def _pick_points_table(tables: List[pd.DataFrame]) -> pd.DataFrame:
    """
    ESPN pages sometimes contain multiple HTML tables.
    Pick the one that looks most like a points table with For/Against columns.
    """
    best = None
    best_score = -1

    for t in tables:
        t = _flatten_columns(t.copy())
        cols = [str(c).strip().lower() for c in t.columns]

        score = 0
        if any("team" in c for c in cols):
            score += 3
        if any(c in ("pt", "pts", "points") or "pts" in c for c in cols):
            score += 3
        if any("nrr" in c for c in cols):
            score += 3
        if any(c == "for" or c.endswith(" for") for c in cols):
            score += 2
        if any("against" in c for c in cols):
            score += 2
        if any(c in ("m", "mat", "matches") for c in cols):
            score += 1

        if score > best_score:
            best_score = score
            best = t

    return best if best is not None else _flatten_columns(tables[0].copy())


def _parse_runs_overs_cell(val: Any) -> Optional[Tuple[int, float]]:
    """
    "1066/128.2" -> (1066, 128.2)
    "1085/126"   -> (1085, 126.0)
    """
    if val is None:
        return None
    s = str(val).strip()
    if not s or s.lower() == "nan":
        return None

    m = re.match(r"^\s*(\d+)\s*/\s*([0-9]+(?:\.[0-5])?)\s*$", s)
    if not m:
        return None

    return int(m.group(1)), parse_overs(m.group(2))


def _clean_team_cell(raw: Any) -> Tuple[str, Optional[str]]:
    """
    ESPN team cell examples:
      "1Rajasthan Royals RR"
      "Image Delhi Capitals DC"
      "Royal Challengers Bangalore"

    Returns (team_name, code or None).
    """
    if raw is None:
        return "", None

    s = str(raw).strip()
    if not s or s.lower() == "nan":
        return "", None

    s = s.replace("Image", " ").strip()

    # ESPN glues rank and name together ("1Rajasthan")
    s = re.sub(r"(?<=\d)(?=[A-Za-z])", " ", s)
    s = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", s)

    s = re.sub(r"\s+", " ", s).strip()
    s = re.sub(r"^\d+\s*", "", s).strip()

    tokens = s.split()
    if not tokens:
        return "", None

    last = tokens[-1].strip()
    if len(tokens) > 1 and re.fullmatch(r"[A-Z]{2,5}", last):
        return " ".join(tokens[:-1]).strip(), last

    return s, None


def _safe_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default

        m = re.match(r"^(\d+)", sx)
        if m:
            return int(m.group(1))

        return int(float(sx))
    except ValueError:
        return default


def _safe_float(x: Any) -> Optional[float]:
    if x is None:
        return None
    sx = str(x).strip()
    if not sx or sx.lower() == "nan":
        return None
    try:
        return float(sx.replace("−", "-"))
    except ValueError:
        return None


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    colmap: Dict[str, str] = {}
    for c in df.columns:
        lc = str(c).strip().lower()

        if "team" in lc:
            colmap[c] = "team"
        elif lc in ("m", "mat", "matches"):
            colmap[c] = "matches"
        elif lc in ("w", "won"):
            colmap[c] = "won"
        elif lc in ("l", "lost"):
            colmap[c] = "lost"
        elif lc in ("nr", "n/r", "no result") or "no result" in lc:
            colmap[c] = "nr"
        elif lc in ("pt", "pts", "points", "p") or "pts" in lc:
            colmap[c] = "points"
        elif "nrr" in lc:
            colmap[c] = "nrr"
        elif lc == "for" or lc.endswith(" for"):
            colmap[c] = "for"
        elif "against" in lc:
            colmap[c] = "against"

    return df.rename(columns=colmap)


def parse_points_table_html(html: str, season: int) -> Dict[str, Any]:
    """
    Parse an ESPN points-table page into the standings dict consumed by
    table_provider.build_table_from_standings.
    """
    resp: Dict[str, Any] = {
        "season": season,
        "source": "espn",
        "last_updated_utc": _now_utc(),
        "teams": [],
    }

    try:
        tables = pd.read_html(StringIO(html), flavor="lxml")
    except ValueError:
        # pandas raises ValueError("No tables found")
        resp["note"] = "Points table not available yet (pre-season or page structure changed)."
        return resp

    if not tables:
        resp["note"] = "Points table not available yet (pre-season)."
        return resp

    df = _normalize_columns(_pick_points_table(tables))

    required = {"team", "matches", "won", "lost", "points"}
    if not required.issubset(set(df.columns)):
        resp["note"] = f"Points table core columns not available for season={season}. Parsed columns={list(df.columns)}"
        return resp

    teams: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        team_name, team_code = _clean_team_cell(row.get("team"))
        if not team_name:
            continue

        item: Dict[str, Any] = {
            "team": team_name,
            "code": team_code,
            "matches": _safe_int(row.get("matches"), 0),
            "won": _safe_int(row.get("won"), 0),
            "lost": _safe_int(row.get("lost"), 0),
            "nr": _safe_int(row.get("nr"), 0) if "nr" in df.columns else 0,
            "points": _safe_int(row.get("points"), 0),
            "nrr": _safe_float(row.get("nrr")) if "nrr" in df.columns else None,
        }

        if "for" in df.columns:
            parsed = _parse_runs_overs_cell(row.get("for"))
            if parsed:
                item["runs_for"], item["overs_for"] = parsed

        if "against" in df.columns:
            parsed = _parse_runs_overs_cell(row.get("against"))
            if parsed:
                item["runs_against"], item["overs_against"] = parsed

        teams.append(item)

    resp["teams"] = teams
    if teams and not any(("runs_for" in t and "runs_against" in t) for t in teams):
        resp["note"] = f"For/Against aggregates not present/parsed. Parsed columns={list(df.columns)}"

    return resp


def fetch_espn_points_table(season: int) -> Dict[str, Any]:
    url = ESPN_TABLE_URL_TEMPLATE.format(series_id=IPL_SERIES_ID, season=season)
    logger.info("Fetching ESPN points table season=%s url=%s", season, url)

    try:
        r = requests.get(
            url,
            timeout=ESPN_TIMEOUT_SECONDS,
            headers={"User-Agent": "Mozilla/5.0 (compatible; IPL-NRR-Calculator/1.0)"},
        )
        r.raise_for_status()
    except requests.RequestException as e:
        raise StandingsScrapeError(f"ESPN fetch failed: {e}") from e

    data = parse_points_table_html(r.text, season)
    if data.get("note"):
        logger.warning("ESPN points table season=%s: %s", season, data["note"])
    return data
