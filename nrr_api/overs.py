# nrr_api/overs.py
from __future__ import annotations

import math
from typing import Union

BALLS_PER_OVER = 6
OversLike = Union[str, int, float]


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def to_decimal_overs(overs: float) -> float:
    """
    Mixed-radix overs -> decimal overs.

    128.2 means 128 overs + 2 balls, i.e. 128.333...
    The ball digit must be 0-5; this is not checked here (see parse_overs).
    """
    whole = math.floor(overs)
    balls = _round_half_up((overs - whole) * 10)
    return whole + balls / BALLS_PER_OVER


def to_mixed_radix_overs(decimal_overs: float) -> float:
    """
    Decimal overs -> mixed-radix overs (128.333... -> 128.2).
    """
    whole = math.floor(decimal_overs)
    balls = _round_half_up((decimal_overs - whole) * BALLS_PER_OVER)
    if balls >= BALLS_PER_OVER:
        whole += 1
        balls = 0
    return whole + balls / 10


def overs_to_balls(overs: OversLike) -> int:
    """
    Converts cricket overs notation to balls.

    Supported inputs:
    - "20.0", "19.4", "7.2" (string overs notation)
    - 20 (int overs)
    - 19.4 (float) -> treated as "19.4"

    Rule: ".x" means x balls (0-5). Example: 19.4 = 19*6 + 4 = 118 balls.
    """
    if overs is None:
        raise ValueError("Overs cannot be None")

    if isinstance(overs, float):
        # repr keeps floats like 128.2 readable as "128.2"
        s = repr(overs)
    else:
        s = str(overs).strip()
    if not s:
        raise ValueError("Overs cannot be empty")

    if "." not in s:
        try:
            ov_i = int(s)
        except ValueError:
            raise ValueError(f"Invalid overs: {overs}") from None
        if ov_i < 0:
            raise ValueError(f"Invalid overs: {overs}")
        return ov_i * BALLS_PER_OVER

    ov_part, ball_part = s.split(".", 1)
    ball_part = ball_part.strip()

    try:
        ov_i = int(ov_part) if ov_part else 0
        # "20.0" and "20." both mean zero balls
        balls_i = int(ball_part) if ball_part else 0
    except ValueError:
        raise ValueError(f"Invalid overs: {overs}") from None

    if ov_i < 0 or ov_part.strip().startswith("-"):
        raise ValueError(f"Invalid overs: {overs}")
    if len(ball_part) > 1 or balls_i < 0 or balls_i > 5:
        raise ValueError(f"Invalid overs format: {overs} (balls part must be 0-5)")

    return ov_i * BALLS_PER_OVER + balls_i


def balls_to_overs(balls: int) -> float:
    """119 balls -> 19.5 (mixed-radix)."""
    if balls <= 0:
        return 0.0
    return balls // BALLS_PER_OVER + (balls % BALLS_PER_OVER) / 10


def parse_overs(overs: OversLike) -> float:
    """
    Validated parse of user/feed overs into a mixed-radix float.
    Raises ValueError for negative values or a ball digit above 5.
    """
    return balls_to_overs(overs_to_balls(overs))


def format_overs(overs: float) -> str:
    return f"{overs:.1f}"
