# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Hit-location geometry.

Coordinates are percentages of a square field image (0-100 on each axis)
with home plate at (50, 78) and y growing toward home. Distances and
angles are measured from home plate; the angle is 0 toward dead center,
negative toward the left-field line and positive toward right.

Zones are descriptive only. No scoring rule depends on them.
"""

from __future__ import annotations

import math

from models import Outcome

ORIGIN_X = 50.0
ORIGIN_Y = 78.0

# Points with a larger horizontal angle are foul; the threshold itself is fair.
FOUL_ANGLE = 44.5
# How far behind home plate (in y) a point may sit and still be fair.
BEHIND_PLATE_TOLERANCE = 1.0
# Floor for the vertical component when computing the angle.
MIN_ANGLE_DY = 0.1


class Depth:
    CATCHER = 8.0
    INFIELD = 38.0
    SHALLOW = 45.0
    STANDARD = 55.0


class Direction:
    LINE = 36.0
    FIELD = 22.0
    GAP = 7.0


FENCE_DISTANCE = 68.0
MIN_HR_DISTANCE = 50.0
MAX_HR_DISTANCE = 80.0
# Fly outs land beyond the infield.
MIN_FLY_OUT_DISTANCE = Depth.INFIELD + 0.1

FOUL_BALL = "foul ball"


def _constrain(v: float) -> float:
    return max(0.0, min(100.0, float(v)))


def _polar(x: float, y: float) -> tuple[float, float, float, float]:
    """Return (dx, dy, distance, angle in degrees) for a field point."""
    dx = x - ORIGIN_X
    dy = ORIGIN_Y - y
    distance = math.sqrt(dx * dx + dy * dy)
    angle = math.degrees(math.atan2(dx, max(MIN_ANGLE_DY, dy)))
    return dx, dy, distance, angle


def is_foul(x: float, y: float) -> bool:
    _, dy, _, angle = _polar(_constrain(x), _constrain(y))
    return dy < -BEHIND_PLATE_TOLERANCE or abs(angle) > FOUL_ANGLE


def _depth(distance: float) -> str:
    if distance < Depth.INFIELD:
        return "infield"
    if distance < Depth.SHALLOW:
        return "shallow"
    if distance < Depth.STANDARD:
        return "standard"
    return "deep"


def _direction(angle: float) -> str:
    abs_angle = abs(angle)
    left = angle < 0
    if abs_angle > Direction.LINE:
        return "left field line" if left else "right field line"
    if abs_angle > Direction.FIELD:
        return "left field" if left else "right field"
    if abs_angle > Direction.GAP:
        return "left-center gap" if left else "right-center gap"
    return "center field"


def _infield_zone(distance: float, angle: float) -> str:
    abs_angle = abs(angle)
    left = angle < 0
    if abs_angle < 8 and distance < 25:
        return "back to the pitcher"
    if abs_angle < 8 and distance < 35:
        return "up the middle"
    if abs_angle > 35:
        return "down the third base line" if left else "down the first base line"
    if abs_angle > 25:
        return "to third base" if left else "to first base"
    return "to shortstop" if left else "to second base"


def _outfield_zone(depth: str, direction: str) -> str:
    prefix = "" if depth in ("standard", "infield") else f"{depth} "
    return f"{prefix}{direction}".strip()


def zone_of(x: float | None, y: float | None, outcome: Outcome | None = None) -> str:
    """Describe where a batted ball went, e.g. "deep right-center gap".

    Returns an empty string when either coordinate is missing and
    "foul ball" outside fair territory.
    """
    if x is None or y is None:
        return ""
    _, dy, distance, angle = _polar(_constrain(x), _constrain(y))

    if dy < -BEHIND_PLATE_TOLERANCE or abs(angle) > FOUL_ANGLE:
        return FOUL_BALL

    direction = _direction(angle)
    if outcome == Outcome.HOMERUN:
        if distance > FENCE_DISTANCE:
            return f"home run to {direction}"
        return f"inside the park home run to {_outfield_zone(_depth(distance), direction)}"

    if distance < Depth.CATCHER:
        return "in front of the catcher"

    depth = _depth(distance)
    if depth == "infield":
        return _infield_zone(distance, angle)
    return _outfield_zone(depth, direction)


def distance_range(outcome: Outcome | None) -> tuple[float, float]:
    """Legal (min, max) distance from home plate for an outcome's contact point."""
    if outcome == Outcome.HOMERUN:
        return MIN_HR_DISTANCE, MAX_HR_DISTANCE
    if outcome == Outcome.POP_OUT:
        return 0.0, Depth.STANDARD
    if outcome == Outcome.FLY_OUT:
        return MIN_FLY_OUT_DISTANCE, FENCE_DISTANCE
    return 0.0, FENCE_DISTANCE


def clamp(x: float, y: float, outcome: Outcome | None = None) -> tuple[float, float]:
    """Pull a contact point into the legal distance range for the outcome.

    The point moves along its own ray from home plate; only the radius
    changes. A point on home plate itself is pushed toward dead center.
    """
    x, y = _constrain(x), _constrain(y)
    lo, hi = distance_range(outcome)
    dx = x - ORIGIN_X
    dy = ORIGIN_Y - y
    distance = math.hypot(dx, dy)

    if lo <= distance <= hi:
        return x, y
    target = lo if distance < lo else hi
    if distance == 0:
        return ORIGIN_X, ORIGIN_Y - target
    scale = target / distance
    return ORIGIN_X + dx * scale, ORIGIN_Y - dy * scale
