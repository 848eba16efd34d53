"""Numeric goal tracking and display formatting."""

import logging
import math
from numbers import Real
from typing import Iterator, Optional

from .exceptions import InvalidGoalValueError
from .models import GOAL_KEYS, AccountMetrics, Goal

logger = logging.getLogger(__name__)

# key -> (default target, label, icon, bar color)
GOAL_DEFAULTS = {
    "followers": (500, "Follower goal", "👥", "green"),
    "impressions": (5_000_000, "90-day impressions", "👁️", "blue"),
    "revenue": (200, "Monthly revenue ($)", "💰", "purple"),
    "tweets": (150, "Monthly tweets", "🐦", "orange"),
}

_UNITS = ((1_000_000, "M"), (1_000, "K"))


def default_goals(account: Optional[AccountMetrics] = None) -> dict[str, Goal]:
    """
    Build the four goals with default targets.

    Current values are seeded from already-known account metrics. Revenue is
    rounded to whole dollars.

    Args:
        account: Known account numbers, zeros if not given

    Returns:
        Goals keyed by name, in display order
    """
    account = account or AccountMetrics()
    seeds = {
        "followers": account.followers,
        "impressions": account.impressions,
        "revenue": round(account.revenue),
        "tweets": 0,
    }

    goals = {}
    for key in GOAL_KEYS:
        target, label, icon, bar_color = GOAL_DEFAULTS[key]
        goals[key] = Goal(
            key=key,
            current=seeds[key] or 0,
            target=target,
            label=label,
            icon=icon,
            bar_color=bar_color,
        )
    return goals


def format_compact(value: float) -> str:
    """
    Format a number with a K/M suffix.

    Picks the largest unit not above the value among 1, 1e3 and 1e6. K and M
    keep one decimal, plain numbers are shown as integers.

    Example:
        1500 -> "1.5K", 3_420_000 -> "3.4M", 42.7 -> "43"
    """
    for size, suffix in _UNITS:
        if abs(value) >= size:
            return f"{value / size:.1f}{suffix}"
    return f"{value:.0f}"


def _plain(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def display_values(goal: Goal) -> tuple[str, str]:
    """
    Format a goal's current/target pair for its label row.

    Both numbers use the unit of the target so they read on the same scale,
    e.g. "3.4M / 5M" or "2.8K / 1K".

    Returns:
        Tuple of (current_display, target_display)
    """
    for size, suffix in _UNITS:
        if goal.target >= size:
            return (
                f"{goal.current / size:.1f}{suffix}",
                f"{goal.target / size:.0f}{suffix}",
            )
    return _plain(goal.current), _plain(goal.target)


def _check_number(key: str, field_name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidGoalValueError(
            f"Goal {key} {field_name} must be a number, got {value!r}", key
        )
    if not math.isfinite(value):
        raise InvalidGoalValueError(
            f"Goal {key} {field_name} must be finite, got {value!r}", key
        )
    return value


class GoalTracker:
    """Holds the four goals and validates edits to them."""

    def __init__(self, goals: dict[str, Goal]):
        """
        Initialize tracker.

        Args:
            goals: Goals keyed by name
        """
        self.goals = goals

    def __iter__(self) -> Iterator[Goal]:
        for key in GOAL_KEYS:
            if key in self.goals:
                yield self.goals[key]

    def get(self, key: str) -> Goal:
        """
        Get a goal by key.

        Raises:
            InvalidGoalValueError: If the key is not one of the tracked goals
        """
        goal = self.goals.get(key)
        if goal is None:
            raise InvalidGoalValueError(f"Unknown goal: {key}", key)
        return goal

    def set_current(self, key: str, value: float):
        """Set the current value. Over-achievement is allowed."""
        goal = self.get(key)
        goal.current = _check_number(key, "current", value)
        logger.info(f"Goal {key} current set to {goal.current}")

    def set_target(self, key: str, value: float):
        """Set the target value, which must be positive."""
        goal = self.get(key)
        value = _check_number(key, "target", value)
        if value <= 0:
            raise InvalidGoalValueError(
                f"Goal {key} target must be positive, got {value!r}", key
            )
        goal.target = value
        logger.info(f"Goal {key} target set to {goal.target}")

    def update(self, changes: dict[str, dict]):
        """
        Apply a batch of edits, or none of them.

        Args:
            changes: {goal_key: {"current": x, "target": y}}, fields optional

        Raises:
            InvalidGoalValueError: If any key or value is rejected; no goal
                is modified in that case
        """
        for key, fields in changes.items():
            self.get(key)
            unknown = set(fields) - {"current", "target"}
            if unknown:
                raise InvalidGoalValueError(
                    f"Goal {key} has unknown fields: {sorted(unknown)}", key
                )
            if "current" in fields:
                _check_number(key, "current", fields["current"])
            if "target" in fields:
                target = _check_number(key, "target", fields["target"])
                if target <= 0:
                    raise InvalidGoalValueError(
                        f"Goal {key} target must be positive, got {target!r}", key
                    )

        for key, fields in changes.items():
            if "current" in fields:
                self.set_current(key, fields["current"])
            if "target" in fields:
                self.set_target(key, fields["target"])

    def progress_ratio(self, key: str) -> float:
        """
        Progress bar fill for a goal.

        Returns:
            min(current / target, 1) floored at 0; 1.0 when the target is 0
        """
        goal = self.get(key)
        if goal.target == 0:
            return 1.0
        return max(0.0, min(goal.current / goal.target, 1.0))
