"""Dashboard API models."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat

from actionplan.plan.models import (
    GOAL_KEYS,
    ActionItem,
    GoalProgress,
    Milestone,
    PhaseProgress,
    PlanSnapshot,
)


class ActionResponse(BaseModel):
    """An action item with its completion state."""

    id: str
    phase: int
    priority: str
    title: str
    description: str
    emoji: str = ""
    completed: bool = False
    completed_date: Optional[date] = None

    @classmethod
    def from_item(
        cls, item: ActionItem, completed_date: Optional[date] = None
    ) -> "ActionResponse":
        return cls(
            id=item.id,
            phase=item.phase,
            priority=item.priority,
            title=item.title,
            description=item.description,
            emoji=item.emoji,
            completed=completed_date is not None,
            completed_date=completed_date,
        )


class PhaseResponse(BaseModel):
    """Progress bar data for one phase."""

    phase: int
    completed: int
    total: int
    ratio: float

    @classmethod
    def from_progress(cls, progress: PhaseProgress) -> "PhaseResponse":
        return cls(
            phase=progress.phase,
            completed=progress.completed,
            total=progress.total,
            ratio=progress.ratio,
        )


class GoalResponse(BaseModel):
    """Progress bar data for one goal."""

    key: str
    label: str
    icon: str
    bar_color: str
    current: float
    target: float
    ratio: float
    current_display: str
    target_display: str
    current_compact: str = ""

    @classmethod
    def from_progress(cls, progress: GoalProgress) -> "GoalResponse":
        return cls(
            key=progress.key,
            label=progress.label,
            icon=progress.icon,
            bar_color=progress.bar_color,
            current=progress.current,
            target=progress.target,
            ratio=progress.ratio,
            current_display=progress.current_display,
            target_display=progress.target_display,
            current_compact=progress.current_compact,
        )


class MilestoneResponse(BaseModel):
    """A milestone and whether it is achieved."""

    id: str
    icon: str
    title: str
    description: str
    achieved: bool

    @classmethod
    def from_milestone(cls, milestone: Milestone) -> "MilestoneResponse":
        return cls(
            id=milestone.id,
            icon=milestone.icon,
            title=milestone.title,
            description=milestone.description,
            achieved=milestone.achieved,
        )


class PlanResponse(BaseModel):
    """Response for /api/plan endpoint."""

    start_date: date
    today: date
    days_elapsed: int
    days_remaining: int
    streak: int
    completed: int
    total: int
    overall_percent: int
    plan_complete: bool
    next_action: Optional[ActionResponse] = None
    phases: list[PhaseResponse] = []
    goals: list[GoalResponse] = []
    milestones: list[MilestoneResponse] = []

    @classmethod
    def from_snapshot(cls, snapshot: PlanSnapshot) -> "PlanResponse":
        return cls(
            start_date=snapshot.start_date,
            today=snapshot.today,
            days_elapsed=snapshot.days_elapsed,
            days_remaining=snapshot.days_remaining,
            streak=snapshot.streak,
            completed=snapshot.completed,
            total=snapshot.total,
            overall_percent=snapshot.overall_percent,
            plan_complete=snapshot.plan_complete,
            next_action=ActionResponse.from_item(snapshot.next_action)
            if snapshot.next_action
            else None,
            phases=[PhaseResponse.from_progress(p) for p in snapshot.phases],
            goals=[GoalResponse.from_progress(g) for g in snapshot.goals],
            milestones=[MilestoneResponse.from_milestone(m) for m in snapshot.milestones],
        )


class ToggleResponse(BaseModel):
    """Response for the toggle endpoint."""

    action: ActionResponse
    streak: int


class GoalValues(BaseModel):
    """Edit for one goal. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    current: Optional[StrictFloat] = Field(None, allow_inf_nan=False)
    target: Optional[StrictFloat] = Field(None, gt=0, allow_inf_nan=False)


class GoalsUpdate(BaseModel):
    """Request body for PUT /api/goals."""

    model_config = ConfigDict(extra="forbid")

    followers: Optional[GoalValues] = None
    impressions: Optional[GoalValues] = None
    revenue: Optional[GoalValues] = None
    tweets: Optional[GoalValues] = None

    def to_changes(self) -> dict[str, dict]:
        """Convert to the tracker's batch edit format."""
        changes = {}
        for key in GOAL_KEYS:
            values = getattr(self, key)
            if values is None:
                continue
            fields = {
                name: value
                for name, value in (("current", values.current), ("target", values.target))
                if value is not None
            }
            if fields:
                changes[key] = fields
        return changes
