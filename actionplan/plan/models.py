"""Data models for the action plan, its goals and derived views."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

PRIORITIES = ("critical", "important", "normal")
GOAL_KEYS = ("followers", "impressions", "revenue", "tweets")


@dataclass(frozen=True)
class ActionItem:
    """One step of the plan, defined by the catalog."""
    id: str
    phase: int
    priority: str
    title: str
    description: str
    emoji: str = ""

    # Seed data only
    pre_completed: bool = False
    pre_completed_date: Optional[date] = None


@dataclass
class ActionState:
    """Completion record. Only completed actions have one."""
    completed_date: date
    completed: bool = True

    def to_dict(self) -> dict:
        return {"completed": True, "completedDate": self.completed_date.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "ActionState":
        return cls(completed_date=date.fromisoformat(data["completedDate"]))


@dataclass
class PlanState:
    """Per-user plan state: start date, completions and activity dates."""
    start_date: date
    actions: dict[str, ActionState] = field(default_factory=dict)
    streak_dates: set[date] = field(default_factory=set)

    def copy(self) -> "PlanState":
        return PlanState(
            start_date=self.start_date,
            actions={
                action_id: ActionState(completed_date=state.completed_date)
                for action_id, state in self.actions.items()
            },
            streak_dates=set(self.streak_dates),
        )

    def to_dict(self) -> dict:
        """
        Serialize to the persisted layout.

        Streak dates are written sorted so the stored record is stable.
        """
        return {
            "startDate": self.start_date.isoformat(),
            "actions": {
                action_id: state.to_dict() for action_id, state in self.actions.items()
            },
            "streakDates": [d.isoformat() for d in sorted(self.streak_dates)],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlanState":
        """
        Parse the persisted layout.

        Entries stored with a false ``completed`` flag are dropped, since
        absence is what marks an action as not completed.
        """
        actions = {}
        for action_id, raw in (data.get("actions") or {}).items():
            if raw and raw.get("completed"):
                actions[action_id] = ActionState.from_dict(raw)

        return cls(
            start_date=date.fromisoformat(data["startDate"]),
            actions=actions,
            streak_dates={date.fromisoformat(d) for d in data.get("streakDates") or []},
        )


@dataclass
class Goal:
    """A tracked metric with a current value and a target."""
    key: str
    current: float
    target: float
    label: str = ""
    icon: str = ""
    bar_color: str = ""


@dataclass
class AccountMetrics:
    """Already-known account numbers used to seed goals on first run."""
    followers: float = 0
    impressions: float = 0
    revenue: float = 0


@dataclass
class Milestone:
    """An achievement flag, recomputed on every read."""
    id: str
    icon: str
    title: str
    description: str
    achieved: bool = False


@dataclass
class PhaseProgress:
    """Completed/total counts for one phase."""
    phase: int
    completed: int
    total: int
    ratio: float = 0.0


@dataclass
class GoalProgress:
    """A goal as shown on a progress bar."""
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


@dataclass
class PlanSnapshot:
    """Everything the dashboard needs to draw the action plan page."""
    start_date: date
    today: date
    days_elapsed: int
    days_remaining: int
    streak: int
    completed: int
    total: int
    overall_percent: int
    next_action: Optional[ActionItem]
    phases: list[PhaseProgress] = field(default_factory=list)
    goals: list[GoalProgress] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)

    @property
    def plan_complete(self) -> bool:
        return self.next_action is None
