"""Achievement milestones derived from plan and goal state."""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .goals import GoalTracker
from .models import Milestone
from .store import ActionStateStore


@dataclass
class MilestoneContext:
    """Read-only view of the state milestone predicates look at."""
    store: ActionStateStore
    goals: GoalTracker
    fast_start_threshold: int = 3
    momentum_threshold: int = 3

    def completed(self, phase: Optional[int] = None) -> int:
        return self.store.completed_count(phase)

    def size(self, phase: Optional[int] = None) -> int:
        if phase is None:
            return len(self.store.catalog)
        return self.store.catalog.phase_size(phase)

    def goal_current(self, key: str) -> float:
        goal = self.goals.goals.get(key)
        return goal.current if goal else 0


@dataclass(frozen=True)
class MilestoneDefinition:
    """A milestone's display data and the predicate that unlocks it."""
    id: str
    icon: str
    title: str
    description: str  # may use {fast_start_threshold} and {momentum_threshold}
    predicate: Callable[[MilestoneContext], bool]


MILESTONES: tuple[MilestoneDefinition, ...] = (
    MilestoneDefinition(
        id="first_action",
        icon="🚀",
        title="First Step",
        description="Complete your first action",
        predicate=lambda ctx: ctx.completed() >= 1,
    ),
    MilestoneDefinition(
        id="fast_start",
        icon="🔥",
        title="Fast Start",
        description="Complete {fast_start_threshold} actions from phase 1",
        predicate=lambda ctx: ctx.completed(1) >= ctx.fast_start_threshold,
    ),
    MilestoneDefinition(
        id="first_revenue",
        icon="💰",
        title="First Revenue",
        description="Earn your first dollar",
        predicate=lambda ctx: ctx.goal_current("revenue") > 0,
    ),
    MilestoneDefinition(
        id="phase_one_complete",
        icon="⚡",
        title="Phase 1 Done",
        description="Finish the day 0-30 plan",
        predicate=lambda ctx: ctx.size(1) > 0 and ctx.completed(1) == ctx.size(1),
    ),
    MilestoneDefinition(
        id="momentum",
        icon="📈",
        title="Momentum",
        description="Complete {momentum_threshold} actions from phase 2",
        predicate=lambda ctx: ctx.completed(2) >= ctx.momentum_threshold,
    ),
    MilestoneDefinition(
        id="plan_complete",
        icon="🏆",
        title="Master",
        description="Complete every action in the plan",
        predicate=lambda ctx: ctx.size() > 0 and ctx.completed() == ctx.size(),
    ),
)


def evaluate_milestones(
    context: MilestoneContext,
    definitions: Sequence[MilestoneDefinition] = MILESTONES,
) -> list[Milestone]:
    """
    Evaluate every milestone against the current state.

    Args:
        context: State snapshot to evaluate against
        definitions: Milestones to check, in display order

    Returns:
        Milestones with their achieved flag set
    """
    return [
        Milestone(
            id=definition.id,
            icon=definition.icon,
            title=definition.title,
            description=definition.description.format(
                fast_start_threshold=context.fast_start_threshold,
                momentum_threshold=context.momentum_threshold,
            ),
            achieved=bool(definition.predicate(context)),
        )
        for definition in definitions
    ]
