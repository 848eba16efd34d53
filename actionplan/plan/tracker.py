"""Plan lifecycle and orchestration of the tracker components."""

import logging
import threading
from dataclasses import replace
from datetime import date
from typing import Optional

from actionplan.storage.database import PlanRepository

from .catalog import REFERENCE_CATALOG, Catalog
from .exceptions import UninitializedPlanError
from .goals import GoalTracker, default_goals, display_values, format_compact
from .milestones import MILESTONES, MilestoneContext, evaluate_milestones
from .models import (
    PRIORITIES,
    AccountMetrics,
    ActionItem,
    ActionState,
    Goal,
    GoalProgress,
    Milestone,
    PhaseProgress,
    PlanSnapshot,
    PlanState,
)
from .store import ActionStateStore
from .streak import calculate_streak

logger = logging.getLogger(__name__)


class ActionPlanTracker:
    """
    Owns the plan state and goals for one installation.

    Mutations are applied to copies, persisted, and only then swapped in, so
    a failed write leaves the previous state in place. All derived values
    (streak, phase progress, milestones) are computed from the committed
    state on every call.
    """

    def __init__(
        self,
        repository: PlanRepository,
        catalog: Catalog = REFERENCE_CATALOG,
        horizon_days: int = 90,
        fast_start_threshold: int = 3,
        momentum_threshold: int = 3,
    ):
        """
        Initialize tracker.

        Args:
            repository: Persistence for the plan aggregate
            catalog: Action items of the plan
            horizon_days: Length of the plan in days
            fast_start_threshold: Phase 1 completions for the "fast start" milestone
            momentum_threshold: Phase 2 completions for the "momentum" milestone
        """
        self.repository = repository
        self.catalog = catalog
        self.horizon_days = horizon_days
        self.fast_start_threshold = fast_start_threshold
        self.momentum_threshold = momentum_threshold

        self._plan: Optional[PlanState] = None
        self._goals: Optional[dict[str, Goal]] = None
        self._lock = threading.RLock()

    @property
    def initialized(self) -> bool:
        return self._plan is not None and self._goals is not None

    def _require_plan(self) -> PlanState:
        if self._plan is None or self._goals is None:
            raise UninitializedPlanError(
                "Action plan is not initialized; call initialize() first"
            )
        return self._plan

    def _store(self) -> ActionStateStore:
        return ActionStateStore(self.catalog, self._require_plan())

    def _goal_tracker(self) -> GoalTracker:
        self._require_plan()
        return GoalTracker(self._goals)

    # Lifecycle --------------------------------------------------------

    def initialize(self, today: date, account: Optional[AccountMetrics] = None) -> PlanState:
        """
        Load the plan, creating it on first run.

        A new plan starts today with pre-completed catalog items marked done
        on their configured dates. Those do not add streak dates, since they
        predate the tracker's activity log. Goals are created separately if
        missing, seeded from known account metrics.

        Args:
            today: Current calendar date
            account: Known account numbers for seeding goals

        Returns:
            The (possibly pre-existing) plan state
        """
        with self._lock:
            if self.initialized:
                return self._plan

            plan = self.repository.load_plan()
            goals = self.repository.load_goals()
            created = False

            if plan is None:
                plan = PlanState(start_date=today)
                for item in self.catalog:
                    if item.pre_completed:
                        plan.actions[item.id] = ActionState(
                            completed_date=item.pre_completed_date or today
                        )
                created = True
                logger.info(
                    f"Created action plan starting {today.isoformat()} "
                    f"({len(plan.actions)} pre-completed)"
                )

            if goals is None:
                goals = default_goals(account)
                created = True
                logger.info("Created goals with default targets")

            if created:
                self.repository.save(plan, goals)

            self._plan = plan
            self._goals = goals
            logger.info(f"✓ Action plan loaded (started {plan.start_date.isoformat()})")
            return plan

    def days_elapsed(self, today: date) -> int:
        """
        Whole days since the plan started.

        Never negative, even if today is before the start date.
        """
        plan = self._require_plan()
        return max((today - plan.start_date).days, 0)

    def days_remaining(self, today: date) -> int:
        """Days left in the plan horizon, floored at 0."""
        return max(self.horizon_days - self.days_elapsed(today), 0)

    # Actions ----------------------------------------------------------

    def is_completed(self, action_id: str) -> bool:
        return self._store().is_completed(action_id)

    def completed_count(self, phase: Optional[int] = None) -> int:
        return self._store().completed_count(phase)

    def completed_date(self, action_id: str) -> Optional[date]:
        """Date an action was completed, or None if it is not completed."""
        plan = self._require_plan()
        self.catalog.by_id(action_id)
        state = plan.actions.get(action_id)
        return state.completed_date if state else None

    def toggle(self, action_id: str, today: date) -> Optional[ActionState]:
        """
        Complete or un-complete an action and persist the result.

        Args:
            action_id: Catalog id of the action
            today: Current calendar date

        Returns:
            The new ActionState, or None if the action was un-completed

        Raises:
            ActionNotFoundError: If the id is not in the catalog
        """
        with self._lock:
            plan = self._require_plan().copy()
            state = ActionStateStore(self.catalog, plan).toggle(action_id, today)
            self.repository.save(plan, self._goals)
            self._plan = plan
            return state

    def phase_progress(self) -> list[PhaseProgress]:
        """Completed/total counts for every phase."""
        store = self._store()
        progress = []
        for phase in self.catalog.phases():
            completed, total = store.phase_progress(phase)
            progress.append(
                PhaseProgress(
                    phase=phase,
                    completed=completed,
                    total=total,
                    ratio=store.phase_ratio(phase),
                )
            )
        return progress

    def overall_percent(self) -> int:
        """Share of all actions completed, as a rounded percentage."""
        total = len(self.catalog)
        if total == 0:
            return 0
        return round(self.completed_count() / total * 100)

    def next_action(self) -> Optional[ActionItem]:
        """
        Pick the action to suggest for today.

        The first uncompleted critical action in catalog order, then important,
        then normal.

        Returns:
            The next action, or None when the whole plan is complete
        """
        plan = self._require_plan()
        for priority in PRIORITIES:
            for item in self.catalog:
                if item.priority == priority and item.id not in plan.actions:
                    return item
        return None

    def streak(self, today: date) -> int:
        """Current consecutive-day streak as of today."""
        return calculate_streak(self._require_plan().streak_dates, today)

    # Goals ------------------------------------------------------------

    def _edit_goals(self, edit):
        with self._lock:
            plan = self._require_plan()
            goals = {key: replace(goal) for key, goal in self._goals.items()}
            edit(GoalTracker(goals))
            self.repository.save(plan, goals)
            self._goals = goals

    def set_goal_current(self, key: str, value: float):
        """
        Set a goal's current value.

        Raises:
            InvalidGoalValueError: On unknown key or non-numeric value
        """
        self._edit_goals(lambda tracker: tracker.set_current(key, value))

    def set_goal_target(self, key: str, value: float):
        """
        Set a goal's target.

        Raises:
            InvalidGoalValueError: On unknown key, non-numeric or non-positive value
        """
        self._edit_goals(lambda tracker: tracker.set_target(key, value))

    def update_goals(self, changes: dict[str, dict]):
        """Apply a batch of goal edits in one write, or none of them."""
        self._edit_goals(lambda tracker: tracker.update(changes))

    def goal_progress(self) -> list[GoalProgress]:
        """Current/target/ratio for every goal, in display order."""
        tracker = self._goal_tracker()
        progress = []
        for goal in tracker:
            current_display, target_display = display_values(goal)
            progress.append(
                GoalProgress(
                    key=goal.key,
                    label=goal.label,
                    icon=goal.icon,
                    bar_color=goal.bar_color,
                    current=goal.current,
                    target=goal.target,
                    ratio=tracker.progress_ratio(goal.key),
                    current_display=current_display,
                    target_display=target_display,
                    current_compact=format_compact(goal.current),
                )
            )
        return progress

    # Milestones -------------------------------------------------------

    def milestones(self) -> list[Milestone]:
        context = MilestoneContext(
            store=self._store(),
            goals=self._goal_tracker(),
            fast_start_threshold=self.fast_start_threshold,
            momentum_threshold=self.momentum_threshold,
        )
        return evaluate_milestones(context, MILESTONES)

    # Views ------------------------------------------------------------

    def snapshot(self, today: date) -> PlanSnapshot:
        """
        Compute every derived view of the plan for one render.

        Args:
            today: Current calendar date

        Returns:
            PlanSnapshot for the dashboard
        """
        with self._lock:
            plan = self._require_plan()
            snapshot = PlanSnapshot(
                start_date=plan.start_date,
                today=today,
                days_elapsed=self.days_elapsed(today),
                days_remaining=self.days_remaining(today),
                streak=self.streak(today),
                completed=self.completed_count(),
                total=len(self.catalog),
                overall_percent=self.overall_percent(),
                next_action=self.next_action(),
                phases=self.phase_progress(),
                goals=self.goal_progress(),
                milestones=self.milestones(),
            )

        logger.debug(
            f"Snapshot for {today.isoformat()}: {snapshot.completed}/{snapshot.total} "
            f"done, streak {snapshot.streak}, {snapshot.days_remaining} days left"
        )
        return snapshot
