"""Completion state for catalog actions."""

import logging
from datetime import date
from typing import Optional

from .catalog import Catalog
from .models import ActionState, PlanState

logger = logging.getLogger(__name__)


class ActionStateStore:
    """
    Reads and mutates the completion map of a PlanState.

    The map is sparse: an action is completed iff it has an entry. The store
    mutates the PlanState it wraps in place; callers that need all-or-nothing
    semantics hand it a copy and swap the copy in after persisting.
    """

    def __init__(self, catalog: Catalog, plan: PlanState):
        """
        Initialize store.

        Args:
            catalog: Action catalog used to validate ids and count per phase
            plan: Plan state to read and mutate
        """
        self.catalog = catalog
        self.plan = plan

    def is_completed(self, action_id: str) -> bool:
        """
        Check whether an action is completed.

        Raises:
            ActionNotFoundError: If the id is not in the catalog
        """
        self.catalog.by_id(action_id)
        return action_id in self.plan.actions

    def toggle(self, action_id: str, today: date) -> Optional[ActionState]:
        """
        Flip the completion state of an action.

        Completing records today's date and adds today to the streak dates.
        Un-completing removes the entry but keeps the streak dates, which
        record that something was done on a day, not which action.

        Args:
            action_id: Catalog id of the action
            today: Current calendar date

        Returns:
            The new ActionState, or None if the action was un-completed

        Raises:
            ActionNotFoundError: If the id is not in the catalog
        """
        self.catalog.by_id(action_id)

        if action_id in self.plan.actions:
            del self.plan.actions[action_id]
            logger.info(f"Action {action_id} marked incomplete")
            return None

        state = ActionState(completed_date=today)
        self.plan.actions[action_id] = state
        self.plan.streak_dates.add(today)
        logger.info(f"✓ Action {action_id} completed on {today.isoformat()}")
        return state

    def completed_count(self, phase: Optional[int] = None) -> int:
        """
        Count completed catalog actions.

        Entries for ids that are no longer in the catalog are ignored.

        Args:
            phase: Restrict the count to one phase

        Returns:
            Number of completed actions
        """
        items = self.catalog.list_all() if phase is None else self.catalog.by_phase(phase)
        return sum(1 for item in items if item.id in self.plan.actions)

    def phase_progress(self, phase: int) -> tuple[int, int]:
        """Return (completed, total) for a phase."""
        return self.completed_count(phase), self.catalog.phase_size(phase)

    def phase_ratio(self, phase: int) -> float:
        """Fraction of a phase that is completed, 0.0 for an empty phase."""
        completed, total = self.phase_progress(phase)
        if total == 0:
            return 0.0
        return completed / total
