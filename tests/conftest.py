from datetime import date

import pytest

from actionplan.plan.catalog import Catalog
from actionplan.plan.models import ActionItem
from actionplan.plan.tracker import ActionPlanTracker
from actionplan.storage.database import PlanRepository

DAY_ZERO = date(2026, 3, 1)


def make_item(action_id, phase=1, priority="normal", **kwargs):
    return ActionItem(
        id=action_id,
        phase=phase,
        priority=priority,
        title=f"Action {action_id}",
        description=f"Do {action_id}",
        **kwargs,
    )


@pytest.fixture
def repository(tmp_path):
    return PlanRepository(str(tmp_path / "plan.db"))


@pytest.fixture
def small_catalog():
    """Two phase-1 items plus one pre-completed five days before day zero."""
    return Catalog(
        [
            make_item("a1", priority="critical"),
            make_item("a2", priority="important"),
            make_item(
                "seed",
                priority="critical",
                pre_completed=True,
                pre_completed_date=date(2026, 2, 24),
            ),
        ]
    )


@pytest.fixture
def tracker(repository):
    tracker = ActionPlanTracker(repository)
    tracker.initialize(DAY_ZERO)
    return tracker
