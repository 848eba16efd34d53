from datetime import date

from actionplan.plan.catalog import REFERENCE_CATALOG, Catalog
from actionplan.plan.goals import GoalTracker, default_goals
from actionplan.plan.milestones import (
    MILESTONES,
    MilestoneContext,
    MilestoneDefinition,
    evaluate_milestones,
)
from actionplan.plan.models import PlanState
from actionplan.plan.store import ActionStateStore

from conftest import make_item

TODAY = date(2026, 3, 10)


def achieved(context, definitions=MILESTONES):
    return {m.id: m.achieved for m in evaluate_milestones(context, definitions)}


def reference_context(completed=(), revenue=0, **thresholds):
    store = ActionStateStore(REFERENCE_CATALOG, PlanState(start_date=TODAY))
    for action_id in completed:
        store.toggle(action_id, TODAY)
    goals = GoalTracker(default_goals())
    goals.set_current("revenue", revenue)
    return MilestoneContext(store=store, goals=goals, **thresholds)


def test_nothing_achieved_on_empty_plan():
    result = achieved(reference_context())
    assert list(result) == [
        "first_action",
        "fast_start",
        "first_revenue",
        "phase_one_complete",
        "momentum",
        "plan_complete",
    ]
    assert not any(result.values())


def test_first_action_and_fast_start():
    result = achieved(reference_context(["p1_1"]))
    assert result["first_action"]
    assert not result["fast_start"]

    result = achieved(reference_context(["p1_1", "p1_2", "p1_3"]))
    assert result["fast_start"]
    assert not result["phase_one_complete"]


def test_fast_start_threshold_is_configurable():
    result = achieved(reference_context(["p1_1", "p1_2"], fast_start_threshold=2))
    assert result["fast_start"]


def test_first_revenue():
    assert achieved(reference_context(revenue=1))["first_revenue"]
    assert not achieved(reference_context(revenue=0))["first_revenue"]


def test_phase_one_complete_and_momentum():
    phase_one = [item.id for item in REFERENCE_CATALOG.by_phase(1)]
    result = achieved(reference_context(phase_one + ["p2_1", "p2_2", "p2_3"]))
    assert result["phase_one_complete"]
    assert result["momentum"]
    assert not result["plan_complete"]


def test_plan_complete():
    result = achieved(reference_context([item.id for item in REFERENCE_CATALOG]))
    assert result["plan_complete"]
    assert result["momentum"]
    assert not result["first_revenue"]


def test_thresholds_follow_catalog_size():
    catalog = Catalog([make_item("a"), make_item("b", phase=2)])
    store = ActionStateStore(catalog, PlanState(start_date=TODAY))
    context = MilestoneContext(store=store, goals=GoalTracker(default_goals()))

    store.toggle("a", TODAY)
    assert achieved(context)["phase_one_complete"]
    assert not achieved(context)["plan_complete"]

    store.toggle("b", TODAY)
    assert achieved(context)["plan_complete"]


def test_empty_catalog_completes_nothing():
    store = ActionStateStore(Catalog([]), PlanState(start_date=TODAY))
    context = MilestoneContext(store=store, goals=GoalTracker(default_goals()))
    result = achieved(context)
    assert not result["phase_one_complete"]
    assert not result["plan_complete"]


def test_custom_definitions_are_additive():
    streaky = MilestoneDefinition(
        id="two_done",
        icon="✌️",
        title="Two Done",
        description="Complete two actions",
        predicate=lambda ctx: ctx.completed() >= 2,
    )
    context = reference_context(["p1_1", "p3_1"])
    result = achieved(context, MILESTONES + (streaky,))
    assert result["two_done"]
    assert result["first_action"]


def test_descriptions_show_configured_thresholds():
    context = reference_context(["p1_1", "p1_2", "p1_3"], fast_start_threshold=5, momentum_threshold=4)
    milestones = {m.id: m for m in evaluate_milestones(context)}

    assert milestones["fast_start"].description == "Complete 5 actions from phase 1"
    assert not milestones["fast_start"].achieved
    assert milestones["momentum"].description == "Complete 4 actions from phase 2"
    assert milestones["first_action"].description == "Complete your first action"
