import json
import sqlite3
from datetime import date

from actionplan.plan.goals import default_goals
from actionplan.plan.models import ActionState, PlanState
from actionplan.storage.database import GOALS_KEY, PLAN_KEY, PlanRepository


def raw_record(repository, key):
    with sqlite3.connect(repository.db_path) as conn:
        row = conn.execute("SELECT value FROM records WHERE key = ?", (key,)).fetchone()
    return json.loads(row[0])


def test_creates_parent_directory(tmp_path):
    repository = PlanRepository(str(tmp_path / "nested" / "dir" / "plan.db"))
    assert repository.db_path.parent.is_dir()
    assert repository.load_plan() is None
    assert repository.load_goals() is None
    assert not repository.is_initialized()


def test_save_writes_persisted_layout(repository):
    plan = PlanState(
        start_date=date(2026, 3, 1),
        actions={"p1_1": ActionState(completed_date=date(2026, 3, 2))},
        streak_dates={date(2026, 3, 3), date(2026, 3, 2)},
    )
    goals = default_goals()
    goals["revenue"].current = 12.5

    repository.save(plan, goals)

    assert raw_record(repository, PLAN_KEY) == {
        "startDate": "2026-03-01",
        "actions": {"p1_1": {"completed": True, "completedDate": "2026-03-02"}},
        "streakDates": ["2026-03-02", "2026-03-03"],
    }
    stored_goals = raw_record(repository, GOALS_KEY)
    assert stored_goals["revenue"] == {"current": 12.5, "target": 200}
    assert set(stored_goals) == {"followers", "impressions", "revenue", "tweets"}
    assert repository.is_initialized()


def test_load_restores_plan_and_goal_metadata(repository):
    plan = PlanState(start_date=date(2026, 3, 1), streak_dates={date(2026, 3, 1)})
    plan.actions["p2_1"] = ActionState(completed_date=date(2026, 3, 1))
    goals = default_goals()
    goals["tweets"].target = 300

    repository.save(plan, goals)

    loaded = repository.load_plan()
    assert loaded == plan
    loaded_goals = repository.load_goals()
    assert loaded_goals["tweets"].target == 300
    assert loaded_goals["tweets"].label == "Monthly tweets"


def test_overwrite_replaces_previous_record(repository):
    plan = PlanState(start_date=date(2026, 3, 1))
    plan.actions["p1_1"] = ActionState(completed_date=date(2026, 3, 1))
    repository.save(plan, default_goals())

    del plan.actions["p1_1"]
    repository.save(plan, default_goals())

    assert repository.load_plan().actions == {}


def test_false_completion_entries_are_dropped(repository):
    with sqlite3.connect(repository.db_path) as conn:
        conn.execute(
            "INSERT INTO records (key, value, updated_at) VALUES (?, ?, ?)",
            (
                PLAN_KEY,
                json.dumps(
                    {
                        "startDate": "2026-03-01",
                        "actions": {
                            "p1_1": {"completed": False, "completedDate": "2026-03-02"},
                            "p1_3": {"completed": True, "completedDate": "2026-03-02"},
                        },
                        "streakDates": ["2026-03-02"],
                    }
                ),
                "2026-03-02T00:00:00+00:00",
            ),
        )
        conn.commit()

    assert list(repository.load_plan().actions) == ["p1_3"]
