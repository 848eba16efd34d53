"""Simple SQLite key-value store for the plan aggregate."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from actionplan.plan.goals import GOAL_DEFAULTS
from actionplan.plan.models import GOAL_KEYS, Goal, PlanState

logger = logging.getLogger(__name__)

PLAN_KEY = "actionplan"
GOALS_KEY = "goals"


class PlanRepository:
    """SQLite persistence for the plan state and goals."""

    def __init__(self, db_path: str = "data/actionplan.db"):
        """Initialize database."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Create database tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        logger.info(f"Database initialized at {self.db_path}")

    def _get(self, key: str) -> Optional[dict]:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT value FROM records WHERE key = ?", (key,))
            row = cursor.fetchone()

        if not row:
            return None
        return json.loads(row[0])

    def load_plan(self) -> Optional[PlanState]:
        """Get the stored plan state, or None on first run."""
        data = self._get(PLAN_KEY)
        if data is None:
            return None

        plan = PlanState.from_dict(data)
        logger.debug(
            f"Loaded plan started {plan.start_date}: "
            f"{len(plan.actions)} completed, {len(plan.streak_dates)} active days"
        )
        return plan

    def load_goals(self) -> Optional[dict[str, Goal]]:
        """
        Get the stored goals, or None on first run.

        Only current/target are stored; display metadata comes from the
        goal defaults.
        """
        data = self._get(GOALS_KEY)
        if data is None:
            return None

        goals = {}
        for key in GOAL_KEYS:
            default_target, label, icon, bar_color = GOAL_DEFAULTS[key]
            raw = data.get(key) or {}
            goals[key] = Goal(
                key=key,
                current=raw.get("current", 0),
                target=raw.get("target", default_target),
                label=label,
                icon=icon,
                bar_color=bar_color,
            )
        return goals

    def save(self, plan: PlanState, goals: dict[str, Goal]):
        """
        Write the plan and goals in one transaction.

        Either both records are updated or neither is.
        """
        now = datetime.now(timezone.utc).isoformat()
        goals_data = {
            key: {"current": goal.current, "target": goal.target}
            for key, goal in goals.items()
        }

        with sqlite3.connect(self.db_path) as conn:
            conn.executemany(
                """
                INSERT INTO records (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                [
                    (PLAN_KEY, json.dumps(plan.to_dict()), now),
                    (GOALS_KEY, json.dumps(goals_data), now),
                ],
            )
            conn.commit()
        logger.debug(f"Saved plan aggregate to {self.db_path}")

    def is_initialized(self) -> bool:
        """Whether a plan has been stored."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT 1 FROM records WHERE key = ?", (PLAN_KEY,))
            return cursor.fetchone() is not None
