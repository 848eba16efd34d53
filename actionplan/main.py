"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from .api.models import (
    ActionResponse,
    GoalResponse,
    GoalsUpdate,
    MilestoneResponse,
    PlanResponse,
    ToggleResponse,
)
from .config import settings
from .plan.exceptions import (
    ActionNotFoundError,
    InvalidGoalValueError,
    UninitializedPlanError,
)
from .plan.models import AccountMetrics
from .plan.tracker import ActionPlanTracker
from .storage.database import PlanRepository

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_tracker: Optional[ActionPlanTracker] = None


def get_tracker() -> ActionPlanTracker:
    """Get the installation's tracker, creating it on first use."""
    global _tracker
    if _tracker is None:
        _tracker = ActionPlanTracker(
            PlanRepository(settings.db_path),
            horizon_days=settings.plan_horizon_days,
            fast_start_threshold=settings.fast_start_threshold,
            momentum_threshold=settings.momentum_threshold,
        )
    return _tracker


def account_metrics() -> AccountMetrics:
    """Account numbers from settings, used to seed goals on first run."""
    return AccountMetrics(
        followers=settings.account_followers,
        impressions=settings.account_impressions,
        revenue=settings.account_revenue,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    tracker = get_tracker()
    tracker.initialize(date.today(), account_metrics())
    logger.info("Action plan tracker ready")
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Action Plan Tracker",
    description="90-day action plan, streak, goal and milestone tracking",
    version="1.0.0",
    lifespan=lifespan,
)


def resolve_today(
    today: Optional[date] = Query(None, description="Override the current date"),
) -> date:
    return today or date.today()


def _not_initialized(exc: UninitializedPlanError) -> HTTPException:
    logger.warning(f"Plan queried before initialization: {exc}")
    return HTTPException(status_code=409, detail=str(exc))


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Action Plan Tracker",
        "version": "1.0.0",
        "endpoints": {
            "plan": "/api/plan",
            "actions": "/api/plan/actions",
            "toggle": "/api/plan/actions/{action_id}/toggle",
            "goals": "/api/goals",
            "milestones": "/api/milestones",
            "status": "/status",
        },
    }


@app.get("/status")
async def status(tracker: ActionPlanTracker = Depends(get_tracker)):
    """Server status endpoint."""
    return {
        "status": "running",
        "version": "1.0.0",
        "initialized": tracker.initialized,
        "actions": len(tracker.catalog),
    }


@app.get("/api/plan", response_model=PlanResponse)
async def plan_endpoint(
    tracker: ActionPlanTracker = Depends(get_tracker),
    today: date = Depends(resolve_today),
):
    """
    Everything the action plan page shows.

    Next action, phase progress, streak, goals and milestones.
    """
    try:
        snapshot = tracker.snapshot(today)
    except UninitializedPlanError as e:
        raise _not_initialized(e)

    return PlanResponse.from_snapshot(snapshot)


@app.get("/api/plan/actions", response_model=list[ActionResponse])
async def actions_endpoint(
    phase: Optional[int] = Query(None, description="Only this phase"),
    tracker: ActionPlanTracker = Depends(get_tracker),
):
    """Catalog actions with their completion state."""
    items = tracker.catalog.list_all() if phase is None else tracker.catalog.by_phase(phase)
    try:
        return [
            ActionResponse.from_item(item, tracker.completed_date(item.id))
            for item in items
        ]
    except UninitializedPlanError as e:
        raise _not_initialized(e)


@app.post("/api/plan/actions/{action_id}/toggle", response_model=ToggleResponse)
async def toggle_endpoint(
    action_id: str,
    tracker: ActionPlanTracker = Depends(get_tracker),
    today: date = Depends(resolve_today),
):
    """Complete an action, or un-complete it if it is already done."""
    try:
        state = tracker.toggle(action_id, today)
    except ActionNotFoundError as e:
        logger.warning(f"Toggle for unknown action: {action_id}")
        raise HTTPException(status_code=404, detail=str(e))
    except UninitializedPlanError as e:
        raise _not_initialized(e)

    item = tracker.catalog.by_id(action_id)
    return ToggleResponse(
        action=ActionResponse.from_item(item, state.completed_date if state else None),
        streak=tracker.streak(today),
    )


@app.get("/api/goals", response_model=list[GoalResponse])
async def goals_endpoint(tracker: ActionPlanTracker = Depends(get_tracker)):
    """Goal progress bars."""
    try:
        return [GoalResponse.from_progress(g) for g in tracker.goal_progress()]
    except UninitializedPlanError as e:
        raise _not_initialized(e)


@app.put("/api/goals", response_model=list[GoalResponse])
async def update_goals_endpoint(
    update: GoalsUpdate,
    tracker: ActionPlanTracker = Depends(get_tracker),
):
    """
    Edit goal values.

    All edits are applied together or not at all.
    """
    try:
        tracker.update_goals(update.to_changes())
    except InvalidGoalValueError as e:
        logger.warning(f"Rejected goal update: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except UninitializedPlanError as e:
        raise _not_initialized(e)

    return [GoalResponse.from_progress(g) for g in tracker.goal_progress()]


@app.get("/api/milestones", response_model=list[MilestoneResponse])
async def milestones_endpoint(tracker: ActionPlanTracker = Depends(get_tracker)):
    """Milestones with their achieved flag."""
    try:
        return [MilestoneResponse.from_milestone(m) for m in tracker.milestones()]
    except UninitializedPlanError as e:
        raise _not_initialized(e)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
