"""Errors raised by the action plan tracker."""


class ActionPlanError(Exception):
    """Base exception for the action plan tracker."""
    pass


class ActionNotFoundError(ActionPlanError):
    """An action id that is not in the catalog was referenced."""

    def __init__(self, action_id: str):
        self.action_id = action_id
        super().__init__(f"Unknown action: {action_id}")


class InvalidGoalValueError(ActionPlanError):
    """A goal setter received an unknown key or an unusable value."""

    def __init__(self, message: str, goal_key: str = ""):
        self.goal_key = goal_key
        super().__init__(message)


class UninitializedPlanError(ActionPlanError):
    """The plan was queried before initialize() ran."""
    pass
