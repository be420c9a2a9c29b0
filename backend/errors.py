"""
errors.py — Typed domain failures
Services raise these; routes translate them into HTTP responses.
"""


class HabitTrackerError(Exception):
    """Base class for business-rule failures reported to the caller."""

    status_code = 400
    code = "error"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_detail(self) -> dict:
        detail = {"message": self.message, "code": self.code}
        if self.field:
            detail["field"] = self.field
        return detail


class ValidationError(HabitTrackerError):
    code = "validation_error"


class NotFound(HabitTrackerError):
    status_code = 404
    code = "not_found"


class Conflict(HabitTrackerError):
    code = "conflict"


class DuplicateName(Conflict):
    code = "duplicate_name"

    def __init__(self, message: str = "You already have a habit with this name"):
        super().__init__(message, field="name")


class AlreadyCheckedIn(Conflict):
    code = "already_checked_in"

    def __init__(self, message: str = "Already checked in for this habit today"):
        super().__init__(message, field="habit_id")


class AlreadyFollowing(Conflict):
    code = "already_following"

    def __init__(self, message: str = "Already following this user"):
        super().__init__(message, field="user_id")


class NotFollowing(Conflict):
    code = "not_following"

    def __init__(self, message: str = "Not following this user"):
        super().__init__(message, field="user_id")


class SelfFollow(Conflict):
    code = "self_follow"

    def __init__(self, message: str = "Cannot follow yourself"):
        super().__init__(message, field="user_id")


class FollowRequired(HabitTrackerError):
    status_code = 403
    code = "follow_required"

    def __init__(self, message: str = "Must follow user to view their habits"):
        super().__init__(message, field="user_id")
