from typing import Iterable, Optional

from app.config import PLUS_PACKAGE_CODE
from app.errors import ValidationError
from app.models.students import Weekday

PLUS_ALLOWED_DAYS = frozenset({Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY})
DAY_REQUIREMENT_MESSAGE = (
    "Please select exactly one additional day (Tuesday, Wednesday, or Thursday)."
)


class DayRequirementError(ValidationError):
    """Corporate Plus was chosen without exactly one allowed extra day."""

    def __init__(self, message: str = DAY_REQUIREMENT_MESSAGE):
        super().__init__(message)


def _as_weekday(day) -> Optional[Weekday]:
    try:
        return Weekday(getattr(day, "value", day))
    except ValueError:
        return None


def requires_day(code) -> bool:
    return str(getattr(code, "value", code)).upper() == PLUS_PACKAGE_CODE


def validate(code, selected_days: Iterable) -> None:
    """
    Raise DayRequirementError unless the selection suits the package.
    Only the plus tier constrains days; every other code accepts anything.
    """
    if not requires_day(code):
        return
    days = set(selected_days)
    if len(days) != 1:
        raise DayRequirementError()
    if _as_weekday(next(iter(days))) not in PLUS_ALLOWED_DAYS:
        raise DayRequirementError()


def can_select(code, selected_days: Iterable) -> bool:
    try:
        validate(code, selected_days)
    except DayRequirementError:
        return False
    return True


def toggle_day(selected: Iterable, day) -> list:
    # Picking the current day clears it, picking another replaces it
    if day in list(selected):
        return []
    return [day]


def registration_days(code, selected_days: Iterable) -> Optional[list[str]]:
    """selectedDays for the identify request; only sent for the plus tier."""
    if not requires_day(code):
        return None
    return [str(getattr(d, "value", d)) for d in selected_days]
