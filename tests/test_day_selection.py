"""Package/day selection: Corporate Plus needs exactly one extra day.

Tests cover:
    - validate accepts one allowed day for T, rejects 0, 2 or a disallowed day
    - validate ignores days for every other package
    - toggle_day clears on reselect and replaces otherwise
    - registration_days is only sent for T
"""

import pytest

from app.errors import PortalError, ValidationError
from app.models.students import PackageCode, Weekday
from app.utils.day_selection import (
    DAY_REQUIREMENT_MESSAGE,
    DayRequirementError,
    can_select,
    registration_days,
    toggle_day,
    validate,
)


@pytest.mark.parametrize("day", ["TUESDAY", "WEDNESDAY", "THURSDAY", Weekday.TUESDAY])
def test_plus_accepts_one_allowed_day(day):
    validate("T", {day})


@pytest.mark.parametrize(
    "days",
    [set(), {"TUESDAY", "WEDNESDAY"}, {"MONDAY"}, {"FRIDAY"}, {"SATURDAY"}],
)
def test_plus_rejects_bad_selection(days):
    with pytest.raises(DayRequirementError) as exc:
        validate("T", days)
    assert str(exc.value) == DAY_REQUIREMENT_MESSAGE


def test_plus_accepts_enum_code_and_lowercase():
    validate(PackageCode.CORPORATE_PLUS, ["THURSDAY"])
    with pytest.raises(DayRequirementError):
        validate("t", [])


@pytest.mark.parametrize("code", ["C", "F", PackageCode.FULL])
@pytest.mark.parametrize("days", [set(), {"TUESDAY"}, {"MONDAY", "FRIDAY"}])
def test_other_packages_accept_anything(code, days):
    validate(code, days)


def test_day_requirement_is_a_validation_error():
    assert issubclass(DayRequirementError, ValidationError)
    assert issubclass(DayRequirementError, PortalError)


def test_can_select():
    assert can_select("T", ["TUESDAY"]) is True
    assert can_select("T", []) is False
    assert can_select("F", []) is True


# ─── toggle_day ──────────────────────────────────────────────────

def test_toggle_selects_into_empty():
    assert toggle_day([], "TUESDAY") == ["TUESDAY"]


def test_toggle_same_day_clears():
    assert toggle_day(["TUESDAY"], "TUESDAY") == []


def test_toggle_other_day_replaces():
    assert toggle_day(["TUESDAY"], "THURSDAY") == ["THURSDAY"]


def test_toggle_never_grows_past_one():
    selected = []
    for day in ["TUESDAY", "WEDNESDAY", "THURSDAY", "WEDNESDAY"]:
        selected = toggle_day(selected, day)
        assert len(selected) <= 1
    assert selected == ["WEDNESDAY"]


# ─── registration_days ───────────────────────────────────────────

def test_registration_days_only_for_plus():
    assert registration_days("T", [Weekday.WEDNESDAY]) == ["WEDNESDAY"]
    assert registration_days("F", ["WEDNESDAY"]) is None
