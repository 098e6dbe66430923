# app/ui/state.py
import time
from typing import Callable, Optional

import streamlit as st

from app.config import SEARCH_DEBOUNCE_SECONDS
from app.utils.day_selection import toggle_day

# Centralize keys to avoid typos across files
KEY_MATRIC = "fyw_matric"
KEY_PAGE = "nav_page"
KEY_NAV_TO = "_nav_to"
KEY_PAY_AMOUNT = "pay_amount"
KEY_PAY_AMOUNT_FOR = "_pay_amount_for"
KEY_PRESELECTED = "preselected_package"
KEY_REGISTER_STEP = "register_step"
KEY_REG_FORM = "_registration_form"
KEY_SELECTED_DAYS = "selected_days"
KEY_DAYS_ERROR = "days_error"

KEY_ADMIN_TOKEN = "admin_token"
KEY_ADMIN_EMAIL = "admin_email"
KEY_SEARCH = "admin_search"
KEY_STATUS = "admin_status"
KEY_PACKAGE = "admin_package"
KEY_ADMIN_PAGE = "admin_page"
KEY_SEARCH_DEBOUNCER = "_search_debouncer"
KEY_DO_RESET_FILTERS = "_do_reset_filters"

ALL = "ALL"


class SearchDebouncer:
    """
    Holds a typed search term back until it has been stable for `delay`
    seconds. Only the committed term is sent to the API.
    """

    def __init__(self, delay: float = SEARCH_DEBOUNCE_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self.clock = clock
        self.pending = ""
        self.committed = ""
        self.changed_at: Optional[float] = None

    def update(self, value: str) -> None:
        if value != self.pending:
            self.pending = value
            self.changed_at = self.clock()

    def remaining(self) -> float:
        if self.changed_at is None or self.pending == self.committed:
            return 0.0
        return max(0.0, self.delay - (self.clock() - self.changed_at))

    def settle(self) -> str:
        if self.pending != self.committed and self.remaining() == 0.0:
            self.committed = self.pending
        return self.committed

    def reset(self) -> None:
        self.pending = self.committed = ""
        self.changed_at = None


def init_state_if_missing() -> None:
    """Call at the top of the page before rendering widgets."""
    defaults = {
        KEY_MATRIC: None,
        KEY_REGISTER_STEP: 1,
        KEY_SELECTED_DAYS: [],
        KEY_PRESELECTED: None,
        KEY_DAYS_ERROR: None,
        KEY_ADMIN_TOKEN: None,
        KEY_ADMIN_EMAIL: None,
        KEY_SEARCH: "",
        KEY_STATUS: ALL,
        KEY_PACKAGE: ALL,
        KEY_ADMIN_PAGE: 1,
    }
    for k, v in defaults.items():
        st.session_state.setdefault(k, v)
    if KEY_SEARCH_DEBOUNCER not in st.session_state:
        st.session_state[KEY_SEARCH_DEBOUNCER] = SearchDebouncer()


def navigate(page: str) -> None:
    """Switch screens on the next run (the nav radio is already rendered)."""
    st.session_state[KEY_NAV_TO] = page
    st.rerun()


def apply_navigation_if_marked() -> None:
    target = st.session_state.pop(KEY_NAV_TO, None)
    if target:
        st.session_state[KEY_PAGE] = target


# -----------------------------
# Student session
# -----------------------------
def remember_student(matric_number: str) -> None:
    st.session_state[KEY_MATRIC] = matric_number.strip()


def forget_student() -> None:
    st.session_state[KEY_MATRIC] = None
    st.session_state[KEY_REGISTER_STEP] = 1
    st.session_state[KEY_SELECTED_DAYS] = []


def on_toggle_day(day: str) -> None:
    st.session_state[KEY_DAYS_ERROR] = None
    st.session_state[KEY_SELECTED_DAYS] = toggle_day(st.session_state[KEY_SELECTED_DAYS], day)


def go_to_step(step: int) -> None:
    st.session_state[KEY_REGISTER_STEP] = step


REG_INPUT_KEYS = ("reg_matric", "reg_full_name", "reg_gender", "reg_email")


def continue_to_packages() -> None:
    # Widget values are dropped once their widgets stop rendering, so keep a copy
    st.session_state[KEY_REG_FORM] = {k: st.session_state.get(k) for k in REG_INPUT_KEYS}
    st.session_state[KEY_REGISTER_STEP] = 2


def restore_registration_inputs() -> None:
    saved = st.session_state.get(KEY_REG_FORM) or {}
    for k in REG_INPUT_KEYS:
        if k not in st.session_state and saved.get(k) is not None:
            st.session_state[k] = saved[k]


def set_pay_amount(amount: float) -> None:
    st.session_state[KEY_PAY_AMOUNT] = amount


# -----------------------------
# Admin session + filters
# -----------------------------
def logout_admin() -> None:
    st.session_state[KEY_ADMIN_TOKEN] = None
    st.session_state[KEY_ADMIN_EMAIL] = None


def on_filter_change() -> None:
    # Any filter change starts again from the first page
    st.session_state[KEY_ADMIN_PAGE] = 1


def set_admin_page(page: int) -> None:
    st.session_state[KEY_ADMIN_PAGE] = max(1, page)


def mark_reset_filters() -> None:
    st.session_state[KEY_DO_RESET_FILTERS] = True


def apply_filter_reset_if_marked() -> None:
    """
    Call BEFORE creating the filter widgets; Streamlit forbids writing a
    widget's key after it has been rendered in the same run.
    """
    if st.session_state.get(KEY_DO_RESET_FILTERS):
        st.session_state[KEY_SEARCH] = ""
        st.session_state[KEY_STATUS] = ALL
        st.session_state[KEY_PACKAGE] = ALL
        st.session_state[KEY_ADMIN_PAGE] = 1
        st.session_state[KEY_SEARCH_DEBOUNCER].reset()
        st.session_state[KEY_DO_RESET_FILTERS] = False


def committed_search() -> str:
    """
    Feed the current search box into the debouncer and wait out whatever
    is left of the delay before returning the term to query with.
    """
    debouncer: SearchDebouncer = st.session_state[KEY_SEARCH_DEBOUNCER]
    debouncer.update(st.session_state[KEY_SEARCH])
    wait = debouncer.remaining()
    if wait > 0:
        time.sleep(wait)
    return debouncer.settle()
