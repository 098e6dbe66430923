"""Form rules and query-string helpers."""

import pytest

from app.utils import forms


@pytest.mark.parametrize(
    "matric, name, gender, ok",
    [
        ("190401001", "Ada Obi", "female", True),
        (" 19040 ", "Ada Obi", "female", False),
        ("190401001", " Al ", "male", False),
        ("190401001", "Ada Obi", "", False),
        ("190401001", "Ada Obi", "other", False),
    ],
)
def test_can_continue_registration(matric, name, gender, ok):
    assert forms.can_continue_registration(matric, name, gender) is ok


def test_can_submit_login():
    assert forms.can_submit_login("190401")
    assert not forms.can_submit_login("  1904  ")
    assert not forms.can_submit_login(None)


def test_can_submit_admin_login():
    assert forms.can_submit_admin_login("admin@fyw.com", "secret1")
    assert not forms.can_submit_admin_login("admin", "secret1")
    assert not forms.can_submit_admin_login("admin@fyw.com", "  abc  ")


def test_payment_reference_prefers_reference():
    assert forms.payment_reference({"reference": "r1", "tx_ref": "t1"}) == "r1"
    assert forms.payment_reference({"tx_ref": "t1"}) == "t1"
    assert forms.payment_reference({"reference": ""}) is None
    assert forms.payment_reference({}) is None


def test_payment_reference_takes_first_non_empty_repeat():
    assert forms.payment_reference({"reference": ["", "r2", "r3"]}) == "r2"


def test_preselected_package():
    assert forms.preselected_package({"package": "t"}) == "T"
    assert forms.preselected_package({"package": "Z"}) is None
    assert forms.preselected_package({}) is None
