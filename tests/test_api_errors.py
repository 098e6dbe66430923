"""API error normalization: one display sentence per failed response.

Tests cover:
    - 429 maps known phrases, falls back to the generic rate-limit sentence
    - 500 never surfaces the body
    - 404/409 share the known-phrase table, else verbatim
    - 400 field-error arrays are labelled, humanized and joined
    - 400 plain strings fall back to table lookup / raw message
    - other statuses fall back to the generic sentence when empty
"""

import json

import pytest

from app.utils.api_errors import (
    FRIENDLY_MESSAGES,
    GENERIC_ERROR,
    SERVER_ERROR,
    TOO_MANY_REQUESTS,
    humanize_field_message,
    normalize,
)


def _fields(*pairs):
    return {"message": json.dumps([{"field": f, "message": m} for f, m in pairs])}


# ─── 429 ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("phrase", list(FRIENDLY_MESSAGES))
def test_429_known_phrases_use_table(phrase):
    assert normalize(429, {"message": phrase}) == FRIENDLY_MESSAGES[phrase]


def test_429_payment_rate_limit_phrase():
    result = normalize(429, {"message": "Too many payment requests, please try again later"})
    assert result == "Too many payment attempts. Please wait a moment and try again."


@pytest.mark.parametrize("body", [{"message": "slow down"}, {}, None, "garbage"])
def test_429_unknown_message_is_generic(body):
    assert normalize(429, body) == TOO_MANY_REQUESTS


# ─── 500 ─────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "body",
    [
        {"message": "TypeError: cannot read property 'x' of undefined at /srv/app.js:12"},
        {"message": "Student not found"},
        {"message": None},
        {},
        None,
        [1, 2, 3],
    ],
)
def test_500_always_redacted(body):
    assert normalize(500, body) == SERVER_ERROR


# ─── 404 / 409 ───────────────────────────────────────────────────

def test_409_student_not_found_uses_friendly_sentence():
    assert normalize(409, {"message": "Student not found"}) == "No student found with this matric number."


def test_404_student_not_found_uses_friendly_sentence():
    assert normalize(404, {"message": "Student not found"}) == "No student found with this matric number."


def test_409_duplicate_matric():
    assert normalize(409, {"message": "matricNumber already exists"}) == (
        "This matric number is already registered."
    )


def test_404_unknown_message_verbatim():
    assert normalize(404, {"message": "Invite not ready"}) == "Invite not ready"


# ─── 400 ─────────────────────────────────────────────────────────

def test_400_single_required_field():
    body = _fields(("body.matricNumber", "Required"))
    assert normalize(400, body) == "Matric number is required"


def test_400_multiple_fields_joined():
    body = _fields(
        ("body.email", "Invalid email"),
        ("body.amount", "Number must be greater than 0"),
    )
    assert normalize(400, body) == "Email must be a valid email address. Amount must be greater than 0"


def test_400_query_prefix_stripped():
    body = _fields(("query.reference", "Required"))
    assert normalize(400, body) == "Reference is required"


def test_400_unknown_field_uses_raw_name():
    body = _fields(("body.nickname", "Required"))
    assert normalize(400, body) == "nickname is required"


def test_400_min_length_extracts_number():
    body = _fields(("body.fullName", "String must contain at least 3 character(s)"))
    assert normalize(400, body) == "Full name must be at least 3 characters"


def test_400_not_json_returns_raw():
    assert normalize(400, {"message": "not json"}) == "not json"


def test_400_plain_known_phrase_uses_table():
    msg = "Can only upgrade to a higher-priced package. Downgrades are not allowed."
    assert normalize(400, {"message": msg}) == "You can only upgrade to a higher-priced package."


@pytest.mark.parametrize("msg", ["[]", "{}", '"text"', "42", "null"])
def test_400_json_that_is_not_a_field_list_returns_raw(msg):
    assert normalize(400, {"message": msg}) == msg


def test_400_empty_body_does_not_raise():
    assert normalize(400, {}) == ""


def test_400_deeply_nested_message_returns_raw():
    msg = "[" * 100000
    assert normalize(400, {"message": msg}) == msg


@pytest.mark.parametrize(
    "records",
    [
        [{"field": None, "message": "Required"}],
        [{"field": "body.email", "message": None}],
        [{"message": "Required"}],
        [{"field": "body.email", "message": "Invalid email"}, {"field": 3, "message": "Required"}],
    ],
)
def test_400_records_without_string_field_and_message_return_raw(records):
    msg = json.dumps(records)
    assert normalize(400, {"message": msg}) == msg


def test_corporate_plus_day_count_sentence():
    phrase = "Corporate Plus package requires exactly 1 additional day (Tuesday, Wednesday, or Thursday)"
    assert normalize(400, {"message": phrase}) == (
        "Corporate Plus requires exactly one additional day — Tuesday, Wednesday, or Thursday."
    )


# ─── other statuses ──────────────────────────────────────────────

def test_other_status_known_phrase():
    assert normalize(403, {"message": "Payment not found"}) == (
        "Payment record not found. Please check your reference."
    )


def test_other_status_unknown_verbatim():
    assert normalize(401, {"message": "Token expired"}) == "Token expired"


@pytest.mark.parametrize("body", [{}, None, {"message": ""}, {"message": 12}])
def test_other_status_empty_is_generic(body):
    assert normalize(502, body) == GENERIC_ERROR


def test_normalize_is_idempotent():
    body = _fields(("body.gender", "Invalid enum value. Expected 'male' | 'female'"))
    assert normalize(400, body) == normalize(400, body) == "Gender has an invalid value"


# ─── humanize_field_message ──────────────────────────────────────

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Required", "is required"),
        ("String must contain at least 6 character(s)", "must be at least 6 characters"),
        ("String must contain exactly 10 character(s)", "is invalid"),
        ("Invalid enum value. Expected 'T' | 'C' | 'F', received 'X'", "has an invalid value"),
        ("Invalid email", "must be a valid email address"),
        ("Expected number, received string", "must be a number"),
        ("Number must be greater than 100", "must be greater than 0"),
        ("Should Be Shorter", "should be shorter"),
    ],
)
def test_humanize_field_message(raw, expected):
    assert humanize_field_message(raw) == expected
