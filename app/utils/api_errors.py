import json
import re

GENERIC_ERROR = "Something went wrong. Please try again."
SERVER_ERROR = "Something went wrong on our end. Please try again."
TOO_MANY_REQUESTS = "Too many requests. Please wait a moment and try again."

FIELD_LABELS = {
    "matricNumber": "Matric number",
    "fullName": "Full name",
    "gender": "Gender",
    "packageCode": "Package",
    "newPackageCode": "Package",
    "email": "Email",
    "amount": "Amount",
    "studentId": "Student ID",
    "reference": "Reference",
}

# Known API phrases -> display sentence. Shared by every status branch.
FRIENDLY_MESSAGES = {
    "matricNumber already exists": "This matric number is already registered.",
    "Student not found": "No student found with this matric number.",
    "Package already fully paid": "This package has already been fully paid.",
    "Amount must be greater than 0": "Payment amount must be greater than zero.",
    "Failed to initialize payment": "Payment could not be started. Please try again.",
    "Payment verification failed": (
        "We couldn't verify your payment. Please contact support if money was deducted."
    ),
    "Payment not found": "Payment record not found. Please check your reference.",
    "Can only upgrade to a higher-priced package. Downgrades are not allowed.": (
        "You can only upgrade to a higher-priced package."
    ),
    "Corporate Plus package requires exactly 1 additional day (Tuesday, Wednesday, or Thursday)": (
        "Corporate Plus requires exactly one additional day — Tuesday, Wednesday, or Thursday."
    ),
    "Corporate Plus package: additional day must be Tuesday, Wednesday, or Thursday": (
        "The chosen day must be Tuesday, Wednesday, or Thursday."
    ),
    "Selected days contain invalid day values": "One or more selected days are invalid.",
    "Internal server error": SERVER_ERROR,
    "Too many requests, please try again later": TOO_MANY_REQUESTS,
    "Too many payment requests, please try again later": (
        "Too many payment attempts. Please wait a moment and try again."
    ),
}

_FIELD_PREFIX = re.compile(r"^(body|query)\.")
_MIN_LENGTH = re.compile(r"String must contain at least (\d+)")

# (predicate, replacement) pairs, first match wins
_FIELD_MESSAGE_RULES = [
    (lambda m: m == "Required", lambda m: "is required"),
    (
        lambda m: _MIN_LENGTH.search(m) is not None,
        lambda m: f"must be at least {_MIN_LENGTH.search(m).group(1)} characters",
    ),
    (lambda m: m.startswith("String must contain exactly"), lambda m: "is invalid"),
    (lambda m: m.startswith("Invalid enum value"), lambda m: "has an invalid value"),
    (lambda m: m == "Invalid email", lambda m: "must be a valid email address"),
    (lambda m: m == "Expected number, received string", lambda m: "must be a number"),
    (lambda m: m.startswith("Number must be greater than"), lambda m: "must be greater than 0"),
]


def humanize_field_message(raw: str) -> str:
    for matches, render in _FIELD_MESSAGE_RULES:
        if matches(raw):
            return render(raw)
    return raw.lower()


def _message_of(body) -> str:
    if isinstance(body, dict):
        msg = body.get("message")
        if isinstance(msg, str):
            return msg
    return ""


def _friendly(msg: str) -> str:
    return FRIENDLY_MESSAGES.get(msg, msg)


def _field_errors(msg: str) -> list[dict] | None:
    """
    Validation failures arrive as a JSON array encoded inside the message
    string, e.g. '[{"field": "body.email", "message": "Invalid email"}]'.
    """
    try:
        parsed = json.loads(msg)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, list) or not parsed:
        return None
    for err in parsed:
        if not isinstance(err, dict):
            return None
        if not isinstance(err.get("field"), str) or not isinstance(err.get("message"), str):
            return None
    return parsed


def _describe_field_error(err: dict) -> str:
    key = _FIELD_PREFIX.sub("", err["field"])
    label = FIELD_LABELS.get(key, key)
    return f"{label} {humanize_field_message(err['message'])}"


def normalize(status: int, body) -> str:
    """
    Turn a failed API response into one sentence fit for display.
    Never raises; 500 bodies are never surfaced.
    """
    msg = _message_of(body)

    if status == 429:
        return FRIENDLY_MESSAGES.get(msg, TOO_MANY_REQUESTS)
    if status == 500:
        return SERVER_ERROR
    if status in (409, 404):
        # "Student not found" is looked up for both statuses
        return _friendly(msg)
    if status == 400:
        errors = _field_errors(msg)
        if errors:
            return ". ".join(_describe_field_error(e) for e in errors)
        return _friendly(msg)

    return _friendly(msg) or GENERIC_ERROR
