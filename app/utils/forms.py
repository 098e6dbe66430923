from typing import Mapping, Optional

from app.config import (
    GENDERS,
    MIN_ADMIN_PASSWORD_LEN,
    MIN_FULL_NAME_LEN,
    MIN_MATRIC_LEN,
    PACKAGE_LABELS,
)


def can_continue_registration(matric_number: str, full_name: str, gender: str) -> bool:
    return (
        len((matric_number or "").strip()) >= MIN_MATRIC_LEN
        and len((full_name or "").strip()) >= MIN_FULL_NAME_LEN
        and gender in GENDERS
    )


def can_submit_login(matric_number: str) -> bool:
    return len((matric_number or "").strip()) >= MIN_MATRIC_LEN


def can_submit_admin_login(email: str, password: str) -> bool:
    return "@" in (email or "").strip() and len((password or "").strip()) >= MIN_ADMIN_PASSWORD_LEN


def _first_param(params: Mapping, key: str) -> Optional[str]:
    """
    Query params may hold a single string or a list of repeats.
    Returns the first non-empty value.
    """
    raw = params.get(key)
    values = raw if isinstance(raw, (list, tuple)) else [raw]
    for v in values:
        if v:
            return str(v)
    return None


def payment_reference(params: Mapping) -> Optional[str]:
    # Paystack sends "reference", some gateway callbacks use "tx_ref"
    return _first_param(params, "reference") or _first_param(params, "tx_ref")


def preselected_package(params: Mapping) -> Optional[str]:
    code = (_first_param(params, "package") or "").upper()
    return code if code in PACKAGE_LABELS else None
