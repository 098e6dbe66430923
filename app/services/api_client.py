import logging
from typing import Iterable, Optional
from urllib.parse import quote

import requests
import streamlit as st
from streamlit.errors import StreamlitAPIException

from app.config import (
    ADMIN_LOGIN_PATH,
    ADMIN_STUDENTS_PATH,
    ADMIN_PAGE_LIMIT,
    DEFAULT_API_BASE,
    DEFAULT_API_TIMEOUT,
    IDENTIFY_PATH,
    PACKAGES_PATH,
    PAYMENT_INIT_PATH,
    PAYMENT_VERIFY_PATH,
    STUDENT_PATH,
)
from app.errors import ApiRequestError, NetworkError
from app.models.students import (
    IdentifyPayload,
    Package,
    Student,
    StudentPage,
    StudentStatus,
)
from app.utils import day_selection
from app.utils.api_errors import normalize

logger = logging.getLogger(__name__)


def _unwrap(payload):
    # Most endpoints answer {"success": true, "data": {...}}
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class FywApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    # -----------------------------
    # Transport
    # -----------------------------
    def _request(self, method: str, path: str, *, token: Optional[str] = None, **kwargs):
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, path)

        try:
            resp = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.exception("Request to %s failed", path)
            raise NetworkError(cause=exc) from exc

        if not resp.ok:
            try:
                body = resp.json()
            except (ValueError, RecursionError):
                body = {}
            logger.warning("%s %s -> %s", method, path, resp.status_code)
            raise ApiRequestError(normalize(resp.status_code, body), resp.status_code)

        try:
            return resp.json()
        except (ValueError, RecursionError) as exc:
            logger.error("Malformed JSON from %s", path)
            raise NetworkError(cause=exc) from exc

    # -----------------------------
    # Student endpoints
    # -----------------------------
    def list_packages(self) -> list[Package]:
        data = _unwrap(self._request("GET", PACKAGES_PATH))
        if not isinstance(data, list):
            raise NetworkError()
        return [Package.from_api(p) for p in data]

    def identify_student(
        self,
        payload: IdentifyPayload,
        package_code: str,
        selected_days: Iterable = (),
    ) -> Student:
        """
        Register (or re-identify) a student with their chosen package.
        The day rule is checked here too so a bad selection never leaves the client.
        """
        selected_days = list(selected_days)
        day_selection.validate(package_code, selected_days)

        body = payload.to_api()
        body["packageCode"] = package_code
        days = day_selection.registration_days(package_code, selected_days)
        if days is not None:
            body["selectedDays"] = days

        data = _unwrap(self._request("POST", IDENTIFY_PATH, json=body))
        student = data.get("student", data) if isinstance(data, dict) else None
        if not isinstance(student, dict) or not student.get("matricNumber"):
            raise NetworkError()
        return Student.from_api(student)

    def get_student_status(self, matric_number: str) -> StudentStatus:
        path = STUDENT_PATH.format(matric_number=quote(matric_number.strip(), safe=""))
        data = _unwrap(self._request("GET", path))
        if not isinstance(data, dict):
            raise NetworkError()
        return StudentStatus.from_api(data)

    # -----------------------------
    # Payments
    # -----------------------------
    def initialize_payment(self, matric_number: str, amount: float, email: Optional[str] = None) -> str:
        """Returns the gateway checkout URL the student must be sent to."""
        body = {"studentId": matric_number, "amount": amount}
        if email:
            body["email"] = email
        data = _unwrap(self._request("POST", PAYMENT_INIT_PATH, json=body))
        url = data.get("authorization_url") if isinstance(data, dict) else None
        if not url:
            raise NetworkError("Payment initialization failed: No authorization URL returned.")
        return url

    def verify_payment(self, reference: str) -> str:
        """Returns the matric number the verified payment belongs to."""
        payload = self._request("GET", PAYMENT_VERIFY_PATH, params={"reference": reference})
        if isinstance(payload, dict) and payload.get("success") is False:
            raise ApiRequestError(normalize(200, payload), 200)
        data = _unwrap(payload)
        matric = data.get("matricNumber") if isinstance(data, dict) else None
        if not matric:
            raise NetworkError(
                "Payment verified, but matric number was not found in the response metadata."
            )
        return str(matric)

    # -----------------------------
    # Admin
    # -----------------------------
    def admin_login(self, email: str, password: str) -> tuple[str, str]:
        """Returns (token, admin email)."""
        payload = self._request(
            "POST",
            ADMIN_LOGIN_PATH,
            json={"email": email.strip(), "password": password},
        )
        if not isinstance(payload, dict):
            raise NetworkError()
        data = _unwrap(payload)
        token = data.get("token") if isinstance(data, dict) else None
        if not payload.get("success") or not token:
            raise ApiRequestError(payload.get("message") or "Login failed", 200)
        admin = data.get("admin") or {}
        return token, admin.get("email", email.strip())

    def list_students(
        self,
        token: str,
        *,
        search: str = "",
        status: Optional[str] = None,
        package_code: Optional[str] = None,
        page: int = 1,
        limit: int = ADMIN_PAGE_LIMIT,
    ) -> StudentPage:
        params = {}
        if search.strip():
            params["search"] = search.strip()
        if status:
            params["status"] = status
        if package_code:
            params["packageCode"] = package_code
        params["page"] = page
        params["limit"] = limit

        data = _unwrap(self._request("GET", ADMIN_STUDENTS_PATH, token=token, params=params))
        if not isinstance(data, dict):
            raise NetworkError()
        return StudentPage.from_api(data, page=page, limit=limit)


# -----------------------------
# Shared client (safe to cache)
# -----------------------------
def read_secret(key: str, default=None):
    # st.secrets raises when no secrets.toml exists at all
    try:
        return st.secrets[key]
    except (KeyError, FileNotFoundError, StreamlitAPIException):
        return default


@st.cache_resource
def get_api_client() -> FywApiClient:
    base_url = read_secret("FYW_API_BASE", DEFAULT_API_BASE)
    timeout = float(read_secret("FYW_API_TIMEOUT", DEFAULT_API_TIMEOUT))
    return FywApiClient(base_url=base_url, timeout=timeout)
