# app/repositories/students_repo.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pandas as pd
import pytz

from app.config import ADMIN_PAGE_LIMIT, STUDENTS_EXPORT_HEADERS
from app.models.students import StudentPage, StudentRow
from app.services.api_client import FywApiClient


@dataclass
class StudentFilters:
    search: str = ""
    status: Optional[str] = None        # None = all
    package_code: Optional[str] = None  # None = all
    page: int = 1
    limit: int = ADMIN_PAGE_LIMIT


def load_students_page(client: FywApiClient, token: str, filters: StudentFilters) -> StudentPage:
    return client.list_students(
        token,
        search=filters.search,
        status=filters.status,
        package_code=filters.package_code,
        page=filters.page,
        limit=filters.limit,
    )


def students_df(rows: list[StudentRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=STUDENTS_EXPORT_HEADERS)
    records = [
        {
            "matricNumber": r.matric_number,
            "fullName": r.full_name,
            "packageCode": r.package_code,
            "packageName": r.package_name,
            "paymentStatus": r.payment_status.value,
            "totalPaid": r.total_paid,
            "outstanding": r.outstanding,
        }
        for r in rows
    ]
    return pd.DataFrame(records)[STUDENTS_EXPORT_HEADERS]


def students_to_csv_bytes(rows: list[StudentRow]) -> bytes:
    """Only the rows currently on screen; the API has no bulk export."""
    return students_df(rows).to_csv(index=False).encode("utf-8")


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(pytz.UTC)
    return f"students-{int(now.timestamp() * 1000)}.csv"
