"""Students repository: admin page loading and CSV export.

Tests cover:
    - filters are passed through to the client
    - export keeps the fixed column order, even when empty
    - filename is epoch-milliseconds based
"""

from datetime import datetime
from unittest.mock import MagicMock

import pandas as pd
import pytz

from app.config import STUDENTS_EXPORT_HEADERS
from app.models.students import PaymentStatus, StudentRow
from app.repositories.students_repo import (
    StudentFilters,
    export_filename,
    load_students_page,
    students_df,
    students_to_csv_bytes,
)


def _row(**overrides):
    base = dict(
        id="s1",
        matric_number="190401001",
        full_name="Ada Obi",
        payment_status=PaymentStatus.PARTIALLY_PAID,
        total_paid=15000.0,
        outstanding=25000.0,
        package_code="C",
        package_name="Corporate & Owambe",
    )
    base.update(overrides)
    return StudentRow(**base)


def test_load_students_page_passes_filters():
    client = MagicMock()
    filters = StudentFilters(search="ada", status="FULLY_PAID", package_code="F", page=3, limit=10)
    load_students_page(client, "tok", filters)
    client.list_students.assert_called_once_with(
        "tok", search="ada", status="FULLY_PAID", package_code="F", page=3, limit=10
    )


def test_students_df_column_order():
    df = students_df([_row()])
    assert list(df.columns) == STUDENTS_EXPORT_HEADERS
    assert df.iloc[0]["paymentStatus"] == "PARTIALLY_PAID"


def test_students_df_empty_keeps_headers():
    df = students_df([])
    assert df.empty
    assert list(df.columns) == STUDENTS_EXPORT_HEADERS


def test_csv_quotes_commas_and_quotes():
    data = students_to_csv_bytes([_row(full_name='Obi, "Ada"')])
    text = data.decode("utf-8")
    lines = text.splitlines()
    assert lines[0] == ",".join(STUDENTS_EXPORT_HEADERS)
    assert '"Obi, ""Ada"""' in lines[1]


def test_csv_round_trips_through_pandas():
    import io

    rows = [_row(), _row(id="s2", matric_number="190401002", package_code="", package_name="")]
    df = pd.read_csv(io.BytesIO(students_to_csv_bytes(rows)), dtype=str, keep_default_na=False)
    assert df["matricNumber"].tolist() == ["190401001", "190401002"]
    assert df["packageCode"].tolist() == ["C", ""]


def test_export_filename_uses_epoch_millis():
    now = datetime(2026, 3, 2, 12, 0, 0, tzinfo=pytz.UTC)
    assert export_filename(now) == f"students-{int(now.timestamp() * 1000)}.csv"
    assert export_filename().startswith("students-")
