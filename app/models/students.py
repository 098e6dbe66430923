from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PackageCode(str, Enum):
    CORPORATE_PLUS = "T"
    CORPORATE_OWAMBE = "C"
    FULL = "F"


class Weekday(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"


class PaymentStatus(str, Enum):
    NOT_PAID = "NOT_PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    FULLY_PAID = "FULLY_PAID"


def _as_float(x) -> float:
    try:
        return float(x or 0)
    except (TypeError, ValueError):
        return 0.0


def _payment_status(x) -> PaymentStatus:
    try:
        return PaymentStatus(x)
    except ValueError:
        return PaymentStatus.NOT_PAID


# -----------------------------
# Data model
# -----------------------------
@dataclass
class Package:
    id: str
    code: str
    name: str
    price: float
    benefits: list[str] = field(default_factory=list)
    package_type: str = ""

    @staticmethod
    def from_api(d: dict) -> "Package":
        return Package(
            id=str(d.get("_id", "")),
            code=str(d.get("code", "")),
            name=str(d.get("name", "")),
            price=_as_float(d.get("price")),
            benefits=list(d.get("benefits") or []),
            package_type=str(d.get("packageType", "") or ""),
        )


@dataclass
class Invites:
    pdf_url: Optional[str] = None
    image_url: Optional[str] = None
    generated_at: Optional[str] = None

    @staticmethod
    def from_api(d: Optional[dict]) -> "Invites":
        d = d or {}
        return Invites(
            pdf_url=d.get("pdfUrl") or None,
            image_url=d.get("imageUrl") or None,
            generated_at=d.get("generatedAt") or None,
        )


@dataclass
class Student:
    id: str
    matric_number: str
    full_name: str
    email: Optional[str] = None
    gender: Optional[str] = None
    total_paid: float = 0.0
    payment_status: PaymentStatus = PaymentStatus.NOT_PAID
    package: Optional[Package] = None
    selected_days: list[str] = field(default_factory=list)
    invites: Invites = field(default_factory=Invites)

    @property
    def is_fully_paid(self) -> bool:
        return self.payment_status is PaymentStatus.FULLY_PAID

    @staticmethod
    def from_api(d: dict) -> "Student":
        # packageId comes back populated on most endpoints, as a bare id on others
        pkg = d.get("packageId")
        return Student(
            id=str(d.get("_id", "")),
            matric_number=str(d.get("matricNumber", "")),
            full_name=str(d.get("fullName", "")),
            email=d.get("email") or None,
            gender=d.get("gender") or None,
            total_paid=_as_float(d.get("totalPaid")),
            payment_status=_payment_status(d.get("paymentStatus")),
            package=Package.from_api(pkg) if isinstance(pkg, dict) else None,
            selected_days=list(d.get("selectedDays") or []),
            invites=Invites.from_api(d.get("invites")),
        )


@dataclass
class StudentStatus:
    """Dashboard payload: the student, their package and what is left to pay."""
    student: Student
    package: Optional[Package]
    outstanding: float

    @staticmethod
    def from_api(d: dict) -> "StudentStatus":
        student = Student.from_api(d.get("student") or {})
        pkg = d.get("package")
        package = Package.from_api(pkg) if isinstance(pkg, dict) else student.package
        return StudentStatus(
            student=student,
            package=package,
            outstanding=_as_float(d.get("outstanding")),
        )


@dataclass
class IdentifyPayload:
    matric_number: str
    full_name: str
    gender: str
    email: str = ""

    def to_api(self) -> dict:
        body = {
            "matricNumber": self.matric_number.strip(),
            "fullName": self.full_name.strip(),
            "gender": self.gender,
        }
        if self.email.strip():
            body["email"] = self.email.strip()
        return body


@dataclass
class StudentRow:
    id: str
    matric_number: str
    full_name: str
    payment_status: PaymentStatus
    total_paid: float
    outstanding: float
    package_code: str = ""
    package_name: str = ""

    @staticmethod
    def from_api(d: dict) -> "StudentRow":
        student = Student.from_api(d)
        price = student.package.price if student.package else 0.0
        return StudentRow(
            id=student.id,
            matric_number=student.matric_number,
            full_name=student.full_name,
            payment_status=student.payment_status,
            total_paid=student.total_paid,
            outstanding=max(0.0, price - student.total_paid),
            package_code=student.package.code if student.package else "",
            package_name=student.package.name if student.package else "",
        )


@dataclass
class StudentPage:
    rows: list[StudentRow]
    page: int
    limit: int
    total: int
    pages: int

    @property
    def showing_from(self) -> int:
        return 0 if self.total == 0 else (self.page - 1) * self.limit + 1

    @property
    def showing_to(self) -> int:
        return min(self.total, self.page * self.limit)

    @staticmethod
    def from_api(d: dict, page: int, limit: int) -> "StudentPage":
        rows = [StudentRow.from_api(s) for s in (d.get("students") or [])]
        pagination = d.get("pagination") or {}
        return StudentPage(
            rows=rows,
            page=page,
            limit=limit,
            total=int(pagination.get("total", len(rows)) or 0),
            pages=max(1, int(pagination.get("pages", 1) or 1)),
        )
