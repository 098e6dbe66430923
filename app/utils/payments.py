import re

from app.config import DEFAULT_PAY_AMOUNT
from app.models.students import PaymentStatus


def outstanding(price: float, total_paid: float) -> float:
    return max(0.0, float(price or 0) - float(total_paid or 0))


def progress_pct(price: float, total_paid: float) -> int:
    if not price:
        return 0
    pct = (float(total_paid or 0) / float(price)) * 100
    return max(0, min(100, round(pct)))


def default_amount(outstanding_amount: float) -> float:
    return min(DEFAULT_PAY_AMOUNT, outstanding_amount) if outstanding_amount > 0 else 0


def clamp_amount(amount: float, outstanding_amount: float) -> float:
    return max(0, min(amount, outstanding_amount))


def percent_of(outstanding_amount: float, pct: int) -> int:
    return round(outstanding_amount * pct / 100)


def can_pay(outstanding_amount: float, amount: float) -> bool:
    return outstanding_amount > 0 and 0 < amount <= outstanding_amount


def format_naira(value) -> str:
    try:
        v = float(value or 0)
    except (TypeError, ValueError):
        v = 0.0
    return f"₦{v:,.2f}"


_BADGES = {
    PaymentStatus.FULLY_PAID: "FULLY PAID",
    PaymentStatus.PARTIALLY_PAID: "PARTIAL",
}


def status_badge(status) -> str:
    try:
        status = PaymentStatus(status)
    except ValueError:
        return "NOT PAID"
    return _BADGES.get(status, "NOT PAID")


def short_package_name(name: str) -> str:
    # "Corporate Plus Package" -> "Corporate Plus"
    s = re.sub(r"\bpackage\b", "", name or "", flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", s).strip()
