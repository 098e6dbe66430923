# app/config.py

DEFAULT_API_BASE = "https://fyw-api.atlascard.xyz"
DEFAULT_API_TIMEOUT = 15  # seconds

PACKAGES_PATH = "/api/students/packages"
IDENTIFY_PATH = "/api/students/identify"
STUDENT_PATH = "/api/students/{matric_number}"
PAYMENT_INIT_PATH = "/api/payments/initialize"
PAYMENT_VERIFY_PATH = "/api/payments/verify"
ADMIN_LOGIN_PATH = "/api/admin/auth/login"
ADMIN_STUDENTS_PATH = "/api/admin/students"

PACKAGE_LABELS = {
    "T": "Corporate Plus (₦30,000)",
    "C": "Corporate & Owambe (₦40,000)",
    "F": "Full Experience (₦60,000)",
}
PLUS_PACKAGE_CODE = "T"
TOP_CHOICE_CODE = "F"

# Corporate Plus: Monday is always included, plus exactly one of these
PICKER_DAYS = [
    ("Tuesday (Denim Day)", "TUESDAY"),
    ("Wednesday (Costume Day)", "WEDNESDAY"),
    ("Thursday (Jersey Day)", "THURSDAY"),
]

GENDERS = ["male", "female"]
MIN_MATRIC_LEN = 6
MIN_FULL_NAME_LEN = 3
MIN_ADMIN_PASSWORD_LEN = 6

DEFAULT_PAY_AMOUNT = 5000
QUICK_PERCENTAGES = [25, 50, 100]

ADMIN_PAGE_LIMIT = 10
SEARCH_DEBOUNCE_SECONDS = 0.35

STUDENTS_EXPORT_HEADERS = [
    "matricNumber",
    "fullName",
    "packageCode",
    "packageName",
    "paymentStatus",
    "totalPaid",
    "outstanding",
]
