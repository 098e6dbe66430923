import logging

import streamlit as st

from app.config import (
    ADMIN_PAGE_LIMIT,
    PACKAGE_LABELS,
    PICKER_DAYS,
    PLUS_PACKAGE_CODE,
    QUICK_PERCENTAGES,
    TOP_CHOICE_CODE,
)
from app.errors import PortalError
from app.models.students import IdentifyPayload, PaymentStatus
from app.repositories.packages_repo import load_packages
from app.repositories.students_repo import (
    StudentFilters,
    export_filename,
    load_students_page,
    students_df,
    students_to_csv_bytes,
)
from app.services.api_client import get_api_client, read_secret
from app.ui import state
from app.ui.state import (
    ALL,
    KEY_ADMIN_EMAIL,
    KEY_ADMIN_PAGE,
    KEY_ADMIN_TOKEN,
    KEY_DAYS_ERROR,
    KEY_MATRIC,
    KEY_PACKAGE,
    KEY_PAGE,
    KEY_PAY_AMOUNT,
    KEY_PAY_AMOUNT_FOR,
    KEY_PRESELECTED,
    KEY_REG_FORM,
    KEY_REGISTER_STEP,
    KEY_SEARCH,
    KEY_SELECTED_DAYS,
    KEY_STATUS,
)
from app.utils import day_selection, forms, payments

st.set_page_config(page_title="ULES FYW PAY", layout="wide")

logging.basicConfig(
    level=str(read_secret("LOG_LEVEL", "INFO")).upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("fyw_portal")

PAGE_HOME = "Home"
PAGE_REGISTER = "Register"
PAGE_LOGIN = "Login"
PAGE_DASHBOARD = "Dashboard"
PAGE_VERIFY = "Payment verification"
PAGE_ADMIN = "Admin"
PAGES = [PAGE_HOME, PAGE_REGISTER, PAGE_LOGIN, PAGE_DASHBOARD, PAGE_VERIFY, PAGE_ADMIN]

STATUS_OPTIONS = {
    ALL: "Status: All",
    PaymentStatus.FULLY_PAID.value: "Status: Fully Paid",
    PaymentStatus.PARTIALLY_PAID.value: "Status: Partial",
    PaymentStatus.NOT_PAID.value: "Status: Not Paid",
}


# -----------------------------
# Student screens
# -----------------------------
def home_page():
    st.title("ULES FYW PAY")
    st.caption("University of Lagos Engineering Society · Final Year Week Student Portal")

    cols = st.columns(len(PACKAGE_LABELS))
    for col, (code, label) in zip(cols, PACKAGE_LABELS.items()):
        with col:
            st.subheader(label)
            if st.button("Choose", key=f"home_pick_{code}"):
                st.session_state[KEY_PRESELECTED] = code
                state.navigate(PAGE_REGISTER)

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Register", type="primary"):
            state.navigate(PAGE_REGISTER)
    with c2:
        if st.button("Started payment already? Login"):
            state.navigate(PAGE_LOGIN)


def _day_picker():
    st.markdown("**Select One Additional Day** (required for Corporate Plus, Monday is always included)")
    selected = st.session_state[KEY_SELECTED_DAYS]
    cols = st.columns(len(PICKER_DAYS))
    for col, (label, value) in zip(cols, PICKER_DAYS):
        with col:
            st.button(
                label,
                key=f"day_{value}",
                type="primary" if value in selected else "secondary",
                on_click=state.on_toggle_day,
                args=(value,),
                use_container_width=True,
            )
    st.caption(f"{len(selected)}/1 selected · Monday" + (f", {selected[0]}" if selected else " (+ one more required for Corporate Plus)"))
    if st.session_state[KEY_DAYS_ERROR]:
        st.error(st.session_state[KEY_DAYS_ERROR])


def _select_package(client, pkg, form: IdentifyPayload):
    selected = st.session_state[KEY_SELECTED_DAYS]
    try:
        day_selection.validate(pkg.code, selected)
    except day_selection.DayRequirementError as e:
        st.session_state[KEY_DAYS_ERROR] = str(e)
        st.rerun()

    with st.spinner("Saving selection..."):
        try:
            student = client.identify_student(form, pkg.code, selected)
        except PortalError as e:
            st.error(str(e))
            return

    logger.info("Registered %s on package %s", student.matric_number, pkg.code)
    state.remember_student(student.matric_number)
    state.navigate(PAGE_DASHBOARD)


def register_page(client):
    if st.session_state[KEY_MATRIC]:
        state.navigate(PAGE_DASHBOARD)

    step = st.session_state[KEY_REGISTER_STEP]
    labels = ["Step 1 · Your Details", "Step 2 · Select Package"]
    st.caption("  →  ".join(f"**{l}**" if i + 1 == step else l for i, l in enumerate(labels)))

    if step == 1:
        state.restore_registration_inputs()
        st.header("Your Details")
        st.text_input("Matric Number", placeholder="e.g. 190401001", key="reg_matric")
        st.text_input("Full Name", placeholder="Enter your full name as per student ID", key="reg_full_name")
        st.radio("Gender", ["male", "female"], index=None, horizontal=True, key="reg_gender")
        st.text_input("Email Address", placeholder="Enter your email address", key="reg_email")

        pre = st.session_state[KEY_PRESELECTED]
        if pre:
            st.success(f"Pre-selected: {PACKAGE_LABELS[pre]}")

        ok = forms.can_continue_registration(
            st.session_state.get("reg_matric", ""),
            st.session_state.get("reg_full_name", ""),
            st.session_state.get("reg_gender") or "",
        )
        st.button("Continue", type="primary", disabled=not ok, on_click=state.continue_to_packages)
        return

    saved = st.session_state.get(KEY_REG_FORM) or {}
    form = IdentifyPayload(
        matric_number=saved.get("reg_matric") or "",
        full_name=saved.get("reg_full_name") or "",
        gender=saved.get("reg_gender") or "",
        email=saved.get("reg_email") or "",
    )
    c1, c2 = st.columns([4, 1])
    c1.markdown(f"**{form.full_name}** ({form.matric_number})")
    c2.button("Edit Details", on_click=state.go_to_step, args=(1,))

    st.header("Select Your Package")
    st.caption("Selecting a package will complete your registration.")
    _day_picker()

    try:
        packages = load_packages(client)
    except PortalError as e:
        st.error(str(e))
        return

    selected = st.session_state[KEY_SELECTED_DAYS]
    pre = st.session_state[KEY_PRESELECTED]
    cols = st.columns(max(1, len(packages)))
    for col, pkg in zip(cols, packages):
        with col:
            with st.container(border=True):
                if pkg.code == TOP_CHOICE_CODE:
                    st.caption("TOP CHOICE")
                elif pkg.code == pre:
                    st.caption("YOUR PICK")
                st.subheader(pkg.name)
                st.markdown(f"### {payments.format_naira(pkg.price)}")
                for b in pkg.benefits:
                    st.markdown(f"- {b}")

                blocked = pkg.code == PLUS_PACKAGE_CODE and not day_selection.can_select(pkg.code, selected)
                if st.button(
                    "Confirm Selection" if pkg.code == pre else "Select Package",
                    key=f"select_{pkg.id or pkg.code}",
                    disabled=blocked,
                    use_container_width=True,
                ):
                    _select_package(client, pkg, form)
                if blocked:
                    st.caption("Select exactly one additional day to enable this package.")


def login_page(client):
    if st.session_state[KEY_MATRIC]:
        st.info("Redirecting to your dashboard...")
        state.navigate(PAGE_DASHBOARD)

    st.header("Check Payment Status")
    with st.form("student_login"):
        matric = st.text_input("Matric Number", placeholder="e.g. 190401001")
        submitted = st.form_submit_button("Continue", type="primary")

    if not submitted:
        return
    if not forms.can_submit_login(matric):
        st.error("Matric number must be at least 6 characters.")
        return

    try:
        client.get_student_status(matric)
    except PortalError as e:
        st.error(str(e))
        return
    state.remember_student(matric)
    state.navigate(PAGE_DASHBOARD)


def _pay_form(client, status):
    outstanding = status.outstanding
    matric = status.student.matric_number
    if st.session_state.get(KEY_PAY_AMOUNT_FOR) != matric:
        st.session_state[KEY_PAY_AMOUNT] = float(payments.default_amount(outstanding))
        st.session_state[KEY_PAY_AMOUNT_FOR] = matric
    st.session_state[KEY_PAY_AMOUNT] = float(payments.clamp_amount(st.session_state[KEY_PAY_AMOUNT], outstanding))

    st.subheader("Make a Payment")
    st.number_input("Amount (₦)", min_value=0.0, max_value=float(outstanding), step=500.0, key=KEY_PAY_AMOUNT)
    cols = st.columns(len(QUICK_PERCENTAGES))
    for col, pct in zip(cols, QUICK_PERCENTAGES):
        col.button(
            f"{pct}%",
            key=f"pct_{pct}",
            on_click=state.set_pay_amount,
            args=(float(payments.percent_of(outstanding, pct)),),
        )
    st.caption(f"Maximum payment: {payments.format_naira(outstanding)}")

    amount = st.session_state[KEY_PAY_AMOUNT]
    if st.button("Pay Now", type="primary", disabled=not payments.can_pay(outstanding, amount)):
        try:
            url = client.initialize_payment(matric, amount, status.student.email)
        except PortalError as e:
            st.error(str(e))
            return
        st.link_button("Continue to payment gateway", url, type="primary")


def dashboard_page(client):
    matric = st.session_state[KEY_MATRIC]
    if not matric:
        st.info("Log in with your matric number to see your dashboard.")
        if st.button("Go to login"):
            state.navigate(PAGE_LOGIN)
        return

    try:
        with st.spinner("Loading dashboard..."):
            status = client.get_student_status(matric)
    except PortalError as e:
        st.error(str(e))
        st.button("Log out", on_click=state.forget_student)
        return

    student, pkg = status.student, status.package
    price = pkg.price if pkg else 0.0

    h1, h2 = st.columns([4, 1])
    h1.header(f"Welcome, {student.full_name}")
    h1.caption(f"{student.matric_number} · Track payments and access your invite.")
    h2.button("Log out", on_click=state.forget_student)

    c1, c2, c3 = st.columns(3)
    c1.metric("Total paid", payments.format_naira(student.total_paid), help=f"of {payments.format_naira(price)} total")
    c2.metric("Outstanding", payments.format_naira(status.outstanding))
    c3.metric("Status", payments.status_badge(student.payment_status))

    pct = payments.progress_pct(price, student.total_paid)
    st.progress(pct, text=f"{pct}% paid · {payments.format_naira(status.outstanding)} Remaining")

    if student.is_fully_paid:
        st.success("Fully paid! Download your invite below.")
        inv = student.invites
        if inv.pdf_url:
            st.link_button("Download invite (PDF)", inv.pdf_url)
        if inv.image_url:
            st.link_button("Download invite (Image)", inv.image_url)
        if not (inv.pdf_url or inv.image_url):
            st.info("Your invite is being generated. Check back shortly.")
    else:
        _pay_form(client, status)

    if pkg:
        st.divider()
        st.subheader(pkg.name)
        st.markdown(f"**{payments.format_naira(pkg.price)}**")
        for b in pkg.benefits:
            st.markdown(f"- {b}")
        if student.selected_days:
            st.caption(f"Selected Days: {', '.join(student.selected_days)}")


def verify_page(client):
    reference = forms.payment_reference(st.query_params.to_dict())
    st.header("Verifying payment")
    st.caption(f"Reference: {reference or '-'}")

    if not reference:
        st.error("Missing payment reference in URL.")
        return

    try:
        with st.spinner("Confirming with the payment gateway..."):
            matric = client.verify_payment(reference)
    except PortalError as e:
        st.error(str(e))
        return

    st.query_params.clear()
    state.remember_student(matric)
    state.navigate(PAGE_DASHBOARD)


# -----------------------------
# Admin screens
# -----------------------------
def admin_login_screen(client):
    st.header("Admin Login")
    st.caption("Sign in to manage payments, students, and invitations.")
    with st.form("admin_login"):
        email = st.text_input("Email Address", placeholder="admin@finalyearweek.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", type="primary")

    if not submitted:
        return
    if not forms.can_submit_admin_login(email, password):
        st.error("Enter a valid email and a password of at least 6 characters.")
        return

    try:
        token, admin_email = client.admin_login(email, password)
    except PortalError as e:
        st.error(str(e))
        return
    st.session_state[KEY_ADMIN_TOKEN] = token
    st.session_state[KEY_ADMIN_EMAIL] = admin_email
    st.rerun()


def admin_students_page(client):
    token = st.session_state[KEY_ADMIN_TOKEN]

    h1, h2 = st.columns([4, 1])
    h1.header("Student Payments")
    h1.caption(f"Signed in as {st.session_state[KEY_ADMIN_EMAIL]}")
    h2.button("Log out", on_click=state.logout_admin)

    state.apply_filter_reset_if_marked()
    f1, f2, f3, f4 = st.columns([4, 2, 2, 1])
    f1.text_input(
        "Search",
        placeholder="Search by student name or matriculation number...",
        key=KEY_SEARCH,
        on_change=state.on_filter_change,
        label_visibility="collapsed",
    )
    f2.selectbox(
        "Status",
        list(STATUS_OPTIONS),
        format_func=STATUS_OPTIONS.get,
        key=KEY_STATUS,
        on_change=state.on_filter_change,
        label_visibility="collapsed",
    )
    f3.selectbox(
        "Package",
        [ALL] + list(PACKAGE_LABELS),
        format_func=lambda c: "Package: All" if c == ALL else PACKAGE_LABELS[c],
        key=KEY_PACKAGE,
        on_change=state.on_filter_change,
        label_visibility="collapsed",
    )
    f4.button("Reset", on_click=state.mark_reset_filters)

    filters = StudentFilters(
        search=state.committed_search(),
        status=None if st.session_state[KEY_STATUS] == ALL else st.session_state[KEY_STATUS],
        package_code=None if st.session_state[KEY_PACKAGE] == ALL else st.session_state[KEY_PACKAGE],
        page=st.session_state[KEY_ADMIN_PAGE],
        limit=ADMIN_PAGE_LIMIT,
    )

    try:
        with st.spinner("Loading students..."):
            page = load_students_page(client, token, filters)
    except PortalError as e:
        st.error(str(e))
        return

    if not page.rows:
        st.info("No students found. Try adjusting your search or filters.")
    else:
        df = students_df(page.rows)
        df["paymentStatus"] = df["paymentStatus"].map(payments.status_badge)
        df["packageName"] = df["packageName"].map(payments.short_package_name)
        df["totalPaid"] = df["totalPaid"].map(payments.format_naira)
        df["outstanding"] = df["outstanding"].map(payments.format_naira)
        st.dataframe(
            df.drop(columns=["packageCode"]),
            use_container_width=True,
            hide_index=True,
            column_config={
                "matricNumber": "Matric Number",
                "fullName": "Full Name",
                "packageName": "Package",
                "paymentStatus": "Status",
                "totalPaid": "Total Paid",
                "outstanding": "Outstanding",
            },
        )

    p1, p2, p3, p4 = st.columns([4, 1, 1, 2])
    p1.caption(f"Showing {page.showing_from}-{page.showing_to} of {page.total} records · page {page.page}/{page.pages}")
    p2.button("Prev", disabled=page.page <= 1, on_click=state.set_admin_page, args=(page.page - 1,))
    p3.button("Next", disabled=page.page >= page.pages, on_click=state.set_admin_page, args=(page.page + 1,))
    p4.download_button(
        "Export CSV",
        data=students_to_csv_bytes(page.rows),
        file_name=export_filename(),
        mime="text/csv",
        disabled=not page.rows,
    )


def admin_page(client):
    if not st.session_state[KEY_ADMIN_TOKEN]:
        admin_login_screen(client)
        return
    admin_students_page(client)


# -----------------------------
# App
# -----------------------------
state.init_state_if_missing()
state.apply_navigation_if_marked()

# Gateway callbacks land on the root URL with ?reference=...
if forms.payment_reference(st.query_params.to_dict()) and KEY_PAGE not in st.session_state:
    st.session_state[KEY_PAGE] = PAGE_VERIFY
pre = forms.preselected_package(st.query_params.to_dict())
if pre and st.session_state[KEY_PRESELECTED] is None:
    st.session_state[KEY_PRESELECTED] = pre
    st.session_state.setdefault(KEY_PAGE, PAGE_REGISTER)

page_name = st.sidebar.radio("Go to", PAGES, key=KEY_PAGE)
client = get_api_client()

if page_name == PAGE_HOME:
    home_page()
elif page_name == PAGE_REGISTER:
    register_page(client)
elif page_name == PAGE_LOGIN:
    login_page(client)
elif page_name == PAGE_DASHBOARD:
    dashboard_page(client)
elif page_name == PAGE_VERIFY:
    verify_page(client)
else:
    admin_page(client)

st.caption("Built by Korex · © 2026 ULES")
