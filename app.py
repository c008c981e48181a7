"""
app.py
Streamlit Driving School Dashboard (owner-only, in-memory session data).
Run: streamlit run app.py
"""

from __future__ import annotations

import logging
from datetime import date

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

import auth
import db
import printing
import utils
from i18n import LANGUAGE_NAMES, LANGUAGES, direction, t
from models import (
    DAYS,
    EXPENSE_CATEGORIES,
    LESSON_STATUSES,
    LESSON_TYPES,
    LICENSE_TYPES,
    STUDENT_STATUSES,
    TIME_SLOTS,
    VEHICLE_STATUSES,
)

st.set_page_config(page_title="Driving School Dashboard", page_icon="🚗", layout="wide")

logger = logging.getLogger(__name__)

PAGES = ["dashboard", "students", "instructors", "vehicles", "schedule", "finance", "settings"]
PAGE_TITLES = {
    "dashboard": "dashboard",
    "students": "manage_students",
    "instructors": "manage_instructors",
    "vehicles": "manage_vehicles",
    "schedule": "schedule",
    "finance": "finance_management",
    "settings": "settings",
}
DEFAULT_LANGUAGE = "ar"
DEFAULT_ADMIN_PASSWORD = "admin123"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def init_once():
    # One AppState per browser session; a reload starts again from the sample data
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    if "state" not in st.session_state:
        st.session_state.state = db.init_state(auth.hash_password(DEFAULT_ADMIN_PASSWORD))
        logger.info("New session state created")
    if "lang" not in st.session_state:
        st.session_state.lang = DEFAULT_LANGUAGE


def require_login():
    if "logged_in" not in st.session_state:
        st.session_state.logged_in = False
    if "username" not in st.session_state:
        st.session_state.username = None


def logout():
    st.session_state.logged_in = False
    st.session_state.username = None


def tr(key: str, **kwargs) -> str:
    return t(key, st.session_state.get("lang", DEFAULT_LANGUAGE), **kwargs)


def state() -> db.AppState:
    return st.session_state.state


def flash(message: str) -> None:
    # Shown on the next run (st.rerun drops messages written before it)
    st.session_state.flash = message


def show_flash():
    message = st.session_state.pop("flash", None)
    if message:
        st.success(message)


def apply_direction():
    d = direction(st.session_state.lang)
    align = "right" if d == "rtl" else "left"
    st.markdown(
        f"""
        <style>
        [data-testid="stAppViewContainer"], [data-testid="stSidebar"] {{
            direction: {d};
            text-align: {align};
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def show_errors(errors: list[str]) -> None:
    for e in errors:
        st.error(tr(e))


def date_value(date_iso: str | None) -> date:
    if not date_iso:
        return date.today()
    try:
        return utils.parse_iso(date_iso)
    except ValueError:
        return date.today()


def login_screen():
    apply_direction()
    st.title(f"🔐 {tr('login_title')}")

    col1, col2 = st.columns([1, 1])
    with col1:
        username = st.text_input(tr("username"), value="admin", key="login_username")
        password = st.text_input(tr("password"), type="password", key="login_password")
        if st.button(tr("login"), type="primary", key="login_button"):
            if auth.login(state(), username.strip(), password):
                st.session_state.logged_in = True
                st.session_state.username = username.strip()
                st.rerun()
            else:
                st.error(tr("invalid_credentials"))

    with col2:
        st.info(tr("login_hint"))


# ---------- Printing ----------

def request_print(html_doc: str, file_name: str):
    st.session_state.print_doc = {"html": html_doc, "file_name": file_name, "printed": False}


def print_preview():
    doc = st.session_state.get("print_doc")
    if not doc:
        return

    st.divider()
    st.subheader(f"🖨️ {tr('print_preview')}")
    c1, c2 = st.columns([1, 1])
    with c1:
        st.download_button(
            tr("download"),
            data=doc["html"].encode("utf-8"),
            file_name=doc["file_name"],
            mime="text/html",
            key="print_download",
        )
    with c2:
        if st.button(tr("close"), key="print_close"):
            st.session_state.print_doc = None
            st.rerun()

    # Open the print dialog only the first time the document is shown
    html_doc = doc["html"] if doc["printed"] else printing.with_print_script(doc["html"])
    doc["printed"] = True
    components.html(html_doc, height=650, scrolling=True)


def clear_form(form_key: str) -> None:
    # Drop the form's widget values so the next render starts from the record (or blank)
    for key in [k for k in st.session_state if str(k).startswith(f"{form_key}_")]:
        del st.session_state[key]


def delete_controls(label_key: str, key: str) -> bool:
    confirm = st.checkbox(tr("confirm_delete"), value=False, key=f"{key}_confirm")
    return st.button(tr(label_key), type="secondary", disabled=not confirm, key=f"{key}_delete")


def record_picker(label_key: str, records, label, key: str):
    """Selectbox of record ids (with '(none)'); returns the chosen id or None."""
    options = [None] + [r.id for r in records]
    names = {r.id: label(r) for r in records}
    return st.selectbox(
        tr(label_key),
        options=options,
        format_func=lambda i: tr("none_selected") if i is None else f"{names[i]} (#{i})",
        key=key,
    )


# ---------- Dashboard ----------

def dashboard_page():
    s = state()
    stats = utils.dashboard_stats(s)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric(tr("total_students"), int(stats["total_students"]))
    c2.metric(tr("active_instructors"), int(stats["active_instructors"]))
    c3.metric(tr("available_vehicles"), int(stats["available_vehicles"]))
    c4.metric(tr("monthly_income"), utils.format_money(stats["monthly_income"], st.session_state.lang))

    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        st.subheader(tr("monthly_income_chart"))
        df = utils.revenue_summary_by_month(s.payments)
        if df.empty:
            st.caption(tr("no_data"))
        else:
            st.bar_chart(df.sort_values("month").set_index("month")["revenue"])
    with col2:
        st.subheader(tr("success_rate"))
        results = pd.DataFrame(
            {tr("students"): [stats["successful"], stats["failed"]]},
            index=[tr("student_status_successful"), tr("student_status_failed")],
        )
        st.bar_chart(results)


# ---------- Students ----------

def student_form(existing=None):
    s = state()
    form_key = f"student_{existing.id}" if existing else "student_new"
    docs_key = f"{form_key}_docs"
    upload_round_key = f"{form_key}_upload_round"

    if existing:
        st.subheader(f"✏️ {tr('edit_student_title')} (ID: {existing.id})")
    else:
        st.subheader(f"➕ {tr('add_student_title')}")

    if docs_key not in st.session_state:
        st.session_state[docs_key] = existing.documents if existing else ()
    upload_round = st.session_state.get(upload_round_key, 0)

    col1, col2, col3 = st.columns(3)
    with col1:
        name = st.text_input(tr("full_name"), value=(existing.name if existing else ""), key=f"{form_key}_name")
        phone = st.text_input(tr("phone_number"), value=(existing.phone if existing else ""), key=f"{form_key}_phone")
        address = st.text_input(tr("address"), value=(existing.address if existing else ""), key=f"{form_key}_address")

    with col2:
        national_id = st.text_input(
            tr("national_id"), value=(existing.national_id if existing else ""), key=f"{form_key}_national_id"
        )
        license_type = st.selectbox(
            tr("license_type"),
            options=LICENSE_TYPES,
            index=LICENSE_TYPES.index(existing.license_type) if existing else LICENSE_TYPES.index("B"),
            key=f"{form_key}_license",
        )

    with col3:
        status = st.selectbox(
            tr("status"),
            options=STUDENT_STATUSES,
            index=STUDENT_STATUSES.index(existing.status) if existing else 0,
            format_func=lambda v: tr(f"student_status_{v}"),
            key=f"{form_key}_status",
        )
        cost = st.text_input(
            tr("total_training_cost", currency=tr("currency")),
            value=(f"{existing.total_training_cost:g}" if existing else "0"),
            key=f"{form_key}_cost",
        )

    st.markdown(f"**📎 {tr('document_management')}**")
    documents = st.session_state[docs_key]
    if documents:
        for d in documents:
            dc1, dc2 = st.columns([4, 1])
            dc1.write(f"{d.name} — {d.file_name} ({d.upload_date})")
            if dc2.button(tr("delete"), key=f"{form_key}_doc_del_{d.id}"):
                st.session_state[docs_key] = utils.remove_document(documents, d.id)
                st.rerun()
    else:
        st.caption(tr("no_documents_attached"))

    uc1, uc2, uc3 = st.columns([2, 2, 1])
    with uc1:
        doc_name = st.text_input(
            tr("document_name"), placeholder=tr("doc_name_placeholder"), key=f"{form_key}_doc_name_{upload_round}"
        )
    with uc2:
        doc_file = st.file_uploader(tr("select_file"), key=f"{form_key}_doc_file_{upload_round}")
    with uc3:
        if st.button(tr("add_document"), key=f"{form_key}_doc_add"):
            # Only the file name is kept; the uploaded bytes are discarded
            file_name = doc_file.name if doc_file is not None else None
            doc_errors = utils.validate_document_inputs(doc_name, file_name)
            if doc_errors:
                show_errors(doc_errors)
            else:
                st.session_state[docs_key] = utils.add_document(documents, doc_name, file_name)
                st.session_state[upload_round_key] = upload_round + 1
                st.rerun()

    errors = utils.validate_student_inputs(name, phone, national_id, cost)
    show_errors(errors)

    if st.button(tr("save"), type="primary", disabled=bool(errors), key=f"{form_key}_save"):
        fields = dict(
            name=name.strip(),
            address=address.strip(),
            phone=phone.strip(),
            national_id=national_id.strip(),
            license_type=license_type,
            status=status,
            total_training_cost=float(cost),
            documents=tuple(st.session_state[docs_key]),
        )
        if existing:
            db.update(s, "students", existing.id, **fields)
            flash(tr("student_updated"))
        else:
            db.insert(s, "students", **fields)
            flash(tr("student_added"))
        clear_form(form_key)
        st.session_state.edit_student_id = None
        st.rerun()


def students_page():
    s = state()
    lang = st.session_state.lang

    search = st.text_input(tr("search_by_name_or_id"), key="students_search")
    rows = utils.filter_students(db.fetch_all(s, "students"), search)
    df = utils.students_frame(rows, s.payments, lang)
    st.dataframe(df, hide_index=True)

    owing = [r for r in rows if utils.balance(r, s.payments) > 0]
    st.caption(f"{tr('students_with_balance')}: {len(owing)}")

    st.divider()

    colA, colB = st.columns([1, 2])
    with colA:
        selected_id = record_picker("select_student", rows, lambda r: r.name, key="students_pick")

    with colB:
        if selected_id is not None:
            student = db.fetch_one(s, "students", selected_id)
            st.subheader(tr("actions"))
            c1, c2, c3 = st.columns(3)
            with c1:
                if st.button(tr("edit"), key="students_edit"):
                    st.session_state.edit_student_id = selected_id
                    st.rerun()
            with c2:
                if st.button(tr("print"), key="students_print"):
                    request_print(printing.student_file_html(student, s.payments, lang), f"student_{student.id}.html")
            with c3:
                if delete_controls("delete", key=f"students_{selected_id}"):
                    db.delete(s, "students", selected_id)
                    st.session_state.pop("students_pick", None)
                    if st.session_state.get("edit_student_id") == selected_id:
                        st.session_state.edit_student_id = None
                    flash(tr("student_deleted"))
                    st.rerun()

    print_preview()
    st.divider()

    if st.session_state.get("edit_student_id"):
        existing = db.fetch_one(s, "students", st.session_state.edit_student_id)
        if existing:
            student_form(existing=existing)
        if st.button(tr("cancel_edit"), key="students_cancel"):
            st.session_state.pop(f"student_{st.session_state.edit_student_id}_docs", None)
            st.session_state.edit_student_id = None
            st.rerun()
    else:
        student_form(existing=None)


# ---------- Instructors ----------

def instructor_form(existing=None):
    s = state()
    form_key = f"instructor_{existing.id}" if existing else "instructor_new"

    if existing:
        st.subheader(f"✏️ {tr('edit_instructor_title')} (ID: {existing.id})")
    else:
        st.subheader(f"➕ {tr('add_instructor_title')}")

    col1, col2 = st.columns(2)
    with col1:
        name = st.text_input(tr("full_name"), value=(existing.name if existing else ""), key=f"{form_key}_name")
        phone = st.text_input(tr("phone_number"), value=(existing.phone if existing else ""), key=f"{form_key}_phone")
    with col2:
        hire_date = st.date_input(
            tr("hire_date"), value=date_value(existing.hire_date if existing else None), key=f"{form_key}_hire"
        ).isoformat()
        vehicle_id = st.text_input(
            tr("assigned_vehicle_id"),
            value=(str(existing.assigned_vehicle_id) if existing and existing.assigned_vehicle_id else ""),
            placeholder=tr("vehicle_id_placeholder"),
            key=f"{form_key}_vehicle",
        )

    errors = utils.validate_instructor_inputs(name, phone, hire_date, vehicle_id)
    show_errors(errors)

    if st.button(tr("save"), type="primary", disabled=bool(errors), key=f"{form_key}_save"):
        fields = dict(
            name=name.strip(),
            phone=phone.strip(),
            hire_date=hire_date,
            assigned_vehicle_id=utils.parse_optional_id(vehicle_id),
        )
        if existing:
            db.update(s, "instructors", existing.id, **fields)
            flash(tr("instructor_updated"))
        else:
            db.insert(s, "instructors", **fields)
            flash(tr("instructor_added"))
        clear_form(form_key)
        st.session_state.edit_instructor_id = None
        st.rerun()


def instructors_page():
    s = state()
    lang = st.session_state.lang

    st.subheader(tr("instructors_list"))
    st.dataframe(utils.instructors_frame(s.instructors, lang), hide_index=True)

    st.divider()

    colA, colB = st.columns([1, 2])
    with colA:
        selected_id = record_picker("select_instructor", s.instructors, lambda r: r.name, key="instructors_pick")
    with colB:
        if selected_id is not None:
            st.subheader(tr("actions"))
            c1, c2 = st.columns(2)
            with c1:
                if st.button(tr("edit"), key="instructors_edit"):
                    st.session_state.edit_instructor_id = selected_id
                    st.rerun()
            with c2:
                if delete_controls("delete", key=f"instructors_{selected_id}"):
                    db.delete(s, "instructors", selected_id)
                    st.session_state.pop("instructors_pick", None)
                    if st.session_state.get("edit_instructor_id") == selected_id:
                        st.session_state.edit_instructor_id = None
                    flash(tr("instructor_deleted"))
                    st.rerun()

    st.divider()

    if st.session_state.get("edit_instructor_id"):
        existing = db.fetch_one(s, "instructors", st.session_state.edit_instructor_id)
        if existing:
            instructor_form(existing=existing)
        if st.button(tr("cancel_edit"), key="instructors_cancel"):
            st.session_state.edit_instructor_id = None
            st.rerun()
    else:
        instructor_form(existing=None)


# ---------- Vehicles ----------

def vehicle_form(existing=None):
    s = state()
    form_key = f"vehicle_{existing.id}" if existing else "vehicle_new"

    if existing:
        st.subheader(f"✏️ {tr('edit_vehicle_title')} (ID: {existing.id})")
    else:
        st.subheader(f"➕ {tr('add_vehicle_title')}")

    col1, col2, col3 = st.columns(3)
    with col1:
        vtype = st.text_input(tr("vehicle_type"), value=(existing.type if existing else ""), key=f"{form_key}_type")
        brand = st.text_input(tr("brand"), value=(existing.brand if existing else ""), key=f"{form_key}_brand")
    with col2:
        registration = st.text_input(
            tr("registration"), value=(existing.registration if existing else ""), key=f"{form_key}_registration"
        )
        purchase_year = st.text_input(
            tr("purchase_year"),
            value=(str(existing.purchase_year) if existing else str(date.today().year)),
            key=f"{form_key}_year",
        )
    with col3:
        status = st.selectbox(
            tr("status"),
            options=VEHICLE_STATUSES,
            index=VEHICLE_STATUSES.index(existing.status) if existing else 0,
            format_func=lambda v: tr(f"vehicle_status_{v}"),
            key=f"{form_key}_status",
        )
        last_maintenance = st.date_input(
            tr("last_maintenance"),
            value=date_value(existing.last_maintenance if existing else None),
            key=f"{form_key}_maintenance",
        ).isoformat()

    errors = utils.validate_vehicle_inputs(vtype, brand, registration, purchase_year, last_maintenance)
    show_errors(errors)

    if st.button(tr("save"), type="primary", disabled=bool(errors), key=f"{form_key}_save"):
        fields = dict(
            type=vtype.strip(),
            brand=brand.strip(),
            registration=registration.strip(),
            purchase_year=int(purchase_year.strip()),
            status=status,
            last_maintenance=last_maintenance,
        )
        if existing:
            db.update(s, "vehicles", existing.id, **fields)
            flash(tr("vehicle_updated"))
        else:
            db.insert(s, "vehicles", **fields)
            flash(tr("vehicle_added"))
        clear_form(form_key)
        st.session_state.edit_vehicle_id = None
        st.rerun()


def vehicles_page():
    s = state()
    lang = st.session_state.lang

    st.subheader(tr("vehicles_list"))
    st.dataframe(utils.vehicles_frame(s.vehicles, lang), hide_index=True)

    st.divider()

    colA, colB = st.columns([1, 2])
    with colA:
        selected_id = record_picker("select_vehicle", s.vehicles, utils.vehicle_label, key="vehicles_pick")
    with colB:
        if selected_id is not None:
            st.subheader(tr("actions"))
            c1, c2 = st.columns(2)
            with c1:
                if st.button(tr("edit"), key="vehicles_edit"):
                    st.session_state.edit_vehicle_id = selected_id
                    st.rerun()
            with c2:
                if delete_controls("delete", key=f"vehicles_{selected_id}"):
                    db.delete(s, "vehicles", selected_id)
                    st.session_state.pop("vehicles_pick", None)
                    if st.session_state.get("edit_vehicle_id") == selected_id:
                        st.session_state.edit_vehicle_id = None
                    flash(tr("vehicle_deleted"))
                    st.rerun()

    st.divider()

    if st.session_state.get("edit_vehicle_id"):
        existing = db.fetch_one(s, "vehicles", st.session_state.edit_vehicle_id)
        if existing:
            vehicle_form(existing=existing)
        if st.button(tr("cancel_edit"), key="vehicles_cancel"):
            st.session_state.edit_vehicle_id = None
            st.rerun()
    else:
        vehicle_form(existing=None)


# ---------- Schedule ----------

def _id_select(label_key: str, placeholder_key: str, records, label, current, key: str):
    options = [None] + [r.id for r in records]
    names = {r.id: label(r) for r in records}
    if current is not None and current not in names:
        # Dangling reference: keep it selectable so saving does not silently change it
        options.append(current)
        names[current] = tr("unknown")
    return st.selectbox(
        tr(label_key),
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=lambda i: f"-- {tr(placeholder_key)} --" if i is None else names[i],
        key=key,
    )


def lesson_form(existing=None):
    s = state()
    form_key = f"lesson_{existing.id}" if existing else "lesson_new"

    if existing:
        st.subheader(f"✏️ {tr('edit_lesson_title')} (ID: {existing.id})")
    else:
        st.subheader(f"➕ {tr('add_lesson_title')}")

    col1, col2 = st.columns(2)
    with col1:
        ltype = st.selectbox(
            tr("lesson_type"),
            options=LESSON_TYPES,
            index=LESSON_TYPES.index(existing.type) if existing else 0,
            format_func=lambda v: tr(f"lesson_type_{v}"),
            key=f"{form_key}_type",
        )
        ldate = st.date_input(
            tr("date"), value=date_value(existing.date if existing else None), key=f"{form_key}_date"
        ).isoformat()
    with col2:
        status = st.selectbox(
            tr("status"),
            options=LESSON_STATUSES,
            index=LESSON_STATUSES.index(existing.status) if existing else 0,
            format_func=lambda v: tr(f"lesson_status_{v}"),
            key=f"{form_key}_status",
        )
        ltime = st.selectbox(
            tr("time"),
            options=TIME_SLOTS,
            index=TIME_SLOTS.index(existing.time) if existing and existing.time in TIME_SLOTS else 0,
            key=f"{form_key}_time",
        )

    fields = dict(type=ltype, date=ldate, time=ltime, status=status)
    if ltype == "practical":
        current_vehicle = existing.vehicle_id if existing else None
        vehicles = [v for v in s.vehicles if v.status == "available" or v.id == current_vehicle]
        fields["student_id"] = _id_select(
            "student", "select_student", s.students, lambda r: r.name,
            existing.student_id if existing else None, key=f"{form_key}_student",
        )
        c1, c2 = st.columns(2)
        with c1:
            fields["instructor_id"] = _id_select(
                "instructor", "select_instructor", s.instructors, lambda r: r.name,
                existing.instructor_id if existing else None, key=f"{form_key}_instructor",
            )
        with c2:
            fields["vehicle_id"] = _id_select(
                "vehicle", "select_vehicle", vehicles, utils.vehicle_label,
                current_vehicle, key=f"{form_key}_vehicle",
            )
    else:
        fields["topic"] = st.text_input(
            tr("lesson_topic"), value=(existing.topic if existing else ""), key=f"{form_key}_topic"
        ).strip()
        fields["location"] = st.text_input(
            tr("classroom"), value=(existing.location if existing else ""), key=f"{form_key}_location"
        ).strip()

    errors = utils.validate_lesson_inputs(fields)
    show_errors(errors)

    c1, c2 = st.columns([1, 1])
    with c1:
        if st.button(tr("save"), type="primary", disabled=bool(errors), key=f"{form_key}_save"):
            fields = utils.normalize_lesson_fields(fields)
            if existing:
                db.update(s, "lessons", existing.id, **fields)
                flash(tr("lesson_updated"))
            else:
                db.insert(s, "lessons", **fields)
                flash(tr("lesson_added"))
            clear_form(form_key)
            st.session_state.edit_lesson_id = None
            st.rerun()
    with c2:
        if existing and delete_controls("delete_lesson", key=f"{form_key}"):
            db.delete(s, "lessons", existing.id)
            st.session_state.edit_lesson_id = None
            flash(tr("lesson_deleted"))
            st.rerun()


def schedule_page():
    s = state()

    c1, c2 = st.columns([3, 1])
    with c1:
        st.subheader(tr("weekly_schedule"))
    with c2:
        if st.button(tr("add_new_lesson"), key="schedule_add"):
            st.session_state.edit_lesson_id = None
            st.rerun()

    grid = utils.build_schedule_grid(s.lessons)

    header = st.columns(len(DAYS) + 1)
    header[0].markdown(f"**{tr('time')}**")
    for i, day in enumerate(DAYS):
        header[i + 1].markdown(f"**{tr(day)}**")

    for slot in TIME_SLOTS:
        cols = st.columns(len(DAYS) + 1)
        cols[0].markdown(slot)
        for day_idx in range(len(DAYS)):
            lesson = grid.get((day_idx, slot))
            if lesson is None:
                continue
            first, second = utils.lesson_cell_lines(lesson, s.students, s.instructors)
            icon = "🚗" if lesson.is_practical else "📘"
            parts = [tr(f"lesson_type_{lesson.type}"), first, second, tr(f"lesson_status_{lesson.status}")]
            label = f"{icon} " + " · ".join(p for p in parts if p)
            if cols[day_idx + 1].button(label, key=f"cell_{day_idx}_{slot}"):
                st.session_state.edit_lesson_id = lesson.id
                st.rerun()

    st.download_button(
        tr("download_schedule_csv"),
        data=utils.frame_to_csv_bytes(utils.schedule_frame(s.lessons, s.students, s.instructors, st.session_state.lang)),
        file_name="schedule.csv",
        mime="text/csv",
        key="schedule_csv",
    )

    st.divider()

    if st.session_state.get("edit_lesson_id"):
        existing = db.fetch_one(s, "lessons", st.session_state.edit_lesson_id)
        if existing:
            lesson_form(existing=existing)
        if st.button(tr("cancel_edit"), key="lessons_cancel"):
            st.session_state.edit_lesson_id = None
            st.rerun()
    else:
        lesson_form(existing=None)


# ---------- Finance ----------

def payment_form(existing=None):
    s = state()
    form_key = f"payment_{existing.id}" if existing else "payment_new"

    if existing:
        st.subheader(f"✏️ {tr('edit_payment_title')} (ID: {existing.id})")
    else:
        st.subheader(f"➕ {tr('add_payment_title')}")

    names = utils.name_lookup(s.students)
    options = list(names)
    current = existing.student_id if existing else (options[0] if options else None)
    if current is not None and current not in names:
        options.append(current)
    student_id = st.selectbox(
        tr("student"),
        options=options,
        index=options.index(current) if current in options else (0 if options else None),
        format_func=lambda i: names.get(i, tr("deleted_student")),
        key=f"{form_key}_student",
    )

    c1, c2 = st.columns(2)
    with c1:
        amount = st.text_input(
            f"{tr('amount')} ({tr('currency')})",
            value=(f"{existing.amount:g}" if existing else ""),
            key=f"{form_key}_amount",
        )
        description = st.text_input(
            tr("description"), value=(existing.description if existing else ""), key=f"{form_key}_description"
        )
    with c2:
        pay_date = st.date_input(
            tr("date"), value=date_value(existing.date if existing else None), key=f"{form_key}_date"
        ).isoformat()

    errors = utils.validate_payment_inputs(student_id, amount, pay_date, description)
    show_errors(errors)

    if st.button(tr("save"), type="primary", disabled=bool(errors), key=f"{form_key}_save"):
        fields = dict(student_id=student_id, amount=float(amount), date=pay_date, description=description.strip())
        if existing:
            db.update(s, "payments", existing.id, **fields)
            flash(tr("payment_updated"))
        else:
            db.insert(s, "payments", **fields)
            flash(tr("payment_recorded"))
        clear_form(form_key)
        st.session_state.edit_payment_id = None
        st.rerun()


def expense_form(existing=None):
    s = state()
    form_key = f"expense_{existing.id}" if existing else "expense_new"

    if existing:
        st.subheader(f"✏️ {tr('edit_expense_title')} (ID: {existing.id})")
    else:
        st.subheader(f"➕ {tr('add_expense_title')}")

    c1, c2 = st.columns(2)
    with c1:
        category = st.selectbox(
            tr("category"),
            options=EXPENSE_CATEGORIES,
            index=EXPENSE_CATEGORIES.index(existing.category) if existing else 0,
            format_func=lambda v: tr(f"expense_category_{v}"),
            key=f"{form_key}_category",
        )
        amount = st.text_input(
            f"{tr('amount')} ({tr('currency')})",
            value=(f"{existing.amount:g}" if existing else ""),
            key=f"{form_key}_amount",
        )
    with c2:
        description = st.text_input(
            tr("description"), value=(existing.description if existing else ""), key=f"{form_key}_description"
        )
        exp_date = st.date_input(
            tr("date"), value=date_value(existing.date if existing else None), key=f"{form_key}_date"
        ).isoformat()

    errors = utils.validate_expense_inputs(amount, exp_date, description)
    show_errors(errors)

    if st.button(tr("save"), type="primary", disabled=bool(errors), key=f"{form_key}_save"):
        fields = dict(category=category, amount=float(amount), date=exp_date, description=description.strip())
        if existing:
            db.update(s, "expenses", existing.id, **fields)
            flash(tr("expense_updated"))
        else:
            db.insert(s, "expenses", **fields)
            flash(tr("expense_recorded"))
        clear_form(form_key)
        st.session_state.edit_expense_id = None
        st.rerun()


def payments_section():
    s = state()
    lang = st.session_state.lang

    st.dataframe(utils.payments_frame(s.payments, s.students, lang), hide_index=True)

    names = utils.name_lookup(s.students)
    colA, colB = st.columns([1, 2])
    with colA:
        selected_id = record_picker(
            "select_payment",
            s.payments,
            lambda p: f"{names.get(p.student_id, tr('deleted_student'))} — {utils.format_money(p.amount, lang)}",
            key="payments_pick",
        )
    with colB:
        if selected_id is not None:
            payment = db.fetch_one(s, "payments", selected_id)
            c1, c2, c3 = st.columns(3)
            with c1:
                if st.button(tr("print"), key="payments_print"):
                    html_doc = printing.payment_receipt_html(payment, names.get(payment.student_id), s.school.name, lang)
                    request_print(html_doc, f"receipt_{payment.id}.html")
            with c2:
                if st.button(tr("edit"), key="payments_edit"):
                    st.session_state.edit_payment_id = selected_id
                    st.rerun()
            with c3:
                if delete_controls("delete", key=f"payments_{selected_id}"):
                    db.delete(s, "payments", selected_id)
                    st.session_state.pop("payments_pick", None)
                    if st.session_state.get("edit_payment_id") == selected_id:
                        st.session_state.edit_payment_id = None
                    flash(tr("payment_deleted"))
                    st.rerun()

    print_preview()
    st.divider()

    if st.session_state.get("edit_payment_id"):
        existing = db.fetch_one(s, "payments", st.session_state.edit_payment_id)
        if existing:
            payment_form(existing=existing)
        if st.button(tr("cancel_edit"), key="payments_cancel"):
            st.session_state.edit_payment_id = None
            st.rerun()
    else:
        payment_form(existing=None)


def expenses_section():
    s = state()
    lang = st.session_state.lang

    st.dataframe(utils.expenses_frame(s.expenses, lang), hide_index=True)

    colA, colB = st.columns([1, 2])
    with colA:
        selected_id = record_picker(
            "select_expense",
            s.expenses,
            lambda e: f"{tr(f'expense_category_{e.category}')} — {utils.format_money(e.amount, lang)}",
            key="expenses_pick",
        )
    with colB:
        if selected_id is not None:
            c1, c2 = st.columns(2)
            with c1:
                if st.button(tr("edit"), key="expenses_edit"):
                    st.session_state.edit_expense_id = selected_id
                    st.rerun()
            with c2:
                if delete_controls("delete", key=f"expenses_{selected_id}"):
                    db.delete(s, "expenses", selected_id)
                    st.session_state.pop("expenses_pick", None)
                    if st.session_state.get("edit_expense_id") == selected_id:
                        st.session_state.edit_expense_id = None
                    flash(tr("expense_deleted"))
                    st.rerun()

    st.divider()

    if st.session_state.get("edit_expense_id"):
        existing = db.fetch_one(s, "expenses", st.session_state.edit_expense_id)
        if existing:
            expense_form(existing=existing)
        if st.button(tr("cancel_edit"), key="expenses_cancel"):
            st.session_state.edit_expense_id = None
            st.rerun()
    else:
        expense_form(existing=None)


def reports_section():
    s = state()
    lang = st.session_state.lang

    st.subheader(tr("revenue_by_month"))
    st.dataframe(utils.revenue_summary_by_month(s.payments), hide_index=True)

    st.divider()

    c1, c2 = st.columns(2)
    with c1:
        if s.payments:
            st.download_button(
                tr("download_payments_csv"),
                data=utils.frame_to_csv_bytes(utils.payments_frame(s.payments, s.students, lang)),
                file_name="payments.csv",
                mime="text/csv",
                key="payments_csv",
            )
        else:
            st.caption(tr("no_data"))
    with c2:
        if s.expenses:
            st.download_button(
                tr("download_expenses_csv"),
                data=utils.frame_to_csv_bytes(utils.expenses_frame(s.expenses, lang)),
                file_name="expenses.csv",
                mime="text/csv",
                key="expenses_csv",
            )
        else:
            st.caption(tr("no_data"))


def finance_page():
    s = state()
    lang = st.session_state.lang
    totals = utils.financial_totals(s.payments, s.expenses)

    c1, c2, c3 = st.columns(3)
    c1.metric(tr("total_income"), utils.format_money(totals["total_income"], lang))
    c2.metric(tr("total_expenses"), utils.format_money(totals["total_expenses"], lang))
    c3.metric(tr("net_profit"), utils.format_money(totals["net_profit"], lang))

    st.divider()

    tab_pay, tab_exp, tab_rep = st.tabs([tr("payments_income"), tr("expenses"), tr("reports")])
    with tab_pay:
        payments_section()
    with tab_exp:
        expenses_section()
    with tab_rep:
        reports_section()


# ---------- Settings ----------

def settings_page():
    s = state()

    st.subheader(tr("school_data"))
    school_name = st.text_input(tr("school_name"), value=s.school.name, key="settings_school_name")
    school_address = st.text_input(tr("school_address"), value=s.school.address, key="settings_school_address")
    if st.button(tr("save_changes"), type="primary", key="settings_school_save"):
        s.school = db.SchoolInfo(name=school_name.strip(), address=school_address.strip())
        st.success(tr("settings_saved"))

    st.divider()

    st.subheader(tr("interface_customization"))
    current = st.session_state.lang
    lang = st.selectbox(
        tr("language"),
        options=LANGUAGES,
        index=LANGUAGES.index(current),
        format_func=lambda code: LANGUAGE_NAMES[code],
        key="settings_language",
    )
    if lang != current:
        st.session_state.lang = lang
        st.rerun()

    st.divider()

    st.subheader(tr("change_password"))
    p1 = st.text_input(tr("new_password"), type="password", key="settings_pw1")
    p2 = st.text_input(tr("confirm_new_password"), type="password", key="settings_pw2")
    if st.button(tr("update_password"), type="primary", key="settings_pw_save"):
        errors = utils.validate_password_change(p1, p2)
        if errors:
            show_errors(errors)
        else:
            auth.change_password(s, st.session_state.username, p1)
            st.success(tr("password_updated"))

    st.divider()

    st.subheader(tr("backup_and_restore"))
    st.caption(tr("backup_description"))
    st.download_button(
        tr("create_backup_now"),
        data=db.snapshot_json(s),
        file_name=f"driving_school_backup_{utils.today_iso()}.json",
        mime="application/json",
        key="settings_backup",
    )


PAGE_RENDERERS = {
    "dashboard": dashboard_page,
    "students": students_page,
    "instructors": instructors_page,
    "vehicles": vehicles_page,
    "schedule": schedule_page,
    "finance": finance_page,
    "settings": settings_page,
}


def main_app():
    apply_direction()

    st.sidebar.title(f"🚗 {tr('app_title')}")
    st.sidebar.caption(f"{tr('general_manager')} · {tr('admin')}: {st.session_state.username}")

    if "page" not in st.session_state:
        st.session_state.page = "dashboard"
    page = st.sidebar.radio(
        tr("navigate"),
        PAGES,
        index=PAGES.index(st.session_state.page),
        format_func=lambda p: tr(p),
        key="nav_page",
    )
    if page != st.session_state.page:
        st.session_state.print_doc = None
    st.session_state.page = page

    if st.sidebar.button(f"🚪 {tr('logout')}", key="logout_button"):
        logout()
        st.rerun()

    st.header(tr(PAGE_TITLES[page]))
    show_flash()
    PAGE_RENDERERS[page]()


# --------- App entry ---------

def run():
    init_once()
    require_login()

    if not st.session_state.logged_in:
        login_screen()
        return

    main_app()


if __name__ == "__main__":
    run()
