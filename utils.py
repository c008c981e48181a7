"""
utils.py
Derived values (balances, totals, schedule grid), validation, dates/amounts
formatting, table builders and exports.
"""

from __future__ import annotations

import math
from datetime import date

import pandas as pd

from i18n import t
from models import (
    DAYS,
    LESSON_TYPES,
    PRACTICAL_FIELDS,
    THEORETICAL_FIELDS,
    TIME_SLOTS,
    Document,
)


def today_iso() -> str:
    return date.today().isoformat()


def parse_iso(d: str) -> date:
    return date.fromisoformat(d)


def _is_iso_date(d) -> bool:
    try:
        parse_iso(str(d))
    except ValueError:
        return False
    return True


def _is_finite_number(value) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


# ---------- Formatting ----------

def format_amount(value: float, lang: str) -> str:
    """
    3500 -> "3,500" (ar) / "3 500" (fr). Decimals only when the amount has cents.
    """
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    text = f"{value:,.0f}" if value == int(value) else f"{value:,.2f}"
    if lang == "fr":
        # French grouping uses a narrow no-break space and a decimal comma
        text = text.replace(",", "\u202f").replace(".", ",")
    return text


def format_money(value: float, lang: str) -> str:
    return f"{format_amount(value, lang)} {t('currency', lang)}"


def format_date(date_iso: str, lang: str) -> str:
    # Same day/month/year order for both locales; bad input is shown as-is
    try:
        d = parse_iso(date_iso)
    except ValueError:
        return str(date_iso)
    return d.strftime("%d/%m/%Y")


# ---------- Lookups ----------

def name_lookup(records) -> dict[int, str]:
    return {r.id: r.name for r in records}


def filter_students(students, search: str = ""):
    term = search.strip().lower()
    if not term:
        return list(students)
    return [s for s in students if term in s.name.lower() or term in s.national_id.lower()]


def vehicle_label(vehicle) -> str:
    return f"{vehicle.brand} ({vehicle.registration})"


# ---------- Finance ----------

def total_paid(student_id: int, payments) -> float:
    return sum(p.amount for p in payments if p.student_id == student_id)


def balance(student, payments) -> float:
    """Outstanding amount: training cost minus everything the student paid."""
    return student.total_training_cost - total_paid(student.id, payments)


def financial_totals(payments, expenses) -> dict[str, float]:
    total_income = sum(p.amount for p in payments)
    total_expenses = sum(e.amount for e in expenses)
    return {
        "total_income": total_income,
        "total_expenses": total_expenses,
        "net_profit": total_income - total_expenses,
    }


def revenue_summary_by_month(payments) -> pd.DataFrame:
    df = pd.DataFrame([{"date": p.date, "amount": p.amount} for p in payments])
    if df.empty:
        return pd.DataFrame(columns=["month", "revenue"])
    df["month"] = df["date"].str.slice(0, 7)
    out = df.groupby("month", as_index=False)["amount"].sum().rename(columns={"amount": "revenue"})
    return out.sort_values("month", ascending=False).reset_index(drop=True)


def dashboard_stats(state, today: date | None = None) -> dict[str, float]:
    today = today or date.today()
    month = today.isoformat()[:7]
    return {
        "total_students": len(state.students),
        "active_instructors": len(state.instructors),
        "available_vehicles": sum(1 for v in state.vehicles if v.status == "available"),
        "monthly_income": sum(p.amount for p in state.payments if p.date[:7] == month),
        "successful": sum(1 for s in state.students if s.status == "successful"),
        "failed": sum(1 for s in state.students if s.status == "failed"),
    }


# ---------- Schedule ----------

def weekday_index(date_iso: str) -> int:
    """Monday = 0 ... Sunday = 6."""
    return parse_iso(date_iso).weekday()


def build_schedule_grid(lessons) -> dict[tuple[int, str], object]:
    """
    Map (day index, slot) -> lesson. The first lesson in collection order wins
    when several share a cell; lessons outside the fixed slots are not placed.
    """
    grid: dict[tuple[int, str], object] = {}
    for lesson in lessons:
        if lesson.time not in TIME_SLOTS or not _is_iso_date(lesson.date):
            continue
        key = (weekday_index(lesson.date), lesson.time)
        if key not in grid:
            grid[key] = lesson
    return grid


def lesson_cell_lines(lesson, students, instructors) -> tuple[str, str]:
    if lesson.is_practical:
        return (
            name_lookup(students).get(lesson.student_id, ""),
            name_lookup(instructors).get(lesson.instructor_id, ""),
        )
    return lesson.topic, lesson.location


def normalize_lesson_fields(fields: dict) -> dict:
    """
    Clear the fields that belong to the other lesson variant.
    Practical lessons keep student/instructor/vehicle, theoretical keep topic/location.
    """
    out = dict(fields)
    if out.get("type") == "practical":
        for k in THEORETICAL_FIELDS:
            out[k] = ""
    else:
        for k in PRACTICAL_FIELDS:
            out[k] = None
    return out


def schedule_frame(lessons, students, instructors, lang: str) -> pd.DataFrame:
    """Text rendering of the weekly grid (rows = slots, columns = days)."""
    grid = build_schedule_grid(lessons)
    rows = []
    for slot in TIME_SLOTS:
        row = {t("time", lang): slot}
        for day_idx, day in enumerate(DAYS):
            lesson = grid.get((day_idx, slot))
            if lesson is None:
                row[t(day, lang)] = ""
            else:
                first, second = lesson_cell_lines(lesson, students, instructors)
                row[t(day, lang)] = " / ".join(x for x in (t(f"lesson_type_{lesson.type}", lang), first, second) if x)
        rows.append(row)
    return pd.DataFrame(rows)


# ---------- Documents ----------

def add_document(documents, name: str, file_name: str, upload_date: str | None = None) -> tuple[Document, ...]:
    doc = Document(
        id=max((d.id for d in documents), default=0) + 1,
        name=name.strip(),
        file_name=file_name,
        upload_date=upload_date or today_iso(),
    )
    return tuple(documents) + (doc,)


def remove_document(documents, doc_id: int) -> tuple[Document, ...]:
    return tuple(d for d in documents if d.id != doc_id)


# ---------- Validation (returns i18n error keys) ----------

def validate_student_inputs(name: str, phone: str, national_id: str, total_training_cost) -> list[str]:
    errors: list[str] = []
    if not name.strip():
        errors.append("err_name_required")
    if not phone.strip():
        errors.append("err_phone_required")
    if not national_id.strip():
        errors.append("err_national_id_required")
    if not _is_finite_number(total_training_cost):
        errors.append("err_cost_numeric")
    return errors


def validate_document_inputs(name: str, file_name: str | None) -> list[str]:
    if not name.strip() or not file_name:
        return ["alert_doc_name_file"]
    return []


def validate_instructor_inputs(name: str, phone: str, hire_date: str, assigned_vehicle_id: str) -> list[str]:
    errors: list[str] = []
    if not name.strip():
        errors.append("err_name_required")
    if not phone.strip():
        errors.append("err_phone_required")
    if not _is_iso_date(hire_date):
        errors.append("err_date_invalid")
    if str(assigned_vehicle_id).strip():
        try:
            vehicle_id = int(str(assigned_vehicle_id).strip())
        except ValueError:
            vehicle_id = 0
        if vehicle_id < 1:
            errors.append("err_vehicle_id_integer")
    return errors


def parse_optional_id(value) -> int | None:
    text = str(value).strip() if value is not None else ""
    return int(text) if text else None


def validate_vehicle_inputs(vtype: str, brand: str, registration: str, purchase_year, last_maintenance: str) -> list[str]:
    errors: list[str] = []
    if not vtype.strip():
        errors.append("err_type_required")
    if not brand.strip():
        errors.append("err_brand_required")
    if not registration.strip():
        errors.append("err_registration_required")
    try:
        int(str(purchase_year).strip())
    except ValueError:
        errors.append("err_year_integer")
    if not _is_iso_date(last_maintenance):
        errors.append("err_date_invalid")
    return errors


def validate_lesson_inputs(fields: dict) -> list[str]:
    errors: list[str] = []
    if fields.get("type") not in LESSON_TYPES:
        errors.append("err_lesson_type")
    if not _is_iso_date(fields.get("date", "")):
        errors.append("err_date_invalid")
    if fields.get("time") not in TIME_SLOTS:
        errors.append("err_time_slot")
    if fields.get("type") == "practical":
        if fields.get("student_id") is None:
            errors.append("err_student_required")
        if fields.get("instructor_id") is None:
            errors.append("err_instructor_required")
        if fields.get("vehicle_id") is None:
            errors.append("err_vehicle_required")
    elif fields.get("type") == "theoretical":
        if not str(fields.get("topic", "")).strip():
            errors.append("err_topic_required")
        if not str(fields.get("location", "")).strip():
            errors.append("err_location_required")
    return errors


def _validate_money_entry(amount, date_iso: str, description: str) -> list[str]:
    errors: list[str] = []
    if not _is_finite_number(amount):
        errors.append("err_amount_numeric")
    if not _is_iso_date(date_iso):
        errors.append("err_date_invalid")
    if not description.strip():
        errors.append("err_description_required")
    return errors


def validate_payment_inputs(student_id, amount, date_iso: str, description: str) -> list[str]:
    errors: list[str] = []
    if student_id is None:
        errors.append("err_student_required")
    return errors + _validate_money_entry(amount, date_iso, description)


def validate_expense_inputs(amount, date_iso: str, description: str) -> list[str]:
    return _validate_money_entry(amount, date_iso, description)


def validate_password_change(new1: str, new2: str) -> list[str]:
    if len(new1) < 6:
        return ["err_password_short"]
    if new1 != new2:
        return ["err_password_mismatch"]
    return []


# ---------- Tables ----------

def students_frame(students, payments, lang: str) -> pd.DataFrame:
    rows = [
        {
            "id": s.id,
            t("full_name", lang): s.name,
            t("phone_number", lang): s.phone,
            t("national_id", lang): s.national_id,
            t("license_type", lang): s.license_type,
            t("status", lang): t(f"student_status_{s.status}", lang),
            t("balance", lang): balance(s, payments),
        }
        for s in students
    ]
    columns = ["id", t("full_name", lang), t("phone_number", lang), t("national_id", lang),
               t("license_type", lang), t("status", lang), t("balance", lang)]
    return pd.DataFrame(rows, columns=columns)


def instructors_frame(instructors, lang: str) -> pd.DataFrame:
    rows = [
        {
            "id": i.id,
            t("full_name", lang): i.name,
            t("phone_number", lang): i.phone,
            t("hire_date", lang): i.hire_date,
            t("assigned_vehicle", lang): (
                f"{t('vehicle_no', lang)} {i.assigned_vehicle_id}" if i.assigned_vehicle_id else t("unassigned", lang)
            ),
        }
        for i in instructors
    ]
    columns = ["id", t("full_name", lang), t("phone_number", lang), t("hire_date", lang), t("assigned_vehicle", lang)]
    return pd.DataFrame(rows, columns=columns)


def vehicles_frame(vehicles, lang: str) -> pd.DataFrame:
    rows = [
        {
            "id": v.id,
            t("vehicle_type", lang): v.type,
            t("brand", lang): v.brand,
            t("registration", lang): v.registration,
            t("purchase_year", lang): v.purchase_year,
            t("status", lang): t(f"vehicle_status_{v.status}", lang),
            t("last_maintenance", lang): v.last_maintenance,
        }
        for v in vehicles
    ]
    columns = ["id", t("vehicle_type", lang), t("brand", lang), t("registration", lang),
               t("purchase_year", lang), t("status", lang), t("last_maintenance", lang)]
    return pd.DataFrame(rows, columns=columns)


def payments_frame(payments, students, lang: str) -> pd.DataFrame:
    names = name_lookup(students)
    rows = [
        {
            "id": p.id,
            t("student", lang): names.get(p.student_id, t("deleted_student", lang)),
            t("description", lang): p.description,
            t("amount", lang): p.amount,
            t("date", lang): p.date,
        }
        for p in payments
    ]
    columns = ["id", t("student", lang), t("description", lang), t("amount", lang), t("date", lang)]
    return pd.DataFrame(rows, columns=columns)


def expenses_frame(expenses, lang: str) -> pd.DataFrame:
    rows = [
        {
            "id": e.id,
            t("category", lang): t(f"expense_category_{e.category}", lang),
            t("description", lang): e.description,
            t("amount", lang): e.amount,
            t("date", lang): e.date,
        }
        for e in expenses
    ]
    columns = ["id", t("category", lang), t("description", lang), t("amount", lang), t("date", lang)]
    return pd.DataFrame(rows, columns=columns)


def frame_to_csv_bytes(df: pd.DataFrame) -> bytes:
    # utf-8-sig so spreadsheet tools open Arabic text correctly
    return df.to_csv(index=False).encode("utf-8-sig")
