"""
db.py
In-memory "database": the per-session application state, generic collection
helpers (insert/update/delete/fetch) and the sample data every session starts from.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from datetime import date

from models import Document, Expense, Instructor, Lesson, Payment, Student, Vehicle

logger = logging.getLogger(__name__)

# Collection name -> record type
TABLES = {
    "students": Student,
    "instructors": Instructor,
    "vehicles": Vehicle,
    "lessons": Lesson,
    "payments": Payment,
    "expenses": Expense,
}


@dataclass
class SchoolInfo:
    name: str = "مدرسة النجاح لتعليم السياقة"
    address: str = "شارع محمد الخامس، الرباط"


@dataclass
class AppState:
    students: list[Student] = field(default_factory=list)
    instructors: list[Instructor] = field(default_factory=list)
    vehicles: list[Vehicle] = field(default_factory=list)
    lessons: list[Lesson] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    school: SchoolInfo = field(default_factory=SchoolInfo)
    # username -> bcrypt hash
    admin_users: dict[str, str] = field(default_factory=dict)


def _records(state: AppState, table: str) -> list:
    if table not in TABLES:
        raise KeyError(f"Unknown table: {table}")
    return getattr(state, table)


def next_id(records) -> int:
    return max((r.id for r in records), default=0) + 1


def fetch_all(state: AppState, table: str) -> list:
    return list(_records(state, table))


def fetch_one(state: AppState, table: str, record_id: int):
    for r in _records(state, table):
        if r.id == record_id:
            return r
    return None


def insert(state: AppState, table: str, **fields) -> int:
    """
    Create a record with id = max(existing ids, 0) + 1 and append it.
    Returns the new id.
    """
    records = _records(state, table)
    new_id = next_id(records)
    fields.pop("id", None)
    if table == "students":
        fields.setdefault("registration_date", date.today().isoformat())
    record = TABLES[table](id=new_id, **fields)
    setattr(state, table, records + [record])
    logger.info("Inserted %s id=%s", table, new_id)
    return new_id


def update(state: AppState, table: str, record_id: int, **fields):
    """
    Replace the matching record with a copy carrying the given fields.
    The id and any field not passed are preserved. Returns the new record,
    or None if no record has that id.
    """
    records = _records(state, table)
    fields.pop("id", None)
    updated = None
    new_records = []
    for r in records:
        if r.id == record_id:
            updated = dataclasses.replace(r, **fields)
            new_records.append(updated)
        else:
            new_records.append(r)
    if updated is None:
        logger.warning("Update skipped: %s id=%s not found", table, record_id)
        return None
    setattr(state, table, new_records)
    logger.info("Updated %s id=%s fields=%s", table, record_id, sorted(fields))
    return updated


def delete(state: AppState, table: str, record_id: int) -> bool:
    records = _records(state, table)
    remaining = [r for r in records if r.id != record_id]
    if len(remaining) == len(records):
        return False
    setattr(state, table, remaining)
    logger.info("Deleted %s id=%s", table, record_id)
    return True


def snapshot(state: AppState) -> dict[str, list[dict]]:
    """Plain-dict copy of the six collections (used for backups and comparisons)."""
    return {table: [dataclasses.asdict(r) for r in _records(state, table)] for table in TABLES}


def snapshot_json(state: AppState) -> bytes:
    return json.dumps(snapshot(state), ensure_ascii=False, indent=2).encode("utf-8")


def init_state(default_admin_hash: str | None = None) -> AppState:
    """
    Build a fresh session state.
    - Load the sample school data
    - Register the default admin (if a hash is given)
    """
    state = AppState(
        students=_sample_students(),
        instructors=_sample_instructors(),
        vehicles=_sample_vehicles(),
        lessons=_sample_lessons(),
        payments=_sample_payments(),
        expenses=_sample_expenses(),
    )
    if default_admin_hash:
        state.admin_users["admin"] = default_admin_hash
    return state


# ---------- Sample data ----------

def _sample_students() -> list[Student]:
    return [
        Student(1, "أحمد العلوي", "شارع الحرية، الرباط", "0612345678", "AB12345", "B", "successful", "2023-01-15", 3500.0, (
            Document(1, "البطاقة الوطنية", "cin_ahmed.pdf", "2023-01-15"),
            Document(2, "الشهادة الطبية", "certif_medical.pdf", "2023-01-16"),
        )),
        Student(2, "فاطمة الزهراء", "زنقة النصر، الدار البيضاء", "0698765432", "CD67890", "B", "in-training", "2023-03-20", 3500.0),
        Student(3, "يوسف بناني", "حي الأمل، مراكش", "0655443322", "EF11223", "A", "passed-exam", "2023-02-10", 4000.0),
        Student(4, "خديجة حمدي", "شارع المسيرة، أكادير", "0611223344", "GH44556", "C", "open", "2023-04-05", 8000.0),
        Student(5, "محمد أمين", "حي الرياض، طنجة", "0677889900", "IJ77889", "B", "failed", "2022-12-01", 3500.0),
    ]


def _sample_instructors() -> list[Instructor]:
    return [
        Instructor(1, "كريم العلمي", "0611223344", "2020-05-10", 1),
        Instructor(2, "نادية بوعزة", "0622334455", "2021-02-15", 3),
        Instructor(3, "سعيد رضوان", "0633445566", "2019-11-20", 2),
        Instructor(4, "لبنى فهيم", "0644556677", "2022-08-01", 4),
    ]


def _sample_vehicles() -> list[Vehicle]:
    return [
        Vehicle(1, "سيارة", "Renault Clio", "123-A-45", 2021, "available", "2023-05-15"),
        Vehicle(2, "سيارة", "Dacia Logan", "678-B-90", 2020, "available", "2023-04-20"),
        Vehicle(3, "سيارة", "Peugeot 208", "111-C-22", 2022, "maintenance", "2023-06-01"),
        Vehicle(4, "شاحنة", "Volvo FH", "333-D-44", 2019, "available", "2023-03-10"),
        Vehicle(5, "حافلة", "Mercedes-Benz Tourismo", "555-E-66", 2018, "out-of-service", "2023-01-05"),
    ]


def _sample_lessons() -> list[Lesson]:
    return [
        Lesson(1, "practical", "2024-07-22", "09:00", "scheduled", student_id=2, instructor_id=1, vehicle_id=1),
        Lesson(2, "practical", "2024-07-22", "10:00", "scheduled", student_id=3, instructor_id=2, vehicle_id=3),
        Lesson(3, "theoretical", "2024-07-23", "18:00", "completed", topic="قانون السير", location="القاعة 1"),
    ]


def _sample_payments() -> list[Payment]:
    return [
        Payment(1, 1, 1500.0, "2023-01-15", "دفعة التسجيل"),
        Payment(2, 2, 1500.0, "2023-03-20", "دفعة التسجيل"),
        Payment(3, 1, 2000.0, "2023-02-10", "دفعة حصص السياقة"),
        Payment(4, 3, 2000.0, "2023-02-11", "رخصة دراجة نارية"),
    ]


def _sample_expenses() -> list[Expense]:
    return [
        Expense(1, "maintenance", 800.0, "2023-06-01", "إصلاح Peugeot 208"),
        Expense(2, "salaries", 25000.0, "2023-05-30", "رواتب شهر مايو"),
        Expense(3, "rent", 10000.0, "2023-06-05", "إيجار مقر المدرسة"),
        Expense(4, "bills", 1200.0, "2023-06-03", "فاتورة الكهرباء والماء"),
    ]
