from datetime import date, timedelta

import pytest

import db
import printing
import utils
from i18n import t
from models import DAYS, TIME_SLOTS, Document, Expense, Lesson, Payment, Student


@pytest.fixture
def state():
    return db.init_state()


def _student(student_id=1, cost=3500.0):
    return Student(student_id, "Ali", "", "06", "AA1", "B", "open", "2024-01-01", cost)


# ---------- Finance ----------

def test_balance_is_zero_when_fully_paid():
    payments = [Payment(1, 1, 1500.0, "2023-01-15", "a"), Payment(2, 1, 2000.0, "2023-02-10", "b")]
    assert utils.balance(_student(), payments) == 0


def test_balance_ignores_other_students_payments():
    payments = [Payment(1, 1, 1000.0, "2023-01-15", "a"), Payment(2, 2, 2000.0, "2023-02-10", "b")]
    assert utils.balance(_student(), payments) == 2500.0


def test_balance_can_be_negative_on_overpayment():
    assert utils.balance(_student(cost=100.0), [Payment(1, 1, 150.0, "2023-01-15", "a")]) == -50.0


def test_sample_balances(state):
    balances = {s.id: utils.balance(s, state.payments) for s in state.students}
    assert balances == {1: 0.0, 2: 2000.0, 3: 2000.0, 4: 8000.0, 5: 3500.0}


def test_financial_totals(state):
    totals = utils.financial_totals(state.payments, state.expenses)
    assert totals["total_income"] == 7000.0
    assert totals["total_expenses"] == 37000.0
    assert totals["net_profit"] == totals["total_income"] - totals["total_expenses"]


def test_financial_totals_empty():
    assert utils.financial_totals([], []) == {"total_income": 0, "total_expenses": 0, "net_profit": 0}


def test_financial_totals_only_expenses():
    totals = utils.financial_totals([], [Expense(1, "rent", 300.0, "2024-01-01", "r")])
    assert totals["net_profit"] == -300.0


def test_revenue_summary_by_month(state):
    df = utils.revenue_summary_by_month(state.payments)
    assert list(df["month"]) == ["2023-03", "2023-02", "2023-01"]
    assert list(df["revenue"]) == [1500.0, 4000.0, 1500.0]


def test_revenue_summary_by_month_empty():
    df = utils.revenue_summary_by_month([])
    assert df.empty
    assert list(df.columns) == ["month", "revenue"]


def test_dashboard_stats(state):
    stats = utils.dashboard_stats(state, today=date(2023, 2, 20))
    assert stats["total_students"] == 5
    assert stats["active_instructors"] == 4
    assert stats["available_vehicles"] == 3
    assert stats["monthly_income"] == 4000.0
    assert stats["successful"] == 1
    assert stats["failed"] == 1


# ---------- Schedule ----------

def test_weekday_index_starts_on_monday():
    assert utils.weekday_index("2024-07-22") == 0
    assert utils.weekday_index("2024-07-28") == 6


@pytest.mark.parametrize("day_idx", range(7))
@pytest.mark.parametrize("slot", TIME_SLOTS)
def test_lesson_lands_in_exactly_one_cell(day_idx, slot):
    lesson_date = (date(2024, 7, 22) + timedelta(days=day_idx)).isoformat()
    lesson = Lesson(1, "theoretical", lesson_date, slot, "scheduled", topic="Code", location="Room 1")
    grid = utils.build_schedule_grid([lesson])
    assert grid == {(day_idx, slot): lesson}


def test_grid_dimensions():
    assert len(DAYS) == 7
    assert TIME_SLOTS[0] == "08:00"
    assert TIME_SLOTS[-1] == "18:00"
    assert len(TIME_SLOTS) == 11


def test_grid_ignores_week_and_first_match_wins():
    first = Lesson(1, "theoretical", "2024-07-22", "09:00", "scheduled", topic="A", location="1")
    second = Lesson(2, "theoretical", "2024-07-29", "09:00", "scheduled", topic="B", location="2")
    grid = utils.build_schedule_grid([first, second])
    assert grid == {(0, "09:00"): first}


def test_grid_skips_lessons_outside_slots():
    lesson = Lesson(1, "theoretical", "2024-07-22", "19:30", "scheduled", topic="A", location="1")
    assert utils.build_schedule_grid([lesson]) == {}


def test_sample_schedule(state):
    grid = utils.build_schedule_grid(state.lessons)
    assert sorted(grid) == [(0, "09:00"), (0, "10:00"), (1, "18:00")]


def test_cell_lines_practical(state):
    lesson = state.lessons[0]
    assert utils.lesson_cell_lines(lesson, state.students, state.instructors) == ("فاطمة الزهراء", "كريم العلمي")


def test_cell_lines_practical_with_deleted_people(state):
    db.delete(state, "students", 2)
    db.delete(state, "instructors", 1)
    assert utils.lesson_cell_lines(state.lessons[0], state.students, state.instructors) == ("", "")


def test_cell_lines_theoretical(state):
    assert utils.lesson_cell_lines(state.lessons[2], state.students, state.instructors) == ("قانون السير", "القاعة 1")


def test_normalize_practical_drops_theoretical_fields():
    fields = {"type": "practical", "student_id": 1, "instructor_id": 2, "vehicle_id": 3, "topic": "x", "location": "y"}
    out = utils.normalize_lesson_fields(fields)
    assert out["topic"] == "" and out["location"] == ""
    assert (out["student_id"], out["instructor_id"], out["vehicle_id"]) == (1, 2, 3)
    assert fields["topic"] == "x"


def test_normalize_theoretical_drops_practical_fields():
    fields = {"type": "theoretical", "student_id": 1, "topic": "Signs", "location": "Room 2"}
    out = utils.normalize_lesson_fields(fields)
    assert out["student_id"] is None and out["instructor_id"] is None and out["vehicle_id"] is None
    assert out["topic"] == "Signs"


def test_switching_lesson_variant_on_update(state):
    fields = utils.normalize_lesson_fields({"type": "theoretical", "topic": "Priorités", "location": "Salle 2"})
    updated = db.update(state, "lessons", 1, **fields)
    assert updated.student_id is None and updated.vehicle_id is None
    assert updated.topic == "Priorités"
    assert updated.date == "2024-07-22"


def test_schedule_frame_shape(state):
    df = utils.schedule_frame(state.lessons, state.students, state.instructors, "fr")
    assert df.shape == (11, 8)
    assert df.loc[1, "Lundi"] == "Pratique / فاطمة الزهراء / كريم العلمي"
    assert df.loc[0, "Lundi"] == ""


# ---------- Lookups and tables ----------

def test_filter_students_by_name_or_national_id(state):
    assert [s.id for s in utils.filter_students(state.students, "cd678")] == [2]
    assert [s.id for s in utils.filter_students(state.students, "بناني")] == [3]
    assert len(utils.filter_students(state.students, "  ")) == 5


def test_payments_frame_shows_placeholder_for_deleted_student(state):
    db.delete(state, "students", 1)
    df = utils.payments_frame(state.payments, state.students, "fr")
    assert len(df) == 4
    assert list(df["Élève"]) == ["Élève supprimé", "فاطمة الزهراء", "Élève supprimé", "يوسف بناني"]


def test_students_frame_has_balance(state):
    df = utils.students_frame(state.students, state.payments, "fr")
    assert list(df["Reste à payer"]) == [0.0, 2000.0, 2000.0, 8000.0, 3500.0]
    assert df.loc[1, "Statut"] == "En formation"


def test_instructors_frame_vehicle_labels(state):
    db.update(state, "instructors", 4, assigned_vehicle_id=None)
    df = utils.instructors_frame(state.instructors, "fr")
    assert df.loc[0, "Véhicule attribué"] == "Véhicule n° 1"
    assert df.loc[3, "Véhicule attribué"] == "Non attribué"


def test_language_switch_leaves_records_untouched(state):
    before = db.snapshot(state)
    for lang in ("fr", "ar"):
        utils.students_frame(state.students, state.payments, lang)
        utils.payments_frame(state.payments, state.students, lang)
        utils.expenses_frame(state.expenses, lang)
        utils.vehicles_frame(state.vehicles, lang)
        utils.schedule_frame(state.lessons, state.students, state.instructors, lang)
        printing.student_file_html(state.students[0], state.payments, lang)
    assert db.snapshot_json(state) == db.snapshot_json(db.init_state())
    assert db.snapshot(state) == before


def test_csv_export_round_trips_headers(state):
    data = utils.frame_to_csv_bytes(utils.expenses_frame(state.expenses, "fr"))
    text = data.decode("utf-8-sig")
    assert text.splitlines()[0] == "id,Catégorie,Description,Montant,Date"


# ---------- Documents ----------

def test_add_document_appends_with_next_id():
    docs = (Document(1, "CIN", "cin.pdf", "2023-01-15"),)
    out = utils.add_document(docs, " Medical ", "med.pdf", "2024-02-02")
    assert out[-1] == Document(2, "Medical", "med.pdf", "2024-02-02")
    assert len(docs) == 1


def test_add_document_defaults_upload_date_to_today():
    out = utils.add_document((), "CIN", "cin.pdf")
    assert out == (Document(1, "CIN", "cin.pdf", date.today().isoformat()),)


def test_remove_document():
    docs = (Document(1, "A", "a.pdf", "2024-01-01"), Document(2, "B", "b.pdf", "2024-01-01"))
    assert utils.remove_document(docs, 1) == (docs[1],)


@pytest.mark.parametrize("name,file_name", [("", "a.pdf"), ("CIN", None), ("  ", None)])
def test_document_needs_name_and_file(name, file_name):
    assert utils.validate_document_inputs(name, file_name) == ["alert_doc_name_file"]


# ---------- Validation ----------

def test_validate_student_inputs():
    assert utils.validate_student_inputs("Ali", "06", "AA1", "3500") == []
    assert utils.validate_student_inputs("", " ", "", "abc") == [
        "err_name_required", "err_phone_required", "err_national_id_required", "err_cost_numeric",
    ]


def test_validate_instructor_inputs():
    assert utils.validate_instructor_inputs("Karim", "06", "2020-05-10", "") == []
    assert utils.validate_instructor_inputs("Karim", "06", "2020-05-10", "x") == ["err_vehicle_id_integer"]
    assert utils.parse_optional_id(" 3 ") == 3
    assert utils.parse_optional_id("") is None


def test_validate_vehicle_inputs():
    assert utils.validate_vehicle_inputs("Car", "Clio", "1-A-2", "2021", "2023-05-15") == []
    assert utils.validate_vehicle_inputs("Car", "Clio", "1-A-2", "2021.5", "bad") == ["err_year_integer", "err_date_invalid"]


def test_validate_lesson_inputs_by_variant():
    practical = {"type": "practical", "date": "2024-07-22", "time": "09:00", "student_id": 1, "instructor_id": None, "vehicle_id": 2}
    assert utils.validate_lesson_inputs(practical) == ["err_instructor_required"]
    theoretical = {"type": "theoretical", "date": "2024-07-22", "time": "07:00", "topic": "Code", "location": ""}
    assert utils.validate_lesson_inputs(theoretical) == ["err_time_slot", "err_location_required"]


def test_validate_money_entries():
    assert utils.validate_payment_inputs(1, "1500", "2024-01-01", "Inscription") == []
    assert utils.validate_payment_inputs(None, "x", "2024-01-01", "") == [
        "err_student_required", "err_amount_numeric", "err_description_required",
    ]
    assert utils.validate_expense_inputs("800", "2024-13-01", "Repair") == ["err_date_invalid"]


def test_validate_password_change():
    assert utils.validate_password_change("abc", "abc") == ["err_password_short"]
    assert utils.validate_password_change("abcdef", "abcdeg") == ["err_password_mismatch"]
    assert utils.validate_password_change("abcdef", "abcdef") == []


# ---------- Formatting ----------

def test_format_amount():
    assert utils.format_amount(3500, "ar") == "3,500"
    assert utils.format_amount(3500, "fr") == "3\u202f500"
    assert utils.format_amount(12.5, "fr") == "12,50"


def test_format_money_and_date():
    assert utils.format_money(800, "fr") == f"800 {t('currency', 'fr')}"
    assert utils.format_date("2023-01-15", "fr") == "15/01/2023"
    assert utils.format_date("not a date", "ar") == "not a date"


@pytest.mark.parametrize("value", ["inf", "-inf", "nan", "1e999"])
def test_non_finite_amounts_are_rejected(value):
    assert utils.validate_payment_inputs(1, value, "2024-01-01", "x") == ["err_amount_numeric"]
    assert utils.validate_expense_inputs(value, "2024-01-01", "x") == ["err_amount_numeric"]
    assert utils.validate_student_inputs("Ali", "06", "AA1", value) == ["err_cost_numeric"]


@pytest.mark.parametrize("value", ["0", "-3", "1.5"])
def test_assigned_vehicle_id_must_be_positive(value):
    assert utils.validate_instructor_inputs("Karim", "06", "2020-05-10", value) == ["err_vehicle_id_integer"]


def test_format_amount_does_not_raise_on_non_finite():
    assert utils.format_amount(float("inf"), "fr") == "inf"
    assert utils.format_money(float("nan"), "ar") == f"nan {t('currency', 'ar')}"
