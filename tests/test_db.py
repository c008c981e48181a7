from datetime import date

import pytest

import db
from models import Payment, Student


@pytest.fixture
def state():
    return db.init_state()


def test_init_state_loads_sample_data(state):
    assert len(state.students) == 5
    assert len(state.instructors) == 4
    assert len(state.vehicles) == 5
    assert len(state.lessons) == 3
    assert len(state.payments) == 4
    assert len(state.expenses) == 4
    assert state.admin_users == {}


def test_init_state_registers_default_admin():
    state = db.init_state("hash")
    assert state.admin_users == {"admin": "hash"}


def test_next_id_of_empty_collection_is_one():
    assert db.next_id([]) == 1


def test_insert_assigns_max_plus_one(state):
    new_id = db.insert(state, "payments", student_id=2, amount=500.0, date="2024-01-01", description="x")
    assert new_id == 5
    assert db.fetch_one(state, "payments", 5) == Payment(5, 2, 500.0, "2024-01-01", "x")


def test_insert_into_empty_collection(state):
    state.expenses = []
    assert db.insert(state, "expenses", category="rent", amount=1.0, date="2024-01-01", description="r") == 1


def test_deleted_id_is_not_reused(state):
    assert db.delete(state, "students", 2)
    new_id = db.insert(
        state, "students", name="Sara", address="", phone="0600000000", national_id="ZZ1",
        license_type="B", status="open", total_training_cost=3000.0,
    )
    assert new_id == 6
    assert db.fetch_one(state, "students", 2) is None


def test_deleting_the_max_id_frees_it(state):
    db.delete(state, "vehicles", 5)
    new_id = db.insert(
        state, "vehicles", type="Car", brand="Kia Picanto", registration="999-F-1",
        purchase_year=2023, status="available", last_maintenance="2024-01-01",
    )
    assert new_id == 5


def test_insert_ignores_caller_id(state):
    new_id = db.insert(state, "payments", id=99, student_id=1, amount=1.0, date="2024-01-01", description="x")
    assert new_id == 5


def test_insert_student_defaults_registration_date(state):
    new_id = db.insert(
        state, "students", name="Sara", address="", phone="06", national_id="ZZ1",
        license_type="A", status="open", total_training_cost=1000.0,
    )
    student = db.fetch_one(state, "students", new_id)
    assert student.registration_date == date.today().isoformat()
    assert student.documents == ()


def test_update_changes_only_given_fields(state):
    before = db.fetch_one(state, "students", 3)
    updated = db.update(state, "students", 3, status="successful", phone="0700000000")
    assert updated.status == "successful"
    assert updated.phone == "0700000000"
    assert updated.id == 3
    for field in ("name", "address", "national_id", "license_type", "registration_date", "total_training_cost", "documents"):
        assert getattr(updated, field) == getattr(before, field)
    assert db.fetch_one(state, "students", 3) == updated


def test_update_keeps_id_even_if_passed(state):
    updated = db.update(state, "payments", 1, id=42, amount=10.0)
    assert updated.id == 1
    assert db.fetch_one(state, "payments", 42) is None


def test_update_keeps_collection_order(state):
    db.update(state, "instructors", 2, name="Nadia")
    assert [i.id for i in state.instructors] == [1, 2, 3, 4]


def test_update_missing_record_returns_none(state):
    before = db.snapshot(state)
    assert db.update(state, "vehicles", 404, status="maintenance") is None
    assert db.snapshot(state) == before


def test_update_unknown_field_raises(state):
    with pytest.raises(TypeError):
        db.update(state, "vehicles", 1, colour="red")


def test_unknown_table_raises(state):
    with pytest.raises(KeyError):
        db.fetch_all(state, "courses")


def test_delete_missing_record_returns_false(state):
    assert not db.delete(state, "lessons", 404)
    assert len(state.lessons) == 3


def test_mutations_replace_the_list(state):
    original = state.payments
    db.insert(state, "payments", student_id=1, amount=1.0, date="2024-01-01", description="x")
    assert state.payments is not original
    assert len(original) == 4


def test_deleting_student_keeps_their_payments(state):
    db.delete(state, "students", 1)
    assert [p.id for p in state.payments if p.student_id == 1] == [1, 3]


def test_any_status_transition_is_allowed(state):
    db.update(state, "students", 1, status="open")
    db.update(state, "students", 1, status="failed")
    assert db.fetch_one(state, "students", 1).status == "failed"


def test_snapshot_json_is_utf8(state):
    raw = db.snapshot_json(state).decode("utf-8")
    assert "أحمد العلوي" in raw
    assert set(db.snapshot(state)) == set(db.TABLES)


def test_fetch_all_returns_a_copy(state):
    rows = db.fetch_all(state, "students")
    rows.clear()
    assert len(state.students) == 5
    assert isinstance(state.students[0], Student)
