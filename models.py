"""
models.py
Domain records (dataclasses) and the fixed value sets used by forms.
"""

from __future__ import annotations
from dataclasses import dataclass

LICENSE_TYPES = ["A", "B", "C", "D", "E"]

STUDENT_STATUSES = ["open", "in-training", "passed-exam", "successful", "failed"]
VEHICLE_STATUSES = ["available", "maintenance", "out-of-service"]
LESSON_TYPES = ["practical", "theoretical"]
LESSON_STATUSES = ["scheduled", "completed", "cancelled"]
EXPENSE_CATEGORIES = ["maintenance", "salaries", "rent", "bills", "other"]

# Weekly grid: Monday first, hourly slots 08:00..18:00
DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
TIME_SLOTS = [f"{h:02d}:00" for h in range(8, 19)]

PRACTICAL_FIELDS = ("student_id", "instructor_id", "vehicle_id")
THEORETICAL_FIELDS = ("topic", "location")


@dataclass(frozen=True)
class Document:
    id: int
    name: str
    file_name: str
    upload_date: str


@dataclass(frozen=True)
class Student:
    id: int
    name: str
    address: str
    phone: str
    national_id: str
    license_type: str  # A..E
    status: str  # see STUDENT_STATUSES
    registration_date: str
    total_training_cost: float
    documents: tuple[Document, ...] = ()


@dataclass(frozen=True)
class Instructor:
    id: int
    name: str
    phone: str
    hire_date: str
    assigned_vehicle_id: int | None = None


@dataclass(frozen=True)
class Vehicle:
    id: int
    type: str
    brand: str
    registration: str
    purchase_year: int
    status: str  # see VEHICLE_STATUSES
    last_maintenance: str


@dataclass(frozen=True)
class Lesson:
    """
    A scheduled lesson. `type` selects which optional fields apply:
    practical -> student_id/instructor_id/vehicle_id, theoretical -> topic/location.
    """

    id: int
    type: str
    date: str
    time: str
    status: str
    student_id: int | None = None
    instructor_id: int | None = None
    vehicle_id: int | None = None
    topic: str = ""
    location: str = ""

    @property
    def is_practical(self) -> bool:
        return self.type == "practical"


@dataclass(frozen=True)
class Payment:
    id: int
    student_id: int
    amount: float
    date: str
    description: str


@dataclass(frozen=True)
class Expense:
    id: int
    category: str  # see EXPENSE_CATEGORIES
    amount: float
    date: str
    description: str
