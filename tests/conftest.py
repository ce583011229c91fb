from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from unimanage.core.security import hash_password
from unimanage.main import create_app
from unimanage.storage import Storage

PASSWORD = "password123"


def _user(username: str, role: str, first_name: str, last_name: str) -> dict:
    return {
        "username": username,
        "email": f"{username}@uni.edu",
        "password": hash_password(PASSWORD),
        "role": role,
        "first_name": first_name,
        "last_name": last_name,
    }


@pytest.fixture()
def storage() -> Storage:
    """A fresh in-memory store per test."""
    return Storage.from_url("sqlite://")


@pytest.fixture()
def seed(storage: Storage) -> SimpleNamespace:
    """Seed a clean minimal dataset: one of each role, two classrooms, one enrollment."""
    dept = storage.create_department(name="Computer Science", code="CS")

    admin = storage.create_user_with_profile(_user("admin1", "admin", "Ada", "Admin"))
    faculty = storage.create_user_with_profile(
        _user("faculty1", "faculty", "Fay", "Faculty"),
        {"title": "Professor", "department_id": dept.id},
    )
    other_faculty = storage.create_user_with_profile(
        _user("faculty2", "faculty", "Fred", "Faculty"),
        {"title": "Lecturer"},
    )
    student = storage.create_user_with_profile(
        _user("student1", "student", "Sam", "Student"),
        {"student_id": "S10001", "year": 2, "gpa": "3.5", "department_id": dept.id},
    )
    other_student = storage.create_user_with_profile(
        _user("student2", "student", "Sue", "Student"),
        {"student_id": "S10002", "year": 1, "gpa": "2.5"},
    )

    faculty_profile = storage.get_faculty_profile_by_user_id(faculty.id)
    student_profile = storage.get_student_profile_by_user_id(student.id)
    other_student_profile = storage.get_student_profile_by_user_id(other_student.id)

    # Classrooms: one taught by faculty1, one with nobody assigned yet
    owned = storage.create_classroom(
        class_id="CS-201-F23",
        name="Data Structures",
        department_id=dept.id,
        faculty_id=faculty_profile.id,
        semester="Fall",
        year="2023",
    )
    unowned = storage.create_classroom(
        class_id="CS-101-F23",
        name="Intro to Programming",
        semester="Fall",
        year="2023",
    )

    storage.create_enrollment(student_id=student_profile.id, classroom_id=owned.id)

    assignment = storage.create_assignment(classroom_id=owned.id, title="HW1", total_marks=100)

    return SimpleNamespace(
        department=dept,
        admin=admin,
        faculty=faculty,
        other_faculty=other_faculty,
        student=student,
        other_student=other_student,
        faculty_profile=faculty_profile,
        student_profile=student_profile,
        other_student_profile=other_student_profile,
        owned=owned,
        unowned=unowned,
        assignment=assignment,
    )


@pytest.fixture()
def client(storage: Storage, seed) -> TestClient:
    return TestClient(create_app(storage))
