from datetime import datetime

from pydantic import BaseModel


class DepartmentCount(BaseModel):
    department_id: int
    count: int


class YearCount(BaseModel):
    year: int
    count: int


class StudentSummary(BaseModel):
    id: int
    name: str
    year: int
    gpa: str
    achievement_points: int
    department_id: int | None


class StudentAnalytics(BaseModel):
    total_students: int
    average_gpa: str
    by_department: list[DepartmentCount]
    by_year: list[YearCount]
    students: list[StudentSummary]


class FacultySummary(BaseModel):
    id: int
    name: str
    title: str
    department_id: int | None
    classroom_count: int


class FacultyAnalytics(BaseModel):
    total_faculty: int
    by_department: list[DepartmentCount]
    faculty: list[FacultySummary]


class MonthCount(BaseModel):
    month: str
    count: int


class ClassroomCount(BaseModel):
    classroom_id: int
    name: str
    count: int


class EnrollmentAnalytics(BaseModel):
    total_enrollments: int
    by_month: list[MonthCount]
    by_classroom: list[ClassroomCount]


class DepartmentGpa(BaseModel):
    department_id: int
    department_name: str
    average_gpa: str


class AssignmentCompletion(BaseModel):
    assignment_id: int
    title: str
    completion_rate: str
    submitted: int
    total: int


class PerformanceAnalytics(BaseModel):
    average_gpa: str
    gpa_by_department: list[DepartmentGpa]
    submission_rate: str
    assignment_completion_rates: list[AssignmentCompletion]


class TypeCount(BaseModel):
    type: str
    count: int


class RecentMaterial(BaseModel):
    id: int
    title: str
    type: str
    classroom_name: str
    created_at: datetime


class ResourceAnalytics(BaseModel):
    total_materials: int
    by_type: list[TypeCount]
    by_classroom: list[ClassroomCount]
    recent_materials: list[RecentMaterial]
