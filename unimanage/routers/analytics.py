from collections import Counter, defaultdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from unimanage.core.deps import get_storage
from unimanage.core.permissions import require
from unimanage.models.user import User
from unimanage.schemas.analytics import (
    EnrollmentAnalytics,
    FacultyAnalytics,
    PerformanceAnalytics,
    ResourceAnalytics,
    StudentAnalytics,
)
from unimanage.storage import Storage

router = APIRouter()

RECENT_MATERIALS = 10
HISTORY_MONTHS = 12


def _parse_gpa(value: str | None) -> float:
    try:
        return float(value or "0")
    except ValueError:
        return 0.0


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def _last_months(now: datetime, count: int = HISTORY_MONTHS) -> list[str]:
    """Month keys (YYYY-MM) for the current month and the ``count - 1`` before it, oldest first."""
    keys = []
    year, month = now.year, now.month
    for _ in range(count):
        keys.append(f"{year}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return sorted(keys)


def _by_department(profiles) -> list[dict]:
    counts = Counter(p.department_id or 0 for p in profiles)
    return [{"department_id": dept_id, "count": n} for dept_id, n in counts.items()]


@router.get("/students", response_model=StudentAnalytics)
def student_analytics(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("analytics.view")),
):
    rows = storage.get_all_students()
    profiles = [p for p, _ in rows]

    by_year = Counter(p.year for p in profiles)

    return {
        "total_students": len(profiles),
        "average_gpa": f"{_average([_parse_gpa(p.gpa) for p in profiles]):.2f}",
        "by_department": _by_department(profiles),
        "by_year": [{"year": year, "count": n} for year, n in by_year.items()],
        "students": [
            {
                "id": p.id,
                "name": f"{u.first_name} {u.last_name}",
                "year": p.year,
                "gpa": p.gpa,
                "achievement_points": p.achievement_points,
                "department_id": p.department_id,
            }
            for p, u in rows
        ],
    }


@router.get("/faculty", response_model=FacultyAnalytics)
def faculty_analytics(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("analytics.view")),
):
    rows = storage.get_all_faculty()
    classrooms_per_faculty = Counter(
        c.faculty_id for c in storage.get_all_classrooms() if c.faculty_id is not None
    )

    return {
        "total_faculty": len(rows),
        "by_department": _by_department([p for p, _ in rows]),
        "faculty": [
            {
                "id": p.id,
                "name": f"{u.first_name} {u.last_name}",
                "title": p.title,
                "department_id": p.department_id,
                "classroom_count": classrooms_per_faculty.get(p.id, 0),
            }
            for p, u in rows
        ],
    }


@router.get("/enrollments", response_model=EnrollmentAnalytics)
def enrollment_analytics(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("analytics.view")),
):
    enrollments = storage.get_all_enrollments()
    names = {c.id: c.name for c in storage.get_all_classrooms()}

    by_month = {key: 0 for key in _last_months(datetime.now(timezone.utc))}
    for e in enrollments:
        key = e.enrollment_date.strftime("%Y-%m")
        if key in by_month:
            by_month[key] += 1

    by_classroom = Counter(e.classroom_id for e in enrollments)

    return {
        "total_enrollments": len(enrollments),
        "by_month": [{"month": m, "count": n} for m, n in by_month.items()],
        "by_classroom": [
            {"classroom_id": cid, "name": names.get(cid, "Unknown"), "count": n}
            for cid, n in by_classroom.most_common()
        ],
    }


@router.get("/performance", response_model=PerformanceAnalytics)
def performance_analytics(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("analytics.view")),
):
    profiles = [p for p, _ in storage.get_all_students()]
    department_names = {d.id: d.name for d in storage.get_all_departments()}

    gpa_by_department = defaultdict(list)
    for p in profiles:
        if p.department_id and p.gpa:
            gpa_by_department[p.department_id].append(_parse_gpa(p.gpa))

    # an assignment is expected from every student enrolled in its classroom
    enrolled = Counter(e.classroom_id for e in storage.get_all_enrollments())
    submitters = defaultdict(set)
    for s in storage.get_all_submissions():
        submitters[s.assignment_id].add(s.student_id)

    completion = []
    for a in sorted(storage.get_all_assignments(), key=lambda a: a.id):
        submitted = len(submitters.get(a.id, ()))
        total = enrolled.get(a.classroom_id, 0)
        completion.append(
            {
                "assignment_id": a.id,
                "title": a.title,
                "rate": _percent(submitted, total),
                "submitted": submitted,
                "total": total,
            }
        )

    return {
        "average_gpa": f"{_average([_parse_gpa(p.gpa) for p in profiles]):.2f}",
        "gpa_by_department": [
            {
                "department_id": dept_id,
                "department_name": department_names.get(dept_id, "Unknown"),
                "average_gpa": f"{_average(values):.2f}",
            }
            for dept_id, values in gpa_by_department.items()
        ],
        "submission_rate": f"{_average([row['rate'] for row in completion]):.1f}%",
        "assignment_completion_rates": [
            {
                "assignment_id": row["assignment_id"],
                "title": row["title"],
                "completion_rate": f"{row['rate']:.1f}%",
                "submitted": row["submitted"],
                "total": row["total"],
            }
            for row in completion
        ],
    }


@router.get("/resources", response_model=ResourceAnalytics)
def resource_analytics(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("analytics.view")),
):
    materials = storage.get_all_materials()
    names = {c.id: c.name for c in storage.get_all_classrooms()}

    by_type = Counter(m.type for m in materials)
    by_classroom = Counter(m.classroom_id for m in materials)
    recent = sorted(materials, key=lambda m: (m.created_at, m.id), reverse=True)[:RECENT_MATERIALS]

    return {
        "total_materials": len(materials),
        "by_type": [{"type": t, "count": n} for t, n in by_type.most_common()],
        "by_classroom": [
            {"classroom_id": cid, "name": names.get(cid, "Unknown"), "count": n}
            for cid, n in by_classroom.most_common()
        ],
        "recent_materials": [
            {
                "id": m.id,
                "title": m.title,
                "type": m.type,
                "classroom_name": names.get(m.classroom_id, "Unknown"),
                "created_at": m.created_at,
            }
            for m in recent
        ],
    }
