from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from unimanage.db.base_class import Base


class Enrollment(Base):
    __tablename__ = "enrollments"

    # (student_id, classroom_id) uniqueness is checked before insert, see routers/enrollments.py
    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(
        Integer, ForeignKey("student_profiles.id"), nullable=False, index=True
    )
    classroom_id = Column(
        Integer,
        ForeignKey("classrooms.id"),
        nullable=False,
        index=True,
    )
    enrollment_date = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    grade = Column(String(10), nullable=True)
    progress = Column(Integer, nullable=False, default=0)
