from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from unimanage.db.base_class import Base


class FacultyProfile(Base):
    __tablename__ = "faculty_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)

    title = Column(String(100), nullable=False)
    bio = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)

    student_id = Column(String(50), unique=True, nullable=False)
    year = Column(Integer, nullable=False)
    achievement_points = Column(Integer, nullable=False, default=0)
    gpa = Column(String(10), nullable=False, default="0.0")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
