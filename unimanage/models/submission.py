from sqlalchemy import Column, Integer, ForeignKey, DateTime, Text, func

from unimanage.db.base_class import Base

class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)

    assignment_id = Column(Integer, ForeignKey("assignments.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("student_profiles.id"), nullable=False, index=True)

    content = Column(Text, nullable=True)

    submission_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Grading fields (nullable until graded)
    marks = Column(Integer, nullable=True)
    feedback = Column(Text, nullable=True)
