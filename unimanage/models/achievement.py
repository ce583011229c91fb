from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from unimanage.db.base_class import Base


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("student_profiles.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    points = Column(Integer, nullable=False)

    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
