from sqlalchemy import Column, DateTime, ForeignKey, Integer, func

from unimanage.db.base_class import Base


class Follow(Base):
    __tablename__ = "follows"

    id = Column(Integer, primary_key=True, index=True)
    follower_id = Column(Integer, ForeignKey("student_profiles.id"), nullable=False, index=True)
    following_id = Column(Integer, ForeignKey("student_profiles.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # follows are deleted on unfollow; AUTOINCREMENT keeps ids from being reused
    __table_args__ = {"sqlite_autoincrement": True}
