from sqlalchemy.engine import Engine

from unimanage.db.base_class import Base

# import models so SQLAlchemy registers them
from unimanage.models import (  # noqa: F401
    achievement,
    announcement,
    assignment,
    auth_session,
    classroom,
    department,
    enrollment,
    follow,
    material,
    profile,
    submission,
    user,
)


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
