import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from unimanage.core.config import DATABASE_URL
from unimanage.db.init_db import init_db
from unimanage.db.session import create_db_engine, create_session_factory
from unimanage.storage.academic import AcademicStore
from unimanage.storage.identity import IdentityStore
from unimanage.storage.profiles import ProfileStore
from unimanage.storage.sessions import SessionStore


class Storage(IdentityStore, ProfileStore, AcademicStore, SessionStore):
    """The application's single data-access object.

    Every store call runs under ``lock``. Route code that has to read,
    check and then write (duplicate enrollment, duplicate follow) holds
    the same re-entrant lock across the whole sequence.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self.lock = threading.RLock()

    @classmethod
    def from_url(cls, database_url: str = DATABASE_URL) -> "Storage":
        engine = create_db_engine(database_url)
        init_db(engine)
        return cls(create_session_factory(engine))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self.lock:
            db = self._session_factory()
            try:
                yield db
            finally:
                db.close()


__all__ = ["Storage"]
