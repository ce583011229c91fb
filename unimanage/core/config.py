import os
from datetime import timedelta

# DEV defaults: override every value through the environment in production.
SECRET_KEY = os.getenv("SECRET_KEY", "university-management-secret")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
SESSION_EXPIRE = timedelta(minutes=int(os.getenv("SESSION_EXPIRE_MINUTES", "1440")))

# "sqlite://" keeps everything in memory for the lifetime of the process
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Registration policy
STUDENT_EMAIL_MARKER = os.getenv("STUDENT_EMAIL_MARKER", ".edu")
DEFAULT_FACULTY_TITLE = os.getenv("DEFAULT_FACULTY_TITLE", "Professor")
DEFAULT_STUDENT_YEAR = 1
