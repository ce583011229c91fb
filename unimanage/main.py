import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from unimanage.core.config import LOG_LEVEL
from unimanage.core.errors import ConsistencyError, UniManageError
from unimanage.core.logging_middleware import LoggingMiddleware
from unimanage.routers.admin import router as admin_router
from unimanage.routers.analytics import router as analytics_router
from unimanage.routers.announcements import router as announcements_router
from unimanage.routers.assignments import router as assignments_router
from unimanage.routers.auth import router as auth_router
from unimanage.routers.classrooms import router as classrooms_router
from unimanage.routers.departments import router as departments_router
from unimanage.routers.enrollments import router as enrollments_router
from unimanage.routers.materials import router as materials_router
from unimanage.routers.students import router as students_router
from unimanage.routers.submissions import router as submissions_router
from unimanage.storage import Storage

logging.basicConfig(level=LOG_LEVEL)

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: UniManageError):
    if isinstance(exc, ConsistencyError):
        logger.exception("invariant violated on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid input", "errors": jsonable_encoder(exc.errors())},
    )


def create_app(storage: Storage | None = None) -> FastAPI:
    app = FastAPI(title="UniManage")
    app.state.storage = storage or Storage.from_url()

    # Middleware
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(UniManageError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Include routers
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(admin_router, prefix="/admin", tags=["admin"])
    app.include_router(departments_router, prefix="/departments", tags=["departments"])
    app.include_router(classrooms_router, prefix="/classrooms", tags=["classrooms"])
    app.include_router(assignments_router, tags=["assignments"])
    app.include_router(materials_router, tags=["materials"])
    app.include_router(announcements_router, tags=["announcements"])
    app.include_router(submissions_router, tags=["submissions"])
    app.include_router(enrollments_router, prefix="/enrollments", tags=["enrollments"])
    app.include_router(students_router, prefix="/student", tags=["student"])
    app.include_router(analytics_router, prefix="/analytics", tags=["analytics"])

    return app


app = create_app()
