import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start
        # set by get_current_user once the session resolves
        user_id = getattr(request.state, "user_id", None)
        logger.info(
            "%s %s -> %s (%.2fs) user=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            user_id if user_id is not None else "-",
        )

        return response
