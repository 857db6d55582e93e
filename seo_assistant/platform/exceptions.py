from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from seo_assistant.platform.logger import get_logger
from seo_assistant.platform.response import api_response

logger = get_logger(__name__)


class AuditError(Exception):
    """Base class for failures raised while auditing a page."""


class SiteUnreachable(AuditError):
    """The site could not be loaded, or answered with a non-success status."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else (reason or "connection failed")
        super().__init__(f"Site not accessible: {url} ({detail})")


class AuditTimeout(AuditError):
    """The page did not finish loading within the time budget."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Page load timeout after {timeout:g} seconds for URL: {url}")


class MalformedPage(AuditError):
    """The rendered DOM could not be read. Extraction degrades instead of aborting."""


class ReportDeliveryError(Exception):
    """The rendered report could not be handed to the delivery channel."""


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(
            message=str(exc.detail) or "Error",
            status_code=exc.status_code,
            error_code="http_error",
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            data={"errors": exc.errors()},
            error_code="validation_failed",
        )

    @app.exception_handler(SiteUnreachable)
    async def site_unreachable_handler(request: Request, exc: SiteUnreachable):
        logger.warning(str(exc))
        return api_response(
            message="Website is not accessible. Please check if it's online.",
            status_code=status.HTTP_502_BAD_GATEWAY,
            data={"url": exc.url, "http_status": exc.status},
            error_code="site_unreachable",
        )

    @app.exception_handler(AuditTimeout)
    async def audit_timeout_handler(request: Request, exc: AuditTimeout):
        logger.warning(str(exc))
        return api_response(
            message="Website took too long to respond. Please try again.",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            data={"url": exc.url, "timeout_seconds": exc.timeout},
            error_code="audit_timeout",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="internal_error",
        )
