from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from seo_assistant.features.audit.schemas.audit import AuditEmailIn, AuditEmailOut, AuditIn, Report
from seo_assistant.features.audit.services.audit import AuditService
from seo_assistant.features.audit.services.report_email import configured_bands, send_report_email
from seo_assistant.features.audit.services.report_renderer import render_email
from seo_assistant.platform.config import settings
from seo_assistant.platform.exceptions import ReportDeliveryError
from seo_assistant.platform.logger import get_logger
from seo_assistant.platform.response import api_response
from seo_assistant.platform.schemas import APIResponse
from seo_assistant.platform.utils.url_validator import validate_url

logger = get_logger("audit_routes")
router = APIRouter(prefix="/audit", tags=["audit"])


def get_audit_service() -> AuditService:
    return AuditService()


def _validated_url(url: str) -> str:
    is_valid, normalized_url, error = validate_url(url)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
    return normalized_url


# Sync handlers: FastAPI runs them in its threadpool, Selenium blocks.
@router.post("", response_model=APIResponse[Report])
def audit_site(
    audit_in: AuditIn,
    audit_service: AuditService = Depends(get_audit_service),
):
    url = _validated_url(audit_in.url)
    logger.info(f"Starting audit for URL: {url}")

    report = audit_service.analyze(url)

    return api_response(
        data=report,
        message="Website Audited",
        status_code=status.HTTP_200_OK,
    )


@router.post("/report", response_class=HTMLResponse)
def audit_site_report(
    audit_in: AuditIn,
    audit_service: AuditService = Depends(get_audit_service),
):
    url = _validated_url(audit_in.url)
    report = audit_service.analyze(url)
    return HTMLResponse(
        content=render_email(report, bands=configured_bands(), dashboard_url=settings.DASHBOARD_URL)
    )


@router.post("/email", response_model=APIResponse[AuditEmailOut])
def audit_site_and_email(
    audit_in: AuditEmailIn,
    audit_service: AuditService = Depends(get_audit_service),
):
    url = _validated_url(audit_in.url)
    report = audit_service.analyze(url)

    email_error = None
    try:
        send_report_email(audit_in.email, report)
    except ReportDeliveryError as e:
        logger.error(f"Report for {url} produced but delivery to {audit_in.email} failed: {e}")
        email_error = str(e)

    result = AuditEmailOut(report=report, email_sent=email_error is None, email_error=email_error)
    return api_response(
        data=result,
        message="Website Audited" if email_error is None else "Website Audited, email delivery failed",
        status_code=status.HTTP_200_OK,
    )
