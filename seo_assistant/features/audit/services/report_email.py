"""Email delivery of rendered SEO reports."""
from typing import Optional

from seo_assistant.features.audit.schemas.audit import Report
from seo_assistant.features.audit.services.report_renderer import ScoreBands, render_email
from seo_assistant.platform.config import settings
from seo_assistant.platform.logger import get_logger
from seo_assistant.platform.services.email import send_email

logger = get_logger(__name__)


def configured_bands() -> ScoreBands:
    return ScoreBands(good=settings.REPORT_SCORE_GOOD, warning=settings.REPORT_SCORE_WARNING)


def report_subject(report: Report) -> str:
    return f"SEO Report for {report.url} - Score: {report.score}/100"


def send_report_email(to_email: str, report: Report, dashboard_url: Optional[str] = None) -> None:
    """
    Render the report and hand it to the email service.
    Raises ReportDeliveryError; the report itself stays valid either way.
    """
    html_content = render_email(
        report,
        bands=configured_bands(),
        dashboard_url=dashboard_url or settings.DASHBOARD_URL,
    )
    send_email(to_email, report_subject(report), html_content)
    logger.info(f"SEO report sent to {to_email} for {report.url}")
