from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from selenium.common.exceptions import WebDriverException

from seo_assistant.features.audit.schemas.audit import Report, ReportMetrics, Severity
from seo_assistant.features.audit.services.page_renderer import PageRenderer
from seo_assistant.features.audit.services.rules import RULES, Rule, evaluate
from seo_assistant.features.audit.services.scorer import calculate_score
from seo_assistant.features.audit.services.signal_extractor import SignalExtractor
from seo_assistant.platform.exceptions import SiteUnreachable
from seo_assistant.platform.logger import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditService:
    """Produces a Report for one URL: render, extract, evaluate, score."""

    def __init__(
        self,
        renderer: Optional[PageRenderer] = None,
        rules: Sequence[Rule] = RULES,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.renderer = renderer or PageRenderer()
        self.rules = rules
        self._now = now

    def analyze(self, url: str) -> Report:
        """
        Raises SiteUnreachable or AuditTimeout; no Report is built in that case.
        """
        logger.info(f"Running SEO analysis for {url}")

        with self.renderer.render(url) as page:
            try:
                signals = SignalExtractor.extract(page)
            except WebDriverException as e:
                raise SiteUnreachable(url, reason=f"browser lost while reading page: {e.msg or str(e)}")

        issues = evaluate(signals, self.rules)
        score = calculate_score(issues)

        report = Report(
            url=url,
            generated_at=self._now(),
            score=score,
            issues=issues,
            metrics=ReportMetrics.from_signals(signals),
        )

        logger.info(
            f"SEO analysis for {url} finished: score {score}/100, "
            f"{len(report.issues_by_severity(Severity.CRITICAL))} critical, "
            f"{len(report.issues_by_severity(Severity.WARNING))} warnings"
        )
        return report


def analyze(url: str) -> Report:
    return AuditService().analyze(url)
