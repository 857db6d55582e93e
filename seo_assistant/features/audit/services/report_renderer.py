import os
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict

from seo_assistant.features.audit.schemas.audit import Report, Severity

current_dir = os.path.dirname(os.path.abspath(__file__))
template_dir = os.path.join(current_dir, "../template")

if not os.path.exists(template_dir):
    template_dir = os.path.join(os.getcwd(), "seo_assistant/features/audit/template")

env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class ScoreBands(BaseModel):
    """Score thresholds for the report header colour. Not tied to the scorer weights."""
    model_config = ConfigDict(frozen=True)

    good: int = 80
    warning: int = 60

    def band(self, score: int) -> str:
        if score >= self.good:
            return "good"
        if score >= self.warning:
            return "warning"
        return "critical"


def render_email(
    report: Report,
    bands: Optional[ScoreBands] = None,
    dashboard_url: Optional[str] = None,
) -> str:
    """Render a report as a self-contained HTML document."""
    bands = bands or ScoreBands()
    template = env.get_template("seo_report.html")
    return template.render(
        report=report,
        score_band=bands.band(report.score),
        critical_issues=report.issues_by_severity(Severity.CRITICAL),
        warning_issues=report.issues_by_severity(Severity.WARNING),
        info_issues=report.issues_by_severity(Severity.INFO),
        generated_on=report.generated_at.strftime("%Y-%m-%d"),
        dashboard_url=dashboard_url,
    )
