"""
Audit Services

Flow for one URL, leaves first:

1. page_renderer.py - headless Chrome, waits for network quiescence, tears down
2. signal_extractor.py - reads title, meta description, H1s, images, word count
3. rules.py - static catalog of independent rules, SignalSet -> Issue | None
4. scorer.py - 100 - 25 per critical - 10 per warning, floored at 0
5. audit.py - AuditService.analyze(url) -> Report

Delivery side:

6. report_renderer.py - render_email(report) -> HTML
7. report_email.py - send the rendered report through the email service
"""
from seo_assistant.features.audit.services.audit import AuditService, analyze
from seo_assistant.features.audit.services.report_renderer import ScoreBands, render_email

__all__ = ["AuditService", "analyze", "ScoreBands", "render_email"]
