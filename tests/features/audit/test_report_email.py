from unittest.mock import MagicMock, patch

import pytest
import requests

from seo_assistant.features.audit.schemas.audit import Severity
from seo_assistant.features.audit.services.report_email import report_subject, send_report_email
from seo_assistant.platform.config import settings
from seo_assistant.platform.exceptions import ReportDeliveryError
from seo_assistant.platform.services import email as email_service


class TestSendReportEmail:
    @patch("seo_assistant.features.audit.services.report_email.send_email")
    def test_sends_rendered_report(self, mock_send, make_report, make_issue):
        report = make_report(score=75, issues=[make_issue(Severity.CRITICAL, title="Missing H1 Tag")])

        send_report_email("owner@example.com", report)

        to_email, subject, body = mock_send.call_args.args
        assert to_email == "owner@example.com"
        assert subject == "SEO Report for https://example.com - Score: 75/100"
        assert "Missing H1 Tag" in body
        assert '<div class="score warning">75/100</div>' in body

    @patch("seo_assistant.features.audit.services.report_email.send_email")
    def test_uses_configured_bands(self, mock_send, make_report, monkeypatch):
        monkeypatch.setattr(settings, "REPORT_SCORE_GOOD", 95)

        send_report_email("owner@example.com", make_report(score=90))

        body = mock_send.call_args.args[2]
        assert '<div class="score warning">90/100</div>' in body

    @patch("seo_assistant.features.audit.services.report_email.send_email")
    def test_delivery_failure_leaves_report_intact(self, mock_send, make_report):
        mock_send.side_effect = ReportDeliveryError("SMTP delivery failed")
        report = make_report(score=90)
        before = report.model_dump()

        with pytest.raises(ReportDeliveryError):
            send_report_email("owner@example.com", report)

        assert report.model_dump() == before

    def test_subject(self, make_report):
        assert report_subject(make_report(score=15, url="https://a.example")) == (
            "SEO Report for https://a.example - Score: 15/100"
        )


class TestEmailService:
    @pytest.fixture
    def relay(self, monkeypatch):
        monkeypatch.setattr(settings, "EMAIL_RELAY_URL", "https://relay.example.com/send")
        monkeypatch.setattr(settings, "EMAIL_RELAY_API_KEY", "secret")

    @patch("seo_assistant.platform.services.email.send_email_direct_smtp")
    @patch("seo_assistant.platform.services.email.requests.post")
    def test_relay_used_when_configured(self, mock_post, mock_smtp, relay):
        mock_post.return_value = MagicMock(status_code=200)

        email_service.send_email("owner@example.com", "Subject", "<p>body</p>")

        payload = mock_post.call_args.kwargs["json"]
        assert payload["to_email"] == "owner@example.com"
        assert payload["body"] == "<p>body</p>"
        assert mock_post.call_args.kwargs["headers"]["X-API-Key"] == "secret"
        mock_smtp.assert_not_called()

    @patch("seo_assistant.platform.services.email.send_email_direct_smtp")
    @patch("seo_assistant.platform.services.email.requests.post")
    def test_relay_failure_falls_back_to_smtp(self, mock_post, mock_smtp, relay):
        mock_post.side_effect = requests.exceptions.ConnectionError("relay down")

        email_service.send_email("owner@example.com", "Subject", "<p>body</p>")

        mock_smtp.assert_called_once_with("owner@example.com", "Subject", "<p>body</p>")

    @patch("seo_assistant.platform.services.email.smtplib.SMTP")
    def test_smtp_failure_is_surfaced(self, mock_smtp, monkeypatch):
        monkeypatch.setattr(settings, "EMAIL_RELAY_URL", "")
        mock_smtp.side_effect = OSError("connection refused")

        with pytest.raises(ReportDeliveryError):
            email_service.send_email("owner@example.com", "Subject", "<p>body</p>")

    @patch("seo_assistant.platform.services.email.smtplib.SMTP")
    def test_smtp_sends_html(self, mock_smtp, monkeypatch):
        monkeypatch.setattr(settings, "EMAIL_RELAY_URL", "")
        monkeypatch.setattr(settings, "MAIL_PORT", 587)
        server = mock_smtp.return_value.__enter__.return_value

        email_service.send_email("owner@example.com", "Subject", "<p>body</p>")

        server.starttls.assert_called_once()
        from_address, to_email, message = server.sendmail.call_args.args
        assert to_email == "owner@example.com"
        assert "text/html" in message
