"""
Test configuration and fixtures for the Daily SEO Assistant.

No test here starts a real browser: drivers are MagicMocks that answer
find_elements() from a small in-memory DOM and get_log("performance") from
canned DevTools network events.
"""
import json
from datetime import datetime, timezone
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from selenium.webdriver.common.by import By

from seo_assistant.features.audit.schemas.audit import (
    ImageSignal,
    Impact,
    Issue,
    Report,
    ReportMetrics,
    Severity,
    SignalSet,
)


def perf_entry(method: str, **params) -> dict:
    """One entry as returned by driver.get_log("performance")."""
    return {
        "level": "INFO",
        "timestamp": 0,
        "message": json.dumps({"message": {"method": method, "params": params}}),
    }


def document_entries(status: int = 200, url: str = "https://example.com/") -> list:
    return [
        perf_entry("Network.requestWillBeSent", requestId="doc", type="Document"),
        perf_entry(
            "Network.responseReceived",
            requestId="doc",
            type="Document",
            response={"status": status, "url": url},
        ),
        perf_entry("Network.loadingFinished", requestId="doc"),
    ]


def make_element(text: str = "", **attributes) -> MagicMock:
    element = MagicMock()
    element.text = text
    element.get_attribute.side_effect = lambda name: attributes.get(name)
    return element


def make_dom_driver(
    title: str = "",
    description=None,
    h1s=(),
    images=(),
    body_text: str = "",
) -> MagicMock:
    """
    Driver whose DOM holds a title, an optional meta description, h1 elements,
    (src, alt) images and a body with the given visible text.
    """
    driver = MagicMock()
    driver.title = title
    driver.current_url = "https://example.com/"
    elements = {
        (By.CSS_SELECTOR, 'meta[name="description"]'): (
            [] if description is None else [make_element(content=description)]
        ),
        (By.TAG_NAME, "h1"): [make_element(textContent=text) for text in h1s],
        (By.TAG_NAME, "img"): [make_element(src=src, alt=alt) for src, alt in images],
        (By.TAG_NAME, "body"): [make_element(text=body_text)],
    }
    driver.find_elements.side_effect = lambda by, value: list(elements.get((by, value), []))
    driver.get_log.return_value = []
    return driver


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.advance(seconds)


def words(count: int) -> str:
    return " ".join(["word"] * count)


@pytest.fixture
def dom_driver():
    return make_dom_driver


@pytest.fixture
def element():
    return make_element


@pytest.fixture
def perf():
    return perf_entry


@pytest.fixture
def document_log():
    return document_entries


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def body_words():
    return words


@pytest.fixture
def make_signals():
    """Signals of a page that passes every rule, with overrides."""

    def _make(**overrides) -> SignalSet:
        values = {
            "title_text": "A" * 45,
            "description_text": "D" * 140,
            "h1_texts": ("Welcome",),
            "images": (ImageSignal(src="https://example.com/a.png", alt="A"),),
            "body_word_count": 900,
            "load_time_ms": 1200,
            "http_status": 200,
        }
        values.update(overrides)
        values["title_length"] = len(values["title_text"])
        description = values["description_text"]
        values["description_length"] = len(description) if description is not None else 0
        return SignalSet(**values)

    return _make


@pytest.fixture
def make_issue():
    def _make(severity: Severity, code: str = "test-issue", title: str = "Test Issue") -> Issue:
        return Issue(
            code=code,
            severity=severity,
            category="Test",
            title=title,
            description=f"{title} description",
            remediation=f"{title} remediation",
            impact=Impact.MEDIUM,
        )

    return _make


@pytest.fixture
def make_report():
    def _make(score: int = 100, issues=(), url: str = "https://example.com") -> Report:
        return Report(
            url=url,
            generated_at=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc),
            score=score,
            issues=tuple(issues),
            metrics=ReportMetrics(
                title_length=45,
                description_length=140,
                h1_count=1,
                image_count=3,
                images_without_alt=0,
                word_count=912,
                load_time_ms=1234,
                http_status=200,
            ),
        )

    return _make


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from seo_assistant.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as test_client:
        yield test_client
