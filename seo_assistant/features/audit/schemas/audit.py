"""
Audit Schemas

Signals read from a rendered page, the issues raised against them and the
report that bundles both with a score.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ImageSignal(BaseModel):
    """One <img> element: resolved source and alt text (None when missing or empty)"""
    model_config = ConfigDict(frozen=True)

    src: Optional[str] = None
    alt: Optional[str] = None


class SignalSet(BaseModel):
    """Measurements extracted from one rendered page"""
    model_config = ConfigDict(frozen=True)

    title_text: str = ""
    title_length: int = 0
    description_text: Optional[str] = None
    description_length: int = 0
    h1_texts: Tuple[str, ...] = ()
    images: Tuple[ImageSignal, ...] = ()
    body_word_count: int = 0
    load_time_ms: int = 0
    http_status: Optional[int] = None

    @property
    def h1_count(self) -> int:
        return len(self.h1_texts)

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def images_without_alt(self) -> int:
        return sum(1 for image in self.images if not image.alt)


class Issue(BaseModel):
    """A single rule violation"""
    model_config = ConfigDict(frozen=True)

    code: str  # stable slug, e.g. "title-too-short"
    severity: Severity
    category: str
    title: str
    description: str
    remediation: str
    impact: Impact


class ReportMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    title_length: int = 0
    description_length: int = 0
    h1_count: int = 0
    image_count: int = 0
    images_without_alt: int = 0
    word_count: int = 0
    load_time_ms: int = 0
    http_status: Optional[int] = None

    @classmethod
    def from_signals(cls, signals: SignalSet) -> "ReportMetrics":
        return cls(
            title_length=signals.title_length,
            description_length=signals.description_length,
            h1_count=signals.h1_count,
            image_count=signals.image_count,
            images_without_alt=signals.images_without_alt,
            word_count=signals.body_word_count,
            load_time_ms=signals.load_time_ms,
            http_status=signals.http_status,
        )


class Report(BaseModel):
    """Immutable output of one analysis run"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "url": "https://example.com",
                "generated_at": "2026-10-19T08:00:00Z",
                "score": 50,
                "issues": [
                    {
                        "code": "title-too-short",
                        "severity": "critical",
                        "category": "Title",
                        "title": "Title Too Short",
                        "description": "Your title is only 4 characters",
                        "remediation": "Expand your title to 30-60 characters for better SEO",
                        "impact": "high",
                    }
                ],
                "metrics": {
                    "title_length": 4,
                    "description_length": 0,
                    "h1_count": 1,
                    "image_count": 0,
                    "images_without_alt": 0,
                    "word_count": 500,
                    "load_time_ms": 1200,
                    "http_status": 200,
                },
            }
        },
    )

    url: str
    generated_at: datetime
    score: int = Field(ge=0, le=100)
    issues: Tuple[Issue, ...] = ()
    metrics: ReportMetrics

    def issues_by_severity(self, severity: Severity) -> Tuple[Issue, ...]:
        return tuple(issue for issue in self.issues if issue.severity == severity)


class AuditIn(BaseModel):
    url: str = Field(..., description="The URL to audit")


class AuditEmailIn(AuditIn):
    email: EmailStr = Field(..., description="Recipient of the rendered report")


class AuditEmailOut(BaseModel):
    report: Report
    email_sent: bool
    email_error: Optional[str] = None
