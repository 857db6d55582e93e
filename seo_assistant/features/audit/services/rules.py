"""
SEO rule catalog.

Each rule looks at one group of signals and returns at most one Issue. Within
a rule the conditions are checked in order and only the first match fires.
Rules never look at each other's results, so RULES can be reordered without
changing which issues are produced (order only affects presentation).
"""
from typing import Callable, Optional, Sequence, Tuple

from seo_assistant.features.audit.schemas.audit import Impact, Issue, Severity, SignalSet

Rule = Callable[[SignalSet], Optional[Issue]]

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160
MIN_WORD_COUNT = 300
MAX_LOAD_TIME_MS = 3000


def title_rule(signals: SignalSet) -> Optional[Issue]:
    if not signals.title_text:
        return Issue(
            code="title-missing",
            severity=Severity.CRITICAL,
            category="Title",
            title="Missing Page Title",
            description="Your page has no title tag",
            remediation="Add a descriptive <title> tag to your HTML head section",
            impact=Impact.HIGH,
        )
    if signals.title_length < TITLE_MIN_LENGTH:
        return Issue(
            code="title-too-short",
            severity=Severity.CRITICAL,
            category="Title",
            title="Title Too Short",
            description=f"Your title is only {signals.title_length} characters",
            remediation=f"Expand your title to {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters for better SEO",
            impact=Impact.HIGH,
        )
    if signals.title_length > TITLE_MAX_LENGTH:
        return Issue(
            code="title-too-long",
            severity=Severity.WARNING,
            category="Title",
            title="Title Too Long",
            description=f"Your title is {signals.title_length} characters and may be truncated",
            remediation=f"Shorten your title to under {TITLE_MAX_LENGTH} characters",
            impact=Impact.MEDIUM,
        )
    return None


def description_rule(signals: SignalSet) -> Optional[Issue]:
    if signals.description_text is None:
        return Issue(
            code="description-missing",
            severity=Severity.CRITICAL,
            category="Meta Description",
            title="Missing Meta Description",
            description="Your page has no meta description tag",
            remediation='Add a <meta name="description" content="..."> tag',
            impact=Impact.HIGH,
        )
    if signals.description_length < DESCRIPTION_MIN_LENGTH:
        return Issue(
            code="description-too-short",
            severity=Severity.WARNING,
            category="Meta Description",
            title="Meta Description Too Short",
            description=f"Your meta description is only {signals.description_length} characters",
            remediation=(
                f"Expand to {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} characters "
                "for better search snippets"
            ),
            impact=Impact.MEDIUM,
        )
    if signals.description_length > DESCRIPTION_MAX_LENGTH:
        return Issue(
            code="description-too-long",
            severity=Severity.WARNING,
            category="Meta Description",
            title="Meta Description Too Long",
            description=f"Your meta description is {signals.description_length} characters",
            remediation=f"Shorten to under {DESCRIPTION_MAX_LENGTH} characters to avoid truncation",
            impact=Impact.MEDIUM,
        )
    return None


def h1_rule(signals: SignalSet) -> Optional[Issue]:
    if signals.h1_count == 0:
        return Issue(
            code="h1-missing",
            severity=Severity.CRITICAL,
            category="Headers",
            title="Missing H1 Tag",
            description="Your page has no H1 heading tag",
            remediation="Add an H1 tag with your main page topic",
            impact=Impact.HIGH,
        )
    if signals.h1_count > 1:
        return Issue(
            code="h1-multiple",
            severity=Severity.WARNING,
            category="Headers",
            title="Multiple H1 Tags",
            description=f"Found {signals.h1_count} H1 tags, should have only one",
            remediation="Use only one H1 tag per page, use H2-H6 for subheadings",
            impact=Impact.MEDIUM,
        )
    return None


def image_alt_rule(signals: SignalSet) -> Optional[Issue]:
    missing = signals.images_without_alt
    if missing > 0:
        return Issue(
            code="images-missing-alt",
            severity=Severity.WARNING,
            category="Images",
            title="Images Missing Alt Text",
            description=f"{missing} of {signals.image_count} images lack alt text",
            remediation="Add descriptive alt attributes to all images for accessibility",
            impact=Impact.MEDIUM,
        )
    return None


def content_rule(signals: SignalSet) -> Optional[Issue]:
    if signals.body_word_count < MIN_WORD_COUNT:
        return Issue(
            code="insufficient-content",
            severity=Severity.CRITICAL,
            category="Content",
            title="Insufficient Content",
            description=(
                f"Only {signals.body_word_count} words found, "
                f"search engines prefer {MIN_WORD_COUNT}+"
            ),
            remediation="Add more valuable, relevant content to your page",
            impact=Impact.HIGH,
        )
    return None


def load_time_rule(signals: SignalSet) -> Optional[Issue]:
    if signals.load_time_ms > MAX_LOAD_TIME_MS:
        return Issue(
            code="slow-page-load",
            severity=Severity.WARNING,
            category="Performance",
            title="Slow Page Load",
            description=(
                f"Page loaded in {signals.load_time_ms / 1000:.1f}s, "
                f"target is under {MAX_LOAD_TIME_MS // 1000}s"
            ),
            remediation="Optimize images, minimize CSS/JS, use a CDN",
            impact=Impact.HIGH,
        )
    return None


RULES: Tuple[Rule, ...] = (
    title_rule,
    description_rule,
    h1_rule,
    image_alt_rule,
    content_rule,
    load_time_rule,
)


def evaluate(signals: SignalSet, rules: Sequence[Rule] = RULES) -> Tuple[Issue, ...]:
    """Run every rule in order and keep the issues that fired."""
    issues = (rule(signals) for rule in rules)
    return tuple(issue for issue in issues if issue is not None)
