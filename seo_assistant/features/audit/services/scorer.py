from typing import Iterable

from seo_assistant.features.audit.schemas.audit import Issue, Severity

MAX_SCORE = 100
CRITICAL_PENALTY = 25
WARNING_PENALTY = 10


def calculate_score(issues: Iterable[Issue]) -> int:
    """
    Health score from issue severities: 100 minus 25 per critical and 10 per
    warning, floored at 0. Info issues do not count.
    """
    critical = warning = 0
    for issue in issues:
        if issue.severity == Severity.CRITICAL:
            critical += 1
        elif issue.severity == Severity.WARNING:
            warning += 1

    return max(0, MAX_SCORE - CRITICAL_PENALTY * critical - WARNING_PENALTY * warning)
