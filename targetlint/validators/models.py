"""Linting models — severity levels and the issue record every rule produces.

Issues are findings, not failures: they are always returned, never raised.
"""

from enum import Enum

from pydantic import BaseModel


class Severity(str, Enum):
    """Linting issue severity levels."""

    WARNING = "warning"  # Advisory, generation proceeds
    ERROR = "error"      # Caller decides, usually blocks generation


class LintingIssue(BaseModel):
    """A single linting finding."""

    reason: str
    severity: Severity

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.reason}"


def summarize(issues: list[LintingIssue]) -> dict[str, int]:
    """Count issues by severity."""
    summary = {severity.value: 0 for severity in Severity}
    for issue in issues:
        summary[issue.severity.value] += 1
    return summary
