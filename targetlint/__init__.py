"""targetlint — validates build targets before a project is generated."""

from targetlint.logging_config import configure_logging
from targetlint.validators import LintingIssue, Severity, TargetLinter, target_linter

__all__ = [
    "LintingIssue",
    "Severity",
    "TargetLinter",
    "configure_logging",
    "target_linter",
]
