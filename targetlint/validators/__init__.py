"""Target linter — rule-based validation of a target before project generation.

Usage:
    from targetlint.validators import target_linter

    issues = await target_linter.lint(target, options)
"""

from targetlint.validators.models import LintingIssue, Severity
from targetlint.validators.base import BaseRule, SyncRule
from targetlint.validators.engine import TargetLinter, target_linter

__all__ = [
    "BaseRule",
    "LintingIssue",
    "Severity",
    "SyncRule",
    "TargetLinter",
    "target_linter",
]
