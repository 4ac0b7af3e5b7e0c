"""Base rule — abstract classes implementing the Strategy Pattern.

Each rule is a standalone, independently testable unit that reads the
target (and project options) and returns the issues it finds.
"""

from abc import ABC, abstractmethod

from targetlint.models import ProjectOptions, Target
from targetlint.validators.models import LintingIssue, Severity


class BaseRule(ABC):
    """Abstract base for all target rules.

    Contract:
        - lint() never mutates the target or the options
        - lint() returns a list of LintingIssue (empty = no issues)
        - Collaborator failures (filesystem, signature probe) propagate;
          they are never turned into issues
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        """Run the rule against a target.

        Args:
            target: Fully constructed target model
            options: Options of the project that owns the target

        Returns:
            List of LintingIssue findings (empty if no issues)
        """
        ...

    def _warning(self, reason: str) -> LintingIssue:
        return LintingIssue(reason=reason, severity=Severity.WARNING)

    def _error(self, reason: str) -> LintingIssue:
        return LintingIssue(reason=reason, severity=Severity.ERROR)


class SyncRule(BaseRule):
    """A rule that only reads the in-memory model and needs no collaborator."""

    @abstractmethod
    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        ...

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        return self.validate(target, options)
