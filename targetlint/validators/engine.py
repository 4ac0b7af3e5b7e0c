"""Target Linter — orchestrates all rules and returns the issues of a target.

This is the main entry point for target linting. It runs every registered
rule against the target in a fixed order and concatenates their issues.

Usage:
    linter = TargetLinter()
    issues = await linter.lint(target, options)
    if any(issue.severity == Severity.ERROR for issue in issues):
        # Stop before generating the project
"""

import time
from typing import Optional

import structlog

from targetlint.models import ProjectOptions, Target
from targetlint.services.file_system import FileSystem, LocalFileSystem
from targetlint.services.script_linter import TargetScriptLinter
from targetlint.services.settings_linter import SettingsLinter
from targetlint.services.signature_provider import SignatureProvider, XCFrameworkSignatureProvider
from targetlint.validators.base import BaseRule
from targetlint.validators.models import LintingIssue, summarize

# Import all rules
from targetlint.validators.delegated import ScriptsLinterRule, SettingsLinterRule
from targetlint.validators.dependency_rules import DuplicateDependencyRule, XCFrameworkSignatureRule
from targetlint.validators.file_rules import CopiedFilesRule, CoreDataModelsRule, CoreDataModelVersionsRule
from targetlint.validators.product_rules import (
    BundleIdentifierRule,
    MergeableLibraryRule,
    PlatformProductRule,
    ProductNameBuildSettingsRule,
    ProductNameRule,
)
from targetlint.validators.target_rules import (
    DeploymentTargetRule,
    LibraryResourcesRule,
    OnDemandResourcesTagsRule,
    SourceCodeGenRule,
)

logger = structlog.get_logger()


class TargetLinter:
    """Runs every rule against a target and produces one ordered issue list.

    Design principles:
        - Deterministic: the same target and disk state give the same issues
        - Rules are independent; the order only fixes the output order
        - Collaborator failures abort the whole call, no partial results
        - Observable: logs every run with per-rule timing
    """

    def __init__(
        self,
        rules: Optional[list[BaseRule]] = None,
        file_system: Optional[FileSystem] = None,
        signature_provider: Optional[SignatureProvider] = None,
        settings_linter: Optional[SettingsLinter] = None,
        script_linter: Optional[TargetScriptLinter] = None,
    ):
        """Initialize with default rules or a custom list.

        Args:
            rules: Optional list of rules. If None, builds the default chain
                from the collaborators below.
            file_system: Existence probe, defaults to the local disk
            signature_provider: XCFramework signature reader, defaults to codesign
            settings_linter: Delegated project-wide settings linter
            script_linter: Delegated per-script linter
        """
        self.file_system = file_system or LocalFileSystem()
        self.signature_provider = signature_provider or XCFrameworkSignatureProvider()
        self.settings_linter = settings_linter or SettingsLinter(self.file_system)
        self.script_linter = script_linter or TargetScriptLinter(self.file_system)
        self.rules = rules if rules is not None else self._default_rules()

    def _default_rules(self) -> list[BaseRule]:
        """Create the default rule chain in execution order."""
        return [
            ProductNameRule(),
            ProductNameBuildSettingsRule(),
            PlatformProductRule(),
            BundleIdentifierRule(),
            CopiedFilesRule(self.file_system),
            LibraryResourcesRule(),
            DeploymentTargetRule(),
            SettingsLinterRule(self.settings_linter),
            DuplicateDependencyRule(),
            XCFrameworkSignatureRule(self.signature_provider),
            SourceCodeGenRule(),
            CoreDataModelsRule(self.file_system),
            CoreDataModelVersionsRule(self.file_system),
            MergeableLibraryRule(),
            OnDemandResourcesTagsRule(),
            ScriptsLinterRule(self.script_linter),
        ]

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        """Run all rules against the target.

        Args:
            target: Fully constructed target, never mutated
            options: Options of the project owning the target

        Returns:
            Issues of every rule, concatenated in rule order

        Raises:
            Whatever a collaborator raises (OSError, SignatureExtractionError, ...)
        """
        start_time = time.perf_counter()

        all_issues: list[LintingIssue] = []
        rule_timings: dict[str, float] = {}

        for rule in self.rules:
            r_start = time.perf_counter()
            try:
                issues = await rule.lint(target, options)
            except Exception as e:
                logger.error(
                    "target_lint_failed",
                    target=target.name,
                    rule=rule.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            finally:
                r_duration = (time.perf_counter() - r_start) * 1000
                rule_timings[rule.name] = round(r_duration, 2)
            all_issues.extend(issues)

        total_duration = (time.perf_counter() - start_time) * 1000

        logger.info(
            "target_lint_complete",
            target=target.name,
            summary=summarize(all_issues),
            total_issues=len(all_issues),
            duration_ms=round(total_duration, 2),
            rule_timings=rule_timings,
        )

        return all_issues

    def add_rule(self, rule: BaseRule) -> None:
        """Append a custom rule to the chain."""
        self.rules.append(rule)

    def remove_rule(self, rule_name: str) -> None:
        """Remove a rule by name."""
        self.rules = [r for r in self.rules if r.name != rule_name]


# Module-level singleton
target_linter = TargetLinter()
