"""Adapters that run the delegated settings and script linters as rules."""

from targetlint.models import ProjectOptions, Target
from targetlint.services.script_linter import TargetScriptLinter
from targetlint.services.settings_linter import SettingsLinter
from targetlint.validators.base import BaseRule
from targetlint.validators.models import LintingIssue


class SettingsLinterRule(BaseRule):
    """Runs the settings linter once over the whole target."""

    def __init__(self, settings_linter: SettingsLinter):
        self.settings_linter = settings_linter

    @property
    def name(self) -> str:
        return "SettingsLinterRule"

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        return list(await self.settings_linter.lint(target))


class ScriptsLinterRule(BaseRule):
    """Runs the script linter once per script, in declaration order."""

    def __init__(self, script_linter: TargetScriptLinter):
        self.script_linter = script_linter

    @property
    def name(self) -> str:
        return "ScriptsLinterRule"

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        issues = []
        for script in target.scripts:
            issues.extend(await self.script_linter.lint(script))
        return issues
