"""Settings linter — project-wide build settings checks delegated from the target linter."""

import re
from typing import Optional

from targetlint.models import Target
from targetlint.services.file_system import FileSystem, LocalFileSystem
from targetlint.validators.models import LintingIssue, Severity

SWIFT_VERSION_SETTING = "SWIFT_VERSION"
SWIFT_VERSION_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+){0,2}")


class SettingsLinter:
    """Lints the build settings of a target: xcconfig files and well-known values."""

    def __init__(self, file_system: Optional[FileSystem] = None):
        self.file_system = file_system or LocalFileSystem()

    async def lint(self, target: Target) -> list[LintingIssue]:
        issues = []
        issues.extend(await self._check_config_files_exist(target))
        issues.extend(self._check_swift_version(target))
        return issues

    async def _check_config_files_exist(self, target: Target) -> list[LintingIssue]:
        if target.settings is None:
            return []

        issues = []
        for configuration in target.settings.configurations.values():
            if configuration is None or configuration.xcconfig is None:
                continue
            if not await self.file_system.exists(configuration.xcconfig):
                issues.append(LintingIssue(
                    reason=f"Configuration file not found at path {configuration.xcconfig}",
                    severity=Severity.ERROR,
                ))
        return issues

    def _check_swift_version(self, target: Target) -> list[LintingIssue]:
        if target.settings is None:
            return []

        value = target.settings.base.get(SWIFT_VERSION_SETTING)
        # Arrays and build variables are resolved by the build tool
        if not isinstance(value, str) or "$" in value:
            return []
        if SWIFT_VERSION_PATTERN.fullmatch(value):
            return []
        return [LintingIssue(
            reason=f"The target '{target.name}' has an invalid SWIFT_VERSION build setting '{value}'",
            severity=Severity.WARNING,
        )]
