"""Script linter — checks each build phase script of a target."""

import shutil
from typing import Optional

from targetlint.models import TargetScript
from targetlint.services.file_system import FileSystem, LocalFileSystem
from targetlint.validators.models import LintingIssue, Severity


class TargetScriptLinter:
    """Lints a single target script: its body must be runnable."""

    def __init__(self, file_system: Optional[FileSystem] = None):
        self.file_system = file_system or LocalFileSystem()

    async def lint(self, script: TargetScript) -> list[LintingIssue]:
        if script.embedded_script is not None:
            return self._check_embedded_script(script)
        if script.tool is not None:
            return self._check_tool(script)
        if script.path is not None:
            return await self._check_path(script)
        return [LintingIssue(
            reason=f"The script '{script.name}' doesn't define a tool, a path or an embedded script",
            severity=Severity.ERROR,
        )]

    def _check_embedded_script(self, script: TargetScript) -> list[LintingIssue]:
        if script.embedded_script.strip():
            return []
        return [LintingIssue(
            reason=f"The embedded script '{script.name}' has no content",
            severity=Severity.ERROR,
        )]

    def _check_tool(self, script: TargetScript) -> list[LintingIssue]:
        if shutil.which(script.tool) is not None:
            return []
        return [LintingIssue(
            reason=f"The script tool {script.tool} was not found in the environment",
            severity=Severity.ERROR,
        )]

    async def _check_path(self, script: TargetScript) -> list[LintingIssue]:
        if await self.file_system.exists(script.path):
            return []
        return [LintingIssue(
            reason=f"The script path {script.path} doesn't exist",
            severity=Severity.ERROR,
        )]
