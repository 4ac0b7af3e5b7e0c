"""File rules — checks that need the filesystem existence probe.

Covers files copied as plain resources, the Info.plist and entitlements
references, and Core Data models with their current version.
"""

import asyncio
from pathlib import Path
from typing import Optional

from targetlint.models import CoreDataModel, EntitlementsFile, InfoPlistFile, ProjectOptions, Target
from targetlint.models.target import literal_path
from targetlint.services.file_system import FileSystem
from targetlint.validators.base import BaseRule
from targetlint.validators.models import LintingIssue

ENTITLEMENTS_MARKER = ".entitlements"


async def _gather_or_cancel(probes) -> list:
    """Run probes concurrently. The first failure cancels the probes still pending."""
    tasks = [asyncio.ensure_future(probe) for probe in probes]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Wait for the cancellations so no probe outlives the rule
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class CopiedFilesRule(BaseRule):
    """Flags Info.plist and entitlements files bundled as resources, and missing references."""

    def __init__(self, file_system: FileSystem):
        self.file_system = file_system

    @property
    def name(self) -> str:
        return "CopiedFilesRule"

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        issues = []

        files = [resource.path for resource in target.resources]

        info_plist_path = literal_path(target.info_plist)
        if info_plist_path is not None and info_plist_path in files:
            issues.append(self._warning(
                f"Info.plist at path {info_plist_path} being copied into the target {target.name} product."
            ))

        for path in files:
            if ENTITLEMENTS_MARKER in str(path):
                issues.append(self._warning(
                    f"Entitlements file at path {path} being copied into the target {target.name} product."
                ))

        issues.extend(await self._check_info_plist_exists(target))
        issues.extend(await self._check_entitlements_exist(target))
        return issues

    async def _check_info_plist_exists(self, target: Target) -> list[LintingIssue]:
        """Only a plain file reference has a path that must already exist."""
        if not isinstance(target.info_plist, InfoPlistFile):
            return []
        path = target.info_plist.path
        if await self.file_system.exists(path):
            return []
        return [self._error(f"Info.plist file not found at path {path}")]

    async def _check_entitlements_exist(self, target: Target) -> list[LintingIssue]:
        if not isinstance(target.entitlements, EntitlementsFile):
            return []
        path = target.entitlements.path
        if await self.file_system.exists(path):
            return []
        return [self._error(f"Entitlements file not found at path {path}")]


class CoreDataModelsRule(BaseRule):
    """Every declared Core Data model must exist on disk."""

    def __init__(self, file_system: FileSystem):
        self.file_system = file_system

    @property
    def name(self) -> str:
        return "CoreDataModelsRule"

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        results = await _gather_or_cancel(
            self._check_model(model.path) for model in target.core_data_models
        )
        return [issue for issue in results if issue is not None]

    async def _check_model(self, path: Path) -> Optional[LintingIssue]:
        if await self.file_system.exists(path):
            return None
        return self._error(f"The Core Data model at path {path} does not exist")


class CoreDataModelVersionsRule(BaseRule):
    """The current version of every existing Core Data model must exist inside the model."""

    def __init__(self, file_system: FileSystem):
        self.file_system = file_system

    @property
    def name(self) -> str:
        return "CoreDataModelVersionsRule"

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        results = await _gather_or_cancel(
            self._check_version(model) for model in target.core_data_models
        )
        return [issue for issue in results if issue is not None]

    async def _check_version(self, model: CoreDataModel) -> Optional[LintingIssue]:
        version_path = model.path / f"{model.current_version}.xcdatamodel"
        if await self.file_system.exists(version_path):
            return None
        # A missing model is already reported by CoreDataModelsRule
        if not await self.file_system.exists(model.path):
            return None
        return self._error(
            f"The default version of the Core Data model at path {model.path}, {model.current_version}, "
            f"does not exist. There should be a file at {version_path}"
        )
