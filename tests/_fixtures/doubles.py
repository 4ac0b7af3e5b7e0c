"""Test doubles for the collaborators of the target linter."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, Mapping

from targetlint.models import Target, TargetScript, UnsignedSignature, XCFrameworkSignature
from targetlint.services.file_system import FileSystem
from targetlint.services.signature_provider import SignatureProvider
from targetlint.validators.models import LintingIssue


class StubFileSystem(FileSystem):
    """Answers from a fixed set of existing paths and records every probe.

    Paths in ``delays`` answer only after sleeping that many seconds; probes that
    ran to completion are recorded in ``completed``.
    """

    def __init__(
        self,
        existing: Iterable[Path | str] = (),
        failing: Iterable[Path | str] = (),
        delays: Mapping[Path | str, float] | None = None,
    ) -> None:
        self.existing = {Path(p) for p in existing}
        self.failing = {Path(p) for p in failing}
        self.delays = {Path(p): d for p, d in (delays or {}).items()}
        self.probed: list[Path] = []
        self.completed: list[Path] = []

    async def exists(self, path: Path) -> bool:
        path = Path(path)
        self.probed.append(path)
        if path in self.failing:
            raise PermissionError(f"Permission denied: '{path}'")
        if path in self.delays:
            await asyncio.sleep(self.delays[path])
        self.completed.append(path)
        return path in self.existing


class StubSignatureProvider(SignatureProvider):
    """Returns canned signatures per path; unknown paths are unsigned."""

    def __init__(
        self,
        signatures: Mapping[Path | str, XCFrameworkSignature] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.signatures = {Path(p): s for p, s in (signatures or {}).items()}
        self.error = error
        self.calls: list[Path] = []

    async def signature(self, path: Path) -> XCFrameworkSignature:
        self.calls.append(Path(path))
        if self.error is not None:
            raise self.error
        return self.signatures.get(Path(path), UnsignedSignature())


class RecordingSettingsLinter:
    """Returns fixed issues and records the targets it was asked to lint."""

    def __init__(self, issues: list[LintingIssue] | None = None) -> None:
        self.issues = issues or []
        self.calls: list[Target] = []

    async def lint(self, target: Target) -> list[LintingIssue]:
        self.calls.append(target)
        return list(self.issues)


class RecordingScriptLinter:
    """Returns one issue per script, named after it, and records call order."""

    def __init__(self, issues_per_script: Mapping[str, list[LintingIssue]] | None = None) -> None:
        self.issues_per_script = dict(issues_per_script or {})
        self.calls: list[str] = []

    async def lint(self, script: TargetScript) -> list[LintingIssue]:
        self.calls.append(script.name)
        return list(self.issues_per_script.get(script.name, []))
