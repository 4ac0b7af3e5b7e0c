from __future__ import annotations

import pytest

from targetlint.models import ProjectOptions
from tests._fixtures.doubles import (
    RecordingScriptLinter,
    RecordingSettingsLinter,
    StubFileSystem,
    StubSignatureProvider,
)


@pytest.fixture
def options() -> ProjectOptions:
    return ProjectOptions()


@pytest.fixture
def file_system() -> StubFileSystem:
    return StubFileSystem()


@pytest.fixture
def signature_provider() -> StubSignatureProvider:
    return StubSignatureProvider()


@pytest.fixture
def settings_linter() -> RecordingSettingsLinter:
    return RecordingSettingsLinter()


@pytest.fixture
def script_linter() -> RecordingScriptLinter:
    return RecordingScriptLinter()
