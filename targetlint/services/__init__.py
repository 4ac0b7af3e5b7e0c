"""Collaborators the target linter delegates to: filesystem, signatures, settings and scripts."""

from targetlint.services.file_system import FileSystem, LocalFileSystem
from targetlint.services.script_linter import TargetScriptLinter
from targetlint.services.settings_linter import SettingsLinter
from targetlint.services.signature_provider import SignatureProvider, XCFrameworkSignatureProvider

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "SettingsLinter",
    "SignatureProvider",
    "TargetScriptLinter",
    "XCFrameworkSignatureProvider",
]
