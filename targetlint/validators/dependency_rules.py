"""Dependency rules — duplicate declarations and XCFramework signature verification."""

from targetlint.models import (
    AppleCertificateSignature,
    ProjectOptions,
    SelfSignedSignature,
    Target,
    UnsignedSignature,
    XCFrameworkDependency,
    XCFrameworkSignature,
    display_name,
    signature_string,
    type_name,
)
from targetlint.services.signature_provider import SignatureProvider
from targetlint.validators.base import BaseRule, SyncRule
from targetlint.validators.models import LintingIssue

MISSING_SIGNATURE = "none"


class DuplicateDependencyRule(SyncRule):
    """Warns once for every dependency declared more than once, in first-seen order."""

    @property
    def name(self) -> str:
        return "DuplicateDependencyRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        occurrences = {}
        for dependency in target.dependencies:
            occurrences[dependency] = occurrences.get(dependency, 0) + 1

        return [
            self._warning(
                f"Target '{target.name}' has duplicate {type_name(dependency)} dependency "
                f"specified: '{display_name(dependency)}'"
            )
            for dependency, count in occurrences.items()
            if count > 1
        ]


class XCFrameworkSignatureRule(BaseRule):
    """Verifies pinned XCFramework signatures against the artifacts on disk.

    A mismatch is always an error: a tampered or stale binary is a security
    concern. Dependencies without an expected signature are not checked.
    """

    def __init__(self, signature_provider: SignatureProvider):
        self.signature_provider = signature_provider

    @property
    def name(self) -> str:
        return "XCFrameworkSignatureRule"

    async def lint(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        issues = []

        for dependency in target.dependencies:
            if not isinstance(dependency, XCFrameworkDependency) or dependency.expected_signature is None:
                continue

            actual_signature = await self.signature_provider.signature(dependency.path)
            if actual_signature != dependency.expected_signature:
                issues.append(self._error(signature_mismatch_reason(
                    target_name=target.name,
                    path=str(dependency.path),
                    expected_signature=dependency.expected_signature,
                    actual_signature=actual_signature,
                )))

        return issues


def signature_mismatch_reason(
    target_name: str,
    path: str,
    expected_signature: XCFrameworkSignature,
    actual_signature: XCFrameworkSignature,
) -> str:
    """Explain a signature mismatch, with a hint matching the expected signature's shape."""
    expected = signature_string(expected_signature) or MISSING_SIGNATURE
    actual = signature_string(actual_signature) or MISSING_SIGNATURE

    base_reason = (
        f"The target '{target_name}' depends on the XCFramework at {path}, \n"
        f"expecting signature {expected}, but found {actual}.\n"
        "\n"
        "Ensure that the expected signature format is correct and that the XCFramework is authentic."
    )

    if isinstance(expected_signature, UnsignedSignature):
        specific_reason = "unsigned XCFrameworks should not have any signature."
    elif isinstance(expected_signature, AppleCertificateSignature):
        specific_reason = (
            "XCFrameworks signed with Apple Developer certificates must have the format: "
            "`AppleDeveloperProgram:<team identifier>:<team name>`."
        )
    elif isinstance(expected_signature, SelfSignedSignature):
        specific_reason = "self signed XCFrameworks must have the format: `SelfSigned:<sha256 fingerprint>`."
    else:
        raise TypeError(f"Unknown signature type: {type(expected_signature).__name__}")

    return base_reason + "\nSpecifically, " + specific_reason
