"""Tests for duplicate dependency detection and XCFramework signature verification."""

from __future__ import annotations

from pathlib import Path

import pytest

from targetlint.errors import SignatureExtractionError
from targetlint.models import (
    AppleCertificateSignature,
    FrameworkDependency,
    PackageDependency,
    PackageType,
    ProjectOptions,
    SdkDependency,
    SelfSignedSignature,
    TargetReference,
    UnsignedSignature,
    XCFrameworkDependency,
)
from targetlint.validators import Severity
from targetlint.validators.dependency_rules import (
    DuplicateDependencyRule,
    XCFrameworkSignatureRule,
    signature_mismatch_reason,
)
from tests._fixtures.doubles import StubSignatureProvider
from tests._fixtures.targets import make_target

APPLE = AppleCertificateSignature(team_identifier="U6LC622NKF", team_name="Acme Inc")
SELF_SIGNED = SelfSignedSignature(fingerprint="2B4E9C7D")


def test_duplicate_dependencies_reported_once_per_value() -> None:
    core = TargetReference(name="Core")
    ui = TargetReference(name="UI")
    target = make_target(dependencies=[core, ui, TargetReference(name="Core"), core])

    issues = DuplicateDependencyRule().validate(target, ProjectOptions())

    assert [issue.reason for issue in issues] == [
        "Target 'App' has duplicate target dependency specified: 'Core'",
    ]
    assert issues[0].severity == Severity.WARNING


def test_duplicate_dependencies_compare_shape_and_payload() -> None:
    target = make_target(dependencies=[
        PackageDependency(product="Alamofire", type=PackageType.RUNTIME),
        PackageDependency(product="Alamofire", type=PackageType.MACRO),
        SdkDependency(name="libc++.tbd"),
        FrameworkDependency(path="/Frameworks/Lottie.framework"),
        FrameworkDependency(path="/Frameworks/Lottie.framework"),
        PackageDependency(product="Alamofire", type=PackageType.MACRO),
    ])

    issues = DuplicateDependencyRule().validate(target, ProjectOptions())

    assert [issue.reason for issue in issues] == [
        "Target 'App' has duplicate macro package dependency specified: 'Alamofire'",
        "Target 'App' has duplicate framework dependency specified: 'Lottie.framework'",
    ]


async def test_signature_rule_ignores_dependencies_without_expected_signature() -> None:
    provider = StubSignatureProvider({"/Frameworks/Lib.xcframework": APPLE})
    target = make_target(dependencies=[XCFrameworkDependency(path="/Frameworks/Lib.xcframework")])

    issues = await XCFrameworkSignatureRule(provider).lint(target, ProjectOptions())

    assert issues == []
    assert provider.calls == []


async def test_signature_rule_accepts_matching_signature() -> None:
    provider = StubSignatureProvider({"/Frameworks/Lib.xcframework": APPLE})
    target = make_target(dependencies=[
        XCFrameworkDependency(
            path="/Frameworks/Lib.xcframework",
            expected_signature=AppleCertificateSignature(team_identifier="U6LC622NKF", team_name="Acme Inc"),
        ),
    ])

    issues = await XCFrameworkSignatureRule(provider).lint(target, ProjectOptions())

    assert issues == []
    assert provider.calls == [Path("/Frameworks/Lib.xcframework")]


@pytest.mark.parametrize(
    ("expected", "actual"),
    [
        (APPLE, SELF_SIGNED),
        (SELF_SIGNED, APPLE),
        (UnsignedSignature(), APPLE),
        (APPLE, UnsignedSignature()),
        (APPLE, AppleCertificateSignature(team_identifier="U6LC622NKF", team_name="Other")),
    ],
)
async def test_signature_rule_mismatch_is_error(expected, actual) -> None:
    provider = StubSignatureProvider({"/Frameworks/Lib.xcframework": actual})
    target = make_target(dependencies=[
        XCFrameworkDependency(path="/Frameworks/Lib.xcframework", expected_signature=expected),
    ])

    issues = await XCFrameworkSignatureRule(provider).lint(target, ProjectOptions())

    assert len(issues) == 1
    assert issues[0].severity == Severity.ERROR


async def test_signature_probe_failure_propagates() -> None:
    error = SignatureExtractionError("/Frameworks/Lib.xcframework", "corrupt")
    provider = StubSignatureProvider(error=error)
    target = make_target(dependencies=[
        XCFrameworkDependency(path="/Frameworks/Lib.xcframework", expected_signature=APPLE),
    ])

    with pytest.raises(SignatureExtractionError):
        await XCFrameworkSignatureRule(provider).lint(target, ProjectOptions())


def test_mismatch_reason_for_apple_certificate() -> None:
    reason = signature_mismatch_reason(
        target_name="App",
        path="/Frameworks/Lib.xcframework",
        expected_signature=APPLE,
        actual_signature=UnsignedSignature(),
    )

    assert reason == (
        "The target 'App' depends on the XCFramework at /Frameworks/Lib.xcframework, \n"
        "expecting signature AppleDeveloperProgram:U6LC622NKF:Acme Inc, but found none.\n"
        "\n"
        "Ensure that the expected signature format is correct and that the XCFramework is authentic.\n"
        "Specifically, XCFrameworks signed with Apple Developer certificates must have the format: "
        "`AppleDeveloperProgram:<team identifier>:<team name>`."
    )


def test_mismatch_reason_hints_per_expected_shape() -> None:
    unsigned = signature_mismatch_reason("App", "/Lib.xcframework", UnsignedSignature(), SELF_SIGNED)
    self_signed = signature_mismatch_reason("App", "/Lib.xcframework", SELF_SIGNED, APPLE)

    assert "expecting signature none, but found SelfSigned:2B4E9C7D." in unsigned
    assert unsigned.endswith("Specifically, unsigned XCFrameworks should not have any signature.")
    assert self_signed.endswith(
        "Specifically, self signed XCFrameworks must have the format: `SelfSigned:<sha256 fingerprint>`."
    )
