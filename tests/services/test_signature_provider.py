"""Tests for the codesign-backed XCFramework signature provider."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from targetlint.errors import SignatureExtractionError
from targetlint.models import AppleCertificateSignature, SelfSignedSignature, UnsignedSignature
from targetlint.services.signature_provider import XCFrameworkSignatureProvider

APPLE_DETAILS = """Executable=/Frameworks/Lib.xcframework
Identifier=Lib
Format=bundle
Authority=Apple Distribution: Acme Inc (U6LC622NKF)
Authority=Apple Worldwide Developer Relations Certification Authority
Authority=Apple Root CA
TeamIdentifier=U6LC622NKF
"""

SELF_SIGNED_DETAILS = """Executable=/Frameworks/Lib.xcframework
Identifier=Lib
Authority=Acme Internal Signing
TeamIdentifier=not set
"""


def _signed_xcframework(root: Path) -> Path:
    path = root / "Lib.xcframework"
    (path / "_CodeSignature").mkdir(parents=True)
    return path


async def test_xcframework_without_code_signature_is_unsigned(tmp_path: Path) -> None:
    path = tmp_path / "Lib.xcframework"
    path.mkdir()

    signature = await XCFrameworkSignatureProvider(codesign_path="/nonexistent/codesign").signature(path)

    assert signature == UnsignedSignature()


async def test_apple_certificate_signature(tmp_path: Path, monkeypatch) -> None:
    path = _signed_xcframework(tmp_path)
    calls = []

    async def fake_run(self, *arguments):
        calls.append(arguments)
        return APPLE_DETAILS

    monkeypatch.setattr(XCFrameworkSignatureProvider, "_run", fake_run)

    signature = await XCFrameworkSignatureProvider().signature(path)

    assert signature == AppleCertificateSignature(team_identifier="U6LC622NKF", team_name="Acme Inc")
    assert calls == [("-dvv", str(path))]


async def test_self_signed_signature_uses_leaf_certificate_fingerprint(tmp_path: Path, monkeypatch) -> None:
    path = _signed_xcframework(tmp_path)
    certificate = b"leaf certificate DER bytes"

    async def fake_run(self, *arguments):
        if arguments[0] == "-dvv":
            return SELF_SIGNED_DETAILS
        prefix = arguments[1].split("=", 1)[1]
        Path(f"{prefix}0").write_bytes(certificate)
        Path(f"{prefix}1").write_bytes(b"root certificate")
        return ""

    monkeypatch.setattr(XCFrameworkSignatureProvider, "_run", fake_run)

    signature = await XCFrameworkSignatureProvider().signature(path)

    assert signature == SelfSignedSignature(fingerprint=hashlib.sha256(certificate).hexdigest().upper())


async def test_transient_codesign_failures_are_retried_then_raised(tmp_path: Path, monkeypatch) -> None:
    path = _signed_xcframework(tmp_path)
    attempts = []

    async def failing_run(self, *arguments):
        attempts.append(arguments)
        raise SignatureExtractionError(path, "codesign was terminated", transient=True)

    monkeypatch.setattr(XCFrameworkSignatureProvider, "_run", failing_run)
    provider = XCFrameworkSignatureProvider(retry_attempts=3, retry_max_wait=0.01)

    with pytest.raises(SignatureExtractionError, match="terminated"):
        await provider.signature(path)

    assert len(attempts) == 3


async def test_deterministic_codesign_failure_is_not_retried(tmp_path: Path, monkeypatch) -> None:
    path = _signed_xcframework(tmp_path)
    attempts = []

    async def failing_run(self, *arguments):
        attempts.append(arguments)
        raise SignatureExtractionError(path, "code object is not signed at all")

    monkeypatch.setattr(XCFrameworkSignatureProvider, "_run", failing_run)
    provider = XCFrameworkSignatureProvider(retry_attempts=3, retry_max_wait=0.01)

    with pytest.raises(SignatureExtractionError, match="not signed at all"):
        await provider.signature(path)

    assert len(attempts) == 1


async def test_missing_codesign_binary_raises_without_retrying(tmp_path: Path, monkeypatch) -> None:
    path = _signed_xcframework(tmp_path)
    attempts = []
    run = XCFrameworkSignatureProvider._run

    async def counting_run(self, *arguments):
        attempts.append(arguments)
        return await run(self, *arguments)

    monkeypatch.setattr(XCFrameworkSignatureProvider, "_run", counting_run)
    provider = XCFrameworkSignatureProvider(
        codesign_path=str(tmp_path / "missing-codesign"),
        retry_attempts=3,
        retry_max_wait=10.0,
    )

    with pytest.raises(SignatureExtractionError, match="is not available") as excinfo:
        await provider.signature(path)

    assert excinfo.value.transient is False
    assert len(attempts) == 1


def _fake_codesign(root: Path, body: str) -> Path:
    script = root / "codesign"
    script.write_text(f"#!/bin/sh\n{body}\n")
    script.chmod(0o755)
    return script


@pytest.mark.parametrize(
    ("body", "transient", "expected_attempts"),
    [
        ("echo 'code object is not signed at all' >&2; exit 1", False, 1),
        ("kill -9 $$", True, 2),
    ],
)
async def test_only_signal_terminated_codesign_is_retried(
    tmp_path: Path, monkeypatch, body: str, transient: bool, expected_attempts: int
) -> None:
    path = _signed_xcframework(tmp_path)
    attempts = []
    run = XCFrameworkSignatureProvider._run

    async def counting_run(self, *arguments):
        attempts.append(arguments)
        return await run(self, *arguments)

    monkeypatch.setattr(XCFrameworkSignatureProvider, "_run", counting_run)
    provider = XCFrameworkSignatureProvider(
        codesign_path=str(_fake_codesign(tmp_path, body)),
        retry_attempts=2,
        retry_max_wait=0.01,
    )

    with pytest.raises(SignatureExtractionError) as excinfo:
        await provider.signature(path)

    assert excinfo.value.transient is transient
    assert len(attempts) == expected_attempts


def test_explicit_zero_values_are_not_replaced_by_settings() -> None:
    provider = XCFrameworkSignatureProvider(codesign_path="codesign", retry_attempts=0, retry_max_wait=0.0)

    assert provider.retry_attempts == 0
    assert provider.retry_max_wait == 0.0


def test_team_name_parsing() -> None:
    assert XCFrameworkSignatureProvider._team_name("Apple Development: Jane Doe (ABCDE12345)") == "Jane Doe"
    assert XCFrameworkSignatureProvider._team_name("Developer ID Application: Acme, Inc. (U6LC622NKF)") == (
        "Acme, Inc."
    )
