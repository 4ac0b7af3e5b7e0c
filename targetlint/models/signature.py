"""XCFramework signature values — the trust assertion carried by a binary dependency.

A signature is one of three closed shapes. Two signatures are equal when they
have the same shape and the same payload.
"""

import re
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

APPLE_DEVELOPER_PROGRAM_PREFIX = "AppleDeveloperProgram"
SELF_SIGNED_PREFIX = "SelfSigned"


class UnsignedSignature(BaseModel):
    """The XCFramework is expected to carry no signature at all."""

    kind: Literal["unsigned"] = "unsigned"

    model_config = {"frozen": True}


class AppleCertificateSignature(BaseModel):
    """Signed with a certificate issued through the Apple Developer Program."""

    kind: Literal["signed_with_apple_certificate"] = "signed_with_apple_certificate"
    team_identifier: str
    team_name: str

    model_config = {"frozen": True}


class SelfSignedSignature(BaseModel):
    """Signed with a self-issued certificate, identified by its SHA-256 fingerprint."""

    kind: Literal["self_signed"] = "self_signed"
    fingerprint: str

    model_config = {"frozen": True}


XCFrameworkSignature = Union[UnsignedSignature, AppleCertificateSignature, SelfSignedSignature]

# Field type for models that hold a signature
Signature = Annotated[XCFrameworkSignature, Field(discriminator="kind")]

_SELF_SIGNED_PATTERN = re.compile(rf"^{SELF_SIGNED_PREFIX}:(?P<fingerprint>[0-9A-Fa-f:]+)$")
_APPLE_PATTERN = re.compile(rf"^{APPLE_DEVELOPER_PROGRAM_PREFIX}:(?P<team_identifier>[^:]+):(?P<team_name>.+)$")


def signature_string(signature: XCFrameworkSignature) -> Optional[str]:
    """Render the canonical string for a signature, or None for unsigned."""
    if isinstance(signature, UnsignedSignature):
        return None
    if isinstance(signature, AppleCertificateSignature):
        return f"{APPLE_DEVELOPER_PROGRAM_PREFIX}:{signature.team_identifier}:{signature.team_name}"
    if isinstance(signature, SelfSignedSignature):
        return f"{SELF_SIGNED_PREFIX}:{signature.fingerprint}"
    raise TypeError(f"Unknown signature type: {type(signature).__name__}")


def parse_signature(text: Optional[str]) -> XCFrameworkSignature:
    """Parse a canonical signature string back into a signature value.

    Args:
        text: ``AppleDeveloperProgram:<team id>:<team name>``,
            ``SelfSigned:<sha256 fingerprint>``, or None/empty for unsigned

    Raises:
        ValueError: if the string matches neither canonical form
    """
    if not text:
        return UnsignedSignature()

    match = _APPLE_PATTERN.match(text.strip())
    if match:
        return AppleCertificateSignature(
            team_identifier=match.group("team_identifier"),
            team_name=match.group("team_name"),
        )

    match = _SELF_SIGNED_PATTERN.match(text.strip())
    if match:
        return SelfSignedSignature(fingerprint=match.group("fingerprint"))

    raise ValueError(
        f"Signature '{text}' must be 'AppleDeveloperProgram:<team identifier>:<team name>' "
        "or 'SelfSigned:<sha256 fingerprint>'"
    )
