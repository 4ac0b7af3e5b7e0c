"""Signature provider — reads the code signature embedded in an XCFramework.

An XCFramework without a ``_CodeSignature`` directory is unsigned. Signed
frameworks are inspected with ``codesign``: Apple-issued certificates are
identified by their team, anything else by the SHA-256 fingerprint of the
leaf certificate.
"""

import asyncio
import hashlib
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import structlog
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from targetlint.config import get_settings
from targetlint.errors import SignatureExtractionError
from targetlint.models import (
    AppleCertificateSignature,
    SelfSignedSignature,
    UnsignedSignature,
    XCFrameworkSignature,
)

logger = structlog.get_logger()

CODE_SIGNATURE_DIRECTORY = "_CodeSignature"

# Authorities whose certificates are issued through the Apple Developer Program
APPLE_AUTHORITY_PREFIXES = (
    "Apple Development",
    "Apple Distribution",
    "iPhone Developer",
    "iPhone Distribution",
    "Developer ID Application",
)

_TEAM_IDENTIFIER_PATTERN = re.compile(r"^TeamIdentifier=(?P<team>.+)$", re.MULTILINE)
_AUTHORITY_PATTERN = re.compile(r"^Authority=(?P<authority>.+)$", re.MULTILINE)
_TEAM_NAME_PATTERN = re.compile(r"^[^:]+:\s*(?P<name>.+?)(?:\s*\([^)]*\))?$")


def _is_transient(error: BaseException) -> bool:
    return isinstance(error, SignatureExtractionError) and error.transient


class SignatureProvider(ABC):
    """Returns the actual signature of the XCFramework at a path."""

    @abstractmethod
    async def signature(self, path: Path) -> XCFrameworkSignature:
        """Read the signature of an XCFramework.

        Returns:
            The signature; an unsigned framework yields UnsignedSignature

        Raises:
            SignatureExtractionError: if the artifact can't be read or parsed
        """
        ...


class XCFrameworkSignatureProvider(SignatureProvider):
    """Reads XCFramework signatures with the ``codesign`` tool."""

    def __init__(
        self,
        codesign_path: Optional[str] = None,
        retry_attempts: Optional[int] = None,
        retry_max_wait: Optional[float] = None,
    ):
        settings = get_settings()
        self.codesign_path = settings.CODESIGN_PATH if codesign_path is None else codesign_path
        self.retry_attempts = settings.SIGNATURE_RETRY_ATTEMPTS if retry_attempts is None else retry_attempts
        self.retry_max_wait = (
            settings.SIGNATURE_RETRY_MAX_WAIT_SECONDS if retry_max_wait is None else retry_max_wait
        )

    async def signature(self, path: Path) -> XCFrameworkSignature:
        path = Path(path)
        is_signed = await asyncio.to_thread((path / CODE_SIGNATURE_DIRECTORY).is_dir)
        if not is_signed:
            return UnsignedSignature()

        details = await self._codesign("-dvv", str(path))

        team_identifier = self._team_identifier(details)
        authority = self._leaf_authority(details)
        if team_identifier and authority and authority.startswith(APPLE_AUTHORITY_PREFIXES):
            return AppleCertificateSignature(
                team_identifier=team_identifier,
                team_name=self._team_name(authority),
            )

        fingerprint = await self._leaf_certificate_fingerprint(path)
        return SelfSignedSignature(fingerprint=fingerprint)

    async def _leaf_certificate_fingerprint(self, path: Path) -> str:
        with tempfile.TemporaryDirectory() as directory:
            prefix = Path(directory) / "certificate"
            await self._codesign("-d", f"--extract-certificates={prefix}", str(path))
            # codesign writes the chain as certificate0, certificate1, ... leaf first
            leaf = Path(f"{prefix}0")
            try:
                data = await asyncio.to_thread(leaf.read_bytes)
            except FileNotFoundError as e:
                raise SignatureExtractionError(path, "codesign did not extract any certificate") from e
        return hashlib.sha256(data).hexdigest().upper()

    async def _codesign(self, *arguments: str) -> str:
        """Run codesign, retrying transient failures. Returns the combined output."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.5, max=self.retry_max_wait),
            retry=retry_if_exception(_is_transient),
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                "signature_probe_retry",
                attempt=retry_state.attempt_number,
                wait=retry_state.next_action.sleep,
            ),
        )
        return await retrying(self._run, *arguments)

    async def _run(self, *arguments: str) -> str:
        target_path = arguments[-1]
        try:
            process = await asyncio.create_subprocess_exec(
                self.codesign_path,
                *arguments,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise SignatureExtractionError(target_path, f"'{self.codesign_path}' is not available: {e}") from e
        except OSError as e:
            # e.g. EAGAIN when the process table is momentarily full
            raise SignatureExtractionError(target_path, f"could not start codesign: {e}", transient=True) from e

        stdout, stderr = await process.communicate()
        # codesign prints signature details on stderr
        output = stdout.decode("utf-8", errors="replace") + stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            # A negative return code means codesign was killed by a signal
            raise SignatureExtractionError(
                target_path,
                output.strip() or f"codesign exited with {process.returncode}",
                transient=process.returncode < 0,
            )
        return output

    @staticmethod
    def _team_identifier(details: str) -> Optional[str]:
        match = _TEAM_IDENTIFIER_PATTERN.search(details)
        if match is None:
            return None
        team = match.group("team").strip()
        if team.lower() == "not set":
            return None
        return team

    @staticmethod
    def _leaf_authority(details: str) -> Optional[str]:
        # The first Authority line is the signing (leaf) certificate
        match = _AUTHORITY_PATTERN.search(details)
        return match.group("authority").strip() if match else None

    @staticmethod
    def _team_name(authority: str) -> str:
        """'Apple Distribution: Acme Inc (ABCDE12345)' -> 'Acme Inc'."""
        match = _TEAM_NAME_PATTERN.match(authority)
        return match.group("name") if match else authority
