"""Operational failures raised by linter collaborators.

Findings about a target are never raised: they are returned as
``LintingIssue`` values. The exceptions here mean the linter could not
determine ground truth and the whole lint call must fail.
"""


class TargetLintError(Exception):
    """Base class for failures raised by targetlint collaborators."""


class SignatureExtractionError(TargetLintError):
    """The signature of an XCFramework could not be read."""

    def __init__(self, path, message: str, transient: bool = False):
        super().__init__(f"Unable to read the signature of {path}: {message}")
        self.path = path
        # Only transient failures are worth retrying
        self.transient = transient
