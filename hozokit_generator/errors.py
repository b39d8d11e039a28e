"""Error taxonomy for the Hozokit generator.

Every stage raises one of the exceptions below. The install pipeline catches
them at a single point, prints one red message and stops; nothing here is
retried. ``VersionMismatchWarning`` is the only soft outcome and is reported
rather than raised through the pipeline.
"""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for every error raised by the generator."""


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------


class TransportError(GeneratorError):
    """Raised when a request could not be completed (DNS, refused, timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class HttpStatusError(GeneratorError):
    """Raised when a download responds with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"Download has failed. ({status_code}) {url}")


class ApiError(GeneratorError):
    """Raised when the release metadata API responds with a non-success status."""

    def __init__(self, url: str, status_code: int, body: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request has failed. ({status_code}) {url}")


class ParseError(GeneratorError):
    """Raised when the release metadata body is not a JSON object."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not parse response from {url}: {reason}")


class MissingFieldError(GeneratorError):
    """Raised when the release metadata lacks a required field."""

    def __init__(self, url: str, field: str) -> None:
        self.url = url
        self.field = field
        super().__init__(f"Response from {url} is missing the '{field}' field.")


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


class MalformedArchiveError(GeneratorError):
    """Raised when an archive does not contain exactly one top-level folder."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Malformed archive {self.path}: {reason}")


class FilesystemError(GeneratorError):
    """Raised when a copy, rename, write or delete fails.

    No rollback is attempted, so the message states which path was being
    touched when it failed.
    """

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class TemplateStageError(FilesystemError):
    """Raised after the template stage when one or more file operations failed."""

    def __init__(self, failures: list[str]) -> None:
        self.failures = list(failures)
        detail = "\n".join(f"  - {failure}" for failure in self.failures)
        super().__init__(
            f"{len(self.failures)} template operation(s) failed:\n{detail}"
        )


class ProjectNotFoundError(GeneratorError):
    """Raised by the component generator when the theme folder is missing."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Could not find project directory: {self.path}\n"
            "Change directory to the folder where WordPress is installed "
            "in order to create a component."
        )


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


class DependencyInstallError(GeneratorError):
    """Raised when ``npm install`` could not be run or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class VersionMismatchWarning(UserWarning):
    """The running Node version differs from the one the theme expects."""

    def __init__(self, expected: str, current: str) -> None:
        self.expected = expected
        self.current = current
        super().__init__(
            f"Avoided dependency install because current Node version is "
            f"{current}, the theme expects {expected}."
        )


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


class TaskAlreadySettledError(GeneratorError):
    """Raised when a progress task is marked after it already settled."""

    def __init__(self, label: str, state: str) -> None:
        self.label = label
        self.state = state
        super().__init__(f"Task '{label}' has already settled ({state}).")
