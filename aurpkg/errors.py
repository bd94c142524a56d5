"""Exception hierarchy for aurpkg.

Every failure is fatal to the invocation. The CLI maps an ``AurpkgError``
to its ``exit_code`` and prints the message; nothing is retried.
"""

from __future__ import annotations


class AurpkgError(Exception):
    exit_code = 1


# (a) network / HTTP
class TransportError(AurpkgError):
    pass


# (b) the server answered, but not with what we need
class MalformedResponseError(AurpkgError):
    pass


class NoResultsError(MalformedResponseError):
    pass


class PackageNotFoundError(MalformedResponseError):
    pass


# (c) local environment
class ResourceError(AurpkgError):
    pass


class ConfigError(AurpkgError):
    pass


# (d) explicitly diagnosed refusals
class ValidationError(AurpkgError):
    pass


class ArchiveSignatureError(ValidationError):
    pass


class ToolNotFoundError(ValidationError):
    pass


class PlatformError(ValidationError):
    pass


class ExternalToolError(AurpkgError):
    """A child process could not be started or exited unsuccessfully."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


# (e) user input that selects nothing; not a crash
class NothingToDoError(AurpkgError):
    exit_code = 0

    def __init__(self, message: str = "there is nothing to do") -> None:
        super().__init__(message)
