"""Typed errors raised by the status and expand-scope commands.

Everything derives from TcCliError so the CLI has a single place to turn a
failure into a message and an exit code.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(eq=False)
class TcCliError(Exception):
    """Base error type for all expected command failures."""

    message: str

    def __str__(self) -> str:
        return self.message


# Remote failures


@dataclass(eq=False)
class RemoteError(TcCliError):
    """Failure while talking to a remote json endpoint."""

    url: str = ""


@dataclass(eq=False)
class NetworkError(RemoteError):
    """Connection or transport level failure."""

    cause: Optional[Exception] = None


@dataclass(eq=False)
class HTTPStatusError(RemoteError):
    """Remote endpoint answered with a status other than 200."""

    status_code: int = 0
    response_body: str = ""


@dataclass(eq=False)
class DecodeError(RemoteError):
    """Body is not valid json, or does not have the expected shape."""

    cause: Optional[Exception] = None


@dataclass(eq=False)
class URLParseError(DecodeError):
    """A base url from an api reference has no usable hostname."""


# Cache file failures


@dataclass(eq=False)
class FilesystemError(TcCliError):
    """Failure reading or writing the ping url cache file."""

    path: Optional[Path] = None
    cause: Optional[Exception] = None


@dataclass(eq=False)
class CacheNotFoundError(FilesystemError):
    """No cache file exists yet."""


@dataclass(eq=False)
class CacheReadError(FilesystemError):
    """Cache file exists but could not be read."""


@dataclass(eq=False)
class CacheDecodeError(FilesystemError):
    """Cache file content is not a valid cache record."""


@dataclass(eq=False)
class CacheWriteError(FilesystemError):
    """Cache file (or its parent folders) could not be written."""


# Argument failures


@dataclass(eq=False)
class ValidationError(TcCliError):
    """Invalid command arguments."""


@dataclass(eq=False)
class UnknownServiceError(ValidationError):
    """One or more requested services are not in the known set."""

    unknown: tuple = ()
    valid: tuple = ()
