"""
Error taxonomy for the pin pipeline.

Every failure is fatal: the use case reports it once and stops.
The CLI maps any ``PinError`` to exit code 1.
"""

from __future__ import annotations


class PinError(Exception):
    """Base class for all gomodpin failures."""


class ManifestPathError(PinError):
    """The given path is missing, a directory, or not named go.mod."""


class ManifestReadError(PinError):
    """The manifest exists but cannot be read."""


class ManifestParseError(PinError):
    """The manifest content is not a valid go.mod.

    The message is ``<file>:<line>: <reason>`` and is shown verbatim.
    """

    def __init__(self, filename: str, line: int, message: str) -> None:
        super().__init__(f"{filename}:{line}: {message}")
        self.filename = filename
        self.line = line
        self.reason = message


class ManifestWriteError(PinError):
    """Writing the backup or appending to the manifest failed."""


class BackupWriteError(ManifestWriteError):
    """The backup copy could not be written. The manifest was not touched."""


class AppendWriteError(ManifestWriteError):
    """The pin block could not be appended to the manifest."""


class ConfigError(PinError):
    """Raised when the settings file is invalid or missing."""
