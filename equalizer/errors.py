"""Exception hierarchy for Equalizer.

The blueprint core never raises on bad selections; everything here is raised
by configuration validation or by the orchestration layer around it.
"""

from __future__ import annotations


class EqualizerError(Exception):
    """Base class for every error Equalizer raises on purpose."""


class ConfigurationError(EqualizerError):
    """Raised when a setup refers to something the registry does not know."""


class UnknownPackageManagerError(ConfigurationError):
    """Raised for a package-manager id that has no install flavour."""

    def __init__(self, manager: str) -> None:
        self.manager = manager
        super().__init__(f"Unknown package manager: {manager!r}")


class UnknownFrameworkError(ConfigurationError):
    """Raised for a framework id missing from the framework registry."""

    def __init__(self, framework: str) -> None:
        self.framework = framework
        super().__init__(f"Unknown framework: {framework!r}")


class DuplicateOptionError(ConfigurationError):
    """Raised at import time if two registry entries share an id."""


class PayloadError(EqualizerError):
    """Raised when a browser-assistant payload cannot be decoded."""


class CommandError(EqualizerError):
    """Raised when a generator or package-manager command exits non-zero."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{command} failed with exit code {returncode}")


class SetupCancelled(EqualizerError):
    """Raised when the user aborts an interactive prompt."""
