"""
Module hwscan.core.exceptions
-----------------------------

Exception hierarchy for HWSCAN. Only mandatory sources raise; every advisory
source degrades to empty values instead.
"""


class HwscanError(Exception):
    """Base exception for HWSCAN."""


class ConfigurationError(HwscanError):
    """Raised when the runtime configuration cannot be loaded or validated."""


class SourceUnavailableError(HwscanError):
    """Raised when a mandatory pseudo-file cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"Source unavailable: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class HardwareDetectionError(HwscanError):
    """Raised when a mandatory facet (CPU or memory) cannot be detected."""

    def __init__(self, facet: str, cause: Exception | None = None):
        self.facet = facet
        self.cause = cause
        msg = f"Error detecting {facet}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
