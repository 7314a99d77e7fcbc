"""Custom exception classes for openscan-links."""


class OpenScanError(Exception):
    """Base exception for explorer-related errors."""

    pass


class ConfigurationError(OpenScanError, ValueError):
    """Raised when an environment override cannot be parsed."""

    pass


class WebappNotFoundError(OpenScanError, FileNotFoundError):
    """Raised when the webapp dist folder or its index.html is missing."""

    pass


class PortInUseError(OpenScanError, OSError):
    """Raised when the webapp port is already bound."""

    pass


class ServiceNotReadyError(OpenScanError, RuntimeError):
    """Raised when an HTTP service does not answer within the polling budget."""

    pass


class ExplorerStartError(OpenScanError, RuntimeError):
    """Raised when the explorer session fails to start."""

    pass
