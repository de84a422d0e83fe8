class InvalidRequestError(ValueError):
    """Raised when query criteria are missing or inconsistent."""


class UpstreamUnavailableError(RuntimeError):
    """Raised when the station catalog cannot be read."""
