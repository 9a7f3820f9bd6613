"""Custom exception classes for the song artwork proxy.

Transport adapters raise these; the resolvers catch them at the pipeline boundary
and turn them into ``Failure`` results.
"""


class ProxyServiceError(Exception):
    """Base exception for all proxy service errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ProxyServiceError):
    """Raised when there's a configuration error."""

    pass


class TokenAcquisitionError(ProxyServiceError):
    """Raised when an upstream access token cannot be obtained."""

    pass


class UpstreamRequestError(ProxyServiceError):
    """Raised when an upstream call fails at the transport or HTTP status level."""

    pass


class MalformedResponseError(ProxyServiceError):
    """Raised when an upstream payload is missing fields or has the wrong shape."""

    pass


class UnexpectedSearchResultError(ProxyServiceError):
    """Raised when a search returns a result kind other than the one requested."""

    pass


class LyricsDecodeError(ProxyServiceError):
    """Raised when a lyrics blob is not valid base64 or not valid UTF-8."""

    pass
