"""Exceptions raised by the CloudAPI client.

Server-reported failures (404, 409, ...) are not exceptions: they come back
as :class:`~triton_cloudapi.cloudapi.decoding.ServerError` values. The
exceptions below cover conditions a request cannot recover from.
"""


class CloudApiError(Exception):
    """Base class for all CloudAPI client errors."""


class SigningError(CloudApiError):
    """Raised when the private key cannot be loaded or the signing fails.

    A request must never be sent without a valid Authorization header.
    """


class TransportError(CloudApiError):
    """Raised when the HTTP transport fails (connection error, timeout)."""


class DecodeError(CloudApiError):
    """Raised when a response body cannot be decoded into the requested shape.

    Attributes:
        raw: The offending response text, kept for diagnosis.
    """

    def __init__(self, message: str, raw: str | bytes = ""):
        super().__init__(message)
        self.raw = raw
