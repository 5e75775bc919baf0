"""Exception taxonomy raised by the alert sink.

Every error is raised synchronously to the caller of the offending
operation.  Nothing is retried or suppressed here; whether a failed
delivery stops the pipeline is the pipeline's decision.
"""

from typing import Optional


class AlertSinkError(Exception):
    """Base class for every error raised by :mod:`alertsink`."""


class InvalidArgumentError(AlertSinkError, ValueError):
    """Malformed construction input, e.g. a missing alert name or a bad URL."""


class IllegalStateError(AlertSinkError, RuntimeError):
    """An operation was invoked in the wrong lifecycle state."""


class SinkConnectionError(AlertSinkError):
    """The outbound HTTP client could not be initialised during ``open``."""


class DeliveryError(AlertSinkError):
    """An alert could not be delivered to the remote endpoint.

    Attributes:
        url: The endpoint the POST was addressed to.
        status_code: HTTP status of a non-2xx response, or ``None`` when
            the request failed at the transport level (the transport
            error is then available as ``__cause__``).
        body: Leading part of the response body, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
