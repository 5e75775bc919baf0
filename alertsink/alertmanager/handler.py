"""AlertManager sink handler: owns an HTTP client and POSTs alerts.

Lifecycle::

    Closed --open(cfg)--> Open --on_event(e)--> Open --close()--> Closed

The same instance may be reopened after ``close``, with the same or a
different configuration; every ``open`` starts from a fresh client.
Calling ``open`` while already open closes the previous client first.

Concurrency: one :class:`threading.Lock` per handler guards both the
lifecycle state and the client, so concurrent ``on_event`` calls on a
single handler are safe and are delivered one at a time.  Separate
handlers share nothing and never block each other.
"""

import logging
import threading
from typing import Optional

import httpx

from alertsink.alertmanager.configuration import AlertConfiguration
from alertsink.alertmanager.event import AlertEvent
from alertsink.alertmanager.serializer import encode_alerts
from alertsink.config import get_settings
from alertsink.errors import (
    DeliveryError,
    IllegalStateError,
    InvalidArgumentError,
    SinkConnectionError,
)
from alertsink.sink import Handler

logger = logging.getLogger(__name__)

#: Maximum number of response-body characters kept on a DeliveryError.
_BODY_EXCERPT = 200


class AlertManagerHandler(Handler[AlertConfiguration, AlertEvent]):
    """Deliver :class:`AlertEvent` objects to an AlertManager endpoint.

    Args:
        transport: Optional :mod:`httpx` transport used for every client
            this handler builds.  Pipelines leave it unset; tests inject
            :class:`httpx.MockTransport`.  The transport is closed along
            with each client, so it must tolerate reuse after ``close``.
    """

    name = "alertmanager"

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._transport = transport
        self._lock = threading.Lock()
        self._client: Optional[httpx.Client] = None
        self._configuration: Optional[AlertConfiguration] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def configuration(self) -> Optional[AlertConfiguration]:
        """Configuration of the current open period, ``None`` when closed."""
        return self._configuration

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self, configuration: AlertConfiguration) -> None:
        """Bind the handler to *configuration* and build a new HTTP client.

        No request is sent.  If the handler is already open, the previous
        client is closed and replaced.

        Raises:
            InvalidArgumentError: *configuration* is not an
                :class:`AlertConfiguration`.
            SinkConnectionError: The client could not be initialised,
                e.g. the endpoint authority is malformed.  The handler is
                left closed.
        """
        if not isinstance(configuration, AlertConfiguration):
            raise InvalidArgumentError(
                f"expected AlertConfiguration, got {type(configuration).__name__}"
            )

        with self._lock:
            self._release()
            self._client = self._build_client(configuration)
            self._configuration = configuration
        logger.info("%s handler opened for %s", self.name, configuration.endpoint_url)

    def on_event(self, event: AlertEvent) -> None:
        """POST *event* to the configured endpoint and check the response.

        The body is a one-element JSON array, sent as
        ``application/json`` on a single line.  Any 2xx status counts as
        success; the response body is not interpreted.  Failures are not
        retried.

        Raises:
            InvalidArgumentError: *event* is not an :class:`AlertEvent`.
            IllegalStateError: The handler is closed.
            DeliveryError: The endpoint answered with a non-2xx status,
                or the request failed at the transport level (connection
                refused, timeout, DNS failure).
        """
        if not isinstance(event, AlertEvent):
            raise InvalidArgumentError(f"expected AlertEvent, got {type(event).__name__}")

        with self._lock:
            if self._client is None or self._configuration is None:
                raise IllegalStateError("on_event called on a closed AlertManager handler")
            url = self._configuration.endpoint_url
            body = encode_alerts([event])

            try:
                resp = self._client.post(
                    url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.HTTPError as exc:
                logger.warning(
                    "%s: alert %s could not be delivered to %s: %s",
                    self.name,
                    event.alert_name,
                    url,
                    exc,
                )
                raise DeliveryError(
                    f"transport failure delivering alert to {url}: {exc}",
                    url=url,
                ) from exc

        if not resp.is_success:
            excerpt = resp.text[:_BODY_EXCERPT]
            logger.warning(
                "%s: alert %s rejected by %s (status %d): %s",
                self.name,
                event.alert_name,
                url,
                resp.status_code,
                excerpt,
            )
            raise DeliveryError(
                f"alert rejected by {url}: status={resp.status_code}",
                url=url,
                status_code=resp.status_code,
                body=excerpt,
            )

        logger.info(
            "%s: alert %s delivered to %s (status %d)",
            self.name,
            event.alert_name,
            url,
            resp.status_code,
        )

    def close(self) -> None:
        """Release the HTTP client.  Safe to call when already closed."""
        with self._lock:
            endpoint = self._configuration.endpoint_url if self._configuration else None
            released = self._release()
        if released:
            logger.info("%s handler for %s closed", self.name, endpoint)

    def __enter__(self) -> "AlertManagerHandler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _build_client(self, configuration: AlertConfiguration) -> httpx.Client:
        cfg = get_settings()
        try:
            httpx.URL(configuration.endpoint_url)
            return httpx.Client(
                timeout=cfg.default_timeout,
                headers={"User-Agent": cfg.user_agent},
                transport=self._transport,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            logger.warning("Cannot open %s handler for %s: %s", self.name, configuration.endpoint_url, exc)
            raise SinkConnectionError(
                f"cannot initialise client for {configuration.endpoint_url!r}: {exc}"
            ) from exc

    def _release(self) -> bool:
        client = self._client
        self._client = None
        self._configuration = None
        if client is None:
            return False
        client.close()
        return True
