"""AlertManager sink: events, configuration and the HTTP handler.

Typical use from a pipeline::

    handler = AlertManagerHandler()
    handler.open(AlertConfiguration("http://127.0.0.1:9093/api/v2/alerts"))
    handler.on_event(AlertEvent("high_temperature", {"severity": "critical"}))
    handler.close()
"""

from alertsink.alertmanager.configuration import AlertConfiguration
from alertsink.alertmanager.event import ALERTNAME, AlertEvent
from alertsink.alertmanager.handler import AlertManagerHandler

__all__ = ["ALERTNAME", "AlertConfiguration", "AlertEvent", "AlertManagerHandler"]
