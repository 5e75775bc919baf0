"""Deterministic JSON encoding for AlertManager alerts.

The wire shape follows AlertManager's v2 ``postableAlerts`` schema,
restricted to the two members this sink produces::

    [{"labels": {"alertname": "...", ...}, "annotations": {...}}]

Output is compact (no spaces) and never contains a raw newline: the
JSON encoder escapes control characters inside strings, and no
indentation is used, so the whole body is one line.

Key order is explicit rather than incidental: ``labels`` precedes
``annotations``; inside ``labels`` the ``alertname`` key comes first,
followed by caller labels in the order they were supplied; annotations
keep the order they were supplied in.  The event constructor builds its
mappings in that order, so encoding just preserves it.
"""

import json
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from alertsink.alertmanager.event import AlertEvent

_SEPARATORS = (",", ":")


def event_to_dict(event: "AlertEvent") -> dict[str, Any]:
    """Build the JSON-ready mapping for a single alert.

    The ``annotations`` member is omitted entirely when the event has
    none; an empty object is never emitted.
    """
    payload: dict[str, Any] = {"labels": dict(event.labels)}
    if event.annotations:
        payload["annotations"] = dict(event.annotations)
    return payload


def encode_event(event: "AlertEvent") -> str:
    """Serialise one alert to a compact JSON object string."""
    return json.dumps(event_to_dict(event), separators=_SEPARATORS, ensure_ascii=False)


def encode_alerts(events: Iterable["AlertEvent"]) -> bytes:
    """Serialise alerts to the UTF-8 request body AlertManager expects.

    The body is always a JSON array; the handler passes a single event,
    which yields ``[`` + event JSON + ``]``.
    """
    body = "[" + ",".join(encode_event(event) for event in events) + "]"
    return body.encode("utf-8")
