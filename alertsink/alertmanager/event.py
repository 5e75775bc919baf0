"""The alert event delivered by the AlertManager sink.

An :class:`AlertEvent` is a bag of labels (identity) and annotations
(free text).  Annotation templates are rendered against the labels once,
at construction, so what you read back is exactly what goes on the wire.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from alertsink.alertmanager.serializer import encode_event
from alertsink.alertmanager.template import render_annotations
from alertsink.errors import InvalidArgumentError

#: Label key that carries the alert's identity.
ALERTNAME = "alertname"


def _check_encodable(name: str, text: str) -> None:
    """Reject strings that cannot go on the wire as UTF-8 (lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(f"{name} is not valid UTF-8 text: {text!r}") from exc


def _check_str_mapping(name: str, mapping: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Copy *mapping* into a plain dict, rejecting non-string entries."""
    if mapping is None:
        return {}
    if not isinstance(mapping, Mapping):
        raise InvalidArgumentError(f"{name} must be a mapping, got {type(mapping).__name__}")
    copied: dict[str, str] = {}
    for key, value in mapping.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise InvalidArgumentError(
                f"{name} keys and values must be strings, got {key!r}: {value!r}"
            )
        _check_encodable(f"{name} key", key)
        _check_encodable(f"{name}[{key!r}]", value)
        copied[key] = value
    return copied


class AlertEvent:
    """One alert occurrence, immutable after construction.

    Args:
        alert_name: Required identity, stored as the ``alertname`` label.
        extra_labels: Additional labels.  A caller-supplied
            ``alertname`` key is overwritten by *alert_name*.
        annotations: Descriptive text.  Values may reference labels with
            ``{{.KEY}}`` placeholders, which are substituted here; keys
            that are not labels are left verbatim.

    Raises:
        InvalidArgumentError: *alert_name* is missing or empty, or a
            label/annotation key or value is not a string
            or cannot be encoded as UTF-8.
    """

    __slots__ = ("_labels", "_annotations")

    def __init__(
        self,
        alert_name: str,
        extra_labels: Optional[Mapping[str, str]] = None,
        annotations: Optional[Mapping[str, str]] = None,
    ) -> None:
        if alert_name is None:
            raise InvalidArgumentError("alert_name is required")
        if not isinstance(alert_name, str) or not alert_name:
            raise InvalidArgumentError(f"alert_name must be a non-empty string, got {alert_name!r}")
        _check_encodable("alert_name", alert_name)

        labels = {ALERTNAME: alert_name}
        for key, value in _check_str_mapping("extra_labels", extra_labels).items():
            if key != ALERTNAME:
                labels[key] = value

        rendered = render_annotations(_check_str_mapping("annotations", annotations), labels)

        self._labels = MappingProxyType(labels)
        self._annotations = MappingProxyType(rendered)

    @property
    def alert_name(self) -> str:
        return self._labels[ALERTNAME]

    @property
    def labels(self) -> Mapping[str, str]:
        """Read-only view of all labels, ``alertname`` first."""
        return self._labels

    @property
    def annotations(self) -> Mapping[str, str]:
        """Read-only view of the already-rendered annotations."""
        return self._annotations

    def get_labels(self) -> Mapping[str, str]:
        return self._labels

    def get_annotations(self) -> Mapping[str, str]:
        return self._annotations

    def to_json_string(self) -> str:
        """Compact JSON object; see :mod:`alertsink.alertmanager.serializer`."""
        return encode_event(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlertEvent):
            return NotImplemented
        return dict(self._labels) == dict(other._labels) and dict(self._annotations) == dict(
            other._annotations
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"AlertEvent(alert_name={self.alert_name!r}, labels={dict(self._labels)!r}, "
            f"annotations={dict(self._annotations)!r})"
        )
