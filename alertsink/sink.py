"""Generic sink contracts shared by every pipeline output.

A pipeline talks to its outputs only through these three shapes: it
builds a *configuration*, hands it to a *handler* via ``open``, then
pushes *events* through ``on_event`` until it tears the sink down with
``close``.  :mod:`alertsink.alertmanager` is the concrete sink shipped
here.
"""

from typing import Protocol, TypeVar, runtime_checkable


@runtime_checkable
class Event(Protocol):
    """Something a sink can deliver."""

    def to_json_string(self) -> str: ...


class Configuration(Protocol):
    """Immutable connection parameters for one handler open period."""


C = TypeVar("C", bound=Configuration, contravariant=True)
E = TypeVar("E", bound=Event, contravariant=True)


class Handler(Protocol[C, E]):
    """Lifecycle of a sink: ``open`` -> ``on_event``* -> ``close``.

    ``close`` must be idempotent, and ``open`` may be called again after
    ``close`` to start a fresh period.
    """

    def open(self, configuration: C) -> None: ...

    def on_event(self, event: E) -> None: ...

    def close(self) -> None: ...
