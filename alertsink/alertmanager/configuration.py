"""Destination of an AlertManager handler."""

from urllib.parse import urlsplit

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from alertsink.errors import InvalidArgumentError

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class AlertConfiguration(BaseModel):
    """Immutable holder for the alerts API endpoint.

    The URL is validated as an absolute http(s) URL but stored exactly as
    given; nothing is resolved or contacted at construction time.

    Attributes:
        endpoint_url: Absolute http(s) URL of the remote alerts API,
            e.g. ``http://alertmanager:9093/api/v2/alerts``.

    Raises:
        InvalidArgumentError: The URL is empty, not a string, or not a
            syntactically valid absolute http(s) URL.
    """

    model_config = ConfigDict(frozen=True)

    endpoint_url: str

    def __init__(self, endpoint_url: str = "", **data) -> None:
        data.setdefault("endpoint_url", endpoint_url)
        try:
            super().__init__(**data)
        except ValidationError as exc:
            errors = "; ".join(err["msg"] for err in exc.errors())
            raise InvalidArgumentError(f"invalid alert configuration: {errors}") from exc

    @field_validator("endpoint_url", mode="before")
    @classmethod
    def check_endpoint_url(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError(f"endpoint_url must be a string, got {type(value).__name__}")
        if not value.strip():
            raise ValueError("endpoint_url must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError(f"endpoint_url must not contain whitespace: {value!r}")
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"]
            raise ValueError(f"endpoint_url is not an absolute http(s) URL ({reason}): {value!r}") from None
        # The URL parser reads "http:///x" as host "x"; an empty authority is still invalid.
        if not urlsplit(value).netloc:
            raise ValueError(f"endpoint_url has no host: {value!r}")
        return value
