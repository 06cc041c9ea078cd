from pydantic import BaseModel, Field, field_validator

DEFAULT_IP_HEADERS = [
    "x-forwarded-for",
    "x-real-ip",
    "true-client-ip",
    "x-client-ip",
    "x-forwarded",
    "forwarded-for",
    "x-cluster-client-ip",
    "fastly-client-ip",
    "cf-connecting-ip",
    "cf-connecting-ipv6",
]


def _clean_header_name(name: str) -> str:
    return name.strip().lower()


class ClientIPConfig(BaseModel):
    """Client IP resolution settings (read-only once the app is up)."""

    header_priority: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IP_HEADERS),
        description="Headers consulted for the client IP, highest priority first",
    )
    override_header: str | None = Field(
        default=None,
        description="Single header that replaces the priority list when set",
    )
    fallback_to_remote_addr: bool = Field(
        default=False,
        description="Use the transport peer address when no header resolves",
    )
    max_candidates_per_header: int = Field(
        default=20,
        ge=1,
        description="Maximum comma-separated entries inspected per header",
    )

    @field_validator("header_priority")
    @classmethod
    def _normalize_priority(cls, value: list[str]) -> list[str]:
        names: list[str] = []
        for raw in value:
            name = _clean_header_name(raw)
            if name and name not in names:
                names.append(name)
        if not names:
            raise ValueError("header_priority must name at least one header")
        return names

    @field_validator("override_header")
    @classmethod
    def _normalize_override(cls, value: str | None) -> str | None:
        # Blank means "no override".
        if value is None:
            return None
        return _clean_header_name(value) or None

    @property
    def active_headers(self) -> list[str]:
        if self.override_header:
            return [self.override_header]
        return list(self.header_priority)


class LoggingConfig(BaseModel):
    """Logging output settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True, description="Emit JSON lines instead of coloured text"
    )


class TracingConfig(BaseModel):
    """OpenTelemetry tracing settings."""

    enabled: bool = Field(default=False, description="Enable OTLP tracing")
    endpoint: str = Field(default="", description="OTLP HTTP traces endpoint")
    username: str = Field(default="", description="Basic-auth username")
    password: str = Field(default="", description="Basic-auth password")
    service_name: str = Field(default="clientip", description="service.name")
    sample_rate: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Root span sampling ratio"
    )
    excluded_urls: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="URL patterns skipped by the FastAPI instrumentor",
    )
