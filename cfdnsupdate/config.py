"""Configuration management for cf-dns-update."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cfdnsupdate.errors import (
    ConfigError,
    InvalidPoolSizeError,
    MalformedSpecError,
    UnsupportedRecordTypeError,
)

ADDRESS_RECORD = "A"
ALIAS_RECORD = "CNAME"
SUPPORTED_RECORD_TYPES = (ADDRESS_RECORD, ALIAS_RECORD)

NO_PROXY_TOKEN = "noproxy"
DECLARATION_PARTS = 5


class AddressPoolTarget(BaseModel):
    """Keep `size` A records pointed at the current public address."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pool"] = "pool"
    size: int = Field(ge=1)


class AliasTarget(BaseModel):
    """Keep a single CNAME record pointed at `content`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["alias"] = "alias"
    content: str = Field(min_length=1)


Target = Annotated[AddressPoolTarget | AliasTarget, Field(discriminator="kind")]


class DesiredState(BaseModel):
    """Normalized target state for one record name and type."""

    model_config = ConfigDict(frozen=True)

    zone: str
    record_name: str
    record_type: str
    proxied: bool = True
    target: Target


class Settings(BaseSettings):
    """Environment variables read at process entry."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # zone:proxy-mode:subdomain:type:argument
    record: str | None = None

    # Cloudflare global API key credentials
    x_auth_email: str | None = None
    x_auth_key: str | None = None

    # Scoped API token, used instead of the key when set
    cf_api_token: str | None = None

    ip_service_url: str = "https://api.ipify.org?format=json"


class RunConfig(BaseModel):
    """Everything one reconciliation run needs, built once."""

    model_config = ConfigDict(frozen=True)

    desired: DesiredState
    settings: Settings


def parse_declaration(spec: str) -> DesiredState:
    """Parse a `zone:proxy-mode:subdomain:type:argument` declaration.

    Args:
        spec: The declaration, e.g. "example.com:noproxy:home:A:2"

    Returns:
        The normalized DesiredState.

    Raises:
        MalformedSpecError: The declaration does not have five usable parts.
        InvalidPoolSizeError: An A record pool size is not an integer >= 1.
        UnsupportedRecordTypeError: The record type is not A or CNAME.
    """
    parts = spec.split(":")
    if len(parts) != DECLARATION_PARTS:
        raise MalformedSpecError(
            f"expected {DECLARATION_PARTS} parts separated by ':', got {len(parts)}: {parts}"
        )

    zone, proxy_mode, subdomain, record_type, argument = parts
    for label, value in (
        ("zone", zone),
        ("subdomain", subdomain),
        ("record type", record_type),
        ("argument", argument),
    ):
        if not value:
            raise MalformedSpecError(f"{label} is empty in {spec!r}")

    proxied = proxy_mode.lower() != NO_PROXY_TOKEN

    if record_type == ADDRESS_RECORD:
        try:
            size = int(argument)
        except ValueError:
            raise InvalidPoolSizeError(f"pool size is not an integer: {argument!r}") from None
        if size < 1:
            raise InvalidPoolSizeError(f"pool size must be at least 1, got {size}")
        target: AddressPoolTarget | AliasTarget = AddressPoolTarget(size=size)
    elif record_type == ALIAS_RECORD:
        target = AliasTarget(content=argument)
    else:
        raise UnsupportedRecordTypeError(f"unimplemented record type: {record_type}")

    return DesiredState(
        zone=zone,
        record_name=f"{subdomain}.{zone}",
        record_type=record_type,
        proxied=proxied,
        target=target,
    )


def load_settings() -> Settings:
    """Load settings from .env and environment variables."""
    return Settings()


def load_run_config(settings: Settings, record: str | None = None) -> RunConfig:
    """Build the run configuration, preferring an explicit declaration."""
    declaration = record or settings.record
    if not declaration:
        raise ConfigError("no record declaration given; set RECORD or pass --record")
    return RunConfig(desired=parse_declaration(declaration), settings=settings)
