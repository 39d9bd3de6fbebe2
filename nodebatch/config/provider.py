"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Union


@dataclass
class ClientConfig:
    """Settings for talking to a Jenkins server."""
    password: Optional[str]
    verify_ssl: bool
    ca_cert: Optional[str]
    timeout: Optional[float]
    log_level: str

    @property
    def verify_setting(self) -> Union[bool, str]:
        """TLS verification argument: the CA bundle if configured, else the flag."""
        return self.ca_cert if self.ca_cert else self.verify_ssl

    def with_overrides(self, **overrides) -> "ClientConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_client_config(self) -> ClientConfig:
        """Get client configuration."""
        ...


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"NODEBATCH_TIMEOUT must be a number of seconds, got '{raw}'")
    return timeout if timeout > 0 else None


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_client_config(self) -> ClientConfig:
        """Get client configuration from environment variables."""
        return ClientConfig(
            password=os.getenv("NODEBATCH_PASSWORD") or None,
            verify_ssl=os.getenv("NODEBATCH_SSL_VERIFY", "true").lower() == "true",
            ca_cert=os.getenv("NODEBATCH_CA_CERT") or None,
            timeout=_parse_timeout(os.getenv("NODEBATCH_TIMEOUT")),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )


def get_config_provider() -> ConfigProvider:
    """Get the configuration provider."""
    return EnvConfigProvider()
