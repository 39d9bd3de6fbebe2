"""
Config Module - Black Box Interface

Purpose: Runtime settings for the client (password, TLS, timeouts, log level)
Interface: get_config_provider(), ClientConfig
Hidden: Config sources, environment parsing

Can be replaced with a different config source without touching callers.
"""

from .provider import ClientConfig, ConfigProvider, EnvConfigProvider, get_config_provider

__all__ = ["ClientConfig", "ConfigProvider", "EnvConfigProvider", "get_config_provider"]
