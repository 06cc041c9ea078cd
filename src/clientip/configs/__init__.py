from .config import AppConfig, get_app_config, get_client_ip_config
from .system import DEFAULT_IP_HEADERS, ClientIPConfig, LoggingConfig, TracingConfig

__all__ = [
    "DEFAULT_IP_HEADERS",
    "AppConfig",
    "ClientIPConfig",
    "LoggingConfig",
    "TracingConfig",
    "get_app_config",
    "get_client_ip_config",
]
