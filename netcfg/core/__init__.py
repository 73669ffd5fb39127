"""
Core модули netcfg.

- models: Identity, Rule, HostResult, RunSummary
- domain: выбор команд по правилам
- connection: SSH подключения через paramiko
- credentials: учётные данные
- config_schema: pydantic схемы конфигурации
- logging: JSON/Human-readable логирование
- exceptions: типизированные исключения
- constants: константы
"""

from .models import Identity, Rule, HostResult, RunSummary
from .connection import ConnectionManager, ShellConnection, ShellSession
from .credentials import Credentials, CredentialsManager
from .logging import (
    LogConfig,
    RotationType,
    HumanFormatter,
    JSONFormatter,
    StructuredLogger,
    get_logger,
    setup_logging_from_config,
)
from .exceptions import (
    NetcfgError,
    CollectorError,
    ConnectionError,
    AuthenticationError,
    TimeoutError,
    SessionTimeoutError,
    CommandError,
    RemoteExitError,
    ExitStatusMissingError,
    ProbeError,
    ConfigError,
    format_error_for_log,
)

__all__ = [
    "Identity",
    "Rule",
    "HostResult",
    "RunSummary",
    "ConnectionManager",
    "ShellConnection",
    "ShellSession",
    "Credentials",
    "CredentialsManager",
    "LogConfig",
    "RotationType",
    "HumanFormatter",
    "JSONFormatter",
    "StructuredLogger",
    "get_logger",
    "setup_logging_from_config",
    "NetcfgError",
    "CollectorError",
    "ConnectionError",
    "AuthenticationError",
    "TimeoutError",
    "SessionTimeoutError",
    "CommandError",
    "RemoteExitError",
    "ExitStatusMissingError",
    "ProbeError",
    "ConfigError",
    "format_error_for_log",
]
