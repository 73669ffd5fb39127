"""
Типизированные исключения для netcfg.

Иерархия:
    NetcfgError (базовый)
    ├── CollectorError (работа с устройством)
    │   ├── ConnectionError (SSH подключение)
    │   ├── AuthenticationError (авторизация)
    │   ├── TimeoutError (таймаут подключения)
    │   │   └── SessionTimeoutError (таймаут удалённой сессии)
    │   ├── CommandError (запуск shell / отправка команды)
    │   │   ├── RemoteExitError (сессия завершилась с кодом != 0)
    │   │   └── ExitStatusMissingError (сессия завершилась без кода)
    │   └── ProbeError (SNMP опрос)
    └── ConfigError (конфигурация, фатальные ошибки запуска)

Ошибки CollectorError относятся к одному хосту и никогда не прерывают
весь запуск. ConfigError прерывает запуск до рассылки команд.

Пример использования:
    from netcfg.core.exceptions import SessionTimeoutError

    try:
        output = runner.run(connection, commands)
    except SessionTimeoutError as e:
        logger.error(f"{e.device}: {e.message}")
"""

from typing import Optional


class NetcfgError(Exception):
    """
    Базовое исключение для всех ошибок netcfg.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Ошибки работы с устройством ===

class CollectorError(NetcfgError):
    """
    Ошибка при работе с одним устройством.

    Attributes:
        device: IP или hostname устройства
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.device = device
        details = details or {}
        if device:
            details["device"] = device
        super().__init__(message, details)


class ConnectionError(CollectorError):
    """
    Ошибка SSH подключения.

    Пример:
        raise ConnectionError("connection refused", device="192.168.1.1", port=22)
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        port: int = 22,
        details: Optional[dict] = None,
    ):
        self.port = port
        details = details or {}
        details["port"] = port
        super().__init__(message, device, details)


class AuthenticationError(CollectorError):
    """Ошибка аутентификации (неверный логин/пароль/ключ)."""
    pass


class TimeoutError(CollectorError):
    """
    Таймаут при подключении или выполнении команд.

    Attributes:
        timeout: Значение таймаута в секундах
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        timeout: Optional[float] = None,
        details: Optional[dict] = None,
    ):
        self.timeout = timeout
        details = details or {}
        if timeout:
            details["timeout"] = timeout
        super().__init__(message, device, details)


class SessionTimeoutError(TimeoutError):
    """
    Удалённая сессия не завершилась за отведённое время.

    Пример:
        raise SessionTimeoutError("session timed out after 10s", timeout=10)
    """
    pass


class CommandError(CollectorError):
    """
    Ошибка запуска shell или отправки команды.

    Attributes:
        command: Команда которая вызвала ошибку (если известна)
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        command: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.command = command
        details = details or {}
        if command:
            details["command"] = command
        super().__init__(message, device, details)


class RemoteExitError(CommandError):
    """
    Сессия завершилась с явным ненулевым кодом.

    Attributes:
        exit_status: Код завершения удалённой стороны
    """

    def __init__(
        self,
        exit_status: int,
        device: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.exit_status = exit_status
        details = details or {}
        details["exit_status"] = exit_status
        super().__init__(
            f"session exited with status {exit_status}",
            device=device,
            details=details,
        )


class ExitStatusMissingError(CommandError):
    """Сессия закрыта удалённой стороной без кода завершения."""

    def __init__(self, device: Optional[str] = None, details: Optional[dict] = None):
        super().__init__("session exited with no status", device=device, details=details)


class ProbeError(CollectorError):
    """
    Ошибка SNMP опроса.

    Никогда не выходит за пределы DeviceIdentifier: устройство
    просто считается неизвестным.
    """
    pass


# === Ошибки конфигурации ===

class ConfigError(NetcfgError):
    """
    Ошибка конфигурации или фатальная ошибка подготовки запуска.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("missing required field", config_file="run.yml", key="hosts")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, NetcfgError):
        if error.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in error.details.items())
            return f"{error.__class__.__name__}: {error.message} ({details_str})"
        return f"{error.__class__.__name__}: {error.message}"
    return f"{error.__class__.__name__}: {error}"
