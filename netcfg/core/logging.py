"""
Structured Logging для netcfg.

Консоль (stderr) всегда в human-readable формате. Опционально лог
дублируется в файл с ротацией, в JSON или human формате.

Логи пишутся в stderr, поэтому не смешиваются с блоками вывода
устройств в stdout.

Пример использования:
    from netcfg.core.logging import LogConfig, setup_logging_from_config, get_logger

    setup_logging_from_config(LogConfig(level=logging.DEBUG))

    logger = get_logger(__name__).bind(device="10.0.0.1")
    logger.info("Команды отправлены", vendor="CISCO")

Формат вывода (human):
    2026-10-19 10:30:15 - INFO     - Команды отправлены (device=10.0.0.1, vendor=CISCO)

Формат вывода (JSON):
    {"timestamp": "2026-10-19T10:30:15.123456", "level": "INFO",
     "message": "Команды отправлены", "logger": "netcfg.configurator.dispatcher",
     "device": "10.0.0.1", "vendor": "CISCO"}
"""

import json
import logging
import logging.handlers
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class RotationType(str, Enum):
    """Тип ротации логов."""
    SIZE = "size"
    TIME = "time"
    NONE = "none"


@dataclass
class LogConfig:
    """
    Конфигурация логирования.

    Attributes:
        level: Уровень логирования (logging.DEBUG, logging.INFO, ...)
        json_format: JSON формат файла логов (консоль всегда human)
        console: Выводить в консоль (stderr)
        file_path: Путь к файлу логов (None = без файла)
        rotation: Тип ротации (size, time, none)
        max_bytes: Макс размер файла для size-ротации
        backup_count: Количество backup файлов
        when: Интервал для time-ротации (S, M, H, D, midnight)
        interval: Частота ротации для time
    """
    level: int = logging.INFO
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    rotation: RotationType = RotationType.SIZE
    max_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5
    when: str = "midnight"
    interval: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        """Создаёт конфигурацию из словаря (секция logging конфига)."""
        rotation = data.get("rotation", "size")
        if isinstance(rotation, str):
            rotation = RotationType(rotation)

        level = data.get("level", "INFO")
        if isinstance(level, str):
            level = getattr(logging, level.upper(), logging.INFO)

        return cls(
            level=level,
            json_format=data.get("json_format", False),
            console=data.get("console", True),
            file_path=data.get("file_path"),
            rotation=rotation,
            max_bytes=data.get("max_bytes", 10 * 1024 * 1024),
            backup_count=data.get("backup_count", 5),
            when=data.get("when", "midnight"),
            interval=data.get("interval", 1),
        )


# Поля logging.LogRecord, которые не являются extra
_RESERVED_ATTRS = {
    "args", "asctime", "created", "exc_info", "exc_text",
    "filename", "funcName", "levelname", "levelno", "lineno",
    "module", "msecs", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName", "message",
}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Одна JSON-строка на запись, extra поля на верхнем уровне."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable форматтер с поддержкой extra полей.

    Формат: TIMESTAMP - LEVEL - MESSAGE (device=X, address=Y)

    Поля из PRIORITY_FIELDS идут первыми, остальные extra после них.
    """

    PRIORITY_FIELDS = ("device", "address", "vendor")

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        fields = _extra_fields(record)
        extras = []
        for attr in self.PRIORITY_FIELDS:
            value = fields.pop(attr, None)
            if value:
                extras.append(f"{attr}={value}")
        for attr, value in fields.items():
            if value is not None and value != "":
                extras.append(f"{attr}={value}")

        extra_str = f" ({', '.join(extras)})" if extras else ""
        result = f"{timestamp} - {level} - {message}{extra_str}"

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class StructuredLogger:
    """
    Обёртка над logging.Logger с именованными полями.

        logger.info("Подключено", device="switch-01", address="10.0.0.1")

    Вместо:
        logger.info("Подключено к switch-01 (10.0.0.1)")
    """

    def __init__(self, name: str, default_extra: Optional[Dict[str, Any]] = None):
        self._logger = logging.getLogger(name)
        self._default_extra = default_extra or {}

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        extra = {**self._default_extra, **kwargs}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log ERROR с traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """
        Создаёт новый логгер с дополнительными default полями.

        Example:
            host_logger = logger.bind(device="10.0.0.1")
            host_logger.info("Подключено")  # добавит device
        """
        return StructuredLogger(self._logger.name, default_extra={**self._default_extra, **kwargs})

    @property
    def name(self) -> str:
        return self._logger.name


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """
    Получает или создаёт StructuredLogger.

    Args:
        name: Имя логгера (обычно __name__)
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def _create_file_handler(
    file_path: str,
    rotation: RotationType,
    max_bytes: int,
    backup_count: int,
    when: str,
    interval: int,
) -> logging.Handler:
    """
    Создаёт file handler с ротацией.

    Директория файла создаётся при необходимости.
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    if rotation == RotationType.SIZE:
        return logging.handlers.RotatingFileHandler(
            filename=file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    elif rotation == RotationType.TIME:
        return logging.handlers.TimedRotatingFileHandler(
            filename=file_path,
            when=when,
            interval=interval,
            backupCount=backup_count,
            encoding="utf-8",
        )
    else:
        return logging.FileHandler(file_path, encoding="utf-8")


def setup_logging_from_config(config: LogConfig, stream: Any = None) -> None:
    """
    Настраивает root logger из конфигурации.

    Существующие handlers root logger'а удаляются.

    Args:
        config: LogConfig с настройками
        stream: Поток консольного вывода (по умолчанию sys.stderr)
    """
    if stream is None:
        stream = sys.stderr

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = []

    if config.console:
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(HumanFormatter())
        handlers.append(console_handler)

    if config.file_path:
        file_handler = _create_file_handler(
            file_path=config.file_path,
            rotation=config.rotation,
            max_bytes=config.max_bytes,
            backup_count=config.backup_count,
            when=config.when,
            interval=config.interval,
        )
        file_handler.setLevel(config.level)
        file_handler.setFormatter(JSONFormatter() if config.json_format else HumanFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    root_logger.setLevel(config.level)

    # paramiko очень многословен на DEBUG
    logging.getLogger("paramiko").setLevel(max(config.level, logging.WARNING))
