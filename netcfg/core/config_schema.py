"""
Pydantic схемы для валидации конфигурации запуска.

Валидация происходит при загрузке YAML документа.
Ошибки валидации выбрасывают ConfigError.

Пример использования:
    from netcfg.core.config_schema import validate_config

    data = yaml.safe_load(open("run.yml"))
    config = validate_config(data, config_file="run.yml")  # raises ConfigError
"""

import re
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from .constants import ACCEPT_ALL, DEFAULT_COMMUNITY, DEFAULT_TIMEOUT, DEFAULT_WORKERS
from .exceptions import ConfigError


_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Переводит длительность в секунды.

    Поддерживаются числа (секунды) и строки вида 10s, 250ms, 2m, 1h, 1m30s.

    Raises:
        ValueError: Некорректный формат
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    try:
        return float(text)
    except ValueError:
        pass

    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return total


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class RuleConfig(BaseModel):
    """
    Одно правило из списка config.

    Пустые селекторы - wildcard. cmds задаётся списком или словарём
    с числовыми ключами (результат слияния YAML алиасов через <<).
    """
    addr: str = ""
    hostname: str = ""
    vendor: str = ""
    os: str = ""
    models: List[str] = Field(default_factory=list)
    version: str = ""
    cmds: List[str] = Field(default_factory=list)

    @field_validator("addr", "hostname", "vendor", "os", "version", mode="before")
    @classmethod
    def coerce_selector(cls, v: Any) -> str:
        """Числа в YAML (version: 15) приводятся к строке."""
        return _to_text(v)

    @field_validator("models", mode="before")
    @classmethod
    def coerce_models(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, (str, int, float)):
            v = [v]
        return [_to_text(m) for m in v if _to_text(m)]

    @field_validator("cmds", mode="before")
    @classmethod
    def coerce_cmds(cls, v: Any) -> List[str]:
        """Словарь {0: cmd, 1: cmd} упорядочивается по ключу."""
        if v is None:
            return []
        if isinstance(v, dict):
            try:
                items = sorted(v.items(), key=lambda kv: int(kv[0]))
            except (TypeError, ValueError):
                raise PydanticCustomError(
                    "invalid_cmds_key",
                    "ключи cmds должны быть номерами позиций",
                )
            v = [cmd for _, cmd in items]
        elif isinstance(v, str):
            v = [v]
        if any(cmd is None for cmd in v):
            raise PydanticCustomError("empty_cmd", "пустая команда в cmds")
        return [str(cmd) for cmd in v]


class LoggingConfig(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    rotation: str = Field(default="size", pattern="^(size|time|none)$")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=1, le=100)
    when: str = "midnight"
    interval: int = Field(default=1, ge=1)

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class RunConfig(BaseModel):
    """Полная конфигурация запуска."""
    model_config = ConfigDict(populate_by_name=True)

    hosts: str
    user: str
    password: Optional[str] = Field(default=None, alias="pass")
    keys: List[str] = Field(default_factory=list)
    accept: str = Field(default=ACCEPT_ALL, pattern="^(all|known_hosts)$")
    timeout: float = DEFAULT_TIMEOUT
    community: str = DEFAULT_COMMUNITY
    workers: int = Field(default=DEFAULT_WORKERS, ge=1, le=64)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    aliases: Optional[Any] = None
    config: List[RuleConfig] = Field(default_factory=list)

    @field_validator("hosts", "user")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("blank", "значение не может быть пустым")
        return v.strip()

    @field_validator("password", mode="before")
    @classmethod
    def coerce_password(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("keys", mode="before")
    @classmethod
    def coerce_keys(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("timeout", mode="before")
    @classmethod
    def parse_timeout(cls, v: Any) -> float:
        if v is None:
            return DEFAULT_TIMEOUT
        try:
            seconds = parse_duration(v)
        except ValueError:
            raise PydanticCustomError(
                "invalid_duration",
                "ожидается длительность вида 10s, 250ms, 2m, 1h или число секунд",
            )
        if seconds <= 0:
            raise PydanticCustomError("non_positive_timeout", "timeout должен быть больше нуля")
        return seconds

    @field_validator("config", mode="before")
    @classmethod
    def coerce_rules(cls, v: Any) -> Any:
        return [] if v is None else v


def validate_config(config_dict: Any, config_file: Optional[str] = None) -> RunConfig:
    """
    Валидирует словарь конфигурации.

    Args:
        config_dict: Словарь из YAML
        config_file: Путь к файлу (для сообщения об ошибке)

    Returns:
        RunConfig: Валидированная конфигурация

    Raises:
        ConfigError: При ошибке валидации
    """
    if not isinstance(config_dict, dict):
        raise ConfigError(
            "Ошибка валидации конфигурации: ожидается YAML словарь",
            config_file=config_file,
        )
    try:
        return RunConfig(**config_dict)
    except Exception as e:
        error_msg = str(e)
        key = None
        if hasattr(e, "errors"):
            errors = e.errors()
            if errors:
                first_error = errors[0]
                key = ".".join(str(x) for x in first_error.get("loc", []))
                msg = first_error.get("msg", "Unknown error")
                error_msg = f"{key}: {msg}"

        raise ConfigError(
            message=f"Ошибка валидации конфигурации: {error_msg}",
            config_file=config_file,
            key=key or None,
        ) from e
