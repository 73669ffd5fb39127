"""
Загрузка конфигурации запуска.

YAML документ → RunConfig (pydantic) → набор Rule и список хостов.

Алиасы задаются стандартными средствами YAML (якоря & и слияние <<),
так что после yaml.safe_load они уже раскрыты.

Пример:
    config = load_config("run.yml")
    rules = build_rules(config)
    hosts = load_hosts(resolve_hosts_path(config, "run.yml"))
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

import yaml

from .core.config_schema import RunConfig, validate_config
from .core.exceptions import ConfigError
from .core.models import Rule

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_config(path: PathLike) -> RunConfig:
    """
    Читает и валидирует YAML конфигурацию.

    Raises:
        ConfigError: Файл не читается, YAML некорректен, схема не прошла
    """
    config_file = str(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Не удалось прочитать конфигурацию: {e}", config_file=config_file) from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Конфигурация не в кодировке UTF-8: {e}", config_file=config_file) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Ошибка разбора YAML: {e}", config_file=config_file) from e

    config = validate_config(data, config_file=config_file)
    logger.debug(f"Конфигурация загружена: {config_file} ({len(config.config)} правил)")
    return config


def resolve_hosts_path(config: RunConfig, config_path: PathLike) -> Path:
    """Относительный путь к файлу хостов считается от каталога конфигурации."""
    hosts = Path(config.hosts).expanduser()
    if hosts.is_absolute():
        return hosts
    return Path(config_path).parent / hosts


def load_hosts(path: PathLike) -> List[str]:
    """
    Читает список хостов: по одному на строку.

    Пробелы по краям обрезаются, пустые строки пропускаются.

    Raises:
        ConfigError: Файл не читается или не в UTF-8
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ConfigError(f"Не удалось прочитать список хостов: {e}", key="hosts") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Список хостов не в кодировке UTF-8: {e}", key="hosts") from e

    hosts = [line.strip() for line in lines if line.strip()]
    logger.debug(f"Загружено хостов: {len(hosts)} из {path}")
    return hosts


def build_rules(config: RunConfig) -> Tuple[Rule, ...]:
    """
    Строит упорядоченный набор правил в порядке объявления.

    Правила без команд пропускаются с предупреждением.
    """
    rules = []
    for index, entry in enumerate(config.config):
        rule = Rule(
            address=entry.addr,
            hostname=entry.hostname,
            vendor=entry.vendor,
            os=entry.os,
            models=tuple(entry.models),
            version=entry.version,
            commands=tuple(entry.cmds),
        )
        if not rule.commands:
            logger.warning(f"Правило #{index} ({rule.selector()}) без команд, пропущено")
            continue
        rules.append(rule)
    return tuple(rules)
