"""
Утилиты CLI.

Общие функции для команд CLI.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import build_rules, load_config, load_hosts, resolve_hosts_path
from ..core.config_schema import LoggingConfig, RunConfig
from ..core.credentials import Credentials, CredentialsManager
from ..core.exceptions import ConfigError
from ..core.logging import LogConfig, setup_logging_from_config
from ..core.models import Rule

logger = logging.getLogger(__name__)


def setup_cli_logging(verbose: bool = False, logging_config: Optional[LoggingConfig] = None) -> None:
    """
    Настраивает логирование.

    Приоритет уровня: -v флаг > секция logging конфигурации > INFO.
    """
    data = logging_config.model_dump() if logging_config else {}
    log_config = LogConfig.from_dict(data)
    if verbose:
        log_config.level = logging.DEBUG
    setup_logging_from_config(log_config)


@dataclass
class RunPlan:
    """Всё, что нужно для запуска: конфигурация, хосты, правила."""
    config_path: str
    config: RunConfig
    hosts: List[str]
    rules: Tuple[Rule, ...]
    community: str
    workers: int


def prepare_run(args) -> RunPlan:
    """
    Загружает конфигурацию и список хостов с учётом флагов CLI.

    Raises:
        ConfigError: Ошибка конфигурации или файла хостов
    """
    config = load_config(args.config)
    setup_cli_logging(verbose=getattr(args, "verbose", False), logging_config=config.logging)

    hosts = load_hosts(resolve_hosts_path(config, args.config))
    rules = build_rules(config)

    community = args.community if args.community is not None else config.community
    workers = args.workers if args.workers is not None else config.workers
    if workers < 1:
        raise ConfigError(f"workers must be at least 1, got {workers}", config_file=str(args.config), key="workers")

    return RunPlan(
        config_path=str(args.config),
        config=config,
        hosts=hosts,
        rules=rules,
        community=community,
        workers=workers,
    )


def get_credentials(config: RunConfig, interactive: bool = True) -> Credentials:
    """Учётные данные из конфигурации, окружения или терминала."""
    manager = CredentialsManager(
        username=config.user,
        password=config.password,
        keys=config.keys,
    )
    return manager.get_credentials(interactive=interactive)


def print_plan(plan: RunPlan) -> None:
    """Выводит план запуска для --dry-run."""
    print(f"Config: {Path(plan.config_path).name}")
    print(f"Hosts: {len(plan.hosts)}")
    print(f"Rules: {len(plan.rules)}")
    for index, rule in enumerate(plan.rules, 1):
        print(f"\n[{index}] {rule.selector()}")
        for command in rule.commands:
            print(f"    {command}")
