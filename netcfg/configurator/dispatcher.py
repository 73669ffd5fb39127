"""
Параллельная рассылка команд по хостам.

Для каждого хоста в пуле потоков:
    подключение → идентификация → выбор команд → выполнение

Ошибка одного хоста превращается в HostResult с error и не влияет
на остальные. Запуск целиком прерывают только пустой список хостов
и пустой набор правил (ConfigError до начала рассылки).

Результаты отдаются в порядке завершения, а не в порядке списка.

Пример использования:
    dispatcher = ConfigDispatcher(credentials, rules, timeout=10)
    for result in dispatcher.iter_results(hosts):
        print(result.host, result.success)
"""

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterator, List, Optional, Sequence

from ..collectors.identity import DeviceIdentifier
from ..core.connection import ConnectionManager
from ..core.constants import (
    ACCEPT_ALL,
    DEFAULT_COMMUNITY,
    DEFAULT_SSH_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
)
from ..core.credentials import Credentials
from ..core.domain import select_commands
from ..core.exceptions import ConfigError, format_error_for_log
from ..core.logging import get_logger
from ..core.models import HostResult, Rule
from .session import SessionRunner

logger = get_logger(__name__)


def check_run(hosts: Sequence[str], rules: Sequence[Rule]) -> None:
    """
    Фатальные условия запуска.

    Raises:
        ConfigError: Пустой список хостов или пустой набор правил
    """
    if not hosts:
        raise ConfigError("no hosts to configure", key="hosts")
    if not rules:
        raise ConfigError("no rules with commands", key="config")


class ConfigDispatcher:
    """
    Координатор параллельной рассылки.

    Attributes:
        credentials: Учётные данные (общие для всех хостов)
        rules: Правила в порядке объявления
        timeout: Таймаут подключения и сессии (секунды)
        port: SSH порт
        max_workers: Размер пула (cpu_count() * workers)

    Example:
        dispatcher = ConfigDispatcher(creds, rules, timeout=10, workers=2)
        results = dispatcher.run(["10.0.0.1", "10.0.0.2"])
    """

    def __init__(
        self,
        credentials: Credentials,
        rules: Sequence[Rule],
        timeout: float = DEFAULT_TIMEOUT,
        community: str = DEFAULT_COMMUNITY,
        workers: int = DEFAULT_WORKERS,
        port: int = DEFAULT_SSH_PORT,
        accept: str = ACCEPT_ALL,
        connection_manager: Optional[ConnectionManager] = None,
        identifier: Optional[DeviceIdentifier] = None,
        runner: Optional[SessionRunner] = None,
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.credentials = credentials
        self.rules = tuple(rules)
        self.timeout = timeout
        self.port = port
        self.max_workers = (os.cpu_count() or 1) * workers
        self._conn_manager = connection_manager or ConnectionManager(accept=accept)
        self._identifier = identifier or DeviceIdentifier(
            community=community,
            probe_timeout=timeout,
        )
        self._runner = runner or SessionRunner(timeout=timeout)

    def iter_results(self, hosts: Sequence[str]) -> Iterator[HostResult]:
        """
        Обрабатывает хосты параллельно.

        Все хосты ставятся в очередь пула сразу. Поток результатов
        заканчивается после выхода всех воркеров.

        Проверки выполняются сразу при вызове, до запуска пула.

        Returns:
            Iterator[HostResult]: По одному на хост, в порядке завершения

        Raises:
            ConfigError: Пустой список хостов или пустой набор правил
        """
        hosts = list(hosts)
        check_run(hosts, self.rules)
        logger.info(f"Хостов: {len(hosts)}, правил: {len(self.rules)}, воркеров: {self.max_workers}")
        return self._dispatch(hosts)

    def _dispatch(self, hosts: List[str]) -> Iterator[HostResult]:
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(self._configure_host, host): host for host in hosts}

            for future in as_completed(futures):
                host = futures[future]
                try:
                    yield future.result()
                except Exception as e:
                    logger.error(f"Необработанная ошибка: {e}", device=host)
                    yield HostResult(host=host, error=f"unexpected error: {e}")

    def run(self, hosts: Sequence[str]) -> List[HostResult]:
        """Обрабатывает хосты и возвращает все результаты списком."""
        return list(self.iter_results(hosts))

    def _configure_host(self, host: str) -> HostResult:
        """
        Полный цикл обработки одного хоста.

        Подключение закрывается на любом пути выхода.
        """
        log = logger.bind(device=host)

        try:
            connection = self._conn_manager.dial(host, self.port, self.credentials, self.timeout)
        except Exception as e:
            log.warning(f"Не удалось подключиться: {e}")
            return HostResult(host=host, error=f"failed to dial {host}: {e}")

        try:
            identity = self._identifier.identify(connection.remote_address)
            log.debug(f"Идентификация: {identity}")

            outcome = select_commands(self.rules, identity)
            if not outcome.commands:
                log.warning("Нет подходящего правила")
                return HostResult(host=host, identity=identity, error="no commands to run")

            try:
                output = self._runner.run(connection, outcome.commands)
            except Exception as e:
                log.warning(f"Ошибка выполнения: {format_error_for_log(e)}")
                return HostResult(
                    host=host,
                    identity=identity,
                    error=f"failed to run commands: {e}",
                )

            log.info(f"Команды выполнены ({len(outcome.commands)})", vendor=identity.vendor)
            return HostResult(host=host, identity=identity, output=output)
        finally:
            try:
                connection.close()
            except Exception as e:
                log.warning(f"Не удалось закрыть подключение: {e}")
