"""
Выполнение набора команд в удалённом shell.

SessionRunner открывает сессию на уже установленном подключении,
запускает shell, пишет команды построчно и ждёт завершения shell
не дольше timeout секунд. Повторов нет: команды применяются
не более одного раза.

Ожидание идёт во вспомогательном потоке. По таймауту сессия
закрывается, что разблокирует этот поток.

Пример использования:
    runner = SessionRunner(timeout=10)
    output = runner.run(connection, ["terminal length 0", "show version", "exit"])
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Sequence

from ..core.constants import DEFAULT_TIMEOUT
from ..core.exceptions import CommandError, NetcfgError, SessionTimeoutError

logger = logging.getLogger(__name__)


class SessionRunner:
    """
    Запуск команд в одной удалённой сессии.

    Attributes:
        timeout: Максимальное время ожидания завершения shell (секунды)
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout

    def run(self, connection, commands: Sequence[str]) -> bytes:
        """
        Выполняет команды и возвращает вывод сессии.

        Args:
            connection: Открытое подключение (new_session())
            commands: Команды в порядке отправки

        Returns:
            bytes: Вывод удалённой сессии

        Raises:
            CommandError: Не удалось открыть shell или отправить команду
            RemoteExitError: Shell завершился с ненулевым кодом
            ExitStatusMissingError: Shell завершился без кода
            SessionTimeoutError: Shell не завершился за timeout
        """
        device = getattr(connection, "host", None)
        session = connection.new_session()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="netcfg-wait")
        try:
            try:
                session.shell()
            except NetcfgError:
                raise
            except Exception as e:
                raise CommandError(f"failed to start shell: {e}", device=device) from e

            for command in commands:
                try:
                    session.write_line(command)
                except Exception as e:
                    raise CommandError(
                        f"failed to send command: {e}",
                        device=device,
                        command=command,
                    ) from e
            logger.debug(f"{device}: отправлено команд: {len(commands)}")

            future = executor.submit(session.wait)
            try:
                future.result(timeout=self.timeout)
            except FutureTimeoutError:
                raise SessionTimeoutError(
                    f"session timed out after {self.timeout:g}s",
                    device=device,
                    timeout=self.timeout,
                ) from None

            return session.output
        finally:
            try:
                session.close()
            except Exception as e:
                logger.warning(f"{device}: не удалось закрыть сессию: {e}")
            executor.shutdown(wait=False)
