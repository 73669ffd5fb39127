"""
Модуль SSH подключений через paramiko.

ConnectionManager открывает SSH транспорт к устройству.
ShellConnection выдаёт сессии, ShellSession - один удалённый
интерактивный shell: команды пишутся построчно в stdin, вывод
копится в буфер до закрытия канала удалённой стороной.

Пример использования:
    manager = ConnectionManager()
    connection = manager.dial("10.0.0.1", 22, credentials, timeout=10)
    try:
        session = connection.new_session()
        session.shell()
        session.write_line("show version")
        session.write_line("exit")
        session.wait()
        print(session.output)
    finally:
        connection.close()
"""

import logging
import socket
from typing import Optional

import paramiko

from .constants import ACCEPT_ALL, ACCEPT_KNOWN_HOSTS, DEFAULT_SSH_PORT, DEFAULT_TIMEOUT
from .credentials import Credentials
from .exceptions import (
    AuthenticationError,
    CommandError,
    ConnectionError as CollectorConnectionError,
    ExitStatusMissingError,
    RemoteExitError,
    TimeoutError as CollectorTimeoutError,
)

logger = logging.getLogger(__name__)

# Размер блока чтения из канала
RECV_CHUNK = 32768


class ShellSession:
    """
    Удалённый интерактивный shell поверх SSH канала.

    Attributes:
        output: Накопленный вывод (stdout и stderr канала)
    """

    def __init__(self, channel: paramiko.Channel, device: Optional[str] = None):
        self._channel = channel
        self._device = device
        self._buffer = bytearray()

    def shell(self) -> None:
        """Запускает shell на удалённой стороне (без pty)."""
        self._channel.set_combine_stderr(True)
        self._channel.invoke_shell()

    def write_line(self, line: str) -> None:
        """Отправляет строку с переводом строки в stdin shell."""
        self._channel.sendall((line + "\n").encode("utf-8"))

    def wait(self) -> None:
        """
        Блокируется до закрытия shell удалённой стороной.

        Raises:
            RemoteExitError: Явный ненулевой код завершения
            ExitStatusMissingError: Канал закрыт без кода завершения
        """
        while True:
            try:
                chunk = self._channel.recv(RECV_CHUNK)
            except socket.timeout:
                continue
            if not chunk:
                break
            self._buffer.extend(chunk)

        status = self._channel.recv_exit_status()
        if status == -1:
            raise ExitStatusMissingError(device=self._device)
        if status != 0:
            raise RemoteExitError(status, device=self._device)

    @property
    def output(self) -> bytes:
        return bytes(self._buffer)

    def close(self) -> None:
        self._channel.close()


class ShellConnection:
    """Открытое SSH подключение к одному устройству."""

    def __init__(self, client: paramiko.SSHClient, host: str):
        self._client = client
        self.host = host

    @property
    def remote_address(self) -> str:
        """IP-адрес удалённой стороны (после разрешения имени)."""
        transport = self._client.get_transport()
        if transport is None:
            return self.host
        return transport.getpeername()[0]

    def new_session(self) -> ShellSession:
        """
        Открывает новый канал сессии.

        Raises:
            CommandError: Транспорт закрыт или канал не открылся
        """
        transport = self._client.get_transport()
        if transport is None or not transport.is_active():
            raise CommandError("ssh transport is not active", device=self.host)
        try:
            channel = transport.open_session()
        except (paramiko.SSHException, OSError) as e:
            raise CommandError(f"failed to open session: {e}", device=self.host) from e
        return ShellSession(channel, device=self.host)

    def close(self) -> None:
        self._client.close()
        logger.debug(f"Отключено от {self.host}")


class ConnectionManager:
    """
    Менеджер SSH подключений.

    Attributes:
        accept: Политика ключей хостов (all | known_hosts)

    Example:
        manager = ConnectionManager(accept="known_hosts")
        connection = manager.dial("switch-01", 22, credentials, timeout=10)
    """

    def __init__(self, accept: str = ACCEPT_ALL):
        if accept not in (ACCEPT_ALL, ACCEPT_KNOWN_HOSTS):
            raise ValueError(f"unknown host key policy: {accept}")
        self.accept = accept

    def _new_client(self) -> paramiko.SSHClient:
        client = paramiko.SSHClient()
        if self.accept == ACCEPT_KNOWN_HOSTS:
            client.load_system_host_keys()
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        return client

    def dial(
        self,
        host: str,
        port: int = DEFAULT_SSH_PORT,
        credentials: Optional[Credentials] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> ShellConnection:
        """
        Устанавливает SSH подключение.

        Args:
            host: Имя или IP устройства
            port: SSH порт
            credentials: Учётные данные
            timeout: Таймаут подключения и аутентификации (секунды)

        Returns:
            ShellConnection: Открытое подключение

        Raises:
            AuthenticationError: Неверные учётные данные
            TimeoutError: Таймаут подключения
            ConnectionError: Прочие ошибки подключения
        """
        if credentials is None:
            raise AuthenticationError("no credentials", device=host)

        client = self._new_client()
        logger.debug(f"Подключение к {host}:{port}...")
        try:
            client.connect(
                hostname=host,
                port=port,
                username=credentials.username,
                password=credentials.password,
                key_filename=credentials.keys or None,
                look_for_keys=False,
                allow_agent=False,
                timeout=timeout,
                banner_timeout=timeout,
                auth_timeout=timeout,
            )
        except paramiko.AuthenticationException as e:
            client.close()
            raise AuthenticationError(f"authentication failed: {e}", device=host) from e
        except (socket.timeout, TimeoutError) as e:
            client.close()
            raise CollectorTimeoutError(
                f"connection timed out after {timeout:g}s",
                device=host,
                timeout=timeout,
            ) from e
        except (paramiko.SSHException, OSError) as e:
            client.close()
            raise CollectorConnectionError(str(e) or e.__class__.__name__, device=host, port=port) from e

        logger.debug(f"Подключено к {host}:{port}")
        return ShellConnection(client, host)
