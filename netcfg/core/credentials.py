"""
Модуль управления учётными данными.

Пароль берётся из первого доступного источника:
1. Явно из конфигурации (поле pass)
2. Переменная окружения NETCFG_PASSWORD
3. Интерактивный ввод (getpass)

Если заданы SSH ключи, интерактивный ввод пропускается:
аутентификация пойдёт по ключам.

Пример использования:
    manager = CredentialsManager(username="admin", keys=["~/.ssh/id_rsa"])
    creds = manager.get_credentials()
"""

import logging
import os
from dataclasses import dataclass, field
from getpass import getpass
from typing import List, Optional

from .constants import ENV_PASSWORD
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """
    Учётные данные SSH, общие для всех хостов запуска.

    Attributes:
        username: Имя пользователя
        password: Пароль (None = только ключи)
        keys: Пути к приватным ключам
    """
    username: str
    password: Optional[str] = None
    keys: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        masked = "***" if self.password else None
        return f"Credentials(username={self.username!r}, password={masked!r}, keys={self.keys!r})"


class CredentialsManager:
    """
    Менеджер учётных данных.

    Example:
        manager = CredentialsManager(username="admin")
        creds = manager.get_credentials(interactive=False)
    """

    ENV_PASSWORD = ENV_PASSWORD

    def __init__(
        self,
        username: str,
        password: Optional[str] = None,
        keys: Optional[List[str]] = None,
    ):
        self.username = username
        self.keys = [os.path.expanduser(k) for k in (keys or [])]
        self._password = password
        self._credentials: Optional[Credentials] = None

    def get_credentials(self, interactive: bool = True) -> Credentials:
        """
        Получает учётные данные.

        Args:
            interactive: Разрешить запрос пароля через терминал

        Returns:
            Credentials: Учётные данные

        Raises:
            ConfigError: Нет ни пароля, ни ключей
        """
        if self._credentials:
            return self._credentials

        password = self._password
        if not password:
            password = os.getenv(self.ENV_PASSWORD)
            if password:
                logger.info(f"Пароль взят из переменной окружения {self.ENV_PASSWORD}")

        if not password and not self.keys:
            if not interactive:
                raise ConfigError(
                    f"Нет пароля: укажите pass в конфигурации, {self.ENV_PASSWORD} или ключи",
                    key="pass",
                )
            password = self._prompt_password()

        self._credentials = Credentials(
            username=self.username,
            password=password or None,
            keys=list(self.keys),
        )
        return self._credentials

    def _prompt_password(self) -> str:
        return getpass(f"Пароль для {self.username}: ")
