"""
Идентификация устройства.

Собирает Identity из двух независимых источников:
- Обратный DNS → hostname
- SNMP sysDescr → vendor/os/model/version (через parse_sys_descr)

Ни один из источников не может уронить обработку хоста:
при любой ошибке соответствующие поля остаются пустыми, а устройство
считается неизвестным (дальше сработает generic правило или "no match").

Пример использования:
    identifier = DeviceIdentifier(community="public")
    identity = identifier.identify("10.0.0.1")
    print(identity)
"""

import logging
import socket
from dataclasses import replace
from typing import Callable, Optional

from ..core.constants import DEFAULT_COMMUNITY, DEFAULT_PROBE_TIMEOUT
from ..core.exceptions import format_error_for_log
from ..core.models import Identity
from ..parsers import DetectorRegistry, parse_sys_descr
from .snmp import SnmpProbe

logger = logging.getLogger(__name__)


def reverse_lookup(address: str) -> str:
    """
    Обратное разрешение имени.

    Returns:
        str: Hostname (без завершающей точки)

    Raises:
        OSError: Имя не найдено
    """
    hostname, _aliases, _addresses = socket.gethostbyaddr(address)
    return hostname.rstrip(".")


class DeviceIdentifier:
    """
    Определяет Identity устройства по его адресу.

    Attributes:
        community: SNMP community
        probe_timeout: Таймаут SNMP опроса (секунды)

    Example:
        identifier = DeviceIdentifier(community="s3cret", probe_timeout=2)
        identity = identifier.identify("10.0.0.1")
    """

    def __init__(
        self,
        community: str = DEFAULT_COMMUNITY,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        probe: Optional[SnmpProbe] = None,
        resolver: Optional[Callable[[str], str]] = None,
        registry: Optional[DetectorRegistry] = None,
    ):
        """
        Args:
            community: SNMP community
            probe_timeout: Таймаут SNMP опроса
            probe: SNMP транспорт (по умолчанию SnmpProbe)
            resolver: Функция обратного DNS (по умолчанию reverse_lookup)
            registry: Реестр детекторов вендоров
        """
        self.community = community
        self.probe_timeout = probe_timeout
        self._probe = probe or SnmpProbe()
        self._resolver = resolver or reverse_lookup
        self._registry = registry

    def identify(self, address: str) -> Identity:
        """
        Идентифицирует устройство. Никогда не выбрасывает исключений.

        Args:
            address: IP-адрес устройства

        Returns:
            Identity: С заполненными address/hostname и тем, что удалось узнать
        """
        hostname = self._lookup_hostname(address)
        description = self._fetch_description(address)
        identity = parse_sys_descr(description, self._registry)
        identity = replace(identity, address=address, hostname=hostname)

        if identity.is_known:
            logger.debug(f"{address}: {identity.vendor} {identity.os} {identity.model}".rstrip())
        else:
            logger.debug(f"{address}: устройство не опознано")
        return identity

    def _lookup_hostname(self, address: str) -> str:
        try:
            return self._resolver(address)
        except Exception as e:
            logger.debug(f"{address}: обратный DNS не удался: {e}")
            return ""

    def _fetch_description(self, address: str) -> str:
        try:
            return self._probe.probe(address, self.community, self.probe_timeout)
        except Exception as e:
            logger.warning(f"{address}: SNMP опрос не удался ({format_error_for_log(e)})")
            return ""
