"""
SNMP опрос устройства.

Получает sysDescr.0 одним GET-запросом (SNMP v2c) через pysnmp.
pysnmp работает на asyncio, поэтому каждый опрос выполняется
в собственном event loop вызывающего потока.

Пример использования:
    probe = SnmpProbe()
    descr = probe.probe("10.0.0.1", community="public", timeout=5)
"""

import asyncio
import logging

from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    get_cmd,
)
from pysnmp.proto.rfc1902 import OctetString

from ..core.constants import SNMP_PORT, SYS_DESCR_OID
from ..core.exceptions import ProbeError

logger = logging.getLogger(__name__)


class SnmpProbe:
    """
    Одноразовый SNMP v2c опрос sysDescr.

    Attributes:
        port: UDP порт агента
        retries: Количество повторов запроса внутри pysnmp
    """

    def __init__(self, port: int = SNMP_PORT, retries: int = 0):
        self.port = port
        self.retries = retries

    def probe(self, address: str, community: str, timeout: float) -> str:
        """
        Получает sysDescr устройства.

        Args:
            address: IP-адрес устройства
            community: SNMP community
            timeout: Таймаут ожидания ответа (секунды)

        Returns:
            str: sysDescr (пустая строка если значение не строковое)

        Raises:
            ProbeError: Устройство недоступно, таймаут, ошибка протокола
        """
        logger.debug(f"SNMP GET sysDescr: {address}:{self.port}")
        try:
            return asyncio.run(self._get_sys_descr(address, community, timeout))
        except ProbeError:
            raise
        except Exception as e:
            raise ProbeError(f"snmp probe failed: {e}", device=address) from e

    async def _get_sys_descr(self, address: str, community: str, timeout: float) -> str:
        engine = SnmpEngine()
        try:
            target = await UdpTransportTarget.create(
                (address, self.port),
                timeout=timeout,
                retries=self.retries,
            )
            error_indication, error_status, error_index, var_binds = await get_cmd(
                engine,
                CommunityData(community, mpModel=1),
                target,
                ContextData(),
                ObjectType(ObjectIdentity(SYS_DESCR_OID)),
            )
        finally:
            engine.close_dispatcher()

        if error_indication:
            raise ProbeError(f"snmp error: {error_indication}", device=address)
        if error_status:
            raise ProbeError(
                f"snmp error: {error_status.prettyPrint()} at index {error_index}",
                device=address,
            )

        return self._first_string(var_binds)

    @staticmethod
    def _first_string(var_binds) -> str:
        """Первое значение типа OctetString из ответа."""
        for var_bind in var_binds:
            value = var_bind[1]
            if isinstance(value, OctetString):
                return str(value)
        return ""
