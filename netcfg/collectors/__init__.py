"""
Сбор информации об устройствах.

- snmp: SNMP опрос sysDescr
- identity: идентификация устройства (DNS + SNMP + парсер)
"""

from .snmp import SnmpProbe
from .identity import DeviceIdentifier, reverse_lookup

__all__ = [
    "SnmpProbe",
    "DeviceIdentifier",
    "reverse_lookup",
]
