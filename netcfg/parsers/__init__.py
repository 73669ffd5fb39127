"""
Парсеры netcfg.

- sys_descr: разбор SNMP sysDescr в Identity
- detectors: реестр детекторов вендоров
"""

from .detectors import (
    VendorDetector,
    CiscoDetector,
    HPDetector,
    JuniperDetector,
    AristaDetector,
    DetectorRegistry,
    build_default_registry,
    default_registry,
)
from .sys_descr import parse_sys_descr

__all__ = [
    "VendorDetector",
    "CiscoDetector",
    "HPDetector",
    "JuniperDetector",
    "AristaDetector",
    "DetectorRegistry",
    "build_default_registry",
    "default_registry",
    "parse_sys_descr",
]
