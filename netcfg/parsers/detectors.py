"""
Детекторы вендоров для разбора SNMP sysDescr.

Каждый детектор - независимый модуль:
- matches(text): есть ли в описании признаки вендора
- extract(text): vendor/os/model/version из описания

Новый вендор добавляется регистрацией детектора в реестре,
без изменений в выборе команд или рассылке.

Пример добавления:
    class MikrotikDetector(VendorDetector):
        name = "mikrotik"
        cues = ("RouterOS",)

        def extract(self, text):
            return Identity(vendor="MIKROTIK", os="RouterOS")

    default_registry.register(MikrotikDetector())
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..core.models import Identity

logger = logging.getLogger(__name__)


def _find(pattern: "re.Pattern", text: str) -> str:
    """Первое совпадение или пустая строка."""
    match = pattern.search(text)
    return match.group(0) if match else ""


class VendorDetector(ABC):
    """
    Базовый класс детектора вендора.

    Attributes:
        name: Имя детектора (для логов)
        cues: Подстроки-признаки вендора (регистр важен)
    """

    name: str = ""
    cues: Tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        """Проверяет наличие признаков вендора."""
        return any(cue in text for cue in self.cues)

    @abstractmethod
    def extract(self, text: str) -> Identity:
        """
        Извлекает vendor/os/model/version.

        Args:
            text: sysDescr устройства

        Returns:
            Identity: Без address/hostname
        """


# =============================================================================
# CISCO (IOS, IOS XE, IOS XR, NX-OS)
# =============================================================================

# C2960S, cat4500e, CAT3K_CAA, n6000, s72033_rp, ASR9K
CISCO_MODEL = (
    r"(([CATcat]{1,3}|[Nn]|[Mm]|[CGRcgr]{3})(\d{4}\w?|\d\w_\w*)"
    r"|(ASR|ISR|CSR|NCS)\d{1,4}\w?"
    r"|\w?\d*_rp)"
)
# C2960S-UNIVERSALK9-M, s72033_rp-ADVENTERPRISEK9_WAN-M, n6000-uk9
CISCO_SOFTWARE = CISCO_MODEL + r"(-(\w*[Kk]9|Y|I)([-_]([WANwan-]*)?[Mm][Zz]?)?)"
# Version 15.0(2)SE10a, RELEASE SOFTWARE (fc3)
CISCO_VERSION = (
    r"(Version (\(?(\d{1,2}|\w{1,2})\)?\.?)*)([\[(].*[\])])?(,?\s?)"
    r"(RELEASE SOFTWARE (\(.*\)))?"
)


class CiscoDetector(VendorDetector):
    """Cisco IOS / IOS XE / IOS XR / NX-OS."""

    name = "cisco"
    cues = ("Cisco",)

    _model = re.compile(CISCO_MODEL)
    _software = re.compile(CISCO_SOFTWARE)
    _version = re.compile(CISCO_VERSION)

    def extract(self, text: str) -> Identity:
        software = _find(self._software, text)
        # Запятые в строке версии мешают сравнению в правилах
        version = _find(self._version, text).replace(",", "")
        return Identity(
            vendor="CISCO",
            os=self._detect_os(text),
            model=_find(self._model, text),
            version=f"{software} {version}".strip(),
        )

    @staticmethod
    def _detect_os(text: str) -> str:
        if "IOS" in text:
            if "IOS XR" in text or "IOS-XR" in text:
                return "IOS XR"
            if "IOS XE" in text or "IOS-XE" in text:
                return "IOS XE"
            return "IOS"
        if "NX OS" in text or "NX-OS" in text:
            return "NX-OS"
        return ""


# =============================================================================
# HP / HPE (Comware, ProCurve)
# =============================================================================

HP_MODEL = r"(HP|HPE|ProCurve).*Switch\s?\w*,?"
COMWARE_VERSION = r"Software\sVersion\s(\d{1,3}\.?)*,?\s?Release\s\d{4}"
PROCURVE_VERSION = r"revision [A-Z]{1,2}(\.[0-9]{2,4})*,?\s?ROM [A-Z]{1,2}(\.[0-9]{2,4})*"


class HPDetector(VendorDetector):
    """HP / HPE Comware и ProCurve."""

    name = "hp"
    cues = ("Hewlett Packard", "HP", "ProCurve")

    _model = re.compile(HP_MODEL)
    _comware_version = re.compile(COMWARE_VERSION)
    _procurve_version = re.compile(PROCURVE_VERSION)

    def extract(self, text: str) -> Identity:
        os_name = ""
        version = ""
        if "Comware" in text:
            os_name = "Comware"
            version = _find(self._comware_version, text)
        elif "ProCurve" in text:
            os_name = "ProCurve"
            version = _find(self._procurve_version, text)
        return Identity(
            vendor="HP",
            os=os_name,
            model=_find(self._model, text),
            version=version,
        )


# =============================================================================
# JUNIPER / ARISTA
# =============================================================================

class JuniperDetector(VendorDetector):
    """
    Juniper JUNOS.

    Пример sysDescr:
        Juniper Networks, Inc. ex4300-48p Ethernet Switch, kernel JUNOS 18.4R2-S3.1, ...
    """

    name = "juniper"
    cues = ("Juniper",)

    _model = re.compile(r"Inc\.\s+([\w-]+)")
    _version = re.compile(r"JUNOS\s+([\w.-]+)")

    def extract(self, text: str) -> Identity:
        model = self._model.search(text)
        version = self._version.search(text)
        return Identity(
            vendor="JUNIPER",
            os="JUNOS" if "JUNOS" in text else "",
            model=model.group(1) if model else "",
            version=version.group(1) if version else "",
        )


class AristaDetector(VendorDetector):
    """
    Arista EOS.

    Пример sysDescr:
        Arista Networks EOS version 4.22.1F running on an Arista Networks DCS-7050SX-64
    """

    name = "arista"
    cues = ("Arista",)

    _model = re.compile(r"running on an? Arista Networks\s+(\S+)")
    _version = re.compile(r"EOS version\s+([\w.]+)")

    def extract(self, text: str) -> Identity:
        model = self._model.search(text)
        version = self._version.search(text)
        return Identity(
            vendor="ARISTA",
            os="EOS" if "EOS" in text else "",
            model=model.group(1) if model else "",
            version=version.group(1) if version else "",
        )


# =============================================================================
# РЕЕСТР
# =============================================================================

class DetectorRegistry:
    """
    Упорядоченный реестр детекторов.

    Побеждает первый детектор, признаки которого найдены в описании,
    поэтому порядок регистрации важен.

    Example:
        registry = DetectorRegistry([CiscoDetector(), HPDetector()])
        detector = registry.find("Cisco IOS Software, ...")
    """

    def __init__(self, detectors: Optional[List[VendorDetector]] = None):
        self._detectors: List[VendorDetector] = list(detectors or [])

    def register(self, detector: VendorDetector, first: bool = False) -> None:
        """
        Регистрирует детектор.

        Args:
            detector: Детектор вендора
            first: Проверять раньше уже зарегистрированных
        """
        if first:
            self._detectors.insert(0, detector)
        else:
            self._detectors.append(detector)
        logger.debug(f"Зарегистрирован детектор вендора: {detector.name}")

    def find(self, text: str) -> Optional[VendorDetector]:
        """Возвращает первый подходящий детектор."""
        for detector in self._detectors:
            if detector.matches(text):
                return detector
        return None

    @property
    def names(self) -> List[str]:
        return [d.name for d in self._detectors]

    def __len__(self) -> int:
        return len(self._detectors)


def build_default_registry() -> DetectorRegistry:
    """Реестр со всеми встроенными детекторами."""
    return DetectorRegistry([
        CiscoDetector(),
        HPDetector(),
        JuniperDetector(),
        AristaDetector(),
    ])


default_registry = build_default_registry()
