"""
Парсер SNMP sysDescr (1.3.6.1.2.1.1.1.0).

Двухуровневая классификация:
1. Вендор: первый детектор реестра, чьи признаки есть в тексте
2. Поля: детектор извлекает model/version/os своими шаблонами

Парсер тотальный: любой вход (пустой, чужой вендор, мусор)
даёт Identity, в худшем случае со всеми пустыми полями.

Пример использования:
    identity = parse_sys_descr("Cisco IOS Software, C2960S Software ...")
    print(identity.vendor, identity.model)  # CISCO C2960S
"""

import logging
from typing import Optional

from ..core.models import Identity
from .detectors import DetectorRegistry, default_registry

logger = logging.getLogger(__name__)


def parse_sys_descr(
    text: Optional[str],
    registry: Optional[DetectorRegistry] = None,
) -> Identity:
    """
    Разбирает sysDescr в Identity (без address/hostname).

    Args:
        text: Описание устройства из SNMP
        registry: Реестр детекторов (по умолчанию встроенный)

    Returns:
        Identity: Результат разбора, пустой если вендор не распознан
    """
    if not text:
        return Identity()

    registry = registry if registry is not None else default_registry
    detector = None
    try:
        detector = registry.find(text)
        if detector is None:
            logger.debug(f"Вендор не распознан: {text[:60]!r}")
            return Identity()
        identity = detector.extract(text)
    except Exception as e:
        where = detector.name if detector is not None else "registry.find"
        logger.warning(f"Ошибка разбора описания ({where}): {e}")
        return Identity()

    # Детектор отвечает только за описание устройства
    return Identity(
        vendor=identity.vendor,
        os=identity.os,
        model=identity.model,
        version=identity.version,
    )
