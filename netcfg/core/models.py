"""
Data Models для netcfg.

Неизменяемые dataclasses, которые передаются между компонентами:
- Identity: кто это устройство (vendor/os/model/version + адрес и имя)
- Rule: селектор по полям Identity + список команд
- HostResult: итог обработки одного хоста

Использование:
    from netcfg.core.models import Identity, Rule

    identity = Identity(address="10.0.0.1", vendor="CISCO", model="C2960S")
    rule = Rule(vendor="cisco", models=("c2960s",), commands=("show version",))
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Tuple


# Поля, по которым Rule отбирает устройства (в порядке отображения)
SELECTOR_FIELDS: Tuple[str, ...] = ("address", "hostname", "vendor", "os", "model", "version")


@dataclass(frozen=True)
class Identity:
    """
    Идентификация устройства.

    Пустая строка в любом поле означает "неизвестно".

    Attributes:
        address: IP-адрес устройства
        hostname: Имя из обратного DNS
        vendor: Вендор (CISCO, HP, ...)
        os: Операционная система (IOS, IOS XE, Comware, ...)
        model: Модель (C2960S, n6000, ...)
        version: Строка версии ПО
    """
    address: str = ""
    hostname: str = ""
    vendor: str = ""
    os: str = ""
    model: str = ""
    version: str = ""

    @property
    def is_known(self) -> bool:
        """True если удалось определить хотя бы вендора."""
        return bool(self.vendor)

    def __str__(self) -> str:
        return (
            f"IP Addr: {self.address}, Hostname: {self.hostname}, "
            f"Vendor: {self.vendor}, OS: {self.os}, "
            f"Model: {self.model}, Version: {self.version}"
        )


@dataclass(frozen=True)
class Rule:
    """
    Правило выбора команд.

    Незаполненные поля - wildcard. Непустой models разворачивается
    в отдельное правило на каждую модель (см. expand()).

    Attributes:
        address: IP-адрес
        hostname: Hostname
        vendor: Вендор
        os: Операционная система
        models: Набор моделей (пустой = любая модель)
        version: Версия ПО
        commands: Команды в порядке отправки
    """
    address: str = ""
    hostname: str = ""
    vendor: str = ""
    os: str = ""
    models: Tuple[str, ...] = ()
    version: str = ""
    commands: Tuple[str, ...] = ()

    @property
    def model(self) -> str:
        """Модель одиночного правила (после expand())."""
        return self.models[0] if len(self.models) == 1 else ""

    @property
    def is_generic(self) -> bool:
        """Правило без единого заполненного селектора."""
        return not (
            self.address or self.hostname or self.vendor
            or self.os or self.version or self.models
        )

    def expand(self) -> Iterator["Rule"]:
        """
        Разворачивает правило по моделям.

        Yields:
            Rule: По одному правилу на модель (или само правило)
        """
        if len(self.models) <= 1:
            yield self
            return
        for model in self.models:
            yield replace(self, models=(model,))

    def selector(self) -> str:
        """Человекочитаемое описание селектора (для dry-run и логов)."""
        if self.is_generic:
            return "generic"
        parts = []
        for name in SELECTOR_FIELDS:
            if name == "model":
                value = ", ".join(self.models)
                name = "models" if len(self.models) > 1 else name
            else:
                value = getattr(self, name)
            if value:
                parts.append(f"{name}={value}")
        return " ".join(parts)


@dataclass(frozen=True)
class HostResult:
    """
    Результат обработки одного хоста.

    Attributes:
        host: Хост из списка хостов
        identity: Идентификация (None если до неё не дошло)
        output: Вывод удалённой сессии
        error: Описание ошибки (None при успехе)
    """
    host: str
    identity: Optional[Identity] = None
    output: bytes = b""
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def label(self) -> str:
        """Идентификация устройства или исходный хост."""
        return str(self.identity) if self.identity is not None else self.host


@dataclass
class RunSummary:
    """Итоги запуска."""
    succeeded: list = field(default_factory=list)
    failed: list = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "failed_hosts": list(self.failed),
        }
