"""
Pytest configuration и общие fixtures для тестов.

Предоставляет fake-транспорты вместо реальных устройств:
- FakeSession: удалённый shell с заданным поведением
- FakeConnection / FakeConnectionManager: SSH подключения
- FakeProbe: SNMP опрос с заданными ответами
- SYS_DESCR: примеры sysDescr реальных устройств
"""

import logging
import threading
from typing import Dict, List, Optional, Union

import pytest

from netcfg.core.credentials import Credentials
from netcfg.core.exceptions import (
    ConnectionError as CollectorConnectionError,
    ExitStatusMissingError,
    ProbeError,
    RemoteExitError,
)
from netcfg.core.logging import HumanFormatter, JSONFormatter
from netcfg.core.models import Rule


SYS_DESCR = {
    "cisco_c2960s": (
        "Cisco IOS Software, C2960S Software (C2960S-UNIVERSALK9-M), Version 15.0(2)SE10a, "
        "RELEASE SOFTWARE (fc3)\nTechnical Support: http://www.cisco.com/techsupport\n"
        "Copyright (c) 1986-2016 by Cisco Systems, Inc.\nCompiled Thu 03-Nov-16 13:52 by prod_rel_team"
    ),
    "cisco_s72033": (
        "Cisco IOS Software, s72033_rp Software (s72033_rp-ADVENTERPRISEK9_WAN-M), "
        "Version 12.2(33)SXJ10, RELEASE SOFTWARE (fc3)\n"
        "Technical Support: http://www.cisco.com/techsupport\n"
        "Copyright (c) 1986-2015 by Cisco Systems, Inc.\nCompiled Fri 13-Nov-15 02:42 by prod_rel_team"
    ),
    "cisco_cat3k": (
        "Cisco IOS Software, IOS-XE Software, Catalyst L3 Switch Software (CAT3K_CAA-UNIVERSALK9-M), "
        "Version 03.06.06.E RELEASE SOFTWARE (fc1)\n"
        "Technical Support: http://www.cisco.com/techsupport\n"
        "Copyright (c) 1986-2016 by Cisco Systems, Inc.\nCompiled Sat 17-Dec-"
    ),
    "cisco_cat4500": (
        "Cisco IOS Software, IOS-XE Software, Catalyst 4500 L3 Switch Software (cat4500e-UNIVERSALK9-M), "
        "Version 03.04.00.SG RELEASE SOFTWARE (fc3)\n"
        "Technical Support: http://www.cisco.com/techsupport\n"
        "Copyright (c) 1986-2012 by Cisco Systems, Inc.\nCompiled Tue 28-Aug-12 15:57 by p"
    ),
    "cisco_n6000": (
        "Cisco NX-OS(tm) n6000, Software (n6000-uk9), Version 7.1(1)N1(1), RELEASE SOFTWARE "
        "Copyright (c) 2002-2012 by Cisco Systems, Inc. Device Manager Version 6.0(2)N1(1),"
        "Compiled 4/18/2015 10:00:00"
    ),
    "cisco_asr9k": (
        "Cisco IOS XR Software (Cisco ASR9K Series),  Version 5.3.4[Default]\n"
        "Copyright (c) 2016 by Cisco Systems, Inc."
    ),
    "hp_comware": (
        "HPE Comware Platform Software, Software Version 7.1.070, Release 1309\n"
        "HPE 5130 48G PoE+ 4SFP+ 1-slot HI Switch JH326A\n"
        "Copyright (c) 2010-2017 Hewlett Packard Enterprise Development LP"
    ),
    "hp_procurve": (
        "ProCurve J9145A 2910al-24G Switch, revision W.14.03, ROM W.14.04 "
        "(/sw/code/build/sbm(t4a_RC3))"
    ),
    "juniper_ex4300": (
        "Juniper Networks, Inc. ex4300-48p Ethernet Switch, kernel JUNOS 18.4R2-S3.1, "
        "Build date: 2019-10-31 18:23:14 UTC Copyright (c) 1996-2019 Juniper Networks, Inc."
    ),
    "arista_7050": "Arista Networks EOS version 4.22.1F running on an Arista Networks DCS-7050SX-64",
    "netapp": "NetApp Release 9.1P5: Thu Jun 15 00:31:56 UTC 2017",
}


class FakeSession:
    """
    Fake удалённого shell.

    Args:
        output: Что вернёт сессия в output
        exit_status: 0 успех, -1 нет кода, иное - ненулевой код
        hang: wait() блокируется до close()
        shell_error: Исключение при shell()
        write_error: Исключение при write_line()
    """

    def __init__(
        self,
        output: bytes = b"",
        exit_status: int = 0,
        hang: bool = False,
        shell_error: Optional[Exception] = None,
        write_error: Optional[Exception] = None,
    ):
        self._output = output
        self.exit_status = exit_status
        self.hang = hang
        self.shell_error = shell_error
        self.write_error = write_error
        self.lines: List[str] = []
        self.shell_started = False
        self.closed = threading.Event()

    def shell(self) -> None:
        if self.shell_error:
            raise self.shell_error
        self.shell_started = True

    def write_line(self, line: str) -> None:
        if self.write_error:
            raise self.write_error
        self.lines.append(line)

    def wait(self) -> None:
        if self.hang:
            self.closed.wait(timeout=5)
            raise ExitStatusMissingError()
        if self.exit_status == -1:
            raise ExitStatusMissingError()
        if self.exit_status != 0:
            raise RemoteExitError(self.exit_status)

    @property
    def output(self) -> bytes:
        return self._output

    def close(self) -> None:
        self.closed.set()


class FakeConnection:
    """Fake SSH подключения: выдаёт заранее заданную сессию."""

    def __init__(self, host: str, session: Optional[FakeSession] = None, remote_address: Optional[str] = None):
        self.host = host
        self.session = session or FakeSession()
        self.remote_address = remote_address or host
        self.sessions_opened = 0
        self.closed = False

    def new_session(self) -> FakeSession:
        self.sessions_opened += 1
        return self.session

    def close(self) -> None:
        self.closed = True


class FakeConnectionManager:
    """
    Fake ConnectionManager.

    Args:
        targets: host → FakeConnection или исключение для dial()
    """

    def __init__(self, targets: Dict[str, Union[FakeConnection, Exception]]):
        self.targets = targets
        self.dialed: List[str] = []
        self._lock = threading.Lock()

    def dial(self, host, port=22, credentials=None, timeout=10):
        with self._lock:
            self.dialed.append(host)
        target = self.targets.get(host)
        if target is None:
            raise CollectorConnectionError("connection refused", device=host, port=port)
        if isinstance(target, Exception):
            raise target
        return target


class FakeProbe:
    """
    Fake SNMP опроса.

    Args:
        answers: address → sysDescr; отсутствующий адрес = ProbeError
    """

    def __init__(self, answers: Dict[str, str]):
        self.answers = answers
        self.calls: List[tuple] = []

    def probe(self, address: str, community: str, timeout: float) -> str:
        self.calls.append((address, community, timeout))
        if address not in self.answers:
            raise ProbeError("snmp error: No SNMP response received before timeout", device=address)
        return self.answers[address]


@pytest.fixture
def sys_descr() -> Dict[str, str]:
    """Примеры sysDescr."""
    return SYS_DESCR


@pytest.fixture
def credentials() -> Credentials:
    """Тестовые учётные данные."""
    return Credentials(username="admin", password="admin123")


@pytest.fixture
def rules():
    """Набор правил: generic первым (fallback), затем cisco по моделям и hp."""
    return (
        Rule(commands=("g1",)),
        Rule(vendor="cisco", os="ios", models=("c2960s", "c3650"), commands=("c1",)),
        Rule(vendor="hp", os="comware", commands=("h1",)),
    )


def no_resolver(address: str) -> str:
    """Обратный DNS, который всегда падает."""
    raise OSError("host not found")


@pytest.fixture
def fake_session():
    """
    Фабрика FakeSession.

    Usage:
        session = fake_session(output=b"ok")
        session = fake_session(hang=True)
    """
    return FakeSession


@pytest.fixture
def fake_connection():
    """Фабрика FakeConnection."""
    return FakeConnection


@pytest.fixture
def fake_manager():
    """Фабрика FakeConnectionManager."""
    return FakeConnectionManager


@pytest.fixture
def fake_probe():
    """Фабрика FakeProbe."""
    return FakeProbe


@pytest.fixture
def failing_resolver():
    """Обратный DNS без ответа."""
    return no_resolver


def pytest_configure(config):
    """Регистрация custom markers для pytest."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (быстрые, без внешних зависимостей)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (fake транспорты, пул потоков)"
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI перенастраивает root logger: убираем его handlers после теста."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (HumanFormatter, JSONFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
