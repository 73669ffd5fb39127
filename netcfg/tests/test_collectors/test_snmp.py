"""Тесты SnmpProbe (pysnmp замокан)."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from pysnmp.proto.rfc1902 import Integer, OctetString

from netcfg.collectors.snmp import SnmpProbe
from netcfg.core.exceptions import ProbeError


@pytest.fixture
def mock_pysnmp():
    """Подменяет транспорт и get_cmd pysnmp."""
    with patch("netcfg.collectors.snmp.SnmpEngine") as engine_cls, \
            patch("netcfg.collectors.snmp.UdpTransportTarget") as target_cls, \
            patch("netcfg.collectors.snmp.get_cmd", new_callable=AsyncMock) as get_cmd:
        target_cls.create = AsyncMock(return_value=MagicMock())
        yield engine_cls, target_cls, get_cmd


@pytest.mark.unit
class TestSnmpProbe:
    def test_returns_sys_descr(self, mock_pysnmp):
        engine_cls, target_cls, get_cmd = mock_pysnmp
        var_binds = [(MagicMock(), OctetString("Cisco IOS Software, C2960S Software"))]
        get_cmd.return_value = (None, 0, 0, var_binds)

        result = SnmpProbe().probe("10.0.0.1", "public", timeout=3)

        assert result == "Cisco IOS Software, C2960S Software"
        target_cls.create.assert_awaited_once_with(("10.0.0.1", 161), timeout=3, retries=0)
        engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_error_indication(self, mock_pysnmp):
        engine_cls, _, get_cmd = mock_pysnmp
        get_cmd.return_value = ("No SNMP response received before timeout", 0, 0, [])

        with pytest.raises(ProbeError) as exc_info:
            SnmpProbe().probe("10.0.0.1", "public", timeout=1)

        assert "No SNMP response" in str(exc_info.value)
        engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_error_status(self, mock_pysnmp):
        _, _, get_cmd = mock_pysnmp
        status = MagicMock()
        status.__bool__.return_value = True
        status.prettyPrint.return_value = "noSuchName"
        get_cmd.return_value = (None, status, 1, [])

        with pytest.raises(ProbeError, match="noSuchName"):
            SnmpProbe().probe("10.0.0.1", "public", timeout=1)

    def test_non_string_value(self, mock_pysnmp):
        _, _, get_cmd = mock_pysnmp
        get_cmd.return_value = (None, 0, 0, [(MagicMock(), Integer(42))])

        assert SnmpProbe().probe("10.0.0.1", "public", timeout=1) == ""

    def test_transport_failure_wrapped(self, mock_pysnmp):
        engine_cls, target_cls, _ = mock_pysnmp
        target_cls.create.side_effect = OSError("name resolution failed")

        with pytest.raises(ProbeError, match="snmp probe failed"):
            SnmpProbe().probe("bad-host", "public", timeout=1)
        engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_custom_port(self, mock_pysnmp):
        _, target_cls, get_cmd = mock_pysnmp
        get_cmd.return_value = (None, 0, 0, [])

        SnmpProbe(port=1161, retries=2).probe("10.0.0.1", "public", timeout=1)

        target_cls.create.assert_awaited_once_with(("10.0.0.1", 1161), timeout=1, retries=2)
