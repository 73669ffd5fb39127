"""Тесты CredentialsManager."""

import pytest
from unittest.mock import patch

from netcfg.core.credentials import Credentials, CredentialsManager
from netcfg.core.exceptions import ConfigError


@pytest.mark.unit
class TestCredentialsManager:
    """Источники пароля: конфигурация → окружение → getpass."""

    def test_explicit_password(self, monkeypatch):
        monkeypatch.setenv("NETCFG_PASSWORD", "from-env")
        creds = CredentialsManager(username="admin", password="from-config").get_credentials()
        assert creds == Credentials(username="admin", password="from-config")

    def test_env_password(self, monkeypatch):
        monkeypatch.setenv("NETCFG_PASSWORD", "from-env")
        creds = CredentialsManager(username="admin").get_credentials()
        assert creds.password == "from-env"

    @patch("netcfg.core.credentials.getpass", return_value="typed")
    def test_prompt(self, mock_getpass, monkeypatch):
        monkeypatch.delenv("NETCFG_PASSWORD", raising=False)
        creds = CredentialsManager(username="admin").get_credentials()
        assert creds.password == "typed"
        mock_getpass.assert_called_once()

    @patch("netcfg.core.credentials.getpass")
    def test_keys_skip_prompt(self, mock_getpass, monkeypatch):
        """С ключами пароль не запрашивается."""
        monkeypatch.delenv("NETCFG_PASSWORD", raising=False)
        creds = CredentialsManager(username="admin", keys=["/tmp/id_rsa"]).get_credentials()
        assert creds.password is None
        assert creds.keys == ["/tmp/id_rsa"]
        mock_getpass.assert_not_called()

    def test_non_interactive_without_secret(self, monkeypatch):
        monkeypatch.delenv("NETCFG_PASSWORD", raising=False)
        with pytest.raises(ConfigError):
            CredentialsManager(username="admin").get_credentials(interactive=False)

    @patch("netcfg.core.credentials.getpass", return_value="typed")
    def test_cached(self, mock_getpass, monkeypatch):
        """Пароль запрашивается один раз на запуск."""
        monkeypatch.delenv("NETCFG_PASSWORD", raising=False)
        manager = CredentialsManager(username="admin")
        assert manager.get_credentials() is manager.get_credentials()
        assert mock_getpass.call_count == 1

    def test_repr_masks_password(self):
        assert "secret" not in repr(Credentials(username="admin", password="secret"))
