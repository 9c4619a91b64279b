"""Tests for VaultClient with hvac mocked out."""

from unittest.mock import MagicMock, patch

import pytest
from hvac.exceptions import Forbidden, InvalidPath

from clients import vault_client
from clients.vault_client import VaultClient, VaultError, get_database_url, reset_vault_cache


@pytest.fixture
def vault_env(monkeypatch):
    monkeypatch.setenv("VAULT_ADDR", "https://vault.test:8200")
    monkeypatch.setenv("VAULT_ROLE_ID", "role")
    monkeypatch.setenv("VAULT_SECRET_ID", "secret")
    monkeypatch.delenv("VAULT_NAMESPACE", raising=False)


@pytest.fixture
def hvac_client():
    """Patched hvac.Client that authenticates and serves hotel/database."""
    with patch("clients.vault_client.hvac.Client") as client_cls:
        client = MagicMock()
        client.is_authenticated.return_value = True
        client.auth.approle.login.return_value = {"auth": {"client_token": "s.token"}}
        client.secrets.kv.v2.read_secret_version.return_value = {
            "data": {"data": {"url": "postgresql://hotel@db/hotel"}}
        }
        client_cls.return_value = client
        yield client


@pytest.fixture(autouse=True)
def _fresh_cache():
    reset_vault_cache()
    yield
    reset_vault_cache()


class TestVaultClientInit:

    def test_missing_vault_addr_raises(self, monkeypatch):
        monkeypatch.delenv("VAULT_ADDR", raising=False)

        with pytest.raises(ValueError, match="VAULT_ADDR"):
            VaultClient()

    def test_missing_approle_credentials_raises(self, vault_env, monkeypatch):
        monkeypatch.delenv("VAULT_SECRET_ID")

        with pytest.raises(ValueError, match="VAULT_ROLE_ID"):
            VaultClient()

    def test_failed_login_raises_permission_error(self, vault_env, hvac_client):
        hvac_client.auth.approle.login.side_effect = Forbidden("bad role")

        with pytest.raises(PermissionError, match="AppRole authentication failed"):
            VaultClient()

    def test_login_stores_token(self, vault_env, hvac_client):
        client = VaultClient()

        assert client.client.token == "s.token"
        hvac_client.auth.approle.login.assert_called_once_with(role_id="role", secret_id="secret")


class TestGetSecret:

    def test_paths_are_scoped_to_hotel(self, vault_env, hvac_client):
        url = VaultClient().get_secret("database", "url")

        assert url == "postgresql://hotel@db/hotel"
        call = hvac_client.secrets.kv.v2.read_secret_version.call_args
        assert call.kwargs["path"] == "hotel/database"

    def test_missing_path_raises_permission_error(self, vault_env, hvac_client):
        hvac_client.secrets.kv.v2.read_secret_version.side_effect = InvalidPath()

        with pytest.raises(PermissionError, match="hotel/nowhere"):
            VaultClient().get_secret("nowhere", "url")

    def test_missing_field_raises_keyerror(self, vault_env, hvac_client):
        with pytest.raises(KeyError, match="Available: url"):
            VaultClient().get_secret("database", "password")


class TestGetDatabaseUrl:

    def test_reads_once_then_caches(self, vault_env, hvac_client):
        assert get_database_url() == "postgresql://hotel@db/hotel"
        assert get_database_url() == "postgresql://hotel@db/hotel"

        assert hvac_client.secrets.kv.v2.read_secret_version.call_count == 1

    def test_failures_surface_as_vault_error(self, vault_env, hvac_client):
        hvac_client.secrets.kv.v2.read_secret_version.side_effect = InvalidPath()

        with pytest.raises(VaultError, match="hotel/database/url"):
            get_database_url()

    def test_reset_drops_singleton(self, vault_env, hvac_client):
        get_database_url()
        reset_vault_cache()

        assert vault_client._vault_client_instance is None
