"""Tests for loading client configuration and building clients from it."""

import json

import pydantic
import pytest

from publit_api import apiclient, client, config


def _write_config(tmp_path, data: dict):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return path


def test_load_config_reads_json(tmp_path):
    path = _write_config(
        tmp_path,
        {"base_url": "https://api.publit.test/", "api": "publishing", "user": "u"},
    )

    cfg = config.load_config(str(path))

    assert cfg.base_url == "https://api.publit.test"
    assert cfg.api == "publishing"
    assert cfg.account_id == 0
    assert cfg.timeout == client.DEFAULT_TIMEOUT


def test_load_config_uses_env_var(tmp_path, monkeypatch):
    path = _write_config(tmp_path, {"base_url": "https://api.publit.test"})
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))

    assert config.load_config().base_url == "https://api.publit.test"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        config.load_config(str(tmp_path / "nope.json"))


def test_load_config_without_path_or_env(monkeypatch):
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    with pytest.raises(FileNotFoundError):
        config.load_config()


@pytest.mark.parametrize(
    "data",
    [
        {"base_url": ""},
        {"base_url": "https://x.test", "timeout": 0},
        {"base_url": "https://x.test", "account_id": -1},
    ],
)
def test_invalid_config_is_rejected(data):
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(**data)


def test_create_api_client_wires_credentials():
    cfg = config.ClientConfig(
        base_url="https://api.publit.test",
        api="publishing",
        user="someuser",
        password="secret",
        account_id=3,
        harvest_tokens=False,
    )

    api = config.create_api_client(cfg)

    assert isinstance(api, apiclient.APIClient)
    assert api.base_url == "https://api.publit.test"
    assert api.api == "publishing"
    assert isinstance(api.client, client.AuthenticatedClient)
    assert api.client.credentials.username == "someuser;3"
    assert api.client.harvest_tokens is False
    api.client.transport.close()
