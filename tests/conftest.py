"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from client_data import ClientData
from config import Settings
from fakes import FakeGateway
from gateway import HttpGateway
from keyfile import Keyfile
from license_client import Client


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Isolated directory standing in for the user's home."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def settings(home: Path) -> Settings:
    return Settings(HOME_DIR=home, GATEWAY_URL="localhost:3000", _env_file=None)


@pytest.fixture
def gateway(settings: Settings):
    if settings.LIVE_SERVER:
        live = HttpGateway(settings.GATEWAY_URL)
        yield live
        live.close()
    else:
        yield FakeGateway()


@pytest.fixture
def keyfile(settings: Settings) -> Keyfile:
    return Keyfile(settings=settings)


@pytest.fixture
def client_data(settings: Settings) -> ClientData:
    return ClientData(settings=settings)


@pytest.fixture
def client(settings: Settings, keyfile: Keyfile, client_data: ClientData, gateway) -> Client:
    return Client(keyfile=keyfile, client_data=client_data, gateway=gateway, settings=settings)
