import pytest
from fastapi.testclient import TestClient

from main import create_app
from modules.config import ServerConfig
from modules.storage import MemoryDashboardStorage


@pytest.fixture
def storage():
  return MemoryDashboardStorage()

@pytest.fixture
def server_config():
  return ServerConfig(seed=False)

@pytest.fixture
def app(server_config, storage):
  return create_app(server_config, storage)

@pytest.fixture
def client(app):
  with TestClient(app) as client:
    yield client
