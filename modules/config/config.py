from enum import Enum
import logging
import os
from typing import Mapping, Optional

import pydantic

from modules.logger import ProvisionedLogger

logger = ProvisionedLogger().provision("Config")

class EnvironmentEnum(str, Enum):
  Development = "development"
  Production = "production"

class StorageBackendEnum(str, Enum):
  Memory = "memory"
  JSON = "json"

DEFAULT_DATA_PATH = os.path.join("data", "gridboard.json")

def _parse_flag(value: Optional[str], default: bool)->bool:
  if value is None or len(value.strip()) == 0:
    return default
  return value.strip().lower() in ("1", "true", "yes", "on")

def _parse_list(value: Optional[str])->list[str]:
  if value is None:
    return ["*"]
  return [item.strip() for item in value.split(",") if len(item.strip()) > 0]

class ServerConfig(pydantic.BaseModel):
  model_config = pydantic.ConfigDict(use_enum_values=True, frozen=True)

  environment: EnvironmentEnum = EnvironmentEnum.Development
  storage: StorageBackendEnum = StorageBackendEnum.Memory
  # Only used by the JSON storage backend
  data_path: str = DEFAULT_DATA_PATH
  seed: bool = True
  log_file: Optional[str] = None
  cors_origins: list[str] = pydantic.Field(default_factory=lambda: ["*"])

  @property
  def log_level(self)->int:
    return logging.WARNING if self.environment == EnvironmentEnum.Production else logging.DEBUG

  @staticmethod
  def from_env(env: Optional[Mapping[str, str]] = None)->"ServerConfig":
    if env is None:
      env = os.environ
    config = ServerConfig(
      environment=env.get("GRIDBOARD_ENV", EnvironmentEnum.Development.value),
      storage=env.get("GRIDBOARD_STORAGE", StorageBackendEnum.Memory.value),
      data_path=env.get("GRIDBOARD_DATA_PATH", DEFAULT_DATA_PATH),
      seed=_parse_flag(env.get("GRIDBOARD_SEED"), True),
      log_file=env.get("GRIDBOARD_LOG_FILE") or None,
      cors_origins=_parse_list(env.get("GRIDBOARD_CORS_ORIGINS")),
    )
    logger.debug(f"Loaded server configuration: {config}")
    return config

__all__ = [
  "ServerConfig",
  "EnvironmentEnum",
  "StorageBackendEnum",
]
