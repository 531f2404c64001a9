from .config import ServerConfig, EnvironmentEnum, StorageBackendEnum
