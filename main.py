import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from modules.api.exceptions import register_error_handlers
from modules.api.wrapper import ApiErrorResult
from modules.config import ServerConfig, StorageBackendEnum
from modules.logger import ProvisionedLogger
from modules.storage import (
  DashboardStorage,
  JSONDashboardStorage,
  MemoryDashboardStorage,
  seed_demo_data,
)
import routes

logger = ProvisionedLogger().provision("Gridboard")

def create_storage(config: ServerConfig)->DashboardStorage:
  if config.storage == StorageBackendEnum.JSON:
    logger.info(f"Using JSON storage at \"{config.data_path}\"")
    storage: DashboardStorage = JSONDashboardStorage(config.data_path)
  else:
    logger.info("Using in-memory storage. Data will be lost when the server stops.")
    storage = MemoryDashboardStorage()

  if config.seed and storage.is_empty():
    seed_demo_data(storage)
  return storage

def create_app(config: Optional[ServerConfig] = None, storage: Optional[DashboardStorage] = None)->FastAPI:
  if config is None:
    config = ServerConfig.from_env()
  ProvisionedLogger().configure(
    level=config.log_level,
    terminal=True,
    file=config.log_file,
  )
  if storage is None:
    storage = create_storage(config)

  @asynccontextmanager
  async def lifespan(app):
    logger.info(f"Starting the dashboard server in {config.environment} mode.")
    try:
      yield
    except asyncio.exceptions.CancelledError:
      pass
    logger.info("The dashboard server has stopped.")

  app = FastAPI(lifespan=lifespan)

  app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"]
  )

  api_app = FastAPI(responses={
      400: dict(model=ApiErrorResult),
      404: dict(model=ApiErrorResult),
      500: dict(model=ApiErrorResult),
    },
    default_response_class=ORJSONResponse
  )
  # Mounted apps don't receive the lifespan events of their parent, so the storage is attached right away.
  api_app.state.storage = storage
  api_app.include_router(routes.dashboard.router, prefix="/dashboards")
  api_app.include_router(routes.card.router, prefix="/cards")
  api_app.include_router(routes.general.router, prefix="")
  register_error_handlers(api_app)

  app.mount('/api', api_app)
  app.state.storage = storage
  return app

app = create_app()
