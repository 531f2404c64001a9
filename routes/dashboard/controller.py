from typing import Any

from modules.api import SuccessResult
from modules.dashboard import (
  Dashboard,
  validate_insert_card,
  validate_insert_dashboard,
  validate_layout_batch,
  validate_update_dashboard,
)
from modules.dashboard.models import Card
from modules.logger import ProvisionedLogger
from modules.storage import DashboardStorage, StorageOperationFailedException

from .model import DashboardDetailResource

logger = ProvisionedLogger().provision("Dashboard Controller")

def get_all_dashboards(storage: DashboardStorage)->list[Dashboard]:
  return storage.get_dashboards()

def get_dashboard_detail(storage: DashboardStorage, dashboard: Dashboard)->DashboardDetailResource:
  return DashboardDetailResource(
    dashboard=dashboard,
    cards=storage.get_cards(dashboard.id),
  )

def create_dashboard(storage: DashboardStorage, body: Any)->Dashboard:
  fields = validate_insert_dashboard(body)
  dashboard = storage.create_dashboard(fields)
  logger.info(f"Created dashboard \"{dashboard.title}\" with ID {dashboard.id}")
  return dashboard

def update_dashboard(storage: DashboardStorage, dashboard: Dashboard, body: Any)->Dashboard:
  fields = validate_update_dashboard(body)
  updated_dashboard = storage.update_dashboard(dashboard.id, fields)
  if updated_dashboard is None:
    raise StorageOperationFailedException(operation="update dashboard")
  return updated_dashboard

def delete_dashboard(storage: DashboardStorage, dashboard: Dashboard):
  if not storage.delete_dashboard(dashboard.id):
    raise StorageOperationFailedException(operation="delete dashboard")
  logger.info(f"Deleted dashboard {dashboard.id} along with its cards")

def create_card(storage: DashboardStorage, dashboard: Dashboard, body: Any)->Card:
  fields = validate_insert_card(body, dashboard.id)
  card = storage.create_card(fields)
  logger.info(f"Created {card.type} card \"{card.title}\" with ID {card.id} in dashboard {dashboard.id}")
  return card

def update_cards_layout(storage: DashboardStorage, dashboard: Dashboard, body: Any)->SuccessResult:
  layout = validate_layout_batch(body)
  if not storage.update_cards_layout(dashboard.id, layout):
    raise StorageOperationFailedException(operation="update layout")
  return SuccessResult(success=True)

__all__ = [
  "get_all_dashboards",
  "get_dashboard_detail",
  "create_dashboard",
  "update_dashboard",
  "delete_dashboard",
  "create_card",
  "update_cards_layout",
]
