from typing import Any

from modules.dashboard import validate_update_card
from modules.dashboard.models import Card
from modules.logger import ProvisionedLogger
from modules.storage import DashboardStorage, StorageOperationFailedException

logger = ProvisionedLogger().provision("Card Controller")

def update_card(storage: DashboardStorage, card: Card, body: Any)->Card:
  fields = validate_update_card(body)
  updated_card = storage.update_card(card.id, fields)
  if updated_card is None:
    raise StorageOperationFailedException(operation="update card")
  return updated_card

def delete_card(storage: DashboardStorage, card: Card):
  if not storage.delete_card(card.id):
    raise StorageOperationFailedException(operation="delete card")
  logger.info(f"Deleted card {card.id} from dashboard {card.dashboard_id}")

__all__ = [
  "update_card",
  "delete_card",
]
