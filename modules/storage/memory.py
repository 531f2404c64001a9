from dataclasses import dataclass, field
import threading
from typing import Optional, Sequence

from modules.dashboard.base import GridLayoutItem
from modules.dashboard.models import (
  Card,
  Dashboard,
  InsertCardSchema,
  InsertDashboardSchema,
  InsertUserSchema,
  UpdateCardSchema,
  UpdateDashboardSchema,
  User,
)
from modules.logger import ProvisionedLogger

from .base import DashboardStorage, parse_id
from .exceptions import UserAlreadyExistsException

logger = ProvisionedLogger().provision("DashboardStorage")

@dataclass
class IdCounters:
  users: int = 1
  dashboards: int = 1
  cards: int = 1

@dataclass
class StorageState:
  users: dict[int, User] = field(default_factory=dict)
  dashboards: dict[int, Dashboard] = field(default_factory=dict)
  cards: dict[int, Card] = field(default_factory=dict)
  counters: IdCounters = field(default_factory=IdCounters)


class MemoryDashboardStorage(DashboardStorage):
  """Volatile storage backed by dictionaries. Every operation runs under a single re-entrant lock."""
  state: StorageState
  lock: threading.RLock

  def __init__(self):
    self.state = StorageState()
    self.lock = threading.RLock()

  def _commit(self):
    """Called after every mutation while the lock is still held. Persistent backends hook into this."""
    pass

  # Users
  def get_user(self, id: int)->Optional[User]:
    with self.lock:
      user = self.state.users.get(id, None)
      return user.model_copy(deep=True) if user is not None else None

  def get_user_by_username(self, username: str)->Optional[User]:
    with self.lock:
      for user in self.state.users.values():
        if user.username == username:
          return user.model_copy(deep=True)
      return None

  def create_user(self, fields: InsertUserSchema)->User:
    logger.info(f"CREATE USER {fields.username}")
    with self.lock:
      if self.get_user_by_username(fields.username) is not None:
        raise UserAlreadyExistsException(username=fields.username)
      id = self.state.counters.users
      self.state.counters.users += 1
      user = User(id=id, username=fields.username, password=fields.password)
      self.state.users[id] = user
      self._commit()
      return user.model_copy(deep=True)

  # Dashboards
  def get_dashboards(self)->list[Dashboard]:
    logger.debug("GET ALL DASHBOARDS")
    with self.lock:
      return [dashboard.model_copy(deep=True) for dashboard in self.state.dashboards.values()]

  def get_dashboard(self, id: int)->Optional[Dashboard]:
    logger.debug(f"GET DASHBOARD {id}")
    with self.lock:
      dashboard = self.state.dashboards.get(id, None)
      return dashboard.model_copy(deep=True) if dashboard is not None else None

  def create_dashboard(self, fields: InsertDashboardSchema)->Dashboard:
    logger.info(f"CREATE DASHBOARD {fields}")
    with self.lock:
      id = self.state.counters.dashboards
      self.state.counters.dashboards += 1
      dashboard = Dashboard.model_validate(dict(
        **fields.model_dump(exclude_unset=True),
        id=id,
      ))
      self.state.dashboards[id] = dashboard
      self._commit()
      return dashboard.model_copy(deep=True)

  def update_dashboard(self, id: int, fields: UpdateDashboardSchema)->Optional[Dashboard]:
    logger.info(f"UPDATE DASHBOARD {id} WITH {fields}")
    with self.lock:
      existing = self.state.dashboards.get(id, None)
      if existing is None:
        return None
      # Only the fields that the client actually sent are merged.
      dashboard = existing.model_copy(update=fields.model_dump(exclude_unset=True))
      self.state.dashboards[id] = dashboard
      self._commit()
      return dashboard.model_copy(deep=True)

  def delete_dashboard(self, id: int)->bool:
    logger.info(f"DELETE DASHBOARD {id}")
    with self.lock:
      card_ids = [card.id for card in self.state.cards.values() if card.dashboard_id == id]
      for card_id in card_ids:
        self.state.cards.pop(card_id)
      if len(card_ids) > 0:
        logger.info(f"Deleted cards {card_ids} belonging to dashboard {id}")
      existed = self.state.dashboards.pop(id, None) is not None
      if existed or len(card_ids) > 0:
        self._commit()
      return existed

  # Cards
  def get_cards(self, dashboard_id: int)->list[Card]:
    logger.debug(f"GET CARDS OF DASHBOARD {dashboard_id}")
    with self.lock:
      return [card.model_copy(deep=True) for card in self.state.cards.values() if card.dashboard_id == dashboard_id]

  def get_card(self, id: int)->Optional[Card]:
    logger.debug(f"GET CARD {id}")
    with self.lock:
      card = self.state.cards.get(id, None)
      return card.model_copy(deep=True) if card is not None else None

  def create_card(self, fields: InsertCardSchema)->Card:
    logger.info(f"CREATE CARD {fields.title} IN DASHBOARD {fields.dashboard_id}")
    with self.lock:
      id = self.state.counters.cards
      self.state.counters.cards += 1
      card = Card.model_validate(dict(
        **fields.model_dump(),
        id=id,
      ))
      # Never trust the identifier sent by the client.
      card = card.model_copy(update=dict(layout=card.layout.with_identifier(id)))
      self.state.cards[id] = card
      self._commit()
      return card.model_copy(deep=True)

  def update_card(self, id: int, fields: UpdateCardSchema)->Optional[Card]:
    logger.info(f"UPDATE CARD {id} WITH {fields}")
    with self.lock:
      existing = self.state.cards.get(id, None)
      if existing is None:
        return None
      card = Card.model_validate(dict(
        **fields.model_dump(),
        id=id,
        dashboard_id=existing.dashboard_id,
      ))
      card = card.model_copy(update=dict(layout=card.layout.with_identifier(id)))
      self.state.cards[id] = card
      self._commit()
      return card.model_copy(deep=True)

  def delete_card(self, id: int)->bool:
    logger.info(f"DELETE CARD {id}")
    with self.lock:
      existed = self.state.cards.pop(id, None) is not None
      if existed:
        self._commit()
      return existed

  # Layout
  def update_cards_layout(self, dashboard_id: int, layout: Sequence[GridLayoutItem])->bool:
    logger.info(f"UPDATE LAYOUT OF DASHBOARD {dashboard_id} ({len(layout)} items)")
    try:
      with self.lock:
        updated_card_ids: list[int] = []
        for item in layout:
          card_id = parse_id(item.i)
          if card_id is None:
            logger.debug(f"Skipping layout item with invalid identifier \"{item.i}\"")
            continue
          card = self.state.cards.get(card_id, None)
          if card is None or card.dashboard_id != dashboard_id:
            logger.debug(f"Skipping layout item \"{item.i}\" as it doesn't refer to a card in dashboard {dashboard_id}")
            continue
          self.state.cards[card_id] = card.model_copy(update=dict(layout=item.with_identifier(card_id)))
          updated_card_ids.append(card_id)

        if len(updated_card_ids) > 0:
          self._commit()
        logger.info(f"Updated the layout of cards {updated_card_ids} in dashboard {dashboard_id}")
      return True
    except Exception as e:
      logger.exception(e)
      logger.error(f"Failed to update the layout of dashboard {dashboard_id}")
      return False

  def is_empty(self)->bool:
    with self.lock:
      return len(self.state.users) == 0 and len(self.state.dashboards) == 0 and len(self.state.cards) == 0

__all__ = [
  "MemoryDashboardStorage",
  "StorageState",
  "IdCounters",
]
