import copy
import json
import os
from typing import Any, TypeVar

import pydantic

from modules.baseclass import PydanticBaseModel
from modules.dashboard.models import Card, Dashboard, User
from modules.logger import ProvisionedLogger, TimeLogger

from .atomic import atomic_write
from .memory import IdCounters, MemoryDashboardStorage, StorageState

T = TypeVar("T", bound=pydantic.BaseModel)

logger = ProvisionedLogger().provision("JSONDashboardStorage")

# Every mutation rewrites the whole snapshot.
SLOW_WRITE_SECONDS = 0.5

class StorageCountersSnapshot(PydanticBaseModel):
  users: int = 1
  dashboards: int = 1
  cards: int = 1

class StorageSnapshot(PydanticBaseModel):
  users: list[User]
  dashboards: list[Dashboard]
  cards: list[Card]
  counters: StorageCountersSnapshot


# The records are hierarchical (card configs are tagged unions), so a JSON document validated by pydantic fits
# better than normalizing everything into tables.
class JSONDashboardStorage(MemoryDashboardStorage):
  """Keeps the whole state in memory and mirrors it into a JSON file after every mutation."""
  path: str
  __committed_state: StorageState

  def __init__(self, path: str):
    super().__init__()
    self.path = path
    with self.lock:
      self.state = self.read_file()
      self.__committed_state = copy.deepcopy(self.state)

  def __validate_records(self, model: type[T], records: Any, kind: str)->list[T]:
    if not isinstance(records, list):
      logger.warning(f"The {kind} in \"{self.path}\" is not a valid list. The entries will be discarded.")
      return []
    valid_records: list[T] = []
    for record in records:
      try:
        valid_records.append(model.model_validate(record))
      except pydantic.ValidationError:
        logger.error(f"Discarding invalid {kind} entry in \"{self.path}\" with the following shape: {record}")
    return valid_records

  def __next_id(self, counter: Any, ids: list[int])->int:
    # Counters never go backwards, even if the file was edited by hand.
    next_id = counter if isinstance(counter, int) and counter > 0 else 1
    if len(ids) > 0:
      next_id = max(next_id, max(ids) + 1)
    return next_id

  def read_file(self)->StorageState:
    if not os.path.exists(self.path):
      logger.info(f"{self.path} doesn't exist yet. Starting with empty storage.")
      return StorageState()
    try:
      with open(self.path, "r", encoding="utf-8") as f:
        contents = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
      logger.error(f"Failed to load {self.path} due to {e.__class__.__name__}: {e}. The file may be corrupted. Starting with empty storage.")
      return StorageState()

    if not isinstance(contents, dict):
      logger.warning(f"The contents of \"{self.path}\" is not a valid storage snapshot. We will consider it as corrupt and thus throw away the contents.")
      return StorageState()

    users = self.__validate_records(User, contents.get("users", []), "user")
    dashboards = self.__validate_records(Dashboard, contents.get("dashboards", []), "dashboard")
    cards = self.__validate_records(Card, contents.get("cards", []), "card")

    # Cards of dashboards that no longer exist would otherwise be unreachable forever.
    dashboard_ids = set(dashboard.id for dashboard in dashboards)
    orphaned_cards = [card.id for card in cards if card.dashboard_id not in dashboard_ids]
    if len(orphaned_cards) > 0:
      logger.warning(f"Discarding cards {orphaned_cards} in \"{self.path}\" as their dashboards no longer exist.")

    raw_counters = contents.get("counters", None)
    counters: dict[str, Any] = raw_counters if isinstance(raw_counters, dict) else {}
    state = StorageState(
      users={user.id: user for user in users},
      dashboards={dashboard.id: dashboard for dashboard in dashboards},
      cards={
        card.id: card.model_copy(update=dict(layout=card.layout.with_identifier(card.id)))
        for card in cards if card.dashboard_id in dashboard_ids
      },
      counters=IdCounters(
        users=self.__next_id(counters.get("users"), [user.id for user in users]),
        dashboards=self.__next_id(counters.get("dashboards"), [dashboard.id for dashboard in dashboards]),
        cards=self.__next_id(counters.get("cards"), [card.id for card in cards]),
      ),
    )
    logger.info(f"Loaded {len(state.users)} users, {len(state.dashboards)} dashboards, and {len(state.cards)} cards from \"{self.path}\".")
    return state

  def snapshot(self)->StorageSnapshot:
    with self.lock:
      return StorageSnapshot(
        users=list(self.state.users.values()),
        dashboards=list(self.state.dashboards.values()),
        cards=list(self.state.cards.values()),
        counters=StorageCountersSnapshot(
          users=self.state.counters.users,
          dashboards=self.state.counters.dashboards,
          cards=self.state.counters.cards,
        ),
      )

  def write_file(self):
    with TimeLogger(logger, f"Writing storage snapshot to \"{self.path}\"", slow_threshold=SLOW_WRITE_SECONDS):
      contents = self.snapshot().as_json()
      with atomic_write(self.path) as f:
        json.dump(contents, f)

  def _commit(self):
    try:
      self.write_file()
    except Exception:
      # Memory never holds changes that are missing from the file.
      self.state = copy.deepcopy(self.__committed_state)
      logger.error(f"Failed to write the storage snapshot to \"{self.path}\". The change has been rolled back.")
      raise
    self.__committed_state = copy.deepcopy(self.state)


__all__ = [
  "JSONDashboardStorage",
  "StorageSnapshot",
]
