import abc
import re
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

IDENTIFIER_PATTERN = re.compile(r"^\d+$")

def parse_id(value: str)->Optional[int]:
  """Parses a path parameter or a layout item identifier. Returns None for anything that isn't a plain non-negative integer."""
  if not isinstance(value, str) or IDENTIFIER_PATTERN.match(value) is None:
    return None
  return int(value)

class DashboardStorage(abc.ABC):
  """Capability set shared by every storage backend.

  Implementations must allocate IDs monotonically, force ``layout.i`` to the card ID whenever a card is written,
  and delete a dashboard together with its cards as a single step that no reader can observe halfway."""

  # Users
  @abc.abstractmethod
  def get_user(self, id: int)->Optional[User]:
    ...

  @abc.abstractmethod
  def get_user_by_username(self, username: str)->Optional[User]:
    ...

  @abc.abstractmethod
  def create_user(self, fields: InsertUserSchema)->User:
    ...

  # Dashboards
  @abc.abstractmethod
  def get_dashboards(self)->list[Dashboard]:
    ...

  @abc.abstractmethod
  def get_dashboard(self, id: int)->Optional[Dashboard]:
    ...

  @abc.abstractmethod
  def create_dashboard(self, fields: InsertDashboardSchema)->Dashboard:
    ...

  @abc.abstractmethod
  def update_dashboard(self, id: int, fields: UpdateDashboardSchema)->Optional[Dashboard]:
    ...

  @abc.abstractmethod
  def delete_dashboard(self, id: int)->bool:
    ...

  # Cards
  @abc.abstractmethod
  def get_cards(self, dashboard_id: int)->list[Card]:
    ...

  @abc.abstractmethod
  def get_card(self, id: int)->Optional[Card]:
    ...

  @abc.abstractmethod
  def create_card(self, fields: InsertCardSchema)->Card:
    ...

  @abc.abstractmethod
  def update_card(self, id: int, fields: UpdateCardSchema)->Optional[Card]:
    ...

  @abc.abstractmethod
  def delete_card(self, id: int)->bool:
    ...

  # Layout
  @abc.abstractmethod
  def update_cards_layout(self, dashboard_id: int, layout: Sequence[GridLayoutItem])->bool:
    ...

  @abc.abstractmethod
  def is_empty(self)->bool:
    ...

__all__ = [
  "DashboardStorage",
  "parse_id",
]
