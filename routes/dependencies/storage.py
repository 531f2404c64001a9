from typing import Annotated

from fastapi import Depends, Path, Request

from modules.dashboard.models import Card, Dashboard
from modules.storage import (
  CardNotFoundException,
  DashboardNotFoundException,
  DashboardStorage,
  InvalidIdentifierException,
  parse_id,
)

def __get_storage(request: Request)->DashboardStorage:
  return request.app.state.storage

StorageDependency = Annotated[DashboardStorage, Depends(__get_storage)]

def __parse_dashboard_id(dashboard_id: Annotated[str, Path()])->int:
  id = parse_id(dashboard_id)
  if id is None:
    raise InvalidIdentifierException(entity="dashboard", value=dashboard_id)
  return id

def __parse_card_id(card_id: Annotated[str, Path()])->int:
  id = parse_id(card_id)
  if id is None:
    raise InvalidIdentifierException(entity="card", value=card_id)
  return id

DashboardIdDependency = Annotated[int, Depends(__parse_dashboard_id)]
CardIdDependency = Annotated[int, Depends(__parse_card_id)]

def __get_dashboard(storage: StorageDependency, dashboard_id: DashboardIdDependency)->Dashboard:
  dashboard = storage.get_dashboard(dashboard_id)
  if dashboard is None:
    raise DashboardNotFoundException(id=dashboard_id)
  return dashboard

def __get_card(storage: StorageDependency, card_id: CardIdDependency)->Card:
  card = storage.get_card(card_id)
  if card is None:
    raise CardNotFoundException(id=card_id)
  return card

# Existence is checked before any mutation
DashboardExistsDependency = Annotated[Dashboard, Depends(__get_dashboard)]
CardExistsDependency = Annotated[Card, Depends(__get_card)]

__all__ = [
  "StorageDependency",
  "DashboardIdDependency",
  "CardIdDependency",
  "DashboardExistsDependency",
  "CardExistsDependency",
]
