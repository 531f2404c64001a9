from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, Sequence

import httpx
import pydantic

from modules.dashboard.base import GridLayoutItem
from modules.dashboard.models import (
  Card,
  Dashboard,
  InsertDashboardSchema,
  UpdateCardSchema,
  UpdateDashboardSchema,
)
from modules.logger import ProvisionedLogger

logger = ProvisionedLogger().provision("Gridboard Client")

@dataclass
class ApiRequestException(Exception):
  status_code: int
  message: str

  def __str__(self):
    return f"{self.message} (HTTP {self.status_code})"

class DashboardDetail(pydantic.BaseModel):
  dashboard: Dashboard
  cards: list[Card]

def _payload(model: Any)->Any:
  if isinstance(model, pydantic.BaseModel):
    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)
  if isinstance(model, (list, tuple)):
    return [_payload(item) for item in model]
  return model

@dataclass
class BaseAPI:
  """``client`` should be configured with the server's base URL. FastAPI's TestClient works as well."""
  client: httpx.Client
  prefix: str = "/api"

  def _request(self, method: str, path: str, body: Optional[Any] = None)->httpx.Response:
    url = f"{self.prefix}{path}"
    logger.debug(f"{method} {url}")
    if body is None:
      response = self.client.request(method, url)
    else:
      response = self.client.request(method, url, json=_payload(body))
    if response.is_error:
      try:
        message = response.json().get("message", response.reason_phrase)
      except ValueError:
        message = response.text or response.reason_phrase
      logger.warning(f"{method} {url} failed with status {response.status_code}: {message}")
      raise ApiRequestException(status_code=response.status_code, message=message)
    return response

class DashboardAPI(BaseAPI):
  def get_all(self)->list[Dashboard]:
    response = self._request("GET", "/dashboards")
    return [Dashboard.model_validate(item) for item in response.json()]

  def fetch(self, id: int)->DashboardDetail:
    response = self._request("GET", f"/dashboards/{id}")
    return DashboardDetail.model_validate(response.json())

  def create(self, dashboard: InsertDashboardSchema)->Dashboard:
    response = self._request("POST", "/dashboards", dashboard)
    return Dashboard.model_validate(response.json())

  def update(self, id: int, dashboard: UpdateDashboardSchema)->Dashboard:
    response = self._request("PATCH", f"/dashboards/{id}", dashboard)
    return Dashboard.model_validate(response.json())

  def delete(self, id: int):
    self._request("DELETE", f"/dashboards/{id}")

  def save_layout(self, dashboard_id: int, layout: Sequence[GridLayoutItem])->bool:
    response = self._request("PATCH", f"/dashboards/{dashboard_id}/layout", list(layout))
    return bool(response.json().get("success", False))

class CardAPI(BaseAPI):
  def get(self, id: int)->Card:
    response = self._request("GET", f"/cards/{id}")
    return Card.model_validate(response.json())

  def create(self, dashboard_id: int, card: UpdateCardSchema)->Card:
    # UpdateCardSchema has the same fields as InsertCardSchema without dashboardId, which the path already carries.
    response = self._request("POST", f"/dashboards/{dashboard_id}/cards", card)
    if response.status_code != HTTPStatus.CREATED:
      logger.warning(f"Expected status 201 when creating a card, but received {response.status_code} instead.")
    return Card.model_validate(response.json())

  def update(self, id: int, card: UpdateCardSchema)->Card:
    response = self._request("PATCH", f"/cards/{id}", card)
    return Card.model_validate(response.json())

  def delete(self, id: int):
    self._request("DELETE", f"/cards/{id}")

__all__ = [
  "ApiRequestException",
  "DashboardDetail",
  "DashboardAPI",
  "CardAPI",
]
