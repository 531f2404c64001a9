from typing import Any, Callable, TypeVar

import pydantic

from modules.validation import InputValidationException

from .base import GridLayoutItem
from .models import (
  InsertCardSchema,
  InsertDashboardSchema,
  InsertUserSchema,
  UpdateCardSchema,
  UpdateDashboardSchema,
)

T = TypeVar("T")

LayoutBatchAdapter = pydantic.TypeAdapter(list[GridLayoutItem])

def _validate(validator: Callable[[Any], T], data: Any)->T:
  try:
    return validator(data)
  except pydantic.ValidationError as e:
    raise InputValidationException.from_pydantic(e) from e

def validate_insert_user(data: Any)->InsertUserSchema:
  return _validate(InsertUserSchema.model_validate, data)

def validate_insert_dashboard(data: Any)->InsertDashboardSchema:
  return _validate(InsertDashboardSchema.model_validate, data)

def validate_update_dashboard(data: Any)->UpdateDashboardSchema:
  # Ownership is fixed at creation. UpdateDashboardSchema ignores userId.
  return _validate(UpdateDashboardSchema.model_validate, data)

def validate_insert_card(data: Any, dashboard_id: int)->InsertCardSchema:
  if isinstance(data, dict):
    # The owning dashboard always comes from the caller, never from the payload.
    data = {key: value for key, value in data.items() if key not in ("dashboardId", "dashboard_id")}
    data["dashboardId"] = dashboard_id
  return _validate(InsertCardSchema.model_validate, data)

def validate_update_card(data: Any)->UpdateCardSchema:
  return _validate(UpdateCardSchema.model_validate, data)

def validate_layout_batch(data: Any)->list[GridLayoutItem]:
  return _validate(LayoutBatchAdapter.validate_python, data)

__all__ = [
  "validate_insert_user",
  "validate_insert_dashboard",
  "validate_update_dashboard",
  "validate_insert_card",
  "validate_update_card",
  "validate_layout_batch",
]
