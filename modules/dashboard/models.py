from typing import Optional

import pydantic

from modules.baseclass import PydanticBaseModel

from .base import CardTypeEnum, GridLayoutItem, NonEmptyString
from .config import CardConfig

# Users

class InsertUserSchema(PydanticBaseModel):
  username: NonEmptyString
  password: NonEmptyString

class User(InsertUserSchema):
  id: int

# Dashboards

class UpdateDashboardSchema(PydanticBaseModel):
  title: NonEmptyString
  description: Optional[str] = None

class InsertDashboardSchema(UpdateDashboardSchema):
  user_id: Optional[int] = None

class Dashboard(PydanticBaseModel):
  id: int
  title: str
  description: Optional[str] = None
  user_id: Optional[int] = None

# Cards

class BaseCardSchema(PydanticBaseModel):
  title: NonEmptyString
  type: CardTypeEnum
  config: CardConfig
  layout: GridLayoutItem

  @pydantic.model_validator(mode="after")
  def __validate_config_type(self):
    card_type = CardTypeEnum(self.type)
    config_type = CardTypeEnum(self.config.type)
    if card_type != config_type:
      raise ValueError(f"Card type \"{card_type.value}\" does not match the config type \"{config_type.value}\"")
    return self

class UpdateCardSchema(BaseCardSchema):
  pass

class InsertCardSchema(BaseCardSchema):
  dashboard_id: int

class Card(BaseCardSchema):
  id: int
  dashboard_id: int

__all__ = [
  "InsertUserSchema",
  "User",
  "UpdateDashboardSchema",
  "InsertDashboardSchema",
  "Dashboard",
  "UpdateCardSchema",
  "InsertCardSchema",
  "Card",
]
