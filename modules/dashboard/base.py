from enum import Enum
from typing import Annotated, Any, Optional

import pydantic

from modules.api.enum import ExposedEnum
from modules.baseclass import PydanticBaseModel

class CardTypeEnum(str, Enum):
  Chart = "chart"
  Stats = "stats"
  Table = "table"
  List = "list"

ExposedEnum().register(CardTypeEnum)

NonEmptyString = Annotated[str, pydantic.Field(min_length=1)]
StrictFlag = Annotated[bool, pydantic.Field(strict=True)]

def __integral_float_to_int(value: Any)->Any:
  # JSON has a single number type, so JavaScript clients may send 2.0 for 2.
  if isinstance(value, float) and value.is_integer():
    return int(value)
  return value

# Goes after the strict int constraints. Integral floats pass, while strings, booleans and fractions are still rejected.
IntegralFloatValidator = pydantic.BeforeValidator(__integral_float_to_int)
# Grid coordinates start at the top-left cell.
GridPosition = Annotated[int, pydantic.Field(ge=0, strict=True), IntegralFloatValidator]
GridSpan = Annotated[int, pydantic.Field(ge=1, strict=True), IntegralFloatValidator]

class GridLayoutItem(PydanticBaseModel):
  """Position and size of a single card in the responsive grid. ``i`` always holds the card ID as text once the card has been stored."""
  i: str
  x: GridPosition
  y: GridPosition
  w: GridSpan
  h: GridSpan
  min_w: Optional[GridSpan] = None
  min_h: Optional[GridSpan] = None
  max_w: Optional[GridSpan] = None
  max_h: Optional[GridSpan] = None
  is_draggable: Optional[StrictFlag] = None
  is_resizable: Optional[StrictFlag] = None
  static: Optional[StrictFlag] = None

  @pydantic.model_validator(mode="after")
  def __validate_size_constraints(self):
    if self.min_w is not None and self.max_w is not None and self.min_w > self.max_w:
      raise ValueError(f"minW ({self.min_w}) cannot be larger than maxW ({self.max_w})")
    if self.min_h is not None and self.max_h is not None and self.min_h > self.max_h:
      raise ValueError(f"minH ({self.min_h}) cannot be larger than maxH ({self.max_h})")
    return self

  def with_identifier(self, card_id: int)->"GridLayoutItem":
    return self.model_copy(update=dict(i=str(card_id)))

__all__ = [
  "CardTypeEnum",
  "GridLayoutItem",
  "IntegralFloatValidator",
  "NonEmptyString",
  "StrictFlag",
]
