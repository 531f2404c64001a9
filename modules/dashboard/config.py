from enum import Enum
from typing import Annotated, Literal, Optional, Union

import pydantic

from modules.api.enum import ExposedEnum
from modules.baseclass import PydanticBaseModel
from modules.validation import DiscriminatedUnionValidator

from .base import CardTypeEnum, IntegralFloatValidator, StrictFlag

class ChartTypeEnum(str, Enum):
  Bar = "bar"
  Line = "line"
  Pie = "pie"
  Area = "area"

ExposedEnum().register(ChartTypeEnum)

class StatsChangeTypeEnum(str, Enum):
  Increase = "increase"
  Decrease = "decrease"

ExposedEnum().register(StatsChangeTypeEnum)

class TableColumnTypeEnum(str, Enum):
  Text = "text"
  Number = "number"
  Percent = "percent"
  Currency = "currency"
  Change = "change"

ExposedEnum().register(TableColumnTypeEnum)

# Card-specific configurations

class ChartConfig(PydanticBaseModel):
  chart_type: ChartTypeEnum
  data_source: str
  show_legend: StrictFlag = True

class StatsConfig(PydanticBaseModel):
  value: str
  previous_value: Optional[str] = None
  change: Optional[Annotated[float, pydantic.Field(strict=True)]] = None
  change_type: Optional[StatsChangeTypeEnum] = None
  icon: Optional[str] = None
  color: Optional[str] = None

class TableColumn(PydanticBaseModel):
  key: str
  label: str
  type: Optional[TableColumnTypeEnum] = None

class TableConfig(PydanticBaseModel):
  columns: list[TableColumn]
  data_source: str

class ListConfig(PydanticBaseModel):
  data_source: str
  show_icons: StrictFlag = True
  max_items: Optional[Annotated[int, pydantic.Field(ge=1, strict=True), IntegralFloatValidator]] = None

# Tagged variants. On the wire, this is always {type, config}.

class ChartCardConfig(PydanticBaseModel):
  type: Literal[CardTypeEnum.Chart]
  config: ChartConfig

class StatsCardConfig(PydanticBaseModel):
  type: Literal[CardTypeEnum.Stats]
  config: StatsConfig

class TableCardConfig(PydanticBaseModel):
  type: Literal[CardTypeEnum.Table]
  config: TableConfig

class ListCardConfig(PydanticBaseModel):
  type: Literal[CardTypeEnum.List]
  config: ListConfig

CardConfigUnion = Union[
  ChartCardConfig,
  StatsCardConfig,
  TableCardConfig,
  ListCardConfig,
]

CardConfig = Annotated[
  CardConfigUnion,
  pydantic.Field(discriminator="type"),
  DiscriminatedUnionValidator
]

__all__ = [
  "ChartTypeEnum",
  "StatsChangeTypeEnum",
  "TableColumnTypeEnum",
  "ChartConfig",
  "StatsConfig",
  "TableColumn",
  "TableConfig",
  "ListConfig",
  "ChartCardConfig",
  "StatsCardConfig",
  "TableCardConfig",
  "ListCardConfig",
  "CardConfig",
]
