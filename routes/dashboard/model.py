from modules.baseclass import PydanticBaseModel
from modules.dashboard.models import Card, Dashboard

class DashboardDetailResource(PydanticBaseModel):
  dashboard: Dashboard
  cards: list[Card]

__all__ = [
  "DashboardDetailResource",
]
