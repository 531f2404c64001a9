from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .base import CardTypeEnum, GridLayoutItem
from .models import Card

@dataclass(frozen=True)
class GridBreakpoint:
  name: str
  # Minimum viewport width in pixels
  width: int
  columns: int
  # Cards wider than this are narrowed. None keeps the desktop width.
  max_card_width: Optional[int] = None
  # Stacked breakpoints move every card to the left edge.
  stacked: bool = False
  # Cards span every column.
  full_width: bool = False

  def card_width(self, width: int)->int:
    if self.full_width:
      return self.columns
    if self.max_card_width is not None:
      return min(width, self.max_card_width)
    return width

GRID_BREAKPOINTS = (
  GridBreakpoint(name="lg", width=1200, columns=12),
  GridBreakpoint(name="md", width=996, columns=8, max_card_width=6),
  GridBreakpoint(name="sm", width=768, columns=6, max_card_width=4, stacked=True),
  GridBreakpoint(name="xs", width=480, columns=2, stacked=True, full_width=True),
)

@dataclass(frozen=True)
class CardSize:
  w: int
  h: int

DEFAULT_CARD_SIZES: dict[CardTypeEnum, CardSize] = {
  CardTypeEnum.Chart: CardSize(w=4, h=2),
  CardTypeEnum.Stats: CardSize(w=3, h=1),
  CardTypeEnum.Table: CardSize(w=6, h=2),
  CardTypeEnum.List: CardSize(w=4, h=2),
}

# Storage replaces this with the allocated card ID.
NEW_CARD_IDENTIFIER = "new"

def default_card_layout(card_type: CardTypeEnum)->GridLayoutItem:
  size = DEFAULT_CARD_SIZES[CardTypeEnum(card_type)]
  return GridLayoutItem(
    i=NEW_CARD_IDENTIFIER,
    x=0,
    y=0,
    w=size.w,
    h=size.h,
    min_w=min(2, size.w),
    min_h=1,
  )

def normalize_layout(cards: Iterable[Card])->list[GridLayoutItem]:
  """Projects the layout embedded in every card into a flat layout for the whole dashboard.

  ``i`` is re-asserted from the card ID since a layout held by the client can be stale relative to the IDs assigned by storage."""
  return [card.layout.with_identifier(card.id) for card in cards]

def __project_item(item: GridLayoutItem, grid_breakpoint: GridBreakpoint)->GridLayoutItem:
  update: dict = dict(w=grid_breakpoint.card_width(item.w))
  if grid_breakpoint.stacked:
    update["x"] = 0
  if item.min_w is not None and item.min_w > update["w"]:
    update["min_w"] = update["w"]
  return item.model_copy(update=update)

def project_responsive_layouts(layout: Sequence[GridLayoutItem])->dict[str, list[GridLayoutItem]]:
  """Derives a layout per breakpoint in ``GRID_BREAKPOINTS`` from the desktop layout. Smaller screens narrow the cards and stack them on the left edge."""
  return {
    grid_breakpoint.name: [__project_item(item, grid_breakpoint) for item in layout]
    for grid_breakpoint in GRID_BREAKPOINTS
  }

__all__ = [
  "GridBreakpoint",
  "GRID_BREAKPOINTS",
  "DEFAULT_CARD_SIZES",
  "NEW_CARD_IDENTIFIER",
  "default_card_layout",
  "normalize_layout",
  "project_responsive_layouts",
]
