import threading
from typing import Callable, Optional, Sequence

import httpx

from modules.dashboard.base import GridLayoutItem
from modules.dashboard.layout import normalize_layout
from modules.dashboard.models import Card
from modules.logger import ProvisionedLogger

from .api import ApiRequestException, DashboardAPI
from .debounce import Debouncer

logger = ProvisionedLogger().provision("LayoutController")

LAYOUT_SAVE_DEBOUNCE_SECONDS = 1.0

LayoutSaveErrorHandler = Callable[[Exception], None]

class LayoutController:
  """Tracks the grid layout of a dashboard and persists layout changes through the API.

  Layout changes are applied locally right away, while the save request is debounced so that a drag
  that fires many change events only results in one request with the final layout."""
  api: DashboardAPI
  dashboard_id: Optional[int]
  debouncer: Debouncer
  on_error: Optional[LayoutSaveErrorHandler]
  lock: threading.Lock
  _layout: list[GridLayoutItem]

  def __init__(
    self,
    api: DashboardAPI,
    dashboard_id: Optional[int],
    debouncer: Optional[Debouncer] = None,
    on_error: Optional[LayoutSaveErrorHandler] = None,
  ):
    self.api = api
    self.dashboard_id = dashboard_id
    # The caller is responsible for running the debouncer.
    self.debouncer = debouncer if debouncer is not None else Debouncer(wait=LAYOUT_SAVE_DEBOUNCE_SECONDS)
    self.on_error = on_error
    self.lock = threading.Lock()
    self._layout = []

  @property
  def key(self)->str:
    return f"dashboard-layout-{self.dashboard_id}"

  @property
  def layout(self)->list[GridLayoutItem]:
    with self.lock:
      return list(self._layout)

  def load(self, cards: Sequence[Card])->list[GridLayoutItem]:
    layout = normalize_layout(cards)
    with self.lock:
      self._layout = layout
    return list(layout)

  def handle_layout_change(self, layout: Sequence[GridLayoutItem]):
    new_layout = list(layout)
    with self.lock:
      self._layout = new_layout
    if self.dashboard_id is None:
      # Nothing to save to.
      return
    self.debouncer.call(self.key, self._save, self.dashboard_id, list(new_layout))

  def flush(self):
    self.debouncer.flush(self.key)

  def cancel(self):
    self.debouncer.cancel(self.key)

  def _save(self, dashboard_id: int, layout: list[GridLayoutItem]):
    try:
      success = self.api.save_layout(dashboard_id, layout)
    except (ApiRequestException, httpx.HTTPError) as e:
      logger.error(f"Failed to save the layout of dashboard {dashboard_id}: {e}")
      if self.on_error is not None:
        self.on_error(e)
      return
    if not success:
      logger.warning(f"The server couldn't apply the layout of dashboard {dashboard_id}.")
      return
    logger.info(f"Saved the layout of {len(layout)} cards in dashboard {dashboard_id}.")

__all__ = [
  "LayoutController",
  "LAYOUT_SAVE_DEBOUNCE_SECONDS",
]
