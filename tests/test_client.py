"""Tests for the HTTP client wrappers and the debounced layout persistence."""

import threading
import time

import pytest

from factories import make_stats_card
from modules.client import (
  LAYOUT_SAVE_DEBOUNCE_SECONDS,
  ApiRequestException,
  CardAPI,
  DashboardAPI,
  Debouncer,
  LayoutController,
)
from modules.dashboard import (
  CardTypeEnum,
  GridLayoutItem,
  InsertDashboardSchema,
  StatsCardConfig,
  StatsConfig,
  UpdateCardSchema,
  UpdateDashboardSchema,
  default_card_layout,
  validate_insert_card,
)


def make_stats_card_schema(title="Total Users"):
  return UpdateCardSchema(
    title=title,
    type=CardTypeEnum.Stats,
    config=StatsCardConfig(type=CardTypeEnum.Stats, config=StatsConfig(value="10")),
    layout=default_card_layout(CardTypeEnum.Stats),
  )


class RecordingDashboardAPI:
  """Stands in for DashboardAPI and records every layout save."""
  def __init__(self, error=None):
    self.saves = []
    self.error = error
    self.saved = threading.Event()

  def save_layout(self, dashboard_id, layout):
    self.saves.append((dashboard_id, list(layout)))
    self.saved.set()
    if self.error is not None:
      raise self.error
    return True


class TestDashboardAPI:
  def test_crud(self, client):
    dashboards = DashboardAPI(client)
    cards = CardAPI(client)

    dashboard = dashboards.create(InsertDashboardSchema(title="From the client"))
    assert dashboard.description is None

    dashboard = dashboards.update(dashboard.id, UpdateDashboardSchema(title="Renamed", description="D"))
    assert dashboard.title == "Renamed"
    assert [item.id for item in dashboards.get_all()] == [dashboard.id]

    card = cards.create(dashboard.id, make_stats_card_schema())
    assert card.layout.i == str(card.id)
    assert card.dashboard_id == dashboard.id

    detail = dashboards.fetch(dashboard.id)
    assert detail.dashboard.title == "Renamed"
    assert [item.id for item in detail.cards] == [card.id]

    card = cards.update(card.id, make_stats_card_schema(title="Updated"))
    assert cards.get(card.id).title == "Updated"

    moved = card.layout.model_copy(update=dict(x=5))
    assert dashboards.save_layout(dashboard.id, [moved]) is True
    assert cards.get(card.id).layout.x == 5

    cards.delete(card.id)
    dashboards.delete(dashboard.id)
    assert dashboards.get_all() == []

  def test_errors_carry_the_server_message(self, client):
    dashboards = DashboardAPI(client)
    with pytest.raises(ApiRequestException) as exc_info:
      dashboards.fetch(404)
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Dashboard not found"


class TestDebouncer:
  def test_bursts_collapse_into_the_last_call(self):
    calls = []
    debouncer = Debouncer(wait=60)
    with debouncer.run():
      debouncer.call("key", calls.append, 1)
      debouncer.call("key", calls.append, 2)
      debouncer.call("key", calls.append, 3)
      assert debouncer.is_pending("key")
      debouncer.flush("key")
      assert calls == [3]
      assert not debouncer.is_pending("key")
      # Flushing again is a no-op
      debouncer.flush("key")
    assert calls == [3]

  def test_timer_fires(self):
    calls = []
    fired = threading.Event()
    def record(value):
      calls.append(value)
      fired.set()

    debouncer = Debouncer(wait=0.1)
    with debouncer.run():
      for value in range(5):
        debouncer.call("key", record, value)
      assert fired.wait(timeout=5)
      time.sleep(0.3)
    assert calls == [4]

  def test_window_starts_at_the_last_call(self):
    calls = []
    fired = threading.Event()
    def record(value):
      calls.append((value, time.monotonic()))
      fired.set()

    wait = 0.3
    debouncer = Debouncer(wait=wait)
    with debouncer.run():
      # Calls are closer together than the wait, but the burst as a whole is longer than it
      for value in range(3):
        debouncer.call("key", record, value)
        time.sleep(0.2)
      assert calls == []
      last_call_at = time.monotonic()
      debouncer.call("key", record, 3)
      assert fired.wait(timeout=5)
      time.sleep(0.2)

    assert [value for value, _ in calls] == [3]
    fired_at = calls[0][1]
    # Small allowance for the scheduler clock
    assert fired_at - last_call_at >= wait - 0.02

  def test_outdated_timer_does_not_run_the_newer_call(self):
    calls = []
    debouncer = Debouncer(wait=60)
    with debouncer.run():
      debouncer.call("key", calls.append, 1)
      outdated_generation = debouncer.pending["key"].generation
      debouncer.call("key", calls.append, 2)

      # A timer of the first call that was already running when the second call came in
      debouncer._fire("key", outdated_generation)
      assert calls == []
      assert debouncer.is_pending("key")

      debouncer._fire("key", debouncer.pending["key"].generation)
      assert calls == [2]
      assert not debouncer.is_pending("key")

  def test_keys_are_independent(self):
    calls = []
    debouncer = Debouncer(wait=60)
    with debouncer.run():
      debouncer.call("a", calls.append, "a")
      debouncer.call("b", calls.append, "b")
      debouncer.flush("b")
      assert calls == ["b"]
      assert debouncer.is_pending("a")
    # Pending calls are flushed on shutdown
    assert calls == ["b", "a"]

  def test_cancel(self):
    calls = []
    debouncer = Debouncer(wait=60)
    with debouncer.run():
      debouncer.call("key", calls.append, 1)
      debouncer.cancel("key")
    assert calls == []


class TestLayoutController:
  def test_default_debounce_window(self):
    controller = LayoutController(RecordingDashboardAPI(), 1)
    assert controller.debouncer.wait == LAYOUT_SAVE_DEBOUNCE_SECONDS == 1.0

  def test_load_normalizes_identifiers(self, storage):
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="T"))
    card = storage.create_card(validate_insert_card(make_stats_card(), dashboard.id))
    card = card.model_copy(update=dict(layout=card.layout.model_copy(update=dict(i="stale"))))

    controller = LayoutController(RecordingDashboardAPI(), dashboard.id, Debouncer(wait=60))
    layout = controller.load([card])
    assert [item.i for item in layout] == [str(card.id)]
    assert controller.layout == layout

  def test_rapid_changes_result_in_one_save(self):
    api = RecordingDashboardAPI()
    debouncer = Debouncer(wait=0.2)
    controller = LayoutController(api, 1, debouncer)
    with debouncer.run():
      for x in range(3):
        controller.handle_layout_change([GridLayoutItem(i="1", x=x, y=0, w=2, h=1)])
        # Local state is replaced right away
        assert controller.layout[0].x == x
      assert api.saved.wait(timeout=5)
      time.sleep(0.4)
    assert len(api.saves) == 1
    dashboard_id, layout = api.saves[0]
    assert dashboard_id == 1
    assert layout[0].x == 2

  def test_unsaved_dashboard_is_not_persisted(self):
    api = RecordingDashboardAPI()
    debouncer = Debouncer(wait=60)
    controller = LayoutController(api, None, debouncer)
    with debouncer.run():
      controller.handle_layout_change([GridLayoutItem(i="1", x=0, y=0, w=2, h=1)])
      assert not debouncer.is_pending(controller.key)
    assert api.saves == []
    assert len(controller.layout) == 1

  def test_failed_save_is_reported(self):
    error = ApiRequestException(status_code=500, message="Failed to update layout")
    api = RecordingDashboardAPI(error=error)
    errors = []
    debouncer = Debouncer(wait=60)
    controller = LayoutController(api, 1, debouncer, on_error=errors.append)
    with debouncer.run():
      controller.handle_layout_change([GridLayoutItem(i="1", x=0, y=0, w=2, h=1)])
      controller.flush()
    assert errors == [error]
    # The local layout is kept even though the save failed
    assert controller.layout[0].i == "1"

  def test_saves_through_the_api(self, client, storage):
    dashboards = DashboardAPI(client)
    dashboard = dashboards.create(InsertDashboardSchema(title="T"))
    card = CardAPI(client).create(dashboard.id, make_stats_card_schema())

    debouncer = Debouncer(wait=60)
    controller = LayoutController(dashboards, dashboard.id, debouncer)
    with debouncer.run():
      controller.load(dashboards.fetch(dashboard.id).cards)
      moved = [item.model_copy(update=dict(x=7, y=3)) for item in controller.layout]
      controller.handle_layout_change(moved)
      controller.flush()
    stored = storage.get_card(card.id)
    assert (stored.layout.x, stored.layout.y) == (7, 3)
    assert stored.layout.i == str(card.id)
