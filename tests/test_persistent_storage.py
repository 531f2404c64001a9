"""Tests for the JSON file storage backend."""

import json

import pytest

from factories import make_layout, make_stats_card
from modules.dashboard import GridLayoutItem, InsertDashboardSchema, UpdateDashboardSchema, validate_insert_card
from modules.storage import JSONDashboardStorage


def read_json(path):
  with open(path, "r", encoding="utf-8") as f:
    return json.load(f)


class TestJSONDashboardStorage:
  def test_missing_file_starts_empty(self, tmp_path):
    storage = JSONDashboardStorage(str(tmp_path / "gridboard.json"))
    assert storage.is_empty()

  def test_mutations_survive_a_restart(self, tmp_path):
    path = str(tmp_path / "data" / "gridboard.json")
    storage = JSONDashboardStorage(path)
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="Persisted"))
    card = storage.create_card(validate_insert_card(make_stats_card(value="42"), dashboard.id))

    contents = read_json(path)
    assert contents["dashboards"][0]["title"] == "Persisted"
    assert "description" not in contents["dashboards"][0]
    assert contents["cards"][0]["dashboardId"] == dashboard.id

    reopened = JSONDashboardStorage(path)
    assert reopened.get_dashboard(dashboard.id).title == "Persisted"
    reopened_card = reopened.get_card(card.id)
    assert reopened_card.config.config.value == "42"
    assert reopened_card.layout.i == str(card.id)

    # Identifiers are never reused after a restart
    next_dashboard = reopened.create_dashboard(InsertDashboardSchema(title="Next"))
    assert next_dashboard.id > dashboard.id

  def test_cascade_delete_is_persisted(self, tmp_path):
    path = str(tmp_path / "gridboard.json")
    storage = JSONDashboardStorage(path)
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="Doomed"))
    storage.create_card(validate_insert_card(make_stats_card(), dashboard.id))
    storage.delete_dashboard(dashboard.id)

    contents = read_json(path)
    assert contents["dashboards"] == []
    assert contents["cards"] == []

  def test_invalid_entries_are_discarded(self, tmp_path):
    path = tmp_path / "gridboard.json"
    valid_card = dict(id=7, dashboardId=2, **make_stats_card(layout=make_layout(i="stale")))
    orphaned_card = dict(id=8, dashboardId=50, **make_stats_card())
    path.write_text(json.dumps(dict(
      users=[dict(id=1, username="demo", password="demo123")],
      dashboards=[
        dict(id=2, title="Valid"),
        dict(id=3),
      ],
      cards=[valid_card, orphaned_card, dict(id=9, title="Broken")],
      counters=dict(users=1, dashboards=1, cards=1),
    )), encoding="utf-8")

    storage = JSONDashboardStorage(str(path))
    assert [dashboard.id for dashboard in storage.get_dashboards()] == [2]
    assert storage.get_card(7).layout.i == "7"
    assert storage.get_card(8) is None
    assert storage.get_card(9) is None
    assert storage.get_user_by_username("demo") is not None

    # Counters are recomputed from the records that passed validation
    assert storage.create_dashboard(InsertDashboardSchema(title="New")).id == 3
    assert storage.create_card(validate_insert_card(make_stats_card(), 2)).id == 9

  def test_corrupt_file_starts_empty(self, tmp_path):
    path = tmp_path / "gridboard.json"
    path.write_text("{not json", encoding="utf-8")
    storage = JSONDashboardStorage(str(path))
    assert storage.is_empty()

  def test_undecodable_file_starts_empty(self, tmp_path):
    path = tmp_path / "gridboard.json"
    path.write_bytes(b"\xff\xfe{\"dashboards\": []}")
    storage = JSONDashboardStorage(str(path))
    assert storage.is_empty()

  def test_unreadable_file_starts_empty(self, tmp_path):
    # Opening a directory raises IsADirectoryError
    path = tmp_path / "gridboard.json"
    path.mkdir()
    storage = JSONDashboardStorage(str(path))
    assert storage.is_empty()


def fail_to_write():
  raise OSError("No space left on device")


class TestFailedWrites:
  def test_created_card_is_rolled_back(self, tmp_path, monkeypatch):
    path = str(tmp_path / "gridboard.json")
    storage = JSONDashboardStorage(path)
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="Kept"))

    monkeypatch.setattr(storage, "write_file", fail_to_write)
    with pytest.raises(OSError):
      storage.create_card(validate_insert_card(make_stats_card(), dashboard.id))
    assert storage.get_cards(dashboard.id) == []
    assert read_json(path)["cards"] == []

    monkeypatch.undo()
    # The identifier of the failed card was never handed out
    card = storage.create_card(validate_insert_card(make_stats_card(), dashboard.id))
    assert card.id == 1
    assert [item["id"] for item in read_json(path)["cards"]] == [1]

  def test_created_dashboard_is_rolled_back(self, tmp_path, monkeypatch):
    storage = JSONDashboardStorage(str(tmp_path / "gridboard.json"))
    monkeypatch.setattr(storage, "write_file", fail_to_write)
    with pytest.raises(OSError):
      storage.create_dashboard(InsertDashboardSchema(title="Lost"))
    assert storage.get_dashboards() == []
    assert storage.is_empty()

  def test_updated_dashboard_is_rolled_back(self, tmp_path, monkeypatch):
    storage = JSONDashboardStorage(str(tmp_path / "gridboard.json"))
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="Before"))
    monkeypatch.setattr(storage, "write_file", fail_to_write)
    with pytest.raises(OSError):
      storage.update_dashboard(dashboard.id, UpdateDashboardSchema(title="After"))
    assert storage.get_dashboard(dashboard.id).title == "Before"

  def test_cascade_delete_is_rolled_back(self, tmp_path, monkeypatch):
    path = str(tmp_path / "gridboard.json")
    storage = JSONDashboardStorage(path)
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="Kept"))
    card = storage.create_card(validate_insert_card(make_stats_card(), dashboard.id))

    monkeypatch.setattr(storage, "write_file", fail_to_write)
    with pytest.raises(OSError):
      storage.delete_dashboard(dashboard.id)
    assert storage.get_dashboard(dashboard.id) is not None
    assert [item.id for item in storage.get_cards(dashboard.id)] == [card.id]

  def test_layout_batch_is_rolled_back(self, tmp_path, monkeypatch):
    path = str(tmp_path / "gridboard.json")
    storage = JSONDashboardStorage(path)
    dashboard = storage.create_dashboard(InsertDashboardSchema(title="Kept"))
    card = storage.create_card(validate_insert_card(make_stats_card(layout=make_layout(x=0)), dashboard.id))

    monkeypatch.setattr(storage, "write_file", fail_to_write)
    moved = GridLayoutItem(i=str(card.id), x=5, y=0, w=2, h=1)
    assert storage.update_cards_layout(dashboard.id, [moved]) is False
    assert storage.get_card(card.id).layout.x == 0
    assert read_json(path)["cards"][0]["layout"]["x"] == 0
