from http import HTTPStatus
from typing import Any

from fastapi import APIRouter, Body, Response

from modules.api import SuccessResult
from modules.dashboard.models import Card, Dashboard
from routes.dependencies.storage import DashboardExistsDependency, StorageDependency

from .controller import (
  create_card,
  create_dashboard,
  delete_dashboard,
  get_all_dashboards,
  get_dashboard_detail,
  update_cards_layout,
  update_dashboard,
)
from .model import DashboardDetailResource

router = APIRouter(
  tags=['Dashboards'],
)

@router.get('', response_model_exclude_none=True)
async def get__dashboards(storage: StorageDependency)->list[Dashboard]:
  return get_all_dashboards(storage)

@router.get('/{dashboard_id}', response_model_exclude_none=True)
async def get__dashboard(storage: StorageDependency, dashboard: DashboardExistsDependency)->DashboardDetailResource:
  return get_dashboard_detail(storage, dashboard)

@router.post('', status_code=HTTPStatus.CREATED, response_model_exclude_none=True)
async def create__dashboard(storage: StorageDependency, body: Any = Body(default=None))->Dashboard:
  return create_dashboard(storage, body)

@router.patch('/{dashboard_id}', response_model_exclude_none=True)
async def update__dashboard(storage: StorageDependency, dashboard: DashboardExistsDependency, body: Any = Body(default=None))->Dashboard:
  return update_dashboard(storage, dashboard, body)

@router.delete('/{dashboard_id}', status_code=HTTPStatus.NO_CONTENT, response_class=Response)
async def delete__dashboard(storage: StorageDependency, dashboard: DashboardExistsDependency):
  delete_dashboard(storage, dashboard)
  return Response(status_code=HTTPStatus.NO_CONTENT)

@router.post('/{dashboard_id}/cards', status_code=HTTPStatus.CREATED, response_model_exclude_none=True)
async def create__card(storage: StorageDependency, dashboard: DashboardExistsDependency, body: Any = Body(default=None))->Card:
  return create_card(storage, dashboard, body)

@router.patch('/{dashboard_id}/layout')
async def update__cards_layout(storage: StorageDependency, dashboard: DashboardExistsDependency, body: Any = Body(default=None))->SuccessResult:
  return update_cards_layout(storage, dashboard, body)
