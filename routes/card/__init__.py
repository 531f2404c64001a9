from http import HTTPStatus
from typing import Any

from fastapi import APIRouter, Body, Response

from modules.dashboard.models import Card
from routes.dependencies.storage import CardExistsDependency, StorageDependency

from .controller import delete_card, update_card

router = APIRouter(
  tags=['Cards'],
)

@router.get('/{card_id}', response_model_exclude_none=True)
async def get__card(card: CardExistsDependency)->Card:
  return card

@router.patch('/{card_id}', response_model_exclude_none=True)
async def update__card(storage: StorageDependency, card: CardExistsDependency, body: Any = Body(default=None))->Card:
  return update_card(storage, card, body)

@router.delete('/{card_id}', status_code=HTTPStatus.NO_CONTENT, response_class=Response)
async def delete__card(storage: StorageDependency, card: CardExistsDependency):
  delete_card(storage, card)
  return Response(status_code=HTTPStatus.NO_CONTENT)
