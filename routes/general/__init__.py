from fastapi import APIRouter

# Importing the dashboard module registers its enums
import modules.dashboard
from modules.api import ExposedEnum

router = APIRouter(
  tags=["General"]
)

@router.get('/enums')
def get__enums()->dict[str, dict[str, str]]:
  return ExposedEnum().get_all_enums()
