from .base import CardTypeEnum, GridLayoutItem
from .config import *
from .models import *
from .validators import *
from .layout import *
