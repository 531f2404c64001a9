from .base import DashboardStorage, parse_id
from .exceptions import *
from .memory import MemoryDashboardStorage
from .persistent import JSONDashboardStorage
from .seed import seed_demo_data
