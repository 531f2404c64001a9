from enum import Enum
from typing import Any, TypeVar

from modules.baseclass import Singleton

E = TypeVar("E", bound=type[Enum])

class ExposedEnum(metaclass=Singleton):
  """Registry of the enums that clients need to build card forms. Served by ``GET /api/enums``."""
  registry: dict[str, type[Enum]]
  def __init__(self):
    self.registry = {}

  def register(self, enum: E)->E:
    existing = self.registry.get(enum.__name__, None)
    if existing is not None and existing is not enum:
      raise ValueError(f"Another enum named \"{enum.__name__}\" has already been exposed.")
    self.registry[enum.__name__] = enum
    return enum

  def get_all_enums(self)->dict[str, dict[str, Any]]:
    return {
      name: {member.name: member.value for member in enum}
      for name, enum in self.registry.items()
    }

__all__ = [
  "ExposedEnum"
]
