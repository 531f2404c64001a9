import pydantic
from pydantic.alias_generators import to_camel

class PydanticBaseModel(pydantic.BaseModel):
  """Use this as BaseModel rather than pydantic.BaseModel. Fields are snake_case in Python but camelCase on the wire."""
  model_config = pydantic.ConfigDict(
    use_enum_values=True,
    alias_generator=to_camel,
    populate_by_name=True,
  )

  def as_json(self):
    return self.model_dump(mode="json", by_alias=True, exclude_none=True)

__all__ = [
  "PydanticBaseModel",
]
