from typing import Any, Callable

import pydantic
from pydantic_core import ErrorDetails, InitErrorDetails

UNION_TAG_ERRORS = ("union_tag_invalid", "union_tag_not_found")

def __strip_union_tag(error: ErrorDetails)->InitErrorDetails:
  loc = tuple(error["loc"])
  # Errors about the tag itself are reported at the union, so there's no tag to strip.
  if len(loc) > 0 and error["type"] not in UNION_TAG_ERRORS:
    loc = loc[1:]
  details: InitErrorDetails = {
    "type": error["type"],
    "loc": loc,
    "input": error["input"],
  }
  if "ctx" in error:
    details["ctx"] = error["ctx"]
  return details

def __validate_without_union_tag(value: Any, handler: Callable[[Any], Any], info: pydantic.ValidationInfo):
  try:
    return handler(value)
  except pydantic.ValidationError as exc:
    raise pydantic.ValidationError.from_exception_data(
      title=exc.title,
      line_errors=[__strip_union_tag(error) for error in exc.errors()],
      input_type=info.mode,
    ) from None

"""Pydantic puts the tag of the chosen variant (e.g. ``chart``) at the start of the location of every error inside
a discriminated union. The tag is not a key of the payload, so it is removed to keep locations such as
``config.config.chartType`` pointing at the actual request body."""
DiscriminatedUnionValidator = pydantic.WrapValidator(__validate_without_union_tag)

__all__ = [
  "DiscriminatedUnionValidator"
]
