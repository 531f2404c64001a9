import abc
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, Union

import pydantic

ErrorTree = dict[Union[str, int], Any]

@dataclass
class ApiError(Exception):
  message: str
  status_code: int = HTTPStatus.BAD_REQUEST

  def __str__(self):
    return self.message

class ApiErrorAdaptableException(abc.ABC, Exception):
  """Domain exceptions implement ``to_api`` so that they can be raised from storage or validation code
  and still be turned into the right HTTP response by the error handlers."""
  @abc.abstractmethod
  def to_api(self)->ApiError:
    ...

  def __str__(self):
    return self.to_api().message

class ApiErrorResult(pydantic.BaseModel):
  message: str
  errors: Optional[ErrorTree] = None

  def as_json(self)->dict[str, Any]:
    return self.model_dump(mode="json")

class SuccessResult(pydantic.BaseModel):
  success: bool


__all__ = [
  "ApiError",
  "ApiErrorAdaptableException",
  "ApiErrorResult",
  "ErrorTree",
  "SuccessResult",
]
