from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Union

import pydantic

from modules.api.wrapper import ApiError, ApiErrorAdaptableException

from .errors import build_error_tree, summarize_errors


@dataclass
class InputValidationException(ApiErrorAdaptableException):
  message: str
  errors: dict[Union[str, int], Any] = field(default_factory=dict)

  @staticmethod
  def from_pydantic(exc: pydantic.ValidationError)->"InputValidationException":
    raw_errors = exc.errors()
    return InputValidationException(
      message=summarize_errors(raw_errors),
      errors=build_error_tree(raw_errors),
    )

  def to_api(self):
    return ApiError(
      message=self.message,
      status_code=HTTPStatus.BAD_REQUEST
    )

__all__ = [
  "InputValidationException"
]
