from dataclasses import dataclass
from http import HTTPStatus
from modules.api.wrapper import ApiError, ApiErrorAdaptableException

@dataclass
class DashboardNotFoundException(ApiErrorAdaptableException):
  id: int
  def to_api(self):
    return ApiError(
      message="Dashboard not found",
      status_code=HTTPStatus.NOT_FOUND
    )

@dataclass
class CardNotFoundException(ApiErrorAdaptableException):
  id: int
  def to_api(self):
    return ApiError(
      message="Card not found",
      status_code=HTTPStatus.NOT_FOUND
    )

@dataclass
class InvalidIdentifierException(ApiErrorAdaptableException):
  entity: str
  value: str
  def to_api(self):
    return ApiError(
      message=f"Invalid {self.entity} ID",
      status_code=HTTPStatus.BAD_REQUEST
    )

@dataclass
class UserAlreadyExistsException(ApiErrorAdaptableException):
  username: str
  def to_api(self):
    return ApiError(
      message=f"The username \"{self.username}\" already exists. Please choose another username.",
      status_code=HTTPStatus.CONFLICT
    )

@dataclass
class StorageOperationFailedException(ApiErrorAdaptableException):
  operation: str
  def to_api(self):
    return ApiError(
      message=f"Failed to {self.operation}",
      status_code=HTTPStatus.INTERNAL_SERVER_ERROR
    )

__all__ = [
  "DashboardNotFoundException",
  "CardNotFoundException",
  "InvalidIdentifierException",
  "UserAlreadyExistsException",
  "StorageOperationFailedException",
]
