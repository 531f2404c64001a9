"""
As this module will include FastAPI dependency, it should be manually imported and not from modules.api.
"""
from http import HTTPStatus
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.logger import ProvisionedLogger
from modules.validation.errors import build_error_tree, summarize_errors

from .wrapper import ApiError, ApiErrorAdaptableException, ApiErrorResult, ErrorTree

logger = ProvisionedLogger().provision("FastAPI Error Handler")

INVALID_JSON_MESSAGE = "Invalid JSON in body"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error has occurred in the server."

def __error_response(request: Request, status_code: int, message: str, errors: Optional[ErrorTree] = None)->JSONResponse:
  logger.error(f"{request.method} {request.url} failed with status {int(status_code)}. Error: {message}")
  return JSONResponse(
    status_code=status_code,
    content=ApiErrorResult(message=message, errors=errors).as_json(),
  )

def api_error_exception_handler(request: Request, exc: ApiError):
  return __error_response(request, exc.status_code, exc.message)

def api_error_adaptable_exception_handler(request: Request, exc: ApiErrorAdaptableException):
  error = exc.to_api()
  # Validation exceptions carry the per-field errors as well
  return __error_response(request, error.status_code, error.message, getattr(exc, "errors", None))

def default_exception_handler(request: Request, exc: Exception):
  logger.error(''.join(traceback.format_exception(exc)))
  return __error_response(request, HTTPStatus.INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
  raw_errors = list(exc.errors())
  if any(error["type"] == "json_invalid" for error in raw_errors):
    return __error_response(request, HTTPStatus.BAD_REQUEST, INVALID_JSON_MESSAGE)

  # Drop the request part (body, path, query) so that locations match the ones raised by the validators
  errors = [{**error, "loc": tuple(error["loc"][1:])} for error in raw_errors]
  return __error_response(request, HTTPStatus.BAD_REQUEST, summarize_errors(errors), build_error_tree(errors))

def register_error_handlers(app: FastAPI):
  app.add_exception_handler(ApiError, api_error_exception_handler) # type: ignore
  app.add_exception_handler(ApiErrorAdaptableException, api_error_adaptable_exception_handler) # type: ignore
  app.add_exception_handler(RequestValidationError, validation_exception_handler) # type: ignore
  app.add_exception_handler(Exception, default_exception_handler)

__all__ = [
  "register_error_handlers"
]
