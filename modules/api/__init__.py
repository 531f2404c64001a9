from .wrapper import ApiError, ApiErrorAdaptableException, ApiErrorResult, SuccessResult
from .enum import ExposedEnum
