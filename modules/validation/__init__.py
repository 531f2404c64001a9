from .union import DiscriminatedUnionValidator
from .errors import build_error_tree, summarize_errors, format_error_location
from .exceptions import InputValidationException
